"""Goal projection and metabolic estimation.

Given weight measurements and daily nutrition logs, this module estimates
maintenance calories, computes a daily rate of weight change under three
competing models, projects weight 60 days ahead and estimates the days
left until a target weight.

Key components:
- Rate calculation (30-day weight trend, 7-day eating habits, goal adherence)
- Maintenance estimation from energy balance (7700 kcal/kg)
- Days-to-goal with direction checks
- Projection series and lookback weight changes
- update_metrics, which runs all of the above in one pass
"""

from __future__ import annotations

from repscale.tracking.engine import update_metrics
from repscale.tracking.goal_periods import GoalPeriod, clean_periods, time_distribution
from repscale.tracking.goals import days_remaining, effective_method, is_goal_reached
from repscale.tracking.maintenance import estimate_maintenance
from repscale.tracking.models import (
    DailyLog,
    EstimationMethod,
    GoalSettings,
    GoalType,
    MetricsSnapshot,
    ProjectionPoint,
    WeightChangeMetric,
    WeightEntry,
)
from repscale.tracking.projections import generate_projections
from repscale.tracking.rates import KCAL_PER_KG, calculate_rate
from repscale.tracking.weight_change import summarize_weight_changes

__all__ = [
    "DailyLog",
    "EstimationMethod",
    "GoalPeriod",
    "GoalSettings",
    "GoalType",
    "KCAL_PER_KG",
    "MetricsSnapshot",
    "ProjectionPoint",
    "WeightChangeMetric",
    "WeightEntry",
    "calculate_rate",
    "clean_periods",
    "days_remaining",
    "effective_method",
    "estimate_maintenance",
    "generate_projections",
    "is_goal_reached",
    "summarize_weight_changes",
    "time_distribution",
    "update_metrics",
]
