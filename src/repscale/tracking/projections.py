"""Forecast weight series, one per estimation method.

Each series is a static-rate linear extrapolation from the current weight:

    W(d) = W_0 + rate × d,   d = 0..60

The rate is computed once and not re-fitted as the horizon extends.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional, Sequence

import numpy as np

from repscale.tracking.models import (
    DailyLog,
    EstimationMethod,
    GoalSettings,
    ProjectionPoint,
    WeightEntry,
)
from repscale.tracking.rates import calculate_rate
from repscale.tracking.windows import resolve_now

PROJECTION_HORIZON_DAYS = 60


def projection_methods(settings: GoalSettings) -> list[EstimationMethod]:
    """Methods to project; calorie-based ones need calorie counting."""
    if settings.calorie_counting_enabled:
        return list(EstimationMethod)
    return [EstimationMethod.WEIGHT_TREND_30_DAY]


def project_series(
    start_weight: float,
    rate: float,
    label: str,
    now: Optional[datetime] = None,
    horizon_days: int = PROJECTION_HORIZON_DAYS,
) -> list[ProjectionPoint]:
    """Linear series from day 0 through ``horizon_days`` inclusive."""
    today = resolve_now(now).date()
    offsets = np.arange(horizon_days + 1)
    projected = start_weight + rate * offsets

    return [
        ProjectionPoint(
            date=today + timedelta(days=int(offset)),
            projected_weight=float(weight),
            method_label=label,
        )
        for offset, weight in zip(offsets, projected)
    ]


def generate_projections(
    start_weight: float,
    weights: Sequence[WeightEntry],
    logs: Sequence[DailyLog],
    settings: GoalSettings,
    now: Optional[datetime] = None,
) -> list[ProjectionPoint]:
    """
    Generate forecast series for every method with a computable rate.

    Methods whose rate is unavailable contribute no points at all.

    Args:
        start_weight: Weight at day 0 (normally the latest measurement)
        weights: Weight history
        logs: Nutrition history
        settings: Goal settings
        now: Reference time (default: current time)

    Returns:
        Points for all series, grouped by method in declaration order
    """
    now = resolve_now(now)
    points: list[ProjectionPoint] = []

    for method in projection_methods(settings):
        rate = calculate_rate(
            method,
            weights,
            logs,
            maintenance_calories=settings.maintenance_calories,
            daily_goal=settings.daily_goal,
            now=now,
        )
        if rate is None:
            continue
        points.extend(project_series(start_weight, rate, method.label, now))

    return points
