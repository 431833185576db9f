"""One-shot recomputation of all dashboard metrics.

The host calls update_metrics whenever logs, weights or settings change.
Each call builds a fresh MetricsSnapshot from its inputs; nothing is kept
between calls and the inputs are never modified.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from repscale.tracking.goals import (
    days_remaining,
    effective_method,
    logic_description,
    warning_message,
)
from repscale.tracking.maintenance import estimate_maintenance
from repscale.tracking.models import DailyLog, GoalSettings, MetricsSnapshot, WeightEntry
from repscale.tracking.projections import generate_projections
from repscale.tracking.rates import calculate_rate
from repscale.tracking.weight_change import newest_first, summarize_weight_changes
from repscale.tracking.windows import resolve_now

logger = logging.getLogger(__name__)


def update_metrics(
    logs: Iterable[DailyLog],
    weights: Iterable[WeightEntry],
    settings: GoalSettings,
    now: Optional[datetime] = None,
) -> MetricsSnapshot:
    """
    Recompute maintenance, days remaining, projections and weight changes.

    Args:
        logs: Nutrition history (any order)
        weights: Weight history (any order)
        settings: Current goal settings
        now: Reference time (default: current time)

    Returns:
        Immutable snapshot of all computed metrics
    """
    now = resolve_now(now)
    log_list = sorted(logs, key=lambda log: log.date)
    weight_list = newest_first(weights)

    method = effective_method(settings)

    maintenance = None
    if settings.calorie_counting_enabled:
        maintenance = estimate_maintenance(weight_list, log_list, now)

    current_weight = weight_list[0].weight if weight_list else None

    days = None
    if current_weight is not None:
        rate = calculate_rate(
            method,
            weight_list,
            log_list,
            maintenance_calories=settings.maintenance_calories,
            daily_goal=settings.daily_goal,
            now=now,
        )
        days = days_remaining(current_weight, settings.target_weight, settings.goal_type, rate)

    warning = "" if days is not None else warning_message(method, settings)

    projections = []
    if current_weight is not None:
        projections = generate_projections(current_weight, weight_list, log_list, settings, now)

    changes = summarize_weight_changes(weight_list, now)

    logger.debug(
        "Recomputed metrics: method=%s maintenance=%s days_remaining=%s series=%d",
        method.name,
        maintenance,
        days,
        len(projections),
    )

    return MetricsSnapshot(
        effective_method=method,
        current_weight=current_weight,
        estimated_maintenance=maintenance,
        days_remaining=days,
        logic_description=logic_description(method),
        progress_warning_message=warning,
        projection_points=tuple(projections),
        weight_change_metrics=tuple(changes),
    )
