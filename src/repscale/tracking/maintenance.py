"""Maintenance calorie estimation from observed weight change.

Energy balance over the trailing 30 days:

    avg_intake = maintenance + weight_change × 7700 / days

so

    maintenance = avg_intake - weight_change × 7700 / days

The result is advisory. It is never written back into the goal settings;
the caller decides whether to adopt it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from repscale.tracking.models import DailyLog, WeightEntry
from repscale.tracking.rates import KCAL_PER_KG
from repscale.tracking.windows import average_intake, logs_between, resolve_now, trend_span


def estimate_maintenance(
    weights: Iterable[WeightEntry],
    logs: Iterable[DailyLog],
    now: Optional[datetime] = None,
) -> Optional[int]:
    """
    Estimate daily maintenance calories.

    Only logs between the first and last weight sample of the window count,
    and today's log and zero-intake days are skipped.

    Args:
        weights: Weight history (any order)
        logs: Nutrition history (any order)
        now: Reference time (default: current time)

    Returns:
        Maintenance in kcal/day truncated to an integer, or None if there are
        not enough weights or no qualifying logs
    """
    now = resolve_now(now)
    span = trend_span(weights, now)
    if span is None:
        return None

    today = now.date()
    # Whole calendar days: the first weigh-in day counts whatever time it was logged
    relevant = [
        log
        for log in logs_between(logs, span.first.day, span.last.day, include_end=True)
        if log.date < today and log.calories_consumed > 0
    ]
    avg_intake = average_intake(relevant)
    if avg_intake is None:
        return None

    daily_imbalance = span.weight_change * KCAL_PER_KG / span.days
    return int(avg_intake - daily_imbalance)
