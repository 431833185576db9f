"""Weight deltas over fixed lookback periods."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from repscale.tracking.models import WeightChangeMetric, WeightEntry
from repscale.tracking.windows import resolve_now

LOOKBACK_PERIODS = (7, 30, 90)
ALL_TIME_LABEL = "All Time"


def period_label(days: int) -> str:
    return f"{days} Days"


def newest_first(weights: Iterable[WeightEntry]) -> list[WeightEntry]:
    return sorted(weights, key=lambda w: w.date, reverse=True)


def nearest_prior_entry(
    weights: Sequence[WeightEntry],
    target: datetime,
) -> Optional[WeightEntry]:
    """Most recent entry measured at or before ``target``."""
    prior = [w for w in weights if w.date <= target]
    if not prior:
        return None
    return max(prior, key=lambda w: w.date)


def oldest_entry(weights: Sequence[WeightEntry]) -> Optional[WeightEntry]:
    if not weights:
        return None
    return min(weights, key=lambda w: w.date)


def reference_entry(
    weights: Sequence[WeightEntry],
    target: datetime,
) -> Optional[WeightEntry]:
    """Nearest prior sample, falling back to the oldest sample.

    Short histories still get a best-effort delta instead of a gap.
    """
    entry = nearest_prior_entry(weights, target)
    if entry is None:
        entry = oldest_entry(weights)
    return entry


def summarize_weight_changes(
    weights: Sequence[WeightEntry],
    now: Optional[datetime] = None,
) -> list[WeightChangeMetric]:
    """
    Compute weight change over 7, 30 and 90 days and all time.

    Deltas are current weight minus the reference weight, so a loss is
    negative. An empty history gives no metrics.
    """
    if not weights:
        return []

    now = resolve_now(now)
    ordered = newest_first(weights)
    current_weight = ordered[0].weight

    metrics = []
    for days in LOOKBACK_PERIODS:
        entry = reference_entry(ordered, now - timedelta(days=days))
        delta = current_weight - entry.weight if entry is not None else None
        metrics.append(WeightChangeMetric(period_label(days), delta))

    first = oldest_entry(ordered)
    delta = current_weight - first.weight if first is not None else None
    metrics.append(WeightChangeMetric(ALL_TIME_LABEL, delta))

    return metrics
