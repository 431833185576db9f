"""Date windowing shared by the rate and maintenance calculations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from repscale.tracking.models import DailyLog, WeightEntry

# Lookback for the weight trend and the maintenance estimate
TREND_WINDOW_DAYS = 30

# Lookback for the average intake used by the eating-habits rate
INTAKE_WINDOW_DAYS = 7


@dataclass(frozen=True)
class WeightSpan:
    """First and last weight sample of a window, at least one day apart."""

    first: WeightEntry
    last: WeightEntry
    days: int

    @property
    def weight_change(self) -> float:
        return self.last.weight - self.first.weight


def resolve_now(now: Optional[datetime] = None) -> datetime:
    """Return the reference time for a computation."""
    return now if now is not None else datetime.now()


def recent_weights(
    weights: Iterable[WeightEntry],
    now: datetime,
    days: int = TREND_WINDOW_DAYS,
) -> list[WeightEntry]:
    """Weight entries measured at or after ``now - days``, oldest first."""
    cutoff = now - timedelta(days=days)
    return sorted((w for w in weights if w.date >= cutoff), key=lambda w: w.date)


def trend_span(
    weights: Iterable[WeightEntry],
    now: datetime,
    days: int = TREND_WINDOW_DAYS,
) -> Optional[WeightSpan]:
    """
    Endpoints of the recent weight window.

    Returns None unless the window holds two distinct samples whose
    calendar days are at least one day apart.
    """
    recent = recent_weights(weights, now, days)
    if len(recent) < 2:
        return None

    first, last = recent[0], recent[-1]
    if first is last:
        return None

    span_days = (last.day - first.day).days
    if span_days <= 0:
        return None

    return WeightSpan(first=first, last=last, days=span_days)


def logs_between(
    logs: Iterable[DailyLog],
    start: date,
    end: date,
    include_end: bool = False,
) -> list[DailyLog]:
    """Logs dated in ``[start, end)`` (or ``[start, end]`` with include_end)."""
    if include_end:
        return [log for log in logs if start <= log.date <= end]
    return [log for log in logs if start <= log.date < end]


def average_intake(logs: list[DailyLog]) -> Optional[float]:
    """Mean calories consumed, or None for no logs."""
    if not logs:
        return None
    return sum(log.calories_consumed for log in logs) / len(logs)
