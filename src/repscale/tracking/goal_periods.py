"""Goal period history and time spent per goal type."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional

from repscale.tracking.models import GoalType


@dataclass(frozen=True)
class GoalPeriod:
    """A stretch of time spent pursuing one goal (open while end_date is None)."""

    start_date: date
    goal_type: GoalType
    start_weight: float
    target_weight: float
    daily_calorie_goal: int
    maintenance_calories: int
    end_date: Optional[date] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "goal_type", GoalType.parse(self.goal_type))
        for name in ("start_date", "end_date"):
            value = getattr(self, name)
            if isinstance(value, datetime):
                object.__setattr__(self, name, value.date())
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError(
                f"end_date {self.end_date} is before start_date {self.start_date}"
            )

    @property
    def is_active(self) -> bool:
        return self.end_date is None

    def duration_days(self, today: date) -> int:
        """Length in days, counting at least one day."""
        end = self.end_date if self.end_date is not None else today
        return max(1, (end - self.start_date).days)


def clean_periods(
    periods: Iterable[GoalPeriod],
    first_weight_date: Optional[date] = None,
) -> list[GoalPeriod]:
    """
    Drop stale and transient periods, newest first.

    - Only the most recent open period is kept.
    - Closed periods that ended on or before the first weigh-in are
      onboarding artifacts.
    - Closed periods that started and ended on the same day are dropped.
    """
    ordered = sorted(periods, key=lambda p: p.start_date, reverse=True)
    cleaned = []
    has_active = False

    for period in ordered:
        if period.is_active:
            if has_active:
                continue
            has_active = True
            cleaned.append(period)
            continue

        if first_weight_date is not None and period.end_date <= first_weight_date:
            continue
        if period.start_date == period.end_date:
            continue
        cleaned.append(period)

    return cleaned


def time_distribution(
    periods: Iterable[GoalPeriod],
    today: date,
    first_weight_date: Optional[date] = None,
) -> dict[GoalType, int]:
    """Days spent in each goal type; types with no time are omitted."""
    counts = {goal_type: 0 for goal_type in GoalType}
    for period in clean_periods(periods, first_weight_date):
        counts[period.goal_type] += period.duration_days(today)
    return {goal_type: days for goal_type, days in counts.items() if days > 0}
