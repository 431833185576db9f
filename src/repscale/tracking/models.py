"""Data models for weight tracking and goal projection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Iterable, Optional


class GoalType(str, Enum):
    """Intended direction of weight change."""

    CUTTING = "cutting"
    BULKING = "bulking"
    MAINTAINING = "maintaining"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: str | GoalType) -> GoalType:
        """Parse a goal type from its value, case-insensitively."""
        if isinstance(value, GoalType):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = tuple(member.value for member in cls)
            raise ValueError(f"goal_type must be one of {valid}, got '{value}'") from None


class EstimationMethod(int, Enum):
    """Interchangeable models for predicting the rate of weight change.

    Integer values match the stored setting (0 = trend, 1 = eating habits,
    2 = goal adherence).
    """

    WEIGHT_TREND_30_DAY = 0
    CURRENT_EATING_HABITS = 1
    PERFECT_GOAL_ADHERENCE = 2

    @property
    def label(self) -> str:
        """Human-readable label used to tag projection series."""
        return _METHOD_LABELS[self]

    @classmethod
    def parse(cls, value: int | str | EstimationMethod) -> EstimationMethod:
        """Parse a method from its member name or integer value."""
        if isinstance(value, EstimationMethod):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        else:
            text = str(value).strip()
            if text.isdigit():
                return cls.parse(int(text))
            try:
                return cls[text.upper()]
            except KeyError:
                pass
        valid = tuple(member.name.lower() for member in cls)
        raise ValueError(f"estimation_method must be one of {valid}, got '{value}'")


_METHOD_LABELS = {
    EstimationMethod.WEIGHT_TREND_30_DAY: "30-Day Weight Trend",
    EstimationMethod.CURRENT_EATING_HABITS: "Current Average Calorie Consumption",
    EstimationMethod.PERFECT_GOAL_ADHERENCE: "Perfect Calorie Target Adherence",
}


def _as_day(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _as_timestamp(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


@dataclass(frozen=True)
class DailyLog:
    """Nutrition totals for one calendar day."""

    date: date
    calories_consumed: int = 0
    calories_burned: int = 0
    protein: Optional[int] = None  # grams
    carbs: Optional[int] = None  # grams
    fat: Optional[int] = None  # grams

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", _as_day(self.date))
        if self.calories_consumed < 0:
            raise ValueError(
                f"calories_consumed must be non-negative, got {self.calories_consumed}"
            )
        if self.calories_burned < 0:
            raise ValueError(
                f"calories_burned must be non-negative, got {self.calories_burned}"
            )
        for name in ("protein", "carbs", "fat"):
            grams = getattr(self, name)
            if grams is not None and grams < 0:
                raise ValueError(f"{name} must be non-negative, got {grams}")

    @property
    def net_calories(self) -> int:
        return self.calories_consumed - self.calories_burned


@dataclass(frozen=True, eq=False)
class WeightEntry:
    """A single body-weight measurement in kilograms.

    Entries compare by identity: two measurements with the same date and
    weight are still distinct samples.
    """

    date: datetime
    weight: float
    note: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", _as_timestamp(self.date))
        if self.weight <= 0:
            raise ValueError(f"weight must be positive, got {self.weight}")

    @property
    def day(self) -> date:
        return self.date.date()


@dataclass(frozen=True)
class GoalSettings:
    """Current goal configuration, supplied fresh on every recomputation."""

    daily_goal: int
    target_weight: float  # kg
    goal_type: GoalType
    maintenance_calories: int
    estimation_method: EstimationMethod = EstimationMethod.WEIGHT_TREND_30_DAY
    maintenance_tolerance: float = 2.0  # kg
    calorie_counting_enabled: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "goal_type", GoalType.parse(self.goal_type))
        object.__setattr__(
            self, "estimation_method", EstimationMethod.parse(self.estimation_method)
        )
        if self.target_weight <= 0:
            raise ValueError(f"target_weight must be positive, got {self.target_weight}")
        if self.maintenance_tolerance < 0:
            raise ValueError(
                f"maintenance_tolerance must be non-negative, got {self.maintenance_tolerance}"
            )


@dataclass(frozen=True)
class ProjectionPoint:
    """One day of a forecast series."""

    date: date
    projected_weight: float
    method_label: str


@dataclass(frozen=True)
class WeightChangeMetric:
    """Weight delta over a lookback period (None = not enough history)."""

    period_label: str
    delta: Optional[float]


@dataclass(frozen=True)
class MetricsSnapshot:
    """Result of one complete recomputation."""

    effective_method: EstimationMethod
    current_weight: Optional[float]
    estimated_maintenance: Optional[int]
    days_remaining: Optional[int]
    logic_description: str
    progress_warning_message: str
    projection_points: tuple[ProjectionPoint, ...] = ()
    weight_change_metrics: tuple[WeightChangeMetric, ...] = ()

    def series(self, method_label: str) -> list[ProjectionPoint]:
        """Return the projection points for a single method label."""
        return [p for p in self.projection_points if p.method_label == method_label]

    @property
    def series_labels(self) -> list[str]:
        """Labels of the emitted series, in emission order."""
        labels: list[str] = []
        for point in self.projection_points:
            if point.method_label not in labels:
                labels.append(point.method_label)
        return labels


def ensure_unique_days(logs: Iterable[DailyLog]) -> list[DailyLog]:
    """Return logs as a list, rejecting two logs for the same calendar day."""
    seen: set[date] = set()
    result = []
    for log in logs:
        if log.date in seen:
            raise ValueError(f"Duplicate daily log for {log.date.isoformat()}")
        seen.add(log.date)
        result.append(log)
    return result
