"""Days-to-goal estimation and the messages shown alongside it."""

from __future__ import annotations

from typing import Optional

from repscale.tracking.models import EstimationMethod, GoalSettings, GoalType

_LOGIC_DESCRIPTIONS = {
    EstimationMethod.WEIGHT_TREND_30_DAY: "Based on 30-day Weight Trend",
    EstimationMethod.CURRENT_EATING_HABITS: "Based on 7-day Average Calorie Intake",
    EstimationMethod.PERFECT_GOAL_ADHERENCE: "Based on Fixed Daily Calorie Amount",
}

TREND_WARNING = "Need more weight data over 30 days, or trend is moving away from goal."


def days_remaining(
    current_weight: float,
    target_weight: float,
    goal_type: GoalType,
    rate: Optional[float],
) -> Optional[int]:
    """
    Estimate whole days until the target weight is reached.

    A rate that does not move toward the goal (including a zero rate) gives
    no estimate. Maintaining is not projected.

    Example:
        >>> days_remaining(80.0, 75.0, GoalType.CUTTING, -0.25)
        20
    """
    if rate is None:
        return None

    if goal_type is GoalType.CUTTING:
        if rate >= 0:
            return None
    elif goal_type is GoalType.BULKING:
        if rate <= 0:
            return None
    else:
        return None

    days = (target_weight - current_weight) / rate
    if days <= 0:
        return None
    return int(days)


def effective_method(settings: GoalSettings) -> EstimationMethod:
    """Method driving the headline estimate.

    Without calorie counting only the weight trend is meaningful.
    """
    if not settings.calorie_counting_enabled:
        return EstimationMethod.WEIGHT_TREND_30_DAY
    return settings.estimation_method


def logic_description(method: EstimationMethod) -> str:
    return _LOGIC_DESCRIPTIONS[method]


def warning_message(method: EstimationMethod, settings: GoalSettings) -> str:
    """Explain why no days-remaining estimate is available.

    Only cutting gets the "less"/"lower" wording; bulking and maintaining
    share the "more"/"higher" wording.
    """
    cutting = settings.goal_type is GoalType.CUTTING
    if method is EstimationMethod.WEIGHT_TREND_30_DAY:
        return TREND_WARNING
    if method is EstimationMethod.CURRENT_EATING_HABITS:
        if cutting:
            return "Eat less than maintenance on average to see estimate"
        return "Eat more than maintenance on average to see estimate"
    if method is EstimationMethod.PERFECT_GOAL_ADHERENCE:
        direction = "lower" if cutting else "higher"
        return (
            f"Your daily goal must be {direction} than your maintenance "
            f"({settings.maintenance_calories})"
        )
    raise ValueError(f"Unknown estimation method: {method!r}")


def is_goal_reached(current_weight: float, settings: GoalSettings) -> bool:
    """Check whether the current weight satisfies the goal.

    Maintaining counts as reached while within the maintenance tolerance.
    """
    if settings.goal_type is GoalType.CUTTING:
        return current_weight <= settings.target_weight
    if settings.goal_type is GoalType.BULKING:
        return current_weight >= settings.target_weight
    return abs(current_weight - settings.target_weight) <= settings.maintenance_tolerance
