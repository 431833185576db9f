"""Daily rate of weight change under each estimation method.

All rates are signed kg/day: negative means losing weight.

Calorie-based methods convert a daily energy imbalance into weight using
the usual approximation that 7700 kcal corresponds to 1 kg of body mass:

    rate = (intake - maintenance) / 7700

The weight-trend method is a two-point slope between the first and last
sample of the last 30 days, not a regression. It mirrors the most recent
measured trend, including any noise in the two endpoint samples.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from repscale.tracking.models import DailyLog, EstimationMethod, WeightEntry
from repscale.tracking.windows import (
    INTAKE_WINDOW_DAYS,
    average_intake,
    logs_between,
    resolve_now,
    trend_span,
)

logger = logging.getLogger(__name__)

# kcal per kg of body-mass change
KCAL_PER_KG = 7700.0


def calorie_balance_rate(intake: float, maintenance_calories: int) -> float:
    """Convert a daily intake into kg/day relative to maintenance."""
    return (intake - maintenance_calories) / KCAL_PER_KG


def weight_trend_rate(
    weights: Iterable[WeightEntry],
    now: Optional[datetime] = None,
) -> Optional[float]:
    """Two-point slope of the last 30 days of weights (kg/day)."""
    span = trend_span(weights, resolve_now(now))
    if span is None:
        return None
    return span.weight_change / span.days


def eating_habits_rate(
    logs: Iterable[DailyLog],
    maintenance_calories: int,
    now: Optional[datetime] = None,
) -> Optional[float]:
    """
    Rate implied by the average intake of the previous seven days.

    Today is excluded because its log is presumed incomplete.
    """
    today = resolve_now(now).date()
    window = logs_between(logs, today - timedelta(days=INTAKE_WINDOW_DAYS), today)
    avg = average_intake(window)
    if avg is None:
        return None
    return calorie_balance_rate(avg, maintenance_calories)


def goal_adherence_rate(daily_goal: int, maintenance_calories: int) -> float:
    """Rate if the daily calorie goal were hit exactly every day."""
    return calorie_balance_rate(daily_goal, maintenance_calories)


def calculate_rate(
    method: EstimationMethod,
    weights: Sequence[WeightEntry],
    logs: Sequence[DailyLog],
    maintenance_calories: int,
    daily_goal: int,
    now: Optional[datetime] = None,
) -> Optional[float]:
    """
    Calculate the daily weight change rate for an estimation method.

    Args:
        method: Estimation method to use
        weights: Weight history (any order)
        logs: Nutrition history (any order)
        maintenance_calories: Declared maintenance level (kcal/day)
        daily_goal: Daily calorie goal (kcal/day)
        now: Reference time (default: current time)

    Returns:
        Signed rate in kg/day, or None when the method lacks the data it needs

    Raises:
        ValueError: If method is not an EstimationMethod member
    """
    if method is EstimationMethod.WEIGHT_TREND_30_DAY:
        rate = weight_trend_rate(weights, now)
    elif method is EstimationMethod.CURRENT_EATING_HABITS:
        rate = eating_habits_rate(logs, maintenance_calories, now)
    elif method is EstimationMethod.PERFECT_GOAL_ADHERENCE:
        rate = goal_adherence_rate(daily_goal, maintenance_calories)
    else:
        raise ValueError(f"Unknown estimation method: {method!r}")

    logger.debug("Rate for %s: %s", method.name, rate)
    return rate
