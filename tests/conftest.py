"""Pytest fixtures for repscale tests."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any, Optional

import pytest
import yaml

from repscale.tracking.models import (
    DailyLog,
    EstimationMethod,
    GoalSettings,
    GoalType,
    WeightEntry,
)

# Fixed reference time for every engine test
NOW = datetime(2026, 10, 19, 12, 0)
TODAY = NOW.date()


def weight_on(days_ago: int, kg: float, hour: int = 8) -> WeightEntry:
    """Weight measured ``days_ago`` days before TODAY at ``hour``."""
    day = TODAY - timedelta(days=days_ago)
    return WeightEntry(date=datetime(day.year, day.month, day.day, hour), weight=kg)


def log_on(days_ago: int, calories: int, burned: int = 0) -> DailyLog:
    return DailyLog(
        date=TODAY - timedelta(days=days_ago),
        calories_consumed=calories,
        calories_burned=burned,
    )


def make_settings(
    goal_type: GoalType = GoalType.CUTTING,
    method: EstimationMethod = EstimationMethod.WEIGHT_TREND_30_DAY,
    target_weight: float = 75.0,
    daily_goal: int = 2000,
    maintenance_calories: int = 2500,
    calorie_counting_enabled: bool = True,
    maintenance_tolerance: float = 2.0,
) -> GoalSettings:
    return GoalSettings(
        daily_goal=daily_goal,
        target_weight=target_weight,
        goal_type=goal_type,
        maintenance_calories=maintenance_calories,
        estimation_method=method,
        maintenance_tolerance=maintenance_tolerance,
        calorie_counting_enabled=calorie_counting_enabled,
    )


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def cutting_weights() -> list[WeightEntry]:
    """Ten days of steady loss from 80 kg to 78 kg (-0.2 kg/day)."""
    return [weight_on(10, 80.0), weight_on(5, 79.0), weight_on(0, 78.0)]


@pytest.fixture
def week_of_logs() -> list[DailyLog]:
    """2000 kcal on each of the last seven days plus a partial today."""
    return [log_on(days_ago, 2000) for days_ago in range(1, 8)] + [log_on(0, 500)]


@pytest.fixture
def cutting_settings() -> GoalSettings:
    return make_settings()


@pytest.fixture
def write_history(tmp_path: Path):
    """Write a history mapping to a YAML or JSON file and return its path."""

    def _write(data: dict[str, Any], name: str = "history.yaml") -> Path:
        path = tmp_path / name
        if path.suffix == ".json":
            import json

            path.write_text(json.dumps(data))
        else:
            path.write_text(yaml.safe_dump(data, sort_keys=False))
        return path

    return _write


def history_data(
    goal: Optional[dict[str, Any]] = None,
    unit: str = "kg",
) -> dict[str, Any]:
    """History file content matching the cutting_weights fixture."""
    data: dict[str, Any] = {
        "unit": unit,
        "weights": [
            {"date": (TODAY - timedelta(days=d)).isoformat() + "T08:00:00", "weight": w}
            for d, w in ((10, 80.0), (5, 79.0), (0, 78.0))
        ],
        "logs": [
            {"date": (TODAY - timedelta(days=d)).isoformat(), "calories_consumed": 2000}
            for d in range(1, 11)
        ],
    }
    if goal is not None:
        data["goal"] = goal
    return data
