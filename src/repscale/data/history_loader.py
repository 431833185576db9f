"""Load weight and nutrition history from YAML or JSON files."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

import yaml

from repscale.tracking.goal_periods import GoalPeriod
from repscale.tracking.models import DailyLog, WeightEntry, ensure_unique_days
from repscale.units import UnitSystem, to_stored_weight

T = TypeVar("T")

# Goal overrides holding a weight, converted to kg on load
_WEIGHT_GOAL_FIELDS = ("target_weight", "maintenance_tolerance")


@dataclass
class History:
    """Everything read from one history file, weights in kilograms."""

    weights: list[WeightEntry] = field(default_factory=list)
    logs: list[DailyLog] = field(default_factory=list)
    goal_overrides: dict[str, Any] = field(default_factory=dict)
    goal_periods: list[GoalPeriod] = field(default_factory=list)
    unit: UnitSystem = UnitSystem.METRIC

    @property
    def first_weight_date(self) -> Optional[date]:
        if not self.weights:
            return None
        return min(w.date for w in self.weights).date()


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        raise ValueError(f"invalid date '{value}'") from None


def _parse_date(value: Any) -> date:
    return _parse_datetime(value).date()


def _require(record: dict, key: str) -> Any:
    if key not in record or record[key] is None:
        raise ValueError(f"missing required field '{key}'")
    return record[key]


def _optional_int(record: dict, key: str) -> Optional[int]:
    value = record.get(key)
    return int(value) if value is not None else None


def _parse_records(
    records: list[Any], section: str, parse: Callable[[dict], T]
) -> list[T]:
    """Parse each record, prefixing errors with its position in the file."""
    if not isinstance(records, list):
        raise ValueError(f"{section}: expected a list, got {type(records).__name__}")

    parsed = []
    for i, record in enumerate(records):
        where = f"{section}[{i}]"
        if not isinstance(record, dict):
            raise ValueError(f"{where}: expected a mapping, got {type(record).__name__}")
        try:
            parsed.append(parse(record))
        except (TypeError, ValueError) as e:
            raise ValueError(f"{where}: {e}") from None
    return parsed


def parse_weights(records: list[Any], unit: UnitSystem) -> list[WeightEntry]:
    def parse(record: dict) -> WeightEntry:
        return WeightEntry(
            date=_parse_datetime(_require(record, "date")),
            weight=to_stored_weight(float(_require(record, "weight")), unit),
            note=str(record.get("note") or ""),
        )

    return _parse_records(records, "weights", parse)


def parse_logs(records: list[Any]) -> list[DailyLog]:
    def parse(record: dict) -> DailyLog:
        return DailyLog(
            date=_parse_date(_require(record, "date")),
            calories_consumed=int(record.get("calories_consumed") or 0),
            calories_burned=int(record.get("calories_burned") or 0),
            protein=_optional_int(record, "protein"),
            carbs=_optional_int(record, "carbs"),
            fat=_optional_int(record, "fat"),
        )

    return ensure_unique_days(_parse_records(records, "logs", parse))


def parse_goal_periods(records: list[Any], unit: UnitSystem) -> list[GoalPeriod]:
    def parse(record: dict) -> GoalPeriod:
        end_date = record.get("end_date")
        return GoalPeriod(
            start_date=_parse_date(_require(record, "start_date")),
            end_date=_parse_date(end_date) if end_date is not None else None,
            goal_type=_require(record, "goal_type"),
            start_weight=to_stored_weight(float(record.get("start_weight") or 0), unit),
            target_weight=to_stored_weight(float(record.get("target_weight") or 0), unit),
            daily_calorie_goal=int(record.get("daily_calorie_goal") or 0),
            maintenance_calories=int(record.get("maintenance_calories") or 0),
        )

    return _parse_records(records, "goal_periods", parse)


def parse_history(data: Any) -> History:
    """
    Build a History from a decoded file.

    Args:
        data: Mapping with 'weights', 'logs' and optional 'unit', 'goal',
              'goal_periods'

    Returns:
        History with weights converted to kilograms

    Raises:
        ValueError: If any record is malformed
    """
    if not isinstance(data, dict):
        raise ValueError("History file must contain a mapping at the top level")

    unit = UnitSystem.parse(data.get("unit") or "kg")

    goal_overrides = dict(data.get("goal") or {})
    for key in _WEIGHT_GOAL_FIELDS:
        if goal_overrides.get(key) is not None:
            goal_overrides[key] = to_stored_weight(float(goal_overrides[key]), unit)

    return History(
        weights=parse_weights(data.get("weights") or [], unit),
        logs=parse_logs(data.get("logs") or []),
        goal_overrides=goal_overrides,
        goal_periods=parse_goal_periods(data.get("goal_periods") or [], unit),
        unit=unit,
    )


def load_history(path: Path) -> History:
    """Load a history file (.yaml, .yml or .json).

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the extension is unsupported or the content is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"History file not found: {path}")

    suffix = path.suffix.lower()
    if suffix not in (".yaml", ".yml", ".json"):
        raise ValueError(
            f"Unsupported history file type '{suffix}'. Use .yaml, .yml or .json"
        )

    with open(path) as f:
        if suffix == ".json":
            data = json.load(f)
        else:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from None

    return parse_history(data)
