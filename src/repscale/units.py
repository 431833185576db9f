"""Weight unit conversion for display.

Weights are stored and computed in kilograms; conversion happens only at
the edges (loading history files and printing).
"""

from __future__ import annotations

from enum import Enum

LBS_PER_KG = 2.20462


class UnitSystem(str, Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"

    @classmethod
    def parse(cls, value: str | UnitSystem) -> UnitSystem:
        if isinstance(value, UnitSystem):
            return value
        text = str(value).strip().lower()
        if text in ("kg", "metric"):
            return cls.METRIC
        if text in ("lb", "lbs", "imperial"):
            return cls.IMPERIAL
        raise ValueError(f"unit must be 'kg'/'metric' or 'lbs'/'imperial', got '{value}'")


def to_display_weight(kg: float, system: UnitSystem) -> float:
    """Convert a stored kilogram value into the user's unit."""
    if system is UnitSystem.IMPERIAL:
        return kg * LBS_PER_KG
    return kg


def to_stored_weight(value: float, system: UnitSystem) -> float:
    """Convert a value in the user's unit into kilograms."""
    if system is UnitSystem.IMPERIAL:
        return value / LBS_PER_KG
    return value


def weight_label(system: UnitSystem) -> str:
    return "lbs" if system is UnitSystem.IMPERIAL else "kg"
