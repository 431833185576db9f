"""Application settings and configuration management."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

import yaml

from repscale.tracking.models import EstimationMethod, GoalSettings, GoalType
from repscale.units import UnitSystem

VALID_OUTPUT_FORMATS = ("table", "json")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".repscale"


def default_config_path() -> Path:
    return _default_config_dir() / "config.yaml"


@dataclass
class GoalConfig:
    """Default goal used when a history file does not override it."""

    daily_goal: int = 2000
    target_weight: float = 70.0  # kg
    goal_type: GoalType = GoalType.CUTTING
    maintenance_calories: int = 2500
    maintenance_tolerance: float = 2.0  # kg
    estimation_method: EstimationMethod = EstimationMethod.WEIGHT_TREND_30_DAY
    calorie_counting_enabled: bool = True

    def to_goal_settings(self, **overrides: Any) -> GoalSettings:
        """Build engine settings, applying per-file overrides.

        Raises:
            ValueError: If an override names an unknown field or holds an
                invalid value
        """
        unknown = set(overrides) - set(self.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown goal settings: {sorted(unknown)}")
        merged = replace(self, **overrides)
        return GoalSettings(
            daily_goal=int(merged.daily_goal),
            target_weight=float(merged.target_weight),
            goal_type=GoalType.parse(merged.goal_type),
            maintenance_calories=int(merged.maintenance_calories),
            estimation_method=EstimationMethod.parse(merged.estimation_method),
            maintenance_tolerance=float(merged.maintenance_tolerance),
            calorie_counting_enabled=bool(merged.calorie_counting_enabled),
        )


@dataclass
class DisplayConfig:
    """Display preferences."""

    unit_system: UnitSystem = UnitSystem.METRIC
    output_format: str = "table"  # "table" or "json"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"


@dataclass
class Settings:
    """Main application settings."""

    goal: GoalConfig = field(default_factory=GoalConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.repscale/config.yaml

        Returns:
            Settings instance

        Raises:
            ValueError: If a value in the file is invalid
        """
        if config_path is None:
            config_path = default_config_path()

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        settings = cls()

        # Parse goal config
        if "goal" in data:
            goal_data = data["goal"] or {}
            if "daily_goal" in goal_data:
                settings.goal.daily_goal = int(goal_data["daily_goal"])
            if "target_weight" in goal_data:
                settings.goal.target_weight = float(goal_data["target_weight"])
            if "goal_type" in goal_data:
                settings.goal.goal_type = GoalType.parse(goal_data["goal_type"])
            if "maintenance_calories" in goal_data:
                settings.goal.maintenance_calories = int(goal_data["maintenance_calories"])
            if "maintenance_tolerance" in goal_data:
                settings.goal.maintenance_tolerance = float(
                    goal_data["maintenance_tolerance"]
                )
            if "estimation_method" in goal_data:
                settings.goal.estimation_method = EstimationMethod.parse(
                    goal_data["estimation_method"]
                )
            if "calorie_counting_enabled" in goal_data:
                settings.goal.calorie_counting_enabled = bool(
                    goal_data["calorie_counting_enabled"]
                )

        # Parse display config
        if "display" in data:
            display_data = data["display"] or {}
            if "unit_system" in display_data:
                settings.display.unit_system = UnitSystem.parse(display_data["unit_system"])
            if "output_format" in display_data:
                output_format = str(display_data["output_format"])
                if output_format not in VALID_OUTPUT_FORMATS:
                    raise ValueError(
                        f"output_format must be one of {VALID_OUTPUT_FORMATS}, "
                        f"got '{output_format}'"
                    )
                settings.display.output_format = output_format

        # Parse logging config
        if "logging" in data:
            logging_data = data["logging"] or {}
            if "level" in logging_data:
                level = str(logging_data["level"]).upper()
                if level not in VALID_LOG_LEVELS:
                    raise ValueError(
                        f"logging level must be one of {VALID_LOG_LEVELS}, got '{level}'"
                    )
                settings.logging.level = level

        return settings

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.repscale/config.yaml
        """
        if config_path is None:
            config_path = default_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def to_dict(self) -> dict[str, Any]:
        """Plain representation as written to config.yaml."""
        return {
            "goal": {
                "daily_goal": self.goal.daily_goal,
                "target_weight": self.goal.target_weight,
                "goal_type": self.goal.goal_type.value,
                "maintenance_calories": self.goal.maintenance_calories,
                "maintenance_tolerance": self.goal.maintenance_tolerance,
                "estimation_method": self.goal.estimation_method.name.lower(),
                "calorie_counting_enabled": self.goal.calorie_counting_enabled,
            },
            "display": {
                "unit_system": self.display.unit_system.value,
                "output_format": self.display.output_format,
            },
            "logging": {
                "level": self.logging.level,
            },
        }


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings(config_path: Optional[Path] = None) -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load(config_path)
    return _settings
