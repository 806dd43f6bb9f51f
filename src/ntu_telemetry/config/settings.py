"""Pydantic settings models for NTU Telemetry configuration."""

from __future__ import annotations

import os
import random
from functools import cached_property
from typing import Any, Dict, Literal, Optional, Tuple, Type

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from ntu_telemetry.analysis.classifier import StatusClassifier
from ntu_telemetry.analysis.maintenance import DEFAULT_DUE_SOON_DAYS
from ntu_telemetry.analysis.thresholds import (
    DEFAULT_REGISTRY,
    AscendingThresholds,
    BandedThresholds,
    DescendingThresholds,
    ThresholdRegistry,
)
from ntu_telemetry.synthesis import generators
from ntu_telemetry.synthesis.generators import SeriesSynthesizer

_internal = DEFAULT_REGISTRY.internal_temperature
_surface = DEFAULT_REGISTRY.surface_temperature
_vibration = DEFAULT_REGISTRY.vibration
_battery = DEFAULT_REGISTRY.battery


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source that reads values from the YAML file named by CONFIG_PATH."""

    def get_field_value(
        self, field: Any, field_name: str
    ) -> Tuple[Any, str, bool]:
        yaml_config = self._load_yaml_config()
        return yaml_config.get(field_name), field_name, False

    def _load_yaml_config(self) -> Dict[str, Any]:
        config_path = os.environ.get("CONFIG_PATH")
        if not config_path:
            return {}

        try:
            with open(config_path) as f:
                data = yaml.safe_load(f)
                return data if isinstance(data, dict) else {}
        except (FileNotFoundError, yaml.YAMLError, PermissionError):
            # Reported with a proper message by loader.py
            return {}

    def __call__(self) -> Dict[str, Any]:
        return self._load_yaml_config()


class TelemetrySettings(BaseSettings):
    """NTU Telemetry configuration settings.

    Configuration is loaded in the following precedence (highest to lowest):
    1. Environment variables (NTU_ prefix)
    2. .env file
    3. YAML configuration file (via CONFIG_PATH)
    4. Default values

    Threshold invariants are not checked by field validation; build_registry()
    raises ConfigurationError when the configured tables are inconsistent.
    The ``registry`` property builds them once and reuses the result.
    """

    model_config = SettingsConfigDict(
        env_prefix="NTU_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Internal temperature band (Celsius)
    internal_temp_min: float = Field(default=_internal.min)
    internal_temp_max: float = Field(default=_internal.max)
    internal_temp_alert_min: float = Field(default=_internal.alert_min)
    internal_temp_alert_max: float = Field(default=_internal.alert_max)

    # Surface temperature band (Celsius)
    surface_temp_min: float = Field(default=_surface.min)
    surface_temp_max: float = Field(default=_surface.max)
    surface_temp_alert_min: float = Field(default=_surface.alert_min)
    surface_temp_alert_max: float = Field(default=_surface.alert_max)

    # Vibration scale (m/s^2)
    vibration_normal: float = Field(default=_vibration.normal)
    vibration_warning: float = Field(default=_vibration.warning)
    vibration_alert: float = Field(default=_vibration.alert)

    # Battery scale (percent)
    battery_warning: float = Field(default=_battery.warning)
    battery_alert: float = Field(default=_battery.alert)

    # Maintenance policy
    maintenance_due_soon_days: int = Field(
        default=DEFAULT_DUE_SOON_DAYS,
        description="Days before the next maintenance date that count as due soon",
        ge=0,
    )

    # Synthetic history
    history_hours: int = Field(
        default=generators.DEFAULT_NOISE_HOURS,
        description="Default window for temperature and vibration charts (hours)",
        gt=0,
    )
    battery_history_hours: int = Field(
        default=generators.DEFAULT_DISCHARGE_HOURS,
        description="Default window for battery charts (hours)",
        gt=0,
    )
    min_variance: float = Field(default=generators.DEFAULT_MIN_VARIANCE, ge=0.0)
    max_variance: float = Field(default=generators.DEFAULT_MAX_VARIANCE, ge=0.0)
    random_seed: Optional[int] = Field(
        default=None,
        description="Seed for synthetic history (unset uses system entropy)",
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format: json (production) or text (development)",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Order sources: init args, environment, .env, then YAML."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
        )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "WARN", "ERROR", "CRITICAL"}
        normalized = v.upper()
        if normalized == "WARN":
            normalized = "WARNING"
        if normalized not in valid_levels:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: DEBUG, INFO, WARNING, ERROR"
            )
        return normalized

    @model_validator(mode="after")
    def validate_variance_range(self) -> "TelemetrySettings":
        """min_variance must not exceed max_variance."""
        if self.min_variance > self.max_variance:
            raise ValueError(
                f"min_variance ({self.min_variance}) must not exceed "
                f"max_variance ({self.max_variance})"
            )
        return self

    def build_registry(self) -> ThresholdRegistry:
        """Construct the threshold tables from the configured values.

        Raises:
            ConfigurationError: If any table violates its ordering invariant
        """
        return ThresholdRegistry(
            internal_temperature=BandedThresholds(
                min=self.internal_temp_min,
                max=self.internal_temp_max,
                alert_min=self.internal_temp_alert_min,
                alert_max=self.internal_temp_alert_max,
            ),
            surface_temperature=BandedThresholds(
                min=self.surface_temp_min,
                max=self.surface_temp_max,
                alert_min=self.surface_temp_alert_min,
                alert_max=self.surface_temp_alert_max,
            ),
            vibration=AscendingThresholds(
                normal=self.vibration_normal,
                warning=self.vibration_warning,
                alert=self.vibration_alert,
            ),
            battery=DescendingThresholds(
                warning=self.battery_warning,
                alert=self.battery_alert,
            ),
        )

    @cached_property
    def registry(self) -> ThresholdRegistry:
        """Threshold tables for this configuration, built on first access."""
        return self.build_registry()

    def build_classifier(self) -> StatusClassifier:
        """Create a classifier bound to the configured tables."""
        return StatusClassifier(self.registry)

    def build_synthesizer(self) -> SeriesSynthesizer:
        """Create a synthesizer, seeded when random_seed is set."""
        rng = random.Random(self.random_seed) if self.random_seed is not None else None
        return SeriesSynthesizer(rng=rng)
