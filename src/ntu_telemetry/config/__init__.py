"""Configuration management for NTU Telemetry."""

from ntu_telemetry.config.loader import load_config
from ntu_telemetry.config.settings import TelemetrySettings
from ntu_telemetry.exceptions import ConfigurationError

__all__ = [
    "ConfigurationError",
    "TelemetrySettings",
    "load_config",
]
