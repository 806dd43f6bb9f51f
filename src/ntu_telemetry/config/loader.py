"""Configuration loading with YAML and environment override support."""

from __future__ import annotations

import os
import sys
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from ntu_telemetry.config.settings import TelemetrySettings
from ntu_telemetry.exceptions import ConfigurationError


def load_yaml_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML file if specified.

    Args:
        config_path: Path to YAML config file. If None, checks CONFIG_PATH env var.

    Returns:
        Dict of configuration values from YAML, or empty dict if no file.

    Raises:
        ConfigurationError: If the file is missing, unreadable or not valid YAML.
    """
    path = config_path or os.environ.get("CONFIG_PATH")

    if not path:
        return {}

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
            return data if isinstance(data, dict) else {}
    except FileNotFoundError:
        raise ConfigurationError(
            f"Configuration file not found: {path}",
            hint="Point CONFIG_PATH at a valid YAML file, or unset it to use environment variables only.",
        )
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file {path}: {e}")
    except PermissionError:
        raise ConfigurationError(f"Cannot read configuration file {path}: permission denied")


def format_validation_errors(errors: List[Dict[str, Any]]) -> List[str]:
    """Format Pydantic validation errors into user-friendly messages."""
    messages: List[str] = []
    for error in errors:
        loc = ".".join(str(part) for part in error.get("loc", []))
        msg = error.get("msg", "Invalid value")
        input_val = error.get("input")

        if not loc:
            messages.append(f"Configuration error: {msg}")
        elif input_val is not None:
            messages.append(f"Configuration error: '{loc}' {msg}, got: {input_val}")
        else:
            messages.append(f"Configuration error: '{loc}' {msg}")

    return messages


def load_config(config_path: Optional[str] = None) -> TelemetrySettings:
    """Load and validate configuration, building the threshold tables eagerly.

    Args:
        config_path: Optional path to YAML config file (sets CONFIG_PATH env).

    Returns:
        Validated TelemetrySettings instance.

    Raises:
        ConfigurationError: If the file cannot be read or a threshold table
            violates its invariant.
        SystemExit: If validation fails (exits with code 1 after printing errors).
    """
    if config_path:
        os.environ["CONFIG_PATH"] = config_path

    # Surface file problems with a clear message before pydantic reads it
    _ = load_yaml_config()

    try:
        settings = TelemetrySettings()
    except ValidationError as e:
        for msg in format_validation_errors(e.errors()):
            print(msg, file=sys.stderr)
        sys.exit(1)

    # Fail fast on inconsistent tables; the result is cached on the settings
    _ = settings.registry

    return settings
