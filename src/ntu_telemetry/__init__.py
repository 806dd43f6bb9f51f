"""
NTU Telemetry - Status classification and synthetic history for neonatal
transport unit monitoring.

This package turns raw telemetry readings into operator-facing severity
badges and fills chart gaps with plausible synthetic history.

Features:
- Per-metric threshold tables validated at startup
- Deterministic status classification with fail-safe handling of bad readings
- Seedable historical series synthesis for temperature, vibration and battery
- Configuration via YAML with environment variable overrides
- Structured logging (JSON for production, text for development)
"""

__version__ = "0.3.0"
__all__ = ["__version__"]
