"""Data models for NTU Telemetry."""

from .enums import Archetype, Connectivity, MaintenanceStatus, MetricKind, Severity
from .telemetry import SeriesPoint, TelemetryReading

__all__ = [
    "Archetype",
    "Connectivity",
    "MaintenanceStatus",
    "MetricKind",
    "SeriesPoint",
    "Severity",
    "TelemetryReading",
]
