"""Shared enumerations for the NTU Telemetry models."""

from enum import Enum


class Severity(str, Enum):
    """Status level shown on a telemetry badge."""

    NORMAL = "normal"
    WARNING = "warning"
    ALERT = "alert"
    OFFLINE = "offline"

    @property
    def rank(self) -> int:
        """Ordering used for worst-of roll-ups (offline outranks everything)."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.NORMAL: 0,
    Severity.WARNING: 1,
    Severity.ALERT: 2,
    Severity.OFFLINE: 3,
}


class Connectivity(str, Enum):
    """Whether the unit is currently reporting."""

    ONLINE = "online"
    OFFLINE = "offline"


class MetricKind(str, Enum):
    """Telemetry fields that have a threshold table."""

    INTERNAL_TEMPERATURE = "internal_temperature"
    SURFACE_TEMPERATURE = "surface_temperature"
    VIBRATION = "vibration"
    BATTERY = "battery"


class Archetype(str, Enum):
    """Value shape produced by the series synthesizer."""

    BOUNDED_NOISE = "bounded_noise"
    SPIKE_PROCESS = "spike_process"
    DISCHARGE_CURVE = "discharge_curve"


class MaintenanceStatus(str, Enum):
    """Maintenance schedule state for a unit."""

    UP_TO_DATE = "up-to-date"
    DUE_SOON = "due-soon"
    OVERDUE = "overdue"
