"""Telemetry threshold tables.

Defines the immutable boundary sets used to classify each metric kind:
banded limits for temperatures, an ascending scale for vibration and a
descending scale for battery charge. Invariants are checked when a set is
constructed so a bad table fails at startup, never per reading.

Temperature and battery limits are inclusive on the safer side: a value
exactly on a limit belongs to the less severe band. The vibration scale is
half-open: reaching the warning or alert level already counts as that level.
"""

import math
from dataclasses import dataclass, fields
from typing import Union

from ntu_telemetry.exceptions import ConfigurationError
from ntu_telemetry.models.enums import MetricKind, Severity


def _require_finite(owner: object) -> None:
    for f in fields(owner):
        value = getattr(owner, f.name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigurationError(
                f"{type(owner).__name__}.{f.name} must be a number, got {value!r}"
            )
        if not math.isfinite(value):
            raise ConfigurationError(
                f"{type(owner).__name__}.{f.name} must be finite, got {value!r}"
            )


@dataclass(frozen=True)
class BandedThresholds:
    """Safe band inside a wider tolerable band (temperatures).

    Attributes:
        min: Lower edge of the normal band
        max: Upper edge of the normal band
        alert_min: Lower edge of the tolerable band
        alert_max: Upper edge of the tolerable band
    """

    min: float
    max: float
    alert_min: float
    alert_max: float

    def __post_init__(self) -> None:
        _require_finite(self)
        if not (self.alert_min <= self.min <= self.max <= self.alert_max):
            raise ConfigurationError(
                "Banded thresholds must satisfy alert_min <= min <= max <= alert_max, "
                f"got alert_min={self.alert_min}, min={self.min}, "
                f"max={self.max}, alert_max={self.alert_max}"
            )

    def severity_for(self, value: float) -> Severity:
        if self.min <= value <= self.max:
            return Severity.NORMAL
        if self.alert_min <= value <= self.alert_max:
            return Severity.WARNING
        return Severity.ALERT


@dataclass(frozen=True)
class AscendingThresholds:
    """Severity grows with magnitude (vibration).

    ``normal`` marks the top of the stable range and is informational;
    classification uses ``warning`` and ``alert``. A value equal to
    ``warning`` is a warning and a value equal to ``alert`` is an alert.
    """

    normal: float
    warning: float
    alert: float

    def __post_init__(self) -> None:
        _require_finite(self)
        if not (self.normal < self.warning < self.alert):
            raise ConfigurationError(
                "Ascending thresholds must satisfy normal < warning < alert, "
                f"got normal={self.normal}, warning={self.warning}, alert={self.alert}"
            )

    def severity_for(self, value: float) -> Severity:
        if value < self.warning:
            return Severity.NORMAL
        if value < self.alert:
            return Severity.WARNING
        return Severity.ALERT


@dataclass(frozen=True)
class DescendingThresholds:
    """Severity grows as the value drops (battery charge)."""

    warning: float
    alert: float

    def __post_init__(self) -> None:
        _require_finite(self)
        if not self.alert < self.warning:
            raise ConfigurationError(
                "Descending thresholds must satisfy alert < warning, "
                f"got warning={self.warning}, alert={self.alert}"
            )

    def severity_for(self, value: float) -> Severity:
        if value >= self.warning:
            return Severity.NORMAL
        if value >= self.alert:
            return Severity.WARNING
        return Severity.ALERT


ThresholdSet = Union[BandedThresholds, AscendingThresholds, DescendingThresholds]


@dataclass(frozen=True)
class ThresholdRegistry:
    """One threshold set per metric kind, built once at startup."""

    internal_temperature: BandedThresholds
    surface_temperature: BandedThresholds
    vibration: AscendingThresholds
    battery: DescendingThresholds

    def __post_init__(self) -> None:
        expected = {
            "internal_temperature": BandedThresholds,
            "surface_temperature": BandedThresholds,
            "vibration": AscendingThresholds,
            "battery": DescendingThresholds,
        }
        for name, shape in expected.items():
            if not isinstance(getattr(self, name), shape):
                raise ConfigurationError(
                    f"Threshold set for {name} must be {shape.__name__}, "
                    f"got {type(getattr(self, name)).__name__}"
                )

    def for_kind(self, kind: MetricKind) -> ThresholdSet:
        """Return the threshold set for a metric kind.

        Raises:
            ValueError: If kind is not a known MetricKind
        """
        kind = MetricKind(kind)
        if kind is MetricKind.INTERNAL_TEMPERATURE:
            return self.internal_temperature
        if kind is MetricKind.SURFACE_TEMPERATURE:
            return self.surface_temperature
        if kind is MetricKind.VIBRATION:
            return self.vibration
        if kind is MetricKind.BATTERY:
            return self.battery
        raise ValueError(f"No threshold set for metric kind {kind!r}")


# Default tables for production use
DEFAULT_REGISTRY = ThresholdRegistry(
    internal_temperature=BandedThresholds(min=36.0, max=37.5, alert_min=35.5, alert_max=38.5),
    surface_temperature=BandedThresholds(min=35.5, max=37.0, alert_min=35.0, alert_max=37.5),
    vibration=AscendingThresholds(normal=0.3, warning=0.5, alert=0.8),
    battery=DescendingThresholds(warning=30, alert=20),
)
