"""Telemetry models for live readings and synthesized chart points.

Provides a pydantic model for the reading handed over by the API layer and
a dataclass for the points emitted by the series synthesizer.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ntu_telemetry.models.enums import MetricKind
from ntu_telemetry.utils.timestamps import format_timestamp


class TelemetryReading(BaseModel):
    """One live telemetry reading for a transport unit.

    Any field may be missing when the device did not report it. Keys are
    accepted in snake_case or in the API's camelCase form.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    internal_temp: Optional[float] = Field(
        default=None, alias="internalTemp", description="Internal temperature in Celsius"
    )
    surface_temp: Optional[float] = Field(
        default=None, alias="surfaceTemp", description="Surface temperature in Celsius"
    )
    vibration: Optional[float] = Field(
        default=None, description="Vibration magnitude in m/s^2"
    )
    battery_level: Optional[float] = Field(
        default=None, alias="batteryLevel", description="Battery charge percentage"
    )
    battery_charging: bool = Field(
        default=False, alias="batteryCharging", description="Whether the unit is charging"
    )
    timestamp: Optional[datetime] = Field(
        default=None, description="When the reading was taken"
    )

    def values_by_kind(self) -> Dict[MetricKind, float]:
        """Return the reported values keyed by metric kind, skipping absent fields."""
        values = {
            MetricKind.INTERNAL_TEMPERATURE: self.internal_temp,
            MetricKind.SURFACE_TEMPERATURE: self.surface_temp,
            MetricKind.VIBRATION: self.vibration,
            MetricKind.BATTERY: self.battery_level,
        }
        return {kind: value for kind, value in values.items() if value is not None}

    @classmethod
    def from_api_response(cls, response: Dict[str, Any]) -> "TelemetryReading":
        """Factory for creating a reading from a raw telemetry API payload.

        Numeric fields that are present but cannot be parsed become NaN so
        they are classified as Alert instead of silently disappearing.

        Args:
            response: Raw telemetry dictionary (camelCase or snake_case keys)

        Returns:
            TelemetryReading instance with parsed fields
        """

        def pick(camel: str, snake: str) -> Any:
            if camel in response:
                return response[camel]
            return response.get(snake)

        return cls(
            internal_temp=_parse_number(pick("internalTemp", "internal_temp")),
            surface_temp=_parse_number(pick("surfaceTemp", "surface_temp")),
            vibration=_parse_number(response.get("vibration")),
            battery_level=_parse_number(pick("batteryLevel", "battery_level")),
            battery_charging=bool(pick("batteryCharging", "battery_charging") or False),
            timestamp=response.get("timestamp"),
        )


def _parse_number(raw: Any) -> Optional[float]:
    """Parse a raw numeric field; None stays None, garbage becomes NaN."""
    if raw is None:
        return None
    try:
        return float(raw)
    except (ValueError, TypeError):
        return float("nan")


@dataclass(frozen=True)
class SeriesPoint:
    """A single point of a synthetic historical series."""

    timestamp: datetime
    value: Union[float, int]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for charting components (ISO-8601 UTC timestamp)."""
        return {"timestamp": format_timestamp(self.timestamp), "value": self.value}
