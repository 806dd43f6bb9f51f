"""Tests for NTU Telemetry data models."""

import math
from datetime import datetime, timezone

import pytest

from ntu_telemetry.models import (
    Archetype,
    Connectivity,
    MaintenanceStatus,
    MetricKind,
    Severity,
    TelemetryReading,
)


class TestEnums:
    def test_severity_values(self) -> None:
        assert [s.value for s in Severity] == ["normal", "warning", "alert", "offline"]

    def test_enum_string_coercion(self) -> None:
        assert MetricKind("surface_temperature") is MetricKind.SURFACE_TEMPERATURE
        assert Connectivity("offline") is Connectivity.OFFLINE
        assert Archetype("spike_process") is Archetype.SPIKE_PROCESS
        assert MaintenanceStatus("due-soon") is MaintenanceStatus.DUE_SOON

    def test_severity_is_str(self) -> None:
        """Severity serializes directly as its string value."""
        assert Severity.ALERT == "alert"


class TestTelemetryReading:
    def test_snake_case_construction(self) -> None:
        reading = TelemetryReading(internal_temp=36.9, battery_level=72)

        assert reading.internal_temp == pytest.approx(36.9)
        assert reading.battery_level == 72
        assert reading.surface_temp is None
        assert reading.battery_charging is False

    def test_camel_case_construction(self) -> None:
        reading = TelemetryReading(internalTemp=36.9, surfaceTemp=36.1, batteryLevel=40)
        assert reading.surface_temp == pytest.approx(36.1)

    def test_reading_is_frozen(self) -> None:
        reading = TelemetryReading(vibration=0.1)
        with pytest.raises(Exception):  # ValidationError for frozen model
            reading.vibration = 0.9

    def test_values_by_kind_skips_missing(self) -> None:
        reading = TelemetryReading(vibration=0.12, battery_level=55)
        assert reading.values_by_kind() == {
            MetricKind.VIBRATION: 0.12,
            MetricKind.BATTERY: 55,
        }


class TestTelemetryReadingFromApiResponse:
    def test_full_payload(self) -> None:
        reading = TelemetryReading.from_api_response(
            {
                "internalTemp": 37.1,
                "surfaceTemp": "36.4",
                "vibration": 0.05,
                "batteryLevel": 88,
                "batteryCharging": True,
                "timestamp": "2026-10-19T11:55:00Z",
            }
        )

        assert reading.internal_temp == pytest.approx(37.1)
        assert reading.surface_temp == pytest.approx(36.4)
        assert reading.vibration == pytest.approx(0.05)
        assert reading.battery_level == 88
        assert reading.battery_charging is True
        assert reading.timestamp == datetime(2026, 10, 19, 11, 55, tzinfo=timezone.utc)

    def test_snake_case_payload(self) -> None:
        reading = TelemetryReading.from_api_response({"internal_temp": 36.6, "battery_level": 10})
        assert reading.internal_temp == pytest.approx(36.6)
        assert reading.battery_level == 10

    def test_null_fields_stay_missing(self) -> None:
        reading = TelemetryReading.from_api_response({"internalTemp": None})
        assert reading.internal_temp is None
        assert reading.values_by_kind() == {}

    def test_garbage_becomes_nan(self) -> None:
        reading = TelemetryReading.from_api_response({"vibration": "sensor-fault"})
        assert math.isnan(reading.vibration)
