"""Tests for maintenance status derivation."""

from datetime import datetime, timedelta, timezone

import pytest

from ntu_telemetry.analysis.maintenance import DEFAULT_DUE_SOON_DAYS, maintenance_status
from ntu_telemetry.exceptions import ConfigurationError
from ntu_telemetry.models.enums import MaintenanceStatus

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class TestMaintenanceStatus:
    def test_past_date_is_overdue(self) -> None:
        assert maintenance_status(NOW - timedelta(hours=1), now=NOW) == MaintenanceStatus.OVERDUE

    def test_within_window_is_due_soon(self) -> None:
        due = NOW + timedelta(days=3)
        assert maintenance_status(due, now=NOW, due_soon_days=7) == MaintenanceStatus.DUE_SOON

    def test_window_edge_is_due_soon(self) -> None:
        due = NOW + timedelta(days=7)
        assert maintenance_status(due, now=NOW, due_soon_days=7) == MaintenanceStatus.DUE_SOON

    def test_beyond_window_is_up_to_date(self) -> None:
        due = NOW + timedelta(days=8)
        assert maintenance_status(due, now=NOW, due_soon_days=7) == MaintenanceStatus.UP_TO_DATE

    def test_due_now_is_due_soon(self) -> None:
        assert maintenance_status(NOW, now=NOW) == MaintenanceStatus.DUE_SOON

    def test_zero_window_only_flags_overdue(self) -> None:
        due = NOW + timedelta(minutes=1)
        assert maintenance_status(due, now=NOW, due_soon_days=0) == MaintenanceStatus.UP_TO_DATE

    def test_default_window(self) -> None:
        assert DEFAULT_DUE_SOON_DAYS == 14
        inside = NOW + timedelta(days=13)
        outside = NOW + timedelta(days=15)
        assert maintenance_status(inside, now=NOW) == MaintenanceStatus.DUE_SOON
        assert maintenance_status(outside, now=NOW) == MaintenanceStatus.UP_TO_DATE

    def test_accepts_date_strings(self) -> None:
        assert maintenance_status("2026-10-25", now=NOW) == MaintenanceStatus.DUE_SOON
        assert maintenance_status("2026-01-01T08:00:00Z", now=NOW) == MaintenanceStatus.OVERDUE

    def test_naive_datetimes_are_utc(self) -> None:
        due = datetime(2027, 1, 1)
        assert maintenance_status(due, now=datetime(2026, 10, 19)) == MaintenanceStatus.UP_TO_DATE

    def test_negative_window_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            maintenance_status(NOW, now=NOW, due_soon_days=-1)

    def test_unparseable_date(self) -> None:
        with pytest.raises(ValueError):
            maintenance_status("not a date", now=NOW)
