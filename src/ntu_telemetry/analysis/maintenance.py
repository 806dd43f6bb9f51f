"""Maintenance schedule status.

The "due soon" window is a policy value supplied by configuration.
"""

from datetime import datetime, timedelta
from typing import Any, Optional

from ntu_telemetry.exceptions import ConfigurationError
from ntu_telemetry.models.enums import MaintenanceStatus
from ntu_telemetry.utils.timestamps import normalize_timestamp, utc_now

DEFAULT_DUE_SOON_DAYS = 14


def maintenance_status(
    next_maintenance: Any,
    now: Optional[datetime] = None,
    due_soon_days: float = DEFAULT_DUE_SOON_DAYS,
) -> MaintenanceStatus:
    """Derive the maintenance status from the next scheduled date.

    Args:
        next_maintenance: Next maintenance date (datetime, date string or epoch)
        now: Reference time, defaults to the current UTC time
        due_soon_days: Days ahead of the due date that count as "due soon"

    Returns:
        OVERDUE when the date has passed, DUE_SOON when it falls within the
        window, UP_TO_DATE otherwise

    Raises:
        ConfigurationError: If due_soon_days is negative
        ValueError: If next_maintenance cannot be parsed
    """
    if due_soon_days < 0:
        raise ConfigurationError(
            f"due_soon_days must be zero or positive, got {due_soon_days}",
            hint="Set NTU_MAINTENANCE_DUE_SOON_DAYS to a non-negative number of days.",
        )

    due = normalize_timestamp(next_maintenance)
    reference = normalize_timestamp(now) if now is not None else utc_now()

    if due < reference:
        return MaintenanceStatus.OVERDUE
    if due - reference <= timedelta(days=due_soon_days):
        return MaintenanceStatus.DUE_SOON
    return MaintenanceStatus.UP_TO_DATE
