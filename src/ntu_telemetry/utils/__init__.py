"""Utility helpers for NTU Telemetry."""

from .timestamps import format_timestamp, normalize_timestamp, utc_now

__all__ = ["format_timestamp", "normalize_timestamp", "utc_now"]
