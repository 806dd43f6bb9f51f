"""Status classification: threshold tables, classifier and maintenance status."""

from ntu_telemetry.analysis.classifier import StatusClassifier, classify
from ntu_telemetry.analysis.maintenance import DEFAULT_DUE_SOON_DAYS, maintenance_status
from ntu_telemetry.analysis.thresholds import (
    DEFAULT_REGISTRY,
    AscendingThresholds,
    BandedThresholds,
    DescendingThresholds,
    ThresholdRegistry,
    ThresholdSet,
)

__all__ = [
    "AscendingThresholds",
    "BandedThresholds",
    "DEFAULT_DUE_SOON_DAYS",
    "DEFAULT_REGISTRY",
    "DescendingThresholds",
    "StatusClassifier",
    "ThresholdRegistry",
    "ThresholdSet",
    "classify",
    "maintenance_status",
]
