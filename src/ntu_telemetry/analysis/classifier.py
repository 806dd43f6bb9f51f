"""Telemetry status classifier.

Maps raw sensor values to operator-facing severity badges using a
ThresholdRegistry. Classification is pure and deterministic; readings that
are not finite numbers are reported as Alert so a badge is always shown.
"""

import math
from typing import Any, Dict, Optional

import structlog

from ntu_telemetry.analysis.thresholds import DEFAULT_REGISTRY, ThresholdRegistry
from ntu_telemetry.models.enums import Connectivity, MetricKind, Severity
from ntu_telemetry.models.telemetry import TelemetryReading

log = structlog.get_logger()


class StatusClassifier:
    """Classifier for telemetry values against a threshold registry.

    The registry is passed in once and never mutated, so one classifier can
    be shared freely between callers.
    """

    def __init__(self, registry: Optional[ThresholdRegistry] = None):
        """Initialize the classifier with optional custom thresholds.

        Args:
            registry: Threshold tables to use. Defaults to DEFAULT_REGISTRY.
        """
        self._registry = registry or DEFAULT_REGISTRY

    @property
    def registry(self) -> ThresholdRegistry:
        return self._registry

    def classify(
        self,
        kind: MetricKind,
        value: Any,
        connectivity: Connectivity = Connectivity.ONLINE,
    ) -> Severity:
        """Classify a single metric value.

        Args:
            kind: Metric kind the value belongs to
            value: Raw reading; anything that is not a finite number is Alert
            connectivity: Offline overrides the value entirely

        Returns:
            Severity for the badge

        Raises:
            ValueError: If kind is not a known MetricKind
        """
        thresholds = self._registry.for_kind(kind)

        if Connectivity(connectivity) is Connectivity.OFFLINE:
            return Severity.OFFLINE

        number = _as_finite(value)
        if number is None:
            log.warning(
                "degenerate_reading",
                metric=MetricKind(kind).value,
                value=repr(value),
                severity=Severity.ALERT.value,
            )
            return Severity.ALERT

        return thresholds.severity_for(number)

    def classify_fields(
        self,
        reading: Optional[TelemetryReading],
        connectivity: Connectivity = Connectivity.ONLINE,
    ) -> Dict[MetricKind, Severity]:
        """Classify every field present in a reading.

        Returns:
            Mapping of metric kind to severity; absent fields are omitted
        """
        if reading is None:
            return {}
        return {
            kind: self.classify(kind, value, connectivity)
            for kind, value in reading.values_by_kind().items()
        }

    def classify_reading(
        self,
        reading: Optional[TelemetryReading],
        connectivity: Connectivity = Connectivity.ONLINE,
    ) -> Severity:
        """Roll a whole reading up into one badge (worst field wins).

        A missing reading or an offline unit is Offline. A reading with no
        reported fields is Normal.
        """
        if reading is None or Connectivity(connectivity) is Connectivity.OFFLINE:
            return Severity.OFFLINE

        severities = self.classify_fields(reading, connectivity).values()
        return max(severities, key=lambda s: s.rank, default=Severity.NORMAL)


def _as_finite(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


_default_classifier = StatusClassifier()


def classify(
    kind: MetricKind,
    value: Any,
    connectivity: Connectivity = Connectivity.ONLINE,
    registry: Optional[ThresholdRegistry] = None,
) -> Severity:
    """Classify a value with the default tables, or with ``registry`` if given."""
    if registry is None:
        return _default_classifier.classify(kind, value, connectivity)
    return StatusClassifier(registry).classify(kind, value, connectivity)
