"""Synthetic historical series for telemetry charts.

Generates plausible history when real samples are unavailable. Three value
shapes are supported:

- bounded noise: readings that settle toward the live value (temperatures)
- spike process: low baseline with rare shocks (vibration)
- discharge curve: roughly linear drain toward the live level (battery)

Every call draws fresh values from the injected random source, so a seeded
``random.Random`` gives exact, repeatable sequences in tests.
"""

import random
from datetime import datetime, timedelta
from typing import Callable, List, Optional

import structlog

from ntu_telemetry.exceptions import ConfigurationError
from ntu_telemetry.models.enums import Archetype
from ntu_telemetry.models.telemetry import SeriesPoint
from ntu_telemetry.utils.timestamps import utc_now

log = structlog.get_logger()

# Ten-minute cadence: six points per hour
POINTS_PER_HOUR = 6
SAMPLE_INTERVAL = timedelta(minutes=10)

DEFAULT_NOISE_HOURS = 4
DEFAULT_SPIKE_HOURS = 4
DEFAULT_DISCHARGE_HOURS = 24
DEFAULT_MIN_VARIANCE = 0.1
DEFAULT_MAX_VARIANCE = 0.5

# Spike process parameters (m/s^2)
SPIKE_BASELINE_MAX = 0.2
SPIKE_PROBABILITY = 0.05
SPIKE_MIN = 0.3
SPIKE_MAX = 1.0
SPIKE_CEILING = 0.99

# Battery discharge parameters (percent)
DISCHARGE_JITTER = 2.0
BATTERY_MIN = 0
BATTERY_MAX = 100


def _validate_hours(hours: int) -> int:
    if isinstance(hours, bool) or not isinstance(hours, int) or hours <= 0:
        raise ConfigurationError(
            f"History window must be a positive whole number of hours, got {hours!r}"
        )
    return hours


def _ten_minute_offsets(hours: int) -> List[int]:
    """Offsets in ten-minute steps before now, oldest first."""
    return list(range(POINTS_PER_HOUR * hours + POINTS_PER_HOUR - 1, -1, -1))


def _validate_variance(min_variance: float, max_variance: float) -> None:
    if not 0 <= min_variance <= max_variance:
        raise ConfigurationError(
            "Variance range must satisfy 0 <= min_variance <= max_variance, "
            f"got min_variance={min_variance}, max_variance={max_variance}"
        )


class SeriesSynthesizer:
    """Generator for synthetic historical telemetry series.

    Args:
        rng: Random source; defaults to a fresh ``random.Random`` seeded from
            system entropy.
        clock: Zero-argument callable returning the current aware UTC time.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._rng = rng or random.Random()
        self._clock = clock or utc_now

    def bounded_noise(
        self,
        current_value: float,
        hours: int = DEFAULT_NOISE_HOURS,
        min_variance: float = DEFAULT_MIN_VARIANCE,
        max_variance: float = DEFAULT_MAX_VARIANCE,
    ) -> List[SeriesPoint]:
        """Noise around ``current_value`` that widens further back in time.

        Each point draws a magnitude from [min_variance, max_variance] with a
        random sign, scaled by (1 + d) where d is the whole hours back
        divided by the window. Values are rounded to one decimal place and
        are not clamped.
        """
        _validate_hours(hours)
        _validate_variance(min_variance, max_variance)
        now = self._clock()

        points: List[SeriesPoint] = []
        for offset in _ten_minute_offsets(hours):
            distance = (offset // POINTS_PER_HOUR) / hours
            variance = self._rng.uniform(min_variance, max_variance)
            if self._rng.random() < 0.5:
                variance = -variance
            value = current_value + variance * (1 + distance)
            points.append(
                SeriesPoint(timestamp=now - offset * SAMPLE_INTERVAL, value=round(value, 1))
            )

        log.debug("series_synthesized", archetype=Archetype.BOUNDED_NOISE.value, points=len(points))
        return points

    def spike_process(self, hours: int = DEFAULT_SPIKE_HOURS) -> List[SeriesPoint]:
        """Low-level baseline with occasional shocks.

        Baseline values are uniform in [0, 0.2); with probability 0.05 a
        point is replaced by a shock uniform in [0.3, 1.0). Values are
        rounded to two decimals and never reach 1.0.
        """
        _validate_hours(hours)
        now = self._clock()

        points: List[SeriesPoint] = []
        for offset in _ten_minute_offsets(hours):
            value = self._rng.random() * SPIKE_BASELINE_MAX
            if self._rng.random() < SPIKE_PROBABILITY:
                value = SPIKE_MIN + self._rng.random() * (SPIKE_MAX - SPIKE_MIN)
            points.append(
                SeriesPoint(
                    timestamp=now - offset * SAMPLE_INTERVAL,
                    value=min(round(value, 2), SPIKE_CEILING),
                )
            )

        log.debug("series_synthesized", archetype=Archetype.SPIKE_PROCESS.value, points=len(points))
        return points

    def discharge_curve(
        self,
        current_level: float,
        hours: int = DEFAULT_DISCHARGE_HOURS,
    ) -> List[SeriesPoint]:
        """Hourly battery levels draining linearly toward ``current_level``.

        The starting level is drawn once per call somewhere between the
        current level and full charge. Each point adds jitter in [-2, +2],
        then is rounded to a whole percent and clamped to [0, 100].
        Rounding uses Python's round, which is half-to-even: a level of
        52.5 becomes 52, not 53.
        """
        _validate_hours(hours)
        now = self._clock()

        start_level = min(
            BATTERY_MAX, current_level + (BATTERY_MAX - current_level) * self._rng.random()
        )

        points: List[SeriesPoint] = []
        for hours_back in range(hours, -1, -1):
            ratio = hours_back / hours
            jitter = (self._rng.random() * 2 - 1) * DISCHARGE_JITTER
            level = current_level + (start_level - current_level) * ratio + jitter
            value = min(BATTERY_MAX, max(BATTERY_MIN, int(round(level))))
            points.append(SeriesPoint(timestamp=now - timedelta(hours=hours_back), value=value))

        log.debug(
            "series_synthesized",
            archetype=Archetype.DISCHARGE_CURVE.value,
            points=len(points),
            start_level=round(start_level, 1),
        )
        return points

    def synthesize(
        self,
        archetype: Archetype,
        current_value: float = 0.0,
        hours: Optional[int] = None,
        min_variance: float = DEFAULT_MIN_VARIANCE,
        max_variance: float = DEFAULT_MAX_VARIANCE,
    ) -> List[SeriesPoint]:
        """Dispatch to the generator for ``archetype``.

        ``hours=None`` uses the archetype's default window. The spike
        process ignores ``current_value`` and the variance range.

        Raises:
            ConfigurationError: If hours or the variance range is invalid
            ValueError: If archetype is not a known Archetype
        """
        archetype = Archetype(archetype)
        if archetype is Archetype.BOUNDED_NOISE:
            return self.bounded_noise(
                current_value,
                DEFAULT_NOISE_HOURS if hours is None else hours,
                min_variance,
                max_variance,
            )
        if archetype is Archetype.SPIKE_PROCESS:
            return self.spike_process(DEFAULT_SPIKE_HOURS if hours is None else hours)
        if archetype is Archetype.DISCHARGE_CURVE:
            return self.discharge_curve(
                current_value, DEFAULT_DISCHARGE_HOURS if hours is None else hours
            )
        raise ValueError(f"Unknown series archetype {archetype!r}")


def synthesize(
    archetype: Archetype,
    current_value: float = 0.0,
    hours: Optional[int] = None,
    min_variance: float = DEFAULT_MIN_VARIANCE,
    max_variance: float = DEFAULT_MAX_VARIANCE,
    rng: Optional[random.Random] = None,
) -> List[SeriesPoint]:
    """Generate a synthetic series with a one-off synthesizer."""
    return SeriesSynthesizer(rng=rng).synthesize(
        archetype, current_value, hours, min_variance, max_variance
    )
