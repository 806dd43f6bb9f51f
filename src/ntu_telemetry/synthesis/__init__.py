"""Synthetic historical series for telemetry charts."""

from ntu_telemetry.synthesis.generators import SeriesSynthesizer, synthesize

__all__ = ["SeriesSynthesizer", "synthesize"]
