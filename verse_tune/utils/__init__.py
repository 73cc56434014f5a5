"""Utility helpers shared across the :mod:`verse_tune` package."""

from __future__ import annotations

from .logging_config import configure_logging
from .syllables import estimate_stress_pattern, estimate_syllable_count
from .telemetry import StructuredTelemetry, TelemetryLogger
from .observability import (
    StructuredLoggerAdapter,
    ServiceMetrics,
    add_span_attributes,
    get_logger,
    get_or_create_metric,
    record_exception,
    start_span,
)

__all__ = [
    "configure_logging",
    "estimate_syllable_count",
    "estimate_stress_pattern",
    "StructuredTelemetry",
    "TelemetryLogger",
    "StructuredLoggerAdapter",
    "ServiceMetrics",
    "add_span_attributes",
    "get_logger",
    "get_or_create_metric",
    "record_exception",
    "start_span",
]
