"""Logging, metrics and tracing helpers for VerseTune.

Log records carry a JSON context suffix, request metrics live in
``prometheus_client`` collectors owned by :class:`ServiceMetrics`, and each
request runs inside an OpenTelemetry span.
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Sequence, Type

from opentelemetry import trace
from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram
from prometheus_client.metrics import MetricWrapperBase

_TRACER_NAME = "verse_tune"


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that appends bound and per-call context as JSON."""

    def bind(self, **context: Any) -> "StructuredLoggerAdapter":
        merged = dict(self.extra or {})
        merged.update(context)
        return StructuredLoggerAdapter(self.logger, merged)

    def process(self, msg: str, kwargs: Dict[str, Any]):
        context: Dict[str, Any] = dict(self.extra or {})
        extra_context = kwargs.pop("context", None)
        if isinstance(extra_context, dict):
            context.update(extra_context)
        if not context:
            return msg, kwargs
        try:
            rendered = json.dumps(context, sort_keys=True, default=str)
        except TypeError:
            # non-string keys that json cannot sort
            rendered = json.dumps({str(key): str(value) for key, value in context.items()})
        return f"{msg} | {rendered}", kwargs


def get_logger(name: str, **context: Any) -> StructuredLoggerAdapter:
    return StructuredLoggerAdapter(logging.getLogger(name), context)


def get_or_create_metric(
    metric_type: Type[MetricWrapperBase],
    name: str,
    documentation: str,
    label_names: Sequence[str] = (),
    *,
    registry: CollectorRegistry = REGISTRY,
) -> MetricWrapperBase:
    """Register a collector, or return the one already registered as ``name``.

    Several services in one process share the same metric names, and
    ``prometheus_client`` refuses duplicate registrations.
    """

    try:
        return metric_type(name, documentation, labelnames=tuple(label_names), registry=registry)
    except ValueError:
        # prometheus_client has no public lookup by name; counters are
        # registered both with and without their "_total" suffix.
        collectors = registry._names_to_collectors  # type: ignore[attr-defined]
        existing = collectors.get(name) or collectors.get(f"{name}_total")
        if existing is None:
            raise
        return existing


class ServiceMetrics:
    """Request counters and latency histogram, labelled by operation."""

    def __init__(
        self,
        prefix: str = "verse_tune",
        *,
        registry: CollectorRegistry = REGISTRY,
    ) -> None:
        self.registry = registry
        self.requests = get_or_create_metric(
            Counter,
            f"{prefix}_requests_total",
            "Analysis requests received, by operation.",
            ("operation",),
            registry=registry,
        )
        self.failures = get_or_create_metric(
            Counter,
            f"{prefix}_request_failures_total",
            "Analysis requests that raised an exception, by operation.",
            ("operation",),
            registry=registry,
        )
        self.duration = get_or_create_metric(
            Histogram,
            f"{prefix}_request_duration_seconds",
            "Time spent serving analysis requests, by operation.",
            ("operation",),
            registry=registry,
        )
        self.lines = get_or_create_metric(
            Counter,
            f"{prefix}_lines_analyzed_total",
            "Poem lines passed through rhyme scheme detection.",
            registry=registry,
        )

    def request_started(self, operation: str) -> None:
        self.requests.labels(operation=operation).inc()

    def request_failed(self, operation: str) -> None:
        self.failures.labels(operation=operation).inc()

    @contextmanager
    def timed(self, operation: str) -> Iterator[None]:
        """Observe the duration of the block, successful or not."""

        started = time.perf_counter()
        try:
            yield
        finally:
            self.duration.labels(operation=operation).observe(time.perf_counter() - started)

    def lines_analyzed(self, count: int) -> None:
        if count > 0:
            self.lines.inc(count)


@contextmanager
def start_span(name: str, attributes: Optional[Dict[str, Any]] = None):
    """Run the block inside an OpenTelemetry span named ``name``."""

    tracer = trace.get_tracer(_TRACER_NAME)
    with tracer.start_as_current_span(name) as span:
        if attributes:
            add_span_attributes(span, attributes)
        yield span


def add_span_attributes(span: Any, attributes: Dict[str, Any]) -> None:
    if span is None:
        return
    for key, value in attributes.items():
        if isinstance(value, (str, bool, int, float)):
            span.set_attribute(str(key), value)
        else:
            span.set_attribute(str(key), str(value))


def record_exception(span: Any, error: BaseException) -> None:
    if span is None:
        return
    span.record_exception(error)
    span.set_attribute("error", True)


__all__ = [
    "StructuredLoggerAdapter",
    "get_logger",
    "get_or_create_metric",
    "ServiceMetrics",
    "start_span",
    "add_span_attributes",
    "record_exception",
]
