import logging

from prometheus_client import CollectorRegistry, Counter

from verse_tune.utils.observability import ServiceMetrics, get_logger, get_or_create_metric
from verse_tune.utils.telemetry import StructuredTelemetry, TelemetryLogger


def test_structured_telemetry_emits_logging_events(caplog):
    telemetry = StructuredTelemetry()
    listener = TelemetryLogger()
    telemetry.add_listener(listener)

    caplog.set_level(logging.INFO, logger="verse_tune.utils.telemetry")

    telemetry.start_trace("test-trace")
    with telemetry.timer("phase"):
        pass
    telemetry.increment("analysis.completed")
    telemetry.annotate("result.scheme", "AABB")

    messages = [record.message for record in caplog.records]
    assert any("Telemetry trace_started: test-trace" in message for message in messages)
    assert any("Telemetry timer_started: phase" in message for message in messages)
    assert any("Telemetry timing: phase" in message for message in messages)
    assert any("Telemetry counter: analysis.completed" in message for message in messages)
    assert any("Telemetry metadata: result.scheme" in message for message in messages)


def test_snapshot_and_listener_isolation():
    ticks = iter([0.0, 0.25])
    telemetry = StructuredTelemetry(time_fn=lambda: next(ticks))

    def broken_listener(event_type, payload):
        raise RuntimeError("listener failure")

    telemetry.add_listener(broken_listener)
    telemetry.start_trace("melody")
    with telemetry.timer("melody"):
        pass
    telemetry.increment("melody.completed")

    snapshot = telemetry.snapshot()
    assert snapshot["name"] == "melody"
    assert snapshot["timings"]["melody"]["total"] == 0.25
    assert snapshot["counters"] == {"melody.completed": 1.0}

    telemetry.remove_listener(broken_listener)
    telemetry.start_trace("next")
    assert telemetry.snapshot()["counters"] == {}


def test_structured_logger_renders_context(caplog):
    logger = get_logger("verse_tune.tests").bind(component="tests")
    caplog.set_level(logging.INFO, logger="verse_tune.tests")

    logger.info("Something happened", context={"lines": 4})

    assert caplog.records[-1].message == (
        'Something happened | {"component": "tests", "lines": 4}'
    )


def test_get_or_create_metric_reuses_registered_collector():
    registry = CollectorRegistry()

    def register():
        return get_or_create_metric(
            Counter, "demo_requests_total", "Demo.", ("operation",), registry=registry
        )

    first = register()
    second = register()

    assert first is second
    second.labels(operation="rhyme").inc(2)
    assert registry.get_sample_value("demo_requests_total", {"operation": "rhyme"}) == 2.0


def test_service_metrics_record_requests_failures_and_latency():
    registry = CollectorRegistry()
    metrics = ServiceMetrics("demo", registry=registry)

    metrics.request_started("analyze_rhymes")
    with metrics.timed("analyze_rhymes"):
        pass
    metrics.request_failed("analyze_rhymes")
    metrics.lines_analyzed(4)
    metrics.lines_analyzed(0)

    labels = {"operation": "analyze_rhymes"}
    assert registry.get_sample_value("demo_requests_total", labels) == 1.0
    assert registry.get_sample_value("demo_request_failures_total", labels) == 1.0
    assert registry.get_sample_value("demo_request_duration_seconds_count", labels) == 1.0
    assert registry.get_sample_value("demo_lines_analyzed_total") == 4.0
    assert ServiceMetrics("demo", registry=registry).requests is metrics.requests


def test_finished_traces_are_kept_in_bounded_history():
    telemetry = StructuredTelemetry(time_fn=lambda: 0.0, history_size=2)

    for name in ("first", "second", "third"):
        telemetry.start_trace(name)
        telemetry.record_timing(name, 0.5)
        telemetry.record_timing(name, 1.5)
        closed = telemetry.finish_trace()

    assert closed["timings"]["third"] == {
        "count": 2,
        "total": 2.0,
        "min": 0.5,
        "max": 1.5,
        "avg": 1.0,
    }
    assert [trace["name"] for trace in telemetry.history()] == ["second", "third"]
