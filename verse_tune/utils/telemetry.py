"""Per-request telemetry for the analysis service.

Each service call opens a trace, records how long its stages took and what
they produced, then closes it. Closed traces are kept in a short history so
a caller can inspect the last few requests without a metrics backend.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from contextlib import contextmanager
from copy import deepcopy
from typing import Any, Callable, Deque, Dict, Iterable, Iterator, List, Optional

from .observability import get_logger

TelemetryListener = Callable[[str, Dict[str, Any]], None]


def _summarize(durations: List[float]) -> Dict[str, float]:
    total = sum(durations)
    return {
        "count": len(durations),
        "total": total,
        "min": min(durations),
        "max": max(durations),
        "avg": total / len(durations),
    }


class StructuredTelemetry:
    """Collects stage timings, counters and metadata for one trace at a time."""

    def __init__(
        self,
        time_fn: Optional[Callable[[], float]] = None,
        *,
        listeners: Optional[Iterable[TelemetryListener]] = None,
        history_size: int = 32,
    ) -> None:
        self._clock = time_fn or time.perf_counter
        self._lock = threading.RLock()
        self._listeners: List[TelemetryListener] = list(listeners or [])
        self._history: Deque[Dict[str, Any]] = deque(maxlen=max(1, int(history_size)))
        self._trace_id = 0
        self._trace_name: Optional[str] = None
        self._durations: Dict[str, List[float]] = {}
        self._counters: Dict[str, float] = {}
        self._metadata: Dict[str, Any] = {}

    def _emit(self, event_type: str, payload: Dict[str, Any]) -> None:
        with self._lock:
            listeners = tuple(self._listeners)
        for listener in listeners:
            try:
                listener(event_type, dict(payload))
            except Exception:
                continue

    def now(self) -> float:
        return float(self._clock())

    # Trace lifecycle ---------------------------------------------------------
    def start_trace(self, name: str) -> int:
        """Discard the current trace state and open a new trace."""

        with self._lock:
            self._trace_id += 1
            self._trace_name = name
            self._durations = {}
            self._counters = {}
            self._metadata = {"trace_name": name}
            trace_id = self._trace_id

        self._emit("trace_started", {"trace_id": trace_id, "name": name})
        return trace_id

    def finish_trace(self) -> Dict[str, Any]:
        """Close the current trace, append it to the history and return it."""

        snapshot = self.snapshot()
        with self._lock:
            self._history.append(snapshot)
        self._emit("trace_finished", {"trace_id": snapshot["trace_id"], "name": snapshot["name"]})
        return deepcopy(snapshot)

    def history(self) -> List[Dict[str, Any]]:
        """Closed traces, oldest first."""

        with self._lock:
            return deepcopy(list(self._history))

    # Measurements ------------------------------------------------------------
    def record_timing(self, name: str, duration: float) -> None:
        duration = max(0.0, float(duration))
        with self._lock:
            self._durations.setdefault(name, []).append(duration)
        self._emit("timing", {"name": name, "duration": duration})

    @contextmanager
    def timer(self, name: str) -> Iterator[None]:
        """Time the enclosed block as stage ``name``, even when it raises."""

        started = self.now()
        self._emit("timer_started", {"name": name})
        try:
            yield
        finally:
            self.record_timing(name, self.now() - started)

    def increment(self, name: str, amount: float = 1.0) -> None:
        delta = float(amount)
        with self._lock:
            value = self._counters.get(name, 0.0) + delta
            self._counters[name] = value
        self._emit("counter", {"name": name, "delta": delta, "value": value})

    def annotate(self, key: str, value: Any) -> None:
        with self._lock:
            self._metadata[key] = value
        self._emit("metadata", {"key": key, "value": value})

    def snapshot(self) -> Dict[str, Any]:
        """Copy of the open trace: timings are summarised per stage."""

        with self._lock:
            return deepcopy(
                {
                    "trace_id": self._trace_id,
                    "name": self._trace_name,
                    "timings": {
                        name: _summarize(values)
                        for name, values in self._durations.items()
                    },
                    "counters": self._counters,
                    "metadata": self._metadata,
                }
            )

    # Listeners ---------------------------------------------------------------
    def add_listener(self, listener: TelemetryListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: TelemetryListener) -> None:
        with self._lock:
            self._listeners = [entry for entry in self._listeners if entry is not listener]


class TelemetryLogger:
    """Listener that writes every telemetry event to the project log."""

    def __init__(
        self,
        *,
        logger: Optional[logging.LoggerAdapter] = None,
        level: int = logging.INFO,
        level_map: Optional[Dict[str, int]] = None,
    ) -> None:
        self._logger = logger or get_logger(__name__).bind(component="telemetry")
        self._level = level
        self._level_map = dict(level_map or {})

    def __call__(self, event_type: str, payload: Dict[str, Any]) -> None:
        level = self._level_map.get(event_type, self._level)
        if not self._logger.isEnabledFor(level):
            return

        subject = payload.get("name") or payload.get("key") or payload.get("trace_id") or "event"
        context = {"telemetry.event": event_type, **{str(k): v for k, v in payload.items()}}
        self._logger.log(level, f"Telemetry {event_type}: {subject}", context=context)


__all__ = ["StructuredTelemetry", "TelemetryLogger", "TelemetryListener"]
