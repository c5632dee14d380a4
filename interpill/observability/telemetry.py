"""
Lightweight telemetry helpers for the gateway.

Nothing is shipped to an external metrics backend; events go to the log and
counters/latencies stay in memory so tests can assert instrumentation.

Handlers run on threadpool workers, so every update happens under ``_LOCK``.
Each latency series keeps only the most recent ``LATENCY_WINDOW`` samples.
"""

from __future__ import annotations

import contextlib
import logging
import threading
import time
from collections import deque
from collections.abc import Iterator
from typing import Any

logger = logging.getLogger("interpill.telemetry")

LATENCY_WINDOW = 256

_LOCK = threading.Lock()
_COUNTERS: dict[str, int] = {}
_LATENCIES: dict[str, deque[float]] = {}


def _latency_name(metric_name: str) -> str:
    return metric_name if metric_name.endswith("_ms") else f"{metric_name}_ms"


def log_event(event_name: str, **fields: Any) -> None:
    """
    Structured log event. Callers pass redacted values only (never raw
    sender addresses, prompts or provider keys).
    """
    logger.info("event=%s %s", event_name, fields)


def counter(name: str, increment: int = 1) -> int:
    """Increment an in-memory counter and return its new value."""
    with _LOCK:
        value = _COUNTERS.get(name, 0) + increment
        _COUNTERS[name] = value
    logger.debug("counter=%s value=%s", name, value)
    return value


def get_counter(name: str) -> int:
    with _LOCK:
        return _COUNTERS.get(name, 0)


@contextlib.contextmanager
def time_block(metric_name: str) -> Iterator[None]:
    """
    Time the wrapped block and record the latency under ``<metric_name>_ms``.

    The block's exceptions propagate unchanged; latency is recorded either way.
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        name = _latency_name(metric_name)
        logger.debug("timing=%s ms=%.2f", name, elapsed_ms)
        with _LOCK:
            series = _LATENCIES.get(name)
            if series is None:
                series = _LATENCIES[name] = deque(maxlen=LATENCY_WINDOW)
            series.append(elapsed_ms)


def get_latencies(metric_name: str) -> list[float]:
    """Recorded samples for ``metric_name``, oldest first."""
    with _LOCK:
        return list(_LATENCIES.get(_latency_name(metric_name), ()))


def reset_telemetry() -> None:
    """Clear counters and latencies (used by tests)."""
    with _LOCK:
        _COUNTERS.clear()
        _LATENCIES.clear()
