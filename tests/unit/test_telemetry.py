"""Unit tests for in-memory counters and latency recording"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from interpill.observability.telemetry import (
    LATENCY_WINDOW,
    counter,
    get_counter,
    get_latencies,
    time_block,
)


def test_counter_increments():
    assert counter("test.hits") == 1
    assert counter("test.hits", 2) == 3
    assert get_counter("test.hits") == 3
    assert get_counter("test.never") == 0


def test_concurrent_increments_are_not_lost():
    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda _: counter("test.concurrent"), range(2000)))

    assert get_counter("test.concurrent") == 2000


def test_latency_series_is_bounded():
    for _ in range(LATENCY_WINDOW + 50):
        with time_block("test.op"):
            pass

    samples = get_latencies("test.op")
    assert len(samples) == LATENCY_WINDOW
    assert get_latencies("test.op_ms") == samples


def test_latency_recorded_when_block_raises():
    with pytest.raises(RuntimeError):
        with time_block("test.failing"):
            raise RuntimeError("boom")

    assert len(get_latencies("test.failing")) == 1
