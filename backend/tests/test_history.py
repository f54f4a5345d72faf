from datetime import datetime, timedelta, timezone
import threading

import pytest

from heartfun.core.decoder import HeartRateSample
from heartfun.core.history import SampleHistory

T0 = datetime(2025, 1, 1, 7, 0, 0, tzinfo=timezone.utc)


def test_append_and_snapshot_in_order():
    h = SampleHistory(capacity=10)
    for i in range(3):
        h.append(HeartRateSample(rate=60 + i, intervals=(1000.0,)), T0 + timedelta(seconds=i))
    snap = h.snapshot()
    assert [s.rate for s in snap] == [60, 61, 62]
    assert [s.timestamp for s in snap] == [T0, T0 + timedelta(seconds=1), T0 + timedelta(seconds=2)]
    assert snap[0].intervals == (1000.0,)


def test_eviction_keeps_most_recent_fifo():
    capacity = 5
    h = SampleHistory(capacity=capacity)
    for i in range(12):
        h.append(HeartRateSample(rate=i), T0 + timedelta(seconds=i))
        assert len(h) == min(i + 1, capacity)
    assert [s.rate for s in h.snapshot()] == [7, 8, 9, 10, 11]


def test_capacity_one():
    h = SampleHistory(capacity=1)
    h.append(HeartRateSample(rate=70), T0)
    h.append(HeartRateSample(rate=71), T0 + timedelta(seconds=1))
    assert [s.rate for s in h.snapshot()] == [71]


def test_snapshot_is_point_in_time():
    h = SampleHistory(capacity=3)
    h.append(HeartRateSample(rate=70), T0)
    snap = h.snapshot()
    h.append(HeartRateSample(rate=71), T0 + timedelta(seconds=1))
    h.clear()
    assert [s.rate for s in snap] == [70]
    assert isinstance(snap, tuple)


def test_clear():
    h = SampleHistory(capacity=3)
    h.clear()
    h.append(HeartRateSample(rate=70), T0)
    h.clear()
    assert len(h) == 0
    assert h.snapshot() == ()


def test_invalid_capacity():
    with pytest.raises(ValueError):
        SampleHistory(capacity=0)


def test_concurrent_appends_respect_capacity():
    h = SampleHistory(capacity=100)

    def produce(base):
        for i in range(500):
            h.append(HeartRateSample(rate=base), T0 + timedelta(milliseconds=i))

    threads = [threading.Thread(target=produce, args=(b,)) for b in (60, 120)]
    for t in threads:
        t.start()
    for _ in range(50):
        assert len(h.snapshot()) <= 100
    for t in threads:
        t.join()
    assert len(h) == 100
