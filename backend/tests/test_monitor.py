from datetime import datetime, timedelta, timezone
import logging

import pytest

from heartfun.core.decoder import FrameTooShortError
from heartfun.services.monitor import HeartRateMonitor

T0 = datetime(2025, 1, 1, 7, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, step_s: float = 10.0):
        self.t = T0
        self.step = timedelta(seconds=step_s)

    def __call__(self) -> datetime:
        now = self.t
        self.t += self.step
        return now


def make_monitor(capacity: int = 100, zones=(100, 150, 180), step_s: float = 10.0) -> HeartRateMonitor:
    return HeartRateMonitor(
        capacity=capacity,
        zones=zones,
        device_name="Polar H10 TEST",
        clock=FakeClock(step_s),
        tz_name="UTC",
    )


def test_ingest_timestamps_and_appends():
    m = make_monitor()
    entry = m.ingest(bytes([0x01, 0x46, 0x00, 0x00, 0x04]))
    assert entry.rate == 70
    assert entry.intervals == (1000.0,)
    assert entry.timestamp == T0
    assert m.snapshot() == (entry,)


def test_bad_frame_dropped_and_collection_continues(caplog):
    m = make_monitor()
    with caplog.at_level(logging.WARNING, logger="heartfun"):
        with pytest.raises(FrameTooShortError):
            m.ingest(bytes([0x01, 0x46]))
    assert "frame dropped" in caplog.text
    m.ingest(bytes([0x00, 80]))
    s = m.summary()
    assert (s.frames_accepted, s.frames_dropped, s.samples) == (1, 1, 1)


def test_ingest_many_counts():
    m = make_monitor()
    report = m.ingest_many([bytes([0x00, 90]), b"", bytes([0x00, 160]), bytes([0x01]), bytes([0x00, 190])])
    assert (report.accepted, report.dropped) == (3, 2)
    assert len(report.errors) == 2
    assert [s.rate for s in m.snapshot()] == [90, 160, 190]


def test_occupancy_end_to_end():
    m = make_monitor()
    m.ingest_many([bytes([0x00, 90]), bytes([0x00, 160]), bytes([0x00, 190])])
    occ = m.occupancy()
    assert (occ.low, occ.mid, occ.high) == (0.0, 100.0, 0.0)


def test_invalid_zones_suppress_occupancy_not_collection():
    m = make_monitor()
    state = m.set_zones(150, 150, 180)
    assert not state.valid
    assert state.config is None
    assert "low < mid < high" in state.error
    assert m.occupancy() is None

    m.ingest(bytes([0x00, 120]))
    m.ingest(bytes([0x00, 130]))
    assert len(m.snapshot()) == 2

    state = m.set_zones(100, 150, 180)
    assert state.valid
    assert m.zones.error is None
    assert m.occupancy().low == 100.0


def test_eviction_through_monitor():
    m = make_monitor(capacity=3)
    for hr in (60, 70, 80, 90, 100):
        m.ingest(bytes([0x00, hr]))
    assert [s.rate for s in m.snapshot()] == [80, 90, 100]
    assert m.summary().capacity == 3


def test_summary():
    m = make_monitor()
    assert m.summary().latest_hr is None
    for hr in (100, 150, 131):
        m.ingest(bytes([0x00, hr]))
    s = m.summary()
    assert s.device_name == "Polar H10 TEST"
    assert (s.latest_hr, s.avg_hr, s.max_hr) == (131, 127, 150)
    assert s.elapsed == "00:00:20"


def test_clear_resets_history_and_counters():
    m = make_monitor()
    m.ingest_many([bytes([0x00, 90]), b""])
    m.clear()
    s = m.summary()
    assert (s.samples, s.frames_accepted, s.frames_dropped) == (0, 0, 0)
    assert m.occupancy().is_empty


def test_export(tmp_path):
    m = make_monitor(step_s=1.0)
    m.ingest(bytes([0x00, 72]) + (768).to_bytes(2, "little") + (832).to_bytes(2, "little"))
    m.ingest(bytes([0x00, 73]))
    expected = (
        "timestamp,heart_rate,rr_intervals_ms\n"
        "2025-01-01T07:00:00+00:00,72,750.00|812.50\n"
        "2025-01-01T07:00:01+00:00,73,\n"
    )
    assert m.export_csv() == expected

    path, rows = m.export_to_file(str(tmp_path), "session.csv")
    assert rows == 2
    with open(path) as f:
        assert f.read() == expected
