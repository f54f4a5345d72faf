"""Live session state: decode incoming frames, keep history, track zone edits.

The pure pieces live in heartfun.core; this is the one place that owns
mutable state and reads the clock.
"""

from dataclasses import dataclass
from datetime import datetime
import logging
import os
import threading
from typing import Callable, Iterable, Optional

from heartfun.core.analysis import ZoneOccupancy, rate_stats, zone_occupancy
from heartfun.core.decoder import DecodeError, decode_frame
from heartfun.core.export import export_csv, export_to_file
from heartfun.core.history import SampleHistory, TimestampedSample
from heartfun.core.time_utils import MonotonicClock, seconds_to_hhmmss
from heartfun.core.zones import ZoneConfig, ZoneConfigError, validate_zones

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ZoneState:
    """Last zone edit. `config` is None while the edit is invalid."""

    low: int
    mid: int
    high: int
    config: Optional[ZoneConfig] = None
    error: Optional[str] = None

    @property
    def valid(self) -> bool:
        return self.config is not None


@dataclass(frozen=True)
class IngestReport:
    accepted: int
    dropped: int
    errors: tuple[str, ...] = ()


@dataclass(frozen=True)
class SessionSummary:
    device_name: Optional[str]
    samples: int
    capacity: int
    latest_hr: Optional[int]
    avg_hr: Optional[int]
    max_hr: Optional[int]
    frames_accepted: int
    frames_dropped: int
    elapsed: str  # 'HH:MM:SS' between first and last retained sample


def build_zone_state(low: int, mid: int, high: int) -> ZoneState:
    try:
        config = validate_zones(low, mid, high)
    except ZoneConfigError as e:
        return ZoneState(low=low, mid=mid, high=high, error=str(e))
    return ZoneState(low=low, mid=mid, high=high, config=config)


class HeartRateMonitor:
    def __init__(
        self,
        capacity: int,
        zones: tuple[int, int, int],
        device_name: Optional[str] = None,
        clock: Optional[Callable[[], datetime]] = None,
        tz_name: Optional[str] = None,
    ):
        self.history = SampleHistory(capacity)
        self.device_name = device_name
        self.tz_name = tz_name
        self._clock = clock or MonotonicClock()
        self._zones = build_zone_state(*zones)
        self._frames_accepted = 0
        self._frames_dropped = 0
        # Frames arrive on one stream; serialize decode -> timestamp -> append
        self._ingest_lock = threading.Lock()

    # --- frames ---

    def ingest(self, frame: bytes) -> TimestampedSample:
        """Decode and append one frame. DecodeError propagates after counting the drop."""
        with self._ingest_lock:
            try:
                sample = decode_frame(frame)
            except DecodeError as e:
                self._frames_dropped += 1
                logger.warning("frame dropped reason=%r length=%d hex=%s", str(e), len(frame), bytes(frame).hex())
                raise
            entry = self.history.append(sample, self._clock())
            self._frames_accepted += 1
        return entry

    def ingest_many(self, frames: Iterable[bytes]) -> IngestReport:
        accepted = 0
        errors = []
        for frame in frames:
            try:
                self.ingest(frame)
            except DecodeError as e:
                errors.append(str(e))
                continue
            accepted += 1
        return IngestReport(accepted=accepted, dropped=len(errors), errors=tuple(errors))

    # --- zones ---

    @property
    def zones(self) -> ZoneState:
        return self._zones

    def set_zones(self, low: int, mid: int, high: int) -> ZoneState:
        """Store the edit and re-validate. Invalid bounds are kept, not raised."""
        state = build_zone_state(low, mid, high)
        self._zones = state
        if state.valid:
            logger.info("zones updated low=%d mid=%d high=%d", low, mid, high)
        else:
            logger.warning("zones invalid low=%d mid=%d high=%d", low, mid, high)
        return state

    def occupancy(self) -> Optional[ZoneOccupancy]:
        """None while the zone bounds are invalid."""
        state = self._zones
        if state.config is None:
            return None
        return zone_occupancy(self.history.snapshot(), state.config)

    # --- history ---

    def snapshot(self) -> tuple[TimestampedSample, ...]:
        return self.history.snapshot()

    def clear(self) -> None:
        with self._ingest_lock:
            self.history.clear()
            self._frames_accepted = 0
            self._frames_dropped = 0
        logger.info("history cleared")

    def summary(self) -> SessionSummary:
        samples = self.history.snapshot()
        stats = rate_stats(samples)
        elapsed = 0
        if len(samples) >= 2:
            elapsed = int((samples[-1].timestamp - samples[0].timestamp).total_seconds())
        return SessionSummary(
            device_name=self.device_name,
            samples=stats.count,
            capacity=self.history.capacity,
            latest_hr=stats.latest,
            avg_hr=stats.avg,
            max_hr=stats.max,
            frames_accepted=self._frames_accepted,
            frames_dropped=self._frames_dropped,
            elapsed=seconds_to_hhmmss(max(0, elapsed)),
        )

    # --- export ---

    def export_csv(self) -> str:
        return export_csv(self.history.snapshot(), self.tz_name)

    def export_to_file(self, directory: str, filename: Optional[str] = None) -> tuple[str, int]:
        """Write the CSV under `directory`. Returns (path, rows)."""
        if filename is None:
            filename = f"heart_rate_{self._clock().strftime('%Y%m%d_%H%M%S')}.csv"
        path = os.path.join(directory, filename)
        rows = export_to_file(path, self.history.snapshot(), self.tz_name)
        logger.info("history exported path=%s rows=%d", path, rows)
        return path, rows
