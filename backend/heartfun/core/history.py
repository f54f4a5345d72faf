from collections import deque
from dataclasses import dataclass
from datetime import datetime
import threading

from heartfun.core.constants import DEFAULT_HISTORY_CAPACITY
from heartfun.core.decoder import HeartRateSample


@dataclass(frozen=True)
class TimestampedSample:
    timestamp: datetime
    rate: int
    intervals: tuple[float, ...] = ()


class SampleHistory:
    """Bounded, time-ordered buffer of samples.

    Appends always go to the end; once `capacity` entries are held, each
    append evicts the single oldest entry (FIFO). Access is serialized so a
    reader never sees a half-applied append or clear.
    """

    def __init__(self, capacity: int = DEFAULT_HISTORY_CAPACITY):
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        # deque(maxlen) drops from the left in O(1) when full
        self._items: deque[TimestampedSample] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def append(self, sample: HeartRateSample, at: datetime) -> TimestampedSample:
        entry = TimestampedSample(timestamp=at, rate=sample.rate, intervals=tuple(sample.intervals))
        with self._lock:
            self._items.append(entry)
        return entry

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def snapshot(self) -> tuple[TimestampedSample, ...]:
        """Point-in-time copy, oldest first."""
        with self._lock:
            return tuple(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
