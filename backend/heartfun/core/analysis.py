"""Zone occupancy and summary statistics over a history snapshot."""

from dataclasses import dataclass
from typing import Optional, Sequence

from heartfun.core.history import TimestampedSample
from heartfun.core.zones import ZoneConfig


@dataclass(frozen=True)
class ZoneOccupancy:
    low: float = 0.0
    mid: float = 0.0
    high: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.low == 0.0 and self.mid == 0.0 and self.high == 0.0


EMPTY_OCCUPANCY = ZoneOccupancy()


def zone_times(samples: Sequence[TimestampedSample], config: ZoneConfig) -> tuple[float, float, float]:
    """Seconds credited to (low, mid, high).

    Each gap between consecutive samples is credited to the zone of the
    earlier sample. Time starting below `low` is dropped.
    """
    times = [0.0, 0.0, 0.0]
    for i in range(1, len(samples)):
        prev_s, s = samples[i - 1], samples[i]
        dt = max(0.0, (s.timestamp - prev_s.timestamp).total_seconds())
        hr_val = prev_s.rate
        if hr_val < config.low:
            continue
        if hr_val < config.mid:
            times[0] += dt
        elif hr_val < config.high:
            times[1] += dt
        else:
            times[2] += dt
    return times[0], times[1], times[2]


def zone_occupancy(samples: Sequence[TimestampedSample], config: ZoneConfig) -> ZoneOccupancy:
    """Percent of classified time spent in each zone.

    Returns EMPTY_OCCUPANCY (all zeros) with fewer than two samples or when no
    time was classified.
    """
    if len(samples) < 2:
        return EMPTY_OCCUPANCY
    low_t, mid_t, high_t = zone_times(samples, config)
    total = low_t + mid_t + high_t
    if total <= 0:
        return EMPTY_OCCUPANCY
    return ZoneOccupancy(
        low=low_t / total * 100.0,
        mid=mid_t / total * 100.0,
        high=high_t / total * 100.0,
    )


@dataclass(frozen=True)
class RateStats:
    count: int
    latest: Optional[int] = None
    avg: Optional[int] = None
    max: Optional[int] = None


def rate_stats(samples: Sequence[TimestampedSample]) -> RateStats:
    if not samples:
        return RateStats(count=0)
    rates = [s.rate for s in samples]
    return RateStats(
        count=len(rates),
        latest=rates[-1],
        avg=int(sum(rates) / len(rates)),
        max=max(rates),
    )
