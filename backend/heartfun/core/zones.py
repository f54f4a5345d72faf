from dataclasses import dataclass

from heartfun.core.constants import ZONE_FRACTIONS


class ZoneConfigError(ValueError):
    """Base class for unusable zone bounds."""


class ZoneNotMonotonicError(ZoneConfigError):
    def __init__(self, low: int, mid: int, high: int):
        self.low = low
        self.mid = mid
        self.high = high
        super().__init__(f"Zone bounds must satisfy low < mid < high (got {low}, {mid}, {high})")


@dataclass(frozen=True)
class ZoneConfig:
    low: int
    mid: int
    high: int


def validate_zones(low: int, mid: int, high: int) -> ZoneConfig:
    """Return a ZoneConfig if low < mid < high, else raise ZoneNotMonotonicError.

    Equal bounds are invalid.
    """
    if not (low < mid < high):
        raise ZoneNotMonotonicError(low, mid, high)
    return ZoneConfig(low=low, mid=mid, high=high)


def zones_from_hr_max(hr_max: int) -> tuple[int, int, int]:
    """Default (low, mid, high) bounds as fractions of HR max.

    Example: hr_max=190 -> (95, 133, 171)
    """
    low, mid, high = (int(round(hr_max * f)) for f in ZONE_FRACTIONS)
    return low, mid, high
