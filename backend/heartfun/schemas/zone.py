from typing import Optional

from pydantic import BaseModel


class ZoneBounds(BaseModel):
    low: int
    mid: int
    high: int


class ZoneStateRead(ZoneBounds):
    """Current bounds as last edited. `error` is set while they are invalid."""

    valid: bool
    error: Optional[str] = None


class ZoneOccupancyRead(BaseModel):
    """Percent of classified time per zone.

    `available` is False (and the percentages null) while the zone bounds are
    invalid. With too little data all three are 0.
    """

    available: bool
    low_pct: Optional[float] = None
    mid_pct: Optional[float] = None
    high_pct: Optional[float] = None
    detail: Optional[str] = None
