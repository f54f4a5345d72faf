from fastapi import APIRouter, Depends

from heartfun.schemas.zone import ZoneBounds, ZoneOccupancyRead, ZoneStateRead
from heartfun.services.monitor import HeartRateMonitor, ZoneState
from heartfun.state import get_monitor

router = APIRouter(prefix="/zones", tags=["zones"])


def _state_read(state: ZoneState) -> ZoneStateRead:
    return ZoneStateRead(
        low=state.low,
        mid=state.mid,
        high=state.high,
        valid=state.valid,
        error=state.error,
    )


@router.get("/", response_model=ZoneStateRead)
def get_zones(monitor: HeartRateMonitor = Depends(get_monitor)):
    return _state_read(monitor.zones)


@router.put("/", response_model=ZoneStateRead)
def update_zones(payload: ZoneBounds, monitor: HeartRateMonitor = Depends(get_monitor)):
    # Invalid bounds are stored too; they only switch off occupancy
    state = monitor.set_zones(payload.low, payload.mid, payload.high)
    return _state_read(state)


@router.get("/occupancy", response_model=ZoneOccupancyRead)
def get_occupancy(monitor: HeartRateMonitor = Depends(get_monitor)):
    occ = monitor.occupancy()
    if occ is None:
        return ZoneOccupancyRead(available=False, detail=monitor.zones.error)

    return ZoneOccupancyRead(
        available=True,
        low_pct=round(occ.low, 2),
        mid_pct=round(occ.mid, 2),
        high_pct=round(occ.high, 2),
        detail="Not enough data yet" if occ.is_empty else None,
    )
