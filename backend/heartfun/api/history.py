from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from heartfun.core.config import settings
from heartfun.schemas.frame import SampleRead
from heartfun.schemas.history import ExportResult, SessionSummaryRead
from heartfun.services.monitor import HeartRateMonitor
from heartfun.state import get_monitor

router = APIRouter(prefix="/history", tags=["history"])


@router.get("/", response_model=list[SampleRead])
def list_samples(
    limit: Optional[int] = Query(None, ge=1),
    monitor: HeartRateMonitor = Depends(get_monitor),
):
    """
    Samples oldest -> newest. With `limit`, only the most recent `limit`.

      GET /history?limit=60
    """
    samples = monitor.snapshot()
    if limit is not None:
        samples = samples[-limit:]

    return [
        SampleRead(
            timestamp=s.timestamp,
            heart_rate=s.rate,
            rr_intervals_ms=list(s.intervals),
        )
        for s in samples
    ]


@router.delete("/")
def clear_history(monitor: HeartRateMonitor = Depends(get_monitor)):
    monitor.clear()
    return {"message": "History cleared"}


@router.get("/summary", response_model=SessionSummaryRead)
def get_summary(monitor: HeartRateMonitor = Depends(get_monitor)):
    s = monitor.summary()
    return SessionSummaryRead(
        device_name=s.device_name,
        samples=s.samples,
        capacity=s.capacity,
        latest_hr=s.latest_hr,
        avg_hr=s.avg_hr,
        max_hr=s.max_hr,
        frames_accepted=s.frames_accepted,
        frames_dropped=s.frames_dropped,
        elapsed=s.elapsed,
    )


@router.get("/export")
def download_export(monitor: HeartRateMonitor = Depends(get_monitor)):
    return Response(
        content=monitor.export_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="heart_rate.csv"'},
    )


@router.post("/export", response_model=ExportResult)
def save_export(monitor: HeartRateMonitor = Depends(get_monitor)):
    path, rows = monitor.export_to_file(settings.exports_dir)
    return ExportResult(message="History exported", path=path, rows=rows)
