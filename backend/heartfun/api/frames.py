from fastapi import APIRouter, Depends, HTTPException

from heartfun.core.decoder import DecodeError
from heartfun.schemas.frame import FrameBatchIn, FrameIn, IngestReportRead, SampleRead
from heartfun.services.monitor import HeartRateMonitor
from heartfun.state import get_monitor

router = APIRouter(prefix="/frames", tags=["frames"])


@router.post("/", response_model=SampleRead)
def ingest_frame(payload: FrameIn, monitor: HeartRateMonitor = Depends(get_monitor)):
    """Decode one frame and append it to the history.

    Malformed frames are dropped (422); the session keeps going.
    """
    try:
        entry = monitor.ingest(payload.to_bytes())
    except DecodeError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return SampleRead(
        timestamp=entry.timestamp,
        heart_rate=entry.rate,
        rr_intervals_ms=list(entry.intervals),
    )


@router.post("/batch", response_model=IngestReportRead)
def ingest_frames(payload: FrameBatchIn, monitor: HeartRateMonitor = Depends(get_monitor)):
    report = monitor.ingest_many(f.to_bytes() for f in payload.frames)
    return IngestReportRead(
        accepted=report.accepted,
        dropped=report.dropped,
        errors=list(report.errors),
    )
