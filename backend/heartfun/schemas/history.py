from typing import Optional

from pydantic import BaseModel


class SessionSummaryRead(BaseModel):
    device_name: Optional[str] = None
    samples: int
    capacity: int
    latest_hr: Optional[int] = None
    avg_hr: Optional[int] = None
    max_hr: Optional[int] = None
    frames_accepted: int
    frames_dropped: int
    elapsed: str  # 'HH:MM:SS'


class ExportResult(BaseModel):
    message: str
    path: str
    rows: int
