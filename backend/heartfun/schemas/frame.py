from datetime import datetime

from pydantic import BaseModel, field_validator

_SEPARATORS = (" ", ":", "-", "\n", "\t")


def parse_hex_frame(value: str) -> bytes:
    """Example: '01 46 00:00 04' -> b'\\x01\\x46\\x00\\x00\\x04'"""
    cleaned = value
    for sep in _SEPARATORS:
        cleaned = cleaned.replace(sep, "")
    if cleaned.lower().startswith("0x"):
        cleaned = cleaned[2:]
    try:
        return bytes.fromhex(cleaned)
    except ValueError:
        raise ValueError("data must be a hex string, e.g. '0146000004'")


class FrameIn(BaseModel):
    """One raw measurement frame, hex encoded."""

    data: str

    @field_validator("data")
    @classmethod
    def _must_be_hex(cls, v: str) -> str:
        parse_hex_frame(v)
        return v

    def to_bytes(self) -> bytes:
        return parse_hex_frame(self.data)


class FrameBatchIn(BaseModel):
    frames: list[FrameIn]


class SampleRead(BaseModel):
    timestamp: datetime
    heart_rate: int
    rr_intervals_ms: list[float] = []


class IngestReportRead(BaseModel):
    accepted: int
    dropped: int
    errors: list[str] = []
