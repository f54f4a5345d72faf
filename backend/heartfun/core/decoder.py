"""Heart rate measurement frame decoding.

Frame layout:
  byte 0        flags; bit 0 set -> rate is uint16 LE, clear -> uint8
  bytes 1..     rate (1 or 2 bytes)
  remaining     beat-to-beat intervals, uint16 LE each, in 1/1024 s ticks

Any trailing byte that does not complete an interval is ignored.
"""

from dataclasses import dataclass

from heartfun.core.constants import INTERVAL_WIDTH, RATE_UINT16_FLAG, TICKS_PER_SECOND


class DecodeError(ValueError):
    """Base class for frames that cannot be decoded."""


class FrameTooShortError(DecodeError):
    """The frame lacks the bytes its flags declare for the rate field."""

    def __init__(self, length: int, required: int):
        self.length = length
        self.required = required
        super().__init__(f"Frame too short: {length} bytes, need {required}")


@dataclass(frozen=True)
class HeartRateSample:
    rate: int  # bpm
    intervals: tuple[float, ...] = ()  # milliseconds


def ticks_to_ms(ticks: int) -> float:
    """Convert 1/1024 s ticks -> milliseconds. Example: 1024 -> 1000.0"""
    return ticks / TICKS_PER_SECOND * 1000.0


def decode_frame(frame: bytes) -> HeartRateSample:
    """Decode one measurement frame into a HeartRateSample.

    Raises FrameTooShortError when the frame cannot hold the flag-indicated
    rate width (2 bytes for a uint8 rate, 3 for a uint16 rate).
    """
    data = bytes(frame)
    if not data:
        raise FrameTooShortError(0, 2)

    wide = (data[0] & RATE_UINT16_FLAG) != 0
    offset = 3 if wide else 2
    if len(data) < offset:
        raise FrameTooShortError(len(data), offset)

    if wide:
        rate = int.from_bytes(data[1:3], "little")
    else:
        rate = data[1]

    intervals = []
    while offset + INTERVAL_WIDTH <= len(data):
        ticks = int.from_bytes(data[offset:offset + INTERVAL_WIDTH], "little")
        intervals.append(ticks_to_ms(ticks))
        offset += INTERVAL_WIDTH

    return HeartRateSample(rate=rate, intervals=tuple(intervals))
