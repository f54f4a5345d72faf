"""Flat text export of a history snapshot.

    timestamp,heart_rate,rr_intervals_ms
    2025-01-01T07:00:00+00:00,72,750.00|812.50
    2025-01-01T07:00:01+00:00,73,
"""

import csv
import io
import os
from typing import Iterable, TextIO

from heartfun.core.constants import EXPORT_HEADER, INTERVAL_SEPARATOR
from heartfun.core.history import TimestampedSample
from heartfun.core.time_utils import format_timestamp


def format_intervals(intervals: Iterable[float]) -> str:
    """Example: (750.0, 812.5) -> '750.00|812.50'; () -> ''"""
    return INTERVAL_SEPARATOR.join(f"{ms:.2f}" for ms in intervals)


def export_row(sample: TimestampedSample, tz_name: str | None = None) -> list[str]:
    return [
        format_timestamp(sample.timestamp, tz_name),
        str(int(sample.rate)),
        format_intervals(sample.intervals),
    ]


def write_csv(out: TextIO, samples: Iterable[TimestampedSample], tz_name: str | None = None) -> int:
    """Write header + one row per sample. Returns the number of rows written."""
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)
    rows = 0
    for sample in samples:
        writer.writerow(export_row(sample, tz_name))
        rows += 1
    return rows


def export_csv(samples: Iterable[TimestampedSample], tz_name: str | None = None) -> str:
    buf = io.StringIO()
    write_csv(buf, samples, tz_name)
    return buf.getvalue()


def export_to_file(path: str, samples: Iterable[TimestampedSample], tz_name: str | None = None) -> int:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", newline="") as file:
        return write_csv(file, samples, tz_name)
