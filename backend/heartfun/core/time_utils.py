from datetime import datetime, timedelta, timezone
import time


def seconds_to_hhmmss(total_seconds: int) -> str:
    """
    Convert total seconds (int) -> 'HH:MM:SS'.
    Example: 2732 -> '00:45:32'
    """
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def to_local_datetime(dt, tz_name: str | None = None):
    """Convert a datetime (assume UTC if naive) to local or given tz.

    - If `tz_name` is 'local' or None: use system local timezone.
    - If `tz_name` is 'UTC': use UTC without a tz database lookup.
    - If `tz_name` is IANA tz name (e.g., 'America/New_York'): use that.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    if not tz_name or tz_name == "local":
        return dt.astimezone()
    if tz_name.upper() == "UTC":
        return dt.astimezone(timezone.utc)
    from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
    try:
        return dt.astimezone(ZoneInfo(tz_name))
    except (ZoneInfoNotFoundError, ValueError):
        return dt.astimezone()


def format_timestamp(dt, tz_name: str | None = None) -> str:
    """ISO-8601 with offset. Example: '2025-01-01T07:00:00.250000+00:00'"""
    return to_local_datetime(dt, tz_name).isoformat()


class MonotonicClock:
    """Wall-clock datetimes that never go backwards.

    The wall time is read once; later readings advance it by time.monotonic(),
    so NTP steps or manual clock changes cannot reorder samples.
    """

    def __init__(self):
        self._anchor_wall = datetime.now(timezone.utc)
        self._anchor_mono = time.monotonic()

    def now(self) -> datetime:
        return self._anchor_wall + timedelta(seconds=time.monotonic() - self._anchor_mono)

    __call__ = now
