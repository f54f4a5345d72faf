from datetime import datetime, timedelta, timezone
import os
import random

from heartfun.core.config import settings
from heartfun.core.decoder import DecodeError
from heartfun.services.monitor import HeartRateMonitor


def build_frame(hr: int, rr_ms: list[float]) -> bytes:
    """Encode a measurement frame (uint16 rate when hr > 255)."""
    wide = hr > 255
    frame = bytearray([0x01 if wide else 0x00])
    frame += hr.to_bytes(2 if wide else 1, "little")
    for ms in rr_ms:
        frame += int(round(ms * 1024 / 1000)).to_bytes(2, "little")
    return bytes(frame)


class StepClock:
    """Fake clock advancing one second per reading."""

    def __init__(self, start: datetime):
        self.t = start - timedelta(seconds=1)

    def __call__(self) -> datetime:
        self.t += timedelta(seconds=1)
        return self.t


def demo_rates(minutes: int = 30) -> list[int]:
    """Warm-up, a steady block, two hard efforts, cool-down. One value per second."""
    rates = []
    plan = [
        (0.15, 95, 130),   # warm-up ramp
        (0.35, 140, 145),  # steady
        (0.15, 150, 182),  # effort
        (0.10, 150, 140),  # recover
        (0.10, 155, 185),  # effort
        (0.15, 130, 90),   # cool-down
    ]
    total = minutes * 60
    for frac, start_hr, end_hr in plan:
        n = int(total * frac)
        for i in range(n):
            base = start_hr + (end_hr - start_hr) * i / max(1, n - 1)
            rates.append(int(round(base + random.uniform(-2, 2))))
    return rates


def seed_demo_session(monitor: HeartRateMonitor, minutes: int = 30) -> None:
    for hr in demo_rates(minutes):
        rr = [60000.0 / hr]
        monitor.ingest(build_frame(hr, rr))
    # One malformed frame, as a flaky link would deliver. The monitor logs and counts it.
    try:
        monitor.ingest(b"\x01\x50")
    except DecodeError:
        return


def main() -> None:
    start = datetime.now(timezone.utc).replace(microsecond=0)
    monitor = HeartRateMonitor(
        capacity=settings.history_capacity,
        zones=settings.default_zones(),
        device_name=settings.device_name or "demo",
        clock=StepClock(start),
        tz_name=settings.timezone,
    )
    seed_demo_session(monitor)
    os.makedirs(settings.exports_dir, exist_ok=True)
    path, rows = monitor.export_to_file(settings.exports_dir, "demo_session.csv")

    occ = monitor.occupancy()
    summary = monitor.summary()
    print(f"Seeded {rows} samples ({summary.frames_dropped} dropped) -> {path}")
    if occ is not None:
        print(f"Zones: low {occ.low:.1f}%  mid {occ.mid:.1f}%  high {occ.high:.1f}%")


if __name__ == "__main__":
    main()
