#!/usr/bin/env python3
"""
Replay synthetic heart rate frames into a running heart-fun API.

Each tick posts one measurement frame (hex encoded) to /frames/, the way a
sensor bridge would. Rates follow a simple interval workout:
  - warm-up ramp, work/rest repeats, cool-down
Every Nth frame can be truncated to exercise the drop path.

Usage examples:
  - Against a local backend:
      python scripts/replay_frames.py --base-url http://localhost:8000
  - Faster than real time, with zones set first:
      python scripts/replay_frames.py --base-url http://localhost:8000 \\
          --interval 0.05 --zones 100 150 180
"""

from __future__ import annotations

import argparse
import sys
import time
from typing import Iterator, List

import httpx


def build_frame(hr: int, rr_ms: List[float]) -> bytes:
    wide = hr > 255
    frame = bytearray([0x01 if wide else 0x00])
    frame += hr.to_bytes(2 if wide else 1, "little")
    for ms in rr_ms:
        frame += int(round(ms * 1024 / 1000)).to_bytes(2, "little")
    return bytes(frame)


def workout_rates(repeats: int, work_s: int, rest_s: int) -> Iterator[int]:
    for i in range(60):
        yield 90 + i  # warm-up to ~150
    for _ in range(repeats):
        for i in range(work_s):
            yield min(185, 150 + i)
        for i in range(rest_s):
            yield max(130, 170 - i)
    for i in range(60):
        yield max(85, 140 - i)


def request(client: httpx.Client, method: str, path: str, payload: dict | None = None) -> dict:
    r = client.request(method, path, json=payload)
    if r.status_code >= 300:
        raise RuntimeError(f"{path} -> HTTP {r.status_code}: {r.text}")
    return r.json()


def main() -> None:
    ap = argparse.ArgumentParser(description="Replay synthetic heart rate frames")
    ap.add_argument("--base-url", required=True, help="API base URL (e.g., http://localhost:8000)")
    ap.add_argument("--interval", type=float, default=1.0, help="Seconds between frames (default 1.0)")
    ap.add_argument("--repeats", type=int, default=5, help="Work/rest repeats (default 5)")
    ap.add_argument("--bad-every", type=int, default=0, help="Truncate every Nth frame (0 = never)")
    ap.add_argument("--zones", type=int, nargs=3, metavar=("LOW", "MID", "HIGH"), help="Set zone bounds first")
    ap.add_argument("--clear", action="store_true", help="Clear history before replaying")
    args = ap.parse_args()

    sent = dropped = 0
    with httpx.Client(base_url=args.base_url.rstrip("/"), timeout=15) as client:
        if args.clear:
            request(client, "DELETE", "/history/")
        if args.zones:
            low, mid, high = args.zones
            state = request(client, "PUT", "/zones/", {"low": low, "mid": mid, "high": high})
            if not state["valid"]:
                print(f"Zones rejected: {state['error']}", file=sys.stderr)

        for n, hr in enumerate(workout_rates(args.repeats, work_s=120, rest_s=60), start=1):
            frame = build_frame(hr, [60000.0 / hr])
            if args.bad_every and n % args.bad_every == 0:
                frame = frame[:1]
            r = client.post("/frames/", json={"data": frame.hex()})
            if r.status_code == 422:
                dropped += 1
            elif r.status_code >= 300:
                raise RuntimeError(f"/frames/ -> HTTP {r.status_code}: {r.text}")
            else:
                sent += 1
            time.sleep(args.interval)

        occ = request(client, "GET", "/zones/occupancy")

    print(f"Replay complete: {sent} frames accepted, {dropped} dropped.")
    if occ["available"]:
        print(f"Zones: low {occ['low_pct']}%  mid {occ['mid_pct']}%  high {occ['high_pct']}%")


if __name__ == "__main__":
    main()
