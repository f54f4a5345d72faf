"""Shared constants for frame decoding, history and export.

Keeps the sensor's wire constants and our defaults in one place so they are
documented and adjusted together.
"""

# Flags byte, bit 0: heart rate is a uint16 (little-endian) instead of a uint8
RATE_UINT16_FLAG = 0x01

# Beat-to-beat intervals are reported in 1/1024 second ticks
TICKS_PER_SECOND = 1024.0

# Each interval entry is a little-endian uint16
INTERVAL_WIDTH = 2

# Older builds kept 500 samples; a long session needs more headroom
DEFAULT_HISTORY_CAPACITY = 10000

# Default zone bounds as fractions of HR max when none are configured.
# low: [0.50, 0.70), mid: [0.70, 0.90), high: [0.90, ...)
ZONE_FRACTIONS = (0.5, 0.7, 0.9)

# Flat text export
EXPORT_HEADER = ("timestamp", "heart_rate", "rr_intervals_ms")
INTERVAL_SEPARATOR = "|"
