from heartfun.core.config import settings
from heartfun.services.monitor import HeartRateMonitor

# One live session per process; frames arrive from a single sensor stream
monitor = HeartRateMonitor(
    capacity=settings.history_capacity,
    zones=settings.default_zones(),
    device_name=settings.device_name,
    tz_name=settings.timezone,
)


# Dependency we will use in FastAPI routes
def get_monitor() -> HeartRateMonitor:
    return monitor
