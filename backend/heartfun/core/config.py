from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from heartfun.core.constants import DEFAULT_HISTORY_CAPACITY
from heartfun.core.zones import zones_from_hr_max


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Max samples kept in memory; oldest are evicted beyond this
    history_capacity: int = DEFAULT_HISTORY_CAPACITY
    # Shown in the session summary, e.g. "Polar H10 A1B2C3D4"
    device_name: str | None = None

    exports_dir: str = "exports"  # relative to backend working dir
    # Timezone for export timestamps.
    # Examples: "America/New_York", "UTC", or "local" to use system tz.
    timezone: str = "local"
    log_level: str = "INFO"

    # Heart rate settings
    age: int = 27
    hr_max: int | None = None  # if None, computed as 220 - age
    # Zone bounds (bpm). Any left unset falls back to fractions of HR max.
    zone_low: int | None = None
    zone_mid: int | None = None
    zone_high: int | None = None

    # Allow empty env strings for optional fields
    @field_validator("hr_max", "device_name", "zone_low", "zone_mid", "zone_high", mode="before")
    @classmethod
    def _empty_to_none(cls, v):
        if v in ("", None, "null", "None"):
            return None
        return v

    @field_validator("history_capacity")
    @classmethod
    def _positive_capacity(cls, v):
        if v < 1:
            raise ValueError("history_capacity must be >= 1")
        return v

    @property
    def effective_hr_max(self) -> int:
        return self.hr_max or (220 - self.age)

    def default_zones(self) -> tuple[int, int, int]:
        """Configured (low, mid, high), filling gaps from HR max fractions."""
        low, mid, high = zones_from_hr_max(self.effective_hr_max)
        return (
            self.zone_low if self.zone_low is not None else low,
            self.zone_mid if self.zone_mid is not None else mid,
            self.zone_high if self.zone_high is not None else high,
        )


settings = Settings()
