import pytest
from pydantic import ValidationError

from heartfun.core.config import Settings
from heartfun.core.zones import (
    ZoneConfig,
    ZoneConfigError,
    ZoneNotMonotonicError,
    validate_zones,
    zones_from_hr_max,
)


def test_validate_ok():
    assert validate_zones(100, 150, 180) == ZoneConfig(low=100, mid=150, high=180)


@pytest.mark.parametrize(
    "bounds",
    [(150, 150, 180), (180, 150, 100), (100, 180, 180), (100, 190, 180)],
)
def test_validate_not_monotonic(bounds):
    with pytest.raises(ZoneNotMonotonicError) as exc:
        validate_zones(*bounds)
    assert (exc.value.low, exc.value.mid, exc.value.high) == bounds
    assert isinstance(exc.value, ZoneConfigError)


def test_zones_from_hr_max():
    assert zones_from_hr_max(190) == (95, 133, 171)


def test_settings_default_zones_from_age():
    s = Settings(age=30, hr_max=None, zone_low=None, zone_mid=None, zone_high=None)
    assert s.effective_hr_max == 190
    assert s.default_zones() == (95, 133, 171)


def test_settings_explicit_zones_win():
    s = Settings(hr_max=200, zone_low=100, zone_mid=150, zone_high=None)
    assert s.default_zones() == (100, 150, 180)


def test_settings_empty_strings_are_none():
    s = Settings(hr_max="", device_name="", zone_low="None")
    assert s.hr_max is None
    assert s.device_name is None
    assert s.zone_low is None


def test_settings_rejects_zero_capacity():
    with pytest.raises(ValidationError):
        Settings(history_capacity=0)
