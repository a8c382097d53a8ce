# tests/test_meeus.py

import pytest
from unittest.mock import patch

from persiancal.core.time import CivilDateTime, MILLIS_PER_DAY, civil_to_millis
from persiancal.core.types import StrategyId
from persiancal.engines.meeus import MeeusParams, MeeusStrategy


@pytest.fixture
def as_():
    return MeeusStrategy(StrategyId("AS", "meeus"))


@pytest.fixture
def tehran():
    return MeeusStrategy(
        StrategyId("AS", "meeus"),
        MeeusParams(longitude_degrees=51, longitude_minutes=25, longitude_seconds=33),
    )


@pytest.mark.parametrize(
    "year,iso_date",
    [
        (1395, (2016, 3, 20)),
        (1396, (2017, 3, 21)),
        (1397, (2018, 3, 21)),
        (1399, (2020, 3, 20)),
        (1400, (2021, 3, 21)),
        (1403, (2024, 3, 20)),
        (1404, (2025, 3, 21)),
    ],
)
def test_known_new_years(as_, year, iso_date):
    assert as_.first_instant_of_year(year) == civil_to_millis(*iso_date)


def test_leap_years_from_new_year_gaps(as_):
    assert as_.is_leap_year(1395)
    assert not as_.is_leap_year(1396)
    assert as_.is_leap_year(1399)
    assert as_.is_leap_year(1403)


def test_year_lengths_are_plausible(as_):
    for y in range(as_.min_year, as_.max_year + 1, 13):
        days = (as_.first_instant_of_year(y + 1) - as_.first_instant_of_year(y)) // MILLIS_PER_DAY
        assert days in (365, 366), y


def test_new_year_stays_near_equinox(as_):
    for y in range(1000, 1800):
        d = (as_.first_instant_of_year(y) - civil_to_millis(y + 621, 3, 1)) // MILLIS_PER_DAY + 1
        assert 18 <= d <= 23, y


@pytest.fixture
def fake_equinox():
    with patch("persiancal.engines.meeus.vernal_equinox_utc") as mock:
        yield mock


def _set(mock, hour, minute, second, day=20):
    mock.return_value = CivilDateTime(2000, 3, day, hour, minute, second)


def test_before_noon_same_day(as_, fake_equinox):
    _set(fake_equinox, 8, 29, 30)       # 11:59:30 local, seconds not rounded up
    assert as_.new_year_march_day(2000) == 20


def test_second_rounding_carries_to_noon(as_, fake_equinox):
    _set(fake_equinox, 8, 29, 31)       # 11:59:31 -> 12:00 local
    assert as_.new_year_march_day(2000) == 21


def test_after_noon_next_day(as_, fake_equinox):
    _set(fake_equinox, 10, 0, 0)        # 13:30 local
    assert as_.new_year_march_day(2000) == 21


def test_minute_carry_past_midnight(as_, fake_equinox):
    _set(fake_equinox, 20, 45, 0)       # 23:75 -> 00:15 next day, before noon
    assert as_.new_year_march_day(2000) == 21


def test_hour_carry_past_midnight(as_, fake_equinox):
    _set(fake_equinox, 21, 0, 0)        # 24:30 -> 00:30 next day
    assert as_.new_year_march_day(2000) == 21


def test_late_evening_goes_to_next_day(as_, fake_equinox):
    _set(fake_equinox, 20, 0, 0)        # 23:30 local, after noon
    assert as_.new_year_march_day(2000) == 21


def test_longitude_seconds_offset(tehran, fake_equinox):
    _set(fake_equinox, 8, 34, 0)        # 11:59:33 at 51°25'33"
    assert tehran.new_year_march_day(2000) == 21
    _set(fake_equinox, 8, 33, 0)        # 11:58:33
    assert tehran.new_year_march_day(2000) == 20


def test_cache_key_includes_longitude(as_, tehran):
    assert as_.cache_key != tehran.cache_key
    assert as_.key == tehran.key == "AS"


def test_params_validation():
    with pytest.raises(ValueError):
        MeeusParams(longitude_minutes=60)
    with pytest.raises(ValueError):
        MeeusParams(hour_offset=24)
