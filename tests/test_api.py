# tests/test_api.py

from datetime import date, datetime, timedelta, timezone

import pytest

import persiancal
from persiancal import PersianDate, PersianDateTime, StrategySpec

IRST = timezone(timedelta(hours=3, minutes=30))


def test_public_surface():
    for name in persiancal.__all__:
        assert hasattr(persiancal, name), name


def test_list_strategies():
    assert persiancal.list_strategies() == ["AB", "AS", "KB", "OK"]


@pytest.mark.parametrize("key", ["OK", "AB", "KB", "AS"])
def test_every_strategy_agrees_on_1396(key):
    ny = persiancal.new_year_day(1396, strategy=key)
    assert ny["date"] == date(2017, 3, 21)
    assert ny["instant"] == 1490054400000
    assert ny["strategy"] == key
    assert ny["leap"] is False
    assert ny["jdn"] == 2457834


def test_new_year_without_date():
    ny = persiancal.new_year_day(1403, strategy="OK", as_date=False)
    assert "date" not in ny
    assert (ny["civil"].month, ny["civil"].day) == (3, 20)
    assert ny["leap"] is True


def test_leap_year_queries():
    assert persiancal.leap_years(1390, 1410, strategy="OK") == [1391, 1395, 1399, 1403, 1408]
    assert persiancal.is_leap_year(1403, strategy="AB") is False
    assert persiancal.is_leap_year(1404, strategy="AB") is True
    assert persiancal.days_in_year(1403) == 366
    assert persiancal.days_in_month(1404, 12) == 29
    assert persiancal.first_instant_of_year(1396) == 1490054400000


def test_to_persian_date():
    p = persiancal.to_persian(date(2017, 3, 21))
    assert p == PersianDate("KB", 1396, 1, 1)
    assert persiancal.to_persian(date(1970, 1, 1), strategy="OK") == PersianDate("OK", 1348, 10, 11)


def test_to_persian_aware_datetime_uses_its_zone():
    p = persiancal.to_persian(datetime(2020, 3, 14, 21, 0, tzinfo=IRST))
    assert isinstance(p, PersianDateTime)
    assert (p.year, p.month, p.day, p.hour) == (1398, 12, 24, 21)
    utc = persiancal.to_persian(datetime(2020, 3, 14, 21, 0, tzinfo=IRST), zone=timezone.utc)
    assert (utc.day, utc.hour, utc.minute) == (24, 17, 30)


def test_to_gregorian():
    assert persiancal.to_gregorian(PersianDate("OK", 1403, 12, 30)) == date(2025, 3, 20)
    assert persiancal.to_gregorian((1398, 12, 25)) == date(2020, 3, 15)
    assert persiancal.to_gregorian((1396, 1, 1), strategy="AS") == date(2017, 3, 21)


def test_persian_datetime():
    assert persiancal.persian_datetime(1396) == datetime(2017, 3, 21, tzinfo=timezone.utc)
    dt = persiancal.persian_datetime(1398, 12, 25, 1, zone=IRST)
    assert dt.utcoffset() == timedelta(hours=3, minutes=30)
    assert dt == datetime(2020, 3, 14, 21, 30, tzinfo=timezone.utc)


def test_get_calendar_is_cached():
    assert persiancal.get_calendar("borkowski") is persiancal.get_calendar("KB")
    assert persiancal.get_calendar("KB", IRST) is persiancal.get_calendar("KB", IRST)


def test_custom_spec():
    spec = StrategySpec.like("AS").tweak(hour_offset=4)
    cal = persiancal.get_calendar(spec)
    assert cal is not persiancal.get_calendar("AS")
    assert cal.strategy.p.hour_offset == 4


def test_private_cache():
    cache = persiancal.CalendarCache()
    cal = persiancal.get_calendar("OK", cache=cache)
    assert len(cache) == 1
    assert cal is not persiancal.get_calendar("OK")


def test_strategy_info():
    info = persiancal.strategy_info("meeus-tehran")
    assert info["strategy"]["longitude"] == (51, 25, 33)
    assert info["zone"] == "UTC"


def test_unknown_strategy():
    with pytest.raises(persiancal.UnknownStrategyError):
        persiancal.get_calendar("nope")
    with pytest.raises(KeyError):
        persiancal.is_leap_year(1400, strategy="nope")


def test_out_of_range_year():
    with pytest.raises(persiancal.YearOutOfRangeError):
        persiancal.is_leap_year(5000, strategy="KB")
    with pytest.raises(persiancal.PersianCalError):
        persiancal.to_gregorian((-2000, 1, 1), strategy="AS")


def test_astronomy_helpers():
    assert persiancal.delta_t(2000) == pytest.approx(63.86, abs=0.1)
    eq = persiancal.vernal_equinox(2000)
    assert (eq.month, eq.day, eq.hour) == (3, 20, 7)
