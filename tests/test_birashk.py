# tests/test_birashk.py

import pytest
import random

from persiancal.core.time import MILLIS_PER_DAY
from persiancal.core.types import StrategyId
from persiancal.engines.birashk import BirashkStrategy


@pytest.fixture
def ab():
    return BirashkStrategy(StrategyId("AB", "birashk"))


def test_epoch(ab):
    assert ab.date_to_julian_day(1, 1, 1) == 1948320.5


def test_known_new_year(ab):
    assert ab.date_to_julian_day(1396) == 2457833.5
    assert ab.first_instant_of_year(1396) == 1490054400000


def test_leap_rule(ab):
    assert ab.is_leap_year(1375)
    assert not ab.is_leap_year(1403)   # the 2820-year rule parts ways with the civil calendar here
    assert ab.is_leap_year(1404)


def test_grand_cycle_leap_count(ab):
    assert sum(ab.is_leap_year(y) for y in range(474, 474 + 2820)) == 683
    assert sum(ab.is_leap_year(y) for y in range(3294, 3294 + 2820)) == 683


def test_year_lengths_match_leap_flag(ab):
    for y in range(ab.min_year, 7000):
        days = (ab.first_instant_of_year(y + 1) - ab.first_instant_of_year(y)) // MILLIS_PER_DAY
        assert days == (366 if ab.is_leap_year(y) else 365), y


def test_month_lengths(ab):
    # months 1-6 have 31 days, 7-11 have 30
    assert ab.date_to_julian_day(1396, 2, 1) - ab.date_to_julian_day(1396, 1, 1) == 31
    assert ab.date_to_julian_day(1396, 8, 1) - ab.date_to_julian_day(1396, 7, 1) == 30
    assert ab.date_to_julian_day(1396, 7, 1) - ab.date_to_julian_day(1396, 1, 1) == 186


def test_inverse_known(ab):
    assert ab.julian_day_to_date(2457833.5) == (1396, 1, 1)
    # any time during the civil day maps to the same date
    assert ab.julian_day_to_date(2457834.25) == (1396, 1, 1)
    assert ab.julian_day_to_date(2457833.0) == (1395, 12, 30)


def test_inverse_roundtrip(ab):
    random.seed(42)
    for _ in range(3000):
        y = random.randint(ab.min_year, 10000)
        m = random.randint(1, 12)
        if m <= 6:
            dmax = 31
        elif m <= 11:
            dmax = 30
        else:
            dmax = 30 if ab.is_leap_year(y) else 29
        d = random.randint(1, dmax)
        jd = ab.date_to_julian_day(y, m, d)
        assert ab.julian_day_to_date(jd) == (y, m, d)


def test_inverse_around_cycle_base(ab):
    for y in (472, 473, 474, 475, 3293, 3294):
        for m, d in ((1, 1), (12, 29)):
            assert ab.julian_day_to_date(ab.date_to_julian_day(y, m, d)) == (y, m, d)
