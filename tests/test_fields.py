# tests/test_fields.py

import random

import pytest

from persiancal.core.time import MILLIS_PER_DAY, MILLIS_PER_HOUR, civil_to_millis
from persiancal.engines.factory import make_strategy
from persiancal.engines.fields import ISO_TO_PERSIAN_WEEKDAY, TOTAL_MILLIS_BY_MONTH, PersianFieldEngine
from persiancal.engines.specs import ALL_SPECS


@pytest.fixture
def kb():
    return PersianFieldEngine(make_strategy(ALL_SPECS["KB"]))


def test_month_start_table():
    assert TOTAL_MILLIS_BY_MONTH[0] == 0
    assert TOTAL_MILLIS_BY_MONTH[6] == 186 * MILLIS_PER_DAY
    assert TOTAL_MILLIS_BY_MONTH[11] == 336 * MILLIS_PER_DAY
    assert len(ISO_TO_PERSIAN_WEEKDAY) == 7


def test_month_lengths(kb):
    assert [kb.month_length(1403, m) for m in range(1, 13)] == [31] * 6 + [30] * 6
    assert kb.month_length(1404, 12) == 29
    assert kb.max_month_length(12) == 30
    assert kb.days_in_year(1403) == 366
    assert kb.days_in_year(1404) == 365


def test_epoch(kb):
    # 1970-01-01 (Thursday) is 11 Dey 1348, Panjshanbeh
    assert kb.year(0) == 1348
    assert kb.year_month_day(0) == (1348, 10, 11)
    assert kb.day_of_week(0) == 6
    assert kb.day_of_year(0) == 287


def test_weekday_of_new_year(kb):
    # 2017-03-21 was a Tuesday
    assert kb.day_of_week(civil_to_millis(2017, 3, 21)) == 4


def test_year_boundaries(kb):
    for y in (1, 100, 1206, 1210, 1403, 1404, 2000, 3000):
        start = kb.year_millis(y)
        assert kb.year(start) == y
        assert kb.year(start - 1) == y - 1
        assert kb.month_of_year(start - 1) == 12


def test_negative_instants(kb):
    t = civil_to_millis(1000, 6, 15, 13)
    y, m, d = kb.year_month_day(t)
    assert kb.year_month_day_millis(y, m, d) + kb.millis_of_day(t) == t
    assert kb.millis_of_day(t) == 13 * MILLIS_PER_HOUR


@pytest.mark.parametrize("key", ["OK", "AB", "KB", "AS"])
def test_random_instants_round_trip(key):
    eng = PersianFieldEngine(make_strategy(ALL_SPECS[key]))
    s = eng.strategy
    lo = eng.year_millis(max(s.min_year, -500))
    hi = eng.year_millis(min(s.max_year, 2300))
    random.seed(42)
    for _ in range(300):
        t = random.randrange(lo, hi)
        y, m, d = eng.year_month_day(t)
        assert 1 <= d <= eng.month_length(y, m)
        assert eng.year_month_day_millis(y, m, d) + eng.millis_of_day(t) == t


def test_set_year_clamps_leap_day(kb):
    t = kb.year_month_day_millis(1403, 12, 30) + 5 * MILLIS_PER_HOUR
    moved = kb.set_year(t, 1404)
    assert kb.year_month_day(moved) == (1404, 12, 29)
    assert kb.millis_of_day(moved) == 5 * MILLIS_PER_HOUR


def test_set_year_keeps_day_of_year(kb):
    t = kb.year_month_day_millis(1400, 7, 15)
    assert kb.year_month_day(kb.set_year(t, 1390)) == (1390, 7, 15)


def test_year_difference(kb):
    start = kb.year_month_day_millis(1403, 5, 10)
    assert kb.year_difference(kb.year_month_day_millis(1404, 5, 9), start) == 0
    assert kb.year_difference(kb.year_month_day_millis(1404, 5, 10), start) == 1
    assert kb.year_difference(start, kb.year_month_day_millis(1404, 5, 10)) == -1


def test_add_years(kb):
    t = kb.year_month_day_millis(1399, 12, 30)
    assert kb.year_month_day(kb.add_years(t, 4)) == (1403, 12, 30)
    assert kb.year_month_day(kb.add_years(t, 1)) == (1400, 12, 29)
    assert kb.add_years(t, 0) == t


@pytest.mark.parametrize(
    "start,months,expected",
    [
        ((1403, 6, 31), 1, (1403, 7, 30)),
        ((1403, 12, 30), 12, (1404, 12, 29)),
        ((1402, 11, 30), -11, (1401, 12, 29)),
        ((1403, 1, 1), -1, (1402, 12, 1)),
        ((1403, 1, 31), -1, (1402, 12, 29)),
        ((1398, 12, 25), 1, (1399, 1, 25)),
        ((1400, 3, 15), 25, (1402, 4, 15)),
    ],
)
def test_add_months(kb, start, months, expected):
    t = kb.year_month_day_millis(*start)
    assert kb.year_month_day(kb.add_months(t, months)) == expected


@pytest.mark.parametrize("key", ["OK", "AB", "KB", "AS"])
def test_months_fill_the_year(key):
    eng = PersianFieldEngine(make_strategy(ALL_SPECS[key]))
    kinds = set()
    for y in range(1395, 1410):
        start, end = eng.year_millis(y), eng.year_millis(y + 1)
        t = start
        for m in range(1, 13):
            assert t == start + eng.total_millis_by_month(m)
            assert eng.month_of_year(t, y) == m
            t += eng.month_length(y, m) * MILLIS_PER_DAY
            assert eng.month_of_year(t - 1, y) == m
        assert t == end
        assert (end - start) // MILLIS_PER_DAY == eng.days_in_year(y)
        kinds.add(eng.is_leap_year(y))
    assert kinds == {True, False}


def test_averages(kb):
    assert kb.average_millis_per_month == kb.average_millis_per_year // 12
    assert kb.average_millis_per_month // MILLIS_PER_DAY == 30
    assert kb.approx_millis_at_epoch_divided_by_two == 1348 * kb.average_millis_per_year // 2
