# tests/test_borkowski.py

import pytest

from persiancal.core.time import MILLIS_PER_DAY
from persiancal.core.types import StrategyId
from persiancal.engines.borkowski import BorkowskiParams, BorkowskiStrategy
from persiancal.engines.khayyam import KhayyamStrategy


@pytest.fixture
def kb():
    return BorkowskiStrategy(StrategyId("KB", "borkowski"))


@pytest.fixture
def ok():
    return KhayyamStrategy(StrategyId("OK", "khayyam"))


def test_known_new_year(kb):
    assert kb.new_year_march_day(1396) == 21
    assert kb.first_instant_of_year(1396) == 1490054400000


def test_leaps_around_1210_break(kb):
    leaps = {y for y in range(1200, 1220) if kb.is_leap_year(y)}
    assert 1205 in leaps
    assert 1210 in leaps
    assert 1214 in leaps
    assert not leaps & {1206, 1208, 1209, 1211}


def test_1635_break_differs_from_khayyam(kb, ok):
    assert not kb.is_leap_year(1634)
    assert kb.is_leap_year(1635)
    assert ok.is_leap_year(1634)
    assert not ok.is_leap_year(1635)


def test_agrees_with_khayyam_between_breaks(kb, ok):
    for y in range(1210, 1634):
        assert kb.is_leap_year(y) == ok.is_leap_year(y), y
    for y in range(1210, 1635):
        assert kb.first_instant_of_year(y) == ok.first_instant_of_year(y), y


def test_year_lengths_match_leap_flag(kb):
    for y in range(kb.min_year, kb.max_year):
        days = (kb.first_instant_of_year(y + 1) - kb.first_instant_of_year(y)) // MILLIS_PER_DAY
        assert days == (366 if kb.is_leap_year(y) else 365), y


def test_new_year_stays_near_equinox(kb):
    for y in range(kb.min_year, kb.max_year + 1, 7):
        assert 18 <= kb.new_year_march_day(y) <= 23, y


def test_params_validation():
    with pytest.raises(ValueError):
        BorkowskiParams(break_years=(9, -61))
    with pytest.raises(ValueError):
        BorkowskiParams(break_years=(9,))
