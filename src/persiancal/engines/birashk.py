"""
persiancal.engines.birashk
--------------------------
Ahmad Birashk's 2820-year grand cycle (strategy key "AB").

The grand cycle holds 88 sub-cycles of 29, 33, 33, 33, ... years (2816 years)
with the last one stretched to 37 years, for 683 leap years in 2820. Both
primitives reduce to one modular formula over the position in the grand cycle
counted from 474 AP.

The rule is proleptic and only tracks the civil calendar between 1244 AP and
1402 AP; it already disagrees in 1403 AP.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Hashable, Tuple

from ..core.time import from_julian_day
from ..core.types import StrategyId

GRAND_CYCLE_YEARS = 2820
GRAND_CYCLE_DAYS = 1029983  # 2820*365 + 683
CYCLE_BASE_YEAR = 474


@dataclass(frozen=True)
class BirashkParams:
    epoch_jd: float = 1948320.5  # JD of 1 Farvardin 1 AP
    average_days_per_year: float = 365.24219878
    min_year: int = -621
    max_year: int = 4912282


def _cycle_position(year: int) -> Tuple[int, int]:
    """
    (grand cycle index, year within the cycle counted from 474).
    Years before 474 AP run the first cycle's arithmetic backwards.
    """
    epbase = year - CYCLE_BASE_YEAR
    if epbase < 0:
        return 0, year
    return epbase // GRAND_CYCLE_YEARS, CYCLE_BASE_YEAR + epbase % GRAND_CYCLE_YEARS


class BirashkStrategy:
    def __init__(self, id: StrategyId, params: BirashkParams = BirashkParams()):
        self.id = id
        self.p = params

    @property
    def key(self) -> str:
        return self.id.key

    @property
    def min_year(self) -> int:
        return self.p.min_year

    @property
    def max_year(self) -> int:
        return self.p.max_year

    @property
    def average_days_per_year(self) -> float:
        return self.p.average_days_per_year

    @property
    def cache_key(self) -> Hashable:
        return (self.id.key, self.p)

    def is_leap_year(self, year: int) -> bool:
        _, epyear = _cycle_position(year)
        return ((epyear + 38) * 682) % 2816 < 682

    # ---------------------------------------------------------
    # Julian Day arithmetic
    # ---------------------------------------------------------

    def date_to_julian_day(self, year: int, month: int = 1, day: int = 1) -> float:
        cycle, epyear = _cycle_position(year)
        month_days = (month - 1) * 31 if month <= 7 else (month - 1) * 30 + 6
        return (
            day
            + month_days
            + (epyear * 682 - 110) // 2816
            + (epyear - 1) * 365
            + cycle * GRAND_CYCLE_DAYS
            + (self.p.epoch_jd - 1)
        )

    def julian_day_to_date(self, jd: float) -> Tuple[int, int, int]:
        """Inverse of date_to_julian_day for the civil day containing jd."""
        jd = math.floor(jd - 0.5) + 0.5
        year = self._year_of_julian_day(jd)
        yday = int(jd - self.date_to_julian_day(year, 1, 1)) + 1
        if yday <= 186:
            month = (yday + 30) // 31
        else:
            month = (yday - 6 + 29) // 30
        day = int(jd - self.date_to_julian_day(year, month, 1)) + 1
        return year, month, day

    def _year_of_julian_day(self, jd: float) -> int:
        base = self.date_to_julian_day(CYCLE_BASE_YEAR + 1)
        if jd >= self.date_to_julian_day(CYCLE_BASE_YEAR):
            depoch = int(jd - base)
            cycle, cyear = divmod(depoch, GRAND_CYCLE_DAYS)
            if cyear == GRAND_CYCLE_DAYS - 1:
                ycycle = GRAND_CYCLE_YEARS
            else:
                aux1, aux2 = divmod(cyear, 366)
                ycycle = (2134 * aux1 + 2816 * aux2 + 2815) // 1028522 + aux1 + 1
            return ycycle + GRAND_CYCLE_YEARS * cycle + CYCLE_BASE_YEAR

        # before the first grand cycle: step back from an estimate
        year = CYCLE_BASE_YEAR + math.floor((jd - base) / self.p.average_days_per_year)
        while self.date_to_julian_day(year) > jd:
            year -= 1
        while self.date_to_julian_day(year + 1) <= jd:
            year += 1
        return year

    def first_instant_of_year(self, year: int) -> int:
        return from_julian_day(self.date_to_julian_day(year))

    def info(self) -> Dict[str, Any]:
        return {
            "id": self.id.__dict__,
            "rule": "((epyear + 38) * 682) mod 2816 < 682, epyear counted from 474 AP",
            "epoch_jd": self.p.epoch_jd,
            "range": (self.p.min_year, self.p.max_year),
            "average_days_per_year": self.p.average_days_per_year,
        }
