"""
persiancal.engines.khayyam
--------------------------
Omar Khayyam's 33-year arithmetic cycle (strategy key "OK").

Leap years are those whose remainder after dividing by 33 is one of
1, 5, 9, 13, 17, 22, 26 or 30. The cycle is proleptic: it agrees with the
equinox-based civil calendar between 1178 AP and 1634 AP and is simply
extended in both directions outside that window.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Hashable

from ..core.time import MILLIS_PER_DAY
from ..core.types import StrategyId

LEAPS_PER_CYCLE = 8
CYCLE_YEARS = 33


@dataclass(frozen=True)
class KhayyamParams:
    # A year where a 33-year cycle starts, with its known first instant
    reference_year: int = 1155
    reference_millis: int = -6115219200000  # 1776-03-20T00:00Z
    average_days_per_year: float = 365.24219858156
    min_year: int = -1
    max_year: int = 4503626

    def __post_init__(self) -> None:
        if self.reference_year % CYCLE_YEARS != 0:
            raise ValueError("reference_year must start a 33-year cycle")
        if self.reference_millis % MILLIS_PER_DAY != 0:
            raise ValueError("reference_millis must be a UTC midnight")
        if not (self.min_year <= self.max_year):
            raise ValueError("Require min_year <= max_year")


class KhayyamStrategy:
    """Closed-form leap test plus a bounded scan of the partial cycle for year starts."""

    def __init__(self, id: StrategyId, params: KhayyamParams = KhayyamParams()):
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
        return (year * 8 + 29) % CYCLE_YEARS < LEAPS_PER_CYCLE

    def _partial_cycle_leaps(self, cycle_start: int, year: int) -> int:
        return sum(1 for y in range(cycle_start, year) if self.is_leap_year(y))

    def first_instant_of_year(self, year: int) -> int:
        ref = self.p.reference_year
        if year == ref:
            return self.p.reference_millis

        cycle_start = year - (year % CYCLE_YEARS)
        if year > ref:
            leaps = (cycle_start - ref) // CYCLE_YEARS * LEAPS_PER_CYCLE
            leaps += self._partial_cycle_leaps(cycle_start, year)
            days = (year - ref) * 365 + leaps
            return self.p.reference_millis + days * MILLIS_PER_DAY

        leaps = (ref - cycle_start) // CYCLE_YEARS * LEAPS_PER_CYCLE
        leaps -= self._partial_cycle_leaps(cycle_start, year)
        days = (ref - year) * 365 + leaps
        return self.p.reference_millis - days * MILLIS_PER_DAY

    def info(self) -> Dict[str, Any]:
        return {
            "id": self.id.__dict__,
            "rule": "((Y*8 + 29) mod 33) < 8",
            "reference_year": self.p.reference_year,
            "range": (self.p.min_year, self.p.max_year),
            "average_days_per_year": self.p.average_days_per_year,
        }
