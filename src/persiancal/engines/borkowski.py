"""
persiancal.engines.borkowski
----------------------------
Kazimierz Borkowski's break-year table (strategy key "KB").

The 33-year cycle is kept, but the table lists the years where the cycle is
broken by a 29- or 37-year jump so that the calendar tracks the real equinox
over roughly 3000 years. Outside the table the strategy extrapolates the last
segment; the calendar layer keeps queries inside [-61, 3177].
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Hashable, Tuple

from ..core.time import civil_to_millis
from ..core.types import StrategyId

PERSIAN_TO_ISO_YEAR_DIFFERENCE = 621

BREAK_YEARS: Tuple[int, ...] = (
    -61, 9, 38, 199, 426, 686, 756, 818, 1111, 1181, 1210,
    1635, 2060, 2097, 2192, 2262, 2324, 2394, 2456, 3178,
)


@dataclass(frozen=True)
class BorkowskiParams:
    break_years: Tuple[int, ...] = BREAK_YEARS
    leaps_before_first_break: int = -14
    average_days_per_year: float = 365.24219858156
    min_year: int = -61
    max_year: int = 3177

    def __post_init__(self) -> None:
        if len(self.break_years) < 2:
            raise ValueError("break_years needs at least two entries")
        if any(nxt <= prev for prev, nxt in zip(self.break_years, self.break_years[1:])):
            raise ValueError("break_years must be strictly increasing")


@dataclass(frozen=True)
class _Segment:
    jump: int    # length of the segment containing the year
    offset: int  # years since the segment's break year
    leaps: int   # leap years from the first break up to the year's new year


class BorkowskiStrategy:
    def __init__(self, id: StrategyId, params: BorkowskiParams = BorkowskiParams()):
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

    def _walk(self, year: int) -> _Segment:
        breaks = self.p.break_years
        leaps = self.p.leaps_before_first_break
        prev = breaks[0]
        jump = breaks[1] - breaks[0]
        for b in breaks[1:]:
            jump = b - prev
            if year < b:
                break
            leaps += (jump // 33) * 8 + (jump % 33) // 4
            prev = b

        n = year - prev
        leaps += (n // 33) * 8 + ((n % 33) + 3) // 4
        if jump % 33 == 4 and jump - n == 4:
            leaps += 1
        return _Segment(jump=jump, offset=n, leaps=leaps)

    def is_leap_year(self, year: int) -> bool:
        seg = self._walk(year)
        n = seg.offset
        if seg.jump - n < 6:
            n = n - seg.jump + ((seg.jump + 4) // 33) * 33
        return ((n + 1) % 33 - 1) % 4 == 0

    def new_year_march_day(self, year: int) -> int:
        """Day of March (of Gregorian year Y + 621) on which 1 Farvardin falls."""
        gy = year + PERSIAN_TO_ISO_YEAR_DIFFERENCE
        gregorian_leaps = gy // 4 - ((gy // 100 + 1) * 3) // 4 - 150
        return 20 + self._walk(year).leaps - gregorian_leaps

    def first_instant_of_year(self, year: int) -> int:
        gy = year + PERSIAN_TO_ISO_YEAR_DIFFERENCE
        return civil_to_millis(gy, 3, self.new_year_march_day(year))

    def info(self) -> Dict[str, Any]:
        return {
            "id": self.id.__dict__,
            "rule": "33-year cycle broken at tabulated years",
            "break_years": list(self.p.break_years),
            "range": (self.p.min_year, self.p.max_year),
            "average_days_per_year": self.p.average_days_per_year,
        }
