"""
persiancal.engines.fields
-------------------------
Field calculus shared by every strategy.

A strategy only knows where each year starts and which years are leap; the
month structure (six 31-day months, five 30-day months, Esfand with 29 or 30
days) is fixed, so everything else is derived here. All instants are local
milliseconds: the calendar wrapper shifts UTC instants into its zone before
calling in.
"""

from __future__ import annotations

from bisect import bisect_right
from functools import lru_cache
from typing import Optional, Tuple

from ..core.time import MILLIS_PER_DAY, iso_day_of_week
from .interfaces import EpochStrategyProtocol

FIRST_HALF_MONTH_DAYS = 31   # Farvardin .. Shahrivar
SECOND_HALF_MONTH_DAYS = 30  # Mehr .. Bahman
ESFAND_COMMON_DAYS = 29

# Persian weekday for ISO weekdays 1 (Monday) .. 7 (Sunday); Shanbeh = 1
ISO_TO_PERSIAN_WEEKDAY: Tuple[int, ...] = (3, 4, 5, 6, 7, 1, 2)

# Years between the Persian epoch and 1970, used to seed year(instant)
EPOCH_YEAR_OFFSET = 1348


def _month_start_table() -> Tuple[int, ...]:
    starts = [0]
    for month in range(1, 12):
        days = FIRST_HALF_MONTH_DAYS if month <= 6 else SECOND_HALF_MONTH_DAYS
        starts.append(starts[-1] + days * MILLIS_PER_DAY)
    return tuple(starts)


TOTAL_MILLIS_BY_MONTH: Tuple[int, ...] = _month_start_table()


class PersianFieldEngine:
    def __init__(self, strategy: EpochStrategyProtocol, *, year_cache_size: int = 1024):
        self.strategy = strategy
        self._year_millis = lru_cache(maxsize=year_cache_size)(strategy.first_instant_of_year)

    # ---------------------------------------------------------
    # Averages (seed only)
    # ---------------------------------------------------------

    @property
    def average_millis_per_year(self) -> int:
        return int(self.strategy.average_days_per_year * MILLIS_PER_DAY)

    @property
    def average_millis_per_month(self) -> int:
        return self.average_millis_per_year // 12

    @property
    def average_millis_per_year_divided_by_two(self) -> int:
        return self.average_millis_per_year // 2

    @property
    def approx_millis_at_epoch_divided_by_two(self) -> int:
        return (EPOCH_YEAR_OFFSET * self.average_millis_per_year) // 2

    # ---------------------------------------------------------
    # Year structure
    # ---------------------------------------------------------

    def year_millis(self, year: int) -> int:
        return self._year_millis(year)

    def is_leap_year(self, year: int) -> bool:
        return self.strategy.is_leap_year(year)

    def days_in_year(self, year: int) -> int:
        return 366 if self.strategy.is_leap_year(year) else 365

    def month_length(self, year: int, month: int) -> int:
        if month < 7:
            return FIRST_HALF_MONTH_DAYS
        if month < 12 or self.strategy.is_leap_year(year):
            return SECOND_HALF_MONTH_DAYS
        return ESFAND_COMMON_DAYS

    def max_month_length(self, month: int) -> int:
        return FIRST_HALF_MONTH_DAYS if month < 7 else SECOND_HALF_MONTH_DAYS

    def total_millis_by_month(self, month: int) -> int:
        """Milliseconds from the start of the year to the start of `month`."""
        return TOTAL_MILLIS_BY_MONTH[month - 1]

    # ---------------------------------------------------------
    # Instant -> fields
    # ---------------------------------------------------------

    def year(self, instant: int) -> int:
        half = self.average_millis_per_year_divided_by_two
        seed = ((instant >> 1) + self.approx_millis_at_epoch_divided_by_two) // half
        year = int(seed)
        # the average is only a seed; step against the real year starts
        while instant < self.year_millis(year):
            year -= 1
        while instant >= self.year_millis(year + 1):
            year += 1
        return year

    def month_of_year(self, instant: int, year: Optional[int] = None) -> int:
        if year is None:
            year = self.year(instant)
        offset = instant - self.year_millis(year)
        return bisect_right(TOTAL_MILLIS_BY_MONTH, offset)

    def day_of_year(self, instant: int, year: Optional[int] = None) -> int:
        if year is None:
            year = self.year(instant)
        return (instant - self.year_millis(year)) // MILLIS_PER_DAY + 1

    def day_of_month(self, instant: int, year: Optional[int] = None, month: Optional[int] = None) -> int:
        if year is None:
            year = self.year(instant)
        if month is None:
            month = self.month_of_year(instant, year)
        start = self.year_millis(year) + TOTAL_MILLIS_BY_MONTH[month - 1]
        return (instant - start) // MILLIS_PER_DAY + 1

    def millis_of_day(self, instant: int) -> int:
        return instant % MILLIS_PER_DAY

    def day_of_week(self, instant: int) -> int:
        """1 = Shanbeh (Saturday) .. 7 = Jomeh (Friday)."""
        return ISO_TO_PERSIAN_WEEKDAY[iso_day_of_week(instant) - 1]

    def year_month_day(self, instant: int) -> Tuple[int, int, int]:
        year = self.year(instant)
        month = self.month_of_year(instant, year)
        return year, month, self.day_of_month(instant, year, month)

    # ---------------------------------------------------------
    # Fields -> instant
    # ---------------------------------------------------------

    def year_month_day_millis(self, year: int, month: int, day: int) -> int:
        return self.year_millis(year) + TOTAL_MILLIS_BY_MONTH[month - 1] + (day - 1) * MILLIS_PER_DAY

    # ---------------------------------------------------------
    # Arithmetic
    # ---------------------------------------------------------

    def set_year(self, instant: int, year: int) -> int:
        """Move to `year` keeping day-of-year and time of day; day 366 becomes 365 in a common year."""
        this_year = self.year(instant)
        day_of_year = self.day_of_year(instant, this_year)
        millis_of_day = self.millis_of_day(instant)

        if day_of_year > 365 and not self.strategy.is_leap_year(year):
            day_of_year -= 1

        return self.year_millis(year) + (day_of_year - 1) * MILLIS_PER_DAY + millis_of_day

    def year_difference(self, minuend: int, subtrahend: int) -> int:
        minuend_year = self.year(minuend)
        subtrahend_year = self.year(subtrahend)

        minuend_rem = minuend - self.year_millis(minuend_year)
        subtrahend_rem = subtrahend - self.year_millis(subtrahend_year)

        difference = minuend_year - subtrahend_year
        if minuend_rem < subtrahend_rem:
            difference -= 1
        return difference

    def add_years(self, instant: int, years: int) -> int:
        if years == 0:
            return instant
        return self.set_year(instant, self.year(instant) + years)

    def add_months(self, instant: int, months: int) -> int:
        """Month arithmetic with the day clamped to the target month's length."""
        if months == 0:
            return instant
        year, month, day = self.year_month_day(instant)
        millis_of_day = self.millis_of_day(instant)

        dy, m0 = divmod(month - 1 + months, 12)
        new_year, new_month = year + dy, m0 + 1
        new_day = min(day, self.month_length(new_year, new_month))
        return self.year_month_day_millis(new_year, new_month, new_day) + millis_of_day
