"""
persiancal.engines.calendar
---------------------------
The Orchestrator. Binds a leap-year strategy and the shared field engine to a
time zone and to the strategy's supported year range.

Public methods take and return UTC milliseconds; the zone shift to local
wall-clock milliseconds happens here and nowhere else. A zoned calendar keeps a
reference to the UTC calendar it wraps (`base`), which owns the field engine.
"""

from __future__ import annotations

from datetime import tzinfo
from typing import Any, Dict, Optional

from ..core.errors import IllegalFieldValueError, YearOutOfRangeError
from ..core.time import (
    MILLIS_PER_DAY,
    MILLIS_PER_HOUR,
    MILLIS_PER_MINUTE,
    MILLIS_PER_SECOND,
    CivilDateTime,
    civil_to_millis,
    is_utc,
    millis_to_civil,
    zone_id,
    zone_offset_from_local,
    zone_offset_millis,
)
from ..core.types import PersianDate, PersianDateTime
from .fields import PersianFieldEngine
from .interfaces import EpochStrategyProtocol


class PersianCalendar:
    def __init__(
        self,
        strategy: EpochStrategyProtocol,
        zone: Optional[tzinfo] = None,
        *,
        base: Optional["PersianCalendar"] = None,
    ):
        self.strategy = strategy
        self.zone = None if is_utc(zone) else zone
        if self.zone is not None and base is None:
            base = PersianCalendar(strategy)
        self.base = base
        self.fields = base.fields if base is not None else PersianFieldEngine(strategy)

    # ---------------------------------------------------------
    # Identity
    # ---------------------------------------------------------

    @property
    def key(self) -> str:
        return self.strategy.key

    @property
    def zone_id(self) -> str:
        return zone_id(self.zone)

    @property
    def is_utc(self) -> bool:
        return self.zone is None

    @property
    def min_year(self) -> int:
        return self.strategy.min_year

    @property
    def max_year(self) -> int:
        return self.strategy.max_year

    @property
    def lower_limit(self) -> int:
        """First local millisecond of the calendar: 1 Farvardin of min_year."""
        return self.fields.year_millis(self.strategy.min_year)

    @property
    def upper_limit(self) -> int:
        """First local millisecond past the calendar's range (exclusive)."""
        return self.fields.year_millis(self.strategy.max_year + 1)

    def utc(self) -> "PersianCalendar":
        return self if self.base is None else self.base

    def with_zone(self, zone: Optional[tzinfo]) -> "PersianCalendar":
        """Same strategy in another zone. Use CalendarCache.get for shared instances."""
        if zone_id(zone) == self.zone_id:
            return self
        if is_utc(zone):
            return self.utc()
        return PersianCalendar(self.strategy, zone, base=self.utc())

    def info(self) -> Dict[str, Any]:
        return {
            "zone": self.zone_id,
            "range": (self.min_year, self.max_year),
            "strategy": self.strategy.info(),
        }

    def __repr__(self) -> str:
        return f"PersianCalendar[{self.key}, {self.zone_id}]"

    # ---------------------------------------------------------
    # Zone shift
    # ---------------------------------------------------------

    def to_local(self, instant: int) -> int:
        if self.zone is None:
            return instant
        return instant + zone_offset_millis(self.zone, instant)

    def to_utc(self, local: int) -> int:
        if self.zone is None:
            return local
        return local - zone_offset_from_local(self.zone, local)

    # ---------------------------------------------------------
    # Range checks
    # ---------------------------------------------------------

    def check_year(self, year: int) -> int:
        if not (self.strategy.min_year <= year <= self.strategy.max_year):
            raise YearOutOfRangeError(year, self.strategy.min_year, self.strategy.max_year, self.key)
        return year

    def _checked_local(self, instant: int) -> int:
        local = self.to_local(instant)
        if local < self.lower_limit or local >= self.upper_limit:
            self.check_year(self.fields.year(local))
        return local

    def _check_field(self, field: str, value: int, lower: int, upper: int) -> None:
        if not (lower <= value <= upper):
            raise IllegalFieldValueError(field, value, lower, upper)

    # ---------------------------------------------------------
    # Year queries
    # ---------------------------------------------------------

    def is_leap_year(self, year: int) -> bool:
        return self.strategy.is_leap_year(self.check_year(year))

    def days_in_year(self, year: int) -> int:
        return self.fields.days_in_year(self.check_year(year))

    def days_in_month(self, year: int, month: int) -> int:
        self._check_field("monthOfYear", month, 1, 12)
        return self.fields.month_length(self.check_year(year), month)

    def year_start(self, year: int) -> int:
        """UTC instant of 1 Farvardin 00:00 local time."""
        return self.to_utc(self.fields.year_millis(self.check_year(year)))

    # ---------------------------------------------------------
    # Fields <-> instant
    # ---------------------------------------------------------

    def instant(
        self,
        year: int,
        month: int = 1,
        day: int = 1,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millisecond: int = 0,
    ) -> int:
        """UTC milliseconds of a Persian wall-clock reading in this calendar's zone."""
        self.check_year(year)
        self._check_field("monthOfYear", month, 1, 12)
        self._check_field("dayOfMonth", day, 1, self.fields.month_length(year, month))
        self._check_field("hourOfDay", hour, 0, 23)
        self._check_field("minuteOfHour", minute, 0, 59)
        self._check_field("secondOfMinute", second, 0, 59)
        self._check_field("millisOfSecond", millisecond, 0, 999)

        local = (
            self.fields.year_month_day_millis(year, month, day)
            + hour * MILLIS_PER_HOUR
            + minute * MILLIS_PER_MINUTE
            + second * MILLIS_PER_SECOND
            + millisecond
        )
        return self.to_utc(local)

    def fields_of(self, instant: int) -> PersianDateTime:
        local = self._checked_local(instant)
        year, month, day = self.fields.year_month_day(local)
        ms = self.fields.millis_of_day(local)
        hour, ms = divmod(ms, MILLIS_PER_HOUR)
        minute, ms = divmod(ms, MILLIS_PER_MINUTE)
        second, ms = divmod(ms, MILLIS_PER_SECOND)
        return PersianDateTime(
            strategy=self.key,
            year=year,
            month=month,
            day=day,
            hour=hour,
            minute=minute,
            second=second,
            millisecond=ms,
            day_of_week=self.fields.day_of_week(local),
        )

    def date_of(self, instant: int) -> PersianDate:
        local = self._checked_local(instant)
        year, month, day = self.fields.year_month_day(local)
        return PersianDate(self.key, year, month, day)

    def day_of_week(self, instant: int) -> int:
        return self.fields.day_of_week(self._checked_local(instant))

    # ---------------------------------------------------------
    # Civil (Gregorian) dates, read as local calendar days
    # ---------------------------------------------------------

    def from_civil(self, year: int, month: int, day: int) -> PersianDate:
        local = civil_to_millis(year, month, day)
        if local < self.lower_limit or local >= self.upper_limit:
            self.check_year(self.fields.year(local))
        y, m, d = self.fields.year_month_day(local)
        return PersianDate(self.key, y, m, d)

    def to_civil(self, year: int, month: int, day: int) -> CivilDateTime:
        self.check_year(year)
        self._check_field("monthOfYear", month, 1, 12)
        self._check_field("dayOfMonth", day, 1, self.fields.month_length(year, month))
        return millis_to_civil(self.fields.year_month_day_millis(year, month, day))

    # ---------------------------------------------------------
    # Arithmetic, evaluated on the local wall clock
    # ---------------------------------------------------------

    def _local_op(self, instant: int, op) -> int:
        local = op(self._checked_local(instant))
        result = self.to_utc(local)
        self._checked_local(result)
        return result

    def plus_years(self, instant: int, years: int) -> int:
        return self._local_op(instant, lambda t: self.fields.add_years(t, years))

    def plus_months(self, instant: int, months: int) -> int:
        return self._local_op(instant, lambda t: self.fields.add_months(t, months))

    def plus_days(self, instant: int, days: int) -> int:
        return self._local_op(instant, lambda t: t + days * MILLIS_PER_DAY)

    def set_year(self, instant: int, year: int) -> int:
        self.check_year(year)
        return self._local_op(instant, lambda t: self.fields.set_year(t, year))

    def years_between(self, start: int, end: int) -> int:
        """Whole Persian years from start to end (negative when end is earlier)."""
        return self.fields.year_difference(self._checked_local(end), self._checked_local(start))
