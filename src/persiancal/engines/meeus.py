"""
persiancal.engines.meeus
------------------------
Astronomical Persian calendar (strategy key "AS").

1 Farvardin is the day of the March equinox when the equinox happens before
local noon at the calendar meridian, otherwise the following day. The equinox
comes from Meeus' algorithm (see engines/astro/equinox.py) and the meridian
offset is applied as a clock shift of +3h plus the longitude's minutes and
seconds. The degree component of the longitude is carried for reference only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable

from ..core.time import MILLIS_PER_DAY, civil_to_millis
from ..core.types import StrategyId
from .astro.deltat import DeltaTModel, EspenakMeeusDeltaT
from .astro.equinox import vernal_equinox_utc


PERSIAN_TO_ISO_YEAR_DIFFERENCE = 621


@dataclass(frozen=True)
class MeeusParams:
    longitude_degrees: int = 51
    longitude_minutes: int = 30
    longitude_seconds: int = 0
    hour_offset: int = 3
    delta_t: DeltaTModel = field(default_factory=EspenakMeeusDeltaT)
    persian_to_iso: int = PERSIAN_TO_ISO_YEAR_DIFFERENCE
    average_days_per_year: float = 365.24223034734916
    min_year: int = -1621
    max_year: int = 2379

    def __post_init__(self) -> None:
        if not (0 <= self.longitude_minutes < 60):
            raise ValueError("longitude_minutes must be in [0, 60)")
        if not (0 <= self.longitude_seconds < 60):
            raise ValueError("longitude_seconds must be in [0, 60)")
        if not (0 <= self.hour_offset < 24):
            raise ValueError("hour_offset must be in [0, 24)")
        if not (self.min_year <= self.max_year):
            raise ValueError("Require min_year <= max_year")


@dataclass
class _Clock:
    """Mutable wall reading carried through the new-year rounding steps."""
    day: int
    hour: int
    minute: int
    second: int


class MeeusStrategy:
    def __init__(self, id: StrategyId, params: MeeusParams = MeeusParams()):
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

    def new_year_march_day(self, iso_year: int) -> int:
        """
        Day of March of `iso_year` on which the Persian year starts.

        Carry order: seconds (rounded to the nearest minute), minutes, hours,
        days, then the noon rule.
        """
        eq = vernal_equinox_utc(iso_year, self.p.delta_t)
        c = _Clock(
            day=eq.day,
            hour=eq.hour + self.p.hour_offset,
            minute=eq.minute + self.p.longitude_minutes,
            second=eq.second + self.p.longitude_seconds,
        )

        c.minute += c.second // 60
        c.second %= 60
        if c.second > 30:
            c.minute += 1

        c.hour += c.minute // 60
        c.minute %= 60

        c.day += c.hour // 24
        c.hour %= 24

        # equinox after local noon: the year starts the next day
        if c.hour >= 12:
            c.day += 1
        return c.day

    def first_instant_of_year(self, year: int) -> int:
        iso_year = year + self.p.persian_to_iso
        return civil_to_millis(iso_year, 3, self.new_year_march_day(iso_year))

    def is_leap_year(self, year: int) -> bool:
        days = (self.first_instant_of_year(year + 1) - self.first_instant_of_year(year)) // MILLIS_PER_DAY
        return days > 365

    def info(self) -> Dict[str, Any]:
        return {
            "id": self.id.__dict__,
            "rule": "new year on the equinox day when before local noon, else the next day",
            "longitude": (self.p.longitude_degrees, self.p.longitude_minutes, self.p.longitude_seconds),
            "hour_offset": self.p.hour_offset,
            "delta_t": self.p.delta_t.info(),
            "range": (self.p.min_year, self.p.max_year),
            "average_days_per_year": self.p.average_days_per_year,
        }
