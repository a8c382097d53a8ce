from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from typing import Any, Dict, List, Optional, Tuple, Union

from .core.engine import CalendarCache, StrategyRef
from .core.time import (
    CivilDateTime,
    civil_to_jdn,
    date_to_millis,
    datetime_to_millis,
    millis_to_civil,
    millis_to_datetime,
)
from .core.types import PersianDate, PersianDateTime
from .engines.astro.deltat import DeltaTModel, EspenakMeeusDeltaT
from .engines.astro.equinox import vernal_equinox_utc
from .engines.calendar import PersianCalendar
from .engines.specs import ALL_SPECS, DEFAULT_STRATEGY

_cache: Optional[CalendarCache] = None
_DEFAULT_DELTA_T = EspenakMeeusDeltaT()


def set_cache(cache: CalendarCache) -> None:
    global _cache
    _cache = cache


def _c(cache: Optional[CalendarCache]) -> CalendarCache:
    if cache is not None:
        return cache
    if _cache is None:
        raise RuntimeError("Calendar cache not initialized")
    return _cache


def _civil_date(c: CivilDateTime) -> date:
    return date(c.year, c.month, c.day)


def list_strategies() -> List[str]:
    return sorted(ALL_SPECS)


def strategy_info(strategy: StrategyRef = DEFAULT_STRATEGY, *, cache: Optional[CalendarCache] = None) -> Dict[str, Any]:
    return _c(cache).get(None, strategy).info()


def get_calendar(
    strategy: StrategyRef = DEFAULT_STRATEGY,
    zone: Optional[tzinfo] = None,
    *,
    cache: Optional[CalendarCache] = None,
) -> PersianCalendar:
    """Shared calendar for (zone, strategy). zone=None means UTC."""
    return _c(cache).get(zone, strategy)


# ============================================================
# Year-level queries
# ============================================================

def first_instant_of_year(year: int, *, strategy: StrategyRef = DEFAULT_STRATEGY,
                          cache: Optional[CalendarCache] = None) -> int:
    """UTC milliseconds of 1 Farvardin 00:00 UTC."""
    return get_calendar(strategy, cache=cache).year_start(year)


def is_leap_year(year: int, *, strategy: StrategyRef = DEFAULT_STRATEGY,
                 cache: Optional[CalendarCache] = None) -> bool:
    return get_calendar(strategy, cache=cache).is_leap_year(year)


def days_in_year(year: int, *, strategy: StrategyRef = DEFAULT_STRATEGY,
                 cache: Optional[CalendarCache] = None) -> int:
    return get_calendar(strategy, cache=cache).days_in_year(year)


def days_in_month(year: int, month: int, *, strategy: StrategyRef = DEFAULT_STRATEGY,
                  cache: Optional[CalendarCache] = None) -> int:
    return get_calendar(strategy, cache=cache).days_in_month(year, month)


def new_year_day(year: int, *, strategy: StrategyRef = DEFAULT_STRATEGY,
                 cache: Optional[CalendarCache] = None, as_date: bool = True) -> Dict[str, Any]:
    cal = get_calendar(strategy, cache=cache)
    instant = cal.year_start(year)
    civil = millis_to_civil(instant)
    out: Dict[str, Any] = {
        "Y": year,
        "strategy": cal.key,
        "instant": instant,
        "civil": civil,
        "jdn": civil_to_jdn(civil.year, civil.month, civil.day),
        "leap": cal.is_leap_year(year),
    }
    if as_date:
        out["date"] = _civil_date(civil)
    return out


def leap_years(start: int, end: int, *, strategy: StrategyRef = DEFAULT_STRATEGY,
               cache: Optional[CalendarCache] = None) -> List[int]:
    """Leap years in [start, end]."""
    cal = get_calendar(strategy, cache=cache)
    return [y for y in range(start, end + 1) if cal.is_leap_year(y)]


# ============================================================
# Conversions
# ============================================================

def to_persian(
    d: Union[date, datetime],
    *,
    strategy: StrategyRef = DEFAULT_STRATEGY,
    zone: Optional[tzinfo] = None,
    cache: Optional[CalendarCache] = None,
) -> Union[PersianDate, PersianDateTime]:
    """
    date -> PersianDate (the civil day, read as the same local day).
    aware datetime -> PersianDateTime on the wall clock of `zone`
    (defaults to the datetime's own tzinfo).
    """
    if isinstance(d, datetime):
        instant = datetime_to_millis(d)
        cal = get_calendar(strategy, zone if zone is not None else d.tzinfo, cache=cache)
        return cal.fields_of(instant)
    cal = get_calendar(strategy, cache=cache)
    return cal.date_of(date_to_millis(d))


def to_gregorian(
    p: Union[PersianDate, Tuple[int, int, int]],
    *,
    strategy: Optional[StrategyRef] = None,
    cache: Optional[CalendarCache] = None,
) -> date:
    """Gregorian date of a Persian date. The strategy defaults to the one recorded on the PersianDate."""
    if isinstance(p, PersianDate):
        y, m, d = p.year, p.month, p.day
        strategy = strategy if strategy is not None else p.strategy
    else:
        y, m, d = p
    cal = get_calendar(strategy if strategy is not None else DEFAULT_STRATEGY, cache=cache)
    return _civil_date(cal.to_civil(y, m, d))


def persian_datetime(
    year: int,
    month: int = 1,
    day: int = 1,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    millisecond: int = 0,
    *,
    strategy: StrategyRef = DEFAULT_STRATEGY,
    zone: Optional[tzinfo] = None,
    cache: Optional[CalendarCache] = None,
) -> datetime:
    """Aware datetime for a Persian wall-clock reading in `zone` (UTC when None)."""
    cal = get_calendar(strategy, zone, cache=cache)
    instant = cal.instant(year, month, day, hour, minute, second, millisecond)
    return millis_to_datetime(instant, zone if zone is not None else timezone.utc)


# ============================================================
# Astronomy
# ============================================================

def vernal_equinox(iso_year: int, *, delta_t: Optional[DeltaTModel] = None) -> CivilDateTime:
    """UTC instant of the March equinox of a Gregorian year, as civil fields."""
    return vernal_equinox_utc(iso_year, delta_t)


def delta_t(year: int, month: int = 3, *, model: Optional[DeltaTModel] = None) -> float:
    m = model if model is not None else _DEFAULT_DELTA_T
    return m.delta_t_seconds(year, month)
