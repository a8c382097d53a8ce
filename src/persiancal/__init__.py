"""persiancal public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Initialize the default calendar cache on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    list_strategies,
    strategy_info,
    get_calendar,
    first_instant_of_year,
    is_leap_year,
    new_year_day,
    days_in_month,
    days_in_year,
    to_persian,
    to_gregorian,
    persian_datetime,
    vernal_equinox,
    delta_t,
    leap_years,
)
from .core.engine import CalendarCache
from .core.errors import (
    PersianCalError,
    YearOutOfRangeError,
    IllegalFieldValueError,
    UnknownStrategyError,
    EphemerisUnavailableError,
)
from .core.types import PersianDate, PersianDateTime, StrategySpec

__all__ = [
    "list_strategies",
    "strategy_info",
    "get_calendar",
    "first_instant_of_year",
    "is_leap_year",
    "new_year_day",
    "days_in_month",
    "days_in_year",
    "to_persian",
    "to_gregorian",
    "persian_datetime",
    "vernal_equinox",
    "delta_t",
    "leap_years",
    "CalendarCache",
    "PersianDate",
    "PersianDateTime",
    "StrategySpec",
    "PersianCalError",
    "YearOutOfRangeError",
    "IllegalFieldValueError",
    "UnknownStrategyError",
    "EphemerisUnavailableError",
]
