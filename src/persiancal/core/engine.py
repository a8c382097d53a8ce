from __future__ import annotations

import logging
import threading
from datetime import tzinfo
from typing import TYPE_CHECKING, Dict, Hashable, List, Optional, Tuple, Union

from .time import is_utc, zone_id
from .types import StrategySpec

if TYPE_CHECKING:
    from ..engines.calendar import PersianCalendar
    from ..engines.interfaces import EpochStrategyProtocol

log = logging.getLogger(__name__)

StrategyRef = Union[str, StrategySpec, "EpochStrategyProtocol"]
CacheKey = Tuple[str, Hashable]


class CalendarCache:
    """
    Memoizes one PersianCalendar per (zone, strategy). Entries are never
    evicted; a zoned calendar wraps the cached UTC calendar of the same
    strategy, so both land in the cache on the first zoned lookup.
    Hits are plain dict reads; only misses take the lock.
    """

    def __init__(self) -> None:
        self._calendars: Dict[CacheKey, "PersianCalendar"] = {}
        self._strategies: Dict[Hashable, "EpochStrategyProtocol"] = {}
        self._lock = threading.Lock()

    def _strategy(self, strategy: StrategyRef) -> "EpochStrategyProtocol":
        from ..engines.factory import make_strategy
        from ..engines.specs import resolve_spec

        if not isinstance(strategy, (str, StrategySpec)):
            return strategy
        strat = self._strategies.get(strategy)
        if strat is None:
            spec = resolve_spec(strategy) if isinstance(strategy, str) else strategy
            strat = self._strategies.setdefault(strategy, make_strategy(spec))
        return strat

    def get(self, zone: Optional[tzinfo], strategy: StrategyRef) -> "PersianCalendar":
        from ..engines.calendar import PersianCalendar

        strat = self._strategy(strategy)
        key = (zone_id(zone), strat.cache_key)
        cal = self._calendars.get(key)
        if cal is not None:
            return cal

        utc_key = (zone_id(None), strat.cache_key)
        with self._lock:
            cal = self._calendars.get(key)
            if cal is not None:
                return cal

            utc = self._calendars.get(utc_key)
            if utc is None:
                utc = PersianCalendar(strat)
                self._calendars[utc_key] = utc
                log.debug("cache miss: built UTC calendar for %s", strat.key)
            if is_utc(zone):
                cal = utc
            else:
                cal = PersianCalendar(strat, zone, base=utc)
                log.debug("cache miss: built %s calendar for %s", zone_id(zone), strat.key)
            self._calendars[key] = cal
            return cal

    def list(self) -> List[CacheKey]:
        with self._lock:
            return list(self._calendars.keys())

    def clear(self) -> None:
        with self._lock:
            self._calendars.clear()
            self._strategies.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._calendars)
