from __future__ import annotations
from persiancal.core.engine import CalendarCache
from persiancal.engines.specs import ALL_SPECS


def build_cache(*, preload: bool = False) -> CalendarCache:
    """Fresh cache; with preload=True the UTC calendar of every standard strategy is built up front."""
    cache = CalendarCache()
    if preload:
        for spec in ALL_SPECS.values():
            cache.get(None, spec)
    return cache
