"""
persiancal.engines.factory
--------------------------
Transforms pure data specifications into live strategy and calendar objects.
"""

from __future__ import annotations

import logging
from datetime import tzinfo
from typing import Optional

from persiancal.core.types import StrategySpec
from persiancal.engines.birashk import BirashkParams, BirashkStrategy
from persiancal.engines.borkowski import BorkowskiParams, BorkowskiStrategy
from persiancal.engines.calendar import PersianCalendar
from persiancal.engines.interfaces import EpochStrategyProtocol
from persiancal.engines.khayyam import KhayyamParams, KhayyamStrategy
from persiancal.engines.meeus import MeeusParams, MeeusStrategy

log = logging.getLogger(__name__)


def make_strategy(spec: StrategySpec) -> EpochStrategyProtocol:
    """Transforms a pure data StrategySpec into a live strategy."""
    p = spec.params
    if isinstance(p, KhayyamParams):
        strategy = KhayyamStrategy(spec.id, p)
    elif isinstance(p, BirashkParams):
        strategy = BirashkStrategy(spec.id, p)
    elif isinstance(p, BorkowskiParams):
        strategy = BorkowskiStrategy(spec.id, p)
    elif isinstance(p, MeeusParams):
        strategy = MeeusStrategy(spec.id, p)
    else:
        raise TypeError(f"Unknown strategy params type: {type(p)}")
    log.debug("built %s strategy %s", spec.kind, spec.id.key)
    return strategy


def build_calendar(spec: StrategySpec, zone: Optional[tzinfo] = None) -> PersianCalendar:
    """Uncached calendar; CalendarCache.get is the shared entry point."""
    return PersianCalendar(make_strategy(spec), zone)
