from __future__ import annotations

from typing import Dict

from ..core.errors import UnknownStrategyError
from ..core.types import StrategyId, StrategySpec
from .birashk import BirashkParams
from .borkowski import BorkowskiParams
from .khayyam import KhayyamParams
from .meeus import MeeusParams


# ============================================================
# ARITHMETIC STRATEGIES
# ============================================================

KHAYYAM = StrategySpec(
    kind="khayyam",
    id=StrategyId("OK", "khayyam"),
    params=KhayyamParams(),
)

BIRASHK = StrategySpec(
    kind="birashk",
    id=StrategyId("AB", "birashk"),
    params=BirashkParams(),
)

BORKOWSKI = StrategySpec(
    kind="borkowski",
    id=StrategyId("KB", "borkowski"),
    params=BorkowskiParams(),
)


# ============================================================
# ASTRONOMICAL STRATEGY
# ============================================================

# 51°30′ E, clock offset +3h30m
MEEUS = StrategySpec(
    kind="meeus",
    id=StrategyId("AS", "meeus"),
    params=MeeusParams(),
)

# Tehran's own longitude, 51°25'33" E
MEEUS_TEHRAN = MEEUS.tweak(longitude_degrees=51, longitude_minutes=25, longitude_seconds=33)


# ------------------------------------------------------------

ALL_SPECS: Dict[str, StrategySpec] = {
    "OK": KHAYYAM,
    "AB": BIRASHK,
    "KB": BORKOWSKI,
    "AS": MEEUS,
}

VARIANT_SPECS: Dict[str, StrategySpec] = {
    "meeus-tehran": MEEUS_TEHRAN,
}

ALIASES: Dict[str, str] = {
    "khayyam": "OK",
    "birashk": "AB",
    "borkowski": "KB",
    "khayyam-borkowski": "KB",
    "meeus": "AS",
    "astronomical": "AS",
}

DEFAULT_STRATEGY = "KB"


def resolve_spec(name: str) -> StrategySpec:
    """Strategy key ("KB"), alias ("borkowski") or variant name ("meeus-tehran")."""
    if name in ALL_SPECS:
        return ALL_SPECS[name]
    lowered = name.lower()
    if lowered in VARIANT_SPECS:
        return VARIANT_SPECS[lowered]
    if lowered in ALIASES:
        return ALL_SPECS[ALIASES[lowered]]
    if name.upper() in ALL_SPECS:
        return ALL_SPECS[name.upper()]
    available = sorted(ALL_SPECS) + sorted(ALIASES) + sorted(VARIANT_SPECS)
    raise UnknownStrategyError(f"Unknown strategy '{name}'. Available: {available}")
