from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, Literal

StrategyKey = Literal["OK", "AB", "KB", "AS"]

# Persian weekday numbering, Saturday-first
WEEKDAY_NAMES = ("Shanbeh", "Yekshanbeh", "Doshanbeh", "Seshanbeh", "Chaharshanbeh", "Panjshanbeh", "Jomeh")


@dataclass(frozen=True)
class StrategyId:
    key: StrategyKey
    name: str
    version: str = "1"


@dataclass(frozen=True)
class PersianDate:
    strategy: str
    year: int
    month: int
    day: int

    def isoformat(self) -> str:
        sign = "-" if self.year < 0 else ""
        return f"{sign}{abs(self.year):04d}-{self.month:02d}-{self.day:02d}"


@dataclass(frozen=True)
class PersianDateTime:
    strategy: str
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    millisecond: int
    day_of_week: int  # 1=Shanbeh (Saturday) .. 7=Jomeh (Friday)

    def date(self) -> PersianDate:
        return PersianDate(self.strategy, self.year, self.month, self.day)

    @property
    def weekday_name(self) -> str:
        return WEEKDAY_NAMES[self.day_of_week - 1]


@dataclass(frozen=True)
class StrategySpec:
    """Pure data payload from which a strategy is built."""
    kind: Literal["khayyam", "birashk", "borkowski", "meeus"]
    id: StrategyId
    params: Any  # KhayyamParams | BirashkParams | BorkowskiParams | MeeusParams

    @staticmethod
    def like(name: str) -> "StrategySpec":
        from ..engines.specs import resolve_spec
        return resolve_spec(name)

    def tweak(self, **kwargs) -> "StrategySpec":
        return replace(self, params=replace(self.params, **kwargs))
