"""
persiancal.engines.interfaces
-----------------------------
Defines the boundary between the leap-year strategies (Epoch layer) and the
field calculus that turns them into calendar arithmetic (Field layer).

Standard Reference Frame:
All instants are integer milliseconds since 1970-01-01T00:00:00 UTC. Strategies
report year starts as UTC midnight of 1 Farvardin; zone handling is left to the
calendar wrapper.
"""

from __future__ import annotations

from typing import Any, Dict, Hashable, Protocol

from ..core.types import StrategyId


class EpochStrategyProtocol(Protocol):
    """
    One Persian intercalation rule. Implementations are immutable and do not
    validate their year range; the calendar layer does.
    """
    id: StrategyId

    @property
    def key(self) -> str:
        """Short strategy key ("OK", "AB", "KB", "AS")."""
        ...

    @property
    def min_year(self) -> int:
        ...

    @property
    def max_year(self) -> int:
        ...

    @property
    def average_days_per_year(self) -> float:
        """Mean year length, used only to seed year searches."""
        ...

    @property
    def cache_key(self) -> Hashable:
        """Identity of the strategy including its parameters."""
        ...

    def first_instant_of_year(self, year: int) -> int:
        """UTC milliseconds of 1 Farvardin 00:00 of the given year."""
        ...

    def is_leap_year(self, year: int) -> bool:
        """True when Esfand (month 12) has 30 days."""
        ...

    def info(self) -> Dict[str, Any]:
        ...
