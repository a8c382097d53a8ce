"""
persiancal.engines.astro.deltat
-------------------------------
ΔT (TT - UT) in seconds, used to bring the dynamical-time equinox back to
civil UTC.

Models take a Gregorian year and month. The decimal year used by the
polynomials is y = year + (month - 0.5)/12, i.e. the middle of the month.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Protocol, Tuple


def decimal_year(year: int, month: int) -> float:
    return year + (month - 0.5) / 12.0


class DeltaTModel(Protocol):
    """ΔT = TT - UT, in seconds."""

    def delta_t_seconds(self, year: int, month: int) -> float: ...

    def info(self) -> Dict[str, object]: ...


@dataclass(frozen=True)
class ConstantDeltaT:
    value: float

    def delta_t_seconds(self, year: int, month: int) -> float:
        return float(self.value)

    def info(self) -> Dict[str, object]:
        return {"type": "constant", "value": self.value}


@dataclass(frozen=True)
class PolyDeltaT:
    """
    ΔT = Σ c[k] * u^k, where u = (x - y0)/scale.
    x is the decimal year, or the integer year when whole_year is set.
    """
    coeff: Tuple[float, ...]   # c0, c1, ..., cn
    y0: float = 2000.0
    scale: float = 1.0
    whole_year: bool = False

    def delta_t_seconds(self, year: int, month: int) -> float:
        x = float(year) if self.whole_year else decimal_year(year, month)
        u = (x - self.y0) / self.scale
        # Horner
        acc = 0.0
        for c in reversed(self.coeff):
            acc = acc * u + c
        return acc

    def info(self) -> Dict[str, object]:
        return {"type": "poly", "coeff": self.coeff, "y0": self.y0, "scale": self.scale,
                "whole_year": self.whole_year}


# Long-term parabola used outside the tabulated era
_PARABOLA = PolyDeltaT((-20.0, 0.0, 32.0), y0=1820.0, scale=100.0, whole_year=True)

# (first year, end year exclusive, model); bands are selected by the integer year
ESPENAK_MEEUS_SEGMENTS: Tuple[Tuple[int, int, PolyDeltaT], ...] = (
    (-500, 500, PolyDeltaT(
        (10583.6, -1014.41, 33.78311, -5.952053, -0.1798452, 0.022174192, 0.0090316521),
        y0=0.0, scale=100.0)),
    (500, 1600, PolyDeltaT(
        (1574.2, -556.01, 71.23472, 0.319781, -0.8503463, -0.005050998, 0.0083572073),
        y0=1000.0, scale=100.0)),
    (1600, 1700, PolyDeltaT((120.0, -0.9808, -0.01532, 1.0 / 7129.0), y0=1600.0)),
    (1700, 1800, PolyDeltaT((8.83, 0.1603, -0.0059285, 0.00013336, -1.0 / 1174000.0), y0=1700.0)),
    (1800, 1860, PolyDeltaT(
        (13.72, -0.332447, 0.0068612, 0.0041116, -0.00037436, 0.0000121272, -0.0000001699, 0.000000000875),
        y0=1800.0)),
    (1860, 1900, PolyDeltaT(
        (7.62, 0.5737, -0.251754, 0.01680668, -0.0004473624, 1.0 / 233174.0), y0=1860.0)),
    (1900, 1920, PolyDeltaT((-2.79, 1.494119, -0.0598939, 0.0061966, -0.000197), y0=1900.0)),
    (1920, 1941, PolyDeltaT((21.20, 0.84493, -0.076100, 0.0020936), y0=1920.0)),
    (1941, 1961, PolyDeltaT((29.07, 0.407, -1.0 / 233.0, 1.0 / 2547.0), y0=1950.0)),
    (1961, 1986, PolyDeltaT((45.45, 1.067, -1.0 / 260.0, -1.0 / 718.0), y0=1975.0)),
    (1986, 2005, PolyDeltaT(
        (63.86, 0.3345, -0.060374, 0.0017275, 0.000651814, 0.00002373599), y0=2000.0)),
    (2005, 2050, PolyDeltaT((62.92, 0.32217, 0.005589), y0=2000.0)),
    # -20 + 32*u^2 - 0.5628*(2150 - y), expanded in u = (y - 1820)/100
    (2050, 2150, PolyDeltaT((-20.0 - 0.5628 * 330.0, 56.28, 32.0), y0=1820.0, scale=100.0)),
)


@dataclass(frozen=True)
class EspenakMeeusDeltaT:
    """
    Espenak & Meeus (2006) piecewise polynomials, as printed in the NASA
    eclipse canon. Outside [1955, 2005] the lunar secular acceleration
    correction -0.000012932*(y - 1955)^2 is added.
    """
    segments: Tuple[Tuple[int, int, PolyDeltaT], ...] = ESPENAK_MEEUS_SEGMENTS
    outer: PolyDeltaT = _PARABOLA
    correction_window: Tuple[int, int] = (1955, 2005)
    correction_coeff: float = -0.000012932

    def _band(self, year: int) -> PolyDeltaT:
        for y0, y1, m in self.segments:
            if y0 <= year < y1:
                return m
        return self.outer

    def delta_t_seconds(self, year: int, month: int) -> float:
        dt = self._band(year).delta_t_seconds(year, month)
        lo, hi = self.correction_window
        if lo <= year <= hi:
            return dt
        y = decimal_year(year, month)
        return dt + self.correction_coeff * (y - lo) ** 2

    def info(self) -> Dict[str, object]:
        return {
            "type": "espenak_meeus",
            "segments": [(a, b, m.info()) for a, b, m in self.segments],
            "outer": self.outer.info(),
            "correction_window": self.correction_window,
        }
