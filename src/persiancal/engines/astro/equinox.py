"""
persiancal.engines.astro.equinox
--------------------------------
March (vernal) equinox after Meeus, *Astronomical Algorithms* ch. 27.

The mean equinox JDE0 comes from a quartic in millennia, then a 24-term
periodic correction is applied. The result is turned into UTC milliseconds by
removing both a linear TT offset estimate and the model ΔT for March of the
year, so the instant lands a minute or two before the true equinox.
"""

from __future__ import annotations
from dataclasses import dataclass
import math
from typing import Optional, Tuple

from ...core.time import CivilDateTime, MILLIS_PER_SECOND, from_julian_day, millis_to_civil
from .deltat import DeltaTModel, EspenakMeeusDeltaT

JD_J2000 = 2451545.0
DAYS_PER_CENTURY = 36525.0

_DEFAULT_DELTA_T = EspenakMeeusDeltaT()


@dataclass(frozen=True)
class PerturbationTerm:
    """amplitude * cos(phase + rate*T), angles in degrees, T in Julian centuries."""
    amplitude: float
    phase: float
    rate: float


# Meeus table 27.C
PERTURBATIONS: Tuple[PerturbationTerm, ...] = (
    PerturbationTerm(485, 324.96, 1934.136),
    PerturbationTerm(203, 337.23, 32964.467),
    PerturbationTerm(199, 342.08, 20.186),
    PerturbationTerm(182, 27.85, 445267.112),
    PerturbationTerm(156, 73.14, 45036.886),
    PerturbationTerm(136, 171.52, 22518.443),
    PerturbationTerm(77, 222.54, 65928.934),
    PerturbationTerm(74, 296.72, 3034.906),
    PerturbationTerm(70, 243.58, 9037.513),
    PerturbationTerm(58, 119.81, 33718.147),
    PerturbationTerm(52, 297.17, 150.678),
    PerturbationTerm(50, 21.02, 2281.226),
    PerturbationTerm(45, 247.54, 29929.562),
    PerturbationTerm(44, 325.15, 31555.956),
    PerturbationTerm(29, 60.93, 4443.417),
    PerturbationTerm(18, 155.12, 67555.328),
    PerturbationTerm(17, 288.79, 4562.452),
    PerturbationTerm(16, 198.04, 62894.029),
    PerturbationTerm(14, 199.76, 31436.921),
    PerturbationTerm(12, 95.39, 14577.848),
    PerturbationTerm(12, 287.11, 31931.756),
    PerturbationTerm(12, 320.81, 34777.259),
    PerturbationTerm(9, 227.73, 1222.114),
    PerturbationTerm(8, 15.45, 16859.074),
)


def mean_equinox_jde(year: int) -> float:
    """JDE0 of the mean March equinox (Meeus table 27.A / 27.B)."""
    if year < 1000:
        m = year / 1000.0
        return (1721139.29189 + 365242.13740 * m + 0.06134 * m ** 2
                - 0.00111 * m ** 3 - 0.00071 * m ** 4)
    m = (year - 2000) / 1000.0
    return (2451623.80984 + 365242.37404 * m + 0.05169 * m ** 2
            - 0.00411 * m ** 3 - 0.00057 * m ** 4)


def sum_of_perturbations(T: float) -> float:
    return sum(p.amplitude * math.cos(math.radians(p.phase + p.rate * T)) for p in PERTURBATIONS)


def equinox_jd_tt(year: int) -> float:
    jde0 = mean_equinox_jde(year)
    T = (jde0 - JD_J2000) / DAYS_PER_CENTURY
    W = math.radians(35999.373 * T - 2.47)
    dlambda = 1.0 + 0.0334 * math.cos(W) + 0.0007 * math.cos(2.0 * W)
    S = sum_of_perturbations(T)
    return jde0 + (0.00001 * S) / dlambda - (66.0 + (year - 2000)) / 86400.0


def vernal_equinox_millis(year: int, delta_t: Optional[DeltaTModel] = None) -> int:
    """UTC milliseconds of the March equinox of Gregorian year `year`."""
    model = _DEFAULT_DELTA_T if delta_t is None else delta_t
    millis = from_julian_day(equinox_jd_tt(year))
    # whole seconds only, truncated towards zero
    correction = int(model.delta_t_seconds(year, 3))
    return millis - correction * MILLIS_PER_SECOND


def vernal_equinox_utc(year: int, delta_t: Optional[DeltaTModel] = None) -> CivilDateTime:
    return millis_to_civil(vernal_equinox_millis(year, delta_t))
