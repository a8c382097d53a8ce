#ephemeris/seasons.py
from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from . import require_ephemeris
from ..core.time import datetime_to_millis

log = logging.getLogger(__name__)

# Path to a JPL .bsp kernel; when unset skyfield fetches DEFAULT_KERNEL into its cache directory
EPHEMERIS_ENV = "PERSIANCAL_EPHEMERIS"
DEFAULT_KERNEL = "de421.bsp"


@dataclass(frozen=True)
class EphemerisEquinox:
    year: int
    utc: datetime
    instant: int  # UTC milliseconds


class SkyfieldSeasons:
    """
    March equinoxes from a JPL kernel via skyfield's almanac.

    Requires optional deps:
      pip install "persiancal[ephemeris]"
    """

    def __init__(self, path: Optional[str] = None):
        require_ephemeris()
        self.path = path or os.getenv(EPHEMERIS_ENV) or DEFAULT_KERNEL
        self._kernel = None
        self._ts = None
        self._lock = threading.Lock()

    def _load(self):
        with self._lock:
            if self._kernel is None:
                import skyfield.api as sf
                log.info("loading ephemeris kernel %s", self.path)
                self._kernel = sf.load(self.path)
                self._ts = sf.load.timescale()
        return self._kernel, self._ts

    def march_equinoxes(self, start_year: int, end_year: int) -> List[EphemerisEquinox]:
        """March equinoxes for Gregorian years start_year..end_year inclusive."""
        from skyfield import almanac

        eph, ts = self._load()
        t0 = ts.utc(start_year, 1, 1)
        t1 = ts.utc(end_year + 1, 1, 1)
        times, events = almanac.find_discrete(t0, t1, almanac.seasons(eph))

        out: List[EphemerisEquinox] = []
        for t, ev in zip(times, events):
            if int(ev) != 0:  # 0 = vernal equinox
                continue
            dt = t.utc_datetime().astimezone(timezone.utc)
            out.append(EphemerisEquinox(year=dt.year, utc=dt, instant=datetime_to_millis(dt)))
        return out
