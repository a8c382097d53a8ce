#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional

from persiancal.engines.astro.equinox import vernal_equinox_millis
from persiancal.ephemeris.seasons import SkyfieldSeasons


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "persiancal[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "persiancal[diagnostics]"') from e


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Validate the built-in March equinox against a JPL ephemeris.")
    p.add_argument("--year-start", type=int, default=1900)
    p.add_argument("--year-end", type=int, default=2049)
    p.add_argument("--kernel", default=None, help="Path to a .bsp kernel (default: $PERSIANCAL_EPHEMERIS or de421.bsp)")
    p.add_argument("--out-png", default="", help="Also plot residuals against year.")
    args = p.parse_args(argv)

    np = _need_numpy()

    print("Loading ephemeris...")
    seasons = SkyfieldSeasons(args.kernel)
    eqs = seasons.march_equinoxes(args.year_start, args.year_end)
    if not eqs:
        raise SystemExit("No equinoxes found in the requested range")

    years = np.array([e.year for e in eqs], dtype=int)
    resid = np.array([(vernal_equinox_millis(e.year) - e.instant) / 1000.0 for e in eqs], dtype=float)

    print(f"Validated {len(years)} equinoxes from {years[0]} to {years[-1]}")
    print(f"  mean residual : {resid.mean():+.1f} s")
    print(f"  std           : {resid.std():.1f} s")
    print(f"  min / max     : {resid.min():+.1f} s / {resid.max():+.1f} s")

    if args.out_png:
        plt = _need_matplotlib()
        fig, ax = plt.subplots(figsize=(12, 4))
        ax.scatter(years, resid, s=6)
        ax.set_title("March equinox: Meeus model - ephemeris")
        ax.set_xlabel("Year")
        ax.set_ylabel("Residual (s)")
        ax.grid(True, alpha=0.3)
        plt.tight_layout()
        plt.savefig(args.out_png, dpi=200)
        print(f"Plot saved to {args.out_png}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
