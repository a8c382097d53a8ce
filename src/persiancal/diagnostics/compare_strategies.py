#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import Dict, List, Optional

import persiancal
from persiancal.core.time import MILLIS_PER_DAY


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


def new_year_offsets(key: str, reference: str, start_year: int, end_year: int) -> Dict[int, int]:
    """Year -> (1 Farvardin under key) - (1 Farvardin under reference), in days."""
    cal = persiancal.get_calendar(key)
    ref = persiancal.get_calendar(reference)
    lo = max(start_year, cal.min_year, ref.min_year)
    hi = min(end_year, cal.max_year, ref.max_year)
    return {
        Y: (cal.year_start(Y) - ref.year_start(Y)) // MILLIS_PER_DAY
        for Y in range(lo, hi + 1)
    }


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(
        description="New-year drift of the arithmetic strategies against a reference strategy."
    )
    p.add_argument("--reference", default="AS")
    p.add_argument("--strategies", default="OK,AB,KB")
    p.add_argument("--start-year", type=int, default=1000)
    p.add_argument("--end-year", type=int, default=2300)
    p.add_argument("--out-png", default="", help="Also plot offsets against year.")
    args = p.parse_args(argv)

    np = _need_numpy()

    keys = [k.strip() for k in args.strategies.split(",") if k.strip()]
    series = {}
    for k in keys:
        offs = new_year_offsets(k, args.reference, args.start_year, args.end_year)
        if not offs:
            print(f"{k}: no overlap with {args.reference} in the requested range")
            continue
        years = np.array(sorted(offs), dtype=int)
        vals = np.array([offs[y] for y in years], dtype=int)
        series[k] = (years, vals)

        agree = int(np.count_nonzero(vals == 0))
        print(f"{k} vs {args.reference}: {len(vals)} years [{years[0]}, {years[-1]}]")
        print(f"  agree      : {agree} ({100.0 * agree / len(vals):.1f}%)")
        uniq, counts = np.unique(vals, return_counts=True)
        for u, c in zip(uniq, counts):
            print(f"  offset {int(u):+d} d : {int(c)}")
        bad = years[vals != 0]
        if bad.size:
            print(f"  first disagreement: {int(bad[0])}, last: {int(bad[-1])}")

    if args.out_png and series:
        plt = _need_matplotlib()
        fig, ax = plt.subplots(figsize=(12, 4))
        for k, (years, vals) in series.items():
            ax.step(years, vals, where="mid", label=k)
        ax.set_xlabel("Year (AP)")
        ax.set_ylabel(f"New year - {args.reference} (days)")
        ax.grid(True, alpha=0.3)
        ax.legend()
        plt.tight_layout()
        plt.savefig(args.out_png, dpi=200)
        print(f"Plot saved to {args.out_png}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
