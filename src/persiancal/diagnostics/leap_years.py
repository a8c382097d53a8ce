#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional

import persiancal


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


def parse_strategies(s: str) -> List[str]:
    out = [x.strip() for x in s.split(",") if x.strip()]
    if not out:
        raise SystemExit("--strategies must name at least one strategy")
    return out


def text_barcode(key: str, start_year: int, end_year: int) -> str:
    """One character per year: '#' leap, '.' common, ' ' outside the strategy's range."""
    cal = persiancal.get_calendar(key)
    chars = []
    for Y in range(start_year, end_year + 1):
        if not (cal.min_year <= Y <= cal.max_year):
            chars.append(" ")
        else:
            chars.append("#" if cal.is_leap_year(Y) else ".")
    return "".join(chars)


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(
        description="Leap-year barcode across strategies (text, or PNG with --out)."
    )
    p.add_argument("--start-year", type=int, default=1350)
    p.add_argument("--end-year", type=int, default=1450)
    p.add_argument("--strategies", default="OK,AB,KB,AS", help="Comma list of strategies (default: all four).")
    p.add_argument("--out", default="", help="Write a PNG barcode here instead of printing text.")
    p.add_argument("--title", default="Leap years across strategies")
    args = p.parse_args(argv)

    start_year, end_year = args.start_year, args.end_year
    if end_year < start_year:
        raise SystemExit("--end-year must be >= --start-year")
    keys = parse_strategies(args.strategies)

    if not args.out:
        width = max(len(k) for k in keys)
        print(" " * width + f"  {start_year}")
        for k in keys:
            print(f"{k.ljust(width)}  {text_barcode(k, start_year, end_year)}")
        return 0

    np = _need_numpy()
    plt = _need_matplotlib()

    years = np.arange(start_year, end_year + 1)
    Z = np.zeros((len(keys), len(years)), dtype=float)
    for i, k in enumerate(keys):
        bars = text_barcode(k, start_year, end_year)
        Z[i] = [1.0 if ch == "#" else (np.nan if ch == " " else 0.0) for ch in bars]

    fig, ax = plt.subplots(figsize=(16, 0.6 * len(keys) + 1.2))
    ax.pcolormesh(
        np.arange(start_year - 0.5, end_year + 1.5, 1.0),
        np.arange(-0.5, len(keys) + 0.5, 1.0),
        Z,
        shading="flat",
        cmap="Greys",
        vmin=0, vmax=1,
        edgecolors="0.88",
        linewidth=0.4,
    )
    ax.set_yticks(range(len(keys)))
    ax.set_yticklabels(keys)
    ax.invert_yaxis()
    ax.set_xlabel("Year (AP)")
    ax.set_title(args.title)
    plt.tight_layout()
    plt.savefig(args.out, dpi=200)
    print(f"Saved {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
