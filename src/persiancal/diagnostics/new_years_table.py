from __future__ import annotations

import argparse
from typing import List, Tuple

import persiancal
from persiancal.core.time import CivilDateTime


DEFAULT_STRATEGIES: List[Tuple[str, str]] = [
    ("Khayyam", "OK"),
    ("Birashk", "AB"),
    ("Borkowski", "KB"),
    ("Meeus", "AS"),
]


def mmdd(c: CivilDateTime) -> str:
    return f"{c.month:02d}-{c.day:02d}"


def iso(c: CivilDateTime) -> str:
    return f"{c.year:04d}-{c.month:02d}-{c.day:02d}"


def parse_strategies(arg: str) -> List[Tuple[str, str]]:
    """
    Parse strategies list from CLI.
    Example:
      --strategies "Khayyam=OK,Meeus=AS"
    If you pass just keys or aliases, the names are the capitalized input:
      --strategies "borkowski,meeus-tehran"
    """
    items = [x.strip() for x in arg.split(",") if x.strip()]
    out: List[Tuple[str, str]] = []
    for it in items:
        if "=" in it:
            name, key = it.split("=", 1)
            out.append((name.strip(), key.strip()))
        else:
            out.append((it.capitalize(), it))
    return out


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print the Gregorian date of 1 Farvardin for several strategies, marking disagreements."
    )
    p.add_argument("--from-year", type=int, default=1390)
    p.add_argument("--to-year", type=int, default=1420)
    p.add_argument(
        "--strategies",
        type=str,
        default="",
        help='Comma list like "Khayyam=OK,Meeus=AS" (default: all four).',
    )
    p.add_argument(
        "--dates",
        choices=("mmdd", "iso"),
        default="mmdd",
        help="Display format in table columns (default: mmdd).",
    )
    args = p.parse_args(argv)

    strategies = parse_strategies(args.strategies) if args.strategies else DEFAULT_STRATEGIES
    fmt = mmdd if args.dates == "mmdd" else iso

    Y0, Y1 = args.from_year, args.to_year
    if Y1 < Y0:
        raise SystemExit("--to-year must be >= --from-year")

    headers = ["Year"] + [name for name, _ in strategies]
    colw = [5] + [max(11 if args.dates == "iso" else 6, len(h)) for h in headers[1:]]
    line = "  ".join(h.ljust(w) for h, w in zip(headers, colw)) + "  diff"
    print(line)
    print("-" * len(line))

    disagreements = 0
    for Y in range(Y0, Y1 + 1):
        row = [str(Y).ljust(colw[0])]
        seen = set()
        for (name, key), w in zip(strategies, colw[1:]):
            try:
                ny = persiancal.new_year_day(Y, strategy=key, as_date=False)
            except persiancal.YearOutOfRangeError:
                row.append("-".ljust(w))
                continue
            c = ny["civil"]
            seen.add((c.year, c.month, c.day))
            cell = fmt(c) + ("*" if ny["leap"] else "")
            row.append(cell.ljust(w))
        flag = "<>" if len(seen) > 1 else ""
        if flag:
            disagreements += 1
        print("  ".join(row) + "  " + flag)

    print(f"\n* = leap year; {disagreements} of {Y1 - Y0 + 1} years disagree")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
