from __future__ import annotations

import argparse
import random
from typing import List, Optional

import persiancal
from persiancal.core.time import MILLIS_PER_DAY, millis_to_civil


def check_year(cal, Y: int) -> List[str]:
    """Every day of year Y: fields -> instant -> fields, plus the year length against the leap flag."""
    problems: List[str] = []
    start = cal.year_start(Y)
    n_days = (cal.year_start(Y + 1) - start) // MILLIS_PER_DAY if Y < cal.max_year else cal.days_in_year(Y)
    if n_days != cal.days_in_year(Y):
        problems.append(f"Y={Y}: year has {n_days} days but leap flag says {cal.days_in_year(Y)}")

    for M in range(1, 13):
        for D in range(1, cal.days_in_month(Y, M) + 1):
            t = cal.instant(Y, M, D, 12)
            f = cal.fields_of(t)
            if (f.year, f.month, f.day) != (Y, M, D):
                problems.append(f"{Y}-{M:02d}-{D:02d} -> {f.year}-{f.month:02d}-{f.day:02d}")
            c = millis_to_civil(t)
            back = cal.from_civil(c.year, c.month, c.day)
            if (back.year, back.month, back.day) != (Y, M, D):
                problems.append(f"{Y}-{M:02d}-{D:02d} via civil -> {back.isoformat()}")
    return problems


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Round-trip every day of sampled years through a strategy.")
    p.add_argument("--strategy", default="KB")
    p.add_argument("--from-year", type=int, default=None, help="Default: strategy minimum")
    p.add_argument("--to-year", type=int, default=None, help="Default: strategy maximum")
    p.add_argument("--sample", type=int, default=200, help="Years to sample (0 = every year)")
    p.add_argument("--seed", type=int, default=42)
    args = p.parse_args(argv)

    cal = persiancal.get_calendar(args.strategy)
    Y0 = cal.min_year if args.from_year is None else args.from_year
    Y1 = cal.max_year if args.to_year is None else args.to_year
    years = list(range(Y0, Y1 + 1))
    if args.sample and args.sample < len(years):
        random.seed(args.seed)
        years = sorted(random.sample(years, args.sample))

    failures = 0
    for Y in years:
        for msg in check_year(cal, Y):
            failures += 1
            print(msg)

    print(f"{cal.key}: checked {len(years)} years in [{Y0}, {Y1}], {failures} problems")
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
