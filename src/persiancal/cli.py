from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import re
import sys

from persiancal.core.errors import PersianCalError


_DATE_RE = re.compile(r"^-?\d{1,7}-\d{2}-\d{2}$")


def _parse_ymd(s: str) -> tuple[int, int, int]:
    neg = s.startswith("-")
    y, m, d = map(int, s.lstrip("-").split("-"))
    return (-y if neg else y), m, d


def _dates_as_positionals(argv: list[str]) -> list[str]:
    """Move date tokens behind "--" so argparse does not read -0050-03-21 as an option."""
    dates = [a for a in argv if _DATE_RE.match(a)]
    if not dates:
        return argv
    return [a for a in argv if not _DATE_RE.match(a)] + ["--"] + dates


def _iso(year: int, month: int, day: int) -> str:
    sign = "-" if year < 0 else ""
    return f"{sign}{abs(year):04d}-{month:02d}-{day:02d}"


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def cmd_day(argv: list[str]) -> int:
    import persiancal

    p = argparse.ArgumentParser(prog="persiancal day", description="Gregorian -> Persian date")
    p.add_argument("date", help="YYYY-MM-DD")
    p.add_argument("--strategy", default="KB")
    args = p.parse_args(_dates_as_positionals(argv))

    y, m, d = _parse_ymd(args.date)
    cal = persiancal.get_calendar(args.strategy)
    pd = cal.from_civil(y, m, d)
    t = cal.instant(pd.year, pd.month, pd.day)
    dow = cal.day_of_week(t)
    leap = " (leap year)" if cal.is_leap_year(pd.year) else ""
    print(f"{pd.isoformat()} AP  [{pd.strategy}]  weekday {dow}{leap}")
    return 0


def cmd_to_gregorian(argv: list[str]) -> int:
    import persiancal

    p = argparse.ArgumentParser(prog="persiancal to-gregorian", description="Persian -> Gregorian date")
    p.add_argument("date", help="Persian YYYY-MM-DD")
    p.add_argument("--strategy", default="KB")
    args = p.parse_args(_dates_as_positionals(argv))

    y, m, d = _parse_ymd(args.date)
    c = persiancal.get_calendar(args.strategy).to_civil(y, m, d)
    print(_iso(c.year, c.month, c.day))
    return 0


def cmd_equinox(argv: list[str]) -> int:
    from persiancal.engines.astro.equinox import equinox_jd_tt, vernal_equinox_utc

    p = argparse.ArgumentParser(prog="persiancal equinox", description="March equinox (Meeus) for Gregorian years.")
    p.add_argument("year", type=int)
    p.add_argument("--to-year", type=int, default=None)
    args = p.parse_args(argv)

    last = args.year if args.to_year is None else args.to_year
    for Y in range(args.year, last + 1):
        c = vernal_equinox_utc(Y)
        print(
            f"{Y}: {c.year:04d}-{c.month:02d}-{c.day:02d} "
            f"{c.hour:02d}:{c.minute:02d}:{c.second:02d} UTC  (JD_TT {equinox_jd_tt(Y):.5f})"
        )
    return 0


def cmd_deltat(argv: list[str]) -> int:
    import persiancal

    p = argparse.ArgumentParser(prog="persiancal deltat", description="Delta-T (TT - UT) in seconds.")
    p.add_argument("year", type=int)
    p.add_argument("--month", type=int, default=3)
    args = p.parse_args(argv)

    print(f"DeltaT({args.year}-{args.month:02d}) = {persiancal.delta_t(args.year, args.month):.3f} s")
    return 0


def cmd_strategies(argv: list[str]) -> int:
    import persiancal

    p = argparse.ArgumentParser(prog="persiancal strategies", description="List strategies.")
    p.add_argument("--verbose-info", action="store_true", help="Print the full info() of each strategy")
    args = p.parse_args(argv)

    for key in persiancal.list_strategies():
        info = persiancal.strategy_info(key)
        lo, hi = info["range"]
        print(f"{key}  {info['strategy']['id']['name']:<10} [{lo}, {hi}]  {info['strategy']['rule']}")
        if args.verbose_info:
            print(f"    {info}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    try:
        return _dispatch(argv)
    except PersianCalError as e:
        raise SystemExit(f"persiancal: error: {e}") from None


def _dispatch(argv: list[str]) -> int:
    # Shortcut: `persiancal YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        return cmd_day(argv)

    p = argparse.ArgumentParser(prog="persiancal", description="Persian (Jalali) calendar toolkit CLI.")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("day", help="Gregorian -> Persian date")
    sub.add_parser("to-gregorian", help="Persian -> Gregorian date")
    sub.add_parser("equinox", help="March equinox instants")
    sub.add_parser("deltat", help="Delta-T for a year/month")
    sub.add_parser("strategies", help="List leap-year strategies")

    # diagnostics (non-ephem)
    sub.add_parser("new-years", help="Print New Year table (diagnostics)")
    sub.add_parser("leap-years", help="Leap-year barcode across strategies (diagnostics)")

    p_diag = sub.add_parser("diag", help="Diagnostics tools (no ephemeris required)")
    p_diag.add_argument("tool", choices=["compare", "round-trip"], help="Which diagnostic to run")

    # ephem diagnostics
    p_ephem = sub.add_parser("ephem", help="Ephemeris-based diagnostics")
    p_ephem.add_argument("tool", choices=["validate-equinox"], help="Which ephemeris diagnostic to run")

    args, rest = p.parse_known_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.cmd == "day":
        return cmd_day(rest)

    if args.cmd == "to-gregorian":
        return cmd_to_gregorian(rest)

    if args.cmd == "equinox":
        return cmd_equinox(rest)

    if args.cmd == "deltat":
        return cmd_deltat(rest)

    if args.cmd == "strategies":
        return cmd_strategies(rest)

    if args.cmd == "new-years":
        return _run_module_main("persiancal.diagnostics.new_years_table", rest)

    if args.cmd == "leap-years":
        return _run_module_main("persiancal.diagnostics.leap_years", rest)

    if args.cmd == "diag":
        tool_map = {
            "compare": "persiancal.diagnostics.compare_strategies",
            "round-trip": "persiancal.diagnostics.round_trip",
        }
        return _run_module_main(tool_map[args.tool], rest)

    if args.cmd == "ephem":
        tool_map = {
            "validate-equinox": "persiancal.diagnostics.ephem.validate_equinox",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
