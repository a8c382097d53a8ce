# tests/test_diagnostics.py

import sys
from unittest.mock import patch

import pytest

import persiancal
from persiancal.core.errors import EphemerisUnavailableError
from persiancal.diagnostics import leap_years, new_years_table, round_trip



def test_text_barcode_marks_out_of_range_years():
    bars = leap_years.text_barcode("KB", -63, -59)
    assert bars[:2] == "  "
    assert set(bars[2:]) <= {"#", "."}


def test_parse_strategies():
    assert new_years_table.parse_strategies("Khayyam=OK,meeus-tehran") == [
        ("Khayyam", "OK"),
        ("Meeus-tehran", "meeus-tehran"),
    ]
    with pytest.raises(SystemExit):
        leap_years.parse_strategies(" , ")


def test_round_trip_check_year_is_clean():
    for key in ("OK", "AB", "KB", "AS"):
        cal = persiancal.get_calendar(key)
        assert round_trip.check_year(cal, 1403) == []
    cal = persiancal.get_calendar("AB")
    assert round_trip.check_year(cal, cal.max_year) == []


def test_new_years_table_marks_disagreement(capsys):
    # Khayyam and Borkowski part ways at 1634/1635
    assert new_years_table.main(["--from-year", "1634", "--to-year", "1636", "--strategies", "OK,KB"]) == 0
    out = capsys.readouterr().out
    assert "<>" in out


def test_compare_strategies():
    pytest.importorskip("numpy")
    from persiancal.diagnostics import compare_strategies

    offs = compare_strategies.new_year_offsets("KB", "OK", 1210, 1634)
    assert set(offs.values()) == {0}
    assert compare_strategies.main(["--strategies", "KB", "--reference", "OK",
                                    "--start-year", "1600", "--end-year", "1700"]) == 0


def test_ephemeris_requires_extras():
    from persiancal.ephemeris import require_ephemeris

    with patch.dict(sys.modules, {"skyfield": None, "jplephem": None}):
        with pytest.raises(EphemerisUnavailableError):
            require_ephemeris()


def test_seasons_constructor_requires_extras():
    from persiancal.ephemeris.seasons import SkyfieldSeasons

    with patch.dict(sys.modules, {"skyfield": None}):
        with pytest.raises(EphemerisUnavailableError):
            SkyfieldSeasons("de421.bsp")
