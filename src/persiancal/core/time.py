from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional

MILLIS_PER_SECOND = 1000
MILLIS_PER_MINUTE = 60 * MILLIS_PER_SECOND
MILLIS_PER_HOUR = 60 * MILLIS_PER_MINUTE
MILLIS_PER_DAY = 24 * MILLIS_PER_HOUR

# JDN of 1970-01-01 and the JD at its midnight
JDN_UNIX_EPOCH = 2440588
JD_UNIX_EPOCH = 2440587.5

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_NAIVE_EPOCH = datetime(1970, 1, 1)


@dataclass(frozen=True)
class CivilDateTime:
    """Proleptic Gregorian fields (astronomical year numbering, year 0 exists)."""
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0


def civil_to_jdn(year: int, month: int, day: int) -> int:
    """Proleptic Gregorian date -> Julian Day Number (Fliegel-Van Flandern)."""
    a = (14 - month) // 12
    y2 = year + 4800 - a
    m2 = month + 12 * a - 3
    return day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045


def jdn_to_civil(jdn: int) -> tuple[int, int, int]:
    """Inverse of civil_to_jdn."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return year, month, day


def civil_to_millis(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    millisecond: int = 0,
) -> int:
    """UTC civil fields -> milliseconds since 1970-01-01T00:00Z."""
    days = civil_to_jdn(year, month, day) - JDN_UNIX_EPOCH
    return (
        days * MILLIS_PER_DAY
        + hour * MILLIS_PER_HOUR
        + minute * MILLIS_PER_MINUTE
        + second * MILLIS_PER_SECOND
        + millisecond
    )


def millis_to_civil(instant: int) -> CivilDateTime:
    """Milliseconds -> UTC civil fields. Floors towards the past for negative instants."""
    days, rem = divmod(instant, MILLIS_PER_DAY)
    y, m, d = jdn_to_civil(days + JDN_UNIX_EPOCH)
    hour, rem = divmod(rem, MILLIS_PER_HOUR)
    minute, rem = divmod(rem, MILLIS_PER_MINUTE)
    second, ms = divmod(rem, MILLIS_PER_SECOND)
    return CivilDateTime(y, m, d, hour, minute, second, ms)


def from_julian_day(jd: float) -> int:
    """
    Julian Day (from noon) -> milliseconds. Truncates towards zero, so sub-millisecond
    residue before 1970 rounds up in time.
    """
    return int((jd - JD_UNIX_EPOCH) * MILLIS_PER_DAY)


def to_julian_day(instant: int) -> float:
    return instant / MILLIS_PER_DAY + JD_UNIX_EPOCH


def iso_day_of_week(instant: int) -> int:
    """ISO weekday of the UTC civil day containing instant: 1=Monday .. 7=Sunday."""
    # 1970-01-01 was a Thursday
    return 1 + (instant // MILLIS_PER_DAY + 3) % 7


# ============================================================
# Host bridges: datetime / date / tzinfo
# ============================================================

def date_to_millis(d: date) -> int:
    """Civil date -> milliseconds of its midnight, read as a wall-clock (local) day."""
    return (d.toordinal() - _NAIVE_EPOCH.toordinal()) * MILLIS_PER_DAY


def datetime_to_millis(dt: datetime) -> int:
    """Aware datetime -> UTC milliseconds."""
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    delta = dt - _EPOCH
    return (delta.days * 86400 + delta.seconds) * MILLIS_PER_SECOND + delta.microseconds // 1000


def millis_to_datetime(instant: int, tz: Optional[tzinfo] = None) -> datetime:
    dt = _EPOCH + timedelta(milliseconds=instant)
    return dt if tz is None else dt.astimezone(tz)


# datetime can only represent years 1..9999; zone rules are looked up at the nearest edge
_MIN_LOOKUP = datetime_to_millis(datetime(1, 1, 2, tzinfo=timezone.utc))
_MAX_LOOKUP = datetime_to_millis(datetime(9999, 12, 30, tzinfo=timezone.utc))


def _clamp_lookup(instant: int) -> int:
    return min(max(instant, _MIN_LOOKUP), _MAX_LOOKUP)


def zone_offset_millis(zone: tzinfo, instant: int) -> int:
    """UTC offset of zone at the UTC instant, in milliseconds."""
    dt = millis_to_datetime(_clamp_lookup(instant), zone)
    off = dt.utcoffset()
    return 0 if off is None else int(off.total_seconds() * MILLIS_PER_SECOND)


def zone_offset_from_local(zone: tzinfo, local: int) -> int:
    """
    Offset applying to a wall-clock reading in zone. Ambiguous readings take the
    earlier offset (fold=0); readings inside a gap take the offset before the gap.
    """
    wall = _NAIVE_EPOCH + timedelta(milliseconds=_clamp_lookup(local))
    off = wall.replace(tzinfo=zone).utcoffset()
    return 0 if off is None else int(off.total_seconds() * MILLIS_PER_SECOND)


def zone_id(zone: Optional[tzinfo]) -> str:
    """Stable identity string for a tzinfo, used in cache keys."""
    if zone is None:
        return "UTC"
    key = getattr(zone, "key", None)
    if key:
        return str(key)
    return str(zone)


def is_utc(zone: Optional[tzinfo]) -> bool:
    if zone is None or zone is timezone.utc:
        return True
    return zone_id(zone) in ("UTC", "Etc/UTC", "UTC+00:00")
