from __future__ import annotations
import re
from datetime import date, datetime, time, tzinfo
from typing import Optional, Tuple, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import SunsetFormatError

DateLike = Union[date, datetime]

_HHMM_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::(\d{2}))?")


def to_jdn(d: date) -> int:
    """Convert Gregorian date to Julian Day Number (JDN)."""
    y, m, day = d.year, d.month, d.day
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    jdn = day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045
    return jdn

def from_jdn(jdn: int) -> date:
    """Fliegel-Van Flandern inverse of to_jdn (Gregorian)."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return date(year, month, day)

def weekday_sun0(d: date) -> int:
    """Day of week with 0=Sunday..6=Saturday."""
    return d.isoweekday() % 7

def parse_ymd(s: str) -> date:
    y, m, d = map(int, s.strip()[:10].split("-"))
    return date(y, m, d)

def as_date(value: DateLike) -> date:
    """Strip the time-of-day; comparisons in the engine are date-only."""
    if isinstance(value, datetime):
        return value.date()
    return value

def parse_hhmm(s: str) -> time:
    """
    Parse a time-of-day such as "18:30", "18:30:15" or "18:30 (PKT)".
    Raises SunsetFormatError on anything else.
    """
    if not isinstance(s, str):
        raise SunsetFormatError(f"Expected 'HH:MM' string, got {type(s).__name__}")
    m = _HHMM_RE.match(s)
    if not m:
        raise SunsetFormatError(f"Cannot parse time-of-day {s!r}")
    hh, mm, ss = int(m.group(1)), int(m.group(2)), int(m.group(3) or 0)
    if hh > 23 or mm > 59 or ss > 59:
        raise SunsetFormatError(f"Time-of-day out of range: {s!r}")
    return time(hh, mm, ss)

def resolve_zone(name: Optional[str]) -> Tuple[Optional[tzinfo], Optional[str]]:
    """
    Look up an IANA zone. Returns (zone, warning); zone is None when the
    host zone should be used, either by request or because the lookup failed.
    """
    if not name:
        return None, None
    try:
        return ZoneInfo(name), None
    except (ZoneInfoNotFoundError, ValueError) as e:
        return None, f"unknown timezone {name!r}: {e}"

def local_datetime(instant: datetime, zone: Optional[tzinfo]) -> datetime:
    """Wall-clock view of `instant` in `zone` (host zone when None)."""
    if zone is None:
        return instant.astimezone()
    return instant.astimezone(zone)
