from __future__ import annotations
from datetime import date
from typing import Union

from .types import CivilDate

DateLike = Union[date, CivilDate]


def to_jdn(d: DateLike) -> int:
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

def as_civil(d: DateLike) -> CivilDate:
    if isinstance(d, CivilDate):
        return d
    if not isinstance(d, date):
        raise TypeError(f"Expected date or CivilDate, got {type(d).__name__}")
    return CivilDate.from_date(d)

def wrap_hours(h: float) -> float:
    """Wrap hours to [0,24)."""
    y = h % 24.0
    # -1e-17 % 24.0 == 24.0 in floating point
    return 0.0 if y >= 24.0 else y

def local_midnight_jd(jdn: int, utc_offset_hours: float) -> float:
    """JD of 00:00 local clock time on the civil day numbered jdn."""
    return jdn - 0.5 - utc_offset_hours / 24.0

def jd_to_local_hours(jd: float, jdn: int, utc_offset_hours: float) -> float:
    """Local clock hours of instant jd, relative to local midnight of day jdn (may leave [0,24))."""
    return (jd - local_midnight_jd(jdn, utc_offset_hours)) * 24.0
