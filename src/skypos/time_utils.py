"""Calendar and clock arithmetic: Julian Day, day numbers, decimal hours.

Algorithms follow Duffett-Smith, "Practical Astronomy with your Calculator"
(sections 3-10). Date/time string parsing is delegated to rms-julian.
"""

from __future__ import annotations

import logging
import math
import re

import julian

from skypos.angle_utils import carry_over
from skypos.civil import (
    CivilDate,
    CivilDateTime,
    CivilTime,
    DateLike,
    DateTimeLike,
    TimeLike,
    Weekday,
    date_parts,
    is_leap_year,
    time_parts,
)
from skypos.config import get_leapsecs_path
from skypos.constants import (
    DAYS_PER_JULIAN_YEAR,
    EPOCH_YEAR,
    GREGORIAN_REFORM_JDN,
    HOURS_PER_DAY,
    J2000,
    JD_CALENDAR_OFFSET,
    MINUTES_PER_HOUR,
    MJD_OFFSET,
    SECOND_DECIMALS,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
)

logger = logging.getLogger(__name__)

# Leap seconds loaded once at first use.
_leapsecs_loaded = False


def is_julian_date(date: DateLike) -> bool:
    """Return True if the date falls before the Gregorian reform (1582-10-15)."""
    year, month, day = date_parts(date)
    if year != 1582:
        return year < 1582
    if month != 10:
        return month < 10
    return day < 15.0


def julian_day(date: DateLike) -> float:
    """Convert a calendar date (fractional day allowed) to Julian Day.

    Dates before 1582-10-15 are taken in the Julian calendar, later ones in
    the Gregorian calendar. Years use astronomical numbering (0 = 1 BC).

    Parameters:
        date: Any DateLike, e.g. ``CivilDate(1985, 2, 17.25)``.

    Returns:
        Julian Day (2446113.75 for the example).
    """
    year, month, day = date_parts(date)
    if month <= 2:
        y, m = year - 1, month + 12
    else:
        y, m = year, month
    if is_julian_date(date):
        b = 0
    else:
        a = math.floor(y / 100)
        b = 2 - a + math.floor(a / 4)
    # floor, not truncation, so negative years need no extra correction.
    c = math.floor(DAYS_PER_JULIAN_YEAR * y)
    d = math.floor(30.6001 * (m + 1))
    return b + c + d + day + JD_CALENDAR_OFFSET


def julian_day_from_ut(ut: DateTimeLike) -> float:
    """Julian Day of a date plus its time of day."""
    return julian_day(ut) + decimal_hours_from_time(ut) / HOURS_PER_DAY


def date_from_julian_day(jd: float) -> CivilDate:
    """Convert a Julian Day back to a calendar date with fractional day.

    Parameters:
        jd: Julian Day.

    Returns:
        CivilDate in the Julian calendar up to JD 2299160, Gregorian after.
    """
    jd += 0.5
    i = math.floor(jd)
    f = jd - i
    if i > GREGORIAN_REFORM_JDN:
        a = math.floor((i - 1867216.25) / 36524.25)
        b = i + 1 + a - math.floor(a / 4)
    else:
        b = i
    c = b + 1524
    d = math.floor((c - 122.1) / DAYS_PER_JULIAN_YEAR)
    e = math.floor(DAYS_PER_JULIAN_YEAR * d)
    g = math.floor((c - e) / 30.6001)
    day = c - e + f - math.floor(30.6001 * g)
    month = g - 1 if g < 13.5 else g - 13
    year = d - 4716 if month > 2.5 else d - 4715
    return CivilDate(int(year), int(month), day)


def add_days(date: DateLike, days: float) -> CivilDate:
    """Shift a date by a (possibly fractional or negative) number of days."""
    return date_from_julian_day(julian_day(date) + days)


def j2000_from_julian_day(jd: float) -> float:
    """Days since J2000.0 (2000 January 1.5)."""
    return jd - J2000


def modified_julian_day(jd: float) -> float:
    """Modified Julian Day (JD - 2400000.5)."""
    return jd - MJD_OFFSET


def day_number(date: DateLike) -> int:
    """Day of the year, counting January 1 as day 1.

    A fractional day is truncated.
    """
    year, month, day = date_parts(date)
    k = 62 if is_leap_year(year) else 63
    if month <= 2:
        n = math.floor((month - 1) * k / 2)
    else:
        n = math.floor((month + 1) * 30.6) - k
    return int(n + day)


def days_since_1990(year: int) -> int:
    """Days from 1990 January 0.0 to January 0.0 of ``year`` (negative before)."""
    return round(julian_day(CivilDate(year, 1, 0.0)) - julian_day(CivilDate(EPOCH_YEAR, 1, 0.0)))


def days_since_epoch(date: DateLike) -> float:
    """Days from 1990 January 0.0 to the given date, fractional day included."""
    year, _, day = date_parts(date)
    return days_since_1990(year) + day_number(date) + (day - math.floor(day))


def decimal_year(date: DateLike) -> float:
    """Decimal year at the middle of the date's month, ``y + (m - 0.5)/12``."""
    year, month, _ = date_parts(date)
    return year + (month - 0.5) / 12.0


def weekday(date: DateLike) -> Weekday:
    """Day of the week from ``(JD + 1.5) mod 7`` taken at 0h of the date.

    A fractional day never moves the result to the next weekday.
    """
    return Weekday((math.floor(julian_day(date) + 0.5) + 1) % 7)


def decimal_hours_from_time(time: TimeLike) -> float:
    """Convert hours (or degrees), minutes, seconds to a signed decimal.

    A minus sign on any component makes the whole value negative.
    """
    hour, minute, second = time_parts(time)
    value = abs(hour) + (abs(minute) + abs(second) / SECONDS_PER_MINUTE) / MINUTES_PER_HOUR
    if hour < 0 or minute < 0 or second < 0:
        return -value
    return value


def time_from_decimal_hours(value: float) -> CivilTime:
    """Convert a signed decimal to hours (or degrees), minutes, seconds.

    The sign goes onto the first non-zero component: -0.5 becomes
    ``CivilTime(0, -30, 0.0)``. Seconds are rounded to 1e-9 so that values
    such as 2h10m do not come back as 2h09m59.999999.
    """
    seconds = round(abs(value) * SECONDS_PER_HOUR, SECOND_DECIMALS)
    second, minutes = carry_over(seconds, SECONDS_PER_MINUTE)
    minute, hour = carry_over(minutes, MINUTES_PER_HOUR)
    hour, minute = int(hour), int(minute)
    if value < 0:
        if hour != 0:
            hour = -hour
        elif minute != 0:
            minute = -minute
        else:
            second = -second
    return CivilTime(hour, minute, second)


def normalize_time(time: TimeLike) -> tuple[CivilTime, int]:
    """Carry out-of-range clock components into a time of day.

    Returns:
        (time within [00:00:00, 24:00:00), whole days carried).
    """
    hour, minute, second = time_parts(time)
    second, carry = carry_over(second, SECONDS_PER_MINUTE)
    minutes, carry = carry_over(minute + carry, MINUTES_PER_HOUR)
    hours, days = carry_over(hour + carry, HOURS_PER_DAY)
    return (CivilTime(int(hours), int(minutes), second), days)


def normalize_datetime(dt: DateTimeLike) -> CivilDateTime:
    """Normalize clock components, moving any carried days into the date.

    ``2021-01-31 23:61:-2`` becomes ``2021-02-01 00:00:58``.
    """
    time, days = normalize_time(dt)
    date = add_days(dt, days) if days else CivilDate.from_date(dt)
    return CivilDateTime.combine(date, time)


def _shift_zone(dt: DateTimeLike, zone: float) -> CivilDateTime:
    """Add ``zone`` hours to a date/time, wrapping through midnight."""
    hours = decimal_hours_from_time(dt) + zone
    hours, days = carry_over(hours, HOURS_PER_DAY)
    date = add_days(dt, days) if days else CivilDate.from_date(dt)
    return CivilDateTime.combine(date, time_from_decimal_hours(hours))


def ut_from_local(dt: DateTimeLike, zone: float) -> CivilDateTime:
    """Universal Time from a local civil time in a zone ``zone`` hours east of UT."""
    return _shift_zone(dt, -zone)


def local_from_ut(ut: DateTimeLike, zone: float) -> CivilDateTime:
    """Local civil time in a zone ``zone`` hours east of UT."""
    return _shift_zone(ut, zone)


def _ensure_leapsecs() -> None:
    """Load leap seconds into rms-julian once.

    Uses the LSK named by the configuration if it loads; otherwise falls back
    to the LSK bundled with rms-julian.
    """
    global _leapsecs_loaded
    if _leapsecs_loaded:
        return
    path = get_leapsecs_path()
    if path is not None:
        try:
            julian.load_lsk(path)
            _leapsecs_loaded = True
            logger.debug('Loaded leap seconds from %s', path)
            return
        except (OSError, KeyError, ValueError) as e:
            logger.info(
                'Leap seconds from %s not used (%s); using rms-julian bundled LSK.',
                path,
                e,
            )
    julian.load_lsk()
    _leapsecs_loaded = True


def parse_datetime(string: str) -> CivilDateTime | None:
    """Parse a UT date/time string into a CivilDateTime.

    Accepts any format rms-julian understands, an ISO-8601 trailing ``Z``,
    and ``"YYYY HH:MM:SS"`` (January 1 of that year).

    Returns:
        The parsed CivilDateTime, or None if no form parses.
    """
    _ensure_leapsecs()
    stripped = string.strip()
    candidates = [stripped]
    if stripped.endswith(('Z', 'z')):
        candidates.append(stripped[:-1])
    year_hms = re.fullmatch(r'(-?\d{1,4})\s+(\d{1,2}:\d{2}:\d{2}(?:\.\d*)?)', stripped)
    if year_hms is not None:
        year, hms = year_hms.groups()
        candidates.append(f'{year}-01-01 {hms}')
    for candidate in candidates:
        try:
            day, sec = julian.day_sec_from_string(candidate)[:2]
            y, m, d = julian.ymd_from_day(int(day))
            h, mi, s = julian.hms_from_sec(float(sec))
        except (ValueError, TypeError, LookupError, OSError):
            continue
        return CivilDateTime(int(y), int(m), int(d), int(h), int(mi), float(s))
    logger.debug('Unparseable date/time %r', string)
    return None
