"""Sidereal time: UT <-> GST <-> LST (Duffett-Smith sections 12-15)."""

from __future__ import annotations

import logging
import math

from skypos.angle_utils import normalize_hours
from skypos.civil import (
    CivilDate,
    CivilDateTime,
    CivilTime,
    DateLike,
    DateTimeLike,
    Direction,
    TimeLike,
    date_parts,
)
from skypos.constants import (
    DAYS_PER_JULIAN_CENTURY,
    DEGREES_PER_HOUR_RA,
    GST_T0_COEFFS,
    HOURS_PER_DAY,
    J2000,
    SIDEREAL_PER_SOLAR,
    SOLAR_PER_SIDEREAL,
)
from skypos.time_utils import decimal_hours_from_time, julian_day, time_from_decimal_hours

logger = logging.getLogger(__name__)


def _gst_at_zero_ut(date: DateLike) -> float:
    """GST in hours at 0h UT of the date (T0), reduced into [0, 24)."""
    year, month, day = date_parts(date)
    jd = julian_day(CivilDate(year, month, math.floor(day)))
    t = (jd - J2000) / DAYS_PER_JULIAN_CENTURY
    c0, c1, c2 = GST_T0_COEFFS
    return normalize_hours(c0 + c1 * t + c2 * t * t)


def _longitude_hours(longitude: float, direction: Direction) -> float:
    """Signed offset in hours of a longitude east (+) or west (-) of Greenwich."""
    if direction is Direction.EAST:
        return longitude / DEGREES_PER_HOUR_RA
    if direction is Direction.WEST:
        return -longitude / DEGREES_PER_HOUR_RA
    logger.debug('Longitude direction %s has no east/west sense; no offset applied', direction)
    return 0.0


def gst_hours_from_ut(ut: DateTimeLike) -> float:
    """Greenwich sidereal time in decimal hours for a UT date/time.

    A fractional day on the date is treated as additional UT.
    """
    _, _, day = date_parts(ut)
    hours = decimal_hours_from_time(ut) + (day - math.floor(day)) * HOURS_PER_DAY
    return normalize_hours(hours * SIDEREAL_PER_SOLAR + _gst_at_zero_ut(ut))


def gst_from_ut(ut: DateTimeLike) -> CivilTime:
    """Greenwich sidereal time for a UT date/time.

    ``1980-04-22 14:36:51.67`` UT gives ``04:40:05.23`` GST.
    """
    return time_from_decimal_hours(gst_hours_from_ut(ut))


def ut_from_gst(gst: DateTimeLike) -> CivilTime:
    """Universal Time for a GST on the given date.

    Only the whole day of the date is used.
    """
    hours = normalize_hours(decimal_hours_from_time(gst) - _gst_at_zero_ut(gst))
    return time_from_decimal_hours(hours * SOLAR_PER_SIDEREAL)


def lst_hours_from_gst(gst: TimeLike, longitude: float, direction: Direction) -> float:
    """Local sidereal time in decimal hours."""
    return normalize_hours(decimal_hours_from_time(gst) + _longitude_hours(longitude, direction))


def lst_from_gst(gst: TimeLike, longitude: float, direction: Direction) -> CivilTime:
    """Local sidereal time from GST and observer longitude.

    Parameters:
        gst: Greenwich sidereal time.
        longitude: Observer longitude in degrees (positive).
        direction: EAST or WEST of Greenwich; NORTH/SOUTH apply no offset.
    """
    return time_from_decimal_hours(lst_hours_from_gst(gst, longitude, direction))


def gst_from_lst(lst: TimeLike, longitude: float, direction: Direction) -> CivilTime:
    """Greenwich sidereal time from LST and observer longitude."""
    hours = normalize_hours(decimal_hours_from_time(lst) - _longitude_hours(longitude, direction))
    return time_from_decimal_hours(hours)


def lst_hours_from_ut(ut: DateTimeLike, longitude: float, direction: Direction) -> float:
    """Local sidereal time in decimal hours directly from UT."""
    return normalize_hours(gst_hours_from_ut(ut) + _longitude_hours(longitude, direction))


def lst_from_ut(ut: DateTimeLike, longitude: float, direction: Direction) -> CivilTime:
    """Local sidereal time directly from UT."""
    return time_from_decimal_hours(lst_hours_from_ut(ut, longitude, direction))


def ut_from_lst(lst: DateTimeLike, longitude: float, direction: Direction) -> CivilTime:
    """Universal Time from an LST on the given date."""
    gst = gst_from_lst(lst, longitude, direction)
    return ut_from_gst(CivilDateTime.combine(lst, gst))
