"""Coordinate frames and the spherical-trigonometry transforms between them.

Horizontal, equatorial (right ascension or hour angle), ecliptic and
galactic positions, after Duffett-Smith sections 24-32. Coordinates hold
signed decimal values (hours for right ascension and hour angle, degrees
otherwise); sexagesimal forms are produced on request through the ``*_hms``
and ``*_dms`` properties.

Every asin/acos argument is clamped to [-1, 1] so that round-off near the
poles or at zero separation never produces NaN.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from skypos.angle_utils import clamp_unit, normalize_degrees, normalize_hours
from skypos.civil import Angle, CivilTime, DateLike, DateTimeLike, Direction, TimeLike
from skypos.constants import (
    ARCSEC_PER_DEGREE,
    DAYS_PER_JULIAN_CENTURY,
    DEGREES_PER_HOUR_RA,
    GALACTIC_NODE_LONGITUDE,
    GALACTIC_POLE_INCLINATION,
    GALACTIC_POLE_RA_DEGREES,
    J2000,
    OBLIQUITY_COEFFS,
    OBLIQUITY_J2000,
)
from skypos.sidereal import lst_hours_from_ut
from skypos.time_utils import decimal_hours_from_time, julian_day, time_from_decimal_hours


@dataclass(frozen=True)
class EquatorialCoord:
    """Right ascension (hours, [0, 24)) and declination (degrees)."""

    right_ascension: float
    declination: float

    @classmethod
    def from_sexagesimal(cls, right_ascension: TimeLike, declination: TimeLike) -> EquatorialCoord:
        return cls(decimal_hours_from_time(right_ascension), decimal_hours_from_time(declination))

    @property
    def ra_hms(self) -> CivilTime:
        return time_from_decimal_hours(self.right_ascension)

    @property
    def dec_dms(self) -> Angle:
        return time_from_decimal_hours(self.declination)


@dataclass(frozen=True)
class EquatorialCoordHA:
    """Hour angle (hours, west of the meridian) and declination (degrees)."""

    hour_angle: float
    declination: float

    @classmethod
    def from_sexagesimal(cls, hour_angle: TimeLike, declination: TimeLike) -> EquatorialCoordHA:
        return cls(decimal_hours_from_time(hour_angle), decimal_hours_from_time(declination))

    @property
    def ha_hms(self) -> CivilTime:
        return time_from_decimal_hours(self.hour_angle)

    @property
    def dec_dms(self) -> Angle:
        return time_from_decimal_hours(self.declination)


@dataclass(frozen=True)
class HorizonCoord:
    """Altitude and azimuth in degrees, azimuth from North through East."""

    altitude: float
    azimuth: float

    @classmethod
    def from_sexagesimal(cls, altitude: TimeLike, azimuth: TimeLike) -> HorizonCoord:
        return cls(decimal_hours_from_time(altitude), decimal_hours_from_time(azimuth))

    @property
    def alt_dms(self) -> Angle:
        return time_from_decimal_hours(self.altitude)

    @property
    def az_dms(self) -> Angle:
        return time_from_decimal_hours(self.azimuth)


@dataclass(frozen=True)
class EclipticCoord:
    """Ecliptic latitude (beta) and longitude (lambda) in degrees."""

    latitude: float
    longitude: float

    @classmethod
    def from_sexagesimal(cls, latitude: TimeLike, longitude: TimeLike) -> EclipticCoord:
        return cls(decimal_hours_from_time(latitude), decimal_hours_from_time(longitude))


@dataclass(frozen=True)
class GalacticCoord:
    """Galactic latitude (b) and longitude (l) in degrees."""

    latitude: float
    longitude: float

    @classmethod
    def from_sexagesimal(cls, latitude: TimeLike, longitude: TimeLike) -> GalacticCoord:
        return cls(decimal_hours_from_time(latitude), decimal_hours_from_time(longitude))


def mean_obliquity_of_ecliptic(date: DateLike) -> float:
    """Mean obliquity of the ecliptic in degrees at the given date.

    ``epsilon = 23.439292 - (46.815 T + 0.0006 T^2 - 0.00181 T^3) / 3600``
    with T in Julian centuries from J2000.0.
    """
    t = (julian_day(date) - J2000) / DAYS_PER_JULIAN_CENTURY
    c1, c2, c3 = OBLIQUITY_COEFFS
    return OBLIQUITY_J2000 - (c1 * t + c2 * t * t + c3 * t * t * t) / ARCSEC_PER_DEGREE


def _reflect_if_west(angle: float, reference: float) -> float:
    """Replace an acos result by its reflection when ``sin(reference) >= 0``."""
    if math.sin(reference) >= 0.0:
        return 2.0 * math.pi - angle
    return angle


def _acos_ratio(numerator: float, denominator: float) -> float:
    """acos(numerator / denominator), clamped; 0 when the denominator vanishes."""
    if denominator == 0.0:
        return 0.0
    return math.acos(clamp_unit(numerator / denominator))


def horizon_from_equatorial(coord: EquatorialCoordHA, latitude: float) -> HorizonCoord:
    """Altitude and azimuth of an hour angle/declination seen from ``latitude``.

    Parameters:
        coord: Hour angle (hours) and declination (degrees).
        latitude: Observer geographic latitude in degrees.

    Returns:
        HorizonCoord with azimuth in [0, 360).
    """
    h = math.radians(coord.hour_angle * DEGREES_PER_HOUR_RA)
    dec = math.radians(coord.declination)
    lat = math.radians(latitude)
    alt = math.asin(
        clamp_unit(math.sin(dec) * math.sin(lat) + math.cos(dec) * math.cos(lat) * math.cos(h))
    )
    az = _acos_ratio(
        math.sin(dec) - math.sin(lat) * math.sin(alt),
        math.cos(lat) * math.cos(alt),
    )
    az = _reflect_if_west(az, h)
    return HorizonCoord(math.degrees(alt), normalize_degrees(math.degrees(az)))


def equatorial_from_horizon(coord: HorizonCoord, latitude: float) -> EquatorialCoordHA:
    """Hour angle and declination of an altitude/azimuth seen from ``latitude``.

    Returns:
        EquatorialCoordHA with hour angle in [0, 24).
    """
    alt = math.radians(coord.altitude)
    az = math.radians(coord.azimuth)
    lat = math.radians(latitude)
    dec = math.asin(
        clamp_unit(math.sin(alt) * math.sin(lat) + math.cos(alt) * math.cos(lat) * math.cos(az))
    )
    h = _acos_ratio(
        math.sin(alt) - math.sin(lat) * math.sin(dec),
        math.cos(lat) * math.cos(dec),
    )
    h = _reflect_if_west(h, az)
    ha = normalize_hours(math.degrees(h) / DEGREES_PER_HOUR_RA)
    return EquatorialCoordHA(ha, math.degrees(dec))


def equatorial_from_ecliptic(coord: EclipticCoord, obliquity: float) -> EquatorialCoord:
    """Right ascension and declination of an ecliptic position.

    Parameters:
        coord: Ecliptic latitude and longitude in degrees.
        obliquity: Obliquity of the ecliptic in degrees
            (see ``mean_obliquity_of_ecliptic``).
    """
    beta = math.radians(coord.latitude)
    lam = math.radians(coord.longitude)
    eps = math.radians(obliquity)
    dec = math.asin(
        clamp_unit(math.sin(beta) * math.cos(eps) + math.cos(beta) * math.sin(eps) * math.sin(lam))
    )
    y = math.sin(lam) * math.cos(eps) - math.tan(beta) * math.sin(eps)
    ra = normalize_degrees(math.degrees(math.atan2(y, math.cos(lam))))
    return EquatorialCoord(ra / DEGREES_PER_HOUR_RA, math.degrees(dec))


def ecliptic_from_equatorial(coord: EquatorialCoord, obliquity: float) -> EclipticCoord:
    """Ecliptic latitude and longitude of a right ascension/declination."""
    alpha = math.radians(coord.right_ascension * DEGREES_PER_HOUR_RA)
    dec = math.radians(coord.declination)
    eps = math.radians(obliquity)
    beta = math.asin(
        clamp_unit(math.sin(dec) * math.cos(eps) - math.cos(dec) * math.sin(eps) * math.sin(alpha))
    )
    y = math.sin(alpha) * math.cos(eps) + math.tan(dec) * math.sin(eps)
    lam = normalize_degrees(math.degrees(math.atan2(y, math.cos(alpha))))
    return EclipticCoord(math.degrees(beta), lam)


def equatorial_from_ecliptic_on(coord: EclipticCoord, date: DateLike) -> EquatorialCoord:
    """``equatorial_from_ecliptic`` with the mean obliquity at ``date``."""
    return equatorial_from_ecliptic(coord, mean_obliquity_of_ecliptic(date))


def ecliptic_from_equatorial_on(coord: EquatorialCoord, date: DateLike) -> EclipticCoord:
    """``ecliptic_from_equatorial`` with the mean obliquity at ``date``."""
    return ecliptic_from_equatorial(coord, mean_obliquity_of_ecliptic(date))


def galactic_from_equatorial(coord: EquatorialCoord) -> GalacticCoord:
    """Galactic latitude and longitude of a right ascension/declination."""
    dec = math.radians(coord.declination)
    da = math.radians(coord.right_ascension * DEGREES_PER_HOUR_RA - GALACTIC_POLE_RA_DEGREES)
    inc = math.radians(GALACTIC_POLE_INCLINATION)
    sin_b = clamp_unit(
        math.cos(dec) * math.cos(inc) * math.cos(da) + math.sin(dec) * math.sin(inc)
    )
    y = math.sin(dec) - sin_b * math.sin(inc)
    x = math.cos(dec) * math.sin(da) * math.cos(inc)
    lng = normalize_degrees(math.degrees(math.atan2(y, x)) + GALACTIC_NODE_LONGITUDE)
    return GalacticCoord(math.degrees(math.asin(sin_b)), lng)


def equatorial_from_galactic(coord: GalacticCoord) -> EquatorialCoord:
    """Right ascension and declination of a galactic latitude/longitude."""
    b = math.radians(coord.latitude)
    dl = math.radians(coord.longitude - GALACTIC_NODE_LONGITUDE)
    inc = math.radians(GALACTIC_POLE_INCLINATION)
    dec = math.asin(
        clamp_unit(math.cos(b) * math.cos(inc) * math.sin(dl) + math.sin(b) * math.sin(inc))
    )
    y = math.cos(b) * math.cos(dl)
    x = math.sin(b) * math.cos(inc) - math.cos(b) * math.sin(inc) * math.sin(dl)
    ra = normalize_degrees(math.degrees(math.atan2(y, x)) + GALACTIC_POLE_RA_DEGREES)
    return EquatorialCoord(ra / DEGREES_PER_HOUR_RA, math.degrees(dec))


def _great_circle(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """Angle in degrees between two (longitude, latitude) points given in degrees."""
    p1 = math.radians(lat1)
    p2 = math.radians(lat2)
    dlon = math.radians(lon1 - lon2)
    cos_d = math.sin(p1) * math.sin(p2) + math.cos(p1) * math.cos(p2) * math.cos(dlon)
    return math.degrees(math.acos(clamp_unit(cos_d)))


def angular_separation(ra1: float, dec1: float, ra2: float, dec2: float) -> float:
    """Angle in degrees between two equatorial positions.

    Parameters:
        ra1, ra2: Right ascensions in hours.
        dec1, dec2: Declinations in degrees.
    """
    return _great_circle(ra1 * DEGREES_PER_HOUR_RA, dec1, ra2 * DEGREES_PER_HOUR_RA, dec2)


def separation_equatorial(a: EquatorialCoord, b: EquatorialCoord) -> float:
    """Angle in degrees between two EquatorialCoord positions."""
    return angular_separation(a.right_ascension, a.declination, b.right_ascension, b.declination)


def separation_ecliptic(a: EclipticCoord, b: EclipticCoord) -> float:
    """Angle in degrees between two EclipticCoord positions."""
    return _great_circle(a.longitude, a.latitude, b.longitude, b.latitude)


def separation_galactic(a: GalacticCoord, b: GalacticCoord) -> float:
    """Angle in degrees between two GalacticCoord positions."""
    return _great_circle(a.longitude, a.latitude, b.longitude, b.latitude)


def hour_angle_from_ut(
    ut: DateTimeLike,
    right_ascension: TimeLike,
    longitude: float,
    direction: Direction,
) -> CivilTime:
    """Hour angle of a right ascension for an observer at a UT instant.

    ``H = LST - alpha`` reduced into [0, 24).
    """
    lst = lst_hours_from_ut(ut, longitude, direction)
    return time_from_decimal_hours(normalize_hours(lst - decimal_hours_from_time(right_ascension)))


def right_ascension_from_ut(
    ut: DateTimeLike,
    hour_angle: TimeLike,
    longitude: float,
    direction: Direction,
) -> CivilTime:
    """Right ascension on the meridian offset by ``hour_angle`` at a UT instant."""
    lst = lst_hours_from_ut(ut, longitude, direction)
    return time_from_decimal_hours(normalize_hours(lst - decimal_hours_from_time(hour_angle)))


def right_ascension_from_lst(lst: TimeLike, hour_angle: TimeLike) -> CivilTime:
    """Right ascension from a local sidereal time and an hour angle."""
    ra = decimal_hours_from_time(lst) - decimal_hours_from_time(hour_angle)
    return time_from_decimal_hours(normalize_hours(ra))
