"""Ephemeris table generator: Sun or Moon positions over a time range."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TextIO

from skypos.civil import CivilDate, CivilDateTime, Direction
from skypos.constants import HOURS_PER_DAY, SECONDS_PER_DAY
from skypos.coords import (
    EquatorialCoord,
    EquatorialCoordHA,
    HorizonCoord,
    hour_angle_from_ut,
    horizon_from_equatorial,
)
from skypos.moon import moon_equatorial_position
from skypos.record import Record
from skypos.sun import equatorial_position_of_sun
from skypos.time_utils import (
    date_from_julian_day,
    decimal_hours_from_time,
    julian_day_from_ut,
    modified_julian_day,
    normalize_datetime,
    parse_datetime,
)

logger = logging.getLogger(__name__)

BODY_SUN = 'sun'
BODY_MOON = 'moon'
BODIES = (BODY_SUN, BODY_MOON)

COL_JD = 'jd'
COL_MJD = 'mjd'
COL_YMDHMS = 'ymdhms'
COL_RADEC = 'radec'
COL_RADEC_HMS = 'radec_hms'
COL_ALTAZ = 'altaz'
COLUMNS = (COL_JD, COL_MJD, COL_YMDHMS, COL_RADEC, COL_RADEC_HMS, COL_ALTAZ)
DEFAULT_COLUMNS = (COL_YMDHMS, COL_RADEC)

_HEADERS = {
    COL_JD: '           jd',
    COL_MJD: '        mjd',
    COL_YMDHMS: 'year mo dy hr mi sc',
    COL_RADEC: '   ra_hrs    dec_deg',
    COL_RADEC_HMS: '          ra         dec',
    COL_ALTAZ: '      alt       az',
}

MAX_ROWS = 100000

_UNIT_SECONDS = {'sec': 1.0, 'min': 60.0, 'hour': 3600.0, 'day': SECONDS_PER_DAY}


@dataclass
class EphemerisParams:
    """Request for an ephemeris table.

    Times are UT strings in any form ``parse_datetime`` accepts. Latitude and
    longitude (degrees) give an observer for the altitude/azimuth column.
    """

    body: str
    start_time: str
    stop_time: str
    interval: float = 1.0
    time_unit: str = 'hour'
    latitude: float | None = None
    longitude: float | None = None
    lon_dir: str = 'east'
    columns: list[str] = field(default_factory=list)
    output: TextIO | None = None


@dataclass(frozen=True)
class EphemerisRow:
    """One time step of a table."""

    jd: float
    ut: CivilDateTime
    position: EquatorialCoord
    horizon: HorizonCoord | None = None


def _interval_days(interval: float, time_unit: str) -> float:
    """Convert interval and time_unit to days (at least one second)."""
    unit = time_unit.strip().lower()
    for prefix, scale in _UNIT_SECONDS.items():
        if unit.startswith(prefix):
            return max(abs(interval) * scale, 1.0) / SECONDS_PER_DAY
    raise ValueError(f'Unknown time unit {time_unit!r}; expected sec, min, hour or day')


def _datetime_from_julian_day(jd: float) -> CivilDateTime:
    """Calendar date and clock time of a Julian Day, rounded to the second."""
    date = date_from_julian_day(jd)
    day = math.floor(date.day)
    seconds = round((date.day - day) * SECONDS_PER_DAY)
    return normalize_datetime(CivilDateTime(date.year, date.month, day, 0, 0, float(seconds)))


def _body_position(body: str, ut: CivilDateTime) -> EquatorialCoord:
    if body == BODY_MOON:
        return moon_equatorial_position(ut)
    instant = CivilDate(ut.year, ut.month, ut.day + decimal_hours_from_time(ut) / HOURS_PER_DAY)
    return equatorial_position_of_sun(instant)


def _resolve_columns(params: EphemerisParams) -> list[str]:
    columns = list(params.columns) if params.columns else list(DEFAULT_COLUMNS)
    unknown = [c for c in columns if c not in COLUMNS]
    if unknown:
        raise ValueError(f'Unknown column(s) {", ".join(unknown)}; expected {", ".join(COLUMNS)}')
    if COL_ALTAZ in columns and (params.latitude is None or params.longitude is None):
        raise ValueError('Column altaz requires an observer latitude and longitude')
    return columns


def _iter_rows(
    body: str,
    jd1: float,
    step: float,
    ntimes: int,
    observer: tuple[float, float, Direction] | None,
) -> Iterator[EphemerisRow]:
    for irec in range(ntimes):
        jd = jd1 + irec * step
        ut = _datetime_from_julian_day(jd)
        position = _body_position(body, ut)
        horizon = None
        if observer is not None:
            latitude, longitude, direction = observer
            ha = hour_angle_from_ut(ut, position.ra_hms, longitude, direction)
            hadec = EquatorialCoordHA(decimal_hours_from_time(ha), position.declination)
            horizon = horizon_from_equatorial(hadec, latitude)
        yield EphemerisRow(jd, ut, position, horizon)


def compute_ephemeris(params: EphemerisParams) -> Iterator[EphemerisRow]:
    """Validate a request and return its rows, one per time step, start to stop inclusive.

    Rows are computed lazily; all validation happens before this returns.

    Raises:
        ValueError: If the body, times or interval are invalid, or the range
            needs more than MAX_ROWS steps.
    """
    body = params.body.strip().lower()
    if body not in BODIES:
        raise ValueError(f'Unknown body {params.body!r}; expected sun or moon')
    start = parse_datetime(params.start_time)
    stop = parse_datetime(params.stop_time)
    if start is None or stop is None:
        raise ValueError('Invalid start or stop time')
    jd1 = julian_day_from_ut(start)
    jd2 = julian_day_from_ut(stop)
    if jd2 < jd1:
        raise ValueError('Stop time precedes start time')
    step = _interval_days(params.interval, params.time_unit)
    # Half a second of slack so that a stop time on a step boundary is kept.
    ntimes = int((jd2 - jd1 + 0.5 / SECONDS_PER_DAY) / step) + 1
    if ntimes > MAX_ROWS:
        raise ValueError(f'Number of time steps exceeds limit of {MAX_ROWS}')
    logger.info('Ephemeris of %s: %d steps of %.6f days', body, ntimes, step)

    observer = None
    if params.latitude is not None and params.longitude is not None:
        observer = (params.latitude, params.longitude, Direction.parse(params.lon_dir))
    return _iter_rows(body, jd1, step, ntimes, observer)


def _append_column(rec: Record, column: str, row: EphemerisRow) -> None:
    if column == COL_JD:
        rec.append_float(row.jd, 13, 5)
    elif column == COL_MJD:
        rec.append_float(modified_julian_day(row.jd), 11, 5)
    elif column == COL_YMDHMS:
        ut = row.ut
        rec.append(f'{ut.year:4d}{ut.month:3d}{int(ut.day):3d}')
        rec.append(f'{ut.hour:2d}{ut.minute:3d}{int(ut.second):3d}')
    elif column == COL_RADEC:
        rec.append(f'{row.position.right_ascension:9.6f}{row.position.declination:11.5f}')
    elif column == COL_RADEC_HMS:
        rec.append_hours(row.position.right_ascension)
        rec.append_degrees(row.position.declination)
    elif column == COL_ALTAZ and row.horizon is not None:
        rec.append(f'{row.horizon.altitude:9.5f}{row.horizon.azimuth:10.5f}')


def generate_ephemeris(params: EphemerisParams, output: TextIO | None = None) -> int:
    """Generate an ephemeris table and write it to output.

    If output is None, uses params.output. If both are None, rows are
    computed but nothing is written.

    Returns:
        Number of data rows produced (header excluded).
    """
    out = output or params.output
    columns = _resolve_columns(params)
    rows = compute_ephemeris(params)
    rec = Record()
    if out is not None:
        for column in columns:
            rec.append(_HEADERS[column])
        rec.write(out)
    count = 0
    for row in rows:
        for column in columns:
            _append_column(rec, column, row)
        if out is not None:
            rec.write(out)
        else:
            rec.clear()
        count += 1
    return count
