"""CLI entry point: skypos jd|sidereal|deltat|sun|moon|separation|ephemeris subcommands."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn, TextIO, cast

from skypos.angle_utils import dms_string, parse_angle
from skypos.civil import CivilDate, CivilDateTime, Direction
from skypos.config import (
    get_default_latitude,
    get_default_longitude,
    get_default_longitude_dir,
    get_log_level,
)
from skypos.constants import HOURS_PER_DAY
from skypos.coords import (
    EquatorialCoord,
    EquatorialCoordHA,
    angular_separation,
    horizon_from_equatorial,
    hour_angle_from_ut,
)
from skypos.delta_t import delta_t
from skypos.ephemeris import COLUMNS, EphemerisParams, generate_ephemeris
from skypos.errors import ConvergenceError
from skypos.moon import moon_equatorial_position
from skypos.sidereal import gst_hours_from_ut, lst_hours_from_ut
from skypos.sun import equation_of_time_from_ut, equatorial_position_of_sun
from skypos.time_utils import (
    day_number,
    decimal_hours_from_time,
    julian_day_from_ut,
    modified_julian_day,
    parse_datetime,
    weekday,
)

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool = False) -> None:
    """Configure logging for CLI (stderr, level from --verbose or SKYPOS_LOG)."""
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = get_log_level()
    if env_level is not None:
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr,
    )


def _parse_time(text: str) -> CivilDateTime:
    """Parse a UT date/time argument or raise ValueError."""
    value = parse_datetime(text)
    if value is None:
        raise ValueError(f'Invalid date/time {text!r}')
    return value


def _parse_angle_arg(text: str) -> float:
    """argparse type for sexagesimal or decimal angles."""
    value = parse_angle(text)
    if value is None:
        raise argparse.ArgumentTypeError(f'invalid angle {text!r}')
    return value


def _observer(args: argparse.Namespace) -> tuple[float, float, Direction]:
    """Latitude, longitude and direction from args, falling back to configuration."""
    latitude = args.latitude if args.latitude is not None else get_default_latitude()
    longitude = args.longitude if args.longitude is not None else get_default_longitude()
    direction = Direction.parse(args.lon_dir or get_default_longitude_dir())
    return (latitude, longitude, direction)


def _print_position(
    label: str,
    position: EquatorialCoord,
    ut: CivilDateTime,
    args: argparse.Namespace,
) -> None:
    print(
        f'{label} RA {dms_string(position.right_ascension, "hms")}'
        f'  Dec {dms_string(position.declination)}'
    )
    if args.latitude is None and args.longitude is None:
        return
    latitude, longitude, direction = _observer(args)
    ha = hour_angle_from_ut(ut, position.ra_hms, longitude, direction)
    horizon = horizon_from_equatorial(
        EquatorialCoordHA(decimal_hours_from_time(ha), position.declination), latitude
    )
    print(f'Alt {dms_string(horizon.altitude)}  Az {dms_string(horizon.azimuth)}')


def _jd_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Print Julian Day, MJD, weekday and day of year (jd subcommand)."""
    ut = _parse_time(args.time)
    jd = julian_day_from_ut(ut)
    print(f'JD {jd:.6f}')
    print(f'MJD {modified_julian_day(jd):.6f}')
    print(f'Weekday {weekday(ut).name.title()}')
    print(f'Day {day_number(ut)}')
    return 0


def _sidereal_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Print GST and LST for a UT instant (sidereal subcommand)."""
    ut = _parse_time(args.time)
    _, longitude, direction = _observer(args)
    print(f'GST {dms_string(gst_hours_from_ut(ut), "hms", 3)}')
    print(f'LST {dms_string(lst_hours_from_ut(ut, longitude, direction), "hms", 3)}')
    return 0


def _deltat_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Print delta-T in seconds (deltat subcommand)."""
    ut = _parse_time(args.time)
    print(f'{delta_t(ut):.3f}')
    return 0


def _sun_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Print the Sun's position and the equation of time (sun subcommand)."""
    ut = _parse_time(args.time)
    hours = decimal_hours_from_time(ut)
    instant = CivilDate(ut.year, ut.month, ut.day + hours / HOURS_PER_DAY)
    _print_position('Sun', equatorial_position_of_sun(instant), ut, args)
    eot = decimal_hours_from_time(equation_of_time_from_ut(ut))
    print(f'EoT {dms_string(eot, "hms", 1)}')
    return 0


def _moon_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Print the Moon's position (moon subcommand)."""
    ut = _parse_time(args.time)
    _print_position('Moon', moon_equatorial_position(ut), ut, args)
    return 0


def _separation_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Print the angle between two RA/Dec positions (separation subcommand)."""
    sep = angular_separation(args.ra1, args.dec1, args.ra2, args.dec2)
    print(f'{sep:.6f}')
    return 0


def _ephemeris_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Generate an ephemeris table (ephemeris subcommand).

    Parameters:
        parser: Argument parser (unused).
        args: Parsed args; body, start, stop, interval, columns, observer.

    Returns:
        Exit code 0 on success.
    """
    columns = list(args.columns or [])
    latitude = args.latitude
    longitude = args.longitude
    if 'altaz' in columns or latitude is not None or longitude is not None:
        latitude, longitude, _ = _observer(args)
    params = EphemerisParams(
        body=args.body,
        start_time=args.start,
        stop_time=args.stop,
        interval=args.interval,
        time_unit=args.time_unit,
        latitude=latitude,
        longitude=longitude,
        lon_dir=args.lon_dir or get_default_longitude_dir(),
        columns=columns,
    )
    if args.output is not None:
        with open(args.output, 'w') as f:
            count = generate_ephemeris(params, f)
    else:
        out: TextIO = sys.stdout
        count = generate_ephemeris(params, out)
    logger.info('Wrote %d ephemeris rows', count)
    return 0


def _add_observer_args(sub: argparse.ArgumentParser) -> None:
    sub.add_argument(
        '--latitude',
        type=_parse_angle_arg,
        default=None,
        help='Latitude (deg); env: SKYPOS_LATITUDE',
    )
    sub.add_argument(
        '--longitude',
        type=_parse_angle_arg,
        default=None,
        help='Longitude (deg); env: SKYPOS_LONGITUDE',
    )
    sub.add_argument(
        '--lon-dir',
        type=str,
        default=None,
        choices=['east', 'west'],
        help='env: SKYPOS_LONGITUDE_DIR',
    )


def main() -> int:
    """Entry point for the skypos CLI.

    Returns:
        Exit code 0 on success, 1 on invalid input, 2 on internal error.
    """
    parser = argparse.ArgumentParser(
        prog='skypos',
        description='Julian Day, sidereal time, Sun and Moon positions, coordinate conversions.',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')
    subparsers = parser.add_subparsers(dest='command', required=True)

    jd_parser = subparsers.add_parser('jd', help='Julian Day of a UT date/time')
    jd_parser.add_argument('time', type=str, help='UT date/time, e.g. "1985-02-17 06:00"')
    jd_parser.set_defaults(func=_jd_cmd)

    sid_parser = subparsers.add_parser('sidereal', help='Greenwich and local sidereal time')
    sid_parser.add_argument('time', type=str, help='UT date/time')
    _add_observer_args(sid_parser)
    sid_parser.set_defaults(func=_sidereal_cmd)

    dt_parser = subparsers.add_parser('deltat', help='Delta-T (TT - UT) in seconds')
    dt_parser.add_argument('time', type=str, help='UT date')
    dt_parser.set_defaults(func=_deltat_cmd)

    sun_parser = subparsers.add_parser('sun', help='Position of the Sun')
    sun_parser.add_argument('time', type=str, help='UT date/time')
    _add_observer_args(sun_parser)
    sun_parser.set_defaults(func=_sun_cmd)

    moon_parser = subparsers.add_parser('moon', help='Position of the Moon')
    moon_parser.add_argument('time', type=str, help='UT date/time')
    _add_observer_args(moon_parser)
    moon_parser.set_defaults(func=_moon_cmd)

    sep_parser = subparsers.add_parser('separation', help='Angle between two RA/Dec positions')
    sep_parser.add_argument('ra1', type=_parse_angle_arg, help='RA (hours), e.g. 5h13m31.7s')
    sep_parser.add_argument(
        'dec1', type=_parse_angle_arg, help='Dec (deg); put -- before negative sexagesimal values'
    )
    sep_parser.add_argument('ra2', type=_parse_angle_arg, help='RA (hours)')
    sep_parser.add_argument('dec2', type=_parse_angle_arg, help='Dec (deg)')
    sep_parser.set_defaults(func=_separation_cmd)

    ephem_parser = subparsers.add_parser('ephemeris', help='Generate ephemeris table')
    ephem_parser.add_argument('--body', type=str, default='sun', choices=['sun', 'moon'])
    ephem_parser.add_argument('--start', type=str, required=True, help='Start time (UT)')
    ephem_parser.add_argument('--stop', type=str, required=True, help='Stop time (UT)')
    ephem_parser.add_argument('--interval', type=float, default=1.0, help='Time step')
    ephem_parser.add_argument(
        '--time-unit',
        type=str,
        default='hour',
        choices=['sec', 'min', 'hour', 'day'],
    )
    ephem_parser.add_argument(
        '--columns',
        type=str,
        nargs='*',
        default=None,
        choices=list(COLUMNS),
        help='Columns (default: ymdhms radec)',
    )
    _add_observer_args(ephem_parser)
    ephem_parser.add_argument('-o', '--output', type=str, default=None, help='Output file')
    ephem_parser.set_defaults(func=_ephemeris_cmd)

    args = parser.parse_args()
    _configure_logging(verbose=args.verbose)
    try:
        return cast(int, args.func(parser, args))
    except ConvergenceError as e:
        print(f'Internal error: {e}', file=sys.stderr)
        return 2
    except (ValueError, OSError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1


def cli_main() -> NoReturn:
    """Entry point for console_scripts; calls main() and exits with its return code."""
    sys.exit(main())


if __name__ == '__main__':
    sys.exit(main())
