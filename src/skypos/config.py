"""Configuration: default observer, log level, and leap-second file from environment."""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

# Greenwich, on the equator, unless overridden.
DEFAULT_LATITUDE = 0.0
DEFAULT_LONGITUDE = 0.0
DEFAULT_LONGITUDE_DIR = 'east'


def _float_from_env(name: str, default: float) -> float:
    """Return float value of env var ``name``, or ``default`` if unset or invalid."""
    raw = os.environ.get(name, '').strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning('Invalid %s %r (must be numeric); using %s', name, raw, default)
        return default


def get_default_latitude() -> float:
    """Return observer latitude in degrees (SKYPOS_LATITUDE env var or default)."""
    return _float_from_env('SKYPOS_LATITUDE', DEFAULT_LATITUDE)


def get_default_longitude() -> float:
    """Return observer longitude in degrees (SKYPOS_LONGITUDE env var or default)."""
    return _float_from_env('SKYPOS_LONGITUDE', DEFAULT_LONGITUDE)


def get_default_longitude_dir() -> str:
    """Return 'east' or 'west' (SKYPOS_LONGITUDE_DIR env var or default)."""
    raw = os.environ.get('SKYPOS_LONGITUDE_DIR', '').strip().lower()
    if raw in ('east', 'e', 'west', 'w'):
        return 'west' if raw.startswith('w') else 'east'
    if raw:
        logger.warning(
            'Invalid SKYPOS_LONGITUDE_DIR %r (must be east or west); using %s',
            raw,
            DEFAULT_LONGITUDE_DIR,
        )
    return DEFAULT_LONGITUDE_DIR


def get_log_level() -> str | None:
    """Return log level name from SKYPOS_LOG, or None if unset or unknown."""
    level = os.environ.get('SKYPOS_LOG', '').strip().upper()
    if level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        return level
    return None


def get_leapsecs_path() -> str | None:
    """Return path to a NAIF LSK leap seconds file for rms-julian.

    Returns:
        Value of JULIAN_LEAPSECS, or None to use the LSK bundled with
        rms-julian.
    """
    path = os.environ.get('JULIAN_LEAPSECS', '').strip()
    return path or None
