"""Positional astronomy: time scales, coordinate frames, Sun and Moon positions.

This package provides the calculator-style algorithms of Duffett-Smith and
Meeus:
- Time scales: calendar date <-> Julian Day <-> GST/LST <-> UT, and delta-T
- Coordinates: horizon, equatorial, ecliptic and galactic frames, separations
- Orbits: Kepler's equation and low-precision Sun and Moon positions

Date/time strings are parsed with rms-julian.
"""

__all__: list[str] = []
