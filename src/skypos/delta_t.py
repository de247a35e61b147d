"""Delta-T (TT - UT) from the NASA polynomial expressions.

The Moon moves fast enough that its position must be computed in
Terrestrial (dynamical) Time rather than UT. Delta-T, the difference, follows
the piecewise polynomials of Espenak & Meeus, "Five Millennium Canon of Solar
Eclipses" (https://eclipse.gsfc.nasa.gov/SEcat5/deltatpoly.html), valid from
-1999 to +3000. Each branch keeps the published coefficients; the branches
are empirical fits and are not smoothed where they meet.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from numpy.polynomial import polynomial

from skypos.civil import DateLike
from skypos.time_utils import decimal_year

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeltaTBranch:
    """One fit: ``sum(c[k] * u**k) + ramp_rate * (ramp_end - y)``.

    ``u = (y - origin) / scale``; the branch covers ``start <= y < stop``.
    """

    start: float
    stop: float
    origin: float
    scale: float
    coefficients: tuple[float, ...]
    ramp_rate: float = 0.0
    ramp_end: float = 0.0

    def contains(self, year: float) -> bool:
        return self.start <= year < self.stop

    def evaluate(self, year: float) -> float:
        """Delta-T in seconds at decimal year ``year``."""
        u = (year - self.origin) / self.scale
        value = float(polynomial.polyval(u, self.coefficients))
        if self.ramp_rate:
            value += self.ramp_rate * (self.ramp_end - year)
        return value


# Long-term parabola used before -500 and after 2150.
_PARABOLA = (-20.0, 0.0, 32.0)

DELTA_T_BRANCHES: tuple[DeltaTBranch, ...] = (
    DeltaTBranch(-math.inf, -500.0, 1820.0, 100.0, _PARABOLA),
    DeltaTBranch(
        -500.0,
        500.0,
        0.0,
        100.0,
        (10583.6, -1014.41, 33.78311, -5.952053, -0.1798452, 0.022174192, 0.0090316521),
    ),
    DeltaTBranch(
        500.0,
        1600.0,
        1000.0,
        100.0,
        (1574.2, -556.01, 71.23472, 0.319781, -0.8503463, -0.005050998, 0.0083572073),
    ),
    DeltaTBranch(1600.0, 1700.0, 1600.0, 1.0, (120.0, -0.9808, -0.01532, 1.0 / 7129.0)),
    DeltaTBranch(
        1700.0,
        1800.0,
        1700.0,
        1.0,
        (8.83, 0.1603, -0.0059285, 0.00013336, -1.0 / 1174000.0),
    ),
    DeltaTBranch(
        1800.0,
        1860.0,
        1800.0,
        1.0,
        (
            13.72,
            -0.332447,
            0.0068612,
            0.0041116,
            -0.00037436,
            0.0000121272,
            -0.0000001699,
            0.000000000875,
        ),
    ),
    DeltaTBranch(
        1860.0,
        1900.0,
        1860.0,
        1.0,
        (7.62, 0.5737, -0.251754, 0.01680668, -0.0004473624, 1.0 / 233174.0),
    ),
    DeltaTBranch(
        1900.0,
        1920.0,
        1900.0,
        1.0,
        (-2.79, 1.494119, -0.0598939, 0.0061966, -0.000197),
    ),
    DeltaTBranch(1920.0, 1941.0, 1920.0, 1.0, (21.20, 0.84493, -0.076100, 0.0020936)),
    DeltaTBranch(1941.0, 1961.0, 1950.0, 1.0, (29.07, 0.407, -1.0 / 233.0, 1.0 / 2547.0)),
    DeltaTBranch(1961.0, 1986.0, 1975.0, 1.0, (45.45, 1.067, -1.0 / 260.0, -1.0 / 718.0)),
    DeltaTBranch(
        1986.0,
        2005.0,
        2000.0,
        1.0,
        (63.86, 0.3345, -0.060374, 0.0017275, 0.000651814, 0.00002373599),
    ),
    DeltaTBranch(2005.0, 2050.0, 2000.0, 1.0, (62.92, 0.32217, 0.005589)),
    DeltaTBranch(2050.0, 2150.0, 1820.0, 100.0, _PARABOLA, ramp_rate=-0.5628, ramp_end=2150.0),
    DeltaTBranch(2150.0, math.inf, 1820.0, 100.0, _PARABOLA),
)


def delta_t_branch(year: float) -> DeltaTBranch:
    """Return the fit covering decimal year ``year``."""
    for branch in DELTA_T_BRANCHES:
        if year < branch.stop:
            return branch
    return DELTA_T_BRANCHES[-1]


def delta_t_from_decimal_year(year: float) -> float:
    """Delta-T in seconds at a decimal year."""
    branch = delta_t_branch(year)
    logger.debug('delta-T branch [%s, %s) for year %.4f', branch.start, branch.stop, year)
    return branch.evaluate(year)


def delta_t(date: DateLike) -> float:
    """Delta-T in seconds for the middle of the date's month.

    Parameters:
        date: Any DateLike.

    Returns:
        TT - UT in seconds (54.90 s for 1986 January).
    """
    return delta_t_from_decimal_year(decimal_year(date))
