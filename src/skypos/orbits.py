"""Kepler's equation and the true anomaly of an elliptical orbit."""

from __future__ import annotations

import logging
import math

from skypos.constants import EARTH_ORBIT_ECCENTRICITY, KEPLER_MAX_ITERATIONS, KEPLER_TOLERANCE
from skypos.errors import ConvergenceError

logger = logging.getLogger(__name__)


def solve_kepler(
    mean_anomaly: float,
    eccentricity: float = EARTH_ORBIT_ECCENTRICITY,
    *,
    tolerance: float = KEPLER_TOLERANCE,
    max_iterations: int = KEPLER_MAX_ITERATIONS,
) -> float:
    """Solve ``E - e sin E = M`` for the eccentric anomaly by Newton iteration.

    Seeded with ``E = M`` (Duffett-Smith section 47).

    Parameters:
        mean_anomaly: Mean anomaly M in radians.
        eccentricity: Orbital eccentricity e (Earth's orbit by default).
        tolerance: Stop when ``|E - e sin E - M|`` falls below this (radians).
        max_iterations: Iteration bound.

    Returns:
        Eccentric anomaly E in radians (3.521581853 for M = 3.527781).

    Raises:
        ConvergenceError: If the bound is reached without convergence.
    """
    ecc_anomaly = mean_anomaly
    for iteration in range(max_iterations + 1):
        residual = ecc_anomaly - eccentricity * math.sin(ecc_anomaly) - mean_anomaly
        if abs(residual) <= tolerance:
            logger.debug('Kepler converged after %d iterations (M=%.9f)', iteration, mean_anomaly)
            return ecc_anomaly
        ecc_anomaly -= residual / (1.0 - eccentricity * math.cos(ecc_anomaly))
    raise ConvergenceError('solve_kepler', max_iterations, residual)


def true_anomaly(ecc_anomaly: float, eccentricity: float = EARTH_ORBIT_ECCENTRICITY) -> float:
    """True anomaly in radians from the eccentric anomaly.

    ``tan(v/2) = sqrt((1 + e) / (1 - e)) tan(E/2)``.
    """
    factor = math.sqrt((1.0 + eccentricity) / (1.0 - eccentricity))
    return 2.0 * math.atan(factor * math.tan(ecc_anomaly / 2.0))
