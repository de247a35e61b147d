"""Exception types raised by skypos computations."""

from __future__ import annotations


class SkyposError(Exception):
    """Base exception for skypos-specific errors."""


class InvalidDateError(SkyposError, ValueError):
    """Raised when calendar components do not describe a valid date.

    A caller mistake: month outside 1-12, or day outside the month.
    """

    def __init__(self, year: int, month: int, day: float, reason: str) -> None:
        self.year = year
        self.month = month
        self.day = day
        self.reason = reason
        super().__init__(f'Invalid date {year}-{month}-{day}: {reason}')


class ConvergenceError(SkyposError, RuntimeError):
    """Raised when an iterative solver exceeds its iteration bound.

    Signals an internal invariant violation (malformed input reaching the
    solver), not a recoverable condition.
    """

    def __init__(self, solver: str, iterations: int, residual: float) -> None:
        self.solver = solver
        self.iterations = iterations
        self.residual = residual
        super().__init__(
            f'{solver} did not converge after {iterations} iterations '
            f'(residual {residual:.3e})'
        )
