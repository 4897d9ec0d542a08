"""Error taxonomy for property, inversion and process calculations.

Input problems and numerical failures are kept apart so callers can branch on the
type instead of parsing messages:

- :class:`InvalidArgumentError` is raised before any iteration for out-of-range inputs.
- :class:`SolverConditionError` is raised when no sign-changing bracket could be found.
- :class:`SolverResultError` is raised when a residual evaluates to NaN or infinity.
- :class:`SolverConvergenceError` is raised only in strict mode when the iteration limit is hit.
"""

from __future__ import annotations


class PsychrometricsError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgumentError(PsychrometricsError, ValueError):
    """A physical input lies outside its valid range."""

    def __init__(self, name: str, value: object, constraint: str) -> None:
        self.name = name
        self.value = value
        self.constraint = constraint
        super().__init__(f"{name} = {value!r} violates constraint: {constraint}")


class SolverError(PsychrometricsError):
    """Base class for numerical failures of the root solver."""

    def __init__(self, message: str, *, a: float, b: float, f_a: float, f_b: float) -> None:
        self.a = a
        self.b = b
        self.f_a = f_a
        self.f_b = f_b
        super().__init__(f"{message} (a = {a:.6g}, b = {b:.6g}, f(a) = {f_a:.6g}, f(b) = {f_b:.6g})")


class SolverConditionError(SolverError):
    """The bracket evaluator could not produce residuals of opposite sign."""


class SolverResultError(SolverError, ArithmeticError):
    """A residual evaluation produced a non-finite value."""


class SolverConvergenceError(SolverError):
    """The iteration limit was reached before the tolerance was met (strict mode only)."""

    def __init__(self, message: str, *, a: float, b: float, f_a: float, f_b: float, iterations: int) -> None:
        self.iterations = iterations
        super().__init__(message, a=a, b=b, f_a=f_a, f_b=f_b)


__all__ = [
    "PsychrometricsError",
    "InvalidArgumentError",
    "SolverError",
    "SolverConditionError",
    "SolverResultError",
    "SolverConvergenceError",
]
