from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Protocol

from psychrometrics.constants import (
    SOLVER_A0,
    SOLVER_B0,
    SOLVER_EVAL_CYCLES,
    SOLVER_MAX_ITERATIONS,
    SOLVER_SECOND_POINT_DIVISOR,
    SOLVER_TARGET_VALUE_DIVISOR,
    SOLVER_TOLERANCE,
)
from psychrometrics.exceptions import SolverConditionError, SolverConvergenceError
from psychrometrics.solver.bracket import Bracket, Residual, evaluate, evaluate_bracket
from psychrometrics.validators import require_non_zero, require_positive

logger = logging.getLogger(__name__)


class StopFlag(Protocol):
    """Anything with ``is_set()``, e.g. :class:`threading.Event`."""

    def is_set(self) -> bool: ...


@dataclass(frozen=True)
class SolverConfig:
    # region Docstring
    """
    Immutable settings of one root-finding call.

    Parameters
    ----------
    tolerance : float, default 1e-5
        Absolute tolerance on the bracket width. Stored as an absolute value.
    max_iterations : int, default 100
        Iteration limit of the main loop.
    eval_cycles : int, default 2
        Number of bracket evaluation cycles; raised to `target_value_divisor` when smaller.
    second_point_divisor : int, default 2
        p2, the second extrapolation point is ``b / p2``.
    target_value_divisor : int, default 2
        p3, the extrapolation target is ``-f(b) / (p3 - i)``. Values close to the root
        call for small p3 (1 or 2); for pressure-like variables p2 = 2, p3 = 5 works well.
    strict : bool, default False
        When True, hitting the iteration limit raises :class:`SolverConvergenceError`
        instead of returning the best estimate.
    """

    # endregion
    tolerance: float = SOLVER_TOLERANCE
    max_iterations: int = SOLVER_MAX_ITERATIONS
    eval_cycles: int = SOLVER_EVAL_CYCLES
    second_point_divisor: int = SOLVER_SECOND_POINT_DIVISOR
    target_value_divisor: int = SOLVER_TARGET_VALUE_DIVISOR
    strict: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "tolerance", abs(self.tolerance))
        require_positive("tolerance", self.tolerance)
        require_positive("max_iterations", self.max_iterations)
        require_non_zero("second_point_divisor", self.second_point_divisor)

    def with_tolerance(self, tolerance: float) -> SolverConfig:
        return replace(self, tolerance=tolerance)

    def with_divisors(self, second_point_divisor: int, target_value_divisor: int) -> SolverConfig:
        return replace(
            self,
            second_point_divisor=second_point_divisor,
            target_value_divisor=target_value_divisor,
        )


DEFAULT_CONFIG = SolverConfig()


@dataclass(frozen=True)
class SolverResult:
    """Outcome of :func:`solve`. `converged` is False on iteration-limit exhaustion or cancellation."""

    root: float
    iterations: int
    converged: bool
    diff: float
    f_root: float
    bracket: Bracket


def secant(x1: float, x2: float, f_x1: float, f_x2: float) -> float:
    """Root estimate of the line through (x1, f_x1) and (x2, f_x2)."""
    return x2 - f_x2 * (x2 - x1) / (f_x2 - f_x1)


def inverse_quadratic_interpolation(
    x1: float, x2: float, x3: float, f_x1: float, f_x2: float, f_x3: float
) -> float:
    """Root estimate of the parabola x(f) fitted through three points.

    Faster than the secant step but more sensitive to the starting points, so it is
    only used once the three residuals are pairwise distinct.
    """
    return (
        x1 * f_x2 * f_x3 / ((f_x1 - f_x2) * (f_x1 - f_x3))
        + x2 * f_x1 * f_x3 / ((f_x2 - f_x1) * (f_x2 - f_x3))
        + x3 * f_x1 * f_x2 / ((f_x3 - f_x1) * (f_x3 - f_x2))
    )


def _candidate(a: float, b: float, c: float, f_a: float, f_b: float, f_c: float) -> float:
    if f_a != f_c and f_b != f_c and f_a != f_b:
        return inverse_quadratic_interpolation(a, b, c, f_a, f_b, f_c)
    if f_a != f_b:
        return secant(a, b, f_a, f_b)
    return c


def solve(
    residual: Residual,
    a0: float = SOLVER_A0,
    b0: float = SOLVER_B0,
    config: SolverConfig = DEFAULT_CONFIG,
    *,
    stop: StopFlag | None = None,
) -> SolverResult:
    # region Docstring
    """
    Find a root of `residual` between `a0` and `b0`.

    Brent-Dekker family solver with the midpoint step proposed by Zhengqiu Zhang
    (International Journal of Experimental Algorithms, 2(1), 2011): every iteration
    evaluates the bracket midpoint `c` and an interpolated point `s` (inverse quadratic
    interpolation, or secant when residuals coincide) and keeps the sub-interval that
    still changes sign.

    All iteration state lives in local variables, so concurrent calls never share state.

    Parameters
    ----------
    residual : Callable[[float], float]
        Function whose zero is sought, typically ``target - f(x)``.
    a0, b0 : float, default -50, 50
        Initial points. When they do not bracket a root, a bounded extrapolation search
        is tried first (see :func:`~psychrometrics.solver.bracket.evaluate_bracket`).
    config : SolverConfig
        Tolerance, iteration limit and bracket evaluation coefficients.
    stop : object with ``is_set()``, optional
        Polled before the loop and on every iteration. When set, the current best
        estimate is returned with ``converged=False``.

    Returns
    -------
    SolverResult
        Root estimate `b` with diagnostics.

    Raises
    ------
    SolverConditionError
        If no sign-changing bracket could be found.
    SolverResultError
        If the residual produced NaN or infinity at any evaluated point.
    SolverConvergenceError
        If `config.strict` is set and the iteration limit is reached.
    """

    # endregion
    tol = config.tolerance
    bracket = Bracket.from_points(residual, a0, b0)

    # Either endpoint may already be the root
    if abs(bracket.f_b) < tol:
        return SolverResult(bracket.b, 0, True, bracket.width, bracket.f_b, bracket)
    if stop is not None and stop.is_set():
        return SolverResult(bracket.b, 0, False, bracket.width, bracket.f_b, bracket)

    if not bracket.has_sign_change:
        bracket = evaluate_bracket(residual, bracket, config)
        if abs(bracket.f_b) < tol:
            return SolverResult(bracket.b, 0, True, bracket.width, bracket.f_b, bracket)
        if not bracket.has_sign_change:
            raise SolverConditionError(
                "Bracket evaluation failed: f(a) and f(b) must have opposite signs",
                a=bracket.a,
                b=bracket.b,
                f_a=bracket.f_a,
                f_b=bracket.f_b,
            )

    a, b, f_a, f_b = bracket.a, bracket.b, bracket.f_a, bracket.f_b
    diff = abs(b - a)
    iterations = 0
    converged = False

    while True:
        if stop is not None and stop.is_set():
            logger.debug("Solver stopped externally after %d iterations", iterations)
            break
        iterations += 1

        c = (a + b) / 2.0
        f_c = evaluate(residual, c)
        s = _candidate(a, b, c, f_a, f_b, f_c)
        diff = abs(b - a)

        f_s = evaluate(residual, s)
        if c > s:
            c, s, f_c, f_s = s, c, f_s, f_c

        # residual is pure, so known values are carried over instead of re-evaluated
        if f_c * f_s < 0.0:
            a, b, f_a, f_b = s, c, f_s, f_c
        elif f_s * f_b < 0.0:
            a, f_a = c, f_c
        else:
            b, f_b = s, f_s

        if abs(f_a) < abs(f_b):
            a, b, f_a, f_b = b, a, f_b, f_a

        logger.debug(
            "Iteration %d: a = %.8g, b = %.8g, f(a) = %.6g, f(b) = %.6g, diff = %.3e",
            iterations,
            a,
            b,
            f_a,
            f_b,
            diff,
        )

        if diff < tol or f_b == 0.0:
            converged = True
            break
        if iterations >= config.max_iterations:
            break

    final = Bracket(a=a, b=b, f_a=f_a, f_b=f_b)
    if not converged and (stop is None or not stop.is_set()):
        if config.strict:
            raise SolverConvergenceError(
                f"Iteration limit of {config.max_iterations} reached before tolerance {tol:g}",
                a=a,
                b=b,
                f_a=f_a,
                f_b=f_b,
                iterations=iterations,
            )
        logger.warning(
            "Solver reached %d iterations without meeting tolerance %.1e (diff = %.3e); returning best estimate %.8g",
            iterations,
            tol,
            diff,
            b,
        )
    return SolverResult(b, iterations, converged, diff, f_b, final)


def find_root(residual: Residual, a0: float = SOLVER_A0, b0: float = SOLVER_B0, **config_overrides) -> float:
    """Shortcut for ``solve(...).root`` with keyword overrides of :class:`SolverConfig`."""
    config = replace(DEFAULT_CONFIG, **config_overrides) if config_overrides else DEFAULT_CONFIG
    return solve(residual, a0, b0, config).root


__all__ = [
    "StopFlag",
    "SolverConfig",
    "SolverResult",
    "DEFAULT_CONFIG",
    "solve",
    "find_root",
    "secant",
    "inverse_quadratic_interpolation",
]
