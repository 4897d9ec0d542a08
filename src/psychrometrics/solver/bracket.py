from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from psychrometrics.exceptions import SolverResultError

if TYPE_CHECKING:
    from psychrometrics.solver.brent import SolverConfig

logger = logging.getLogger(__name__)

Residual = Callable[[float], float]


def evaluate(residual: Residual, x: float) -> float:
    """Evaluate a residual at `x` and reject anything that is not a finite number.

    Arithmetic failures raised by the residual (division by zero, overflow) are reported
    the same way as NaN or infinite results, as a :class:`SolverResultError`.
    """

    try:
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            value = float(residual(x))
    except (ZeroDivisionError, OverflowError) as exc:
        raise SolverResultError(
            f"Residual evaluation failed: {exc}", a=x, b=x, f_a=np.nan, f_b=np.nan
        ) from exc
    if np.isnan(value):
        raise SolverResultError("Solution error. NaN value detected", a=x, b=x, f_a=value, f_b=value)
    if np.isinf(value):
        raise SolverResultError("Solution error. Infinite number detected", a=x, b=x, f_a=value, f_b=value)
    return value


@dataclass(frozen=True)
class Bracket:
    """
    Two trial points with their residual values.

    `b` is always the point with the smaller absolute residual (the current best
    estimate), `a` the farther one. A bracket is valid for root finding when the two
    residuals have opposite signs.
    """

    a: float
    b: float
    f_a: float
    f_b: float

    @classmethod
    def from_values(cls, x1: float, f_x1: float, x2: float, f_x2: float) -> Bracket:
        """Order two already evaluated points so that `b` is closer to the root."""
        if abs(f_x1) < abs(f_x2):
            return cls(a=x2, b=x1, f_a=f_x2, f_b=f_x1)
        return cls(a=x1, b=x2, f_a=f_x1, f_b=f_x2)

    @classmethod
    def from_points(cls, residual: Residual, point_a: float, point_b: float) -> Bracket:
        return cls.from_values(point_a, evaluate(residual, point_a), point_b, evaluate(residual, point_b))

    @property
    def has_sign_change(self) -> bool:
        return self.f_a * self.f_b < 0.0

    @property
    def width(self) -> float:
        return abs(self.b - self.a)


def linear_extrapolation_from_value(x1: float, f_x1: float, x2: float, f_x2: float, f_x: float) -> float:
    """Argument `x` at which the line through P1(x1, f_x1) and P2(x2, f_x2) reaches `f_x`."""
    return x1 + (f_x - f_x1) * (x2 - x1) / (f_x2 - f_x1)


def evaluate_bracket(residual: Residual, bracket: Bracket, config: SolverConfig) -> Bracket:
    """
    Search for a sign-changing bracket starting from a one-sided guess.

    The best point `b` and a second point `b / p2` define a line. On every cycle `i`
    that line is solved for the target residual ``-f(b) / (p3 - i)``, i.e. a value of
    opposite sign to ``f(b)``, and the real residual is evaluated there. The search stops
    as soon as that residual changes sign. Cycles where ``p3 - i == 0`` or where the two
    points coincide are skipped.

    The search assumes a smooth, monotonic residual near the guess. The returned bracket
    may still be invalid; the caller decides how to report that.
    """

    p2 = config.second_point_divisor
    p3 = config.target_value_divisor
    cycles = max(config.eval_cycles, p3)
    current = bracket

    logger.debug(
        "Bracket evaluation start: a = %.6g, b = %.6g, f(a) = %.6g, f(b) = %.6g",
        current.a,
        current.b,
        current.f_a,
        current.f_b,
    )
    for i in range(cycles + 1):
        if p3 - i == 0:
            continue
        x1, f_x1 = current.b, current.f_b
        x2 = x1 / p2
        if x2 == x1:
            continue
        f_x2 = evaluate(residual, x2)
        if f_x2 == f_x1:
            continue
        target = -f_x1 / (p3 - i)
        x = linear_extrapolation_from_value(x1, f_x1, x2, f_x2, target)
        f_x = evaluate(residual, x)
        current = Bracket.from_values(x1, f_x1, x, f_x)
        logger.debug(
            "Bracket evaluation step %d: a = %.6g, b = %.6g, f(a) = %.6g, f(b) = %.6g",
            i,
            current.a,
            current.b,
            current.f_a,
            current.f_b,
        )
        if f_x * f_x1 < 0.0:
            break
    return current


__all__ = [
    "Residual",
    "Bracket",
    "evaluate",
    "evaluate_bracket",
    "linear_extrapolation_from_value",
]
