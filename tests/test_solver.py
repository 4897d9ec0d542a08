from __future__ import annotations

import logging
import math
import threading
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest
from scipy.optimize import brentq

from psychrometrics.exceptions import (
    InvalidArgumentError,
    SolverConditionError,
    SolverConvergenceError,
    SolverResultError,
)
from psychrometrics.solver.bracket import Bracket, evaluate_bracket, linear_extrapolation_from_value
from psychrometrics.solver.brent import (
    DEFAULT_CONFIG,
    SolverConfig,
    find_root,
    inverse_quadratic_interpolation,
    secant,
    solve,
)

SMOOTH_CASES = [
    {"name": "linear", "f": lambda x: x - 3.0, "a0": -50.0, "b0": 50.0},
    {"name": "cubic", "f": lambda x: x**3 - 2.0 * x - 5.0, "a0": 2.0, "b0": 3.0},
    {"name": "cosine_fixed_point", "f": lambda x: math.cos(x) - x, "a0": 0.0, "b0": 1.0},
    {"name": "exponential", "f": lambda x: math.exp(x) - 10.0, "a0": 0.0, "b0": 5.0},
    {"name": "logarithm", "f": lambda x: np.log(x) - 1.0, "a0": 1.0, "b0": 10.0},
    # not monotonic across the bracket, single root inside
    {"name": "cubic_with_hump", "f": lambda x: x**3 - x - 2.0, "a0": -2.0, "b0": 3.0},
]


class TestSolveConvergence:
    """Roots of smooth functions with a valid initial bracket."""

    @pytest.mark.parametrize("case", SMOOTH_CASES, ids=lambda case: case["name"])
    def test_matches_scipy_brentq(self, case):
        result = solve(case["f"], case["a0"], case["b0"])
        expected = brentq(case["f"], case["a0"], case["b0"], xtol=1e-12)

        assert result.converged
        assert result.root == pytest.approx(expected, abs=DEFAULT_CONFIG.tolerance)

    @pytest.mark.parametrize(
        "case",
        [case for case in SMOOTH_CASES if case["name"] in {"linear", "logarithm"}],
        ids=lambda case: case["name"],
    )
    def test_residual_within_tolerance(self, case):
        """Residual magnitude at the root stays within tolerance for slopes up to one."""
        result = solve(case["f"], case["a0"], case["b0"])
        assert abs(case["f"](result.root)) <= DEFAULT_CONFIG.tolerance
        assert result.iterations <= DEFAULT_CONFIG.max_iterations

    def test_endpoint_root_returns_without_iterating(self):
        result = solve(lambda x: x - 50.0, -50.0, 50.0)
        assert result.root == 50.0
        assert result.iterations == 0
        assert result.converged

    def test_find_root_shortcut(self):
        root = find_root(lambda x: x * x - 2.0, 0.0, 2.0, tolerance=1e-10)
        assert root == pytest.approx(math.sqrt(2.0), abs=1e-9)

    def test_same_inputs_give_same_root(self):
        f = SMOOTH_CASES[1]["f"]
        first = solve(f, 2.0, 3.0)
        second = solve(f, 2.0, 3.0)
        assert first.root == second.root
        assert first.iterations == second.iterations


class TestBracketEvaluation:
    """Recovery of a sign-changing bracket from a one-sided guess."""

    @pytest.mark.parametrize(
        "case",
        [
            {"name": "root_above_guess", "f": lambda x: x - 10.0, "a0": 1.0, "b0": 2.0, "root": 10.0},
            {"name": "root_below_guess", "f": lambda x: 2.0 * x + 30.0, "a0": -4.0, "b0": -8.0, "root": -15.0},
            {
                "name": "exponential",
                "f": lambda x: math.exp(x / 10.0) - 3.0,
                "a0": 1.0,
                "b0": 2.0,
                "root": 10.0 * math.log(3.0),
            },
        ],
        ids=lambda case: case["name"],
    )
    def test_one_sided_guess_is_solved(self, case):
        result = solve(case["f"], case["a0"], case["b0"])
        assert result.root == pytest.approx(case["root"], abs=1e-5)

    def test_evaluator_returns_opposite_signs(self):
        f = lambda x: x - 10.0  # noqa: E731
        bracket = Bracket.from_points(f, 1.0, 2.0)
        assert not bracket.has_sign_change

        recovered = evaluate_bracket(f, bracket, DEFAULT_CONFIG)
        assert recovered.has_sign_change
        assert abs(recovered.f_b) <= abs(recovered.f_a)

    def test_no_root_raises_condition_error(self):
        with pytest.raises(SolverConditionError) as excinfo:
            solve(lambda x: x * x + 1.0)
        assert excinfo.value.f_a * excinfo.value.f_b > 0.0

    def test_from_values_puts_best_point_in_b(self):
        bracket = Bracket.from_values(0.0, -4.0, 1.0, 2.0)
        assert (bracket.a, bracket.b) == (0.0, 1.0)
        assert bracket.has_sign_change
        assert bracket.width == 1.0

    def test_linear_extrapolation(self):
        assert linear_extrapolation_from_value(0.0, 0.0, 1.0, 2.0, 1.0) == pytest.approx(0.5)
        assert linear_extrapolation_from_value(0.0, 0.0, 1.0, 2.0, -2.0) == pytest.approx(-1.0)


class TestNonFiniteResiduals:
    @pytest.mark.parametrize(
        "case",
        [
            {"name": "log_of_negative", "f": lambda x: np.log(x)},
            {"name": "nan", "f": lambda x: float("nan")},
            {"name": "infinity", "f": lambda x: np.inf if x > 0 else -1.0},
            {"name": "division_by_zero", "f": lambda x: 1.0 / (x - x)},
            {"name": "overflow", "f": lambda x: math.exp(1000.0 * x)},
        ],
        ids=lambda case: case["name"],
    )
    def test_raises_result_error(self, case):
        with pytest.raises(SolverResultError):
            solve(case["f"], -50.0, 50.0)

    def test_result_error_is_arithmetic_error(self):
        with pytest.raises(ArithmeticError):
            solve(lambda x: float("nan"))


class TestSoftConvergence:
    def test_iteration_limit_returns_best_estimate_with_warning(self, caplog):
        config = SolverConfig(max_iterations=1)
        with caplog.at_level(logging.WARNING, logger="psychrometrics.solver.brent"):
            result = solve(lambda x: math.cos(x) - x, 0.0, 1.0, config)

        assert not result.converged
        assert result.iterations == 1
        assert 0.0 <= result.root <= 1.0
        assert any("without meeting tolerance" in record.getMessage() for record in caplog.records)

    def test_strict_mode_raises(self):
        config = SolverConfig(max_iterations=1, strict=True)
        with pytest.raises(SolverConvergenceError) as excinfo:
            solve(lambda x: math.cos(x) - x, 0.0, 1.0, config)
        assert excinfo.value.iterations == 1


class TestSolverConfig:
    def test_tolerance_is_stored_as_absolute_value(self):
        assert SolverConfig(tolerance=-1e-3).tolerance == 1e-3

    @pytest.mark.parametrize(
        "case",
        [
            {"name": "zero_tolerance", "kwargs": {"tolerance": 0.0}},
            {"name": "zero_iterations", "kwargs": {"max_iterations": 0}},
            {"name": "zero_second_point_divisor", "kwargs": {"second_point_divisor": 0}},
        ],
        ids=lambda case: case["name"],
    )
    def test_invalid_settings_rejected(self, case):
        with pytest.raises(InvalidArgumentError):
            SolverConfig(**case["kwargs"])

    def test_copies_do_not_modify_original(self):
        tight = DEFAULT_CONFIG.with_tolerance(1e-9).with_divisors(2, 5)
        assert tight.tolerance == 1e-9
        assert tight.target_value_divisor == 5
        assert DEFAULT_CONFIG.tolerance == 1e-5
        assert DEFAULT_CONFIG.target_value_divisor == 2


class TestInterpolationSteps:
    def test_secant_of_a_line_is_exact(self):
        assert secant(0.0, 4.0, -2.0, 6.0) == pytest.approx(1.0)

    def test_inverse_quadratic_interpolation_of_a_line_is_exact(self):
        f = lambda x: 3.0 * x - 6.0  # noqa: E731
        assert inverse_quadratic_interpolation(0.0, 1.0, 5.0, f(0.0), f(1.0), f(5.0)) == pytest.approx(2.0)


class TestStopAndConcurrency:
    def test_stop_flag_returns_unconverged_estimate(self):
        stop = threading.Event()
        stop.set()
        result = solve(lambda x: x - 3.0, -50.0, 50.0, stop=stop)
        assert not result.converged
        assert result.iterations == 0

    def test_stop_flag_during_iteration(self):
        stop = threading.Event()
        calls = []

        def residual(x):
            calls.append(x)
            if len(calls) > 4:
                stop.set()
            return math.cos(x) - x

        result = solve(residual, 0.0, 1.0, stop=stop)
        assert not result.converged
        assert 0.0 <= result.root <= 1.0

    def test_concurrent_calls_do_not_interfere(self):
        offsets = [float(k) for k in range(-20, 21)]

        def run(offset):
            return solve(lambda x: x**3 + x - offset, -50.0, 50.0).root

        sequential = [run(offset) for offset in offsets]
        with ThreadPoolExecutor(max_workers=8) as pool:
            parallel = list(pool.map(run, offsets))

        assert parallel == sequential
