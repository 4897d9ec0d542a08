import logging
import time

from tabulate import tabulate

from psychrometrics.constants import STANDARD_ATMOSPHERE
from psychrometrics.logging_utils import configure_logging
from psychrometrics.properties import humid_air
from psychrometrics.solver.brent import DEFAULT_CONFIG, SolverConfig, solve

# Set to logging.DEBUG to print every solver iteration
SOLVER_LOG_LEVEL = logging.INFO
P = STANDARD_ATMOSPHERE


def _residual_cases():
    """(name, residual, a0, b0, config) for the inversions performed by the property layer."""
    x = humid_air.humidity_ratio(50.0, humid_air.saturation_pressure(25.0), P)
    enthalpy = humid_air.specific_enthalpy(25.0, x, P)
    target_ps = humid_air.saturation_pressure_from_humidity_ratio(x, 30.0, P)
    low_rh_x = humid_air.humidity_ratio(5.0, humid_air.saturation_pressure(25.0), P)
    seeded = SolverConfig(second_point_divisor=2, target_value_divisor=5)

    return [
        (
            "enthalpy -> t (25 °C, default bracket)",
            lambda t: enthalpy - humid_air.specific_enthalpy(t, x, P),
            -50.0,
            50.0,
            SolverConfig(eval_cycles=30, second_point_divisor=2, target_value_divisor=5),
        ),
        (
            "enthalpy -> t (one-sided guess)",
            lambda t: enthalpy - humid_air.specific_enthalpy(t, x, P),
            40.0,
            60.0,
            SolverConfig(eval_cycles=30, second_point_divisor=2, target_value_divisor=5),
        ),
        (
            "RH 30 % -> t",
            lambda t: target_ps - humid_air.saturation_pressure(t),
            -50.0,
            50.0,
            seeded,
        ),
        (
            "dew point at 5 % RH",
            lambda t: humid_air.max_humidity_ratio(humid_air.saturation_pressure(t), P) / low_rh_x - 1.0,
            -30.0,
            0.0,
            seeded,
        ),
        (
            "boiling point at 1 atm",
            lambda t: P - humid_air.saturation_pressure(t),
            80.0,
            150.0,
            DEFAULT_CONFIG,
        ),
    ]


def print_solver_table():
    rows = []
    for name, residual, a0, b0, config in _residual_cases():
        calls = 0

        def counted(t, residual=residual):
            nonlocal calls
            calls += 1
            return residual(t)

        start = time.perf_counter()
        result = solve(counted, a0, b0, config)
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        rows.append(
            [
                name,
                f"[{a0:g}, {b0:g}]",
                f"{result.root:.6f}",
                result.iterations,
                calls,
                "yes" if result.converged else "no",
                f"{result.diff:.2e}",
                f"{result.f_root:.2e}",
                f"{elapsed_ms:.2f}",
            ]
        )

    headers = ["Case", "Initial guess", "Root", "Iter", "Evals", "Conv", "diff", "f(root)", "ms"]
    print("\n" + "=" * 110)
    print("ROOT SOLVER DIAGNOSTICS")
    print("=" * 110)
    print(tabulate(rows, headers=headers, tablefmt="grid"))
    print("=" * 110)


def print_inverter_table():
    rows = []
    for ta, rh in [(-20.0, 60.0), (0.0, 10.0), (20.0, 50.0), (35.0, 0.5), (70.0, 95.0)]:
        tdp = humid_air.dew_point_temperature(ta, rh, P)
        twb = humid_air.wet_bulb_temperature(ta, rh, P)
        rows.append(
            [
                f"{ta:g}",
                f"{rh:g}",
                f"{humid_air.saturation_pressure(ta):.2f}",
                f"{tdp:.3f}",
                f"{twb:.3f}",
                f"{humid_air.dry_bulb_temperature_from_dew_point(tdp, rh, P):.4f}",
            ]
        )

    headers = ["t [°C]", "RH [%]", "ps [Pa]", "t_dp [°C]", "t_wb [°C]", "t from t_dp [°C]"]
    print(tabulate(rows, headers=headers, tablefmt="grid"))
    print("=" * 110)


if __name__ == "__main__":
    # logging levels  DEBUG < INFO < WARNING < ERROR < CRITICAL (Default is WARNING)
    configure_logging(logging.INFO, solver_level=SOLVER_LOG_LEVEL)

    print_solver_table()
    print_inverter_table()
