"""
Humid air correlations and their inversions.

Units: temperature [°C], pressure [Pa], humidity ratio [kg/kg], relative humidity [%],
specific enthalpy [kJ/kg], specific heat [kJ/(kg·K)].

Forward correlations are plain functions of scalars and do not validate their inputs.
Every quantity that has no closed form (saturation pressure, dew point below 25 % RH,
wet-bulb temperature, dry-bulb temperature from other quantities) is found with
:func:`psychrometrics.solver.brent.solve`. The public inverters validate their inputs once
and then hand over to private kernels, so trial points probed by a solver never trip
the physical range checks.
"""

from __future__ import annotations

import logging

import numpy as np

from psychrometrics.constants import (
    DRY_AIR_MOLECULAR_MASS,
    DRY_AIR_SUTHERLAND_CONSTANT,
    PRESSURE_MAX,
    PRESSURE_MIN,
    RELATIVE_HUMIDITY_MAX,
    SEED_LOWER_COEF,
    SEED_UPPER_COEF,
    T_ZERO_KELVIN,
    TEMPERATURE_MAX,
    TEMPERATURE_MIN,
    WATER_VAPOUR_MOLECULAR_MASS,
    WATER_VAPOUR_SUTHERLAND_CONSTANT,
    WG_RATIO,
)
from psychrometrics.properties import dry_air, ice, liquid_water, water_vapour
from psychrometrics.solver.brent import SolverConfig, solve
from psychrometrics.validators import (
    require_between,
    require_finite,
    require_non_negative,
    require_positive,
    require_valid_saturation_pressure,
)

logger = logging.getLogger(__name__)

# region Coefficients
# Arden-Buck (b, c, d) over water (t > 0 °C) and over ice
_ARDEN_BUCK_WATER = (18.678, 257.14, 234.50)
_ARDEN_BUCK_ICE = (23.036, 279.82, 333.70)

# Hyland-Wexler ln(ps) coefficients: C1/T + C2 + C3·T + C4·T² + C5·T³ + C6·T⁴ + C7·ln(T)
_HYLAND_WEXLER_ICE = (
    -5.6745359e03,
    6.3925247e00,
    -9.6778430e-03,
    6.2215701e-07,
    2.0747825e-09,
    -9.4840240e-13,
    4.1635019e00,
)
_HYLAND_WEXLER_WATER = (
    -5.8002206e03,
    1.3914993e00,
    -4.8640239e-02,
    4.1764768e-05,
    -1.4452093e-08,
    0.0,
    6.5459673e00,
)

# Solver settings per inverter
_SATURATION_PRESSURE_RELATIVE_TOLERANCE = 1e-9
_LOW_RH_LIMIT = 25.0
_VERY_LOW_RH_LIMIT = 1.0
_VERY_LOW_RH_TOLERANCE = 1e-7
_SEEDED_CONFIG = SolverConfig(second_point_divisor=2, target_value_divisor=5)
_ENTHALPY_CONFIG = SolverConfig(eval_cycles=30, second_point_divisor=2, target_value_divisor=5)
# endregion


# region Validation helpers
def _check_pressure(pressure: float) -> None:
    require_between("pressure", pressure, PRESSURE_MIN, PRESSURE_MAX)


def _check_temperature(name: str, temperature: float) -> None:
    require_between(name, temperature, TEMPERATURE_MIN, TEMPERATURE_MAX)


def _check_relative_humidity(relative_humidity: float) -> None:
    require_between("relative_humidity", relative_humidity, 0.0, RELATIVE_HUMIDITY_MAX)


# endregion


def _arden_buck_coefficients(ta: float) -> tuple[float, float, float]:
    return _ARDEN_BUCK_WATER if ta > 0.0 else _ARDEN_BUCK_ICE


def _arden_buck_alpha(ta: float) -> float:
    """Exponent of the Arden-Buck saturation pressure equation."""
    b, c, d = _arden_buck_coefficients(ta)
    return (b - ta / d) * (ta / (c + ta))


def _hyland_wexler_log(ta: float) -> float:
    tk = ta + T_ZERO_KELVIN
    c1, c2, c3, c4, c5, c6, c7 = _HYLAND_WEXLER_ICE if ta < 0.0 else _HYLAND_WEXLER_WATER
    return c1 / tk + c2 + c3 * tk + c4 * tk**2 + c5 * tk**3 + c6 * tk**4 + c7 * np.log(tk)


# region Saturation pressure
def _saturation_pressure(ta: float) -> float:
    log_ps = _hyland_wexler_log(ta)
    a = 6.1115 if ta < 0.0 else 6.1121
    estimated = a * np.exp(_arden_buck_alpha(ta)) * 100.0
    # the Arden-Buck seed drifts low above 50 °C
    upper_coef = 1.1 if ta > 50.0 else 1.0
    config = _SEEDED_CONFIG.with_tolerance(estimated * _SATURATION_PRESSURE_RELATIVE_TOLERANCE)
    result = solve(
        lambda ps: np.log(ps) - log_ps,
        estimated * SEED_LOWER_COEF,
        estimated * SEED_UPPER_COEF * upper_coef,
        config,
    )
    return result.root


def saturation_pressure(ta: float) -> float:
    """
    Saturation pressure of water vapour [Pa] over water (t ≥ 0 °C) or ice (t < 0 °C).

    An Arden-Buck estimate seeds the bracket; the value is refined against the
    Hyland-Wexler correlation (ASHRAE Fundamentals).
    """
    _check_temperature("temperature", ta)
    return _saturation_pressure(ta)


def saturation_pressure_from_humidity_ratio(x: float, rh: float, pressure: float) -> float:
    """Saturation pressure [Pa] implied by humidity ratio and relative humidity."""
    return x * pressure / (WG_RATIO * rh / 100.0 + x * rh / 100.0)


# endregion


# region Humidity
def humidity_ratio(rh: float, ps: float, pressure: float) -> float:
    """Humidity ratio [kg/kg] from relative humidity [%] and saturation pressure [Pa]."""
    return WG_RATIO * (rh / 100.0 * ps) / (pressure - rh / 100.0 * ps)


def max_humidity_ratio(ps: float, pressure: float) -> float:
    return humidity_ratio(100.0, ps, pressure)


def relative_humidity(ta: float, x: float, pressure: float) -> float:
    """Relative humidity [%], capped at 100 % for saturated states."""
    if x == 0.0:
        return 0.0
    ps = _saturation_pressure(ta)
    rh = x * pressure / (WG_RATIO * ps + x * ps)
    return 100.0 if rh > 1.0 else rh * 100.0


def relative_humidity_from_dew_point(tdp: float, ta: float) -> float:
    return np.exp(_arden_buck_alpha(tdp) - _arden_buck_alpha(ta)) * 100.0


# endregion


# region Dew point and wet bulb
def _dew_point_temperature(ta: float, rh: float, pressure: float) -> float:
    if rh >= RELATIVE_HUMIDITY_MAX:
        return ta
    if rh == 0.0:
        return -np.inf

    # Arden-Buck closed form, accurate enough above 25 % RH
    b, c, d = _arden_buck_coefficients(ta)
    a = 2.0 / d
    beta = np.log(rh / 100.0) + _arden_buck_alpha(ta)
    b_rh = b - beta
    c_rh = -c * beta
    estimated = 1.0 / a * (b_rh - np.sqrt(b_rh * b_rh + 2.0 * a * c_rh))
    if rh >= _LOW_RH_LIMIT:
        return estimated

    x = humidity_ratio(rh, _saturation_pressure(ta), pressure)
    config = _SEEDED_CONFIG
    if rh < _VERY_LOW_RH_LIMIT:
        config = config.with_tolerance(_VERY_LOW_RH_TOLERANCE)

    # relative form: x spans several decades at low RH
    def residual(temp: float) -> float:
        return max_humidity_ratio(_saturation_pressure(temp), pressure) / x - 1.0

    return solve(residual, estimated * SEED_LOWER_COEF, estimated * SEED_UPPER_COEF, config).root


def dew_point_temperature(ta: float, rh: float, pressure: float) -> float:
    """
    Dew point temperature [°C].

    Returns `ta` for RH ≥ 100 % and ``-inf`` for RH = 0 %. Below 25 % RH the Arden-Buck
    estimate is refined by solving ``x_max(t_dp) = x``.

    The closed form picks over-water or over-ice coefficients from `ta`, while the solved
    branch follows the saturation curve at `t_dp`. For ``ta > 0`` with a sub-zero dew point
    the result therefore jumps between dew point and frost point at 25 % RH.
    """
    _check_temperature("temperature", ta)
    _check_relative_humidity(rh)
    _check_pressure(pressure)
    require_valid_saturation_pressure(_saturation_pressure(ta), pressure, ta)
    return _dew_point_temperature(ta, rh, pressure)


def _wet_bulb_temperature(ta: float, rh: float, pressure: float) -> float:
    if rh >= RELATIVE_HUMIDITY_MAX:
        return ta
    # Stull (2011) empirical estimate
    estimated = (
        ta * np.arctan(0.151977 * (rh + 8.313659) ** 0.5)
        + np.arctan(ta + rh)
        - np.arctan(rh - 1.676331)
        + 0.00391838 * rh**1.5 * np.arctan(0.023101 * rh)
        - 4.686035
    )
    x = humidity_ratio(rh, _saturation_pressure(ta), pressure)
    enthalpy = specific_enthalpy(ta, x, pressure)

    def residual(temp: float) -> float:
        x_saturated = max_humidity_ratio(_saturation_pressure(temp), pressure)
        enthalpy_saturated = specific_enthalpy(temp, x_saturated, pressure)
        if temp <= 0.0:
            enthalpy_water = ice.specific_enthalpy(temp)
        else:
            enthalpy_water = liquid_water.specific_enthalpy(temp)
        return enthalpy + (x_saturated - x) * enthalpy_water - enthalpy_saturated

    return solve(residual, estimated * SEED_LOWER_COEF, estimated * SEED_UPPER_COEF, _SEEDED_CONFIG).root


def wet_bulb_temperature(ta: float, rh: float, pressure: float) -> float:
    """Wet-bulb temperature [°C] from the adiabatic saturation energy balance."""
    _check_temperature("temperature", ta)
    _check_relative_humidity(rh)
    _check_pressure(pressure)
    require_valid_saturation_pressure(_saturation_pressure(ta), pressure, ta)
    return _wet_bulb_temperature(ta, rh, pressure)


# endregion


# region Transport and caloric properties
def dynamic_viscosity(ta: float, x: float) -> float:
    """Dynamic viscosity [Pa·s] of the mixture (Wilke mixing rule)."""
    mu_da = dry_air.dynamic_viscosity(ta)
    if x == 0.0:
        return mu_da
    xm = x * 1.61
    mu_wv = water_vapour.dynamic_viscosity(ta)
    fi_av = (1.0 + (mu_da / mu_wv) ** 0.5 * (WATER_VAPOUR_MOLECULAR_MASS / DRY_AIR_MOLECULAR_MASS) ** 0.25) ** 2 / (
        2.0 * np.sqrt(2.0) * (1.0 + DRY_AIR_MOLECULAR_MASS / WATER_VAPOUR_MOLECULAR_MASS) ** 0.5
    )
    fi_va = (1.0 + (mu_wv / mu_da) ** 0.5 * (DRY_AIR_MOLECULAR_MASS / WATER_VAPOUR_MOLECULAR_MASS) ** 0.25) ** 2 / (
        2.0 * np.sqrt(2.0) * (1.0 + WATER_VAPOUR_MOLECULAR_MASS / DRY_AIR_MOLECULAR_MASS) ** 0.5
    )
    return mu_da / (1.0 + fi_av * xm) + mu_wv / (1.0 + fi_va / xm)


def kinematic_viscosity(ta: float, x: float, rho: float) -> float:
    return dynamic_viscosity(ta, x) / rho


def thermal_conductivity(ta: float, x: float) -> float:
    """Thermal conductivity [W/(m·K)] of the mixture (Sutherland-Wassiljewa mixing)."""
    k_da = dry_air.thermal_conductivity(ta)
    if x == 0.0:
        return k_da
    mu_da = dry_air.dynamic_viscosity(ta)
    mu_wv = water_vapour.dynamic_viscosity(ta)
    k_wv = water_vapour.thermal_conductivity(ta)
    tk = ta + T_ZERO_KELVIN
    s_da = DRY_AIR_SUTHERLAND_CONSTANT
    s_wv = WATER_VAPOUR_SUTHERLAND_CONSTANT
    s_av = 0.733 * np.sqrt(s_da * s_wv)
    xm = 1.61 * x
    alfa_av = (mu_da / mu_wv) * WG_RATIO**0.75 * ((1.0 + s_da / tk) / (1.0 + s_wv / tk))
    alfa_va = (mu_wv / mu_da) * WG_RATIO**0.75 * ((1.0 + s_wv / tk) / (1.0 + s_da / tk))
    beta_av = (1.0 + s_av / tk) / (1.0 + s_da / tk)
    beta_va = (1.0 + s_av / tk) / (1.0 + s_wv / tk)
    a_av = 0.25 * (1.0 + alfa_av) ** 2 * beta_av
    a_va = 0.25 * (1.0 + alfa_va) ** 2 * beta_va
    return k_da / (1.0 + a_av * xm) + k_wv / (1.0 + a_va / xm)


def specific_enthalpy(ta: float, x: float, pressure: float) -> float:
    """
    Specific enthalpy [kJ/kg dry air].

    Three cases: dry air only (x = 0), unsaturated air (x ≤ x_max) and saturated air
    carrying the excess water as liquid mist (t > 0 °C) or ice fog (t ≤ 0 °C).
    """
    i_da = dry_air.specific_enthalpy(ta)
    if x == 0.0:
        return i_da
    x_max = max_humidity_ratio(_saturation_pressure(ta), pressure)
    if x <= x_max:
        return i_da + water_vapour.specific_enthalpy(ta) * x
    i_wv = water_vapour.specific_enthalpy(ta) * x_max
    i_wt = liquid_water.specific_enthalpy(ta) * (x - x_max)
    i_ice = ice.specific_enthalpy(ta) * (x - x_max)
    return i_da + i_wv + i_wt + i_ice


def specific_heat(ta: float, x: float) -> float:
    return dry_air.specific_heat(ta) + x * water_vapour.specific_heat(ta)


def density(ta: float, x: float, pressure: float) -> float:
    """Density of humid air [kg/m^3 of mixture]."""
    if x == 0.0:
        return dry_air.density(ta, pressure)
    tk = ta + T_ZERO_KELVIN
    return 1.0 / ((0.2871 * tk * (1.0 + 1.6078 * x)) / (pressure / 1000.0))


def thermal_diffusivity(rho: float, k: float, cp: float) -> float:
    """Thermal diffusivity [m^2/s]; `cp` in kJ/(kg·K)."""
    return k / (rho * cp * 1000.0)


def prandtl_number(mu: float, k: float, cp: float) -> float:
    """Prandtl number [-]; `cp` in kJ/(kg·K)."""
    return mu * cp * 1000.0 / k


# endregion


# region Dry-bulb temperature from other quantities
def _dry_bulb_temperature_max(pressure: float) -> float:
    log_term = np.log(0.001638 * pressure)
    estimated = -237300.0 * log_term / (1000.0 * log_term - 17269.0)
    return solve(
        lambda ta: pressure - _saturation_pressure(ta),
        estimated * SEED_LOWER_COEF,
        estimated * SEED_UPPER_COEF * 1.5,
    ).root


def dry_bulb_temperature_max(pressure: float) -> float:
    """Temperature [°C] at which the saturation pressure reaches the total pressure."""
    _check_pressure(pressure)
    return _dry_bulb_temperature_max(pressure)


def _dry_bulb_temperature_from_dew_point(tdp: float, rh: float, pressure: float) -> float:
    if rh >= RELATIVE_HUMIDITY_MAX:
        return tdp
    if rh == 0.0:
        return np.inf
    # dry bulb lies between the dew point and the boiling point at this pressure
    return solve(
        lambda ta: tdp - _dew_point_temperature(ta, rh, pressure),
        tdp,
        _dry_bulb_temperature_max(pressure),
    ).root


def dry_bulb_temperature_from_dew_point(tdp: float, rh: float, pressure: float) -> float:
    """Dry-bulb temperature [°C] with dew point `tdp` at relative humidity `rh`. ``inf`` for RH = 0 %."""
    _check_temperature("dew_point_temperature", tdp)
    _check_relative_humidity(rh)
    _check_pressure(pressure)
    return _dry_bulb_temperature_from_dew_point(tdp, rh, pressure)


def _dry_bulb_temperature_from_rh(x: float, rh: float, pressure: float) -> float:
    target_ps = saturation_pressure_from_humidity_ratio(x, rh, pressure)
    return solve(lambda ta: target_ps - _saturation_pressure(ta), config=_SEEDED_CONFIG).root


def dry_bulb_temperature_from_rh(x: float, rh: float, pressure: float) -> float:
    """Dry-bulb temperature [°C] at which air of humidity ratio `x` has relative humidity `rh`."""
    require_positive("humidity_ratio", x)
    require_positive("relative_humidity", rh)
    _check_relative_humidity(rh)
    _check_pressure(pressure)
    return _dry_bulb_temperature_from_rh(x, rh, pressure)


def _dry_bulb_temperature_from_enthalpy(enthalpy: float, x: float, pressure: float) -> float:
    return solve(lambda ta: enthalpy - specific_enthalpy(ta, x, pressure), config=_ENTHALPY_CONFIG).root


def dry_bulb_temperature_from_enthalpy(enthalpy: float, x: float, pressure: float) -> float:
    """Dry-bulb temperature [°C] from specific enthalpy [kJ/kg] and humidity ratio."""
    require_finite("specific_enthalpy", enthalpy)
    require_non_negative("humidity_ratio", x)
    _check_pressure(pressure)
    return _dry_bulb_temperature_from_enthalpy(enthalpy, x, pressure)


def _dry_bulb_temperature_from_wet_bulb(wbt: float, rh: float, pressure: float) -> float:
    if rh >= RELATIVE_HUMIDITY_MAX:
        return wbt
    return solve(lambda ta: wbt - _wet_bulb_temperature(ta, rh, pressure), wbt, wbt + 30.0).root


def dry_bulb_temperature_from_wet_bulb(wbt: float, rh: float, pressure: float) -> float:
    """Dry-bulb temperature [°C] with wet-bulb temperature `wbt` at relative humidity `rh`."""
    _check_temperature("wet_bulb_temperature", wbt)
    _check_relative_humidity(rh)
    _check_pressure(pressure)
    return _dry_bulb_temperature_from_wet_bulb(wbt, rh, pressure)


# endregion


__all__ = [
    "saturation_pressure",
    "saturation_pressure_from_humidity_ratio",
    "humidity_ratio",
    "max_humidity_ratio",
    "relative_humidity",
    "relative_humidity_from_dew_point",
    "dew_point_temperature",
    "wet_bulb_temperature",
    "dynamic_viscosity",
    "kinematic_viscosity",
    "thermal_conductivity",
    "specific_enthalpy",
    "specific_heat",
    "density",
    "thermal_diffusivity",
    "prandtl_number",
    "dry_bulb_temperature_max",
    "dry_bulb_temperature_from_dew_point",
    "dry_bulb_temperature_from_rh",
    "dry_bulb_temperature_from_enthalpy",
    "dry_bulb_temperature_from_wet_bulb",
]
