"""Water vapour correlations. Temperature in °C, pressure in Pa."""

from __future__ import annotations

import numpy as np

from psychrometrics.constants import HEAT_OF_WATER_VAPORIZATION, T_ZERO_KELVIN, WATER_VAPOUR_GAS_CONSTANT

# critical temperature of water [K], reference of the viscosity fit
_T_CRITICAL = 647.27


def specific_heat(tw: float) -> float:
    """Isobaric specific heat [kJ/(kg·K)]."""
    tk = tw + T_ZERO_KELVIN
    if tw <= -48.15:
        return 1.8429999999889115 + 4.0000000111904223e-05 * tk - 2.7939677238430251e-16 * tk**2
    return (
        1.9295247225621268
        - 9.1586611999057584e-04 * tk
        + 3.1728684251752865e-06 * tk**2
        - 3.3653682733422277e-09 * tk**3
        + 2.0703915723982299e-12 * tk**4
        - 7.0213425618115390e-16 * tk**5
        + 9.8631583006961855e-20 * tk**6
    )


def specific_enthalpy(tw: float) -> float:
    """Specific enthalpy [kJ/kg] including the latent heat of vaporisation at 0 °C."""
    return specific_heat(tw) * tw + HEAT_OF_WATER_VAPORIZATION


def density(tw: float, pressure: float) -> float:
    """Ideal gas density [kg/m^3] of pure vapour at partial pressure `pressure`."""
    return pressure / (WATER_VAPOUR_GAS_CONSTANT * (tw + T_ZERO_KELVIN))


def dynamic_viscosity(tw: float) -> float:
    """Dynamic viscosity [Pa·s] of low-density steam."""
    tk = tw + T_ZERO_KELVIN
    ratio = _T_CRITICAL / tk
    denominator = 0.0181583 + 0.0177624 * ratio + 0.0105287 * ratio**2 - 0.0036744 * ratio**3
    return np.sqrt(tk / _T_CRITICAL) / denominator * 1e-6


def kinematic_viscosity(tw: float, rho: float) -> float:
    return dynamic_viscosity(tw) / rho


def thermal_conductivity(tw: float) -> float:
    """Thermal conductivity [W/(m·K)], quartic fit in °C."""
    return 1.74822e-2 + 7.69127e-5 * tw - 3.23464e-7 * tw**2 + 2.59524e-9 * tw**3 - 3.1765e-12 * tw**4


__all__ = [
    "specific_heat",
    "specific_enthalpy",
    "density",
    "dynamic_viscosity",
    "kinematic_viscosity",
    "thermal_conductivity",
]
