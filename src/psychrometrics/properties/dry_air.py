"""Dry air correlations. Temperature in °C, pressure in Pa."""

from __future__ import annotations

from psychrometrics.constants import DRY_AIR_GAS_CONSTANT, T_ZERO_KELVIN


def specific_heat(ta: float) -> float:
    """Isobaric specific heat [kJ/(kg·K)], piecewise fit valid from -150 to 200 °C."""
    if ta <= -73.15:
        return 1.002
    if ta <= -53.15:
        # linear transition between the two constant low-temperature ranges
        return 1.002 + (ta + 73.15) * (1.003 - 1.002) / 20.0
    if ta <= -13.15:
        return 1.003
    if ta <= 86.85:
        a, b, c, d, e = (
            1.0036104793123004,
            5.2562229415778261e-05,
            2.9091167529181888e-07,
            -1.3405671294850166e-08,
            1.3020833332371173e-10,
        )
    else:
        a, b, c, d, e = (
            1.0065876262557212,
            -2.9062712816134989e-05,
            7.4445335877306371e-07,
            -8.4171864437938596e-10,
            3.0582028042912701e-13,
        )
    return a + b * ta + c * ta**2 + d * ta**3 + e * ta**4


def specific_enthalpy(ta: float) -> float:
    """Specific enthalpy [kJ/kg] with zero reference at 0 °C."""
    return specific_heat(ta) * ta


def density(ta: float, pressure: float) -> float:
    """Ideal gas density [kg/m^3]."""
    return pressure / (DRY_AIR_GAS_CONSTANT * (ta + T_ZERO_KELVIN))


def dynamic_viscosity(ta: float) -> float:
    """Dynamic viscosity [Pa·s], quartic fit in Kelvin."""
    tk = ta + T_ZERO_KELVIN
    return (0.40401 + 0.074582 * tk - 5.7171e-5 * tk**2 + 2.9928e-8 * tk**3 - 6.2524e-12 * tk**4) * 1e-6


def kinematic_viscosity(ta: float, pressure: float) -> float:
    """Kinematic viscosity [m^2/s]."""
    return dynamic_viscosity(ta) / density(ta, pressure)


def thermal_conductivity(ta: float) -> float:
    """Thermal conductivity [W/(m·K)], quartic fit in °C."""
    return 2.43714e-2 + 7.83035e-5 * ta - 1.94021e-8 * ta**2 + 2.85943e-12 * ta**3 - 2.61420e-14 * ta**4


__all__ = [
    "specific_heat",
    "specific_enthalpy",
    "density",
    "dynamic_viscosity",
    "kinematic_viscosity",
    "thermal_conductivity",
]
