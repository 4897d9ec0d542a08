"""
Dry cooling and real cooling coil processes.

Power is in W and negative for cooling. The real coil follows the bypass factor model:
part of the air touches the coil wall (average coolant temperature) and leaves
saturated at the wall temperature when the wall is below the inlet dew point, the rest
bypasses the coil unchanged. Outlet humidity ratio is the dry air weighted mix of both.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from psychrometrics.constants import PROCESS_RELATIVE_HUMIDITY_MAX
from psychrometrics.exceptions import InvalidArgumentError
from psychrometrics.fluids.flows import CoolantData, FlowOfHumidAir, FlowOfWater
from psychrometrics.fluids.protocols import HumidAir
from psychrometrics.process.results import DryCoolingResult, RealCoolingResult
from psychrometrics.properties import humid_air, liquid_water
from psychrometrics.solver.brent import solve
from psychrometrics.validators import require_at_least, require_at_most, require_between, require_positive

logger = logging.getLogger(__name__)


# region Helpers
def coil_bypass_factor(wall_temperature: float, inlet_temperature: float, outlet_temperature: float) -> float:
    """Bypass factor ``(t_out - t_wall) / (t_in - t_wall)``."""
    if inlet_temperature == wall_temperature:
        raise InvalidArgumentError(
            "inlet_temperature", inlet_temperature, f"must differ from the coil wall temperature {wall_temperature:g}"
        )
    return (outlet_temperature - wall_temperature) / (inlet_temperature - wall_temperature)


def condensate_discharge(dry_air_mass_flow: float, inlet_humidity_ratio: float, outlet_humidity_ratio: float) -> float:
    """Condensate mass flow [kg/s] released when humidity ratio drops from inlet to outlet value."""
    for name, value in (
        ("dry_air_mass_flow", dry_air_mass_flow),
        ("inlet_humidity_ratio", inlet_humidity_ratio),
        ("outlet_humidity_ratio", outlet_humidity_ratio),
    ):
        if value < 0.0:
            raise InvalidArgumentError(name, value, "must not be negative")
    return _condensate_discharge(dry_air_mass_flow, inlet_humidity_ratio, outlet_humidity_ratio)


def _condensate_discharge(dry_air_mass_flow: float, inlet_humidity_ratio: float, outlet_humidity_ratio: float) -> float:
    if inlet_humidity_ratio == 0.0:
        return 0.0
    return dry_air_mass_flow * (inlet_humidity_ratio - outlet_humidity_ratio)


def coolant_mass_flow_from_power(coolant: CoolantData, power: float) -> float:
    """Coolant mass flow [kg/s] carrying `power` [W] between supply and return temperature."""
    temperature_rise = coolant.return_temperature - coolant.supply_temperature
    require_positive("coolant_temperature_rise", temperature_rise)
    cp_average = (
        liquid_water.specific_heat(coolant.supply_temperature) + liquid_water.specific_heat(coolant.return_temperature)
    ) / 2.0
    return abs(power) / 1000.0 / (cp_average * temperature_rise)


# endregion


# region Dry cooling
def _outlet_flow(inlet_flow: FlowOfHumidAir, temperature: float, humidity_ratio: float) -> FlowOfHumidAir:
    fluid = HumidAir(temperature=temperature, pressure=inlet_flow.pressure, humidity_ratio=humidity_ratio)
    return FlowOfHumidAir.of_dry_air_mass_flow(fluid, inlet_flow.dry_air_mass_flow)


def dry_cooling_from_power(inlet_flow: FlowOfHumidAir, power: float) -> DryCoolingResult:
    """Outlet state after removing `power` [W, negative] without condensation."""
    require_at_most("power", power, 0.0)
    if power == 0.0 or inlet_flow.mass_flow == 0.0:
        return DryCoolingResult(inlet_flow=inlet_flow, outlet_flow=inlet_flow, heat_of_process=power)

    mda = inlet_flow.dry_air_mass_flow
    x = inlet_flow.humidity_ratio
    i_out = (mda * inlet_flow.specific_enthalpy + power / 1000.0) / mda
    t_out = humid_air.dry_bulb_temperature_from_enthalpy(i_out, x, inlet_flow.pressure)
    return DryCoolingResult(
        inlet_flow=inlet_flow, outlet_flow=_outlet_flow(inlet_flow, t_out, x), heat_of_process=power
    )


def dry_cooling_from_temperature(inlet_flow: FlowOfHumidAir, target_temperature: float) -> DryCoolingResult:
    """
    Power [W] for sensible cooling to `target_temperature` [°C].

    A target at or above the inlet temperature, or below the inlet dew point (where the
    process would no longer be dry), returns the inlet flow unchanged with zero power.
    """
    unchanged = DryCoolingResult(inlet_flow=inlet_flow, outlet_flow=inlet_flow, heat_of_process=0.0)
    if target_temperature >= inlet_flow.temperature or inlet_flow.mass_flow == 0.0:
        return unchanged
    if target_temperature < inlet_flow.fluid.dew_point_temperature:
        logger.info(
            "Target %.2f °C is below the dew point %.2f °C; dry cooling is not possible",
            target_temperature,
            inlet_flow.fluid.dew_point_temperature,
        )
        return unchanged

    x = inlet_flow.humidity_ratio
    i_out = humid_air.specific_enthalpy(target_temperature, x, inlet_flow.pressure)
    power = inlet_flow.dry_air_mass_flow * (i_out - inlet_flow.specific_enthalpy) * 1000.0
    return DryCoolingResult(
        inlet_flow=inlet_flow,
        outlet_flow=_outlet_flow(inlet_flow, target_temperature, x),
        heat_of_process=power,
    )


# endregion


# region Real cooling coil
@dataclass(frozen=True)
class _CoilBalance:
    """Closed-form coil balance at one outlet temperature."""

    outlet_temperature: float
    bypass_factor: float
    outlet_humidity_ratio: float
    condensate_mass_flow: float
    heat_of_process: float  # W


def _coil_balance(inlet_flow: FlowOfHumidAir, coolant: CoolantData, outlet_temperature: float) -> _CoilBalance:
    t_wall = coolant.average_temperature
    pressure = inlet_flow.pressure
    mda = inlet_flow.dry_air_mass_flow
    x_in = inlet_flow.humidity_ratio

    bypass_factor = coil_bypass_factor(t_wall, inlet_flow.temperature, outlet_temperature)
    mda_contact = (1.0 - bypass_factor) * mda
    mda_bypass = mda - mda_contact

    # near-wall air is saturated at the wall temperature once the wall is below the dew point
    condensing = t_wall < inlet_flow.fluid.dew_point_temperature
    if condensing:
        x_wall = humid_air.max_humidity_ratio(humid_air.saturation_pressure(t_wall), pressure)
        # unvalidated: solver trial points may sit outside [t_wall, t_in]
        m_cond = _condensate_discharge(mda_contact, x_in, x_wall)
    else:
        x_wall = x_in
        m_cond = 0.0
    i_wall = humid_air.specific_enthalpy(t_wall, x_wall, pressure)
    i_cond = liquid_water.specific_enthalpy(t_wall)

    heat = mda_contact * (i_wall - inlet_flow.specific_enthalpy) + m_cond * i_cond
    x_out = (x_wall * mda_contact + x_in * mda_bypass) / mda
    return _CoilBalance(
        outlet_temperature=outlet_temperature,
        bypass_factor=bypass_factor,
        outlet_humidity_ratio=x_out,
        condensate_mass_flow=m_cond,
        heat_of_process=heat * 1000.0,
    )


def _real_cooling_result(inlet_flow: FlowOfHumidAir, coolant: CoolantData, balance: _CoilBalance) -> RealCoolingResult:
    return RealCoolingResult(
        inlet_flow=inlet_flow,
        outlet_flow=_outlet_flow(inlet_flow, balance.outlet_temperature, balance.outlet_humidity_ratio),
        heat_of_process=balance.heat_of_process,
        condensate_flow=FlowOfWater(temperature=coolant.average_temperature, mass_flow=balance.condensate_mass_flow),
        bypass_factor=balance.bypass_factor,
        coolant_data=coolant,
    )


def _unchanged_real_cooling(inlet_flow: FlowOfHumidAir, coolant: CoolantData, power: float = 0.0) -> RealCoolingResult:
    return RealCoolingResult(
        inlet_flow=inlet_flow,
        outlet_flow=inlet_flow,
        heat_of_process=power,
        condensate_flow=FlowOfWater(temperature=inlet_flow.temperature, mass_flow=0.0),
        bypass_factor=1.0,
        coolant_data=coolant,
    )


def cooling_from_temperature(
    inlet_flow: FlowOfHumidAir, coolant: CoolantData, target_temperature: float
) -> RealCoolingResult:
    """
    Real coil cooling to `target_temperature` [°C].

    Closed form: no iteration beyond the property inverters. The returned power includes
    the enthalpy of the condensate leaving at the wall temperature.
    """
    require_at_least("target_temperature", target_temperature, 0.0)
    require_at_most("target_temperature", target_temperature, inlet_flow.temperature)
    if target_temperature == inlet_flow.temperature or inlet_flow.mass_flow == 0.0:
        return _unchanged_real_cooling(inlet_flow, coolant)
    balance = _coil_balance(inlet_flow, coolant, target_temperature)
    return _real_cooling_result(inlet_flow, coolant, balance)


def cooling_from_relative_humidity(
    inlet_flow: FlowOfHumidAir, coolant: CoolantData, target_relative_humidity: float
) -> RealCoolingResult:
    """
    Real coil cooling until the outlet reaches `target_relative_humidity` [%].

    The outlet lies between the coil wall and the inlet temperature. A condensing coil
    saturates the outlet at the wall, so any target below 100 % is bracketed by
    ``[t_in, t_wall]``. A dry coil keeps the humidity ratio, and the target is only
    reachable when the air at the wall temperature is at least that humid.
    """
    require_between("target_relative_humidity", target_relative_humidity, 0.0, PROCESS_RELATIVE_HUMIDITY_MAX)
    # cooling can only raise relative humidity
    require_at_least("target_relative_humidity", target_relative_humidity, inlet_flow.relative_humidity)

    if target_relative_humidity == inlet_flow.relative_humidity or inlet_flow.mass_flow == 0.0:
        return _unchanged_real_cooling(inlet_flow, coolant)
    if inlet_flow.humidity_ratio == 0.0:
        raise InvalidArgumentError(
            "target_relative_humidity", target_relative_humidity, "is unreachable for perfectly dry inlet air"
        )

    pressure = inlet_flow.pressure
    t_wall = coolant.average_temperature
    if t_wall >= inlet_flow.temperature:
        raise InvalidArgumentError(
            "coolant_average_temperature", t_wall, f"must be below the inlet temperature {inlet_flow.temperature:g}"
        )
    if t_wall >= inlet_flow.fluid.dew_point_temperature:
        rh_at_wall = humid_air.relative_humidity(t_wall, inlet_flow.humidity_ratio, pressure)
        if rh_at_wall < target_relative_humidity:
            raise InvalidArgumentError(
                "target_relative_humidity",
                target_relative_humidity,
                f"is unreachable with a coil wall at {t_wall:g} °C (at most {rh_at_wall:.2f} %)",
            )

    def residual(outlet_temperature: float) -> float:
        balance = _coil_balance(inlet_flow, coolant, outlet_temperature)
        rh = humid_air.relative_humidity(outlet_temperature, balance.outlet_humidity_ratio, pressure)
        return target_relative_humidity - rh

    result = solve(residual, inlet_flow.temperature, t_wall)
    logger.debug(
        "Coil outlet for %.1f %% RH: %.4f °C after %d iterations",
        target_relative_humidity,
        result.root,
        result.iterations,
    )
    return _real_cooling_result(inlet_flow, coolant, _coil_balance(inlet_flow, coolant, result.root))


def cooling_from_power(inlet_flow: FlowOfHumidAir, coolant: CoolantData, power: float) -> RealCoolingResult:
    """
    Real coil cooling with a fixed input `power` [W, negative].

    Without condensation all power goes into sensible cooling, so the dry cooling outlet
    for the same power is the coldest reachable outlet and closes the bracket opposite
    the inlet temperature.
    """
    require_at_most("power", power, 0.0)
    # cooling to 0 °C bounds the duty of a single coil
    power_limit = (0.0 - inlet_flow.specific_enthalpy) * inlet_flow.mass_flow * 1000.0
    require_at_least("power", power, power_limit)

    if power == 0.0 or inlet_flow.mass_flow == 0.0:
        return _unchanged_real_cooling(inlet_flow, coolant, power)

    dry_outlet = dry_cooling_from_power(inlet_flow, power).outlet_flow.temperature

    def residual(outlet_temperature: float) -> float:
        return _coil_balance(inlet_flow, coolant, outlet_temperature).heat_of_process - power

    result = solve(residual, inlet_flow.temperature, dry_outlet)
    logger.debug("Coil outlet for %.1f W: %.4f °C after %d iterations", power, result.root, result.iterations)
    return _real_cooling_result(inlet_flow, coolant, _coil_balance(inlet_flow, coolant, result.root))


# endregion


__all__ = [
    "coil_bypass_factor",
    "condensate_discharge",
    "coolant_mass_flow_from_power",
    "dry_cooling_from_power",
    "dry_cooling_from_temperature",
    "cooling_from_temperature",
    "cooling_from_relative_humidity",
    "cooling_from_power",
]
