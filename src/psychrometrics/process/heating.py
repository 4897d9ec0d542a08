"""Heating of a humid air flow at constant humidity ratio. Power in W."""

from __future__ import annotations

import logging

from psychrometrics.constants import PROCESS_RELATIVE_HUMIDITY_MAX, TEMPERATURE_MAX
from psychrometrics.fluids.flows import FlowOfHumidAir
from psychrometrics.fluids.protocols import HumidAir
from psychrometrics.process.results import HeatingResult
from psychrometrics.properties import humid_air
from psychrometrics.validators import require_at_least, require_at_most, require_between, require_non_negative

logger = logging.getLogger(__name__)

# outlet temperature limit as a share of the boiling temperature at inlet pressure
_MAX_TEMPERATURE_SHARE = 0.98


def _outlet_flow(inlet_flow: FlowOfHumidAir, temperature: float) -> FlowOfHumidAir:
    fluid = HumidAir(temperature=temperature, pressure=inlet_flow.pressure, humidity_ratio=inlet_flow.humidity_ratio)
    return FlowOfHumidAir.of_dry_air_mass_flow(fluid, inlet_flow.dry_air_mass_flow)


def heating_from_power(inlet_flow: FlowOfHumidAir, power: float) -> HeatingResult:
    """
    Outlet state after adding `power` [W] to the flow.

    Power must not exceed what brings the air to 98 % of the boiling temperature at
    the inlet pressure.
    """
    require_non_negative("power", power)
    t_max = humid_air.dry_bulb_temperature_max(inlet_flow.pressure) * _MAX_TEMPERATURE_SHARE
    i_max = humid_air.specific_enthalpy(t_max, inlet_flow.humidity_ratio, inlet_flow.pressure)
    power_limit = (i_max - inlet_flow.specific_enthalpy) * inlet_flow.mass_flow * 1000.0
    require_at_most("power", power, power_limit)

    if power == 0.0 or inlet_flow.mass_flow == 0.0:
        return HeatingResult(inlet_flow=inlet_flow, outlet_flow=inlet_flow, heat_of_process=power)

    mda = inlet_flow.dry_air_mass_flow
    i_out = (mda * inlet_flow.specific_enthalpy + power / 1000.0) / mda
    t_out = humid_air.dry_bulb_temperature_from_enthalpy(i_out, inlet_flow.humidity_ratio, inlet_flow.pressure)
    logger.debug("Heating with %.1f W: %.3f °C -> %.3f °C", power, inlet_flow.temperature, t_out)
    return HeatingResult(inlet_flow=inlet_flow, outlet_flow=_outlet_flow(inlet_flow, t_out), heat_of_process=power)


def heating_from_temperature(inlet_flow: FlowOfHumidAir, target_temperature: float) -> HeatingResult:
    """Power [W] needed to heat the flow to `target_temperature` [°C]."""
    require_at_most("target_temperature", target_temperature, TEMPERATURE_MAX)
    require_at_least("target_temperature", target_temperature, inlet_flow.temperature)

    if target_temperature == inlet_flow.temperature or inlet_flow.mass_flow == 0.0:
        return HeatingResult(inlet_flow=inlet_flow, outlet_flow=inlet_flow, heat_of_process=0.0)

    mda = inlet_flow.dry_air_mass_flow
    i_out = humid_air.specific_enthalpy(target_temperature, inlet_flow.humidity_ratio, inlet_flow.pressure)
    power = mda * (i_out - inlet_flow.specific_enthalpy) * 1000.0
    return HeatingResult(
        inlet_flow=inlet_flow,
        outlet_flow=_outlet_flow(inlet_flow, target_temperature),
        heat_of_process=power,
    )


def heating_from_relative_humidity(inlet_flow: FlowOfHumidAir, target_relative_humidity: float) -> HeatingResult:
    """Outlet temperature and power [W] at which heating lowers RH to `target_relative_humidity` [%]."""
    require_between("target_relative_humidity", target_relative_humidity, 0.0, PROCESS_RELATIVE_HUMIDITY_MAX)
    # heating can only lower relative humidity
    require_at_most("target_relative_humidity", target_relative_humidity, inlet_flow.relative_humidity)

    if target_relative_humidity == inlet_flow.relative_humidity or inlet_flow.mass_flow == 0.0:
        return HeatingResult(inlet_flow=inlet_flow, outlet_flow=inlet_flow, heat_of_process=0.0)

    x = inlet_flow.humidity_ratio
    pressure = inlet_flow.pressure
    t_out = humid_air.dry_bulb_temperature_from_rh(x, target_relative_humidity, pressure)
    i_out = humid_air.specific_enthalpy(t_out, x, pressure)
    power = inlet_flow.dry_air_mass_flow * (i_out - inlet_flow.specific_enthalpy) * 1000.0
    return HeatingResult(inlet_flow=inlet_flow, outlet_flow=_outlet_flow(inlet_flow, t_out), heat_of_process=power)


__all__ = ["heating_from_power", "heating_from_temperature", "heating_from_relative_humidity"]
