"""
Adiabatic mixing of humid air flows.

Mass and enthalpy balances on a dry air basis; the outlet temperature is recovered from
the mixed enthalpy and humidity ratio.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from psychrometrics.constants import MASS_FLOW_MAX
from psychrometrics.exceptions import InvalidArgumentError
from psychrometrics.fluids.flows import FlowOfHumidAir
from psychrometrics.fluids.protocols import HumidAir
from psychrometrics.process.results import MixingResult
from psychrometrics.properties.humid_air import _dry_bulb_temperature_from_enthalpy
from psychrometrics.solver.brent import solve
from psychrometrics.validators import require_at_most, require_non_negative

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _MixedState:
    temperature: float
    humidity_ratio: float
    dry_air_mass_flow: float
    pressure: float


def _mix(first: HumidAir, first_mda: float, second: HumidAir, second_mda: float, pressure: float) -> _MixedState:
    """Unvalidated two-stream balance; trial flows probed by the solver may be unphysical."""
    mda_out = first_mda + second_mda
    if first_mda == 0.0:
        return _MixedState(second.temperature, second.humidity_ratio, second_mda, pressure)
    if second_mda == 0.0 or mda_out == 0.0:
        return _MixedState(first.temperature, first.humidity_ratio, mda_out, pressure)
    x_out = (first_mda * first.humidity_ratio + second_mda * second.humidity_ratio) / mda_out
    i_out = (first_mda * first.specific_enthalpy + second_mda * second.specific_enthalpy) / mda_out
    t_out = _dry_bulb_temperature_from_enthalpy(i_out, x_out, pressure)
    return _MixedState(t_out, x_out, mda_out, pressure)


def _outlet_flow(state: _MixedState) -> FlowOfHumidAir:
    fluid = HumidAir(temperature=state.temperature, pressure=state.pressure, humidity_ratio=state.humidity_ratio)
    return FlowOfHumidAir.of_dry_air_mass_flow(fluid, state.dry_air_mass_flow)


def mix_two_flows(inlet_flow: FlowOfHumidAir, recirculation_flow: FlowOfHumidAir) -> MixingResult:
    """Mix two flows at the inlet flow pressure."""
    require_at_most("total_mass_flow", inlet_flow.mass_flow + recirculation_flow.mass_flow, MASS_FLOW_MAX)
    mda_in = inlet_flow.dry_air_mass_flow
    mda_rec = recirculation_flow.dry_air_mass_flow

    if mda_in == 0.0:
        outlet_flow = recirculation_flow
    elif mda_rec == 0.0:
        outlet_flow = inlet_flow
    else:
        state = _mix(inlet_flow.fluid, mda_in, recirculation_flow.fluid, mda_rec, inlet_flow.pressure)
        outlet_flow = _outlet_flow(state)
    return MixingResult(inlet_flow=inlet_flow, outlet_flow=outlet_flow, recirculation_flows=(recirculation_flow,))


def mix_multiple_flows(inlet_flow: FlowOfHumidAir, recirculation_flows: Iterable[FlowOfHumidAir]) -> MixingResult:
    """Mix any number of flows; the outlet takes the highest pressure among them."""
    flows = tuple(recirculation_flows)
    if not flows:
        return MixingResult(inlet_flow=inlet_flow, outlet_flow=inlet_flow, recirculation_flows=flows)

    total_mass_flow = inlet_flow.mass_flow + sum(flow.mass_flow for flow in flows)
    require_at_most("total_mass_flow", total_mass_flow, MASS_FLOW_MAX)

    mda_out = inlet_flow.dry_air_mass_flow
    x_mda = mda_out * inlet_flow.humidity_ratio
    i_mda = mda_out * inlet_flow.specific_enthalpy
    pressure = inlet_flow.pressure
    for flow in flows:
        mda_out += flow.dry_air_mass_flow
        x_mda += flow.dry_air_mass_flow * flow.humidity_ratio
        i_mda += flow.dry_air_mass_flow * flow.specific_enthalpy
        pressure = max(pressure, flow.pressure)

    if mda_out == 0.0:
        raise InvalidArgumentError("total_dry_air_mass_flow", mda_out, "must be greater than zero")

    x_out = x_mda / mda_out
    t_out = _dry_bulb_temperature_from_enthalpy(i_mda / mda_out, x_out, pressure)
    outlet_flow = _outlet_flow(_MixedState(t_out, x_out, mda_out, pressure))
    return MixingResult(inlet_flow=inlet_flow, outlet_flow=outlet_flow, recirculation_flows=flows)


def _split_result(
    first: FlowOfHumidAir, second: FlowOfHumidAir, state: _MixedState, first_mda: float, second_mda: float
) -> MixingResult:
    return MixingResult(
        inlet_flow=FlowOfHumidAir.of_dry_air_mass_flow(first.fluid, first_mda),
        outlet_flow=_outlet_flow(state),
        recirculation_flows=(FlowOfHumidAir.of_dry_air_mass_flow(second.fluid, second_mda),),
    )


def mix_for_target_flow_and_temperature(
    inlet_flow: FlowOfHumidAir,
    recirculation_flow: FlowOfHumidAir,
    target_dry_air_mass_flow: float,
    target_temperature: float,
    *,
    inlet_min_dry_air_mass_flow: float = 0.0,
    recirculation_min_dry_air_mass_flow: float = 0.0,
) -> MixingResult:
    # region Docstring
    """
    Split `target_dry_air_mass_flow` between two air streams so the mix reaches
    `target_temperature`.

    Only the fluids of the two flows are used; their flow rates are replaced by the split.
    Both targets are soft: when the locked minimum flows or the stream temperatures make
    the target unreachable, the closest achievable mix is returned.

    Parameters
    ----------
    inlet_flow, recirculation_flow : FlowOfHumidAir
        Streams to mix, e.g. fresh air and recirculated air.
    target_dry_air_mass_flow : float
        Outlet dry air mass flow [kg/s].
    target_temperature : float
        Outlet temperature [°C].
    inlet_min_dry_air_mass_flow, recirculation_min_dry_air_mass_flow : float, default 0.0
        Locked minimum dry air flows [kg/s], e.g. a minimum share of fresh air.

    Returns
    -------
    MixingResult
        `inlet_flow` and `recirculation_flows` carry the chosen split.
    """

    # endregion
    require_non_negative("target_dry_air_mass_flow", target_dry_air_mass_flow)
    require_non_negative("inlet_min_dry_air_mass_flow", inlet_min_dry_air_mass_flow)
    require_non_negative("recirculation_min_dry_air_mass_flow", recirculation_min_dry_air_mass_flow)

    first, second = inlet_flow.fluid, recirculation_flow.fluid
    pressure = max(first.pressure, second.pressure)
    first_min = inlet_min_dry_air_mass_flow
    second_min = recirculation_min_dry_air_mass_flow
    min_flow_sum = first_min + second_min

    if min_flow_sum == 0.0 and target_dry_air_mass_flow == 0.0:
        raise InvalidArgumentError("target_dry_air_mass_flow", target_dry_air_mass_flow, "must be greater than zero")
    if min_flow_sum > target_dry_air_mass_flow:
        logger.info(
            "Locked flows %.4g kg/s exceed the target %.4g kg/s; returning the locked-flow mix",
            min_flow_sum,
            target_dry_air_mass_flow,
        )
        state = _mix(first, first_min, second, second_min, pressure)
        return _split_result(inlet_flow, recirculation_flow, state, first_min, second_min)

    # extreme mixes: one stream at its maximum, the other at its locked minimum
    first_max = target_dry_air_mass_flow - second_min
    second_max = target_dry_air_mass_flow - first_min
    near_first = _mix(first, first_max, second, second_min, pressure)
    near_second = _mix(first, first_min, second, second_max, pressure)
    t1, t2 = near_first.temperature, near_second.temperature

    if (t1 <= t2 and target_temperature <= t1) or (t1 >= t2 and target_temperature >= t1):
        return _split_result(inlet_flow, recirculation_flow, near_first, first_max, second_min)
    if (t2 <= t1 and target_temperature <= t2) or (t2 >= t1 and target_temperature >= t2):
        return _split_result(inlet_flow, recirculation_flow, near_second, first_min, second_max)

    def residual(first_mda: float) -> float:
        second_mda = target_dry_air_mass_flow - first_mda
        return target_temperature - _mix(first, first_mda, second, second_mda, pressure).temperature

    result = solve(residual, first_min, target_dry_air_mass_flow)
    first_mda = result.root
    second_mda = target_dry_air_mass_flow - first_mda
    state = _mix(first, first_mda, second, second_mda, pressure)
    return _split_result(inlet_flow, recirculation_flow, state, first_mda, second_mda)


__all__ = ["mix_two_flows", "mix_multiple_flows", "mix_for_target_flow_and_temperature"]
