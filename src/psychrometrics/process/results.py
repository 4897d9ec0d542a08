"""Immutable results of air treatment processes. Heat of process in W, negative for cooling."""

from __future__ import annotations

from dataclasses import dataclass

from psychrometrics.fluids.flows import CoolantData, FlowOfHumidAir, FlowOfWater


@dataclass(frozen=True)
class HeatingResult:
    inlet_flow: FlowOfHumidAir
    outlet_flow: FlowOfHumidAir
    heat_of_process: float


@dataclass(frozen=True)
class DryCoolingResult:
    """Sensible cooling without condensation; humidity ratio is unchanged."""

    inlet_flow: FlowOfHumidAir
    outlet_flow: FlowOfHumidAir
    heat_of_process: float


@dataclass(frozen=True)
class RealCoolingResult:
    """
    Cooling coil result including condensate.

    `bypass_factor` is the share of air leaving the coil without touching the wall.
    """

    inlet_flow: FlowOfHumidAir
    outlet_flow: FlowOfHumidAir
    heat_of_process: float
    condensate_flow: FlowOfWater
    bypass_factor: float
    coolant_data: CoolantData


@dataclass(frozen=True)
class MixingResult:
    """Mixing result; `inlet_flow` and `recirculation_flows` are the flows actually mixed."""

    inlet_flow: FlowOfHumidAir
    outlet_flow: FlowOfHumidAir
    recirculation_flows: tuple[FlowOfHumidAir, ...]


__all__ = ["HeatingResult", "DryCoolingResult", "RealCoolingResult", "MixingResult"]
