"""Immutable flow value objects. Mass flow in kg/s, volumetric flow in m^3/s, temperature in °C."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property

from psychrometrics.constants import (
    COOLANT_TEMPERATURE_MAX,
    COOLANT_TEMPERATURE_MIN,
    MASS_FLOW_MAX,
    TEMPERATURE_MAX,
    TEMPERATURE_MIN,
)
from psychrometrics.fluids.protocols import HumidAir
from psychrometrics.properties import liquid_water
from psychrometrics.validators import require_at_least, require_between


@dataclass(frozen=True)
class FlowOfHumidAir:
    """
    Flow of humid air stored on a dry air basis.

    Build it with :meth:`of_mass_flow` (humid air mass flow), :meth:`of_dry_air_mass_flow`
    or :meth:`of_volumetric_flow`; all of them validate the flow once.
    """

    fluid: HumidAir
    dry_air_mass_flow: float

    def __post_init__(self) -> None:
        require_between("dry_air_mass_flow", self.dry_air_mass_flow, 0.0, MASS_FLOW_MAX)

    # region Factories
    @classmethod
    def of_mass_flow(cls, fluid: HumidAir, mass_flow: float) -> FlowOfHumidAir:
        """Flow from humid air mass flow; ``mda = m / (1 + x)``."""
        require_between("mass_flow", mass_flow, 0.0, MASS_FLOW_MAX)
        return cls(fluid=fluid, dry_air_mass_flow=mass_flow / (1.0 + fluid.humidity_ratio))

    @classmethod
    def of_dry_air_mass_flow(cls, fluid: HumidAir, dry_air_mass_flow: float) -> FlowOfHumidAir:
        return cls(fluid=fluid, dry_air_mass_flow=dry_air_mass_flow)

    @classmethod
    def of_volumetric_flow(cls, fluid: HumidAir, volumetric_flow: float) -> FlowOfHumidAir:
        require_between("volumetric_flow", volumetric_flow, 0.0, MASS_FLOW_MAX / fluid.density)
        return cls.of_mass_flow(fluid, volumetric_flow * fluid.density)

    # endregion

    @cached_property
    def mass_flow(self) -> float:
        """Humid air mass flow [kg/s]."""
        return self.dry_air_mass_flow * (1.0 + self.fluid.humidity_ratio)

    @cached_property
    def volumetric_flow(self) -> float:
        return self.mass_flow / self.fluid.density

    # region Shortcuts
    @property
    def temperature(self) -> float:
        return self.fluid.temperature

    @property
    def pressure(self) -> float:
        return self.fluid.pressure

    @property
    def humidity_ratio(self) -> float:
        return self.fluid.humidity_ratio

    @property
    def relative_humidity(self) -> float:
        return self.fluid.relative_humidity

    @property
    def specific_enthalpy(self) -> float:
        return self.fluid.specific_enthalpy

    # endregion


@dataclass(frozen=True)
class FlowOfWater:
    """Flow of liquid water, e.g. condensate leaving a cooling coil."""

    temperature: float
    mass_flow: float

    def __post_init__(self) -> None:
        require_between("temperature", self.temperature, TEMPERATURE_MIN, TEMPERATURE_MAX)
        require_between("mass_flow", self.mass_flow, 0.0, MASS_FLOW_MAX)

    @cached_property
    def specific_enthalpy(self) -> float:
        return liquid_water.specific_enthalpy(self.temperature)

    @cached_property
    def specific_heat(self) -> float:
        return liquid_water.specific_heat(self.temperature)

    @cached_property
    def density(self) -> float:
        return liquid_water.density(self.temperature)

    @cached_property
    def volumetric_flow(self) -> float:
        return self.mass_flow / self.density


@dataclass(frozen=True)
class CoolantData:
    """Supply and return temperatures [°C] of the coil coolant; the coil wall sits at their average."""

    supply_temperature: float
    return_temperature: float

    def __post_init__(self) -> None:
        require_between(
            "supply_temperature", self.supply_temperature, COOLANT_TEMPERATURE_MIN, COOLANT_TEMPERATURE_MAX
        )
        require_between(
            "return_temperature", self.return_temperature, COOLANT_TEMPERATURE_MIN, COOLANT_TEMPERATURE_MAX
        )
        require_at_least("return_temperature", self.return_temperature, self.supply_temperature)

    @cached_property
    def average_temperature(self) -> float:
        return (self.supply_temperature + self.return_temperature) / 2.0


__all__ = ["FlowOfHumidAir", "FlowOfWater", "CoolantData"]
