from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Protocol

import CoolProp.CoolProp as CP

from psychrometrics.constants import (
    HUMIDITY_RATIO_MAX,
    PRESSURE_MAX,
    PRESSURE_MIN,
    STANDARD_ATMOSPHERE,
    T_ZERO_KELVIN,
    TEMPERATURE_MAX,
    TEMPERATURE_MIN,
)
from psychrometrics.properties import humid_air
from psychrometrics.validators import (
    require_at_most,
    require_between,
    require_valid_saturation_pressure,
)

logger = logging.getLogger(__name__)


class VapourState(Enum):
    """Phase of the water carried by humid air."""

    UNSATURATED = "unsaturated"
    SATURATED = "saturated"
    # excess water as liquid droplets (t > 0 °C)
    WATER_MIST = "water_mist"
    # excess water as ice crystals (t <= 0 °C)
    ICE_FOG = "ice_fog"


class HumidAirState(Protocol):
    """
    Thermodynamic state of humid air at (temperature, pressure, humidity_ratio).

    Units:
      - temperature, dew_point_temperature, wet_bulb_temperature [°C]
      - pressure, saturation_pressure [Pa]
      - humidity_ratio [kg/kg dry air]
      - relative_humidity [%]
      - specific_enthalpy [kJ/kg dry air]
      - specific_heat [kJ/(kg·K)]
      - density [kg/m^3]
      - dynamic_viscosity [Pa·s]
      - thermal_conductivity [W/(m·K)]
    """

    @property
    def temperature(self) -> float: ...

    @property
    def pressure(self) -> float: ...

    @property
    def humidity_ratio(self) -> float: ...

    @property
    def saturation_pressure(self) -> float: ...

    @property
    def relative_humidity(self) -> float: ...

    @property
    def dew_point_temperature(self) -> float: ...

    @property
    def wet_bulb_temperature(self) -> float: ...

    @property
    def specific_enthalpy(self) -> float: ...

    @property
    def specific_heat(self) -> float: ...

    @property
    def density(self) -> float: ...

    @property
    def dynamic_viscosity(self) -> float: ...

    @property
    def thermal_conductivity(self) -> float: ...


class HumidAirModel(Protocol):
    """Humid air model producing a state at (temperature [°C], pressure [Pa], humidity ratio [kg/kg])."""

    def state(self, temperature: float, pressure: float, humidity_ratio: float) -> HumidAirState: ...


@dataclass(frozen=True)
class HumidAir:
    # region Docstring
    """
    Immutable humid air state evaluated with the empirical correlations of
    :mod:`psychrometrics.properties.humid_air`.

    Parameters
    ----------
    temperature : float
        Dry-bulb temperature [°C], -150..200.
    pressure : float, default 101325.0
        Absolute pressure [Pa], 50 kPa..5 MPa.
    humidity_ratio : float, default 0.0
        Humidity ratio [kg/kg dry air], 0..3. Values above the saturation limit describe
        air carrying water mist or ice fog.

    Notes
    -----
    - Inputs are validated once at construction; derived properties are cached.
    - The saturation pressure at `temperature` must stay below `pressure`.
    - `density` is the inverse of the specific volume per kg of dry air.
    """

    # endregion
    temperature: float
    pressure: float = STANDARD_ATMOSPHERE
    humidity_ratio: float = 0.0

    def __post_init__(self) -> None:
        require_between("pressure", self.pressure, PRESSURE_MIN, PRESSURE_MAX)
        require_between("temperature", self.temperature, TEMPERATURE_MIN, TEMPERATURE_MAX)
        require_between("humidity_ratio", self.humidity_ratio, 0.0, HUMIDITY_RATIO_MAX)
        require_valid_saturation_pressure(self.saturation_pressure, self.pressure, self.temperature)

    # region Factories
    @classmethod
    def from_relative_humidity(
        cls, temperature: float, relative_humidity: float, pressure: float = STANDARD_ATMOSPHERE
    ) -> HumidAir:
        """State of air at `temperature` [°C] with `relative_humidity` [%]."""
        require_between("relative_humidity", relative_humidity, 0.0, 100.0)
        require_between("pressure", pressure, PRESSURE_MIN, PRESSURE_MAX)
        ps = humid_air.saturation_pressure(temperature)
        require_valid_saturation_pressure(ps, pressure, temperature)
        x = humid_air.humidity_ratio(relative_humidity, ps, pressure)
        return cls(temperature=temperature, pressure=pressure, humidity_ratio=x)

    @classmethod
    def from_dew_point(
        cls, temperature: float, dew_point_temperature: float, pressure: float = STANDARD_ATMOSPHERE
    ) -> HumidAir:
        """State of air at `temperature` [°C] whose dew point is `dew_point_temperature` [°C]."""
        require_between("dew_point_temperature", dew_point_temperature, TEMPERATURE_MIN, TEMPERATURE_MAX)
        require_at_most("dew_point_temperature", dew_point_temperature, temperature)
        rh = humid_air.relative_humidity_from_dew_point(dew_point_temperature, temperature)
        return cls.from_relative_humidity(temperature, min(rh, 100.0), pressure)

    # endregion

    # region Humidity
    @cached_property
    def saturation_pressure(self) -> float:
        return humid_air.saturation_pressure(self.temperature)

    @cached_property
    def max_humidity_ratio(self) -> float:
        return humid_air.max_humidity_ratio(self.saturation_pressure, self.pressure)

    @cached_property
    def relative_humidity(self) -> float:
        return humid_air.relative_humidity(self.temperature, self.humidity_ratio, self.pressure)

    @cached_property
    def vapour_state(self) -> VapourState:
        if self.humidity_ratio == self.max_humidity_ratio:
            return VapourState.SATURATED
        if self.humidity_ratio > self.max_humidity_ratio:
            return VapourState.WATER_MIST if self.temperature > 0.0 else VapourState.ICE_FOG
        return VapourState.UNSATURATED

    @cached_property
    def dew_point_temperature(self) -> float:
        return humid_air.dew_point_temperature(self.temperature, self.relative_humidity, self.pressure)

    @cached_property
    def wet_bulb_temperature(self) -> float:
        return humid_air.wet_bulb_temperature(self.temperature, self.relative_humidity, self.pressure)

    # endregion

    # region Caloric and transport properties
    @cached_property
    def specific_enthalpy(self) -> float:
        return humid_air.specific_enthalpy(self.temperature, self.humidity_ratio, self.pressure)

    @cached_property
    def specific_heat(self) -> float:
        return humid_air.specific_heat(self.temperature, self.humidity_ratio)

    @cached_property
    def density(self) -> float:
        return humid_air.density(self.temperature, self.humidity_ratio, self.pressure)

    @cached_property
    def dynamic_viscosity(self) -> float:
        return humid_air.dynamic_viscosity(self.temperature, self.humidity_ratio)

    @cached_property
    def kinematic_viscosity(self) -> float:
        return humid_air.kinematic_viscosity(self.temperature, self.humidity_ratio, self.density)

    @cached_property
    def thermal_conductivity(self) -> float:
        return humid_air.thermal_conductivity(self.temperature, self.humidity_ratio)

    @cached_property
    def thermal_diffusivity(self) -> float:
        return humid_air.thermal_diffusivity(self.density, self.thermal_conductivity, self.specific_heat)

    @cached_property
    def prandtl_number(self) -> float:
        return humid_air.prandtl_number(self.dynamic_viscosity, self.thermal_conductivity, self.specific_heat)

    # endregion


class EmpiricalHumidAir:
    """Humid air model backed by this library's correlations; states are :class:`HumidAir`."""

    def state(self, temperature: float, pressure: float, humidity_ratio: float) -> HumidAirState:
        return HumidAir(temperature=temperature, pressure=pressure, humidity_ratio=humidity_ratio)


class CoolPropHumidAir:
    """
    Reference humid air model using CoolProp's ``HAPropsSI`` (ASHRAE RP-1485 formulation).

    Used to cross-check the empirical correlations. Inputs and outputs follow the same
    units as :class:`HumidAir` (°C, Pa, kJ/kg); conversion to CoolProp's SI units happens here.

    Examples
    --------
    >>> state = CoolPropHumidAir().state(temperature=20.0, pressure=101325.0, humidity_ratio=0.0073)
    >>> round(state.relative_humidity)
    50
    """

    def state(self, temperature: float, pressure: float, humidity_ratio: float) -> HumidAirState:
        return _CoolPropHumidAirState(temperature=temperature, pressure=pressure, humidity_ratio=humidity_ratio)


def _ha_props(output: str, temperature: float, pressure: float, humidity_ratio: float) -> float:
    try:
        return CP.HAPropsSI(output, "T", temperature + T_ZERO_KELVIN, "P", pressure, "W", humidity_ratio)
    except Exception as e:
        logger.error(
            "CoolProp HAPropsSI failed for '%s' at t = %s °C, P = %s Pa, x = %s: %s",
            output,
            temperature,
            pressure,
            humidity_ratio,
            e,
        )
        raise ValueError(f"Cannot evaluate humid air property '{output}' with CoolProp: {e}") from e


@dataclass(frozen=True)
class _CoolPropHumidAirState:
    """CoolProp humid air state; properties are cached and converted to library units."""

    temperature: float  # °C
    pressure: float  # Pa
    humidity_ratio: float  # kg/kg

    def _get(self, output: str) -> float:
        return _ha_props(output, self.temperature, self.pressure, self.humidity_ratio)

    @cached_property
    def saturation_pressure(self) -> float:
        """Partial pressure of water vapour at saturation [Pa]."""
        return CP.HAPropsSI("P_w", "T", self.temperature + T_ZERO_KELVIN, "P", self.pressure, "R", 1.0)

    @cached_property
    def relative_humidity(self) -> float:
        return self._get("R") * 100.0

    @cached_property
    def dew_point_temperature(self) -> float:
        return self._get("Tdp") - T_ZERO_KELVIN

    @cached_property
    def wet_bulb_temperature(self) -> float:
        return self._get("Twb") - T_ZERO_KELVIN

    @cached_property
    def specific_enthalpy(self) -> float:
        """Specific enthalpy [kJ/kg dry air]."""
        return self._get("Hda") / 1000.0

    @cached_property
    def specific_heat(self) -> float:
        """Specific heat [kJ/(kg dry air·K)]."""
        return self._get("cp") / 1000.0

    @cached_property
    def density(self) -> float:
        """Inverse of the specific volume per kg of dry air [kg/m^3]."""
        return 1.0 / self._get("Vda")

    @cached_property
    def dynamic_viscosity(self) -> float:
        return self._get("mu")

    @cached_property
    def thermal_conductivity(self) -> float:
        return self._get("k")


__all__ = [
    "VapourState",
    "HumidAirState",
    "HumidAirModel",
    "HumidAir",
    "EmpiricalHumidAir",
    "CoolPropHumidAir",
]
