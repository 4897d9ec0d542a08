__all__ = [
    "solve",
    "find_root",
    "SolverConfig",
    "SolverResult",
    "HumidAir",
    "VapourState",
    "EmpiricalHumidAir",
    "CoolPropHumidAir",
    "FlowOfHumidAir",
    "FlowOfWater",
    "CoolantData",
    "PsychrometricsError",
    "InvalidArgumentError",
    "SolverError",
    "SolverConditionError",
    "SolverResultError",
    "SolverConvergenceError",
    "configure_logging",
]  # names exported by ``from psychrometrics import *``


from psychrometrics.exceptions import (
    InvalidArgumentError,
    PsychrometricsError,
    SolverConditionError,
    SolverConvergenceError,
    SolverError,
    SolverResultError,
)
from psychrometrics.fluids.flows import CoolantData, FlowOfHumidAir, FlowOfWater
from psychrometrics.fluids.protocols import CoolPropHumidAir, EmpiricalHumidAir, HumidAir, VapourState
from psychrometrics.logging_utils import configure_logging
from psychrometrics.process.cooling import (
    cooling_from_power,
    cooling_from_relative_humidity,
    cooling_from_temperature,
    dry_cooling_from_power,
    dry_cooling_from_temperature,
)
from psychrometrics.process.heating import (
    heating_from_power,
    heating_from_relative_humidity,
    heating_from_temperature,
)
from psychrometrics.process.mixing import (
    mix_for_target_flow_and_temperature,
    mix_multiple_flows,
    mix_two_flows,
)
from psychrometrics.properties.humid_air import (
    dew_point_temperature,
    dry_bulb_temperature_from_dew_point,
    dry_bulb_temperature_from_enthalpy,
    dry_bulb_temperature_from_rh,
    dry_bulb_temperature_from_wet_bulb,
    dry_bulb_temperature_max,
    saturation_pressure,
    wet_bulb_temperature,
)
from psychrometrics.solver.brent import SolverConfig, SolverResult, find_root, solve

# Process functions and inverters are importable from the package namespace as well:
#
# 1. import psychrometrics
#    psychrometrics.process.cooling.cooling_from_temperature(...)
#    psychrometrics.cooling_from_temperature(...)
#
# 2. from psychrometrics.properties import humid_air
#    humid_air.dew_point_temperature(20.0, 50.0, 101325.0)
