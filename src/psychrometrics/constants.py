"""Physical constants, physical limits and solver defaults.

Units: temperature [°C], pressure [Pa], humidity ratio [kg/kg], RH [%], enthalpy [kJ/kg],
mass flow [kg/s].
"""

from __future__ import annotations

# region Physical constants
T_ZERO_KELVIN = 273.15  # K at 0 °C
STANDARD_ATMOSPHERE = 101_325.0  # Pa

DRY_AIR_MOLECULAR_MASS = 28.96546  # kg/kmol
DRY_AIR_GAS_CONSTANT = 287.055  # J/(kg·K)
DRY_AIR_SUTHERLAND_CONSTANT = 111.0  # K

WATER_VAPOUR_MOLECULAR_MASS = 18.01528  # kg/kmol
WATER_VAPOUR_GAS_CONSTANT = 461.52  # J/(kg·K)
WATER_VAPOUR_SUTHERLAND_CONSTANT = 961.0  # K

HEAT_OF_WATER_VAPORIZATION = 2500.9  # kJ/kg at 0 °C
HEAT_OF_ICE_MELT = 334.1  # kJ/kg

# ratio of molecular masses, ~0.622
WG_RATIO = WATER_VAPOUR_MOLECULAR_MASS / DRY_AIR_MOLECULAR_MASS
# endregion

# region Physical limits
PRESSURE_MIN = 50_000.0
PRESSURE_MAX = 5_000_000.0
TEMPERATURE_MIN = -150.0
TEMPERATURE_MAX = 200.0
HUMIDITY_RATIO_MAX = 3.0
RELATIVE_HUMIDITY_MAX = 100.0
MASS_FLOW_MAX = 5.0e9
COOLANT_TEMPERATURE_MIN = 0.0
COOLANT_TEMPERATURE_MAX = 90.0
# Targets closer to saturation than this are not reachable by a real coil or heater.
PROCESS_RELATIVE_HUMIDITY_MAX = 98.0
# endregion

# region Solver defaults
SOLVER_A0 = -50.0
SOLVER_B0 = 50.0
SOLVER_TOLERANCE = 1e-5
SOLVER_MAX_ITERATIONS = 100
SOLVER_EVAL_CYCLES = 2
SOLVER_SECOND_POINT_DIVISOR = 2
SOLVER_TARGET_VALUE_DIVISOR = 2

# Seeded brackets span [0.8, 1.01] times the closed-form estimate.
SEED_LOWER_COEF = 0.8
SEED_UPPER_COEF = 1.01
# endregion
