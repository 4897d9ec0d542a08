import logging

import matplotlib.pyplot as plt
import numpy as np

from psychrometrics import CoolantData, FlowOfHumidAir, HumidAir, cooling_from_temperature, heating_from_temperature
from psychrometrics.constants import STANDARD_ATMOSPHERE
from psychrometrics.logging_utils import configure_logging
from psychrometrics.properties import dry_air, humid_air, water_vapour

# ---------------------------
# Quick plot configuration
# ---------------------------
PRESSURE = STANDARD_ATMOSPHERE
T_MIN, T_MAX = -10.0, 45.0
RH_LINES = [10.0, 20.0, 30.0, 40.0, 50.0, 60.0, 70.0, 80.0, 90.0, 100.0]
ENTHALPY_LINES = np.arange(0.0, 130.0, 10.0)  # kJ/kg
X_MAX_PLOT = 30.0  # g/kg

# Example air handling unit: summer cooling followed by reheat
SHOW_PROCESS = True
INLET_TEMPERATURE, INLET_RH = 32.0, 50.0
COIL = CoolantData(supply_temperature=6.0, return_temperature=12.0)
COIL_OUTLET_TEMPERATURE = 14.0
SUPPLY_TEMPERATURE = 18.0

DEFAULT_DPI = 120

temperatures = np.linspace(T_MIN, T_MAX, 111)


def _relative_humidity_line(rh: float) -> np.ndarray:
    """Humidity ratio [g/kg] along a constant RH line."""
    return np.array(
        [humid_air.humidity_ratio(rh, humid_air.saturation_pressure(t), PRESSURE) * 1000.0 for t in temperatures]
    )


def _enthalpy_line(enthalpy: float) -> tuple[np.ndarray, np.ndarray]:
    """Constant enthalpy line clipped to the unsaturated region."""
    t_line, x_line = [], []
    for t in temperatures:
        # unsaturated air: i = i_da(t) + x · i_wv(t)
        x = (enthalpy - dry_air.specific_enthalpy(t)) / water_vapour.specific_enthalpy(t)
        x_sat = humid_air.max_humidity_ratio(humid_air.saturation_pressure(t), PRESSURE)
        if 0.0 <= x <= x_sat:
            t_line.append(t)
            x_line.append(x * 1000.0)
    return np.array(t_line), np.array(x_line)


def plot_chart(ax):
    for rh in RH_LINES:
        linewidth = 1.6 if rh == 100.0 else 0.7
        x_line = _relative_humidity_line(rh)
        mask = x_line <= X_MAX_PLOT
        ax.plot(temperatures[mask], x_line[mask], color="tab:blue", linewidth=linewidth)
        if mask.any():
            idx = np.flatnonzero(mask)[-1]
            ax.annotate(f"{rh:.0f}%", (temperatures[idx], x_line[idx]), fontsize=7, color="tab:blue")

    for enthalpy in ENTHALPY_LINES:
        t_line, x_line = _enthalpy_line(enthalpy)
        if t_line.size:
            ax.plot(t_line, x_line, color="grey", linewidth=0.5, linestyle="--")
            ax.annotate(f"{enthalpy:.0f}", (t_line[0], x_line[0]), fontsize=6, color="grey")

    ax.set_xlim(T_MIN, T_MAX)
    ax.set_ylim(0.0, X_MAX_PLOT)
    ax.set_xlabel("Dry-bulb temperature [°C]")
    ax.set_ylabel("Humidity ratio [g/kg dry air]")
    ax.yaxis.tick_right()
    ax.yaxis.set_label_position("right")
    ax.grid(True, alpha=0.3)
    ax.set_title(f"Psychrometric chart, P = {PRESSURE / 1000.0:.3f} kPa")


def plot_process(ax):
    inlet = FlowOfHumidAir.of_volumetric_flow(
        HumidAir.from_relative_humidity(INLET_TEMPERATURE, INLET_RH, PRESSURE), 1.0
    )
    cooled = cooling_from_temperature(inlet, COIL, COIL_OUTLET_TEMPERATURE)
    reheated = heating_from_temperature(cooled.outlet_flow, SUPPLY_TEMPERATURE)

    states = [inlet, cooled.outlet_flow, reheated.outlet_flow]
    t_points = [flow.temperature for flow in states]
    x_points = [flow.humidity_ratio * 1000.0 for flow in states]
    ax.plot(t_points, x_points, marker="o", color="tab:red", label="cooling + reheat")
    t_wall = COIL.average_temperature
    x_wall = humid_air.max_humidity_ratio(humid_air.saturation_pressure(t_wall), PRESSURE) * 1000.0
    ax.plot(
        [INLET_TEMPERATURE, t_wall],
        [x_points[0], x_wall],
        color="tab:red",
        linestyle=":",
        linewidth=0.8,
        label="coil line",
    )
    ax.legend(loc="upper left")

    logging.info(
        "Coil: %.2f kW, condensate %.2f g/s, bypass factor %.3f",
        cooled.heat_of_process / 1000.0,
        cooled.condensate_flow.mass_flow * 1000.0,
        cooled.bypass_factor,
    )
    logging.info("Reheat: %.2f kW", reheated.heat_of_process / 1000.0)


if __name__ == "__main__":
    # logging levels  DEBUG < INFO < WARNING < ERROR < CRITICAL (Default is WARNING)
    configure_logging(logging.INFO)

    fig, ax = plt.subplots(figsize=(10, 7), dpi=DEFAULT_DPI)
    plot_chart(ax)
    if SHOW_PROCESS:
        plot_process(ax)
    fig.tight_layout()
    plt.show()
