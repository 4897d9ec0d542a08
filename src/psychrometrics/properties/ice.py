"""Ice correlations. Temperature in °C."""

from __future__ import annotations

from psychrometrics.constants import HEAT_OF_ICE_MELT


def specific_heat(tx: float) -> float:
    return 2.0509727263 + 0.0048764802 * tx - 0.0000277225 * tx**2 - 0.0000001031 * tx**3


def specific_enthalpy(tx: float) -> float:
    """Specific enthalpy [kJ/kg] including the heat of melt; zero above 0 °C."""
    return 0.0 if tx > 0.0 else tx * specific_heat(tx) - HEAT_OF_ICE_MELT


def density(tx: float) -> float:
    return (
        916.1204382651714
        - 0.42803436487679 * tx
        - 0.02237994685111 * tx**2
        - 0.00061508830263 * tx**3
        - 0.00000784399543 * tx**4
        - 0.00000003790984 * tx**5
        + 0.00000000005916 * tx**6
        + 0.00000000000078 * tx**7
    )


def thermal_conductivity(tx: float) -> float:
    return 2.2173524402158 - 0.0069168602852 * tx + 0.0001016721167 * tx**2 + 0.0000004456743 * tx**3


__all__ = ["specific_heat", "specific_enthalpy", "density", "thermal_conductivity"]
