"""Liquid water correlations. Temperature in °C."""

from __future__ import annotations


def specific_heat(tx: float) -> float:
    """Specific heat [kJ/(kg·K)]; sixth order fit on (0, 100] °C, seventh order outside."""
    if 0.0 < tx <= 100.0:
        return (
            3.93240161e-13 * tx**6
            - 1.525847751e-10 * tx**5
            + 2.479227180e-8 * tx**4
            - 2.166932275e-6 * tx**3
            + 1.156152199e-4 * tx**2
            - 3.400567477e-3 * tx
            + 4.219924305
        )
    return (
        2.588246403e-15 * tx**7
        - 3.604612987e-12 * tx**6
        + 2.112059173e-9 * tx**5
        - 6.727469888e-7 * tx**4
        + 1.255841880e-4 * tx**3
        - 1.370455849e-2 * tx**2
        + 8.093157187e-1 * tx
        - 15.75651097
    )


def specific_enthalpy(tx: float) -> float:
    """Specific enthalpy [kJ/kg]; zero below 0 °C where water is treated as ice."""
    return 0.0 if tx < 0.0 else tx * specific_heat(tx)


def density(tx: float) -> float:
    """Density [kg/m^3], Kell's rational fit."""
    return (
        999.83952
        + 16.945176 * tx
        - 7.9870401e-3 * tx**2
        - 46.170461e-6 * tx**3
        + 105.56302e-9 * tx**4
        - 280.54253e-12 * tx**5
    ) / (1.0 + 16.879850e-3 * tx)


__all__ = ["specific_heat", "specific_enthalpy", "density"]
