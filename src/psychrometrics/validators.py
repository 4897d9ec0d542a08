from __future__ import annotations

import logging
import math

from psychrometrics.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


def _fail(name: str, value: object, constraint: str) -> InvalidArgumentError:
    logger.debug("Rejected %s = %r: %s", name, value, constraint)
    return InvalidArgumentError(name, value, constraint)


def require_finite(name: str, value: float) -> float:
    if not math.isfinite(value):
        raise _fail(name, value, "must be a finite number")
    return value


def require_between(name: str, value: float, lower: float, upper: float) -> float:
    """Inclusive range check; returns the value so calls can be chained in assignments."""
    require_finite(name, value)
    if value < lower or value > upper:
        raise _fail(name, value, f"must lie within [{lower:g}, {upper:g}]")
    return value


def require_non_negative(name: str, value: float) -> float:
    require_finite(name, value)
    if value < 0.0:
        raise _fail(name, value, "must not be negative")
    return value


def require_positive(name: str, value: float) -> float:
    require_finite(name, value)
    if value <= 0.0:
        raise _fail(name, value, "must be greater than zero")
    return value


def require_non_zero(name: str, value: float) -> float:
    require_finite(name, value)
    if value == 0:
        raise _fail(name, value, "must not be zero")
    return value


def require_at_most(name: str, value: float, upper: float) -> float:
    require_finite(name, value)
    if value > upper:
        raise _fail(name, value, f"must not exceed {upper:g}")
    return value


def require_at_least(name: str, value: float, lower: float) -> float:
    require_finite(name, value)
    if value < lower:
        raise _fail(name, value, f"must not be below {lower:g}")
    return value


def require_valid_saturation_pressure(saturation_pressure: float, pressure: float, temperature: float) -> None:
    """Saturation pressure must stay below the total pressure for the air to exist as a gas mixture."""
    if saturation_pressure >= pressure:
        raise _fail(
            "saturation_pressure",
            saturation_pressure,
            f"must be lower than pressure {pressure:g} Pa (temperature {temperature:g} °C)",
        )


__all__ = [
    "require_finite",
    "require_between",
    "require_non_negative",
    "require_positive",
    "require_non_zero",
    "require_at_most",
    "require_at_least",
    "require_valid_saturation_pressure",
]
