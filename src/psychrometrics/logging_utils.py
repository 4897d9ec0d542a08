from __future__ import annotations

import logging

DEFAULT_FORMAT = "%(levelname)s:%(name)s:%(message)s"
SOLVER_LOGGER_NAME = "psychrometrics.solver"


def configure_logging(
    level: int = logging.INFO,
    *,
    format: str = DEFAULT_FORMAT,
    force: bool | None = None,
    solver_level: int | None = None,
) -> None:
    """Configure root logging once for scripts and notebooks.

    `force` is forwarded to ``logging.basicConfig`` so an interactive session can be
    reconfigured. `solver_level` sets the level of the root-solver loggers on their own,
    e.g. ``logging.DEBUG`` to trace every iteration without flooding the rest of the output.
    """

    kwargs: dict[str, object] = {"level": level, "format": format}
    if force is not None:
        kwargs["force"] = force
    logging.basicConfig(**kwargs)
    if solver_level is not None:
        logging.getLogger(SOLVER_LOGGER_NAME).setLevel(solver_level)


__all__ = ["configure_logging", "DEFAULT_FORMAT", "SOLVER_LOGGER_NAME"]
