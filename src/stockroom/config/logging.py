"""Root logger setup for the Stockroom entry points."""

from __future__ import annotations

import logging

from .env import optional_env_var
from .errors import ConfigurationError

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def resolve_log_level(value: str | None) -> int:
    """Map a level name such as ``"debug"`` to its numeric value; blank means INFO."""

    if value is None:
        return logging.INFO
    level = logging.getLevelNamesMapping().get(value.strip().upper())
    if level is None:
        raise ConfigurationError(f"Unknown log level {value!r}")
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Configure the root logger once.

    Without an explicit ``level`` the ``STOCKROOM_LOG_LEVEL`` variable decides,
    falling back to INFO. ``force=True`` replaces handlers installed earlier.
    """

    if level is None:
        level = resolve_log_level(optional_env_var("STOCKROOM_LOG_LEVEL"))
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
