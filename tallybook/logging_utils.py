"""Mini README: Application-wide logging helpers for Tallybook.

Structure:
    * configure_root_logger - install a single formatted handler on the root logger.
    * get_logger - factory returning module loggers after baseline configuration.

Modules call ``get_logger(__name__)`` at import time. Configuration happens
exactly once per process so repeated imports (or uvicorn reloads) never stack
duplicate handlers. Levels may be given as ints or names such as ``"DEBUG"``.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def _resolve_level(level: Union[int, str]) -> int:
    """Translate level names into numeric logging levels."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown logging level: {level}")
    return resolved


def configure_root_logger(level: Union[int, str] = logging.INFO) -> None:
    """Configure the root logger with a timestamped formatter."""

    global _LOGGER_INITIALISED
    if _LOGGER_INITIALISED:
        logging.getLogger().setLevel(_resolve_level(level))
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_level(level))
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    if not _LOGGER_INITIALISED:
        configure_root_logger()
    return logging.getLogger(name)
