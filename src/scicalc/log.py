"""
Logging setup for applications embedding the calculator.

Library modules only create loggers under the "scicalc" namespace; nothing
is printed until the host calls ``enable_logging``.
"""

import logging
import os
from typing import Optional, Union

ENV_VAR_LOG_LEVEL = "SCICALC_LOG_LEVEL"

ROOT_LOGGER_NAME = "scicalc"

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_handler: Optional[logging.Handler] = None


def _resolve_level(log_level: Union[str, int, None]) -> int:
    if log_level is None:
        log_level = os.getenv(ENV_VAR_LOG_LEVEL, "warning")
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")
    return level


def enable_logging(log_level: Union[str, int, None] = None) -> logging.Logger:
    """
    Attaches a stream handler to the "scicalc" logger.

    Calling it again only changes the level.

    Args:
        log_level: Level name or number; defaults to $SCICALC_LOG_LEVEL,
            then "warning"
    """
    global _handler
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(_resolve_level(log_level))

    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        logger.addHandler(_handler)

    return logger
