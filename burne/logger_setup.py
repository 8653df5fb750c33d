"""
logger_setup.py - Logging Configuration

Logs to stderr with a short "[LEVEL] message" format. The level defaults to
WARNING, can be set with the BURNE_LOG environment variable, and is lowered
by -v (INFO) and -vv (DEBUG).
"""

from typing import Mapping, Optional
import logging
import os
import sys

DEFAULT_LEVEL = logging.WARNING
LOG_ENV_VAR = "BURNE_LOG"


def resolve_level(verbosity: int = 0, env: Optional[Mapping[str, str]] = None) -> int:
    """
    Pick the log level

    Args:
        verbosity: Number of -v flags
        env: Environment mapping (defaults to os.environ)

    Returns:
        logging level
    """
    if env is None:
        env = os.environ

    level = DEFAULT_LEVEL
    value = env.get(LOG_ENV_VAR, "").strip()
    if value:
        named = logging.getLevelName(value.upper())
        if isinstance(named, int):
            level = named

    if verbosity >= 2:
        level = min(level, logging.DEBUG)
    elif verbosity == 1:
        level = min(level, logging.INFO)
    return level


def configure_logging(verbosity: int = 0, env: Optional[Mapping[str, str]] = None) -> logging.Logger:
    """
    Configure the "burne" logger

    Calling it again replaces the previously installed handler.
    """
    logger = logging.getLogger("burne")
    logger.setLevel(resolve_level(verbosity, env))

    for handler in list(logger.handlers):
        if getattr(handler, "_burne_handler", False):
            logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    console_handler._burne_handler = True
    logger.addHandler(console_handler)
    return logger
