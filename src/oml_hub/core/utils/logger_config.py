# SPDX-License-Identifier: Apache-2.0
# Standard
from typing import Optional
import logging
import os

# Third Party
from rich.logging import RichHandler

# Verbosity levels understood by retrieval functions
VERBOSITY_SILENT = 0
VERBOSITY_NORMAL = 1
VERBOSITY_DEBUG = 2


def setup_logger(name):
    """
    Set up a rich console logger.

    Parameters
    ----------
    name : str
        Logger name.

    Returns
    -------
    logging.Logger
        Configured logger.
    """
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Keep transport chatter out of the flow logs
    http_log_level = os.getenv("HTTPX_LOG_LEVEL", "WARNING").upper()
    logging.getLogger("httpx").setLevel(http_log_level)
    logging.getLogger("httpcore").setLevel(http_log_level)

    # Prevent duplicate handlers if setup_logger is called multiple times
    if not logger.handlers:
        rich_handler = RichHandler(show_path=False)
        rich_handler.setLevel(log_level)
        rich_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        logger.addHandler(rich_handler)

    return logger


def resolve_verbosity(verbosity: Optional[int], default: int = VERBOSITY_NORMAL) -> int:
    """Return the effective verbosity, falling back to ``default`` when unset.

    Parameters
    ----------
    verbosity : Optional[int]
        Verbosity requested by the caller (0 = silent, 1 = normal, 2 = debug).
    default : int
        Verbosity to use when ``verbosity`` is None, usually taken from config.

    Returns
    -------
    int
        Verbosity clamped to the supported range.
    """
    if verbosity is None:
        verbosity = default
    return max(VERBOSITY_SILENT, min(VERBOSITY_DEBUG, int(verbosity)))


def log_at_verbosity(
    logger: logging.Logger, verbosity: int, required: int, message: str
) -> None:
    """Emit ``message`` if ``verbosity`` reaches ``required``."""
    if verbosity < required:
        return
    if required >= VERBOSITY_DEBUG:
        logger.debug(message)
    else:
        logger.info(message)
