"""
Logging for the ``volumize`` command line.

Library modules only create loggers under the ``volumize`` namespace and
never attach handlers. The command line calls ``setup_logging`` once per
run: diagnostics go to stderr so that stdout carries nothing but command
output, and ``--log-file`` keeps a copy of the same records.

Verbosity follows the usual ``-v`` convention: warnings by default (curves
treated as 0, skipped files), ``-v`` adds the scene summary and ``-vv``
every skipped slice and failed evaluation.
"""
import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "volumize"

LOG_FORMAT = '%(asctime)s %(levelname)-7s %(name)s: %(message)s'
DATE_FORMAT = '%H:%M:%S'

_VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def level_for_verbosity(count: int) -> int:
    """Map the number of ``-v`` flags to a logging level."""
    count = max(0, min(count, len(_VERBOSITY_LEVELS) - 1))
    return _VERBOSITY_LEVELS[count]


def setup_logging(level: int = logging.WARNING, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach stderr (and optionally file) handlers to the package logger.

    Calling it again replaces the handlers of the previous call.

    Args:
        level: threshold for both handlers
        log_file: path of a log file, truncated on open

    Returns:
        the ``volumize`` logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("logging to stderr%s at %s",
                 f" and {log_file}" if log_file else "", logging.getLevelName(level))
    return logger
