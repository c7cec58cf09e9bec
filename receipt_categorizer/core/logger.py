"""
Logging configuration for diagnostic traces.

Status lines meant for the user are printed by the processor and CLI; this
logger carries the debugging detail behind them (skip reasons, scores).
"""

import logging

LOGGER_NAME = "receipt_categorizer"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Attach a console handler to the package logger."""
    logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if verbose else logging.WARNING
    logger.setLevel(level)

    # Clear any existing handlers (in case this is called multiple times)
    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("  [%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child of the package logger for a module."""
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
