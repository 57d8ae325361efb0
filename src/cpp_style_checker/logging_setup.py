"""Logging configuration for command-line use."""

from __future__ import annotations

import logging

DEFAULT_LOGGER_NAME = "cpp_style_checker"


def configure_logging(verbose: bool = False, logger_name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """Configure and return the package logger.

    Script usage rarely calls ``logging.basicConfig``, so a stderr handler is
    attached once. ``verbose`` lowers the level from WARNING to INFO.
    """

    logger = logging.getLogger(logger_name)
    level = logging.INFO if verbose else logging.WARNING
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s - %(message)s")
        )
        logger.addHandler(handler)

    return logger
