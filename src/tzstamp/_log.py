################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################
"""
Module loggers for tzstamp. Silent unless ``TZSTAMP_VERBOSE`` is set.
"""

import logging

from . import _env

PACKAGE_LOGGER_NAME = "tzstamp"

# Longest slice of rejected input that ends up in a log record.
MAX_LOGGED_INPUT = 64


def make_logger(name: str) -> logging.Logger:
    """Returns the logger for module ``name``.

    With ``TZSTAMP_VERBOSE`` set, the package logger gets a stderr handler at DEBUG
    level. The handler is attached at most once.
    """
    if _env.flag_set(_env.TZSTAMP_VERBOSE):
        package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
        if not package_logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(
                logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s")
            )
            package_logger.addHandler(handler)
            package_logger.setLevel(logging.DEBUG)

    return logging.getLogger(name)


def loggable(value) -> str:
    """``repr()`` of a caller-supplied value, cut to a bounded length."""
    text = repr(value)
    if len(text) > MAX_LOGGED_INPUT:
        return text[:MAX_LOGGED_INPUT] + "..."
    return text
