"""Minimal logging utilities for fhxml.

Provides a simple get_logger function that wraps the standard library logging.
Library modules never install handlers; the command line does that.

Example:
    >>> from fhxml.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Parsing POWER.fhx")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "fhxml." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("driver")
        >>> logger.name
        'fhxml.driver'
    """
    if not (name == "fhxml" or name.startswith("fhxml.")):
        name = f"fhxml.{name}"
    return logging.getLogger(name)
