"""Logging configuration for the tallybook command line."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler: logging.Handler | None = None


def configure_logging(level: str = "WARNING") -> None:
    """Attach a single stderr handler to the ``tallybook`` logger.

    Calling it again swaps the handler for one bound to the current stderr,
    so repeated calls never stack handlers.

    Raises:
        ValueError: If ``level`` is not a logging level name
    """
    global _handler

    numeric_level = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level '{level}'")

    logger = logging.getLogger("tallybook")
    if _handler is not None:
        logger.removeHandler(_handler)
    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(numeric_level)
