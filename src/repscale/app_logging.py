"""Logging configuration helpers."""

import logging


def configure_logging(level: str = "WARNING") -> None:
    """Configure package logging with a single stream handler."""
    logger = logging.getLogger("repscale")
    logger.setLevel(level.upper())
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
