"""Logging setup shared by the API and the scripts."""

import logging
import sys

ROOT_LOGGER = "sitebook"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stream handler to the ``sitebook`` logger.

    Safe to call more than once; later calls only change the level.
    """
    global _configured
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level.upper())
    if not _configured:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        _configured = True
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under ``sitebook.``."""
    if name.startswith(ROOT_LOGGER + ".") or name == ROOT_LOGGER:
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
