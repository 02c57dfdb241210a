"""Logging setup shared by the simulator, interpreter and exporter."""

from __future__ import annotations

import logging

from tiny_qsim.config import LOG_FORMAT, LOG_LEVEL


def get_logger(name: str = "tiny_qsim", level: str | None = None) -> logging.Logger:
    """
    Return a logger with a single console handler attached.

    Parameters
    ----------
    name : str
        Logger name.
    level : str, optional
        Log level name (DEBUG, INFO, ...). Defaults to ``config.LOG_LEVEL``.
    """
    if level is None:
        level = LOG_LEVEL

    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger


__all__ = ["get_logger"]
