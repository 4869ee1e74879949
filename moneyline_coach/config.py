"""
Runtime tunables and logger setup for the Moneyline Coach API.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

DISCORD_MAX_CHARS = 1800
"""Shared text is truncated to this many characters before posting."""


def setup_logger(name: str) -> logging.Logger:
    """Create or retrieve a configured logger for the application."""

    logger = logging.getLogger(name)

    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)
    logger.setLevel(log_level)

    if logging.getLogger().handlers:
        logger.propagate = True
        return logger

    if not logger.handlers:
        log_file = os.path.join(os.path.dirname(os.path.dirname(__file__)), "moneyline_coach.log")
        os.makedirs(os.path.dirname(log_file), exist_ok=True)
        handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=3)
        formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s')
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        logger.addHandler(handler)
        logger.propagate = False

    return logger
