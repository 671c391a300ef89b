from __future__ import annotations
import logging

from config import LOG_FORMAT, LOG_DATEFMT

ROOT = "clinic"

_logger = logging.getLogger(ROOT)


def configure_logging(level: str = "INFO") -> logging.Logger:
    _logger.setLevel(level.upper())
    if not _logger.handlers:
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
        _logger.addHandler(ch)
    return _logger


def get_logger(name: str) -> logging.Logger:
    return _logger.getChild(name)
