"""
Centralized logging configuration for the Yummio measurements service.
"""
import logging
import os
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

FORMATTER = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)


def _level_from_env(default: int = logging.INFO) -> int:
    name = os.getenv("YUMMIO_LOG_LEVEL", "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def get_logger(name: str) -> logging.Logger:
    """
    Logger for one yummio module, writing to stdout in the shared format.

    Each service module calls this once at import with its __name__, so API
    request lines and detection or sign-in messages can be told apart by
    module. YUMMIO_LOG_LEVEL (e.g. DEBUG, WARNING) sets the level; unknown
    names fall back to INFO. Repeat calls reuse the existing handler.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(FORMATTER)
        logger.addHandler(handler)
        logger.setLevel(_level_from_env())

    return logger


def setup_logging(level: int = logging.INFO) -> None:
    """
    Root logging for the convert_ingredients script and run.py, which log
    outside any yummio module logger.
    """
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)]
    )
