import logging
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL_ENV = "SHOPFRONT_LOG_LEVEL"


def get_logger(name="shopfront", level=None):
    """Package logger with one stream handler; SHOPFRONT_LOG_LEVEL overrides INFO."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    if level is None:
        level = logging.getLevelName(os.environ.get(LOG_LEVEL_ENV, "INFO").upper())
        if not isinstance(level, int):
            level = logging.INFO
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
