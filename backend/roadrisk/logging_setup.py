# backend/roadrisk/logging_setup.py
import logging
from logging.handlers import RotatingFileHandler
import os

from .config import LOG_DIR, LOG_LEVEL

LOGGER_NAME = "roadrisk"
LOG_FILE = "backend.log"
LOG_MAX_BYTES = 5_000_000
LOG_BACKUPS = 3
LOG_FORMAT = "%(asctime)s - [%(levelname)s] - %(name)s - %(message)s"


def _has_handler(logger, handler_type):
    # exact type: RotatingFileHandler is itself a StreamHandler
    return any(type(h) is handler_type for h in logger.handlers)


def configure_logging(name=LOGGER_NAME, level=LOG_LEVEL, log_dir=LOG_DIR):
    """
    Rotating file log under log_dir plus console output.
    Safe to call again (reloads, test runs): each handler kind is attached once.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    if not _has_handler(logger, RotatingFileHandler):
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, LOG_FILE),
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUPS,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if not _has_handler(logger, logging.StreamHandler):
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        logger.addHandler(console)

    return logger


logger = configure_logging()
