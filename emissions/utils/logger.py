# emissions/utils/logger.py
"""
Logging setup for the certification backend.

Every record goes to the console; with LOG_TO_FILE it is also written to
LOG_DIR/emissions.log, rotated by size. Tests and read-only deployments set
LOG_TO_FILE=false.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from emissions.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILENAME = "emissions.log"

# Handlers installed by configure_logging, removed again on reconfiguration
_handlers: List[logging.Handler] = []


def configure_logging(level: Optional[str] = None, log_dir: Optional[str] = None,
                      to_file: Optional[bool] = None) -> logging.Logger:
    """
    (Re)install the console and rotating-file handlers on the root logger.
    Arguments default to the LOG_* settings. Returns the root logger.
    """
    level = (level or settings.LOG_LEVEL).upper()
    log_dir = log_dir or settings.LOG_DIR
    to_file = settings.LOG_TO_FILE if to_file is None else to_file

    root = logging.getLogger()
    for handler in _handlers:
        root.removeHandler(handler)
        handler.close()
    _handlers.clear()

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(fmt)
    _handlers.append(console)

    if to_file:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=os.path.join(log_dir, LOG_FILENAME),
            maxBytes=settings.LOG_FILE_MAX_BYTES,
            backupCount=settings.LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
        file_handler.setFormatter(fmt)
        _handlers.append(file_handler)

    for handler in _handlers:
        handler.setLevel(level)
        root.addHandler(handler)
    root.setLevel(level)
    return root


def get_logger(name: str) -> logging.Logger:
    """Named module logger; installs the handlers on first use."""
    if not _handlers:
        configure_logging()
    return logging.getLogger(name)
