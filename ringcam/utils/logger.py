# ringcam/utils/logger.py
"""
Centralised logging configuration for the entire application.
Logs to console and, unless LOG_DIR is empty, to a rotating file in LOG_DIR.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from ringcam.config import settings

LOG_LEVEL = settings.LOG_LEVEL.upper()
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# httpx logs every request at INFO, the rest client logs its own timing at DEBUG
_NOISY_LOGGERS = ("httpx", "httpcore")

_configured = False


def _configure_root_logger():
    global _configured
    if _configured:
        return
    _configured = True

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers = [logging.StreamHandler()]

    if settings.LOG_DIR:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        # keeps last 10 × 5MB log files
        handlers.append(RotatingFileHandler(
            filename=os.path.join(settings.LOG_DIR, "ringcam.log"),
            maxBytes=5 * 1024 * 1024,
            backupCount=10,
            encoding="utf-8",
        ))

    root = logging.getLogger()
    root.setLevel(LOG_LEVEL)
    for handler in handlers:
        handler.setLevel(LOG_LEVEL)
        handler.setFormatter(fmt)
        root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, root.level))


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Call this at the top of every module."""
    _configure_root_logger()
    return logging.getLogger(name)
