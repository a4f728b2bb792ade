"""
Logging setup.

All modules log through ``logging.getLogger(__name__)``; this module only
decides where records go. Console output is always on, rotating files
under ``LOG_DIR`` are optional and errors get a file of their own.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from weatherdash.config import Settings

DEV_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
PROD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "httpx", "passlib")


def _file_handler(path: Path, level: int, formatter: logging.Formatter) -> RotatingFileHandler:
    handler = RotatingFileHandler(path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(settings: Settings) -> logging.Logger:
    """
    Configure the root logger for the application.

    Calling it again replaces the handlers installed by the previous call,
    so building several apps in one process does not duplicate output.

    Args:
        settings: Application settings (``LOG_LEVEL``, ``LOG_DIR``, ``DEBUG``)

    Returns:
        The root logger
    """
    root = logging.getLogger()
    root.setLevel(settings.LOG_LEVEL)
    for handler in list(root.handlers):
        if getattr(handler, "_weatherdash", False):
            root.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(
        fmt=DEV_FORMAT if settings.DEBUG else PROD_FORMAT,
        datefmt=DATE_FORMAT,
    )

    handlers = []
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
    console.setFormatter(formatter)
    handlers.append(console)

    if settings.LOG_DIR:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(_file_handler(log_dir / "weather_api.log", logging.INFO, formatter))
        handlers.append(_file_handler(log_dir / "weather_api_errors.log", logging.ERROR, formatter))

    for handler in handlers:
        handler._weatherdash = True
        root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root.debug(f"Logging configured: level={settings.LOG_LEVEL} debug={settings.DEBUG} dir={settings.LOG_DIR or '-'}")
    return root


def get_logger(name: str) -> logging.Logger:
    """Module logger, e.g. ``get_logger(__name__)``."""
    return logging.getLogger(name)
