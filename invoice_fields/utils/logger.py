"""
Logging for the extraction engine.

Every module logs under the ``invoice_fields`` namespace, so one call to
``setup_logger`` (or ``setup_logger_from_config`` from the CLI) decides
where extraction diagnostics go: a colored console stream and, when
enabled, a rotating log file.

Usage:
    from invoice_fields.utils.logger import get_logger

    logger = get_logger(__name__)
    logger.debug("product_1 anchored on row 7")
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Union

import colorama
from colorama import Fore, Style

colorama.init()

ROOT_LOGGER_NAME = "invoice_fields"
DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024


class ColoredFormatter(logging.Formatter):
    """Console formatter that tints each record by level."""

    COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Style.BRIGHT,
    }
    RESET = Style.RESET_ALL

    def format(self, record: logging.LogRecord) -> str:
        return f"{self.COLORS.get(record.levelno, '')}{super().format(record)}{self.RESET}"


def _console_handler(formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    return handler


def _file_handler(
    log_file: Union[str, Path],
    formatter: logging.Formatter,
    max_bytes: int,
    backup_count: int
) -> logging.Handler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8'
    )
    handler.setFormatter(formatter)
    return handler


def setup_logger(
    level: str = "INFO",
    log_format: Optional[str] = None,
    date_format: Optional[str] = None,
    log_file: Union[str, Path, None] = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = 5,
    colorize: bool = True
) -> logging.Logger:
    """
    Point the ``invoice_fields`` logger at the console and optionally a file.

    Calling it again replaces the previous handlers, so tests and the CLI
    can reconfigure freely.

    Args:
        level: Level name applied to the logger (DEBUG ... CRITICAL)
        log_format: Record format; defaults to time | level | name | message
        date_format: ``asctime`` format
        log_file: Rotating log file, or None for console only
        max_bytes: Size at which the log file rotates
        backup_count: Rotated files kept
        colorize: Tint console records by level

    Returns:
        The ``invoice_fields`` logger.
    """
    log_format = log_format or DEFAULT_FORMAT
    date_format = date_format or DEFAULT_DATE_FORMAT

    app_logger = logging.getLogger(ROOT_LOGGER_NAME)
    app_logger.setLevel(level.upper())
    app_logger.propagate = False

    for old in list(app_logger.handlers):
        app_logger.removeHandler(old)

    formatter_class = ColoredFormatter if colorize else logging.Formatter
    app_logger.addHandler(_console_handler(formatter_class(log_format, datefmt=date_format)))

    if log_file:
        app_logger.addHandler(_file_handler(
            log_file, logging.Formatter(log_format, datefmt=date_format), max_bytes, backup_count
        ))

    app_logger.debug(f"Logging at {level.upper()}" + (f", file {log_file}" if log_file else ""))
    return app_logger


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name`` inside the ``invoice_fields`` namespace."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logger_from_config() -> logging.Logger:
    """Configure logging from the ``logging`` section of settings.yaml."""
    from config import get_config, get_config_path

    log_file = None
    if get_config("logging.file.enabled", False):
        log_file = get_config_path("logging.file.path")

    return setup_logger(
        level=get_config("logging.level", "INFO"),
        log_format=get_config("logging.format"),
        date_format=get_config("logging.date_format"),
        log_file=log_file,
        max_bytes=get_config("logging.file.max_bytes", DEFAULT_MAX_BYTES),
        backup_count=get_config("logging.file.backup_count", 5),
        colorize=get_config("logging.console.colorize", True)
    )
