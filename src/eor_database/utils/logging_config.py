"""
Logging configuration for EOR Database.

Console output is human-oriented (optionally colored); the file log is a
semicolon-separated CSV that can be opened in a spreadsheet.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..settings import AppSettings

CONSOLE_FORMAT = "%(asctime)s : %(levelname)-8s : %(message)s"
CONSOLE_DATE_FORMAT = "%H:%M:%S"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

FILE_MAX_BYTES = 10 * 1024 * 1024
FILE_BACKUP_COUNT = 5

# Third-party loggers capped at INFO
NOISY_LOGGERS = ("PIL", "httpx", "httpcore")


class ColoredFormatter(logging.Formatter):
    """Formatter with colored level names for console output."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",  # Reset
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
        reset = self.COLORS["RESET"]
        formatted = super().format(record)
        # Color only the first occurrence, which is the level column
        return formatted.replace(record.levelname, f"{color}{record.levelname}{reset}", 1)


class CSVFormatter(logging.Formatter):
    """CSV-safe formatter for file logging.

    Columns: timestamp, level, milliseconds since startup, logger name,
    line number, message. Quotes inside the message are doubled.
    """

    def format(self, record: logging.LogRecord) -> str:
        columns = [
            self.formatTime(record, self.datefmt),
            record.levelname.ljust(8),
            f"{int(record.relativeCreated)} ms",
            record.name,
            str(record.lineno),
            record.getMessage(),
        ]
        quoted = [
            column if index == 1 else '"' + column.replace('"', '""') + '"'
            for index, column in enumerate(columns)
        ]
        return ";".join(quoted)


def _console_handler(level_name: str, use_colors: bool) -> logging.Handler:
    formatter_class = ColoredFormatter if use_colors else logging.Formatter
    handler = logging.StreamHandler()
    handler.setLevel(getattr(logging, level_name.upper(), logging.INFO))
    handler.setFormatter(formatter_class(fmt=CONSOLE_FORMAT, datefmt=CONSOLE_DATE_FORMAT))
    return handler


def _file_handler(log_path: Path) -> Optional[logging.Handler]:
    """Rotating CSV handler, or None when the log directory is not writable."""
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=FILE_MAX_BYTES,
            backupCount=FILE_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        logging.getLogger().warning(f"Could not setup file logging at {log_path}: {e}")
        return None
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(CSVFormatter(datefmt=FILE_DATE_FORMAT))
    return handler


def setup_logging(settings: "AppSettings") -> None:
    """
    Setup application logging with console and file handlers.

    Replaces any handler already attached to the root logger, so calling
    it again after a settings change reconfigures logging in place.

    Args:
        settings: AppSettings instance for all logging configuration
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    logging.getLogger("eor_database").setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    if settings.console_logging:
        root_logger.addHandler(
            _console_handler(settings.console_log_level, settings.console_use_colors)
        )

    file_handler = None
    if settings.file_logging:
        file_handler = _file_handler(Path(settings.log_file_path))
        if file_handler is not None:
            root_logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO)

    logger = logging.getLogger(__name__)
    logger.info("Logging initialized")
    if settings.console_logging:
        logger.debug(
            f"Console logging: {settings.console_log_level} (colors: {settings.console_use_colors})"
        )
    if file_handler is not None:
        logger.debug(f"File logging: DEBUG at {Path(settings.log_file_path).absolute()}")
