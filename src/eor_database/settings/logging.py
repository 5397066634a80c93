"""
Logging-related settings for EOR Database.

Keys live under the `logging/` group of the INI file. Level names are
stored upper-case; an unknown value read back from a hand-edited file is
reported by the settings validator and treated as INFO.
"""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILE_PATH = "logs/eor_database.csv"

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings:
    """Console and CSV file logging options."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    def _get_bool(self, key: str, default: bool = False) -> bool:
        # INI values come back as strings
        value = self.settings.value(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value) if value is not None else default

    def _set(self, key: str, value: object) -> None:
        self.settings.setValue(key, value)
        self.settings.sync()

    # === CONSOLE ===

    @property
    def console_logging(self) -> bool:
        return self._get_bool("logging/console_enabled", True)

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        self._set("logging/console_enabled", value)

    @property
    def console_log_level(self) -> str:
        """Console threshold, one of VALID_LEVELS when set through this API."""
        return self._get_str("logging/console_level", "INFO").upper()

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        if value.upper() not in VALID_LEVELS:
            logger.warning(
                f"Invalid console log level: {value}, keeping current: {self.console_log_level}"
            )
            return
        self._set("logging/console_level", value.upper())

    @property
    def console_use_colors(self) -> bool:
        return self._get_bool("logging/console_use_colors", True)

    @console_use_colors.setter
    def console_use_colors(self, value: bool) -> None:
        self._set("logging/console_use_colors", value)

    # === CSV FILE ===

    @property
    def file_logging(self) -> bool:
        return self._get_bool("logging/file_enabled", False)

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        self._set("logging/file_enabled", value)

    @property
    def log_file_path(self) -> str:
        """CSV log location, relative paths resolve against the working directory."""
        return self._get_str("logging/file_path", DEFAULT_LOG_FILE_PATH) or DEFAULT_LOG_FILE_PATH

    @log_file_path.setter
    def log_file_path(self, value: str) -> None:
        if not value.strip():
            logger.warning(f"Empty log file path, keeping current: {self.log_file_path}")
            return
        self._set("logging/file_path", value)
