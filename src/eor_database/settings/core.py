"""
Core settings management for EOR Database.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from PySide6.QtCore import QSettings

from .types import ConfigError, ConfigVersion, ValidationResult
from .migration import SettingsMigrator
from .validation import SettingsValidator
from .paths import PathSettings
from .refresh import RefreshSettings
from .browse import BrowseSettings
from .logging import LoggingSettings

logger = logging.getLogger(__name__)

SETTINGS_FILE_ENV = "EOR_DATABASE_SETTINGS"
DEFAULT_SETTINGS_FILE = "eor_database.ini"


class AppSettings:
    """
    Configuration management using QSettings in INI format.

    Provides type-safe access to application settings with validation.
    The INI file location comes from the constructor, the
    EOR_DATABASE_SETTINGS environment variable or the working directory.
    """

    def __init__(
        self,
        settings_file: Optional[Union[str, Path]] = None,
        profile: str = "default",
    ):
        """Initialize settings from an INI file and profile.

        Args:
            settings_file: Path to the INI file (optional)
            profile: Settings profile name (default: "default")
        """
        if settings_file is None:
            settings_file = os.environ.get(SETTINGS_FILE_ENV, DEFAULT_SETTINGS_FILE)
        self.settings = QSettings(str(settings_file), QSettings.Format.IniFormat)
        self.profile = profile

        # Use profile as a group: default/paths/data, default/refresh/key, ...
        self.settings.beginGroup(profile)

        # Initialize subsystems
        self._migrator = SettingsMigrator(self.settings)
        self._validator = SettingsValidator(self)
        self._paths = PathSettings(self.settings)
        self._refresh = RefreshSettings(self.settings)
        self._browse = BrowseSettings(self.settings)
        self._logging = LoggingSettings(self.settings)

        # Ensure version and migrate if needed
        self._migrator.ensure_version()

        logger.debug(
            f"Settings initialized for profile '{profile}', stored at: {self.settings.fileName()}"
        )

    # === SUBSYSTEM ACCESS ===

    @property
    def paths(self) -> PathSettings:
        """Access path settings subsystem."""
        return self._paths

    @property
    def refresh(self) -> RefreshSettings:
        """Access refresh settings subsystem."""
        return self._refresh

    @property
    def browse(self) -> BrowseSettings:
        """Access listing settings subsystem."""
        return self._browse

    @property
    def logging(self) -> LoggingSettings:
        """Access logging settings subsystem."""
        return self._logging

    @property
    def version(self) -> str:
        """Get configuration version."""
        value = self.settings.value("app/version", ConfigVersion.CURRENT.value)
        return str(value) if value is not None else ConfigVersion.CURRENT.value

    # === PATH SETTINGS (DELEGATED) ===

    @property
    def data_dir(self) -> Path:
        """Get directory holding the JSON collection dumps."""
        return self._paths.data_dir

    @data_dir.setter
    def data_dir(self, value: Path) -> None:
        """Set directory holding the JSON collection dumps."""
        self._paths.data_dir = value

    @property
    def preview_dir(self) -> Path:
        """Get map preview cache directory."""
        return self._paths.preview_dir

    @preview_dir.setter
    def preview_dir(self, value: Optional[Path]) -> None:
        """Set map preview cache directory."""
        self._paths.preview_dir = value

    # === REFRESH SETTINGS (DELEGATED) ===

    @property
    def api_base_url(self) -> str:
        """Get base url of the remote API."""
        return self._refresh.api_base_url

    @api_base_url.setter
    def api_base_url(self, value: str) -> None:
        """Set base url of the remote API."""
        self._refresh.api_base_url = value

    @property
    def refresh_key(self) -> str:
        """Get the shared refresh key."""
        return self._refresh.refresh_key

    @refresh_key.setter
    def refresh_key(self, value: str) -> None:
        """Set the shared refresh key."""
        self._refresh.refresh_key = value

    @property
    def refresh_timeout(self) -> float:
        """Get HTTP timeout for a single dump download."""
        return self._refresh.timeout_seconds

    @property
    def clear_previews_on_refresh(self) -> bool:
        """Whether a successful refresh clears the preview cache."""
        return self._refresh.clear_previews

    # === BROWSE SETTINGS (DELEGATED) ===

    @property
    def page_size(self) -> int:
        """Get number of records per listing page."""
        return self._browse.page_size

    @page_size.setter
    def page_size(self, value: int) -> None:
        """Set number of records per listing page."""
        self._browse.page_size = value

    # === LOGGING SETTINGS (DELEGATED) ===

    @property
    def console_logging(self) -> bool:
        """Check if console logging is enabled."""
        return self._logging.console_logging

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        """Set console logging enabled state."""
        self._logging.console_logging = value

    @property
    def console_log_level(self) -> str:
        """Get console logging level."""
        return self._logging.console_log_level

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        """Set console logging level."""
        self._logging.console_log_level = value

    @property
    def console_use_colors(self) -> bool:
        """Check if console should use colors."""
        return self._logging.console_use_colors

    @console_use_colors.setter
    def console_use_colors(self, value: bool) -> None:
        """Set console color usage."""
        self._logging.console_use_colors = value

    @property
    def file_logging(self) -> bool:
        """Check if file logging is enabled."""
        return self._logging.file_logging

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        """Set file logging enabled state."""
        self._logging.file_logging = value

    @property
    def log_file_path(self) -> str:
        """Get CSV log file path."""
        return self._logging.log_file_path

    @log_file_path.setter
    def log_file_path(self, value: str) -> None:
        """Set CSV log file path."""
        self._logging.log_file_path = value

    # === VALIDATION ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    # === UTILITY METHODS ===

    def get_settings_file_path(self) -> str:
        """Get the file path where settings are stored."""
        return self.settings.fileName()

    def sync(self) -> None:
        """Force synchronization of settings to storage.

        Raises:
            ConfigError: If the INI file cannot be written or parsed
        """
        self.settings.sync()
        status = self.settings.status()
        if status != QSettings.Status.NoError:
            raise ConfigError(
                f"Could not synchronize settings at {self.settings.fileName()}: {status.name}"
            )
