"""
Settings migration system for EOR Database.
"""

import logging
from typing import TYPE_CHECKING

from .types import ConfigVersion

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)


class SettingsMigrator:
    """Handles configuration migration between versions."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def ensure_version(self) -> None:
        """Ensure configuration version is set and handle migrations."""
        current_version = str(self.settings.value("app/version", ""))

        if not current_version:
            # First run - set current version
            self.settings.setValue("app/version", ConfigVersion.CURRENT.value)
            self.settings.sync()
            logger.info("First run detected, initializing configuration")
        elif current_version != ConfigVersion.CURRENT.value:
            self._migrate_config(current_version, ConfigVersion.CURRENT.value)

    def _migrate_config(self, from_version: str, to_version: str) -> None:
        """Migrate configuration from old version to new version."""
        logger.info(f"Migrating configuration from {from_version} to {to_version}")

        if from_version == ConfigVersion.V1_0.value:
            self._migrate_1_0_to_1_1()

        self.settings.setValue("app/version", to_version)
        self.settings.setValue("app/migrated_from", from_version)
        self.settings.sync()
        logger.info(f"Migration from {from_version} to {to_version} completed")

    def _migrate_1_0_to_1_1(self) -> None:
        """Migrate from version 1.0 to 1.1 - dumps directory renamed to data directory."""
        logger.debug("Performing migration from 1.0 to 1.1")

        old_dumps_path = str(self.settings.value("paths/dumps", "") or "")
        if old_dumps_path:
            self.settings.setValue("paths/data", old_dumps_path)
            self.settings.remove("paths/dumps")
            logger.info(f"Migrated dumps directory to data directory: {old_dumps_path}")

        # The refresh key used to live next to the API url
        old_key = str(self.settings.value("api/key", "") or "")
        if old_key:
            self.settings.setValue("refresh/key", old_key)
            self.settings.remove("api/key")
            logger.info("Migrated refresh key to refresh/key")
