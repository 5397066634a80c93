"""
Settings validation system for EOR Database.
"""

import logging
from typing import List, TYPE_CHECKING

from ..game_data.models import Collection
from .logging import VALID_LEVELS
from .types import ValidationResult

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)

COLLECTION_NAMES = tuple(collection.value for collection in Collection)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        page_size = self.settings.page_size
        if page_size <= 0:
            errors.append(f"Page size must be positive, got {page_size}")

        data_dir = self.settings.data_dir
        if not data_dir.exists():
            warnings.append(f"Data directory does not exist: {data_dir}")
        else:
            for name in COLLECTION_NAMES:
                path = self.settings.paths.collection_path(name)
                if not path.exists():
                    warnings.append(f"Collection dump missing: {path}")

        if self.settings.console_log_level not in VALID_LEVELS:
            warnings.append(
                f"Unknown console log level {self.settings.console_log_level}, using INFO"
            )

        if not self.settings.refresh_key:
            warnings.append("Refresh key not set, every refresh will be denied")

        if not self.settings.api_base_url.startswith(("http://", "https://")):
            errors.append(f"API base url is not an http(s) url: {self.settings.api_base_url}")

        for warning in warnings:
            logger.debug(f"Settings warning: {warning}")

        return ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )
