"""
Listing-related settings for EOR Database.
"""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


class BrowseSettings:
    """Manages listing and pagination settings."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    @property
    def page_size(self) -> int:
        """Get number of records per listing page."""
        value = self.settings.value("browse/page_size", DEFAULT_PAGE_SIZE)
        try:
            return int(str(value)) if value is not None else DEFAULT_PAGE_SIZE
        except (ValueError, TypeError):
            return DEFAULT_PAGE_SIZE

    @page_size.setter
    def page_size(self, value: int) -> None:
        """Set number of records per listing page."""
        if value > 0:
            self.settings.setValue("browse/page_size", value)
            self.settings.sync()
        else:
            logger.warning(
                f"Invalid page size: {value}, keeping current: {self.page_size}"
            )
