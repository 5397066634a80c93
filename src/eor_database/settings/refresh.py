"""
Refresh-related settings for EOR Database.
"""

import logging
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://eor-api.exile-studios.com/api"
REFRESH_KEY_ENV = "API_REFRESH_KEY"


class RefreshSettings:
    """Manages settings of the remote dump refresh."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    def _get_bool(self, key: str, default: bool = False) -> bool:
        """Type-safe boolean retrieval from settings."""
        value = self.settings.value(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value) if value is not None else default

    @property
    def api_base_url(self) -> str:
        """Get base url of the remote API (without trailing slash)."""
        return self._get_str("refresh/api_base_url", DEFAULT_API_BASE_URL).rstrip("/")

    @api_base_url.setter
    def api_base_url(self, value: str) -> None:
        """Set base url of the remote API."""
        self.settings.setValue("refresh/api_base_url", value.rstrip("/"))
        self.settings.sync()

    @property
    def refresh_key(self) -> str:
        """Get the shared refresh key, falling back to the environment."""
        key = self._get_str("refresh/key", "")
        return key or os.environ.get(REFRESH_KEY_ENV, "")

    @refresh_key.setter
    def refresh_key(self, value: str) -> None:
        """Set the shared refresh key."""
        self.settings.setValue("refresh/key", value)
        self.settings.sync()

    @property
    def timeout_seconds(self) -> float:
        """Get HTTP timeout for a single dump download."""
        value = self.settings.value("refresh/timeout_seconds", 60)
        try:
            return float(str(value)) if value is not None else 60.0
        except (ValueError, TypeError):
            return 60.0

    @timeout_seconds.setter
    def timeout_seconds(self, value: float) -> None:
        """Set HTTP timeout for a single dump download."""
        if value > 0:
            self.settings.setValue("refresh/timeout_seconds", value)
            self.settings.sync()
        else:
            logger.warning(
                f"Invalid refresh timeout: {value}, keeping current: {self.timeout_seconds}"
            )

    @property
    def clear_previews(self) -> bool:
        """Whether a successful refresh also clears the map preview cache."""
        return self._get_bool("refresh/clear_previews", True)

    @clear_previews.setter
    def clear_previews(self, value: bool) -> None:
        """Set whether a successful refresh clears the map preview cache."""
        self.settings.setValue("refresh/clear_previews", value)
        self.settings.sync()
