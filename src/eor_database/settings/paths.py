"""
Path-related settings for EOR Database.
"""

from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

DEFAULT_DATA_DIR = "data"


class PathSettings:
    """Manages path-related settings."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    @property
    def data_dir(self) -> Path:
        """Get directory holding the JSON collection dumps."""
        return Path(self._get_str("paths/data", DEFAULT_DATA_DIR) or DEFAULT_DATA_DIR)

    @data_dir.setter
    def data_dir(self, value: Path) -> None:
        """Set directory holding the JSON collection dumps."""
        self.settings.setValue("paths/data", str(value))
        self.settings.sync()

    @property
    def preview_dir(self) -> Path:
        """Get map preview cache directory (defaults to <data_dir>/maps)."""
        path_str = self._get_str("paths/previews", "")
        return Path(path_str) if path_str else self.data_dir / "maps"

    @preview_dir.setter
    def preview_dir(self, value: Optional[Path]) -> None:
        """Set map preview cache directory (None restores the default)."""
        self.settings.setValue("paths/previews", str(value) if value else "")
        self.settings.sync()

    def collection_path(self, name: str) -> Path:
        """Get the dump file path for a collection name."""
        return self.data_dir / f"{name}.json"
