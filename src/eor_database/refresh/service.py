"""
Refresh of the on-disk collection dumps from the remote API.

The refresh is authorized by a shared key, downloads the collections one
after another and replaces each dump file atomically before invalidating
that collection in the store. A failure partway leaves the collections
already refreshed in place.
"""

import hmac
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

import httpx
import orjson

from ..errors import RefreshDeniedError, RefreshFetchError
from ..game_data.models import Collection
from ..game_data.store import DatasetStore

if TYPE_CHECKING:
    from ..rendering import MapPreviewRenderer
    from ..settings import AppSettings

REFRESH_ORDER: Tuple[Collection, ...] = (
    Collection.CLASSES,
    Collection.ITEMS,
    Collection.MAPS,
    Collection.NPCS,
    Collection.SPELLS,
    Collection.QUESTS,
    Collection.SHOPS,
)


@dataclass
class RefreshReport:
    """Outcome of a completed refresh."""

    refreshed: List[str] = field(default_factory=list)
    bytes_written: Dict[str, int] = field(default_factory=dict)
    previews_cleared: int = 0

    @property
    def total_bytes(self) -> int:
        return sum(self.bytes_written.values())


class RefreshService:
    """Re-downloads every collection dump and invalidates cached data."""

    def __init__(
        self,
        settings: "AppSettings",
        store: DatasetStore,
        renderer: Optional["MapPreviewRenderer"] = None,
        client: Optional[httpx.Client] = None,
    ):
        """Initialize the refresh service.

        Args:
            settings: Application settings (API url, key, timeout)
            store: Store whose collections are invalidated
            renderer: Preview renderer whose cache is cleared after a refresh
            client: HTTP client to use; a client is created per refresh if omitted
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.settings = settings
        self.store = store
        self.renderer = renderer
        self.client = client

    def dump_url(self, collection: Collection) -> str:
        return f"{self.settings.api_base_url}/{collection.value}/dump"

    def check_key(self, key: Optional[str]) -> None:
        """Verify the refresh key.

        Raises:
            RefreshDeniedError: If no key is configured or the key differs
        """
        expected = self.settings.refresh_key
        if not key or not expected or not hmac.compare_digest(
            key.encode("utf-8"), expected.encode("utf-8")
        ):
            self.logger.warning("Refresh denied: invalid key")
            raise RefreshDeniedError()

    def refresh(self, key: Optional[str]) -> RefreshReport:
        """Refresh every collection in order.

        Args:
            key: Shared refresh key supplied by the caller

        Returns:
            Report of refreshed collections

        Raises:
            RefreshDeniedError: If the key is wrong
            RefreshFetchError: If a download or write fails
        """
        self.check_key(key)
        self.logger.info("Starting refresh of all collections")

        report = RefreshReport()
        if self.client is not None:
            self._refresh_all(self.client, report)
        else:
            with httpx.Client(timeout=self.settings.refresh_timeout) as client:
                self._refresh_all(client, report)

        if self.renderer is not None and self.settings.clear_previews_on_refresh:
            report.previews_cleared = self.renderer.clear_cache()

        self.logger.info(
            f"Refresh completed: {len(report.refreshed)} collections, {report.total_bytes} bytes"
        )
        return report

    def _refresh_all(self, client: httpx.Client, report: RefreshReport) -> None:
        for collection in REFRESH_ORDER:
            body = self.fetch(client, collection, report.refreshed)
            path = self.store.collection_path(collection)
            try:
                self._write_atomic(path, body)
            except OSError as e:
                raise RefreshFetchError(collection.value, str(e), report.refreshed) from e

            self.store.reset(collection)
            report.refreshed.append(collection.value)
            report.bytes_written[collection.value] = len(body)
            self.logger.info(f"Refreshed {collection.value} ({len(body)} bytes)")

    def fetch(self, client: httpx.Client, collection: Collection, refreshed: List[str]) -> bytes:
        """Download one dump and check that it is a JSON array.

        Raises:
            RefreshFetchError: On HTTP errors or an unexpected body
        """
        url = self.dump_url(collection)
        self.logger.debug(f"Fetching {url}")
        try:
            response = client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            self.logger.error(f"Fetching {collection.value} failed: {e}")
            raise RefreshFetchError(collection.value, str(e), refreshed) from e

        body = response.content
        try:
            parsed = orjson.loads(body)
        except orjson.JSONDecodeError as e:
            raise RefreshFetchError(collection.value, f"invalid JSON: {e}", refreshed) from e
        if not isinstance(parsed, list):
            raise RefreshFetchError(collection.value, "response is not a JSON array", refreshed)
        return body

    def _write_atomic(self, path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
