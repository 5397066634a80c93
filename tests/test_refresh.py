"""Tests for the dump refresh service."""

from pathlib import Path
from typing import Dict, List

import httpx
import orjson
import pytest

from conftest import make_npc, sample_collections

from eor_database.errors import RefreshDeniedError, RefreshFetchError
from eor_database.game_data import DatasetStore
from eor_database.refresh import REFRESH_ORDER, RefreshService
from eor_database.rendering import MapPreviewRenderer
from eor_database.settings import AppSettings

API_URL = "https://api.test/api"
KEY = "s3cret"


class FakeApi:
    """Serves collection dumps through httpx.MockTransport."""

    def __init__(self, collections: Dict[str, list]):
        self.collections = collections
        self.requested: List[str] = []
        self.failing: Dict[str, int] = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        # /api/<collection>/dump
        name = request.url.path.split("/")[-2]
        self.requested.append(name)
        if name in self.failing:
            return httpx.Response(self.failing[name])
        return httpx.Response(200, content=orjson.dumps(self.collections[name]))

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def refresh_settings(app_settings: AppSettings, data_dir: Path) -> AppSettings:
    app_settings.data_dir = data_dir
    app_settings.api_base_url = API_URL
    app_settings.refresh_key = KEY
    return app_settings


@pytest.fixture
def api() -> FakeApi:
    collections = sample_collections()
    collections["npcs"] = [make_npc(77, "Harbor Guard")]
    return FakeApi(collections)


class TestRefreshAuthorization:
    def test_wrong_key_is_denied(self, refresh_settings: AppSettings, store: DatasetStore, api: FakeApi) -> None:
        service = RefreshService(refresh_settings, store, client=api.client())
        with pytest.raises(RefreshDeniedError, match="Denied"):
            service.refresh("guess")
        with pytest.raises(RefreshDeniedError):
            service.refresh(None)
        assert api.requested == []

    def test_unconfigured_key_denies_everything(
        self, app_settings: AppSettings, store: DatasetStore, api: FakeApi
    ) -> None:
        service = RefreshService(app_settings, store, client=api.client())
        with pytest.raises(RefreshDeniedError):
            service.refresh("")

    def test_key_from_environment(
        self, app_settings: AppSettings, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("API_REFRESH_KEY", "from-env")
        service = RefreshService(app_settings, DatasetStore(Path("unused")))
        service.check_key("from-env")


class TestRefresh:
    """Test a full refresh run."""

    def test_collections_refreshed_in_order(
        self, refresh_settings: AppSettings, store: DatasetStore, api: FakeApi
    ) -> None:
        report = RefreshService(refresh_settings, store, client=api.client()).refresh(KEY)
        expected = [collection.value for collection in REFRESH_ORDER]
        assert expected == ["classes", "items", "maps", "npcs", "spells", "quests", "shops"]
        assert api.requested == expected
        assert report.refreshed == expected
        assert report.total_bytes == sum(report.bytes_written.values()) > 0

    def test_dumps_replaced_and_store_reset(
        self, refresh_settings: AppSettings, store: DatasetStore, api: FakeApi, data_dir: Path
    ) -> None:
        """Test the next access reads the downloaded dump."""
        old_npcs = store.load("npcs")
        RefreshService(refresh_settings, store, client=api.client()).refresh(KEY)

        assert not store.is_loaded("npcs")
        assert [npc.name for npc in store.load("npcs")] == ["Harbor Guard"]
        assert old_npcs[0].name == "Wolf"
        assert not list(data_dir.glob("*.tmp"))

    def test_failure_keeps_earlier_collections(
        self, refresh_settings: AppSettings, store: DatasetStore, api: FakeApi, data_dir: Path
    ) -> None:
        """Test a failed download stops the run after the refreshed ones."""
        api.failing["maps"] = 503
        maps_before = (data_dir / "maps.json").read_bytes()

        with pytest.raises(RefreshFetchError) as exc_info:
            RefreshService(refresh_settings, store, client=api.client()).refresh(KEY)

        assert exc_info.value.collection == "maps"
        assert exc_info.value.refreshed == ["classes", "items"]
        assert api.requested == ["classes", "items", "maps"]
        assert (data_dir / "maps.json").read_bytes() == maps_before

    def test_non_array_body_is_rejected(
        self, refresh_settings: AppSettings, store: DatasetStore, api: FakeApi
    ) -> None:
        api.collections["classes"] = {"error": "maintenance"}
        with pytest.raises(RefreshFetchError, match="not a JSON array"):
            RefreshService(refresh_settings, store, client=api.client()).refresh(KEY)

    def test_previews_cleared(
        self, refresh_settings: AppSettings, store: DatasetStore, api: FakeApi, tmp_path: Path
    ) -> None:
        renderer = MapPreviewRenderer(store, tmp_path / "previews")
        renderer.render_preview(100)

        report = RefreshService(refresh_settings, store, renderer, client=api.client()).refresh(KEY)
        assert report.previews_cleared == 1
        assert not renderer.cache_path(100).exists()

    def test_previews_kept_when_disabled(
        self, refresh_settings: AppSettings, store: DatasetStore, api: FakeApi, tmp_path: Path
    ) -> None:
        refresh_settings.refresh.clear_previews = False
        renderer = MapPreviewRenderer(store, tmp_path / "previews")
        renderer.render_preview(100)

        report = RefreshService(refresh_settings, store, renderer, client=api.client()).refresh(KEY)
        assert report.previews_cleared == 0
        assert renderer.cache_path(100).exists()
