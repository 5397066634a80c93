"""Tests for the isometric projection and the preview renderer."""

import io
from pathlib import Path

import pytest
from PIL import Image

from conftest import make_map, map_spawn

from eor_database.errors import MapNotFoundError
from eor_database.game_data import DatasetStore
from eor_database.game_data.models import GameMap
from eor_database.rendering import IsometricProjection, MapPreviewRenderer, to_data_url
from eor_database.rendering.palette import (
    ARROW_FILL,
    BACKGROUND_COLOR,
    CHEST_COLOR,
    FISHING_COLOR,
    GATHER_COLOR,
    NPC_SPAWN_COLOR,
    WALL_COLOR,
    WARP_COLOR,
    cell_color,
)


def _rgba(color: str) -> tuple:
    return tuple(int(color[i:i + 2], 16) for i in (1, 3, 5)) + (255,)


@pytest.fixture
def renderer(store: DatasetStore, tmp_path: Path) -> MapPreviewRenderer:
    return MapPreviewRenderer(store, tmp_path / "previews")


class TestIsometricProjection:
    """Test tile to pixel projection."""

    def test_row_spacing(self) -> None:
        """Test the first and last tile of a row are (W-1) half-widths apart."""
        projection = IsometricProjection(10, 6)
        first_x, first_y = projection.tiles_to_pixels(0, 0)
        last_x, last_y = projection.tiles_to_pixels(9, 0)
        assert last_x - first_x == 9 * 8
        assert last_y - first_y == 9 * 4

    def test_canvas_size(self) -> None:
        assert IsometricProjection(4, 3).canvas_size == (56, 28)

    def test_bounding_box_fills_canvas(self) -> None:
        """Test the grid spans (W+H) half-widths and starts at the left edge."""
        projection = IsometricProjection(4, 3)
        left, top, right, bottom = projection.bounding_box()
        assert right - left == (4 + 3) * 8
        assert (left, top) == (0, 0)
        assert bottom == 28

    def test_diamond_corners(self) -> None:
        projection = IsometricProjection(2, 2)
        assert projection.diamond(0, 0) == [(16, 0), (24, 4), (16, 8), (8, 4)]


class TestCellColor:
    def test_priority(self, store: DatasetStore) -> None:
        """Test spec tiles win, then NPC spawns, then warps, then the background."""
        game_map = store.get_map(100)
        assert cell_color(game_map, 0, 0) == WALL_COLOR
        assert cell_color(game_map, 3, 2) == CHEST_COLOR
        assert cell_color(game_map, 1, 1) == NPC_SPAWN_COLOR
        # (0, 1) holds both a spawn and a warp
        assert cell_color(game_map, 0, 1) == NPC_SPAWN_COLOR
        assert cell_color(game_map, 2, 2) == WARP_COLOR
        assert cell_color(game_map, 3, 0) == WARP_COLOR
        assert cell_color(game_map, 1, 0) == BACKGROUND_COLOR

    def test_spec_colors(self) -> None:
        spec_codes = [15, 14, 61, 62, 63, 64, 18, 30]
        game_map = GameMap.from_dict(
            make_map(
                1,
                "Shore",
                len(spec_codes),
                1,
                spec_tiles=[{"x": x, "y": 0, "spec": spec} for x, spec in enumerate(spec_codes)],
                npcs=[map_spawn(10, 7, 0)],
            )
        )
        colors = [cell_color(game_map, x, 0) for x in range(len(spec_codes))]
        assert colors == [GATHER_COLOR, GATHER_COLOR] + [FISHING_COLOR] * 4 + [
            WALL_COLOR,
            # Water has no color of its own and still hides the spawn on it
            BACKGROUND_COLOR,
        ]


class TestMapPreviewRenderer:
    """Test rendering and the preview cache."""

    def test_render_image(self, renderer: MapPreviewRenderer, store: DatasetStore) -> None:
        image = renderer.render_image(store.get_map(100))
        assert image.size == (56, 28)
        # Diamond centers: tile (0, 0) is a wall, tile (1, 1) holds a spawn
        assert image.getpixel((24, 4)) == _rgba(WALL_COLOR)
        assert image.getpixel((24, 12)) == _rgba(NPC_SPAWN_COLOR)
        # Corners outside the grid stay transparent
        assert image.getpixel((0, 0))[3] == 0

    def test_preview_is_cached(self, renderer: MapPreviewRenderer) -> None:
        png = renderer.render_preview(100)
        path = renderer.cache_path(100)
        assert path.read_bytes() == png
        assert Image.open(io.BytesIO(png)).size == (56, 28)

        # A cached file is served as is
        path.write_bytes(b"cached")
        assert renderer.render_preview(100) == b"cached"

    def test_arrow_preview_is_not_cached(self, renderer: MapPreviewRenderer) -> None:
        png = renderer.render_preview_with_arrow(100, 1, 1)
        assert Image.open(io.BytesIO(png)).size == (56, 28)
        assert sorted(p.name for p in renderer.cache_dir.iterdir()) == ["100.png"]
        assert renderer.cache_path(100).read_bytes() != png

    def test_arrow_anchor(self) -> None:
        """Test the arrow sits 21px below the top corner of the tile diamond."""
        projection = IsometricProjection(4, 3)
        for x, y in [(0, 0), (1, 1), (3, 0), (2, 2)]:
            # Top corner of the tile plus (-8 + 4 + 20 + 5)
            expected = ((x - y) * 8 + 28 - 4, (x + y) * 4 + 21)
            assert MapPreviewRenderer.arrow_anchor(projection, x, y) == expected

    def test_arrow_is_drawn_at_anchor(self, renderer: MapPreviewRenderer) -> None:
        image = Image.open(io.BytesIO(renderer.render_preview_with_arrow(100, 0, 0))).convert("RGBA")
        assert image.getpixel((24, 21)) == _rgba(ARROW_FILL)
        plain = Image.open(io.BytesIO(renderer.render_preview(100))).convert("RGBA")
        assert plain.getpixel((24, 21)) != _rgba(ARROW_FILL)

    def test_unknown_map(self, renderer: MapPreviewRenderer) -> None:
        """Test both preview calls fail the same way for an unknown map."""
        with pytest.raises(MapNotFoundError):
            renderer.render_preview(555)
        with pytest.raises(MapNotFoundError):
            renderer.render_preview_with_arrow(555, 0, 0)
        assert not renderer.cache_path(555).exists()

    def test_clear_cache(self, renderer: MapPreviewRenderer) -> None:
        assert renderer.clear_cache() == 0
        renderer.render_preview(100)
        renderer.render_preview(101)
        assert renderer.clear_cache() == 2
        assert not renderer.cache_path(100).exists()

    def test_data_url(self) -> None:
        assert to_data_url(b"\x89PNG") == "data:image/png;base64,iVBORw=="
