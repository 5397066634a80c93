"""
Isometric map preview renderer.

Renders a map's tile grid as colored diamonds with Pillow and caches the
PNG per map id on disk. The arrow variant marks one tile and is rendered
fresh on every call.
"""

import base64
import io
import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Union

from PIL import Image, ImageDraw

from ..errors import MapNotFoundError
from ..game_data.models import GameMap
from ..game_data.store import DatasetStore
from .coord_transformer import IsometricProjection
from .palette import ARROW_FILL, ARROW_OUTLINE, cell_color

if TYPE_CHECKING:
    from ..settings import AppSettings

ARROW_SIZE = 10
ARROW_MARGIN = 5
ARROW_OUTLINE_WIDTH = 2


def to_data_url(png: bytes) -> str:
    """Encode PNG bytes as a data URL for inline display."""
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")


def _png_bytes(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


class MapPreviewRenderer:
    """Renders and caches map previews.

    The cache holds one `<map id>.png` per map and is trusted until it is
    cleared; a refresh of the map data clears it through `clear_cache`.
    """

    def __init__(self, store: DatasetStore, cache_dir: Union[str, Path]):
        """Initialize the renderer.

        Args:
            store: Dataset store providing the maps
            cache_dir: Directory holding cached previews
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.store = store
        self.cache_dir = Path(cache_dir)

    @classmethod
    def from_settings(cls, store: DatasetStore, settings: "AppSettings") -> "MapPreviewRenderer":
        return cls(store, settings.preview_dir)

    def cache_path(self, map_id: int) -> Path:
        return self.cache_dir / f"{map_id}.png"

    def _get_map(self, map_id: int) -> GameMap:
        game_map = self.store.get_map(map_id)
        if game_map is None:
            raise MapNotFoundError(map_id)
        return game_map

    def render_image(self, game_map: GameMap) -> Image.Image:
        """Rasterize a map without touching the cache.

        Args:
            game_map: Map to render

        Returns:
            RGBA image, transparent outside the tile diamonds
        """
        projection = IsometricProjection.for_map(game_map)
        image = Image.new("RGBA", projection.canvas_size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(image)

        for y in range(game_map.height):
            for x in range(game_map.width):
                draw.polygon(projection.diamond(x, y), fill=cell_color(game_map, x, y))

        return image

    def render_preview(self, map_id: int) -> bytes:
        """Return the PNG preview of a map, rendering it on a cache miss.

        Args:
            map_id: Id of the map

        Returns:
            PNG bytes

        Raises:
            MapNotFoundError: If the map does not exist
        """
        game_map = self._get_map(map_id)
        path = self.cache_path(game_map.id)

        try:
            cached = path.read_bytes()
            self.logger.debug(f"Preview cache hit for map {map_id}")
            return cached
        except FileNotFoundError:
            self.logger.debug(f"Preview cache miss for map {map_id}")

        png = _png_bytes(self.render_image(game_map))
        self._write_cache(path, png)
        return png

    def _write_cache(self, path: Path, png: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(png)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        self.logger.debug(f"Cached preview at {path}")

    def render_preview_with_arrow(self, map_id: int, x: int, y: int) -> bytes:
        """Return the preview with a marker arrow below a tile.

        The base preview goes through the cache; the annotated image does not.

        Args:
            map_id: Id of the map
            x: Tile column to mark
            y: Tile row to mark

        Returns:
            PNG bytes

        Raises:
            MapNotFoundError: If the map does not exist
        """
        game_map = self._get_map(map_id)
        base = Image.open(io.BytesIO(self.render_preview(map_id))).convert("RGBA")

        projection = IsometricProjection.for_map(game_map)
        canvas = Image.new("RGBA", projection.canvas_size, (0, 0, 0, 0))
        canvas.paste(base, (0, 0))

        tip_x, tip_y = self.arrow_anchor(projection, x, y)
        draw = ImageDraw.Draw(canvas)
        draw.polygon(
            [
                (tip_x, tip_y - ARROW_SIZE),
                (tip_x - ARROW_SIZE, tip_y + ARROW_SIZE),
                (tip_x + ARROW_SIZE, tip_y + ARROW_SIZE),
            ],
            fill=ARROW_FILL,
            outline=ARROW_OUTLINE,
            width=ARROW_OUTLINE_WIDTH,
        )
        return _png_bytes(canvas)

    @staticmethod
    def arrow_anchor(projection: IsometricProjection, x: int, y: int) -> tuple[float, float]:
        """Center of the marker arrow for a tile."""
        iso_x, iso_y = projection.tiles_to_pixels(x, y)
        iso_y += -projection.tile_height + projection.half_height + ARROW_SIZE * 2 + ARROW_MARGIN
        return (iso_x, iso_y)

    def clear_cache(self) -> int:
        """Delete every cached preview.

        Returns:
            Number of files removed
        """
        if not self.cache_dir.is_dir():
            return 0
        removed = 0
        for path in self.cache_dir.glob("*.png"):
            path.unlink(missing_ok=True)
            removed += 1
        self.logger.info(f"Cleared {removed} cached map previews from {self.cache_dir}")
        return removed
