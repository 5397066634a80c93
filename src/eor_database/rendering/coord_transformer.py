"""Coordinate transformations for map previews.

This module handles the projection of map tile coordinates onto the
isometric preview canvas, where every tile becomes a diamond.
"""

from typing import List, Tuple

from ..game_data.models import GameMap

TILE_WIDTH = 16
TILE_HEIGHT = 8

Point = Tuple[float, float]


class IsometricProjection:
    """Projects tile coordinates of one map onto its preview canvas."""

    def __init__(
        self,
        map_width: int,
        map_height: int,
        tile_width: int = TILE_WIDTH,
        tile_height: int = TILE_HEIGHT,
    ):
        """Initialize the projection.

        Args:
            map_width: Map width in tiles
            map_height: Map height in tiles
            tile_width: Width of a tile diamond in pixels
            tile_height: Height of a tile diamond in pixels
        """
        self.map_width = map_width
        self.map_height = map_height
        self.tile_width = tile_width
        self.tile_height = tile_height

    @staticmethod
    def for_map(game_map: GameMap) -> "IsometricProjection":
        return IsometricProjection(game_map.width, game_map.height)

    @property
    def half_width(self) -> float:
        return self.tile_width / 2

    @property
    def half_height(self) -> float:
        return self.tile_height / 2

    @property
    def canvas_size(self) -> Tuple[int, int]:
        """(width, height) of the canvas holding the whole grid."""
        span = self.map_width + self.map_height
        return (int(span * self.half_width), int(span * self.half_height))

    @property
    def centering_offset(self) -> float:
        """Horizontal shift that centers non-square maps on the canvas."""
        return ((self.map_width - self.map_height) * self.half_width) / 2

    def tiles_to_pixels(self, tile_x: float, tile_y: float) -> Point:
        """Convert tile grid coordinates to the top corner of the tile diamond.

        Args:
            tile_x: Column in map
            tile_y: Row in map

        Returns:
            (pixel_x, pixel_y) on the preview canvas
        """
        canvas_width, _ = self.canvas_size
        pixel_x = (tile_x - tile_y) * self.half_width + canvas_width / 2 - self.centering_offset
        pixel_y = (tile_x + tile_y) * self.half_height
        return (pixel_x, pixel_y)

    def diamond(self, tile_x: int, tile_y: int) -> List[Point]:
        """Corners of a tile diamond: top, right, bottom, left."""
        x, y = self.tiles_to_pixels(tile_x, tile_y)
        return [
            (x, y),
            (x + self.half_width, y + self.half_height),
            (x, y + self.tile_height),
            (x - self.half_width, y + self.half_height),
        ]

    def bounding_box(self) -> Tuple[float, float, float, float]:
        """(left, top, right, bottom) of all tile diamonds of the grid."""
        if self.map_width <= 0 or self.map_height <= 0:
            return (0.0, 0.0, 0.0, 0.0)
        left, _ = self.diamond(0, self.map_height - 1)[3]
        right, _ = self.diamond(self.map_width - 1, 0)[1]
        _, top = self.diamond(0, 0)[0]
        _, bottom = self.diamond(self.map_width - 1, self.map_height - 1)[2]
        return (left, top, right, bottom)
