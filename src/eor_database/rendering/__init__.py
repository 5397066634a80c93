"""
Map preview rendering.

Isometric projection of map tiles and the Pillow based preview renderer
with its on-disk PNG cache.
"""

from .coord_transformer import IsometricProjection, TILE_HEIGHT, TILE_WIDTH
from .preview import MapPreviewRenderer, to_data_url

__all__ = [
    "IsometricProjection",
    "MapPreviewRenderer",
    "TILE_HEIGHT",
    "TILE_WIDTH",
    "to_data_url",
]
