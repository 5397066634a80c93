"""
Preview colors.

A cell is colored by its tile-spec code when it has one, else by an NPC
spawn on it, else by a warp on it, else with the background shade.
"""

from typing import Dict

from ..game_data.labels import MapTileSpec
from ..game_data.models import GameMap

WALL_COLOR = "#505050"
GATHER_COLOR = "#3b8656"
FISHING_COLOR = "#2b4f75"
CHEST_COLOR = "#774a89"
NPC_SPAWN_COLOR = "#b34b5e"
WARP_COLOR = "#4a5c9c"
BACKGROUND_COLOR = "#333333"

ARROW_FILL = "#ffcc00"
ARROW_OUTLINE = "#000000"

SPEC_COLORS: Dict[int, str] = {
    MapTileSpec.WALL: WALL_COLOR,
    MapTileSpec.EDGE: WALL_COLOR,
    MapTileSpec.GATHER: GATHER_COLOR,
    MapTileSpec.GATHER_BLOCK: GATHER_COLOR,
    MapTileSpec.FISHING_UP: FISHING_COLOR,
    MapTileSpec.FISHING_DOWN: FISHING_COLOR,
    MapTileSpec.FISHING_LEFT: FISHING_COLOR,
    MapTileSpec.FISHING_RIGHT: FISHING_COLOR,
    MapTileSpec.CHEST: CHEST_COLOR,
}


def cell_color(game_map: GameMap, x: int, y: int) -> str:
    """Return the fill color of one map cell."""
    spec = game_map.spec_at(x, y)
    if spec is not None:
        # Spec codes without a color of their own still win over overlays
        return SPEC_COLORS.get(spec, BACKGROUND_COLOR)
    if (x, y) in game_map.npc_cells:
        return NPC_SPAWN_COLOR
    if (x, y) in game_map.warp_cells:
        return WARP_COLOR
    return BACKGROUND_COLOR
