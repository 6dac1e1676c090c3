from dataclasses import dataclass
from typing import Tuple

from config import ARENA_FLOOR_COL, FLOOR_COL, UNKNOWN_COL, WALL_COL


@dataclass(frozen=True)
class Tile:
    """A single grid cell.

    Tiles are IMMUTABLE. Re-carving a cell replaces the Tile wholesale.

    Attributes:
        blocks_movement: True if hitbox entities cannot overlap this cell
        colour: RGB display attribute read by the rendering collaborator
        name: Short label used for debug dumps ("floor", "wall", "unknown")
    """
    blocks_movement: bool
    colour: Tuple[int, int, int]
    name: str = "floor"


FLOOR = Tile(blocks_movement=False, colour=FLOOR_COL, name="floor")
WALL = Tile(blocks_movement=True, colour=WALL_COL, name="wall")
ARENA_FLOOR = Tile(blocks_movement=False, colour=ARENA_FLOOR_COL, name="floor")

# Returned for coordinates that were never carved in play levels.
UNKNOWN = Tile(blocks_movement=False, colour=UNKNOWN_COL, name="unknown")
