from __future__ import annotations

from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from config import TILE_SIZE
from delve.core.constants import TILE_CHARS
from delve.core.utils import floor_div
from .tile_types import Tile, UNKNOWN

Coord = Tuple[int, int]


class TileGrid:
    """Sparse mapping from integer grid coordinates to Tile values.

    Coordinates that were never written resolve to `default_tile`. Which tile
    that is depends on who built the grid: play levels default to a passable
    UNKNOWN marker, the cave generator defaults to WALL so anything outside
    its bordered region blocks.

    The grid is swapped wholesale between levels; gameplay code only reads it.
    """

    __slots__ = ("_tiles", "default_tile")

    def __init__(self, default_tile: Tile = UNKNOWN, tiles: Optional[Mapping[Coord, Tile]] = None) -> None:
        self.default_tile = default_tile
        self._tiles: Dict[Coord, Tile] = dict(tiles) if tiles else {}

    def __len__(self) -> int:
        return len(self._tiles)

    def __contains__(self, coord: Coord) -> bool:
        return coord in self._tiles

    def get(self, x: int, y: int) -> Tile:
        """Return the tile at (x, y), or the default tile if never written.

        Lookups never insert, so repeated queries are stable.
        """
        return self._tiles.get((x, y), self.default_tile)

    def set(self, x: int, y: int, tile: Tile) -> None:
        """Set the tile at (x, y), replacing whatever was there."""
        if not isinstance(tile, Tile):
            raise TypeError("tile must be a Tile instance")
        self._tiles[(x, y)] = tile

    def fill_rect(self, x: int, y: int, width: int, height: int, tile: Tile) -> None:
        """Stamp `tile` over the width x height block whose top-left is (x, y)."""
        if not isinstance(tile, Tile):
            raise TypeError("tile must be a Tile instance")
        for ty in range(y, y + height):
            for tx in range(x, x + width):
                self._tiles[(tx, ty)] = tile

    def is_blocking(self, x: int, y: int) -> bool:
        return self.get(x, y).blocks_movement

    def items(self) -> Iterator[Tuple[Coord, Tile]]:
        """Iterate over explicitly written cells."""
        return iter(self._tiles.items())

    def iter_rect(self, min_x: int, min_y: int, max_x: int, max_y: int) -> Iterator[Tuple[Coord, Tile]]:
        """Yield ((x, y), tile) for every cell of an inclusive viewport rectangle.

        Cells that were never written yield the default tile.
        """
        for y in range(min_y, max_y + 1):
            for x in range(min_x, max_x + 1):
                yield (x, y), self._tiles.get((x, y), self.default_tile)

    def bounds(self) -> Optional[Tuple[int, int, int, int]]:
        """Return (min_x, min_y, max_x, max_y) over written cells, or None if empty."""
        if not self._tiles:
            return None
        xs = [x for x, _ in self._tiles]
        ys = [y for _, y in self._tiles]
        return min(xs), min(ys), max(xs), max(ys)

    # --- world <-> grid mapping ---

    @staticmethod
    def world_to_grid(wx: float, wy: float, tile_size: float = TILE_SIZE) -> Coord:
        """Return the grid cell containing world point (wx, wy)."""
        return floor_div(wx, tile_size), floor_div(wy, tile_size)

    @staticmethod
    def grid_to_world(x: int, y: int, tile_size: float = TILE_SIZE) -> Tuple[float, float]:
        """Return the world position of the top-left corner of cell (x, y)."""
        return x * tile_size, y * tile_size

    @staticmethod
    def tile_center(x: int, y: int, tile_size: float = TILE_SIZE) -> Tuple[float, float]:
        """Return the world position of the centre of cell (x, y)."""
        return (x + 0.5) * tile_size, (y + 0.5) * tile_size

    # --- debugging ---

    def to_lines(self, markers: Optional[Mapping[Coord, str]] = None) -> List[str]:
        """Render the written area as ASCII rows (top to bottom).

        `markers` overrides the character drawn at specific cells (start, exit,
        spawns...).
        """
        box = self.bounds()
        if box is None:
            return []
        markers = markers or {}
        min_x, min_y, max_x, max_y = box
        lines = []
        for y in range(min_y, max_y + 1):
            row = []
            for x in range(min_x, max_x + 1):
                if (x, y) in markers:
                    row.append(markers[(x, y)])
                    continue
                tile = self._tiles.get((x, y))
                if tile is None:
                    row.append(TILE_CHARS["unknown"])
                else:
                    row.append(TILE_CHARS.get(tile.name, "?"))
            lines.append("".join(row))
        return lines

    def __repr__(self) -> str:
        return f"TileGrid(cells={len(self._tiles)}, default={self.default_tile.name})"
