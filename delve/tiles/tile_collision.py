"""Pure collision predicates between hitboxes and the tile grid.

Hitboxes are discs. Tiles are axis-aligned squares of TILE_SIZE. Nothing here
keeps state; every function takes the grid and geometry it needs.
"""
from typing import Tuple

from config import TILE_SIZE
from delve.core.utils import floor_div
from .tile_grid import TileGrid


def disc_overlaps_bounds(center: Tuple[float, float], radius: float,
                         left: float, top: float, right: float, bottom: float) -> bool:
    """Return True if the disc strictly overlaps the box [left, right] x [top, bottom].

    Touching edges do not count as overlap.
    """
    cx, cy = center
    nearest_x = min(max(cx, left), right)
    nearest_y = min(max(cy, top), bottom)
    dx = nearest_x - cx
    dy = nearest_y - cy
    return dx * dx + dy * dy < radius * radius


def check_collision(grid: TileGrid, position: Tuple[float, float], radius: float,
                    tile_size: float = TILE_SIZE) -> bool:
    """Return True if a disc at `position` overlaps any blocking tile.

    Only tiles inside the disc's bounding box are tested. Tile edges stay
    fractional so non-integer tile sizes collide at their true footprint.
    """
    px, py = position
    min_tile_x = floor_div(px - radius, tile_size)
    max_tile_x = floor_div(px + radius, tile_size)
    min_tile_y = floor_div(py - radius, tile_size)
    max_tile_y = floor_div(py + radius, tile_size)

    for tile_x in range(min_tile_x, max_tile_x + 1):
        for tile_y in range(min_tile_y, max_tile_y + 1):
            if not grid.get(tile_x, tile_y).blocks_movement:
                continue
            left = tile_x * tile_size
            top = tile_y * tile_size
            if disc_overlaps_bounds((px, py), radius, left, top, left + tile_size, top + tile_size):
                return True
    return False


def check_point_collision(grid: TileGrid, position: Tuple[float, float],
                          tile_size: float = TILE_SIZE) -> bool:
    """Return True if the point lies inside a blocking tile."""
    tile_x = floor_div(position[0], tile_size)
    tile_y = floor_div(position[1], tile_size)
    return grid.get(tile_x, tile_y).blocks_movement


def hitbox_overlap(pos_a: Tuple[float, float], radius_a: float,
                   pos_b: Tuple[float, float], radius_b: float) -> bool:
    """Return True if two hitbox discs overlap."""
    dx = pos_a[0] - pos_b[0]
    dy = pos_a[1] - pos_b[1]
    reach = radius_a + radius_b
    return dx * dx + dy * dy < reach * reach
