import pygame

from delve.tiles.tile_collision import (
    check_collision,
    check_point_collision,
    disc_overlaps_bounds,
    hitbox_overlap,
)
from delve.tiles.tile_grid import TileGrid
from delve.tiles.tile_types import FLOOR, WALL


def test_touching_edge_is_not_overlap():
    # Tile spanning x 32..64, y 0..32
    assert not disc_overlaps_bounds((22.0, 16.0), 10.0, 32, 0, 64, 32)
    assert disc_overlaps_bounds((22.5, 16.0), 10.0, 32, 0, 64, 32)


def test_disc_near_corner_uses_true_distance():
    # Corner is sqrt(512) ~ 22.6 away from (16, 16)
    assert not disc_overlaps_bounds((16.0, 16.0), 22.0, 32, 32, 64, 64)
    assert disc_overlaps_bounds((16.0, 16.0), 23.0, 32, 32, 64, 64)


def test_check_collision_ignores_passable_tiles(open_grid):
    open_grid.fill_rect(0, 0, 4, 4, FLOOR)
    assert not check_collision(open_grid, (48.0, 48.0), 40.0)


def test_check_collision_hits_blocking_tile():
    grid = TileGrid()
    grid.set(1, 0, WALL)
    assert check_collision(grid, (22.5, 16.0), 10.0)
    assert not check_collision(grid, (16.0, 16.0), 10.0)


def test_check_collision_fractional_tile_size():
    # Tile (1, 0) spans x 20.5..41.0, not a truncated 20..40
    grid = TileGrid()
    grid.set(1, 0, WALL)
    assert check_collision(grid, (50.5, 10.0), 10.0, tile_size=20.5)
    assert check_collision(grid, (11.0, 10.0), 10.0, tile_size=20.5)
    assert not check_collision(grid, (10.5, 10.0), 10.0, tile_size=20.5)
    assert not check_collision(grid, (51.0, 10.0), 10.0, tile_size=20.5)


def test_check_collision_negative_tiles():
    grid = TileGrid()
    grid.set(-1, 0, WALL)
    assert check_collision(grid, (9.5, 16.0), 10.0)
    assert not check_collision(grid, (10.0, 16.0), 10.0)


def test_check_collision_sees_wall_default():
    grid = TileGrid(default_tile=WALL)
    grid.set(0, 0, FLOOR)
    assert not check_collision(grid, (16.0, 16.0), 10.0)
    assert check_collision(grid, (16.0, 16.0), 17.0)


def test_point_collision():
    grid = TileGrid()
    grid.set(0, 0, WALL)
    assert check_point_collision(grid, (5.0, 5.0))
    assert not check_point_collision(grid, (-1.0, 5.0))
    assert check_point_collision(TileGrid(default_tile=WALL), (1e6, -1e6))


def test_hitbox_overlap_is_strict():
    assert not hitbox_overlap((0.0, 0.0), 5.0, (10.0, 0.0), 5.0)
    assert hitbox_overlap((0.0, 0.0), 5.0, (9.9, 0.0), 5.0)
    assert hitbox_overlap(pygame.Vector2(3, 4), 1.0, pygame.Vector2(3, 4), 1.0)
