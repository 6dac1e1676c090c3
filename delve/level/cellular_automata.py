"""Cellular automata cave generator.

Seeds a square of noise, smooths it into caverns, then converts it into a
TileGrid wrapped in an extra ring of wall. Anything outside that ring also
reads as wall because the grid's default tile is WALL.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

from delve.core.constants import LevelStyle
from delve.tiles.tile_grid import TileGrid
from delve.tiles.tile_types import FLOOR, WALL
from .config_loader import GenerationConfig
from .level_data import GeneratedLevel, GenerationFailure, SpawnPoint, roll_enemy_kind

logger = logging.getLogger(__name__)

# cave[y][x] is True where the cell blocks movement
CaveMap = List[List[bool]]


def seed_cave(rng: random.Random, size: int, fill_chance: float) -> CaveMap:
    """Return a size x size field where each cell is independently blocking."""
    return [[rng.random() < fill_chance for _ in range(size)] for _ in range(size)]


def count_blocking(cave: CaveMap, x: int, y: int, radius: int) -> int:
    """
    Counts blocking cells in the (2r+1) x (2r+1) square centred on (x, y),
    the centre included. Out-of-bounds cells count as blocking.
    """
    size = len(cave)
    total = 0
    for iy in range(y - radius, y + radius + 1):
        for ix in range(x - radius, x + radius + 1):
            if ix < 0 or iy < 0 or ix >= size or iy >= size:
                total += 1
            elif cave[iy][ix]:
                total += 1
    return total


def _ca_smoothing_step(cave: CaveMap, config: GenerationConfig, strict: bool) -> CaveMap:
    """
    Runs a single iteration of the CA simulation.

    Loose passes also wall in cells sitting in a large empty area, which breaks
    up wide open halls. Strict passes only apply the 3x3 majority rule.
    """
    size = len(cave)
    new_cave: CaveMap = [[False] * size for _ in range(size)]
    for y in range(size):
        for x in range(size):
            blocking = count_blocking(cave, x, y, 1) >= config.ca_wall_threshold
            if not strict and not blocking:
                blocking = count_blocking(cave, x, y, 2) <= config.ca_open_space_threshold
            new_cave[y][x] = blocking
    return new_cave


def smooth_cave(rng: random.Random, config: GenerationConfig) -> CaveMap:
    """Seed and fully smooth a cave map."""
    cave = seed_cave(rng, config.cave_size, config.cave_fill_chance)
    for _ in range(config.ca_loose_iterations):
        cave = _ca_smoothing_step(cave, config, strict=False)
    for _ in range(config.ca_strict_iterations):
        cave = _ca_smoothing_step(cave, config, strict=True)
    return cave


def cave_to_grid(cave: CaveMap) -> TileGrid:
    """Convert a cave map to a TileGrid bordered by one ring of wall."""
    size = len(cave)
    grid = TileGrid(default_tile=WALL)
    grid.fill_rect(-1, -1, size + 2, size + 2, WALL)
    for y, row in enumerate(cave):
        for x, blocking in enumerate(row):
            grid.set(x, y, WALL if blocking else FLOOR)
    return grid


def find_start(cave: CaveMap) -> Optional[Tuple[int, int]]:
    """First open cell scanning anti-diagonals outward from the top-left corner."""
    size = len(cave)
    for diagonal in range(2 * size - 1):
        for x in range(max(0, diagonal - size + 1), min(diagonal, size - 1) + 1):
            y = diagonal - x
            if not cave[y][x]:
                return (x, y)
    return None


def find_exit(cave: CaveMap) -> Optional[Tuple[int, int]]:
    """First open cell scanning anti-diagonals inward from the bottom-right corner."""
    size = len(cave)
    for diagonal in range(2 * size - 2, -1, -1):
        for x in range(min(diagonal, size - 1), max(0, diagonal - size + 1) - 1, -1):
            y = diagonal - x
            if not cave[y][x]:
                return (x, y)
    return None


class CaveCarver:
    """Cellular automata cave generator.

    Args:
        rng: Random source; a fresh unseeded Random is used if omitted
        config: Generation knobs
    """

    def __init__(self, rng: Optional[random.Random] = None, config: Optional[GenerationConfig] = None):
        self.rng = rng if rng is not None else random.Random()
        self.config = config or GenerationConfig()

    def generate(self) -> GeneratedLevel:
        """Run one attempt. Raises GenerationFailure if no start/exit cell exists."""
        cfg = self.config
        cave = smooth_cave(self.rng, cfg)

        start_position = find_start(cave)
        exit_position = find_exit(cave)
        if start_position is None or exit_position is None:
            raise GenerationFailure("cave has no open cell for start or exit")
        if start_position == exit_position:
            raise GenerationFailure("cave has a single open cell")

        spawn_points = self._scatter_spawns(cave, start_position)
        logger.debug("Cave carved: start=%s exit=%s spawns=%d", start_position, exit_position, len(spawn_points))

        return GeneratedLevel(
            tile_grid=cave_to_grid(cave),
            start_position=start_position,
            exit_position=exit_position,
            spawn_points=spawn_points,
            style=LevelStyle.CELLULAR_AUTOMATA,
        )

    def _scatter_spawns(self, cave: CaveMap, start: Tuple[int, int]) -> List[SpawnPoint]:
        """Throw spawn candidates at the cave; keep those on open cells far from the start."""
        rng = self.rng
        cfg = self.config
        size = len(cave)
        points = []
        for _ in range(cfg.cave_spawn_candidates):
            x = rng.randrange(size)
            y = rng.randrange(size)
            kind = roll_enemy_kind(rng, cfg.shotgunner_chance, cfg.spinner_chance)
            if cave[y][x]:
                continue
            far_enough = (abs(x - start[0]) >= cfg.cave_min_spawn_distance
                          or abs(y - start[1]) >= cfg.cave_min_spawn_distance)
            if far_enough:
                points.append(SpawnPoint(x, y, kind))
        return points
