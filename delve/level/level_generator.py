"""
Level generation driver.

Picks a carver for the requested style and reruns it until an attempt
succeeds. Carver failures are dead ends of a random search, not resource
exhaustion, so the driver never gives up and never hands a failure to its
caller.
"""

from __future__ import annotations

import logging
import random
from collections import Counter
from dataclasses import dataclass
from typing import Optional, Tuple

from config import ARENA_PLAYER_SPAWN, TILE_SIZE
from delve.core.constants import LevelStyle
from delve.tiles.tile_grid import TileGrid
from delve.tiles.tile_types import ARENA_FLOOR, UNKNOWN, WALL
from .cellular_automata import CaveCarver
from .config_loader import GenerationConfig
from .cyclic_generator import PathCarver
from .level_data import GeneratedLevel, GenerationFailure

logger = logging.getLogger(__name__)


class LevelGenerator:
    """Retry-until-success wrapper around the carvers.

    Attributes:
        last_attempts: Carver runs needed by the most recent generate() call
        total_attempts: Carver runs across every generate() call
        failure_reasons: Count of each failure reason seen so far
    """

    def __init__(self, rng: Optional[random.Random] = None, config: Optional[GenerationConfig] = None):
        self.rng = rng if rng is not None else random.Random()
        self.config = config or GenerationConfig()
        self.last_attempts = 0
        self.total_attempts = 0
        self.failure_reasons: Counter = Counter()

    def carver_for(self, style: LevelStyle):
        if style is LevelStyle.CYCLIC:
            return PathCarver(self.rng, self.config)
        if style is LevelStyle.CELLULAR_AUTOMATA:
            return CaveCarver(self.rng, self.config)
        raise ValueError(f"Unknown level style: {style!r}")

    def generate(self, style: LevelStyle) -> GeneratedLevel:
        """Generate a level of the given style, retrying failed attempts."""
        carver = self.carver_for(style)
        attempt = 0
        while True:
            attempt += 1
            self.total_attempts += 1
            try:
                level = carver.generate()
            except GenerationFailure as e:
                self.failure_reasons[e.reason] += 1
                logger.debug("Generation attempt %d (%s) failed: %s", attempt, style.value, e.reason)
                continue

            self.last_attempts = attempt
            level.attempts = attempt
            logger.info(
                "Generated %s level after %d attempt(s): %d tiles, %d spawns",
                style.value, attempt, len(level.tile_grid), len(level.spawn_points),
            )
            return level


def generate_level(style: LevelStyle, rng: Optional[random.Random] = None,
                   config: Optional[GenerationConfig] = None) -> GeneratedLevel:
    """Convenience wrapper: one-shot LevelGenerator."""
    return LevelGenerator(rng, config).generate(style)


def pick_level_style(rng: random.Random) -> LevelStyle:
    """Pick a dungeon style with even odds."""
    if rng.random() > 0.5:
        return LevelStyle.CYCLIC
    return LevelStyle.CELLULAR_AUTOMATA


# ----- Boss arena -----

@dataclass
class BossArena:
    """Fixed boss encounter map plus where its occupants start (world units)."""
    tile_grid: TileGrid
    boss_position: Tuple[float, float]
    player_position: Tuple[float, float]


def make_boss_arena(radius: int) -> TileGrid:
    """
    Build a square arena centred on tile (0, 0).

    Tiles with |x| == radius or |y| == radius are wall, everything inside is
    floor. Cells outside the ring keep the passable UNKNOWN default.
    """
    if radius < 2:
        raise ValueError("radius must be at least 2")
    grid = TileGrid(default_tile=UNKNOWN)
    side = 2 * radius + 1
    grid.fill_rect(-radius, -radius, side, side, WALL)
    grid.fill_rect(-radius + 1, -radius + 1, side - 2, side - 2, ARENA_FLOOR)
    return grid


def boss_arena_layout(radius: int) -> BossArena:
    """Arena grid with the boss near the top wall and the player just below centre."""
    return BossArena(
        tile_grid=make_boss_arena(radius),
        boss_position=(0.0, -(radius - 2) * TILE_SIZE),
        player_position=ARENA_PLAYER_SPAWN,
    )
