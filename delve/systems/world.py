"""
Game world: the active map, the entity list, and the per-tick driver.

The active TileGrid is only ever replaced wholesale by `load_level` or
`load_boss_arena`, never edited cell by cell, so systems reading it during a
tick always see one consistent map.
"""

import logging
import random
from typing import List, Optional

from config import BOSS_ARENA_RADIUS
from delve.core.constants import LevelStyle
from delve.entities.components.physics_component import MovingEntity
from delve.entities.entities import entity_from_request, make_player
from delve.level.config_loader import GenerationConfig
from delve.level.level_data import GeneratedLevel
from delve.level.level_generator import LevelGenerator, boss_arena_layout, pick_level_style
from delve.tiles.tile_collision import hitbox_overlap
from delve.tiles.tile_grid import TileGrid
from .motion import MotionResolver
from .spawn_queue import SpawnQueue, SpawnRequest

logger = logging.getLogger(__name__)


class GameWorld:
    """Owns the active map and every live entity.

    Attributes:
        active_map: TileGrid every system reads this tick
        entities: Live entities, player included
        player: The player entity, or None before the first load
        level: The GeneratedLevel currently installed (None in the boss arena)
        depth: Number of generated levels loaded so far
    """

    def __init__(self, rng: Optional[random.Random] = None, config: Optional[GenerationConfig] = None):
        self.rng = rng if rng is not None else random.Random()
        self.config = config or GenerationConfig()
        self.generator = LevelGenerator(self.rng, self.config)
        self.resolver = MotionResolver()
        self.spawn_queue = SpawnQueue()
        self.active_map = TileGrid()
        self.entities: List[MovingEntity] = []
        self.player: Optional[MovingEntity] = None
        self.level: Optional[GeneratedLevel] = None
        self.depth = 0

    # ----- Level installation -----

    def _install(self, grid: TileGrid, player_position) -> None:
        # Previous level's entities go with the previous map
        self.spawn_queue.clear()
        self.entities = []
        self.active_map = grid
        self.player = make_player(player_position)
        self.entities.append(self.player)

    def load_level(self, style: Optional[LevelStyle] = None) -> GeneratedLevel:
        """Generate a level and install it, replacing the current one.

        The exit trigger and enemies are queued and appear once the queue is
        applied (at the end of the next tick, or via `flush_spawns`).
        """
        if style is None:
            style = pick_level_style(self.rng)
        level = self.generator.generate(style)

        self._install(level.tile_grid, level.start_world_position())
        self.level = level
        self.depth += 1

        self.spawn_queue.request(SpawnRequest(kind="exit", position=level.exit_world_position()))
        self.spawn_queue.extend(level.spawn_requests())
        logger.info("Loaded level %d (%s): start=%s exit=%s",
                    self.depth, style.value, level.start_position, level.exit_position)
        return level

    def load_boss_arena(self, radius: int = BOSS_ARENA_RADIUS) -> None:
        arena = boss_arena_layout(radius)
        self._install(arena.tile_grid, arena.player_position)
        self.level = None
        self.spawn_queue.request(SpawnRequest(kind="boss", position=arena.boss_position))
        logger.info("Loaded boss arena (radius %d)", radius)

    def flush_spawns(self) -> List[MovingEntity]:
        return self.spawn_queue.apply(self.entities, entity_from_request)

    # ----- Tick -----

    def tick(self) -> None:
        """One simulation step: motion, bullet cleanup, then queued spawns."""
        self.resolver.tick(self.entities, self.active_map)

        for entity in self.entities:
            if entity.touching_wall and not entity.penetrating:
                self.spawn_queue.despawn(entity)

        self.flush_spawns()

    # ----- Queries -----

    def entities_of_kind(self, kind: str) -> List[MovingEntity]:
        return [entity for entity in self.entities if entity.kind == kind]

    def player_at_exit(self) -> bool:
        if self.player is None:
            return False
        for exit_trigger in self.entities_of_kind("exit"):
            if hitbox_overlap(self.player.position, self.player.hitbox_radius,
                              exit_trigger.position, exit_trigger.hitbox_radius):
                return True
        return False
