"""Generated level data structures.

A GeneratedLevel is produced atomically by a carver and handed wholly to the
caller, which installs its TileGrid as the active map.
"""

from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Tuple

from delve.core.constants import EnemyKind, LevelStyle
from delve.systems.spawn_queue import SpawnRequest
from delve.tiles.tile_grid import TileGrid


class GenerationFailure(Exception):
    """A carver hit a structural dead end of its random search.

    This is an expected outcome, not a defect: the driver discards the attempt
    and tries again.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class SpawnPoint(NamedTuple):
    """Enemy spawn location in tile coordinates."""
    x: int
    y: int
    kind: EnemyKind


@dataclass
class GeneratedLevel:
    """Result of one successful generation.

    Attributes:
        tile_grid: The carved map
        start_position: Tile where the player is placed
        exit_position: Tile where the exit trigger is placed
        spawn_points: Enemy spawn tiles tagged with an enemy kind
        style: Which carver produced this level (None for hand-built maps)
        attempts: How many carver runs the driver needed
    """
    tile_grid: TileGrid
    start_position: Tuple[int, int]
    exit_position: Tuple[int, int]
    spawn_points: List[SpawnPoint] = field(default_factory=list)
    style: Optional[LevelStyle] = None
    attempts: int = 1

    def start_world_position(self) -> Tuple[float, float]:
        return TileGrid.tile_center(*self.start_position)

    def exit_world_position(self) -> Tuple[float, float]:
        return TileGrid.tile_center(*self.exit_position)

    def spawn_requests(self) -> List[SpawnRequest]:
        """Convert spawn points into world-space spawn requests (tile centres)."""
        requests = []
        for point in self.spawn_points:
            requests.append(SpawnRequest(
                kind=point.kind.value,
                position=TileGrid.tile_center(point.x, point.y),
            ))
        return requests


def roll_enemy_kind(rng, shotgunner_chance: float, spinner_chance: float) -> EnemyKind:
    """Draw an enemy kind: shotgunner, then spinner, otherwise basic."""
    roll = rng.random()
    if roll < shotgunner_chance:
        return EnemyKind.SHOTGUNNER
    if roll < shotgunner_chance + spinner_chance:
        return EnemyKind.SPINNER
    return EnemyKind.BASIC
