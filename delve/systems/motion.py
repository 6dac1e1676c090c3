"""
Motion resolver.

Each tick integrates acceleration into velocity, then moves every entity
against the active tile grid. Disc entities resolve X then Y as two separate
one-dimensional sweeps in unit steps, so a diagonal move into a wall keeps
sliding along the free axis. Point entities always move and only report wall
contact.
"""

import math
from typing import Iterable, Tuple

from config import TILE_SIZE
from delve.core.utils import sign
from delve.entities.components.physics_component import MovingEntity
from delve.tiles.tile_collision import check_collision, check_point_collision
from delve.tiles.tile_grid import TileGrid


def floored(position) -> Tuple[float, float]:
    return (float(math.floor(position[0])), float(math.floor(position[1])))


def sweep_axis(grid: TileGrid, start: float, target: float, fixed: float, radius: float,
               horizontal: bool, tile_size: float = TILE_SIZE) -> Tuple[float, bool]:
    """
    Walk one axis from floor(start) toward floor(target) one world unit at a
    time, testing the disc at every integer step.

    Args:
        start: Current coordinate on the moving axis
        target: Desired coordinate on the moving axis
        fixed: Floored coordinate on the other axis
        horizontal: True to sweep X (fixed is y), False to sweep Y (fixed is x)

    Returns:
        (new coordinate, blocked). When nothing blocks, the new coordinate is
        the exact target. When blocked, it is the last free integer step.
    """
    current = math.floor(start)
    goal = math.floor(target)
    step = sign(goal - current)
    position = start
    for _ in range(abs(goal - current)):
        candidate = current + step
        probe = (candidate, fixed) if horizontal else (fixed, candidate)
        if check_collision(grid, probe, radius, tile_size):
            return float(position), True
        current = candidate
        position = candidate
    return target, False


class MotionResolver:
    """Advances a list of MovingEntity against a TileGrid once per tick."""

    def __init__(self, tile_size: float = TILE_SIZE):
        self.tile_size = tile_size

    def tick(self, entities: Iterable[MovingEntity], grid: TileGrid) -> None:
        movers = [entity for entity in entities if entity.dynamic]

        for entity in movers:
            entity.apply_acceleration()

        for entity in movers:
            if entity.has_hitbox:
                self.resolve_disc(entity, grid)
            else:
                self.resolve_point(entity, grid)

    def resolve_disc(self, entity: MovingEntity, grid: TileGrid) -> None:
        radius = entity.hitbox_radius
        assert not check_collision(grid, floored(entity.position), radius, self.tile_size), \
            f"{entity!r} starts the tick inside a blocking tile"

        target = entity.position + entity.velocity

        x, blocked = sweep_axis(grid, entity.position.x, target.x, math.floor(entity.position.y),
                                radius, horizontal=True, tile_size=self.tile_size)
        entity.position.x = x
        if blocked:
            entity.velocity.x = 0.0

        y, blocked = sweep_axis(grid, entity.position.y, target.y, math.floor(entity.position.x),
                                radius, horizontal=False, tile_size=self.tile_size)
        entity.position.y = y
        if blocked:
            entity.velocity.y = 0.0

        assert not check_collision(grid, floored(entity.position), radius, self.tile_size), \
            f"{entity!r} ends the tick inside a blocking tile"

    def resolve_point(self, entity: MovingEntity, grid: TileGrid) -> None:
        entity.position += entity.velocity
        entity.touching_wall = check_point_collision(grid, entity.position, self.tile_size)
