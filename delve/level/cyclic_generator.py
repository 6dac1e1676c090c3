"""Cyclic level generator.

Rooms live on a coarse lattice; one lattice step is one room plus the corridor
to its neighbour. The layout is a closed primary loop that starts and ends in
the origin room, plus one side path that branches off the loop and walks back
into it:

    # S-#-#-#
      =   o |
    # #-# #-#
        | |
    # # E-# #

Any structural dead end raises GenerationFailure so the driver can retry.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional, Set, Tuple

from delve.core.constants import DIRECTIONS, LevelStyle
from delve.core.utils import manhattan_distance, neighbours
from delve.tiles.tile_grid import TileGrid
from delve.tiles.tile_types import FLOOR, UNKNOWN, WALL
from .config_loader import GenerationConfig
from .level_data import GeneratedLevel, GenerationFailure, SpawnPoint, roll_enemy_kind

logger = logging.getLogger(__name__)

Room = Tuple[int, int]
RoomPath = List[Room]

ORIGIN: Room = (0, 0)


def take_step(
    rng: random.Random,
    current: Room,
    visited: Set[Room],
    reason: str,
    distance_to: Optional[Callable[[Room], int]] = None,
) -> Room:
    """Move to a random unvisited neighbouring room and mark it visited.

    With `distance_to`, a neighbour that strictly reduces the distance is put
    in the candidate pool twice, biasing the walk toward the target.

    Raises:
        GenerationFailure: no unvisited neighbour exists
    """
    choices = []
    for candidate in neighbours(current, DIRECTIONS):
        if candidate in visited:
            continue
        choices.append(candidate)
        if distance_to is not None and distance_to(candidate) < distance_to(current):
            choices.append(candidate)

    if not choices:
        raise GenerationFailure(reason)

    chosen = rng.choice(choices)
    visited.add(chosen)
    return chosen


def room_origin(room: Room, config: GenerationConfig) -> Tuple[int, int]:
    """Tile coordinate of the first interior tile of a room."""
    return room[0] * config.room_spacing, room[1] * config.room_spacing


def carve_room(grid: TileGrid, room: Room, config: GenerationConfig) -> None:
    """Stamp a walled room: a ring of wall around a room_size square of floor."""
    ox, oy = room_origin(room, config)
    size = config.room_size
    grid.fill_rect(ox - 1, oy - 1, size + 2, size + 2, WALL)
    grid.fill_rect(ox, oy, size, size, FLOOR)


def carve_corridor(grid: TileGrid, from_room: Room, to_room: Room, config: GenerationConfig) -> None:
    """Carve a walled corridor between two adjacent rooms.

    The corridor starts on the face of `from_room` that looks at `to_room`
    and walks tile by tile until it has punched through the facing wall of
    `to_room`.
    """
    dx = to_room[0] - from_room[0]
    dy = to_room[1] - from_room[1]
    if abs(dx) + abs(dy) != 1:
        raise ValueError(f"Rooms {from_room} and {to_room} are not lattice neighbours")

    ox, oy = room_origin(from_room, config)
    size = config.room_size
    width = config.corridor_width
    margin = (size - width) // 2
    steps = config.room_spacing - size

    for step in range(steps):
        if dx != 0:
            x = ox + (size if dx == 1 else -1) + step * dx
            for n in range(margin - 1, margin + width + 1):
                grid.set(x, oy + n, WALL)
            for n in range(margin, margin + width):
                grid.set(x, oy + n, FLOOR)
        else:
            y = oy + (size if dy == 1 else -1) + step * dy
            for n in range(margin - 1, margin + width + 1):
                grid.set(ox + n, y, WALL)
            for n in range(margin, margin + width):
                grid.set(ox + n, y, FLOOR)


class PathCarver:
    """Builds a closed primary room loop plus one side path and carves them.

    Args:
        rng: Random source; a fresh unseeded Random is used if omitted
        config: Generation knobs
    """

    def __init__(self, rng: Optional[random.Random] = None, config: Optional[GenerationConfig] = None):
        self.rng = rng if rng is not None else random.Random()
        self.config = config or GenerationConfig()

    def generate(self) -> GeneratedLevel:
        """Run one attempt. Raises GenerationFailure on a dead end."""
        path, side_path, exit_room = self.build_paths()
        return self.carve(path, side_path, exit_room)

    def build_paths(self) -> Tuple[RoomPath, RoomPath, Room]:
        """Lay out the room lattice.

        Returns:
            (primary_path, side_path, exit_room). The primary path starts and
            ends at ORIGIN. The side path starts at its branch point on the
            primary path and ends at the primary room it reconnected to.
        """
        rng = self.rng
        cfg = self.config
        visited = {ORIGIN}
        path: RoomPath = [ORIGIN]

        # Phase 1: free walk away from the origin
        current = ORIGIN
        for _ in range(rng.randint(cfg.initial_path_min, cfg.initial_path_max)):
            current = take_step(rng, current, visited, "stuck with no choice growing primary path")
            path.append(current)

        # Phase 2: side path off an interior room, walked back into the loop
        branch_point = path[rng.randint(2, len(path) - 2)]
        side_path: RoomPath = [branch_point]
        side_current = branch_point
        for _ in range(rng.randint(cfg.side_path_min, cfg.side_path_max)):
            side_current = take_step(rng, side_current, visited, "stuck with no choice growing side path")
            side_path.append(side_current)

        def distance_to_primary(room: Room) -> int:
            return min(manhattan_distance(room, p) for p in path)

        while True:
            anchor = next((p for p in path if manhattan_distance(side_current, p) == 1), None)
            if anchor is not None:
                side_path.append(anchor)
                break
            if len(side_path) > cfg.max_side_path_length:
                raise GenerationFailure("side path excessively long")
            side_current = take_step(
                rng, side_current, visited,
                "stuck with no choice returning side path",
                distance_to=distance_to_primary,
            )
            side_path.append(side_current)

        if len(side_path) > cfg.max_side_path_length:
            raise GenerationFailure("side path excessively long")

        exit_room = side_path[-2]

        # Phase 3: keep extending the primary path until it can close on the origin
        while manhattan_distance(current, ORIGIN) != 1:
            if len(path) >= cfg.max_primary_path_length:
                raise GenerationFailure("primary path excessively long")
            current = take_step(
                rng, current, visited,
                "stuck with no choice closing primary path",
                distance_to=lambda room: manhattan_distance(room, ORIGIN),
            )
            path.append(current)

        if len(path) >= cfg.max_primary_path_length:
            raise GenerationFailure("primary path excessively long")
        path.append(ORIGIN)

        logger.debug("Room layout: primary=%s side=%s exit=%s", path, side_path, exit_room)
        return path, side_path, exit_room

    def carve(self, path: RoomPath, side_path: RoomPath, exit_room: Room) -> GeneratedLevel:
        """Carve rooms and corridors for a finished layout and place spawns."""
        cfg = self.config
        grid = TileGrid(default_tile=UNKNOWN)
        spawn_points: List[SpawnPoint] = []

        # Origin, branch and anchor rooms sit on both paths. Each distinct
        # room is carved once and rolls its enemies exactly once.
        for room in dict.fromkeys(path + side_path):
            carve_room(grid, room, cfg)
            if room == ORIGIN:
                continue
            spawn_points.extend(self._roll_room_enemies(room))

        for room_path in (path, side_path):
            for from_room, to_room in zip(room_path, room_path[1:]):
                carve_corridor(grid, from_room, to_room, cfg)

        start_position = (cfg.start_offset, cfg.start_offset)
        ex, ey = room_origin(exit_room, cfg)
        exit_position = (ex + cfg.start_offset, ey + cfg.start_offset)

        return GeneratedLevel(
            tile_grid=grid,
            start_position=start_position,
            exit_position=exit_position,
            spawn_points=spawn_points,
            style=LevelStyle.CYCLIC,
        )

    def _roll_room_enemies(self, room: Room) -> List[SpawnPoint]:
        rng = self.rng
        cfg = self.config
        ox, oy = room_origin(room, cfg)
        points = []
        for _ in range(rng.randint(cfg.min_enemies_per_room, cfg.max_enemies_per_room)):
            x = ox + rng.randint(cfg.enemy_offset_min, cfg.enemy_offset_max)
            y = oy + rng.randint(cfg.enemy_offset_min, cfg.enemy_offset_max)
            kind = roll_enemy_kind(rng, cfg.shotgunner_chance, cfg.spinner_chance)
            points.append(SpawnPoint(x, y, kind))
        return points
