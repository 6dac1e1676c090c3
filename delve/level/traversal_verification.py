from collections import deque
from typing import Iterable, List, Set, Tuple

from delve.core.constants import DIRECTIONS
from delve.tiles.tile_grid import TileGrid

Coord = Tuple[int, int]


def reachable_tiles(grid: TileGrid, start: Coord) -> Set[Coord]:
    """
    Return the set of carved passable tiles reachable from start using
    4-way movement.

    Only explicitly written tiles are walked, so an UNKNOWN default never
    leaks the fill out of the carved level.
    """
    if start not in grid or grid.get(*start).blocks_movement:
        return set()

    seen = {start}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        for dx, dy in DIRECTIONS:
            nxt = (x + dx, y + dy)
            if nxt in seen or nxt not in grid:
                continue
            if grid.get(*nxt).blocks_movement:
                continue
            seen.add(nxt)
            queue.append(nxt)
    return seen


def verify_traversable(grid: TileGrid, start: Coord, goals: Iterable[Coord]) -> bool:
    """Return True if every goal tile can be walked to from start."""
    reachable = reachable_tiles(grid, start)
    return all(goal in reachable for goal in goals)


def open_regions(cave: List[List[bool]]) -> List[Set[Coord]]:
    """
    Split the open cells of a cave map into 4-connected regions.
    Largest region first.
    """
    size = len(cave)
    seen: Set[Coord] = set()
    regions = []
    for y in range(size):
        for x in range(size):
            if cave[y][x] or (x, y) in seen:
                continue
            region = {(x, y)}
            seen.add((x, y))
            queue = deque([(x, y)])
            while queue:
                cx, cy = queue.popleft()
                for dx, dy in DIRECTIONS:
                    nx, ny = cx + dx, cy + dy
                    if 0 <= nx < size and 0 <= ny < size and (nx, ny) not in seen and not cave[ny][nx]:
                        seen.add((nx, ny))
                        region.add((nx, ny))
                        queue.append((nx, ny))
            regions.append(region)
    regions.sort(key=len, reverse=True)
    return regions
