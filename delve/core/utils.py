import math


def sign(x):
    return (x > 0) - (x < 0)


def manhattan_distance(a, b):
    """Return |ax - bx| + |ay - by| for two integer coordinates."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def floor_div(value, size):
    """Map a world coordinate to the index of the cell of width `size` containing it."""
    return int(math.floor(value / size))


def neighbours(pos, directions):
    """Yield the coordinates one lattice step away from `pos`."""
    x, y = pos
    for dx, dy in directions:
        yield (x + dx, y + dy)
