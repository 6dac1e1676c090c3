import random

import pytest

from delve.level.config_loader import GenerationConfig
from delve.tiles.tile_grid import TileGrid
from delve.tiles.tile_types import FLOOR, WALL

# --- Fixtures for common test data ---


class ScriptedRng:
    """Stands in for random.Random, replaying fixed values.

    `values` feed random(), `ints` feed randint() and `picks` choose the
    room returned by choice(). Once picks run out, choice() takes the first
    candidate.
    """

    def __init__(self, values, ints=(), picks=()):
        self.values = list(values)
        self.ints = list(ints)
        self.picks = list(picks)
        self.seen_choices = []

    def random(self):
        return self.values.pop(0)

    def randint(self, a, b):
        value = self.ints.pop(0)
        assert a <= value <= b
        return value

    def choice(self, seq):
        self.seen_choices.append(list(seq))
        if self.picks:
            pick = self.picks.pop(0)
            assert pick in seq
            return pick
        return seq[0]


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def default_config():
    return GenerationConfig()


@pytest.fixture
def open_grid():
    # Nothing written: every lookup is the passable UNKNOWN tile
    return TileGrid()


@pytest.fixture
def walled_room():
    # A 10x10 floor (world 0..320 on both axes) inside a one-tile wall ring
    grid = TileGrid(default_tile=WALL)
    grid.fill_rect(-1, -1, 12, 12, WALL)
    grid.fill_rect(0, 0, 10, 10, FLOOR)
    return grid


@pytest.fixture
def scripted_rng():
    return ScriptedRng
