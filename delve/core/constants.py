# delve/core/constants.py
"""
Shared enumerations and debug character maps.

Coordinate System:
- Origin: Room (0, 0) / tile (0, 0) sits at world (0, 0).
- X-axis: Increases from left to right.
- Y-axis: Increases from top to bottom.
- Tile coordinates are unbounded signed integers; rooms on the cyclic
  lattice may live at negative coordinates.
"""
from enum import Enum


class LevelStyle(Enum):
    """Generation strategy requested by the world setup collaborator."""

    CYCLIC = "cyclic"
    CELLULAR_AUTOMATA = "cellular_automata"


class EnemyKind(Enum):
    """Enemy archetype tagged onto every spawn point."""

    BASIC = "basic"
    SHOTGUNNER = "shotgunner"
    SPINNER = "spinner"


# === Debug Character Definitions ===
# Used by TileGrid.to_lines() to dump a level as ASCII.
TILE_CHARS = {
    "floor": ".",
    "wall": "#",
    "unknown": " ",
}

MARKER_CHARS = {
    "start": "S",
    "exit": "E",
    EnemyKind.BASIC: "c",
    EnemyKind.SHOTGUNNER: "g",
    EnemyKind.SPINNER: "s",
}

# The four axis-aligned lattice steps, in the order candidates are tried.
DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))
