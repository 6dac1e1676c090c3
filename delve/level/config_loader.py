"""Configuration loader for level generation."""

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from typing import NamedTuple, Optional

from config import BOSS_ARENA_RADIUS, GENERATION_CONFIG_PATH
from delve.core.constants import LevelStyle

logger = logging.getLogger(__name__)


@dataclass
class GenerationConfig:
    """Knobs for both carvers. Defaults reproduce the shipped game."""

    # --- CYCLIC (PATH CARVING) SETTINGS ---
    # Distance in tiles between neighbouring room origins on the room lattice.
    room_spacing: int = 20
    # Passable interior of every room is room_size x room_size, plus a 1-tile wall ring.
    room_size: int = 10
    # Passable width of a corridor; each side gets one extra wall tile.
    corridor_width: int = 6
    # Number of steps of the first primary-path walk (inclusive range).
    initial_path_min: int = 3
    initial_path_max: int = 5
    # Number of free steps of the side path before it heads back (inclusive range).
    side_path_min: int = 2
    side_path_max: int = 3
    # A side path longer than this is rejected.
    max_side_path_length: int = 8
    # A primary path that reaches this many rooms before closing is rejected.
    max_primary_path_length: int = 10
    # Start tile offset inside the origin room.
    start_offset: int = 5
    # Enemies per room (inclusive range) and where inside the room they may appear.
    min_enemies_per_room: int = 0
    max_enemies_per_room: int = 4
    enemy_offset_min: int = 2
    enemy_offset_max: int = 7

    # --- ENEMY MIX ---
    shotgunner_chance: float = 0.2
    spinner_chance: float = 0.2

    # --- CELLULAR AUTOMATA SETTINGS ---
    cave_size: int = 50
    # Chance (0.0 to 1.0) each seed cell starts blocking.
    cave_fill_chance: float = 0.4
    # Loose passes: wall if 3x3 count >= wall threshold OR 5x5 count <= open-space threshold.
    ca_loose_iterations: int = 4
    # Strict passes: wall only if 3x3 count >= wall threshold.
    ca_strict_iterations: int = 3
    ca_wall_threshold: int = 5
    ca_open_space_threshold: int = 2
    # Random spawn candidates thrown at the cave, and how far from the start they must land.
    cave_spawn_candidates: int = 30
    cave_min_spawn_distance: int = 10

    # --- BOSS ARENA ---
    boss_arena_radius: int = BOSS_ARENA_RADIUS

    def __post_init__(self):
        if self.initial_path_min > self.initial_path_max:
            raise ValueError("initial_path_min must not exceed initial_path_max")
        if self.initial_path_min < 3:
            raise ValueError("initial_path_min must be at least 3 to leave room for a branch point")
        if self.side_path_min > self.side_path_max:
            raise ValueError("side_path_min must not exceed side_path_max")
        if self.min_enemies_per_room > self.max_enemies_per_room:
            raise ValueError("min_enemies_per_room must not exceed max_enemies_per_room")
        if self.enemy_offset_min > self.enemy_offset_max:
            raise ValueError("enemy_offset_min must not exceed enemy_offset_max")
        if self.enemy_offset_min < 0 or self.enemy_offset_max >= self.room_size:
            raise ValueError("enemy offsets must land inside the room (0 <= offset < room_size)")
        if not 0 <= self.start_offset < self.room_size:
            raise ValueError("start_offset must land inside the room (0 <= offset < room_size)")
        if self.corridor_width > self.room_size - 2:
            raise ValueError("corridor_width must leave a wall on both sides inside the room face")
        if self.room_spacing <= self.room_size:
            raise ValueError("room_spacing must exceed room_size so corridors have length")
        if not 0.0 <= self.shotgunner_chance + self.spinner_chance <= 1.0:
            raise ValueError("enemy kind chances must sum to at most 1.0")
        if self.cave_size <= 0:
            raise ValueError("cave_size must be positive")
        if self.boss_arena_radius < 2:
            raise ValueError("boss_arena_radius must be at least 2")


class RuntimeConfig(NamedTuple):
    seed_mode: str
    seed: int
    style: Optional[LevelStyle]


_ALLOWED_KEYS = {f.name for f in fields(GenerationConfig)}


def load_generation_config(config_path: str = GENERATION_CONFIG_PATH) -> GenerationConfig:
    """
    Load generation configuration from JSON file.

    Unknown keys are ignored. A missing or broken file yields the defaults.

    Args:
        config_path: Path to the configuration file

    Returns:
        GenerationConfig: Loaded configuration
    """
    if not os.path.exists(config_path):
        logger.warning("Config file not found: %s, using defaults", config_path)
        return GenerationConfig()

    try:
        with open(config_path, 'r') as f:
            data = json.load(f)

        config_data = data.get('generation', {})
        unknown = sorted(set(config_data) - _ALLOWED_KEYS)
        if unknown:
            logger.warning("Ignoring unknown generation keys: %s", ", ".join(unknown))
        filtered = {k: v for k, v in config_data.items() if k in _ALLOWED_KEYS}
        return GenerationConfig(**filtered)

    except (OSError, ValueError, TypeError, AttributeError) as e:
        logger.warning("Error loading config: %s, using defaults", e)
        return GenerationConfig()


def load_runtime_config(config_path: str = GENERATION_CONFIG_PATH) -> RuntimeConfig:
    """Load runtime toggles (seed_mode, seed, style) with safe defaults."""
    seed_mode = "random"
    seed = 12345
    style = None

    if os.path.exists(config_path):
        try:
            with open(config_path, 'r') as f:
                data = json.load(f)
            cfg = data.get('runtime', {})
            seed_mode = str(cfg.get('seed_mode', seed_mode))
            if seed_mode not in ("fixed", "random"):
                seed_mode = "random"
            try:
                seed = int(cfg.get('seed', seed))
            except (TypeError, ValueError):
                seed = 12345
            raw_style = cfg.get('style')
            if raw_style is not None:
                try:
                    style = LevelStyle(raw_style)
                except ValueError:
                    logger.warning("Unknown level style %r, picking at random", raw_style)
                    style = None
        except (OSError, ValueError, AttributeError) as e:
            logger.warning("Error loading runtime config: %s, using defaults", e)

    return RuntimeConfig(seed_mode=seed_mode, seed=seed, style=style)


def save_generation_config(config: GenerationConfig, config_path: str = GENERATION_CONFIG_PATH) -> None:
    """
    Save generation configuration to JSON file.

    Any other top-level sections already in the file (e.g. "runtime") are kept.

    Args:
        config: Configuration to save
        config_path: Path to save the configuration file
    """
    directory = os.path.dirname(config_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    existing = {}
    if os.path.exists(config_path):
        try:
            with open(config_path, 'r') as f:
                existing = json.load(f) or {}
        except (OSError, ValueError):
            existing = {}

    existing["generation"] = asdict(config)

    with open(config_path, 'w') as f:
        json.dump(existing, f, indent=2)
