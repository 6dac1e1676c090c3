# === Global configuration & tuning ===
# World units per tile edge. Grid coordinates map to world space by this factor.
TILE_SIZE = 32.0

# Colors
FLOOR_COL = (223, 201, 96)
WALL_COL = (128, 128, 128)
UNKNOWN_COL = (255, 0, 255)  # Magenta - never carved
ARENA_FLOOR_COL = (96, 74, 120)

# Player tuning (world units per tick)
PLAYER_HITBOX_RADIUS = 10.0
PLAYER_ACCELERATION = 1.0
PLAYER_MAX_SPEED = 6.0

# Enemies
ENEMY_HITBOX_RADIUS = 12.0
ENEMY_MAX_SPEED = 4.0

# Bullets are point entities with no hitbox
BULLET_SPEED = 9.0

# Exit trigger
EXIT_HITBOX_RADIUS = 12.0

# === Boss arena ===
BOSS_ARENA_RADIUS = 15  # tiles from the arena centre to the wall ring
BOSS_HITBOX_RADIUS = 24.0
ARENA_PLAYER_SPAWN = (0.0, 100.0)

# === Procedural Level Generation Configuration ===
GENERATION_CONFIG_PATH = "config/pcg_config.json"
