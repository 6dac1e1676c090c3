import argparse
import logging
import random

from config import GENERATION_CONFIG_PATH, PLAYER_ACCELERATION
from delve.core.constants import MARKER_CHARS, EnemyKind, LevelStyle
from delve.entities.entities import ENEMY_KINDS
from delve.level.config_loader import load_generation_config, load_runtime_config
from delve.systems.world import GameWorld
from delve.tiles.tile_grid import TileGrid

logger = logging.getLogger(__name__)

# Reduce verbosity of generation modules (only show warnings/errors)
QUIET_LOGGERS = (
    "delve.level.cyclic_generator",
    "delve.level.cellular_automata",
    "delve.systems.spawn_queue",
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a dungeon level and run a few motion ticks")
    parser.add_argument("--style", choices=[style.value for style in LevelStyle],
                        help="Level style (default: from config, else random)")
    parser.add_argument("--boss", action="store_true", help="Load the boss arena instead of a level")
    parser.add_argument("--seed", type=int, help="Seed for the level RNG")
    parser.add_argument("--config", default=GENERATION_CONFIG_PATH, help="Generation config JSON")
    parser.add_argument("--ticks", type=int, default=120, help="Motion ticks to simulate")
    parser.add_argument("--ascii", action="store_true", help="Print the level as ASCII")
    parser.add_argument("--verbose", action="store_true", help="Show generator debug logging")
    return parser.parse_args()


def resolve_seed(args, runtime) -> int:
    if args.seed is not None:
        return args.seed
    if runtime.seed_mode == "fixed":
        return runtime.seed
    return random.randrange(0, 2**31 - 1)


def level_markers(world: GameWorld) -> dict:
    markers = {}
    for entity in world.entities:
        coord = TileGrid.world_to_grid(entity.position.x, entity.position.y)
        if entity.kind == "player":
            markers[coord] = MARKER_CHARS["start"]
        elif entity.kind == "exit":
            markers[coord] = MARKER_CHARS["exit"]
        elif entity.kind == "boss":
            markers[coord] = "B"
        elif entity.kind in ENEMY_KINDS:
            markers[coord] = MARKER_CHARS[EnemyKind(entity.kind)]
    return markers


def steer_player(world: GameWorld) -> None:
    """Accelerate the player straight toward the exit (or the boss)."""
    player = world.player
    targets = world.entities_of_kind("exit") or world.entities_of_kind("boss")
    if player is None or not targets:
        return
    offset = targets[0].position - player.position
    if offset.length_squared() > 0:
        offset.scale_to_length(PLAYER_ACCELERATION)
    player.acceleration = offset


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    if not args.verbose:
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    gen_config = load_generation_config(args.config)
    runtime = load_runtime_config(args.config)
    seed = resolve_seed(args, runtime)
    logger.info("Using seed %d", seed)

    world = GameWorld(random.Random(seed), gen_config)
    if args.boss:
        world.load_boss_arena(gen_config.boss_arena_radius)
    else:
        style = LevelStyle(args.style) if args.style else runtime.style
        world.load_level(style)
    world.flush_spawns()

    if args.ascii:
        for line in world.active_map.to_lines(level_markers(world)):
            print(line)

    for tick in range(args.ticks):
        steer_player(world)
        world.tick()
        if world.player_at_exit():
            logger.info("Player reached the exit after %d tick(s)", tick + 1)
            break
    else:
        player = world.player
        logger.info("Player at (%.1f, %.1f) after %d tick(s)",
                    player.position.x, player.position.y, args.ticks)

    logger.info("Generator attempts: %d total, failures: %s",
                world.generator.total_attempts, dict(world.generator.failure_reasons))


if __name__ == "__main__":
    main()
