import random

import pytest

from config import (
    BOSS_HITBOX_RADIUS,
    ENEMY_HITBOX_RADIUS,
    EXIT_HITBOX_RADIUS,
    PLAYER_HITBOX_RADIUS,
)
from delve.core.constants import LevelStyle
from delve.entities.entities import entity_from_request
from delve.systems.spawn_queue import SpawnRequest
from delve.systems.world import GameWorld
from delve.tiles.tile_types import WALL


@pytest.fixture
def world():
    return GameWorld(random.Random(3))


# --- Entity factory ---

def test_factory_builds_each_kind():
    enemy = entity_from_request(SpawnRequest("shotgunner", (1.0, 2.0)))
    assert enemy.kind == "shotgunner"
    assert enemy.hitbox_radius == ENEMY_HITBOX_RADIUS
    assert enemy.position.x == 1.0 and enemy.position.y == 2.0

    exit_trigger = entity_from_request(SpawnRequest("exit", (0.0, 0.0)))
    assert exit_trigger.hitbox_radius == EXIT_HITBOX_RADIUS
    assert not exit_trigger.dynamic

    boss = entity_from_request(SpawnRequest("boss", (0.0, 0.0)))
    assert boss.hitbox_radius == BOSS_HITBOX_RADIUS

    bullet = entity_from_request(SpawnRequest("bullet", (0.0, 0.0), (4.0, 0.0)))
    assert not bullet.has_hitbox
    assert not bullet.penetrating
    assert bullet.velocity.x == 4.0
    assert entity_from_request(SpawnRequest("penetrating_bullet", (0.0, 0.0))).penetrating


def test_factory_rejects_unknown_kind():
    with pytest.raises(ValueError):
        entity_from_request(SpawnRequest("dragon", (0.0, 0.0)))


# --- Level loading ---

def test_load_level_installs_grid_and_player(world):
    level = world.load_level(LevelStyle.CYCLIC)
    assert world.active_map is level.tile_grid
    assert world.entities == [world.player]
    assert world.player.hitbox_radius == PLAYER_HITBOX_RADIUS
    assert tuple(world.player.position) == (176.0, 176.0)
    assert len(world.spawn_queue) == 1 + len(level.spawn_points)


def test_queued_spawns_appear_after_flush(world):
    level = world.load_level(LevelStyle.CYCLIC)
    world.flush_spawns()
    assert len(world.entities_of_kind("exit")) == 1
    assert len(world.entities) == 2 + len(level.spawn_points)
    assert tuple(world.entities_of_kind("exit")[0].position) == level.exit_world_position()


def test_tick_applies_queued_spawns(world):
    world.load_level(LevelStyle.CELLULAR_AUTOMATA)
    world.tick()
    assert len(world.entities_of_kind("exit")) == 1
    assert len(world.spawn_queue) == 0


def test_reload_replaces_map_and_entities(world):
    first = world.load_level(LevelStyle.CYCLIC)
    world.flush_spawns()
    old_player = world.player

    second = world.load_level(LevelStyle.CELLULAR_AUTOMATA)
    assert world.active_map is second.tile_grid
    assert world.active_map is not first.tile_grid
    assert world.player is not old_player
    assert world.entities == [world.player]
    assert world.depth == 2


def test_load_level_picks_style_when_omitted(world):
    level = world.load_level()
    assert level.style in (LevelStyle.CYCLIC, LevelStyle.CELLULAR_AUTOMATA)


def test_player_at_exit(world):
    level = world.load_level(LevelStyle.CYCLIC)
    world.flush_spawns()
    assert not world.player_at_exit()
    world.player.position.update(*level.exit_world_position())
    assert world.player_at_exit()


# --- Boss arena & bullets ---

def test_boss_arena(world):
    world.load_boss_arena(5)
    world.flush_spawns()
    assert world.level is None
    assert world.active_map.get(5, 0) is WALL
    boss, = world.entities_of_kind("boss")
    assert tuple(boss.position) == (0.0, -96.0)
    assert tuple(world.player.position) == (0.0, 100.0)


def test_bullets_despawn_on_wall_contact(world):
    world.load_boss_arena(5)
    world.flush_spawns()
    world.spawn_queue.request(SpawnRequest("bullet", (155.0, 0.0), (9.0, 0.0)))
    world.spawn_queue.request(SpawnRequest("penetrating_bullet", (155.0, 32.0), (9.0, 0.0)))
    world.flush_spawns()

    world.tick()

    assert world.entities_of_kind("bullet") == [
        e for e in world.entities if e.kind == "bullet" and e.penetrating
    ]
    assert len(world.entities_of_kind("bullet")) == 1
    assert world.entities_of_kind("bullet")[0].touching_wall


def test_tick_moves_player(world):
    world.load_boss_arena(5)
    world.flush_spawns()
    world.player.acceleration.update(0, -1)
    world.tick()
    assert world.player.position.y == pytest.approx(99.0)
