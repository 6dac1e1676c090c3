from config import (
    BOSS_HITBOX_RADIUS,
    BULLET_SPEED,
    ENEMY_HITBOX_RADIUS,
    ENEMY_MAX_SPEED,
    EXIT_HITBOX_RADIUS,
    PLAYER_HITBOX_RADIUS,
    PLAYER_MAX_SPEED,
)
from delve.core.constants import EnemyKind
from delve.systems.spawn_queue import SpawnRequest
from .components.physics_component import MovingEntity

ENEMY_KINDS = {kind.value for kind in EnemyKind}


def make_player(position) -> MovingEntity:
    return MovingEntity(position=position, max_speed=PLAYER_MAX_SPEED,
                        hitbox_radius=PLAYER_HITBOX_RADIUS, kind="player")


def make_enemy(kind: str, position) -> MovingEntity:
    return MovingEntity(position=position, max_speed=ENEMY_MAX_SPEED,
                        hitbox_radius=ENEMY_HITBOX_RADIUS, kind=kind)


def make_boss(position) -> MovingEntity:
    return MovingEntity(position=position, max_speed=ENEMY_MAX_SPEED,
                        hitbox_radius=BOSS_HITBOX_RADIUS, kind="boss")


def make_exit(position) -> MovingEntity:
    # Exit triggers have a hitbox for overlap tests but never move
    return MovingEntity(position=position, hitbox_radius=EXIT_HITBOX_RADIUS,
                        kind="exit", dynamic=False)


def make_bullet(position, velocity, penetrating: bool = False) -> MovingEntity:
    # Point entity: no hitbox, moves unconditionally, reports wall contact
    return MovingEntity(position=position, velocity=velocity, max_speed=BULLET_SPEED,
                        kind="bullet", penetrating=penetrating)


def entity_from_request(request: SpawnRequest) -> MovingEntity:
    """Build the entity a SpawnRequest asks for."""
    kind = request.kind
    if kind in ENEMY_KINDS:
        return make_enemy(kind, request.position)
    if kind == "player":
        return make_player(request.position)
    if kind == "boss":
        return make_boss(request.position)
    if kind == "exit":
        return make_exit(request.position)
    if kind == "bullet":
        return make_bullet(request.position, request.velocity)
    if kind == "penetrating_bullet":
        return make_bullet(request.position, request.velocity, penetrating=True)
    raise ValueError(f"Unknown entity kind: {kind!r}")
