"""
Physics Component - position/velocity state shared by every moving entity
"""

import pygame
from dataclasses import dataclass, field
from typing import Optional


def _vec(value) -> pygame.Vector2:
    return value if isinstance(value, pygame.Vector2) else pygame.Vector2(value)


@dataclass(eq=False)
class MovingEntity:
    """An entity the motion resolver advances every tick.

    Entities with a `hitbox_radius` are discs and are swept against the tile
    grid. Entities without one are points: they always move, and only report
    wall contact through `touching_wall`.

    Attributes:
        position: World position (float units)
        velocity: World units per tick
        acceleration: Added to velocity each tick; written by control/AI code
        max_speed: Velocity magnitude cap
        hitbox_radius: Disc radius, or None for a point entity
        kind: Free-form tag ("player", "basic", "bullet", "exit", ...)
        dynamic: False for entities that never move (exit triggers)
        penetrating: Point entities that survive wall contact
        touching_wall: Set by the resolver for point entities
    """
    position: pygame.Vector2
    velocity: pygame.Vector2 = field(default_factory=pygame.Vector2)
    acceleration: pygame.Vector2 = field(default_factory=pygame.Vector2)
    max_speed: float = 0.0
    hitbox_radius: Optional[float] = None
    kind: str = "entity"
    dynamic: bool = True
    penetrating: bool = False
    touching_wall: bool = False

    def __post_init__(self):
        self.position = _vec(self.position)
        self.velocity = _vec(self.velocity)
        self.acceleration = _vec(self.acceleration)

    @property
    def has_hitbox(self) -> bool:
        return self.hitbox_radius is not None

    def apply_acceleration(self) -> None:
        """Add acceleration to velocity and clamp the result to max_speed.

        Compares squared magnitudes so the common uncapped case needs no sqrt.
        """
        self.velocity += self.acceleration
        if self.velocity.length_squared() > self.max_speed * self.max_speed:
            if self.max_speed <= 0:
                self.velocity.update(0, 0)
            else:
                self.velocity.scale_to_length(self.max_speed)

    def __repr__(self) -> str:
        return (f"MovingEntity(kind={self.kind!r}, pos=({self.position.x:.2f}, {self.position.y:.2f}), "
                f"vel=({self.velocity.x:.2f}, {self.velocity.y:.2f}))")
