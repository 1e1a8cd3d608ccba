# src/flappy_hen/game/entity.py
from __future__ import annotations
from dataclasses import dataclass, replace
import pygame
from .config import (
    FIELD_HEIGHT, ENTITY_X, ENTITY_SIZE, START_Y, GRAVITY, JUMP_IMPULSE
)

MAX_Y = FIELD_HEIGHT - ENTITY_SIZE


@dataclass(frozen=True)
class Entity:
    """
    The falling hen. Only vertical state; x is fixed at ENTITY_X.
    - position: top edge, screen coordinates (grows downward)
    - velocity: px per tick, positive = falling
    """
    position: float = START_Y
    velocity: float = 0.0

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(ENTITY_X, int(self.position), ENTITY_SIZE, ENTITY_SIZE)

    def integrate(self) -> "Entity":
        """One tick: move by the current velocity (clipped to the field), then add gravity."""
        y = self.position + self.velocity
        if y < 0:
            y = 0.0
        if y > MAX_Y:
            y = float(MAX_Y)
        return Entity(position=y, velocity=self.velocity + GRAVITY)

    def jump(self) -> "Entity":
        # Impulse replaces velocity, it never accumulates
        return replace(self, velocity=-JUMP_IMPULSE)


def centered() -> Entity:
    return Entity(position=START_Y, velocity=0.0)
