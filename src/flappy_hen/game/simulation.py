# src/flappy_hen/game/simulation.py
"""
One simulation tick. The only place gravity and scroll speed are applied.
Nothing here touches the session phase or the score.
"""
from __future__ import annotations
from typing import Tuple

from .entity import Entity
from .obstacles import ObstaclePool, Obstacles


def step_entity(entity: Entity) -> Entity:
    return entity.integrate()


def step_obstacles(pool: ObstaclePool, obstacles: Obstacles) -> Obstacles:
    return pool.advance(obstacles)


def step(entity: Entity, obstacles: Obstacles, pool: ObstaclePool) -> Tuple[Entity, Obstacles]:
    """Advance the hen and the trees by one frame tick."""
    return step_entity(entity), step_obstacles(pool, obstacles)
