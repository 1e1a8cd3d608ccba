# src/flappy_hen/game/evaluator.py
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .config import FIELD_HEIGHT, ENTITY_X, ENTITY_SIZE, OBSTACLE_WIDTH, GAP_HEIGHT
from .entity import Entity, MAX_Y
from .obstacles import Obstacle, Obstacles


@dataclass(frozen=True)
class Box:
    left: float
    right: float
    top: float
    bottom: float


@dataclass(frozen=True)
class Evaluation:
    terminated: bool
    score: int
    obstacles: Obstacles
    cause: Optional[str] = None     # "obstacle" | "bounds" | None


def entity_box(entity: Entity) -> Box:
    return Box(
        left=ENTITY_X,
        right=ENTITY_X + ENTITY_SIZE,
        top=entity.position,
        bottom=entity.position + ENTITY_SIZE,
    )


def obstacle_boxes(obstacle: Obstacle) -> Tuple[Box, Box]:
    """(upper body, lower body) of a tree pair."""
    upper = Box(obstacle.x, obstacle.x + OBSTACLE_WIDTH, 0.0, obstacle.gap_top)
    lower = Box(obstacle.x, obstacle.x + OBSTACLE_WIDTH, obstacle.gap_top + GAP_HEIGHT, float(FIELD_HEIGHT))
    return upper, lower


def overlaps(a: Box, b: Box) -> bool:
    """Strict AABB overlap: touching edges do not collide."""
    return a.right > b.left and a.left < b.right and a.bottom > b.top and a.top < b.bottom


def hits_obstacle(entity: Entity, obstacle: Obstacle) -> bool:
    me = entity_box(entity)
    upper, lower = obstacle_boxes(obstacle)
    return overlaps(me, upper) or overlaps(me, lower)


def out_of_bounds(entity: Entity) -> bool:
    # Clamped positions sit exactly on the bounds, so they are always terminal
    return entity.position <= 0 or entity.position >= MAX_Y


def evaluate(entity: Entity, obstacles: Obstacles, score: int,
             already_terminated: bool = False) -> Evaluation:
    """
    Collision and scoring for one post-tick state.
    Collision wins: if this pass terminates the session, no tree is marked
    passed and the score is left as it was. Inputs are never mutated.
    """
    if already_terminated:
        return Evaluation(True, score, obstacles)

    cause = None
    if any(hits_obstacle(entity, o) for o in obstacles):
        cause = "obstacle"
    elif out_of_bounds(entity):
        cause = "bounds"
    if cause is not None:
        return Evaluation(True, score, obstacles, cause)

    left = entity_box(entity).left
    updated = []
    for o in obstacles:
        if not o.passed and o.right < left:
            o = replace(o, passed=True)
            score += 1
        updated.append(o)
    return Evaluation(False, score, tuple(updated))
