# src/flappy_hen/game/obstacles.py
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Tuple
import pygame
from .config import (
    FIELD_HEIGHT, OBSTACLE_WIDTH, GAP_HEIGHT, SCROLL_SPEED, OBSTACLE_SPACING,
    FIRST_OBSTACLE_X, GAP_MARGIN_TOP, GAP_MARGIN_BOTTOM
)


@dataclass(frozen=True)
class Obstacle:
    """A tree pair: solid above gap_top, solid below gap_top + GAP_HEIGHT."""
    x: float
    gap_top: float
    passed: bool = False

    @property
    def right(self) -> float:
        return self.x + OBSTACLE_WIDTH

    @property
    def gap_bottom(self) -> float:
        return self.gap_top + GAP_HEIGHT

    def upper_rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), 0, OBSTACLE_WIDTH, int(self.gap_top))

    def lower_rect(self) -> pygame.Rect:
        top = int(self.gap_bottom)
        return pygame.Rect(int(self.x), top, OBSTACLE_WIDTH, FIELD_HEIGHT - top)


Obstacles = Tuple[Obstacle, Obstacle]


class ObstaclePool:
    """
    Fixed pair of trees scrolling left. A tree that leaves the field on the
    left is rebuilt OBSTACLE_SPACING to the right of the other one, so the
    stream never has a hole.
    """
    def __init__(self, seed: int | None = None):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)

    def random_gap_top(self) -> float:
        return GAP_MARGIN_TOP + self.rng.random() * (
            FIELD_HEIGHT - GAP_HEIGHT - GAP_MARGIN_TOP - GAP_MARGIN_BOTTOM
        )

    def spawn_initial(self) -> Obstacles:
        first = Obstacle(x=float(FIRST_OBSTACLE_X), gap_top=self.random_gap_top())
        second = Obstacle(x=float(FIRST_OBSTACLE_X + OBSTACLE_SPACING), gap_top=self.random_gap_top())
        return first, second

    def respawn_after(self, other: Obstacle) -> Obstacle:
        return Obstacle(x=other.x + OBSTACLE_SPACING, gap_top=self.random_gap_top())

    def advance(self, obstacles: Obstacles) -> Obstacles:
        """
        Scroll both trees by SCROLL_SPEED and recycle the expired ones.
        Slot 0 is resolved before slot 1, and slot 1 is placed relative to
        slot 0's new value, so spacing holds even if both expire together.
        """
        a, b = (Obstacle(o.x - SCROLL_SPEED, o.gap_top, o.passed) for o in obstacles)
        if a.x < -OBSTACLE_WIDTH:
            a = self.respawn_after(b)
        if b.x < -OBSTACLE_WIDTH:
            b = self.respawn_after(a)
        return a, b
