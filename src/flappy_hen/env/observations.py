# src/flappy_hen/env/observations.py
from __future__ import annotations
from typing import Optional
import numpy as np

from ..game.config import (
    FIELD_WIDTH, FIELD_HEIGHT, ENTITY_X, ENTITY_SIZE, GAP_HEIGHT, JUMP_IMPULSE,
    OBSTACLE_SPACING
)
from ..game.obstacles import Obstacle, Obstacles
from ..game.session import SessionState

# Velocity range used for normalization: jumps set -JUMP_IMPULSE, falls rarely exceed this
MAX_ABS_V = 3 * JUMP_IMPULSE
# Farthest a "next" tree can be: the initial spawn, FIELD_WIDTH + 100 + spacing
MAX_DX = FIELD_WIDTH + 100 + OBSTACLE_SPACING

OBS_SIZE = 6
OBS_LOW = np.array([0.0, -1.0, 0.0, 0.0, 0.0, -1.0], dtype=np.float32)
OBS_HIGH = np.array([1.0, 1.0, 1.0, 1.0, 1.0, 1.0], dtype=np.float32)


def _clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else (hi if x > hi else x)


def next_obstacle(obstacles: Obstacles) -> Optional[Obstacle]:
    """Nearest tree whose right edge has not yet gone past the hen."""
    ahead = [o for o in obstacles if o.right >= ENTITY_X]
    if not ahead:
        return None
    return min(ahead, key=lambda o: o.x)


def build_observation(state: SessionState) -> np.ndarray:
    """
    Returns a fixed (6,) float32 vector:
      [ y_top_norm, v_norm, dx_norm, gap_top_norm, gap_bottom_norm, gap_offset_norm ]
    - y_top_norm      in [0,1]  hen top over [0, FIELD_HEIGHT - ENTITY_SIZE]
    - v_norm          in [-1,1] velocity over MAX_ABS_V
    - dx_norm         in [0,1]  next tree left edge minus hen x, over MAX_DX
    - gap_top/bottom  in [0,1]  screen-space, sentinel (0, 1) when no tree ahead
    - gap_offset_norm in [-1,1] hen center minus gap center, over FIELD_HEIGHT
    """
    entity = state.entity
    y_norm = _clamp(entity.position / max(1, FIELD_HEIGHT - ENTITY_SIZE), 0.0, 1.0)
    v_norm = _clamp(entity.velocity / MAX_ABS_V, -1.0, 1.0)

    ob = next_obstacle(state.obstacles)
    center = entity.position + ENTITY_SIZE / 2
    if ob is None:
        dx_norm, top_norm, bot_norm = 1.0, 0.0, 1.0
        offset = 0.0
    else:
        dx_norm = _clamp((ob.x - ENTITY_X) / MAX_DX, 0.0, 1.0)
        top_norm = _clamp(ob.gap_top / FIELD_HEIGHT, 0.0, 1.0)
        bot_norm = _clamp((ob.gap_top + GAP_HEIGHT) / FIELD_HEIGHT, 0.0, 1.0)
        offset = _clamp((center - (ob.gap_top + GAP_HEIGHT / 2)) / FIELD_HEIGHT, -1.0, 1.0)

    return np.asarray([y_norm, v_norm, dx_norm, top_norm, bot_norm, offset], dtype=np.float32)
