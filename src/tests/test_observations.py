# src/tests/test_observations.py
import numpy as np

from flappy_hen.game.entity import Entity, MAX_Y
from flappy_hen.game.obstacles import Obstacle
from flappy_hen.game.session import Phase, SessionState
from flappy_hen.env.observations import (
    build_observation, next_obstacle, OBS_LOW, OBS_HIGH, OBS_SIZE
)


def state(entity, obstacles):
    return SessionState(phase=Phase.RUNNING, score=0, entity=entity, obstacles=obstacles)


def test_shape_dtype_and_range():
    obs = build_observation(state(Entity(300.0, 2.0), (Obstacle(150.0, 200.0), Obstacle(350.0, 100.0))))
    assert isinstance(obs, np.ndarray) and obs.dtype == np.float32 and obs.shape == (OBS_SIZE,)
    assert np.all(obs >= OBS_LOW) and np.all(obs <= OBS_HIGH)


def test_extremes_stay_in_range():
    for e in (Entity(0.0, -50.0), Entity(MAX_Y, 80.0)):
        obs = build_observation(state(e, (Obstacle(-60.0, 60.0), Obstacle(140.0, 380.0))))
        assert np.all(obs >= OBS_LOW) and np.all(obs <= OBS_HIGH)


def test_next_obstacle_skips_passed_trees():
    behind, ahead = Obstacle(-10.0, 100.0), Obstacle(190.0, 300.0)
    assert next_obstacle((behind, ahead)) is ahead
    assert next_obstacle((ahead, behind)) is ahead
    # a tree still overlapping the hen counts as ahead
    over = Obstacle(20.0, 100.0)
    assert next_obstacle((over, Obstacle(220.0, 100.0))) is over


def test_gap_offset_sign():
    ob = Obstacle(200.0, 200.0)     # gap center 280
    below = build_observation(state(Entity(400.0, 0.0), (ob, Obstacle(400.0, 200.0))))
    above = build_observation(state(Entity(100.0, 0.0), (ob, Obstacle(400.0, 200.0))))
    assert below[5] > 0 > above[5]


def test_no_tree_ahead_sentinels():
    obs = build_observation(state(Entity(300.0, 0.0), (Obstacle(-40.0, 100.0), Obstacle(-30.0, 100.0))))
    assert obs[2] == 1.0 and obs[3] == 0.0 and obs[4] == 1.0 and obs[5] == 0.0
