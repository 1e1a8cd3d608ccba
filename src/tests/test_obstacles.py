# src/tests/test_obstacles.py
"""
Tree pool: gap placement bounds, scrolling, recycling and spacing.

Usage (from repo root):
  pytest src/tests/test_obstacles.py
"""
from flappy_hen.game.config import (
    FIELD_HEIGHT, GAP_HEIGHT, GAP_MARGIN_TOP, GAP_MARGIN_BOTTOM,
    OBSTACLE_SPACING, OBSTACLE_WIDTH, FIRST_OBSTACLE_X, SCROLL_SPEED
)
from flappy_hen.game.obstacles import Obstacle, ObstaclePool


def _in_bounds(gap_top: float) -> bool:
    return GAP_MARGIN_TOP <= gap_top <= FIELD_HEIGHT - GAP_HEIGHT - GAP_MARGIN_BOTTOM


def test_gap_top_always_passable():
    pool = ObstaclePool(seed=7)
    for _ in range(5000):
        assert _in_bounds(pool.random_gap_top())


def test_initial_pair():
    a, b = ObstaclePool(seed=1).spawn_initial()
    assert a.x == FIRST_OBSTACLE_X
    assert b.x == FIRST_OBSTACLE_X + OBSTACLE_SPACING
    assert not a.passed and not b.passed
    assert _in_bounds(a.gap_top) and _in_bounds(b.gap_top)


def test_same_seed_same_layout():
    p1, p2 = ObstaclePool(seed=99), ObstaclePool(seed=99)
    assert p1.spawn_initial() == p2.spawn_initial()
    assert [p1.random_gap_top() for _ in range(10)] == [p2.random_gap_top() for _ in range(10)]


def test_unseeded_pool_resolves_a_seed():
    pool = ObstaclePool(None)
    assert isinstance(pool.seed, int)


def test_advance_scrolls_and_keeps_flags():
    pool = ObstaclePool(seed=3)
    a, b = Obstacle(100.0, 150.0, passed=True), Obstacle(300.0, 220.0)
    na, nb = pool.advance((a, b))
    assert na == Obstacle(100.0 - SCROLL_SPEED, 150.0, True)
    assert nb == Obstacle(300.0 - SCROLL_SPEED, 220.0, False)
    # originals untouched
    assert a.x == 100.0 and b.x == 300.0


def test_recycle_places_tree_after_the_other():
    pool = ObstaclePool(seed=5)
    old = Obstacle(-59.0, 100.0, passed=True)
    other = Obstacle(141.0, 200.0)
    na, nb = pool.advance((old, other))
    assert nb.x == 139.0
    assert na.x == nb.x + OBSTACLE_SPACING
    assert na.passed is False
    assert _in_bounds(na.gap_top)


def test_tree_at_exact_edge_is_not_recycled():
    pool = ObstaclePool(seed=5)
    na, _ = pool.advance((Obstacle(-OBSTACLE_WIDTH + SCROLL_SPEED, 100.0), Obstacle(200.0, 100.0)))
    assert na.x == -OBSTACLE_WIDTH


def test_both_expire_same_tick_keeps_spacing():
    pool = ObstaclePool(seed=11)
    na, nb = pool.advance((Obstacle(-59.0, 100.0), Obstacle(-59.5, 120.0)))
    # slot 0 is rebuilt first from slot 1's scrolled value, slot 1 from slot 0's new value
    assert na.x == -61.5 + OBSTACLE_SPACING
    assert nb.x == na.x + OBSTACLE_SPACING
    assert abs(na.x - nb.x) == OBSTACLE_SPACING


def test_spacing_invariant_over_long_run():
    pool = ObstaclePool(seed=2024)
    obs = pool.spawn_initial()
    recycled = 0
    for _ in range(5000):
        before = obs
        obs = pool.advance(obs)
        recycled += sum(1 for o_old, o_new in zip(before, obs) if o_new.x > o_old.x)
        assert abs(obs[0].x - obs[1].x) == OBSTACLE_SPACING
        assert all(o.x >= -OBSTACLE_WIDTH for o in obs)
        assert all(_in_bounds(o.gap_top) for o in obs)
    assert recycled > 10
