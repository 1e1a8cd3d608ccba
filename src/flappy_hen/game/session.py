# src/flappy_hen/game/session.py
from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from .entity import Entity, centered
from .evaluator import evaluate
from .frames import FrameScheduler
from .obstacles import ObstaclePool, Obstacles
from .simulation import step


class Phase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    TERMINATED = "terminated"


@dataclass(frozen=True)
class SessionState:
    """Read-only snapshot handed to the renderer every frame."""
    phase: Phase
    score: int
    entity: Entity
    obstacles: Obstacles
    death_cause: Optional[str] = None


class Session:
    """
    Idle -> Running -> Terminated -> Idle state machine.

    The per-frame tick is a resource owned by the Running phase: a frame is
    requested on entering Running and re-requested by every tick, and the
    pending request is cancelled as soon as the session leaves Running.
    Every transition replaces the whole SessionState.
    """
    def __init__(self, scheduler: FrameScheduler, seed: int | None = None):
        self.scheduler = scheduler
        self.pool = ObstaclePool(seed)
        self.state = self._fresh_state(Phase.IDLE)
        self.ticks = 0
        self._frame_handle: Optional[int] = None

    @property
    def seed(self) -> int:
        return self.pool.seed

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def is_ticking(self) -> bool:
        return self.scheduler.is_pending(self._frame_handle)

    def snapshot(self) -> SessionState:
        return self.state

    def _fresh_state(self, phase: Phase, entity: Entity | None = None) -> SessionState:
        return SessionState(
            phase=phase,
            score=0,
            entity=entity if entity is not None else centered(),
            obstacles=self.pool.spawn_initial(),
        )

    # -------------------- Transitions --------------------

    def activate(self) -> bool:
        """
        Primary action. Starts the game from Idle or jumps while Running.
        Returns True when a jump was applied; ignored while Terminated.
        """
        if self.state.phase is Phase.IDLE:
            self.state = self._fresh_state(Phase.RUNNING, entity=centered().jump())
            self.ticks = 0
            self._start_ticking()
            return True
        if self.state.phase is Phase.RUNNING:
            self.state = replace(self.state, entity=self.state.entity.jump())
            return True
        return False

    def restart(self) -> bool:
        """Terminated -> Idle. A further activate() is needed to play again."""
        if self.state.phase is not Phase.TERMINATED:
            return False
        self._stop_ticking()
        self.state = self._fresh_state(Phase.IDLE)
        self.ticks = 0
        return True

    def close(self) -> None:
        """Teardown: no tick may run after this."""
        self._stop_ticking()

    # -------------------- Frame loop --------------------

    def _start_ticking(self) -> None:
        self._stop_ticking()
        self._frame_handle = self.scheduler.request_frame(self._on_frame)

    def _stop_ticking(self) -> None:
        self.scheduler.cancel_frame(self._frame_handle)
        self._frame_handle = None

    def _on_frame(self) -> None:
        self._frame_handle = None
        self.tick()
        if self.state.phase is Phase.RUNNING:
            self._frame_handle = self.scheduler.request_frame(self._on_frame)

    def tick(self) -> None:
        """One simulation step plus exactly one evaluation, only while Running."""
        state = self.state
        if state.phase is not Phase.RUNNING:
            return
        entity, obstacles = step(state.entity, state.obstacles, self.pool)
        result = evaluate(entity, obstacles, state.score)
        self.ticks += 1
        self.state = SessionState(
            phase=Phase.TERMINATED if result.terminated else Phase.RUNNING,
            score=result.score,
            entity=entity,
            obstacles=result.obstacles,
            death_cause=result.cause,
        )
        if result.terminated:
            self._stop_ticking()
