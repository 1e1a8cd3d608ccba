# src/flappy_hen/env/flappy_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from ..game.config import FIELD_WIDTH, FIELD_HEIGHT, FPS
from ..game.frames import FrameScheduler
from ..game.session import Phase, Session
from ..game.game import draw
from .observations import build_observation, OBS_LOW, OBS_HIGH


class FlappyEnv(gym.Env):
    """
    Flappy Hen Gymnasium environment (vector observations).
    - One simulation tick per frame, FPS frames per second.
    - Agent acts every `frame_skip` frames (default 2).
    - reset() starts a run the way a player does (first activation = a jump).
    - Actions: 0 = NOOP, 1 = FLAP.
    - Observation: shape (6,), float32 (see observations.build_observation).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 2,
                 time_limit_seconds: Optional[float] = 60.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unknown render_mode {render_mode}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            # decisions per second = FPS / frame_skip
            self.time_limit_decisions = int(FPS * time_limit_seconds / self.frame_skip)

        # --- Gym spaces ---
        self.action_space = gym.spaces.Discrete(2)
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH, dtype=np.float32)

        # --- Runtime state ---
        self.scheduler: Optional[FrameScheduler] = None
        self.session: Optional[Session] = None
        self.timestep: int = 0          # number of *decision* steps elapsed
        self.current_seed: Optional[int] = None

        # Rendering
        self.screen = None
        self.clock = None
        self.font = None
        self.big_font = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # The tree layout seed comes from the env RNG so unseeded resets stay reproducible
        layout_seed = int(seed) if seed is not None else int(self.np_random.integers(0, 2**31 - 1))

        if self.session is not None:
            self.session.close()
        self.scheduler = FrameScheduler()
        self.session = Session(self.scheduler, seed=layout_seed)
        self.session.activate()

        self.timestep = 0
        self.current_seed = self.session.seed

        obs = self._get_obs()
        info = {"seed": self.current_seed, "score": 0}
        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.session is not None and self.scheduler is not None, "Call reset() first."

        if int(action) == 1:
            self.session.activate()

        score_before = self.session.state.score
        for _ in range(self.frame_skip):
            self.scheduler.run_frame()
            if self.session.phase is not Phase.RUNNING:
                break

        state = self.session.snapshot()
        alive = state.phase is Phase.RUNNING
        reward = 1.0 if alive else -1.0

        self.timestep += 1
        terminated = not alive
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        obs = self._get_obs()
        info = {
            "score": state.score,
            "passed": state.score - score_before,
            "ticks": self.session.ticks,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "death_cause": state.death_cause,
        }

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.session is not None
        return build_observation(self.session.snapshot())

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.session is None:
            return None

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((FIELD_WIDTH, FIELD_HEIGHT))
                pygame.display.set_caption("Flappy Hen: Gym Env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface((FIELD_WIDTH, FIELD_HEIGHT))
            self.font = pygame.font.SysFont("jetbrainsmono", 20)
            self.big_font = pygame.font.SysFont("jetbrainsmono", 30, bold=True)

        draw(self.screen, self.session.snapshot(), self.font, self.big_font)

        if self.render_mode == "human":
            # Pump the event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            if self.clock is not None:
                self.clock.tick(self.metadata["render_fps"])
            return None

        # (H, W, 3) uint8
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.session is not None:
            self.session.close()
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
