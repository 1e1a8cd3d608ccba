# src/flappy_hen/game/input_router.py
from __future__ import annotations
from enum import Enum
from typing import Callable, Optional
import pygame
from pygame import K_SPACE, K_r

from .config import FIELD_WIDTH, FIELD_HEIGHT, BUTTON_W, BUTTON_H
from .session import Phase, Session

RESTART_BUTTON = pygame.Rect((FIELD_WIDTH - BUTTON_W) // 2, FIELD_HEIGHT // 2 + 40, BUTTON_W, BUTTON_H)
PLAY_FIELD = pygame.Rect(0, 0, FIELD_WIDTH, FIELD_HEIGHT)


class Action(Enum):
    ACTIVATE = "activate"
    RESTART = "restart"


class InputRouter:
    """
    Turns pygame events into session transitions.
    Build one per window and feed it every event; it holds no per-frame state.

    SPACE  : start / jump, or restart once the game is over
    click  : start / jump inside the field; after game over only the
             restart button reacts
    R      : restart after game over
    """
    def __init__(self, session: Session, on_jump: Optional[Callable[[], None]] = None):
        self.session = session
        self.on_jump = on_jump

    def map_event(self, event) -> Optional[Action]:
        over = self.session.phase is Phase.TERMINATED
        if event.type == pygame.KEYDOWN:
            if event.key == K_SPACE:
                return Action.RESTART if over else Action.ACTIVATE
            if event.key == K_r and over:
                return Action.RESTART
            return None
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if not PLAY_FIELD.collidepoint(event.pos):
                return None
            if over:
                return Action.RESTART if RESTART_BUTTON.collidepoint(event.pos) else None
            return Action.ACTIVATE
        return None

    def dispatch(self, action: Action) -> bool:
        """Apply one action to the session. Returns True if the session changed."""
        if action is Action.RESTART:
            return self.session.restart()
        jumped = self.session.activate()
        if jumped and self.on_jump is not None:
            self.on_jump()
        return jumped

    def handle_event(self, event) -> Optional[Action]:
        action = self.map_event(event)
        if action is not None:
            self.dispatch(action)
        return action
