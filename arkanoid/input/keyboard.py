"""Keyboard input for Arkanoid.

Translates pygame key events into held-key state (launch, left, right)
and one-shot commands (pause, restart, quit).
"""

from dataclasses import dataclass
from typing import Callable, Optional

import pygame

from ..logging import get_logger

log = get_logger('keyboard')


@dataclass
class InputState:
    """Keys currently held down.

    Attributes:
        launch: Launch key (releases the ball from the paddle)
        left: Move-left key
        right: Move-right key
    """
    launch: bool = False
    left: bool = False
    right: bool = False


class Keyboard:
    """Tracks key state from pygame events.

    Held keys are exposed through ``state``. Pause, restart and quit are
    edge-triggered: the callback fires once per key press and held-key
    repeats are ignored.
    """

    LAUNCH_KEYS = (pygame.K_SPACE,)
    LEFT_KEYS = (pygame.K_LEFT,)
    RIGHT_KEYS = (pygame.K_RIGHT,)
    PAUSE_KEYS = (pygame.K_ESCAPE,)
    RESTART_KEYS = (pygame.K_F5, pygame.K_r)
    QUIT_KEYS = (pygame.K_q,)

    def __init__(
        self,
        state: Optional[InputState] = None,
        on_pause: Optional[Callable[[], None]] = None,
        on_restart: Optional[Callable[[], None]] = None,
        on_quit: Optional[Callable[[], None]] = None,
    ):
        self.state = state if state is not None else InputState()
        self._on_pause = on_pause
        self._on_restart = on_restart
        self._on_quit = on_quit
        self._down: set = set()

    def handle_event(self, event: pygame.event.Event) -> None:
        """Update state from a single pygame event."""
        if event.type == pygame.QUIT:
            self._fire(self._on_quit)
        elif event.type == pygame.KEYDOWN:
            self._on_key_down(event.key)
        elif event.type == pygame.KEYUP:
            self._on_key_up(event.key)

    def _on_key_down(self, key: int) -> None:
        repeat = key in self._down
        self._down.add(key)

        if key in self.PAUSE_KEYS:
            if not repeat:
                self._fire(self._on_pause)
            return
        if key in self.RESTART_KEYS:
            if not repeat:
                self.reset()
                self._fire(self._on_restart)
            return
        if key in self.QUIT_KEYS:
            self._fire(self._on_quit)
            return

        self._set(key, True)

    def _on_key_up(self, key: int) -> None:
        self._down.discard(key)
        self._set(key, False)

    def _set(self, key: int, pressed: bool) -> None:
        if key in self.LAUNCH_KEYS:
            self.state.launch = pressed
        elif key in self.LEFT_KEYS:
            self.state.left = pressed
        elif key in self.RIGHT_KEYS:
            self.state.right = pressed

    @staticmethod
    def _fire(callback: Optional[Callable[[], None]]) -> None:
        if callback is not None:
            callback()

    def reset(self) -> None:
        """Release launch and movement keys, e.g. on restart.

        The state object is kept so holders stay in sync. Command keys stay
        down, so a held restart key does not fire again.
        """
        self.state.launch = False
        self.state.left = False
        self.state.right = False
        self._down.difference_update(self.LAUNCH_KEYS + self.LEFT_KEYS + self.RIGHT_KEYS)
