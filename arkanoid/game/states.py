"""Game states and the transition table between them.

States:
    RUNNING: Paddle and ball update every tick
    PAUSED: Nothing updates; only the pause key leaves this state
    GAME_OVER: Terminal, the ball reached the ground
    WON: Terminal, every block is destroyed

Usage:
    from arkanoid.game.states import GameState, GameEvent, next_state

    state = next_state(GameState.RUNNING, GameEvent.PAUSE_PRESSED)
    # GameState.PAUSED

Pairs missing from TRANSITIONS leave the state unchanged, so e.g. the
pause key does nothing once the game has ended.
"""

from enum import Enum
from typing import Dict, FrozenSet, Tuple


class GameState(Enum):
    """Current phase of the game."""
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    WON = "won"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATES

    @property
    def updates_entities(self) -> bool:
        """Whether paddle and ball advance while in this state."""
        return self is GameState.RUNNING


class GameEvent(Enum):
    """Inputs to the state machine."""
    PAUSE_PRESSED = "pause_pressed"
    BALL_LOST = "ball_lost"
    BOARD_CLEARED = "board_cleared"


TERMINAL_STATES: FrozenSet[GameState] = frozenset({GameState.GAME_OVER, GameState.WON})

TRANSITIONS: Dict[Tuple[GameState, GameEvent], GameState] = {
    (GameState.RUNNING, GameEvent.PAUSE_PRESSED): GameState.PAUSED,
    (GameState.PAUSED, GameEvent.PAUSE_PRESSED): GameState.RUNNING,
    (GameState.RUNNING, GameEvent.BALL_LOST): GameState.GAME_OVER,
    (GameState.RUNNING, GameEvent.BOARD_CLEARED): GameState.WON,
}


def next_state(state: GameState, event: GameEvent) -> GameState:
    """Look up the state that follows state on event.

    Args:
        state: Current state
        event: Event that occurred

    Returns:
        The new state, or state itself if the event has no effect
    """
    return TRANSITIONS.get((state, event), state)
