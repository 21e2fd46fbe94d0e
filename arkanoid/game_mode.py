"""Arkanoid - keyboard brick breaker.

Features:
- Paddle moved with the arrow keys, ball launched with space
- Ball angle set by where it lands on the paddle
- Pause with Esc, restart with F5 or R
- Game over when the ball reaches the ground, win when no blocks remain

The game owns the paddle, ball and board and advances them from a
periodic task on an injected Scheduler. Each tick passes the real
elapsed time, so entity displacement scales with the host timer.
"""

from typing import Optional

from .clock import Scheduler, Task
from .config import GameSettings
from .game.entities.ball import Ball, Collision
from .game.entities.block import Board
from .game.entities.paddle import Paddle
from .game.states import GameEvent, GameState, next_state
from .game.trace import DebugTrace
from .input.keyboard import InputState
from .logging import get_logger
from .skins.base import ArkanoidSkin, Overlay, Overlays, GAME_OVER_TEXT, PAUSED_TEXT, WIN_TEXT

log = get_logger('game_mode')


class ArkanoidGame:
    """Game orchestrator.

    Per tick, in order: measure elapsed time, update the current state
    (win check, paddle, ball, win check), render. The paddle always moves
    before the ball so the ball collides with this frame's paddle.
    """

    NAME = "Arkanoid"
    DESCRIPTION = "Keyboard brick breaker."
    VERSION = "1.0.0"

    def __init__(
        self,
        clock: Scheduler,
        settings: Optional[GameSettings] = None,
        skin: Optional[ArkanoidSkin] = None,
        overlays: Optional[Overlays] = None,
        keys: Optional[InputState] = None,
    ):
        """Initialize a game ready to start.

        Args:
            clock: Time source and scheduler for the loop and deferred reveals
            settings: Game settings (defaults if omitted)
            skin: Renderer; None runs headless
            overlays: Pause/game-over/win screens (the skin's if omitted)
            keys: Held-key state shared with the input source
        """
        self._clock = clock
        self._settings = settings or GameSettings()
        self._skin = skin
        self.keys = keys if keys is not None else InputState()

        if overlays is None:
            overlays = skin.create_overlays() if skin is not None else Overlays(
                paused=Overlay(*PAUSED_TEXT),
                game_over=Overlay(*GAME_OVER_TEXT),
                won=Overlay(*WIN_TEXT),
            )
        elif skin is not None:
            skin.use_overlays(overlays)
        self._overlays = overlays

        if skin is not None:
            self._trace = skin.trace
        else:
            self._trace = DebugTrace(
                self._settings.trace.debug_trace,
                self._settings.trace.max_points,
            )

        self._loop_task: Optional[Task] = None
        self._reveal_task: Optional[Task] = None
        self._last_update = clock.now()

        self._state = GameState.RUNNING
        self._board: Board
        self._paddle: Paddle
        self._ball: Ball
        self._init_round()

    def _init_round(self) -> None:
        """Create a fresh board, paddle and ball."""
        self._board = Board.from_settings(self._settings)
        self._paddle = Paddle.from_settings(self._settings)
        self._trace.clear()
        self._ball = Ball.from_settings(self._settings, self._paddle, self._board, self._trace)
        self._state = GameState.RUNNING

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def paddle(self) -> Paddle:
        return self._paddle

    @property
    def ball(self) -> Ball:
        return self._ball

    @property
    def board(self) -> Board:
        return self._board

    @property
    def overlays(self) -> Overlays:
        return self._overlays

    @property
    def trace(self) -> DebugTrace:
        return self._trace

    @property
    def is_looping(self) -> bool:
        """Whether the periodic loop task is scheduled."""
        return self._loop_task is not None and self._loop_task.is_active

    # -- Loop ---------------------------------------------------------------

    def start(self) -> None:
        """Schedule the loop at the configured frame rate."""
        if self.is_looping:
            return
        self._last_update = self._clock.now()
        self._loop_task = self._clock.call_every(self._settings.tick_interval_ms, self.loop)
        log.info("Loop started at %d FPS", self._settings.fps)

    def stop(self) -> None:
        """Cancel the loop task."""
        if self._loop_task is not None:
            self._loop_task.cancel()
            self._loop_task = None
            log.info("Loop stopped")

    def loop(self) -> None:
        delta_time = self.tick()
        self.update(delta_time)
        # A terminal transition already drew the final frame and halted the loop
        if not self._state.is_terminal:
            self.render()

    def tick(self) -> float:
        """Milliseconds elapsed since the previous tick."""
        now = self._clock.now()
        delta_time = now - self._last_update
        self._last_update = now
        return delta_time

    def update(self, delta_time: float) -> None:
        """Advance the current state by delta_time milliseconds.

        Only RUNNING does anything; PAUSED and the terminal states are no-ops.
        """
        if not self._state.updates_entities:
            return

        log.trace("tick dt=%.2f", delta_time)

        if self.check_win_state():
            return

        self._paddle.update(self.keys, delta_time)
        collision = self._ball.update(self.keys, delta_time)

        if collision is Collision.GROUND:
            self.game_over()
            return

        self.check_win_state()

    def render(self) -> None:
        if self._skin is not None:
            self._skin.render(self._paddle, self._ball, self._board)

    # -- Transitions ----------------------------------------------------------

    def _transition(self, event: GameEvent) -> bool:
        """Apply event to the state machine.

        Returns:
            True if the state changed
        """
        new_state = next_state(self._state, event)
        if new_state is self._state:
            log.debug("Ignoring %s in state %s", event.value, self._state.value)
            return False
        log.info("State %s -> %s", self._state.value, new_state.value)
        self._state = new_state
        return True

    def check_win_state(self) -> bool:
        """Enter WON if every block is destroyed.

        Returns:
            True if the game was won by this call
        """
        if self._state is GameState.RUNNING and self._board.is_cleared():
            self.win()
            return True
        return False

    def on_pause_pressed(self) -> None:
        """Toggle pause. Does nothing once the game has ended."""
        if self._state is GameState.RUNNING:
            self.pause_game()
        elif self._state is GameState.PAUSED:
            self.resume_game()
        else:
            log.debug("Pause ignored in state %s", self._state.value)

    def pause_game(self) -> None:
        if self._state is GameState.RUNNING and self._transition(GameEvent.PAUSE_PRESSED):
            self._overlays.paused.show()

    def resume_game(self) -> None:
        if self._state is GameState.PAUSED and self._transition(GameEvent.PAUSE_PRESSED):
            self._overlays.paused.hide()

    def game_over(self) -> None:
        self._end(GameEvent.BALL_LOST, self._overlays.game_over)

    def win(self) -> None:
        self._end(GameEvent.BOARD_CLEARED, self._overlays.won)

    def _end(self, event: GameEvent, overlay: Overlay) -> None:
        """Draw the final frame, halt the loop and reveal overlay after a delay."""
        if not self._transition(event):
            return
        self.render()
        self.stop()
        self._reveal_task = self._clock.call_later(self._settings.reveal_delay_ms, overlay.show)

    def reset(self) -> None:
        """Start a new game from scratch, restarting the loop if it was halted."""
        if self._reveal_task is not None:
            self._reveal_task.cancel()
            self._reveal_task = None
        self._overlays.hide_all()
        self._init_round()
        log.info("Game reset")

        self._last_update = self._clock.now()
        if not self.is_looping:
            self.start()
        self.render()
