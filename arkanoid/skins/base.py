"""Base classes for Arkanoid skins and overlay screens.

Skins handle ALL rendering - the game only manages state.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterator, List, Optional

from ..game.trace import DebugTrace
from ..logging import get_logger

if TYPE_CHECKING:
    from ..game.entities.ball import Ball
    from ..game.entities.block import Block, Board
    from ..game.entities.paddle import Paddle

log = get_logger('skin')

PAUSED_TEXT = ("PAUSED", '(Press "Esc")')
GAME_OVER_TEXT = ("GAME OVER", '(Press "F5" to restart)')
WIN_TEXT = ("YOU WIN", '(Press "F5" to restart)')


class Overlay:
    """A message screen shown over the playfield.

    show() and hide() only toggle visibility; the skin draws visible
    overlays on top of each frame. An optional on_show callback lets a
    skin paint the overlay immediately, e.g. after the loop has halted.
    """

    def __init__(
        self,
        title: str,
        subtitle: str = "",
        on_show: Optional[Callable[['Overlay'], None]] = None,
    ):
        self.title = title
        self.subtitle = subtitle
        self._on_show = on_show
        self._visible = False

    @property
    def is_visible(self) -> bool:
        return self._visible

    def show(self) -> None:
        self._visible = True
        log.debug("Showing overlay %r", self.title)
        if self._on_show is not None:
            self._on_show(self)

    def hide(self) -> None:
        self._visible = False

    def __repr__(self) -> str:
        return f"Overlay({self.title!r}, visible={self._visible})"


@dataclass
class Overlays:
    """The three end/pause screens a game can reveal."""
    paused: Overlay
    game_over: Overlay
    won: Overlay

    def __iter__(self) -> Iterator[Overlay]:
        return iter((self.paused, self.game_over, self.won))

    def hide_all(self) -> None:
        for overlay in self:
            overlay.hide()


class ArkanoidSkin(ABC):
    """Base class for game skins.

    Owns the debug trace so the path drawing stays a rendering concern.
    render() draws one complete frame in a fixed order: background,
    paddle, active blocks, ball, debug path, visible overlays.
    """

    NAME: str = "base"
    DESCRIPTION: str = "Base skin"

    def __init__(self, trace: Optional[DebugTrace] = None):
        self.trace = trace if trace is not None else DebugTrace()
        self._overlays: List[Overlay] = []

    def create_overlays(self) -> Overlays:
        """Create the pause, game-over and win overlays for this skin."""
        overlays = Overlays(
            paused=self.make_overlay(*PAUSED_TEXT),
            game_over=self.make_overlay(*GAME_OVER_TEXT),
            won=self.make_overlay(*WIN_TEXT),
        )
        self.use_overlays(overlays)
        return overlays

    def use_overlays(self, overlays: Overlays) -> None:
        """Draw these overlays on top of each frame while they are visible."""
        self._overlays = list(overlays)

    def make_overlay(self, title: str, subtitle: str) -> Overlay:
        """Create one overlay; skins override this to paint on show()."""
        return Overlay(title, subtitle)

    def render(self, paddle: 'Paddle', ball: 'Ball', board: 'Board') -> None:
        """Render a full frame.

        Args:
            paddle: Paddle to draw
            ball: Ball to draw
            board: Board whose active blocks are drawn
        """
        self.render_background()
        self.render_paddle(paddle)
        for block in board.get_active_blocks():
            self.render_block(block)
        self.render_ball(ball)
        if self.trace.enabled and len(self.trace) > 1:
            self.render_trace(self.trace.points())
        for overlay in self._overlays:
            if overlay.is_visible:
                self.render_overlay(overlay)
        self.present()

    @abstractmethod
    def render_background(self) -> None:
        pass

    @abstractmethod
    def render_paddle(self, paddle: 'Paddle') -> None:
        pass

    @abstractmethod
    def render_ball(self, ball: 'Ball') -> None:
        """Render the ball at its nominal (not effective) radius."""
        pass

    @abstractmethod
    def render_block(self, block: 'Block') -> None:
        pass

    def render_trace(self, points: list) -> None:
        """Render the recorded ball path as a polyline."""
        pass

    def render_overlay(self, overlay: Overlay) -> None:
        pass

    def present(self) -> None:
        """Make the finished frame visible."""
        pass
