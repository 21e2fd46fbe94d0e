"""Classic skin - white field, black paddle, colored blocks."""

from typing import TYPE_CHECKING, List, Optional, Tuple

import pygame

from ..config import BACKGROUND_COLOR, BLOCK_COLORS
from ..game.trace import DebugTrace
from .base import ArkanoidSkin, Overlay

if TYPE_CHECKING:
    from ..game.entities.ball import Ball
    from ..game.entities.block import Block
    from ..game.entities.paddle import Paddle


class ClassicSkin(ArkanoidSkin):
    """Renders the game with flat pygame shapes.

    - Paddle: Black rectangle
    - Ball: Black ring drawn at the nominal radius
    - Blocks: Filled with their row color, black outline
    - Debug path: Thin green polyline
    - Overlays: Dimmed panel with a title and a hint line
    """

    NAME = "classic"
    DESCRIPTION = "Flat shapes on a white field"

    PADDLE_COLOR = (0, 0, 0)
    BALL_COLOR = (0, 0, 0)
    BLOCK_OUTLINE = (0, 0, 0)
    TRACE_COLOR = (0, 160, 0)
    OVERLAY_COLOR = (0, 0, 0, 160)
    OVERLAY_TEXT_COLOR = (255, 255, 255)

    def __init__(self, screen: pygame.Surface, trace: Optional[DebugTrace] = None):
        """Initialize classic skin.

        Args:
            screen: Surface to draw on (the display surface in the real game)
            trace: Debug trace to draw, if enabled
        """
        super().__init__(trace)
        self._screen = screen
        self._title_font: Optional[pygame.font.Font] = None
        self._hint_font: Optional[pygame.font.Font] = None

    @property
    def screen(self) -> pygame.Surface:
        return self._screen

    def _ensure_fonts(self) -> None:
        """Ensure fonts are initialized."""
        if self._title_font is None:
            pygame.font.init()
            self._title_font = pygame.font.Font(None, 64)
            self._hint_font = pygame.font.Font(None, 28)

    def _get_block_color(self, block: 'Block') -> Tuple[int, int, int]:
        return BLOCK_COLORS.get(block.color, (128, 128, 128))

    def make_overlay(self, title: str, subtitle: str) -> Overlay:
        return Overlay(title, subtitle, on_show=self._paint_overlay)

    def _paint_overlay(self, overlay: Overlay) -> None:
        """Draw an overlay over the last frame right away."""
        self.render_overlay(overlay)
        self.present()

    def render_background(self) -> None:
        self._screen.fill(BACKGROUND_COLOR)

    def render_paddle(self, paddle: 'Paddle') -> None:
        pygame.draw.rect(self._screen, self.PADDLE_COLOR, paddle.rect.as_tuple())

    def render_ball(self, ball: 'Ball') -> None:
        pygame.draw.circle(
            self._screen,
            self.BALL_COLOR,
            (round(ball.x), round(ball.y)),
            round(ball.radius),
            max(1, round(ball.line_width)),
        )

    def render_block(self, block: 'Block') -> None:
        rect = block.rect.as_tuple()
        pygame.draw.rect(self._screen, self._get_block_color(block), rect)
        pygame.draw.rect(self._screen, self.BLOCK_OUTLINE, rect, 1)

    def render_trace(self, points: List[Tuple[float, float]]) -> None:
        pygame.draw.lines(self._screen, self.TRACE_COLOR, False, points, 1)

    def render_overlay(self, overlay: Overlay) -> None:
        """Render a translucent panel with the overlay text."""
        self._ensure_fonts()
        width, height = self._screen.get_size()

        panel = pygame.Surface((width, height), pygame.SRCALPHA)
        panel.fill(self.OVERLAY_COLOR)
        self._screen.blit(panel, (0, 0))

        title = self._title_font.render(overlay.title, True, self.OVERLAY_TEXT_COLOR)
        self._screen.blit(title, title.get_rect(center=(width // 2, height // 2 - 20)))

        if overlay.subtitle:
            hint = self._hint_font.render(overlay.subtitle, True, self.OVERLAY_TEXT_COLOR)
            self._screen.blit(hint, hint.get_rect(center=(width // 2, height // 2 + 30)))

    def present(self) -> None:
        # Off-screen surfaces (tests, screenshots) have nothing to flip
        if pygame.display.get_init() and pygame.display.get_surface() is self._screen:
            pygame.display.flip()
