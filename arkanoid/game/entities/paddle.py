"""Paddle entity driven by left/right keys.

The paddle slides horizontally at a fixed speed while exactly one
direction key is held, and is clamped to the playfield every frame.
"""

from typing import TYPE_CHECKING

from ..geometry import Rect, clamp

if TYPE_CHECKING:
    from ...config import GameSettings
    from ...input.keyboard import InputState


class Paddle:
    """Keyboard-controlled paddle.

    Keeps the rectangle of the previous frame so the ball can tell a hit
    on the top face from a hit on a side face while the paddle moves.
    """

    def __init__(
        self,
        screen_width: float,
        screen_height: float,
        width: float = 70.0,
        height: float = 10.0,
        v_padding: float = 40.0,
        speed: float = 0.5,
    ):
        """Initialize paddle centered near the bottom of the screen.

        Args:
            screen_width: Screen width in pixels
            screen_height: Screen height in pixels
            width: Paddle width
            height: Paddle height
            v_padding: Gap between the paddle and the bottom of the screen
            speed: Horizontal speed in pixels per millisecond
        """
        self._screen_width = screen_width
        self._speed = speed

        x = screen_width / 2 - width / 2
        y = screen_height - height / 2 - v_padding
        self.rect = Rect(x, y, width, height)
        self.old_rect = Rect(x, y, width, height)

    @classmethod
    def from_settings(cls, settings: 'GameSettings') -> 'Paddle':
        return cls(
            settings.screen_width,
            settings.screen_height,
            width=settings.paddle_width,
            height=settings.paddle_height,
            v_padding=settings.paddle_v_padding,
            speed=settings.paddle_speed,
        )

    @property
    def min_x(self) -> float:
        return 0

    @property
    def max_x(self) -> float:
        """Largest allowed left edge."""
        return self._screen_width - self.rect.width - 1

    def update(self, keys: 'InputState', dt: float) -> None:
        """Move the paddle for one frame.

        Args:
            keys: Current key state (only left/right are read)
            dt: Elapsed time in milliseconds
        """
        self.old_rect.x = self.rect.x
        self.old_rect.y = self.rect.y

        if keys.left != keys.right:
            direction = -1 if keys.left else 1
            self.rect.x += self._speed * direction * dt

        self.rect.x = clamp(self.rect.x, self.min_x, self.max_x)
