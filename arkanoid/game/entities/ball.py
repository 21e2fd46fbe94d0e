"""Ball entity with angle-based movement and collision resolution.

The ball starts attached to the paddle and rides on it until the launch
key is pressed. Once free it moves at a constant per-axis speed scaled
by sin/cos of its launch angle and flipped by its per-axis direction.
Bounce angle off the paddle depends on where the ball lands.
"""

import math
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Optional

from ...logging import get_logger
from ..geometry import Rect, circle_intersects_rectangle

if TYPE_CHECKING:
    from ...config import GameSettings
    from ...input.keyboard import InputState
    from ..trace import DebugTrace
    from .block import Block, Board
    from .paddle import Paddle

log = get_logger('ball')


class XDirection(IntEnum):
    """Horizontal direction sign."""
    LEFT = -1
    RIGHT = 1


class YDirection(IntEnum):
    """Vertical direction sign (screen y grows downward)."""
    UP = -1
    DOWN = 1


class Collision(Enum):
    """What the ball collided with during a frame (at most one thing)."""
    NONE = "none"
    LEFT_WALL = "left_wall"
    RIGHT_WALL = "right_wall"
    BLOCK = "block"
    ROOF = "roof"
    PADDLE_TOP = "paddle_top"
    PADDLE_SIDE = "paddle_side"
    GROUND = "ground"


class Ball:
    """The game ball."""

    # Angle at which the ball travels straight along the y axis
    STRAIGHT_ANGLE = 2 * math.pi

    def __init__(
        self,
        paddle: 'Paddle',
        board: 'Board',
        screen_width: float,
        screen_height: float,
        radius: float = 5.0,
        line_width: float = 2.0,
        x_speed: float = 0.5,
        y_speed: float = 0.5,
        max_angle: float = 0.4 * math.pi,
        initial_angle: float = 2 * math.pi,
        trace: Optional['DebugTrace'] = None,
    ):
        """Initialize ball attached to the paddle.

        Args:
            paddle: Paddle the ball rides on and bounces off
            board: Board whose blocks the ball destroys
            screen_width: Screen width in pixels
            screen_height: Screen height in pixels
            radius: Nominal (drawn) radius
            line_width: Outline width; half of it is added to the collision radius
            x_speed: Horizontal speed in pixels per millisecond
            y_speed: Vertical speed in pixels per millisecond
            max_angle: Largest angle produced by a paddle edge hit (radians)
            initial_angle: Launch angle before the first paddle hit (radians)
            trace: Optional recorder for ball positions
        """
        self._paddle = paddle
        self._board = board
        self._screen_width = screen_width
        self._screen_height = screen_height
        self._trace = trace

        self.radius = radius
        self.line_width = line_width
        self.x_speed = x_speed
        self.y_speed = y_speed
        self.max_angle = max_angle

        self.angle = initial_angle
        self.x_direction = XDirection.RIGHT
        self.y_direction = YDirection.UP
        self.attached = True

        self.x = 0.0
        self.y = 0.0
        self._move_with_paddle()
        self.old_x = self.x
        self.old_y = self.y

    @classmethod
    def from_settings(
        cls,
        settings: 'GameSettings',
        paddle: 'Paddle',
        board: 'Board',
        trace: Optional['DebugTrace'] = None,
    ) -> 'Ball':
        return cls(
            paddle,
            board,
            settings.screen_width,
            settings.screen_height,
            radius=settings.ball_radius,
            line_width=settings.ball_line_width,
            x_speed=settings.ball_x_speed,
            y_speed=settings.ball_y_speed,
            max_angle=settings.ball_max_angle,
            initial_angle=settings.ball_initial_angle,
            trace=trace,
        )

    @property
    def effective_radius(self) -> float:
        """Collision radius: nominal radius plus half the line width."""
        return self.radius + self.line_width / 2

    @property
    def left(self) -> float:
        return self.x - self.effective_radius

    @property
    def right(self) -> float:
        return self.x + self.effective_radius

    @property
    def top(self) -> float:
        return self.y - self.effective_radius

    @property
    def bottom(self) -> float:
        return self.y + self.effective_radius

    @property
    def old_left(self) -> float:
        return self.old_x - self.effective_radius

    @property
    def old_right(self) -> float:
        return self.old_x + self.effective_radius

    @property
    def old_top(self) -> float:
        return self.old_y - self.effective_radius

    @property
    def old_bottom(self) -> float:
        return self.old_y + self.effective_radius

    def detach(self) -> None:
        """Release the ball from the paddle. No effect if already free."""
        if self.attached:
            log.debug("Ball launched from (%.1f, %.1f)", self.x, self.y)
        self.attached = False

    def update(self, keys: 'InputState', dt: float) -> Collision:
        """Advance the ball one frame.

        Args:
            keys: Current key state (only launch is read)
            dt: Elapsed time in milliseconds

        Returns:
            The collision resolved this frame
        """
        if keys.launch:
            self.detach()

        self._move(dt)
        collision = self._check_collision()

        if self._trace is not None:
            self._trace.record(self.x, self.y)

        return collision

    def _move(self, dt: float) -> None:
        self.old_x = self.x
        self.old_y = self.y

        if self.attached:
            self._move_with_paddle()
        else:
            self.x += self.x_speed * math.sin(self.angle) * self.x_direction * dt
            self.y += self.y_speed * math.cos(self.angle) * self.y_direction * dt

    def _move_with_paddle(self) -> None:
        rect = self._paddle.rect
        self.x = rect.x + rect.width / 2
        self.y = rect.y - self.effective_radius

    def _check_collision(self) -> Collision:
        """Resolve at most one collision for the current position."""
        if self.attached:
            return Collision.NONE

        r = self.effective_radius

        # Side walls
        max_x = self._screen_width - 1
        if self.left < 0:
            self.x = r
            self.x_direction = XDirection.RIGHT
            return Collision.LEFT_WALL
        if self.right > max_x:
            self.x = max_x - r
            self.x_direction = XDirection.LEFT
            return Collision.RIGHT_WALL

        # Blocks
        block = self._find_block_hit()
        if block is not None:
            block.destroy()
            log.debug("Destroyed %r", block)
            self._bounce_off_block(block.rect)
            return Collision.BLOCK

        if self.y_direction == YDirection.UP:
            # Roof
            if self.top < 0:
                self.y = r
                self.y_direction = YDirection.DOWN
                return Collision.ROOF
        else:
            collision = self._check_paddle_collision()
            if collision is not None:
                return collision

            # Ground
            if self.bottom > self._screen_height - 1:
                self.y = self._screen_height - r
                log.debug("Ball reached the ground at x=%.1f", self.x)
                return Collision.GROUND

        return Collision.NONE

    def _find_block_hit(self) -> Optional['Block']:
        """First active block, in board order, overlapping the ball."""
        for block in self._board.get_active_blocks():
            if circle_intersects_rectangle(self, block.rect):
                return block
        return None

    def _bounce_off_block(self, rect: Rect) -> None:
        """Reflect off the block face the ball crossed since the last frame.

        Faces are tested bottom, top, right, left; the first one crossed
        wins. If none was crossed the ball keeps its course.
        """
        r = self.effective_radius

        if self.top < rect.bottom and self.old_top >= rect.bottom:
            self.y = rect.bottom + r
            self.y_direction = YDirection.DOWN
        elif self.bottom > rect.top and self.old_bottom <= rect.top:
            self.y = rect.top - r
            self.y_direction = YDirection.UP
        elif self.left < rect.right and self.old_left >= rect.right:
            self.x = rect.right + r
            self.x_direction = XDirection.RIGHT
        elif self.right > rect.left and self.old_right <= rect.left:
            self.x = rect.left - r
            self.x_direction = XDirection.LEFT

    def _check_paddle_collision(self) -> Optional[Collision]:
        """Bounce off the paddle if the ball overlaps it.

        A hit on the top face sends the ball up at an angle proportional
        to the distance from the paddle center. A hit on a side face only
        pushes the ball out sideways.
        """
        rect = self._paddle.rect
        if not circle_intersects_rectangle(self, rect):
            return None

        r = self.effective_radius
        diff = self.x - rect.center[0]
        self.x_direction = XDirection.LEFT if diff < 0 else XDirection.RIGHT

        # Crossed the top face, measured against where the paddle was last frame
        if self.bottom > rect.top and self.old_bottom <= self._paddle.old_rect.top:
            self.y = rect.top - r
            self.y_direction = YDirection.UP

            max_distance = rect.width / 2 + r
            factor = abs(diff) / max_distance
            self.angle = self.STRAIGHT_ANGLE + factor * self.max_angle
            log.debug("Paddle hit at offset %.1f, angle factor %.2f", diff, factor)
            return Collision.PADDLE_TOP

        self.x = rect.left - r if diff < 0 else rect.right + r
        return Collision.PADDLE_SIDE
