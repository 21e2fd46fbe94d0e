"""Tests for Ball movement and collision resolution."""
import math

import pytest

from arkanoid.config import GameSettings
from arkanoid.game.entities.ball import Ball, Collision, XDirection, YDirection
from arkanoid.game.entities.block import Block, Board
from arkanoid.game.trace import DebugTrace
from arkanoid.input.keyboard import InputState

LAUNCH = InputState(launch=True)
IDLE = InputState()


class TestAttachedBall:
    """Tests for the ball while it rides on the paddle."""

    def test_starts_attached_on_paddle(self, paddle, empty_board):
        ball = Ball(paddle, empty_board, 450, 590)
        assert ball.attached
        assert ball.x == 225
        assert ball.y == 545 - 6

    def test_effective_radius(self, paddle, empty_board):
        ball = Ball(paddle, empty_board, 450, 590)
        assert ball.radius == 5
        assert ball.effective_radius == 6

    def test_follows_paddle(self, paddle, empty_board):
        ball = Ball(paddle, empty_board, 450, 590)
        paddle.update(InputState(right=True), 100)
        ball.update(IDLE, 100)
        assert ball.x == pytest.approx(paddle.rect.x + 35)
        assert ball.y == pytest.approx(paddle.rect.y - ball.effective_radius)

    def test_ignores_angle_and_direction(self, paddle, empty_board):
        ball = Ball(paddle, empty_board, 450, 590)
        ball.angle = 2 * math.pi + 1.0
        ball.x_direction = XDirection.LEFT
        ball.y_direction = YDirection.DOWN
        assert ball.update(IDLE, 16) is Collision.NONE
        assert (ball.x, ball.y) == (225, 539)

    def test_launch_detaches(self, paddle, empty_board):
        ball = Ball(paddle, empty_board, 450, 590)
        ball.update(LAUNCH, 16)
        assert not ball.attached

    def test_launch_is_idempotent(self, paddle, empty_board):
        ball = Ball(paddle, empty_board, 450, 590)
        ball.update(LAUNCH, 16)
        ball.update(LAUNCH, 16)
        assert not ball.attached

    def test_no_reattach_after_release(self, paddle, empty_board):
        ball = Ball(paddle, empty_board, 450, 590)
        ball.update(LAUNCH, 16)
        ball.update(IDLE, 16)
        assert not ball.attached


class TestFreeMovement:
    """Tests for free flight."""

    def test_straight_up_after_launch(self, paddle, empty_board):
        ball = Ball(paddle, empty_board, 450, 590)
        ball.detach()
        collision = ball.update(IDLE, 16)
        assert collision is Collision.NONE
        assert ball.x == pytest.approx(225)
        assert ball.y == pytest.approx(539 - 8)

    def test_initial_angle_from_settings(self, paddle, empty_board):
        settings = GameSettings(screen_width=450, screen_height=590, ball_initial_angle=2 * math.pi + 0.5)
        ball = Ball.from_settings(settings, paddle, empty_board)
        assert ball.angle == pytest.approx(2 * math.pi + 0.5)
        ball.detach()
        ball.update(IDLE, 10)
        assert ball.x == pytest.approx(225 + 0.5 * math.sin(0.5) * 10)
        assert ball.y == pytest.approx(539 - 0.5 * math.cos(0.5) * 10)

    def test_old_position_recorded(self, paddle, empty_board, make_free_ball):
        ball = make_free_ball(paddle, empty_board, 200, 300)
        ball.update(IDLE, 16)
        assert ball.old_x == 200
        assert ball.old_y == 300

    def test_angled_movement(self, paddle, empty_board, make_free_ball):
        angle = 2 * math.pi + 0.5
        ball = make_free_ball(paddle, empty_board, 200, 300,
                              XDirection.LEFT, YDirection.DOWN, angle)
        ball.update(IDLE, 10)
        assert ball.x == pytest.approx(200 - 0.5 * math.sin(0.5) * 10)
        assert ball.y == pytest.approx(300 + 0.5 * math.cos(0.5) * 10)


class TestWallCollisions:
    """Tests for side walls and the roof."""

    def test_left_wall_reflects(self, paddle, empty_board, make_free_ball):
        ball = make_free_ball(paddle, empty_board, 7, 300,
                              XDirection.LEFT, YDirection.UP, 2 * math.pi + 0.5)
        assert ball.update(IDLE, 16) is Collision.LEFT_WALL
        assert ball.x_direction is XDirection.RIGHT
        assert ball.x == 6
        assert ball.left >= 0

    def test_right_wall_reflects(self, paddle, empty_board, make_free_ball):
        ball = make_free_ball(paddle, empty_board, 442, 300,
                              XDirection.RIGHT, YDirection.UP, 2 * math.pi + 0.5)
        assert ball.update(IDLE, 16) is Collision.RIGHT_WALL
        assert ball.x_direction is XDirection.LEFT
        assert ball.x == 449 - 6

    def test_left_wall_reflects_once(self, paddle, empty_board, make_free_ball):
        ball = make_free_ball(paddle, empty_board, 7, 300,
                              XDirection.LEFT, YDirection.UP, 2 * math.pi + 0.5)
        ball.update(IDLE, 16)
        assert ball.update(IDLE, 16) is Collision.NONE
        assert ball.x_direction is XDirection.RIGHT

    def test_roof_reflects_when_moving_up(self, paddle, empty_board, make_free_ball):
        ball = make_free_ball(paddle, empty_board, 200, 7,
                              XDirection.RIGHT, YDirection.UP, 2 * math.pi)
        assert ball.update(IDLE, 16) is Collision.ROOF
        assert ball.y_direction is YDirection.DOWN
        assert ball.y == 6

    def test_roof_not_checked_when_moving_down(self, paddle, empty_board, make_free_ball):
        ball = make_free_ball(paddle, empty_board, 200, 2,
                              XDirection.RIGHT, YDirection.DOWN, 2 * math.pi)
        assert ball.update(IDLE, 2) is Collision.NONE
        assert ball.y_direction is YDirection.DOWN


class TestBlockCollisions:
    """Tests for ball-vs-block resolution."""

    @pytest.fixture
    def block(self):
        # left=200, right=249, top=300, bottom=319
        return Block(200, 300, 50, 20, 'red')

    def test_hit_from_below(self, paddle, block, make_free_ball):
        board = Board([block])
        ball = make_free_ball(paddle, board, 225, 330,
                              XDirection.RIGHT, YDirection.UP, 2 * math.pi)
        assert ball.update(IDLE, 16) is Collision.BLOCK
        assert block.is_destroyed
        assert ball.y_direction is YDirection.DOWN
        assert ball.y == 319 + 6

    def test_hit_from_above(self, paddle, block, make_free_ball):
        board = Board([block])
        ball = make_free_ball(paddle, board, 225, 290,
                              XDirection.RIGHT, YDirection.DOWN, 2 * math.pi)
        assert ball.update(IDLE, 16) is Collision.BLOCK
        assert block.is_destroyed
        assert ball.y_direction is YDirection.UP
        assert ball.y == 300 - 6

    def test_hit_from_left(self, paddle, block, make_free_ball):
        board = Board([block])
        ball = make_free_ball(paddle, board, 190, 310,
                              XDirection.RIGHT, YDirection.UP, 2 * math.pi + math.pi / 2)
        assert ball.update(IDLE, 16) is Collision.BLOCK
        assert ball.x_direction is XDirection.LEFT
        assert ball.x == 200 - 6
        assert ball.y_direction is YDirection.UP

    def test_hit_from_right(self, paddle, block, make_free_ball):
        board = Board([block])
        ball = make_free_ball(paddle, board, 260, 310,
                              XDirection.LEFT, YDirection.UP, 2 * math.pi + math.pi / 2)
        assert ball.update(IDLE, 16) is Collision.BLOCK
        assert ball.x_direction is XDirection.RIGHT
        assert ball.x == 249 + 6

    def test_old_edge_exactly_on_face_counts(self, paddle, block, make_free_ball):
        board = Board([block])
        # old top == block bottom (319)
        ball = make_free_ball(paddle, board, 225, 325,
                              XDirection.RIGHT, YDirection.UP, 2 * math.pi)
        ball.update(IDLE, 16)
        assert ball.y_direction is YDirection.DOWN
        assert ball.y == 325

    def test_only_first_block_destroyed(self, paddle, make_free_ball):
        first = Block(200, 300, 50, 20, 'red')
        second = Block(200, 300, 50, 20, 'green')
        board = Board([first, second])
        ball = make_free_ball(paddle, board, 225, 330,
                              XDirection.RIGHT, YDirection.UP, 2 * math.pi)
        ball.update(IDLE, 16)
        assert first.is_destroyed
        assert not second.is_destroyed
        assert board.get_active_blocks() == [second]

    def test_destroyed_block_is_ignored(self, paddle, block, make_free_ball):
        block.destroy()
        board = Board([block])
        ball = make_free_ball(paddle, board, 225, 330,
                              XDirection.RIGHT, YDirection.UP, 2 * math.pi)
        assert ball.update(IDLE, 16) is Collision.NONE
        assert ball.y_direction is YDirection.UP

    def test_hit_on_default_board(self, paddle, settings, make_free_ball):
        board = Board.from_settings(settings)
        ball = make_free_ball(paddle, board, 225, 106,
                              XDirection.RIGHT, YDirection.UP, 2 * math.pi)
        assert ball.update(IDLE, 16) is Collision.BLOCK
        destroyed = [b for b in board.blocks if b.is_destroyed]
        assert [b.grid_position for b in destroyed] == [(2, 7)]
        assert ball.y == pytest.approx(99 + 6)


class TestPaddleCollisions:
    """Tests for ball-vs-paddle resolution (paddle top at y=545, x 190..259)."""

    def test_center_hit_bounces_straight_up(self, paddle, empty_board, make_free_ball):
        ball = make_free_ball(paddle, empty_board, 225, 538,
                              XDirection.LEFT, YDirection.DOWN, 2 * math.pi)
        assert ball.update(IDLE, 16) is Collision.PADDLE_TOP
        assert ball.y_direction is YDirection.UP
        assert ball.y == 545 - 6
        assert ball.angle == pytest.approx(2 * math.pi)
        assert ball.x_direction is XDirection.RIGHT

    def test_edge_hit_bounces_steeply(self, paddle, empty_board, make_free_ball):
        ball = make_free_ball(paddle, empty_board, 264, 538,
                              XDirection.LEFT, YDirection.DOWN, 2 * math.pi)
        assert ball.update(IDLE, 16) is Collision.PADDLE_TOP
        factor = 39 / 41
        assert ball.angle == pytest.approx(2 * math.pi + factor * 0.4 * math.pi)
        assert ball.angle == pytest.approx(2 * math.pi + 0.4 * math.pi, rel=0.01)
        assert ball.x_direction is XDirection.RIGHT

    def test_left_half_sends_ball_left(self, paddle, empty_board, make_free_ball):
        ball = make_free_ball(paddle, empty_board, 200, 538,
                              XDirection.RIGHT, YDirection.DOWN, 2 * math.pi)
        ball.update(IDLE, 16)
        assert ball.x_direction is XDirection.LEFT

    def test_side_hit_pushes_ball_out(self, paddle, empty_board, make_free_ball):
        ball = make_free_ball(paddle, empty_board, 186, 542,
                              XDirection.RIGHT, YDirection.DOWN, 2 * math.pi)
        assert ball.update(IDLE, 16) is Collision.PADDLE_SIDE
        assert ball.x == 190 - 6
        assert ball.x_direction is XDirection.LEFT
        assert ball.y_direction is YDirection.DOWN

    def test_right_side_hit(self, paddle, empty_board, make_free_ball):
        ball = make_free_ball(paddle, empty_board, 264, 542,
                              XDirection.LEFT, YDirection.DOWN, 2 * math.pi)
        assert ball.update(IDLE, 16) is Collision.PADDLE_SIDE
        assert ball.x == 259 + 6
        assert ball.x_direction is XDirection.RIGHT

    def test_paddle_ignored_when_moving_up(self, paddle, empty_board, make_free_ball):
        ball = make_free_ball(paddle, empty_board, 225, 552,
                              XDirection.RIGHT, YDirection.UP, 2 * math.pi)
        assert ball.update(IDLE, 2) is Collision.NONE
        assert ball.y_direction is YDirection.UP


class TestGround:
    """Tests for the ball reaching the bottom of the screen."""

    def test_ground_reported(self, paddle, empty_board, make_free_ball):
        ball = make_free_ball(paddle, empty_board, 50, 580,
                              XDirection.RIGHT, YDirection.DOWN, 2 * math.pi)
        assert ball.update(IDLE, 16) is Collision.GROUND
        assert ball.y == 590 - 6

    def test_paddle_intercept_prevents_ground(self, paddle, empty_board, make_free_ball):
        ball = make_free_ball(paddle, empty_board, 225, 538,
                              XDirection.RIGHT, YDirection.DOWN, 2 * math.pi)
        assert ball.update(IDLE, 16) is not Collision.GROUND


class TestTrace:
    """Tests for position recording."""

    def test_positions_recorded(self, paddle, empty_board):
        trace = DebugTrace(enabled=True, max_points=10)
        ball = Ball(paddle, empty_board, 450, 590, trace=trace)
        ball.update(LAUNCH, 16)
        ball.update(IDLE, 16)
        assert len(trace) == 2
        assert trace.points()[-1] == (ball.x, ball.y)

    def test_without_trace(self, paddle, empty_board):
        ball = Ball(paddle, empty_board, 450, 590)
        assert ball.update(LAUNCH, 16) is Collision.NONE
