"""Shared fixtures for Arkanoid tests."""
import os

os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

from typing import Any, List, Tuple

import pytest

from arkanoid.clock import ManualClock
from arkanoid.config import GameSettings
from arkanoid.game.entities.ball import Ball
from arkanoid.game.entities.block import Board
from arkanoid.game.entities.paddle import Paddle
from arkanoid.game_mode import ArkanoidGame
from arkanoid.input.keyboard import InputState
from arkanoid.logging import LogLevel, _config
from arkanoid.skins.base import ArkanoidSkin


class RecordingSkin(ArkanoidSkin):
    """Skin that records draw calls instead of drawing."""

    def __init__(self, trace=None):
        super().__init__(trace)
        self.calls: List[Tuple[str, Any]] = []
        self.frames = 0

    def render_background(self) -> None:
        self.calls.append(('background', None))

    def render_paddle(self, paddle) -> None:
        self.calls.append(('paddle', paddle.rect.x))

    def render_ball(self, ball) -> None:
        self.calls.append(('ball', (ball.x, ball.y)))

    def render_block(self, block) -> None:
        self.calls.append(('block', block.grid_position))

    def render_trace(self, points) -> None:
        self.calls.append(('trace', len(points)))

    def render_overlay(self, overlay) -> None:
        self.calls.append(('overlay', overlay.title))

    def present(self) -> None:
        self.frames += 1


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep test output clean and restore logger config afterwards."""
    saved_default = _config['default_level']
    saved_modules = dict(_config['module_levels'])
    _config['default_level'] = LogLevel.OFF
    _config['module_levels'].clear()
    yield
    _config['default_level'] = saved_default
    _config['module_levels'].clear()
    _config['module_levels'].update(saved_modules)


@pytest.fixture
def settings():
    return GameSettings(screen_width=450, screen_height=590)


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def skin():
    return RecordingSkin()


@pytest.fixture
def game(clock, settings, skin):
    return ArkanoidGame(clock, settings, skin=skin)


@pytest.fixture
def keys():
    return InputState()


@pytest.fixture
def paddle():
    return Paddle(450, 590)


@pytest.fixture
def empty_board():
    return Board([])


@pytest.fixture
def make_free_ball():
    """Factory for a launched ball at a given position."""
    def _make(paddle, board, x, y, x_direction=None, y_direction=None, angle=None):
        ball = Ball(paddle, board, 450, 590)
        ball.attached = False
        ball.x = x
        ball.y = y
        if x_direction is not None:
            ball.x_direction = x_direction
        if y_direction is not None:
            ball.y_direction = y_direction
        if angle is not None:
            ball.angle = angle
        return ball

    return _make
