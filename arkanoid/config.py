"""Configuration for Arkanoid.

Contains screen dimensions, physics constants, the block palette and
the validated GameSettings model. Module constants can be overridden
from a .env file next to the package; full settings can be loaded from
YAML.
"""

import math
import os
from pathlib import Path
from typing import Dict, Tuple, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

# Load .env from package directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_bool(key: str, default: bool) -> bool:
    """Get boolean from environment."""
    val = os.getenv(key, str(default)).lower()
    return val in ('true', '1', 'yes')


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


# Display settings
SCREEN_WIDTH: int = _get_int('ARKANOID_SCREEN_WIDTH', 450)
SCREEN_HEIGHT: int = _get_int('ARKANOID_SCREEN_HEIGHT', 590)
FPS: int = _get_int('ARKANOID_FPS', 60)

# Paddle (speeds are pixels per millisecond)
PADDLE_WIDTH: float = 70.0
PADDLE_HEIGHT: float = 10.0
PADDLE_V_PADDING: float = 40.0
PADDLE_SPEED: float = 0.5

# Ball
BALL_RADIUS: float = 5.0
BALL_LINE_WIDTH: float = 2.0
BALL_X_SPEED: float = 0.5
BALL_Y_SPEED: float = 0.5
BALL_MAX_ANGLE: float = 0.4 * math.pi
BALL_INITIAL_ANGLE: float = 2 * math.pi  # straight up

# Board
BOARD_ROWS: int = 3
BOARD_COLUMNS: int = 15
BOARD_HEIGHT: float = 100.0
BLOCK_PALETTE: Tuple[str, ...] = (
    'red', 'green', 'blue', 'orange', 'yellow', 'purple', 'pink',
)

# Delay between the final frame and the end screen, in milliseconds
REVEAL_DELAY_MS: float = 100.0

# Debug path rendering
DEBUG_TRACE: bool = _get_bool('ARKANOID_DEBUG_TRACE', False)
TRACE_MAX_POINTS: int = _get_int('ARKANOID_TRACE_MAX_POINTS', 2000)

# Visual
BACKGROUND_COLOR: Tuple[int, int, int] = (255, 255, 255)

BLOCK_COLORS: Dict[str, Tuple[int, int, int]] = {
    'red': (255, 0, 0),
    'green': (0, 128, 0),
    'blue': (0, 0, 255),
    'orange': (255, 165, 0),
    'yellow': (255, 255, 0),
    'purple': (128, 0, 128),
    'pink': (255, 192, 203),
}


class SettingsError(Exception):
    """Raised when a settings file cannot be loaded or fails validation."""
    pass


class TraceSettings(BaseModel):
    """Debug trace configuration.

    Attributes:
        debug_trace: Record and draw the ball's path
        max_points: Capacity of the trace ring buffer
    """
    debug_trace: bool = DEBUG_TRACE
    max_points: int = Field(default=TRACE_MAX_POINTS, gt=0)

    model_config = ConfigDict(frozen=True, extra='forbid')


class GameSettings(BaseModel):
    """Every tunable of a game, validated at construction.

    Invalid combinations (e.g. a paddle as wide as the screen) are
    rejected here so the per-frame code never has to check them.

    Examples:
        >>> settings = GameSettings(screen_width=800, screen_height=600)
        >>> settings.effective_radius
        6.0
    """
    screen_width: int = Field(default=SCREEN_WIDTH, gt=0)
    screen_height: int = Field(default=SCREEN_HEIGHT, gt=0)
    fps: int = Field(default=FPS, gt=0)

    paddle_width: float = Field(default=PADDLE_WIDTH, gt=0)
    paddle_height: float = Field(default=PADDLE_HEIGHT, gt=0)
    paddle_v_padding: float = Field(default=PADDLE_V_PADDING, ge=0)
    paddle_speed: float = Field(default=PADDLE_SPEED, gt=0)

    ball_radius: float = Field(default=BALL_RADIUS, gt=0)
    ball_line_width: float = Field(default=BALL_LINE_WIDTH, ge=0)
    ball_x_speed: float = Field(default=BALL_X_SPEED, gt=0)
    ball_y_speed: float = Field(default=BALL_Y_SPEED, gt=0)
    ball_max_angle: float = Field(default=BALL_MAX_ANGLE, gt=0, lt=math.pi / 2)
    ball_initial_angle: float = BALL_INITIAL_ANGLE

    board_rows: int = Field(default=BOARD_ROWS, gt=0)
    board_columns: int = Field(default=BOARD_COLUMNS, gt=0)
    board_height: float = Field(default=BOARD_HEIGHT, gt=0)
    palette: Tuple[str, ...] = BLOCK_PALETTE

    reveal_delay_ms: float = Field(default=REVEAL_DELAY_MS, ge=0)
    trace: TraceSettings = Field(default_factory=TraceSettings)

    model_config = ConfigDict(frozen=True, extra='forbid')

    @field_validator('palette')
    @classmethod
    def validate_palette(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        """Palette entries must be known block colors."""
        unknown = [c for c in v if c not in BLOCK_COLORS]
        if unknown:
            raise ValueError(f'Unknown block colors: {unknown}')
        return v

    @model_validator(mode='after')
    def validate_layout(self) -> 'GameSettings':
        """Check that paddle, ball and board fit on the screen."""
        if self.paddle_width >= self.screen_width - 1:
            raise ValueError(
                f'paddle_width ({self.paddle_width}) must be less than '
                f'screen_width - 1 ({self.screen_width - 1})'
            )
        if self.board_rows > len(self.palette):
            raise ValueError(
                f'board_rows ({self.board_rows}) exceeds palette size ({len(self.palette)})'
            )
        paddle_top = self.screen_height - self.paddle_height / 2 - self.paddle_v_padding
        if paddle_top <= self.board_height:
            raise ValueError('Paddle overlaps the block board; increase screen_height')
        if paddle_top + self.paddle_height > self.screen_height:
            raise ValueError('Paddle does not fit on screen; reduce paddle_v_padding or height')
        if 2 * self.effective_radius >= self.paddle_width:
            raise ValueError('Ball is wider than the paddle')
        return self

    @property
    def effective_radius(self) -> float:
        """Ball collision radius (nominal radius plus half the line width)."""
        return self.ball_radius + self.ball_line_width / 2

    @property
    def tick_interval_ms(self) -> float:
        """Target interval between loop ticks."""
        return 1000.0 / self.fps


def load_settings(path: Union[str, Path]) -> GameSettings:
    """Load GameSettings from a YAML file.

    Keys missing from the file keep their defaults. Unknown keys are
    rejected.

    Args:
        path: Path to the YAML settings file

    Returns:
        Validated GameSettings

    Raises:
        SettingsError: If the file is unreadable, not a mapping, or invalid
    """
    path = Path(path)
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise SettingsError(f"Cannot read settings file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise SettingsError(
            f"Settings file {path} must contain a mapping, got {type(data).__name__}"
        )

    try:
        return GameSettings(**data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings in {path}: {e}") from e
