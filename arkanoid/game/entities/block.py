"""Blocks and the board that holds them."""

from typing import TYPE_CHECKING, List, Sequence, Tuple

from ..geometry import Rect

if TYPE_CHECKING:
    from ...config import GameSettings


class Block:
    """A destructible block.

    Position, size and color never change. The destroyed flag goes from
    False to True once and is never reset.
    """

    def __init__(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        color: str,
        grid_position: Tuple[int, int] = (0, 0),
    ):
        """Initialize block.

        Args:
            x: Left edge X position
            y: Top edge Y position
            width: Block width
            height: Block height
            color: Color identifier for the skin
            grid_position: (row, col) position in grid
        """
        self._rect = Rect(x, y, width, height)
        self._color = color
        self._grid_position = grid_position
        self._destroyed = False

    @property
    def rect(self) -> Rect:
        return self._rect

    @property
    def color(self) -> str:
        return self._color

    @property
    def grid_position(self) -> Tuple[int, int]:
        """Get grid position (row, col)."""
        return self._grid_position

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    def destroy(self) -> None:
        """Mark the block destroyed. Destroying twice has no further effect."""
        self._destroyed = True

    def __repr__(self) -> str:
        state = "destroyed" if self._destroyed else "active"
        return f"Block({self._color}, {self._grid_position}, {state})"


def build_stage(
    screen_width: float,
    rows: int,
    columns: int,
    board_height: float,
    palette: Sequence[str],
) -> List[Block]:
    """Lay out the stage grid.

    Blocks span the full screen width with no gaps; every row takes its
    color from the palette by row index.

    Args:
        screen_width: Screen width in pixels
        rows: Number of block rows
        columns: Number of block columns
        board_height: Total height of the grid
        palette: Colors, one per row

    Returns:
        Blocks in row-major order
    """
    block_width = screen_width / columns
    block_height = board_height / rows

    blocks = []
    for row in range(rows):
        for col in range(columns):
            blocks.append(Block(
                col * block_width,
                row * block_height,
                block_width,
                block_height,
                palette[row],
                (row, col),
            ))
    return blocks


class Board:
    """Fixed, ordered collection of blocks."""

    def __init__(self, blocks: Sequence[Block]):
        self._blocks = tuple(blocks)

    @classmethod
    def from_settings(cls, settings: 'GameSettings') -> 'Board':
        return cls(build_stage(
            settings.screen_width,
            settings.board_rows,
            settings.board_columns,
            settings.board_height,
            settings.palette,
        ))

    @property
    def blocks(self) -> Tuple[Block, ...]:
        return self._blocks

    def get_active_blocks(self) -> List[Block]:
        """Blocks not yet destroyed, in board order. Recomputed on every call."""
        return [block for block in self._blocks if not block.is_destroyed]

    def is_cleared(self) -> bool:
        return all(block.is_destroyed for block in self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)
