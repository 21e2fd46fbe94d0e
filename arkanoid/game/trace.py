"""Bounded record of recent ball positions for debug path rendering."""

from collections import deque
from typing import Deque, Iterator, List, Tuple

Point = Tuple[float, float]


class DebugTrace:
    """Ring buffer of ball positions.

    When disabled, record() is a no-op so callers never need to check.
    Oldest points are dropped once max_points is reached.
    """

    def __init__(self, enabled: bool = False, max_points: int = 2000):
        if max_points <= 0:
            raise ValueError(f'max_points must be positive, got {max_points}')
        self._enabled = enabled
        self._points: Deque[Point] = deque(maxlen=max_points)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def max_points(self) -> int:
        return self._points.maxlen  # type: ignore[return-value]

    def record(self, x: float, y: float) -> None:
        if self._enabled:
            self._points.append((x, y))

    def points(self) -> List[Point]:
        return list(self._points)

    def clear(self) -> None:
        self._points.clear()

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)
