"""Geometry primitives and the circle-rectangle collision test.

Coordinates are screen pixels with the origin at the top-left and y
growing downward. Right and bottom edges are inclusive
(``x + width - 1``).
"""

import math
from typing import Protocol, Tuple


def clamp(value: float, min_value: float, max_value: float) -> float:
    """Clamp value into [min_value, max_value]."""
    return max(min_value, min(max_value, value))


class Rect:
    """Axis-aligned rectangle with a movable origin and a fixed size."""

    def __init__(self, x: float, y: float, width: float, height: float):
        """Initialize rectangle.

        Args:
            x: Left edge X position
            y: Top edge Y position
            width: Rectangle width
            height: Rectangle height
        """
        self.x = x
        self.y = y
        self._width = width
        self._height = height

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        """Right-most pixel column (inclusive)."""
        return self.x + self._width - 1

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        """Bottom-most pixel row (inclusive)."""
        return self.y + self._height - 1

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self._width / 2, self.y + self._height / 2)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        """Return (x, y, width, height) for pygame drawing."""
        return (self.x, self.y, self._width, self._height)

    def __repr__(self) -> str:
        return f"Rect(x={self.x:.2f}, y={self.y:.2f}, w={self._width:.2f}, h={self._height:.2f})"


class Circle(Protocol):
    """Anything with a center and an effective collision radius."""

    x: float
    y: float

    @property
    def effective_radius(self) -> float: ...


def circle_intersects_rectangle(circle: Circle, rect: Rect) -> bool:
    """Check whether a circle overlaps a rectangle.

    Finds the point of the rectangle closest to the circle center and
    compares its distance to the effective radius. This is a static
    overlap test, not a swept one: a fast ball can pass through a thin
    rectangle between two frames.

    Args:
        circle: Circle to test (uses its effective radius)
        rect: Rectangle to test against

    Returns:
        True if the distance is strictly less than the radius
    """
    closest_x = clamp(circle.x, rect.left, rect.right)
    closest_y = clamp(circle.y, rect.top, rect.bottom)
    distance = math.hypot(circle.x - closest_x, circle.y - closest_y)
    return distance < circle.effective_radius
