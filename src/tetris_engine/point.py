"""Integer 2D point used for board coordinates and move deltas."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """Column ``x`` and row ``y``; rows grow downwards from the top."""

    x: int
    y: int

    def add(self, other: "Point") -> "Point":
        """Return the component-wise sum of ``self`` and ``other``."""

        return Point(self.x + other.x, self.y + other.y)

    def __add__(self, other: "Point") -> "Point":
        if not isinstance(other, Point):
            return NotImplemented
        return self.add(other)


# Unit deltas for the movement commands.
LEFT = Point(-1, 0)
RIGHT = Point(1, 0)
DOWN = Point(0, 1)
