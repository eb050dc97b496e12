"""
Grid geometry for the falling-block engine.

Coordinates are screen coordinates: x grows to the right and y grows
downward, so a right rotation is clockwise on screen.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector:
    """An integer grid offset or absolute cell coordinate."""
    x: int
    y: int

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def rotate_right(self) -> "Vector":
        """Rotate 90 degrees to the right: (x, y) -> (-y, x)."""
        return Vector(-self.y, self.x)

    def rotate_left(self) -> "Vector":
        """Rotate 90 degrees to the left: (x, y) -> (y, -x)."""
        return Vector(self.y, -self.x)

    def __repr__(self) -> str:
        return f"Vector({self.x}, {self.y})"


ORIGIN = Vector(0, 0)
LEFT = Vector(-1, 0)
RIGHT = Vector(1, 0)
DOWN = Vector(0, 1)
