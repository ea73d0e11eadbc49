"""Planar points and quadrilateral neighbourhoods."""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Point:
    """A point on the city plane."""

    x: float = 0.0
    y: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    def distance_to(self, other: Point) -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def __str__(self) -> str:
        return f"({self.x:g},{self.y:g})"


def _origin_corners() -> tuple[Point, Point, Point, Point]:
    return (Point(), Point(), Point(), Point())


@dataclass(frozen=True)
class Valley:
    """A named neighbourhood bounded by four corner points."""

    name: str = ""
    corners: tuple[Point, Point, Point, Point] = field(default_factory=_origin_corners)

    def __post_init__(self) -> None:
        corners = tuple(self.corners)
        if len(corners) != 4:
            raise ValueError(f"a neighbourhood needs exactly 4 corners, got {len(corners)}")
        object.__setattr__(self, "corners", corners)