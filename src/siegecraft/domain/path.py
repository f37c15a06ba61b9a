"""Vector path primitives emitted for rendering backends.

This module defines the output geometry types:
- Point: A 2D point in output units
- MoveTo / LineTo: Path primitives
- Outline: One closed, continuous primitive sequence
- WindingDirection: Enum for outline winding direction
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Union


class WindingDirection(Enum):
    """Outline winding direction.

    Coordinates grow right and down (screen convention), so a clockwise
    outline has a positive shoelace area.
    """

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """A point in output space.

    Attributes:
        x: Horizontal coordinate
        y: Vertical coordinate, growing downwards
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        return cls(x=data["x"], y=data["y"])


@dataclass(frozen=True, slots=True)
class MoveTo:
    """Start a new subpath at ``point``."""

    point: Point


@dataclass(frozen=True, slots=True)
class LineTo:
    """Straight line from the current position to ``point``."""

    point: Point


PathPrimitive = Union[MoveTo, LineTo]


@dataclass(frozen=True, slots=True)
class Outline:
    """A path: one MoveTo followed by LineTo primitives.

    A closed outline bounds a filled region and its last LineTo returns to
    the MoveTo point. An open one is a wall branch that ends in a dead end.

    Attributes:
        primitives: Ordered path primitives
        closed: Whether the path bounds a region
    """

    primitives: tuple[PathPrimitive, ...]
    closed: bool = True

    def points(self) -> list[Point]:
        """Distinct polygon vertices (the closing point is not repeated)."""
        pts = [p.point for p in self.primitives]
        if self.closed and len(pts) > 1 and pts[0] == pts[-1]:
            pts.pop()
        return pts

    def signed_area(self) -> float:
        """Calculate signed area using the shoelace formula.

        Returns:
            Positive for clockwise outlines (screen coordinates), negative
            for counter-clockwise, 0.0 for degenerate or open ones
        """
        pts = self.points()
        n = len(pts)
        if not self.closed or n < 3:
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += pts[i].x * pts[j].y
            area -= pts[j].x * pts[i].y
        return area / 2.0

    def winding(self) -> WindingDirection:
        if self.signed_area() < 0:
            return WindingDirection.COUNTER_CLOCKWISE
        return WindingDirection.CLOCKWISE

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Return (min_x, min_y, max_x, max_y)."""
        pts = self.points()
        if not pts:
            return (0.0, 0.0, 0.0, 0.0)
        xs = [p.x for p in pts]
        ys = [p.y for p in pts]
        return (min(xs), min(ys), max(xs), max(ys))

    def to_svg_path(self) -> str:
        """Render as SVG path data; closed outlines end with ``Z``."""
        parts = []
        for prim in self.primitives:
            cmd = "M" if isinstance(prim, MoveTo) else "L"
            parts.append(f"{cmd} {_fmt(prim.point.x)} {_fmt(prim.point.y)}")
        path = " ".join(parts)
        return path + " Z" if self.closed else path

    def to_dict(self) -> dict[str, Any]:
        return {
            "primitives": [
                {
                    "op": "move" if isinstance(p, MoveTo) else "line",
                    "point": p.point.to_dict(),
                }
                for p in self.primitives
            ],
            "closed": self.closed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Outline":
        prims: list[PathPrimitive] = []
        for item in data["primitives"]:
            point = Point.from_dict(item["point"])
            prims.append(MoveTo(point) if item["op"] == "move" else LineTo(point))
        return cls(primitives=tuple(prims), closed=data.get("closed", True))


def _fmt(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".")
