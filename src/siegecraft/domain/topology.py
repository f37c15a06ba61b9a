"""Structural model extracted from a grid.

Anchors and segments are plain records that reference grid coordinates and
each other by index, so a template can be serialized and shared freely.

Key classes:
- Anchor: A structural corner or ground contact point
- Segment: A straight wall run between two anchors
- FloorSpan: A horizontal run of floor cells and its enclosing walls
- Template: Grid plus its anchors, segments and outlines
- AxisSpan / AxisPlan: Per-axis resize bookkeeping
- ResizedTemplate: Result of resizing a template
"""

from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Any

from siegecraft.domain.grid import Axis, Grid, Orientation


class AnchorRole(Enum):
    """Topological role of an anchor.

    - CONVEX: outline turns right (clockwise walk)
    - CONCAVE: outline turns left, or a turn away from the outline
    - JUNCTION: three or more walls meet
    - TERMINAL: dead end of a wall run
    - CONTACT: ground post in the middle of a straight bottom wall
    """

    CONVEX = "convex"
    CONCAVE = "concave"
    JUNCTION = "junction"
    TERMINAL = "terminal"
    CONTACT = "contact"


@dataclass(frozen=True, slots=True)
class Anchor:
    """A named structural point of a template.

    Attributes:
        row: Grid row
        col: Grid column
        role: Topological role
        grounded: True if the anchor is a ground post (``o``)
    """

    row: int
    col: int
    role: AnchorRole
    grounded: bool = False

    @property
    def position(self) -> tuple[int, int]:
        return (self.row, self.col)

    @property
    def pinned(self) -> bool:
        """Pinned anchors keep their row and column as single fixed lines."""
        return self.role is not AnchorRole.CONTACT

    def to_dict(self) -> dict[str, Any]:
        return {
            "row": self.row,
            "col": self.col,
            "role": self.role.value,
            "grounded": self.grounded,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Anchor":
        return cls(
            row=data["row"],
            col=data["col"],
            role=AnchorRole(data["role"]),
            grounded=data.get("grounded", False),
        )


@dataclass(frozen=True, slots=True)
class Segment:
    """A straight run of wall cells between two anchors.

    Attributes:
        orientation: Horizontal or vertical
        start: Index of the start anchor in the template's anchor tuple
        end: Index of the end anchor
        length: Distance in cells between the two anchors
    """

    orientation: Orientation
    start: int
    end: int
    length: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "orientation": self.orientation.value,
            "start": self.start,
            "end": self.end,
            "length": self.length,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Segment":
        return cls(
            orientation=Orientation(data["orientation"]),
            start=data["start"],
            end=data["end"],
            length=data["length"],
        )


@dataclass(frozen=True, slots=True)
class FloorSpan:
    """A maximal run of floor cells in one row.

    Attributes:
        row: Grid row
        start_col: First floor column
        end_col: Last floor column (inclusive)
        left_wall: Column of the wall bounding the run on the left, if any
        right_wall: Column of the wall bounding the run on the right, if any
    """

    row: int
    start_col: int
    end_col: int
    left_wall: int | None = None
    right_wall: int | None = None

    @property
    def length(self) -> int:
        return self.end_col - self.start_col + 1

    @property
    def enclosed(self) -> bool:
        return self.left_wall is not None and self.right_wall is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "row": self.row,
            "start_col": self.start_col,
            "end_col": self.end_col,
            "left_wall": self.left_wall,
            "right_wall": self.right_wall,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FloorSpan":
        return cls(**data)


@dataclass(frozen=True, slots=True)
class Template:
    """Canonical structural representation of a template.

    Attributes:
        grid: The disambiguated grid
        anchors: Anchors in outline order (clockwise, from the top-left-most
            corner), then anchors off the outline in reading order
        segments: Wall runs between anchors, outline runs first
        floor_spans: Floor runs used for fill bookkeeping
        outlines: Per disjoint sub-structure, the anchor indices visited by
            the clockwise outline walk
    """

    grid: Grid
    anchors: tuple[Anchor, ...]
    segments: tuple[Segment, ...]
    floor_spans: tuple[FloorSpan, ...] = ()
    outlines: tuple[tuple[int, ...], ...] = ()

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def contacts(self) -> tuple[Anchor, ...]:
        """Ground anchors, which mark where the structure meets the baseline."""
        return tuple(a for a in self.anchors if a.grounded)

    def segment_orientations(self) -> tuple[Orientation, ...]:
        """Orientation of every segment, in clockwise outline order."""
        return tuple(s.orientation for s in self.segments)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "grid": self.grid.to_dict(),
            "anchors": [a.to_dict() for a in self.anchors],
            "segments": [s.to_dict() for s in self.segments],
            "floor_spans": [f.to_dict() for f in self.floor_spans],
            "outlines": [list(o) for o in self.outlines],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Template":
        """Deserialize from dictionary."""
        return cls(
            grid=Grid.from_dict(data["grid"]),
            anchors=tuple(Anchor.from_dict(a) for a in data["anchors"]),
            segments=tuple(Segment.from_dict(s) for s in data["segments"]),
            floor_spans=tuple(FloorSpan.from_dict(f) for f in data.get("floor_spans", [])),
            outlines=tuple(tuple(o) for o in data.get("outlines", [])),
        )


@dataclass(frozen=True, slots=True)
class AxisSpan:
    """A maximal run of non-pinned lines along one axis.

    Two adjacent pinned lines are separated by a gap span of length 0 that
    starts at the second of them; lines it receives are new lines inserted
    between the pair.

    Attributes:
        start: First source line of the span
        length: Number of source lines
        minimum: Smallest length the span may be resized to
    """

    start: int
    length: int
    minimum: int

    @property
    def end(self) -> int:
        """One past the last source line."""
        return self.start + self.length

    @property
    def scalable(self) -> int:
        return self.length - self.minimum


@dataclass(frozen=True, slots=True)
class AxisPlan:
    """How one axis of a template is resized.

    Attributes:
        axis: Width or height
        original_size: Source dimension
        target_size: Requested dimension
        pinned: Source lines that stay single fixed lines
        spans: Stretchable runs and gaps between pinned lines
        allotments: Lines each span receives on top of its minimum
        scale: Proportional scale factor applied to the scalable lengths
    """

    axis: Axis
    original_size: int
    target_size: int
    pinned: tuple[int, ...]
    spans: tuple[AxisSpan, ...]
    allotments: tuple[int, ...]
    scale: Fraction

    @property
    def fixed_overhead(self) -> int:
        """Lines taken by pinned lines and span minimums."""
        return len(self.pinned) + sum(s.minimum for s in self.spans)

    @property
    def lengths(self) -> tuple[int, ...]:
        """Resized length of every span."""
        return tuple(s.minimum + a for s, a in zip(self.spans, self.allotments))

    def line_map(self) -> tuple[int | None, ...]:
        """Source line sampled by each target line.

        Pinned lines map to themselves; span lines take the nearest source
        line of their span. Lines inserted into a gap between two adjacent
        pinned lines have no source line and map to None.
        """
        pinned = set(self.pinned)
        by_start = {}
        gaps = {}
        for span, length in zip(self.spans, self.lengths):
            if span.length:
                by_start[span.start] = (span, length)
            else:
                gaps[span.start] = length

        lines: list[int | None] = []
        source = 0
        while source < self.original_size:
            lines.extend([None] * gaps.get(source, 0))
            if source in pinned:
                lines.append(source)
                source += 1
                continue
            span, length = by_start[source]
            lines.extend(
                span.start + (2 * j + 1) * span.length // (2 * length)
                for j in range(length)
            )
            source = span.end
        return tuple(lines)

    def target_starts(self) -> tuple[int, ...]:
        """First target line of every span."""
        lengths = self.lengths
        return tuple(
            sum(1 for p in self.pinned if p < span.start)
            + sum(n for s, n in zip(self.spans, lengths) if s.start < span.start)
            for span in self.spans
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "axis": self.axis.value,
            "original_size": self.original_size,
            "target_size": self.target_size,
            "pinned": list(self.pinned),
            "spans": [[s.start, s.length, s.minimum] for s in self.spans],
            "allotments": list(self.allotments),
            "scale": str(self.scale),
        }


@dataclass(frozen=True, slots=True)
class ResizedTemplate:
    """A template laid out at a new size.

    Attributes:
        template: Structure extracted from the resized grid
        source: Template that was resized
        column_plan: Plan used for the width
        row_plan: Plan used for the height
    """

    template: Template
    source: Template
    column_plan: AxisPlan
    row_plan: AxisPlan

    @property
    def grid(self) -> Grid:
        return self.template.grid

    @property
    def anchors(self) -> tuple[Anchor, ...]:
        return self.template.anchors

    @property
    def segments(self) -> tuple[Segment, ...]:
        return self.template.segments

    @property
    def width(self) -> int:
        return self.template.width

    @property
    def height(self) -> int:
        return self.template.height

    def to_dict(self) -> dict[str, Any]:
        return {
            "template": self.template.to_dict(),
            "column_plan": self.column_plan.to_dict(),
            "row_plan": self.row_plan.to_dict(),
        }
