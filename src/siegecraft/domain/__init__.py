"""Domain models for siegecraft.

This module contains the value objects passed between pipeline stages.
All models are:

- Immutable (frozen dataclasses)
- Serializable for inter-process communication (batch processing)
- Free of parsing or resizing logic

Key classes:
- Cell, Grid: Classified template cells
- Anchor, Segment, FloorSpan, Template: Extracted structure
- AxisPlan, ResizedTemplate: Resize results
- Point, MoveTo, LineTo, Outline: Emitted vector geometry
"""

from siegecraft.domain.grid import Axis, Cell, Grid, Orientation
from siegecraft.domain.path import (
    LineTo,
    MoveTo,
    Outline,
    PathPrimitive,
    Point,
    WindingDirection,
)
from siegecraft.domain.topology import (
    Anchor,
    AnchorRole,
    AxisPlan,
    AxisSpan,
    FloorSpan,
    ResizedTemplate,
    Segment,
    Template,
)

__all__: list[str] = [
    # Enums
    "AnchorRole",
    "Axis",
    "Cell",
    "Orientation",
    "WindingDirection",
    # Core types
    "Anchor",
    "AxisPlan",
    "AxisSpan",
    "FloorSpan",
    "Grid",
    "LineTo",
    "MoveTo",
    "Outline",
    "PathPrimitive",
    "Point",
    "ResizedTemplate",
    "Segment",
    "Template",
]
