"""Vector geometry emission.

Lowers a grid (original or resized) to outlines of MoveTo/LineTo primitives.
Vertices are the anchors visited by the extractor's clockwise outline walk,
so every closed outline winds clockwise (screen coordinates) and consecutive
vertices are never equal. Walls the walk crosses in both directions, such as
a dead-end branch, are split off as open paths, so no segment is emitted
twice.

Floor fill is left to the rendering backend; only the boundary is emitted.
"""

import logging

from siegecraft.config import GeometryConfig
from siegecraft.core.extractor import TopologyExtractor
from siegecraft.domain import (
    Grid,
    LineTo,
    MoveTo,
    Outline,
    Point,
    ResizedTemplate,
    Template,
)

logger = logging.getLogger(__name__)


def split_walk(points: list[Point]) -> tuple[list[list[Point]], list[list[Point]]]:
    """Split a closed outline walk into boundary loops and wall branches.

    The walk follows the outside of every wall, so a wall with no region on
    either side (a dead-end branch, or a bridge joining two rooms) is
    crossed once in each direction. Such a pair of crossings brackets the
    part of the walk done beyond the wall: whatever boundary lies between
    them is a loop of its own, and the wall itself becomes an open branch.

    Args:
        points: Walk vertices, cyclic, no two consecutive vertices equal

    Returns:
        (loops, branches): loops as distinct vertices, enclosing loop first;
        branches as polylines in walk order
    """
    edges = list(zip(points, points[1:] + points[:1]))
    directed = set(edges)

    loops: list[list[Point]] = []
    branches: list[list[Point]] = []
    # Frames: (loop vertices, branch index, edge that opened the frame)
    stack: list[tuple[list[Point], int | None, tuple[Point, Point] | None]] = [([], None, None)]
    for start, end in edges:
        loop, branch, opening = stack[-1]
        if (end, start) not in directed:
            if not loop:
                loop.append(start)
            loop.append(end)
            continue
        if opening == (end, start):
            stack.pop()
            if loop:
                loops.append(_distinct(loop))
            continue
        if branch is not None and not loop and branches[branch][-1] == start:
            branches[branch].append(end)
        else:
            branches.append([start, end])
            branch = len(branches) - 1
        stack.append(([], branch, (start, end)))

    outer = stack[0][0]
    if outer:
        loops.insert(0, _distinct(outer))
    return loops, branches


def _distinct(loop: list[Point]) -> list[Point]:
    if len(loop) > 1 and loop[0] == loop[-1]:
        loop.pop()
    return loop


class GeometryEmitter:
    """Converts templates into vector outlines.

    Example:
        emitter = GeometryEmitter(GeometryConfig(cell_size=8.0))
        for outline in emitter.emit(template):
            print(outline.to_svg_path())
    """

    def __init__(self, config: GeometryConfig | None = None) -> None:
        """Initialize emitter with configuration.

        Args:
            config: Geometry configuration (defaults used if None)
        """
        self.config = config or GeometryConfig()
        self.extractor = TopologyExtractor()

    def emit(self, source: Grid | Template | ResizedTemplate) -> tuple[Outline, ...]:
        """Emit the outlines of every disjoint sub-structure.

        Args:
            source: A grid (extracted first), a template, or a resized template

        Returns:
            Outlines in the extractor's sub-structure order; per
            sub-structure its closed loops, then its open branches

        Raises:
            MalformedTemplateError: If a grid is given and cannot be extracted
        """
        if isinstance(source, ResizedTemplate):
            template = source.template
        elif isinstance(source, Template):
            template = source
        else:
            template = self.extractor.extract(source)

        outlines: list[Outline] = []
        for visits in template.outlines:
            points: list[Point] = []
            for idx in visits:
                anchor = template.anchors[idx]
                point = Point(*self.config.to_point(anchor.row, anchor.col))
                if not points or points[-1] != point:
                    points.append(point)
            if len(points) > 1 and points[0] == points[-1]:
                points.pop()

            loops, branches = split_walk(points)
            for loop in loops:
                primitives = (MoveTo(loop[0]), *(LineTo(p) for p in loop[1:]), LineTo(loop[0]))
                outlines.append(Outline(primitives=primitives))
            for branch in branches:
                primitives = (MoveTo(branch[0]), *(LineTo(p) for p in branch[1:]))
                outlines.append(Outline(primitives=primitives, closed=False))

        logger.debug("Emitted %d outlines", len(outlines))
        return tuple(outlines)


def to_svg(
    outlines: tuple[Outline, ...],
    width: int,
    height: int,
    config: GeometryConfig | None = None,
) -> str:
    """Render outlines as a standalone SVG document.

    Args:
        outlines: Outlines from GeometryEmitter.emit
        width: Grid width in cells
        height: Grid height in cells
        config: Geometry configuration used for the outlines

    Returns:
        SVG document text
    """
    config = config or GeometryConfig()
    view_w = width * config.cell_size
    view_h = height * config.cell_size
    d = " ".join(outline.to_svg_path() for outline in outlines)
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {view_w:g} {view_h:g}">\n'
        f'  <path d="{d}" fill="none" stroke="black" '
        f'stroke-width="{config.stroke_width:g}" stroke-linejoin="miter"/>\n'
        f"</svg>\n"
    )
