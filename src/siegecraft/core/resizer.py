"""Topology-preserving template resizing.

Each axis is resized independently. Lines (columns or rows) that hold a
pinned anchor stay single fixed lines; the runs of lines between them are
spans that stretch or shrink. A span never drops below its minimum (one
line, or one line per ground post it carries), so every wall run keeps a
length of at least one cell and the structure keeps the same anchors and
connectivity at any feasible size. Two adjacent pinned lines have a gap
span of length 0 between them; lines it receives are new lines that carry
any wall crossing the gap.

The lines left after pinned lines and span minimums are handed out in
proportion to each span's scalable length. Shares are rounded with error
diffusion: the rounding remainder of one span is carried into the next, so
the shares always add up to exactly the lines available.

After the new grid is laid out it is extracted again and compared with the
source template; any difference is an internal error.
"""

import logging
import math
from collections.abc import Callable, Iterable, Sequence
from fractions import Fraction
from typing import TypeVar

from siegecraft.core.extractor import TopologyExtractor
from siegecraft.domain import (
    AnchorRole,
    Axis,
    AxisPlan,
    AxisSpan,
    Cell,
    Grid,
    Orientation,
    ResizedTemplate,
    Template,
)
from siegecraft.exceptions import (
    DegenerateSegmentError,
    MalformedTemplateError,
    TooSmallError,
    TopologyMismatchError,
)

logger = logging.getLogger(__name__)

_HALF = Fraction(1, 2)

T = TypeVar("T")


def diffuse(weights: Sequence[int], total: int) -> list[int]:
    """Split ``total`` in proportion to ``weights`` using error diffusion.

    Every weight is scaled by ``total / sum(weights)``; the scaled value plus
    the remainder carried from the previous weight is rounded half up, and
    the new remainder is carried on. Exact rational arithmetic keeps the sum
    of the shares equal to ``total``.

    Args:
        weights: Non-negative weights, at least one positive unless
            ``total`` is 0
        total: Non-negative amount to split

    Returns:
        Integer shares, one per weight
    """
    if total == 0:
        return [0] * len(weights)
    scale = Fraction(total, sum(weights))
    carry = Fraction(0)
    shares = []
    for weight in weights:
        exact = weight * scale + carry
        share = math.floor(exact + _HALF)
        carry = exact - share
        shares.append(share)
    return shares


def plan_axis(
    axis: Axis,
    size: int,
    pinned: Iterable[int],
    target: int,
    contacts: Iterable[int] = (),
) -> AxisPlan:
    """Plan how one axis is resized.

    Args:
        axis: Axis being planned
        size: Current size along the axis
        pinned: Lines holding pinned anchors
        target: Requested size
        contacts: Lines holding ground posts that move with their span

    Returns:
        AxisPlan with spans and their allotments

    Raises:
        TooSmallError: If ``target`` is below the axis minimum
        ValueError: If growth is requested on an axis of a single pinned
            line, which no valid template has
    """
    pinned_lines = tuple(sorted(set(pinned)))
    pinned_set = set(pinned_lines)
    contact_lines = list(contacts)

    spans: list[AxisSpan] = []
    line = 0
    while line < size:
        if line in pinned_set:
            if line - 1 in pinned_set:
                spans.append(AxisSpan(start=line, length=0, minimum=0))
            line += 1
            continue
        start = line
        while line < size and line not in pinned_set:
            line += 1
        interior = bool(pinned_lines) and pinned_lines[0] < start < pinned_lines[-1]
        posts = sum(1 for c in contact_lines if start <= c < line)
        spans.append(
            AxisSpan(
                start=start,
                length=line - start,
                minimum=max(1, posts) if interior else 0,
            )
        )

    fixed_overhead = len(pinned_lines) + sum(s.minimum for s in spans)
    if target < fixed_overhead:
        raise TooSmallError(axis.value, fixed_overhead, target)

    available = target - fixed_overhead
    weights = [s.scalable for s in spans]
    if available and not any(weights):
        if not spans:
            raise ValueError(f"{axis.value} has no span or gap to grow into")
        # Every span is at its minimum: grow them evenly
        weights = [1] * len(spans)

    allotments = diffuse(weights, available)
    scale = Fraction(available, sum(weights)) if any(weights) else Fraction(1)

    return AxisPlan(
        axis=axis,
        original_size=size,
        target_size=target,
        pinned=pinned_lines,
        spans=tuple(spans),
        allotments=tuple(allotments),
        scale=scale,
    )


def place_posts(offsets: Sequence[int], length: int, new_length: int) -> list[int]:
    """Move ground posts to their proportional offsets in a resized span.

    Posts stay in order, on distinct cells, inside the span.

    Args:
        offsets: Sorted post offsets within the source span
        length: Source span length
        new_length: Resized span length (at least ``len(offsets)``)

    Returns:
        Post offsets within the resized span
    """
    placed = [(2 * k + 1) * new_length // (2 * length) for k in offsets]
    for i in range(1, len(placed)):
        placed[i] = max(placed[i], placed[i - 1] + 1)
    upper = new_length
    for i in reversed(range(len(placed))):
        placed[i] = min(placed[i], upper - 1)
        upper = placed[i]
    return placed


def bridge_cell(before: Cell, after: Cell, orientation: Orientation) -> Cell:
    """Cell for a line inserted between two adjacent pinned lines.

    A wall linking the two lines is continued across the new line, floor is
    widened, anything else stays empty.
    """
    if before.bears(orientation) and after.bears(orientation):
        if orientation is Orientation.HORIZONTAL:
            return Cell.WALL_HORIZONTAL
        return Cell.WALL_VERTICAL
    if Cell.FLOOR in (before, after):
        return Cell.FLOOR
    return Cell.EMPTY


def relayout(
    lines: Sequence[T],
    line_map: Sequence[int | None],
    bridge: Callable[[T, T], T],
) -> list[T]:
    """Lay out source lines along a line map.

    Args:
        lines: Source lines (cells of a row, or whole rows)
        line_map: Source line of every target line, None for inserted lines
        bridge: Builds an inserted line from the pinned lines around it

    Returns:
        One entry per target line
    """
    laid: list[T] = []
    previous = 0
    for source in line_map:
        if source is None:
            laid.append(bridge(lines[previous], lines[previous + 1]))
        else:
            laid.append(lines[source])
            previous = source
    return laid


class TemplateResizer:
    """Resizes templates while preserving their topology.

    Example:
        resizer = TemplateResizer()
        resized = resizer.resize(template, 20, 12)
        print(resized.grid.to_ascii())
    """

    def __init__(self) -> None:
        self.extractor = TopologyExtractor()

    def resize(self, template: Template, target_width: int, target_height: int) -> ResizedTemplate:
        """Lay the template out at ``target_width`` x ``target_height``.

        Args:
            template: Extracted source template
            target_width: Requested number of columns
            target_height: Requested number of rows

        Returns:
            ResizedTemplate of exactly the requested size

        Raises:
            TooSmallError: If a dimension is below the structure's minimum
            DegenerateSegmentError: If a resized segment collapsed (internal)
            TopologyMismatchError: If the structure changed (internal)
        """
        grid = template.grid
        pinned = [a for a in template.anchors if a.pinned]
        posts = [a.col for a in template.anchors if a.role is AnchorRole.CONTACT]

        column_plan = plan_axis(
            Axis.WIDTH, grid.width, (a.col for a in pinned), target_width, contacts=posts
        )
        row_plan = plan_axis(Axis.HEIGHT, grid.height, (a.row for a in pinned), target_height)

        logger.debug(
            "Resizing %dx%d -> %dx%d (column scale %s, row scale %s)",
            grid.width, grid.height, target_width, target_height,
            column_plan.scale, row_plan.scale,
        )

        col_map = column_plan.line_map()
        row_map = row_plan.line_map()
        columns_laid = [
            relayout(
                row, col_map, lambda a, b: bridge_cell(a, b, Orientation.HORIZONTAL)
            )
            for row in grid.rows
        ]
        rows = [
            list(row)
            for row in relayout(
                columns_laid,
                row_map,
                lambda a, b: [bridge_cell(x, y, Orientation.VERTICAL) for x, y in zip(a, b)],
            )
        ]

        if posts:
            self._place_posts(rows[-1], sorted(posts), column_plan)

        resized_grid = Grid(rows=tuple(tuple(row) for row in rows))
        try:
            resized = self.extractor.extract(resized_grid)
        except MalformedTemplateError as e:
            raise TopologyMismatchError(f"resized grid is malformed: {e.reason}") from e

        self._verify(template, resized, target_width, target_height)

        return ResizedTemplate(
            template=resized,
            source=template,
            column_plan=column_plan,
            row_plan=row_plan,
        )

    @staticmethod
    def _place_posts(bottom: list[Cell], posts: list[int], plan: AxisPlan) -> None:
        """Re-place ground posts of every span on the bottom row."""
        for span, new_length, new_start in zip(plan.spans, plan.lengths, plan.target_starts()):
            offsets = [c - span.start for c in posts if span.start <= c < span.end]
            if not offsets:
                continue
            for col in range(new_start, new_start + new_length):
                if bottom[col] is Cell.GROUND_ANCHOR:
                    bottom[col] = Cell.WALL_HORIZONTAL
            for offset in place_posts(offsets, span.length, new_length):
                bottom[new_start + offset] = Cell.GROUND_ANCHOR

    @staticmethod
    def _verify(source: Template, resized: Template, width: int, height: int) -> None:
        if (resized.width, resized.height) != (width, height):
            raise TopologyMismatchError(
                f"grid is {resized.width}x{resized.height}, expected {width}x{height}"
            )
        for segment in resized.segments:
            if segment.length < 1:
                raise DegenerateSegmentError(
                    f"segment between anchors {segment.start} and {segment.end} "
                    f"has length {segment.length}"
                )
        if len(resized.anchors) != len(source.anchors):
            raise TopologyMismatchError(
                f"{len(resized.anchors)} anchors, expected {len(source.anchors)}"
            )
        if [a.role for a in resized.anchors] != [a.role for a in source.anchors]:
            raise TopologyMismatchError("anchor roles differ")
        if resized.segment_orientations() != source.segment_orientations():
            raise TopologyMismatchError("segment orientation sequence differs")


def resize(template: Template, target_width: int, target_height: int) -> ResizedTemplate:
    """Resize a template (see TemplateResizer.resize)."""
    return TemplateResizer().resize(template, target_width, target_height)
