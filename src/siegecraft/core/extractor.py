"""Topology extraction: from a grid of cells to anchors and segments.

The wall graph has a node for every structural cell (corner, wall, ground
anchor). Two orthogonally adjacent structural cells are linked along an axis
when both bear that axis; corners and ground anchors bear both.

Anchors are the graph's structural points: every corner, every ground
anchor and every wall cell with at most one link (a dead end). Everything
between two anchors is a straight wall run, which becomes a Segment.

The outline of each disjoint sub-structure is traced by walking the outside
of the graph with the left-hand rule, starting at the sub-structure's
top-left-most cell. With rows growing downward this walk is clockwise on
screen, and a side branch is walked out and back.
"""

import logging
from collections import deque

from siegecraft.domain import (
    Anchor,
    AnchorRole,
    Cell,
    FloorSpan,
    Grid,
    Orientation,
    Segment,
    Template,
)
from siegecraft.exceptions import MalformedTemplateError

logger = logging.getLogger(__name__)

Position = tuple[int, int]
Direction = tuple[int, int]

NORTH: Direction = (-1, 0)
EAST: Direction = (0, 1)
SOUTH: Direction = (1, 0)
WEST: Direction = (0, -1)

# Clockwise on screen
DIRECTIONS: tuple[Direction, ...] = (NORTH, EAST, SOUTH, WEST)


def orientation_of(direction: Direction) -> Orientation:
    if direction[0] == 0:
        return Orientation.HORIZONTAL
    return Orientation.VERTICAL


def _step(position: Position, direction: Direction) -> Position:
    return (position[0] + direction[0], position[1] + direction[1])


def _turn(direction: Direction, quarter_turns: int) -> Direction:
    return DIRECTIONS[(DIRECTIONS.index(direction) + quarter_turns) % 4]


def wall_links(grid: Grid) -> dict[Position, tuple[Direction, ...]]:
    """Compute the linked directions of every structural cell.

    Args:
        grid: Disambiguated grid

    Returns:
        Mapping of structural cell position to its linked directions, in
        clockwise order starting north
    """
    links: dict[Position, tuple[Direction, ...]] = {}
    for row, col in grid.positions():
        cell = grid.cell(row, col)
        if not cell.is_structural:
            continue
        links[(row, col)] = tuple(
            d
            for d in DIRECTIONS
            if cell.bears(orientation_of(d))
            and grid.cell(row + d[0], col + d[1]).bears(orientation_of(d))
        )
    return links


def is_anchor_cell(cell: Cell, degree: int) -> bool:
    return cell in (Cell.CORNER, Cell.GROUND_ANCHOR) or degree <= 1


class TopologyExtractor:
    """Builds a Template from a disambiguated grid.

    Example:
        extractor = TopologyExtractor()
        template = extractor.extract(parse_template(text))
        for anchor in template.anchors:
            print(anchor.position, anchor.role)
    """

    def extract(self, grid: Grid) -> Template:
        """Extract anchors, segments, floor spans and outlines.

        Args:
            grid: Disambiguated grid

        Returns:
            Template for the grid

        Raises:
            MalformedTemplateError: If the structure has fewer than 3
                anchors, a sub-structure whose outline does not close, or a
                ground anchor above the bottom row
        """
        links = wall_links(grid)
        anchor_cells = [
            pos for pos in links if is_anchor_cell(grid.cell(*pos), len(links[pos]))
        ]

        if len(anchor_cells) < 3:
            raise MalformedTemplateError(
                f"degenerate structure: {len(anchor_cells)} anchors found, at least 3 required",
                position=anchor_cells[0] if anchor_cells else None,
            )

        components = self._components(links)
        for component in components:
            self._check_closed(component, links)

        for row, col in anchor_cells:
            if grid.cell(row, col) is Cell.GROUND_ANCHOR and row != grid.height - 1:
                raise MalformedTemplateError(
                    "ground anchor above baseline", position=(row, col)
                )

        anchor_set = set(anchor_cells)
        index: dict[Position, int] = {}
        order: list[Position] = []
        turns: dict[Position, AnchorRole] = {}
        outlines: list[tuple[int, ...]] = []
        segments: list[Segment] = []
        seen_runs: set[tuple[int, int]] = set()

        def index_of(pos: Position) -> int:
            if pos not in index:
                index[pos] = len(order)
                order.append(pos)
            return index[pos]

        for component in components:
            steps = self._walk(component[0], links)
            visits: list[int] = []
            last_anchor: int | None = None
            for i, (pos, heading) in enumerate(steps):
                if pos not in anchor_set:
                    continue
                idx = index_of(pos)
                if i < len(steps) - 1:
                    visits.append(idx)
                    incoming = heading if i > 0 else steps[-1][1]
                    outgoing = steps[i + 1][1]
                    turns.setdefault(pos, self._turn_role(incoming, outgoing))
                if last_anchor is not None:
                    self._add_segment(
                        segments, seen_runs, order, last_anchor, idx, heading
                    )
                last_anchor = idx
            outlines.append(tuple(visits))

        # Anchors and runs not reached by any outline walk
        for pos in sorted(anchor_set - set(index)):
            index_of(pos)
        for start in range(len(order)):
            for direction in links[order[start]]:
                pos = _step(order[start], direction)
                while pos not in anchor_set:
                    pos = _step(pos, direction)
                self._add_segment(
                    segments, seen_runs, order, start, index[pos], direction
                )

        anchors = tuple(
            Anchor(
                row=pos[0],
                col=pos[1],
                role=self._role(grid, pos, links[pos], turns),
                grounded=grid.cell(*pos) is Cell.GROUND_ANCHOR,
            )
            for pos in order
        )

        logger.debug(
            "Extracted topology: %d anchors, %d segments, %d outlines",
            len(anchors), len(segments), len(outlines),
        )

        return Template(
            grid=grid,
            anchors=anchors,
            segments=tuple(segments),
            floor_spans=self._floor_spans(grid),
            outlines=tuple(outlines),
        )

    @staticmethod
    def _components(links: dict[Position, tuple[Direction, ...]]) -> list[list[Position]]:
        """Connected sub-structures, each listed from its top-left-most cell."""
        seen: set[Position] = set()
        components = []
        for start in sorted(links):
            if start in seen:
                continue
            seen.add(start)
            component = [start]
            queue = deque([start])
            while queue:
                pos = queue.popleft()
                for direction in links[pos]:
                    nxt = _step(pos, direction)
                    if nxt not in seen:
                        seen.add(nxt)
                        component.append(nxt)
                        queue.append(nxt)
            components.append(component)
        return components

    @staticmethod
    def _check_closed(
        component: list[Position], links: dict[Position, tuple[Direction, ...]]
    ) -> None:
        """A sub-structure encloses area only if its wall graph has a cycle."""
        edges = sum(len(links[pos]) for pos in component) // 2
        if edges >= len(component):
            return
        dead_ends = sorted(pos for pos in component if len(links[pos]) <= 1)
        raise MalformedTemplateError(
            "outline does not close",
            position=dead_ends[0] if dead_ends else component[0],
        )

    @staticmethod
    def _walk(
        start: Position, links: dict[Position, tuple[Direction, ...]]
    ) -> list[tuple[Position, Direction]]:
        """Walk the outside of a sub-structure with the left-hand rule.

        Returns:
            (position, arrival heading) for every step; the first entry is the
            start with the heading it was finally re-entered with, and the last
            entry is the return to the start
        """
        heading = NORTH
        pos = start
        steps: list[tuple[Position, Direction]] = [(start, NORTH)]
        first_move: tuple[Position, Direction] | None = None
        while True:
            # left, straight, right, back
            outgoing = next(
                d for d in (_turn(heading, q) for q in (-1, 0, 1, 2)) if d in links[pos]
            )
            if first_move is None:
                first_move = (pos, outgoing)
            elif (pos, outgoing) == first_move:
                break
            pos = _step(pos, outgoing)
            heading = outgoing
            steps.append((pos, heading))
        steps[0] = (start, steps[-1][1])
        return steps

    @staticmethod
    def _turn_role(incoming: Direction, outgoing: Direction) -> AnchorRole:
        if outgoing == _turn(incoming, 1):
            return AnchorRole.CONVEX
        return AnchorRole.CONCAVE

    @staticmethod
    def _role(
        grid: Grid,
        pos: Position,
        directions: tuple[Direction, ...],
        turns: dict[Position, AnchorRole],
    ) -> AnchorRole:
        degree = len(directions)
        if degree >= 3:
            return AnchorRole.JUNCTION
        if degree <= 1:
            return AnchorRole.TERMINAL
        first, second = directions
        if _turn(first, 2) == second:
            if grid.cell(*pos) is Cell.GROUND_ANCHOR:
                return AnchorRole.CONTACT
            return AnchorRole.JUNCTION
        return turns.get(pos, AnchorRole.CONCAVE)

    @staticmethod
    def _add_segment(
        segments: list[Segment],
        seen_runs: set[tuple[int, int]],
        order: list[Position],
        start: int,
        end: int,
        direction: Direction,
    ) -> None:
        key = (min(start, end), max(start, end))
        if key in seen_runs:
            return
        seen_runs.add(key)
        (r0, c0), (r1, c1) = order[start], order[end]
        segments.append(
            Segment(
                orientation=orientation_of(direction),
                start=start,
                end=end,
                length=abs(r1 - r0) + abs(c1 - c0),
            )
        )

    @staticmethod
    def _floor_spans(grid: Grid) -> tuple[FloorSpan, ...]:
        """Maximal floor runs per row with their nearest walls on each side."""
        spans = []
        for row_idx, row in enumerate(grid.rows):
            col = 0
            while col < grid.width:
                if row[col] is not Cell.FLOOR:
                    col += 1
                    continue
                start = col
                while col < grid.width and row[col] is Cell.FLOOR:
                    col += 1
                left = next(
                    (c for c in range(start - 1, -1, -1) if row[c].is_structural), None
                )
                right = next(
                    (c for c in range(col, grid.width) if row[c].is_structural), None
                )
                spans.append(
                    FloorSpan(
                        row=row_idx,
                        start_col=start,
                        end_col=col - 1,
                        left_wall=left,
                        right_wall=right,
                    )
                )
        return tuple(spans)


def extract_topology(grid: Grid) -> Template:
    """Extract a Template from a grid (see TopologyExtractor.extract)."""
    return TopologyExtractor().extract(grid)
