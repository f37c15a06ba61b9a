"""Tests for topology extraction."""

import pytest

from siegecraft.core.extractor import TopologyExtractor, extract_topology, wall_links
from siegecraft.core.parser import parse_template
from siegecraft.domain import AnchorRole, Orientation
from siegecraft.exceptions import MalformedTemplateError

H = Orientation.HORIZONTAL
V = Orientation.VERTICAL

BOX = "+--+\n|..|\n+--+"

SIEGE_TOWER = """\
+-------+
|.......|
|.......|
|.......|
|.......+----+
|.......|
|.......|
|.......|
o---o---o
"""


class TestWallLinks:
    """Tests for wall_links()."""

    def test_box_links(self) -> None:
        """Test every box cell has two links and floor has none."""
        links = wall_links(parse_template(BOX))
        assert (1, 1) not in links
        assert all(len(dirs) == 2 for dirs in links.values())

    def test_walls_only_link_along_their_axis(self) -> None:
        """Test a vertical wall does not link sideways to a horizontal wall."""
        links = wall_links(parse_template("+-+\n|-|\n+-+"))
        assert links[(1, 0)] == ((-1, 0), (1, 0))
        assert links[(1, 1)] == ()


class TestBox:
    """Tests for the simplest closed structure."""

    @pytest.fixture
    def template(self):
        return extract_topology(parse_template(BOX))

    def test_anchors(self, template) -> None:
        """Test corners are anchors in clockwise order from the top-left."""
        assert [a.position for a in template.anchors] == [(0, 0), (0, 3), (2, 3), (2, 0)]
        assert all(a.role is AnchorRole.CONVEX for a in template.anchors)

    def test_segments(self, template) -> None:
        """Test segment orientations and lengths."""
        assert template.segment_orientations() == (H, V, H, V)
        assert [s.length for s in template.segments] == [3, 2, 3, 2]
        assert [(s.start, s.end) for s in template.segments] == [(0, 1), (1, 2), (2, 3), (3, 0)]

    def test_outline(self, template) -> None:
        """Test the single outline visits every anchor once."""
        assert template.outlines == ((0, 1, 2, 3),)

    def test_floor_spans(self, template) -> None:
        """Test floor runs and their bounding walls."""
        assert len(template.floor_spans) == 1
        span = template.floor_spans[0]
        assert (span.row, span.start_col, span.end_col) == (1, 1, 2)
        assert span.enclosed


class TestSiegeTower:
    """Tests for a tower with a side branch and ground posts."""

    @pytest.fixture
    def template(self):
        return extract_topology(parse_template(SIEGE_TOWER, allow_ragged=True))

    def test_anchor_positions(self, template) -> None:
        """Test outline order walks out along the side branch and back."""
        assert [a.position for a in template.anchors] == [
            (0, 0), (0, 8), (4, 8), (4, 13), (8, 8), (8, 4), (8, 0),
        ]

    def test_anchor_roles(self, template) -> None:
        """Test junction, dead end and ground post roles."""
        assert [a.role for a in template.anchors] == [
            AnchorRole.CONVEX,
            AnchorRole.CONVEX,
            AnchorRole.JUNCTION,
            AnchorRole.TERMINAL,
            AnchorRole.CONVEX,
            AnchorRole.CONTACT,
            AnchorRole.CONVEX,
        ]

    def test_ground_contacts(self, template) -> None:
        """Test the three ground posts are grounded."""
        assert [a.position for a in template.contacts] == [(8, 8), (8, 4), (8, 0)]

    def test_segments(self, template) -> None:
        """Test the side branch is one segment, walked only once."""
        assert template.segment_orientations() == (H, V, H, V, H, H, V)
        assert [s.length for s in template.segments] == [8, 4, 5, 4, 4, 4, 8]

    def test_outline_revisits_junction(self, template) -> None:
        """Test the outline returns to the junction after the branch."""
        assert template.outlines == ((0, 1, 2, 3, 2, 4, 5, 6),)


class TestRoles:
    """Tests for convex, concave and junction roles."""

    def test_concave_corner(self) -> None:
        """Test a left turn of the clockwise walk is concave."""
        text = "+--+\n|..|\n|..+-+\n|....|\n+----+"
        template = extract_topology(parse_template(text, allow_ragged=True))
        roles = {a.position: a.role for a in template.anchors}
        assert roles[(2, 3)] is AnchorRole.CONCAVE
        assert roles[(2, 5)] is AnchorRole.CONVEX
        assert list(roles.values()).count(AnchorRole.CONVEX) == 5

    def test_interior_wall(self) -> None:
        """Test walls inside the outline become junctions and extra segments."""
        template = extract_topology(parse_template("+--+--+\n|..|..|\n+--+--+"))
        roles = {a.position: a.role for a in template.anchors}
        assert roles[(0, 3)] is AnchorRole.JUNCTION
        assert roles[(2, 3)] is AnchorRole.JUNCTION
        assert len(template.anchors) == 6
        assert len(template.segments) == 7
        assert template.outlines == ((0, 1, 2, 3, 4, 5),)

    def test_disjoint_structures(self) -> None:
        """Test each sub-structure gets its own outline."""
        template = extract_topology(parse_template("+-+ +-+\n|.| |.|\n+-+ +-+"))
        assert template.outlines == ((0, 1, 2, 3), (4, 5, 6, 7))
        assert template.anchors[4].position == (0, 4)


class TestMalformed:
    """Tests for structures that cannot be extracted."""

    def test_degenerate(self) -> None:
        """Test fewer than three anchors is rejected."""
        with pytest.raises(MalformedTemplateError, match="degenerate"):
            extract_topology(parse_template("+-+"))

    def test_no_structure(self) -> None:
        """Test a grid with only floor is degenerate."""
        with pytest.raises(MalformedTemplateError) as exc_info:
            extract_topology(parse_template("..."))
        assert exc_info.value.position is None

    def test_open_outline(self) -> None:
        """Test a structure without a closed loop is rejected at a dead end."""
        with pytest.raises(MalformedTemplateError, match="does not close") as exc_info:
            extract_topology(parse_template("+  +\n|  |\n+--+"))
        assert exc_info.value.position == (0, 0)

    def test_ground_above_baseline(self) -> None:
        """Test ground anchors must sit on the bottom row."""
        with pytest.raises(MalformedTemplateError, match="baseline") as exc_info:
            extract_topology(parse_template("+--+\no..|\n+--+"))
        assert exc_info.value.position == (1, 0)

    def test_extractor_is_reusable(self) -> None:
        """Test one extractor handles several grids."""
        extractor = TopologyExtractor()
        first = extractor.extract(parse_template(BOX))
        second = extractor.extract(parse_template(BOX))
        assert first == second
