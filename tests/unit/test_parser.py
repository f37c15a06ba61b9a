"""Tests for template text parsing."""

import pytest

from siegecraft.core.parser import classify, disambiguate, parse_template, scan
from siegecraft.domain import Cell
from siegecraft.exceptions import MalformedTemplateError


class TestScan:
    """Tests for scan()."""

    def test_rectangular(self) -> None:
        """Test a rectangular template is split into rows."""
        raw = scan("+--+\n|..|\n+--+\n")
        assert raw == ("+--+", "|..|", "+--+")

    def test_trailing_whitespace_and_blank_lines(self) -> None:
        """Test trailing spaces and blank lines are ignored."""
        raw = scan("+--+   \n+--+\n\n   \n")
        assert raw == ("+--+", "+--+")

    def test_windows_line_endings(self) -> None:
        """Test CRLF line endings."""
        assert scan("+-+\r\n+-+\r\n") == ("+-+", "+-+")

    def test_empty(self) -> None:
        """Test empty text is rejected."""
        with pytest.raises(MalformedTemplateError, match="empty"):
            scan("\n  \n")

    def test_unrecognized_character(self) -> None:
        """Test characters outside the alphabet report their position."""
        with pytest.raises(MalformedTemplateError) as exc_info:
            scan("+--+\n|.#|\n+--+")
        assert exc_info.value.position == (1, 2)
        assert "'#'" in exc_info.value.reason

    def test_ragged_rows_rejected(self) -> None:
        """Test rows of differing lengths are rejected by default."""
        with pytest.raises(MalformedTemplateError) as exc_info:
            scan("+---+\n|..|\n+---+")
        assert exc_info.value.position == (1, 4)

    def test_ragged_rows_padded(self) -> None:
        """Test ragged rows are padded when allowed."""
        raw = scan("+---+\n|..|\n+---+", allow_ragged=True)
        assert raw == ("+---+", "|..| ", "+---+")


class TestClassify:
    """Tests for classify()."""

    def test_plain_characters(self) -> None:
        """Test unambiguous characters map directly."""
        raw = ("|.o",)
        assert classify((0, 0), raw) is Cell.WALL_VERTICAL
        assert classify((0, 1), raw) is Cell.FLOOR
        assert classify((0, 2), raw) is Cell.GROUND_ANCHOR

    def test_corner(self) -> None:
        """Test a cross touching both wall orientations is a corner."""
        raw = ("+-", "| ")
        assert classify((0, 0), raw) is Cell.CORNER

    def test_horizontal_extension(self) -> None:
        """Test a cross between horizontal walls extends them."""
        raw = ("-+-",)
        assert classify((0, 1), raw) is Cell.WALL_HORIZONTAL

    def test_vertical_extension(self) -> None:
        """Test a cross between vertical walls extends them."""
        raw = ("|", "+", "|")
        assert classify((1, 0), raw) is Cell.WALL_VERTICAL

    def test_spur_end(self) -> None:
        """Test the free end of a side branch becomes a wall."""
        raw = ("|.+--+", "|.|   ")
        assert classify((0, 2), raw) is Cell.CORNER
        assert classify((0, 5), raw) is Cell.WALL_HORIZONTAL

    def test_isolated(self) -> None:
        """Test an isolated cross stays a corner."""
        assert classify((0, 0), ("+",)) is Cell.CORNER

    def test_ground_anchor_bears_both(self) -> None:
        """Test ground anchors count as neighbours of either orientation."""
        raw = ("o+", " |")
        assert classify((0, 1), raw) is Cell.CORNER

    def test_order_independent(self) -> None:
        """Test classification reads only raw neighbours."""
        raw = ("+++", "+++")
        grid = disambiguate(raw)
        assert all(cell is Cell.CORNER for row in grid.rows for cell in row)


class TestParseTemplate:
    """Tests for parse_template()."""

    def test_box(self) -> None:
        """Test a simple box parses to corners, walls and floor."""
        grid = parse_template("+--+\n|..|\n+--+")
        assert grid.width == 4
        assert grid.height == 3
        assert grid.count(Cell.CORNER) == 4
        assert grid.count(Cell.FLOOR) == 2
        assert grid.to_ascii() == "+--+\n|..|\n+--+"

    def test_hash_rejected(self) -> None:
        """Test a template containing '#' fails."""
        with pytest.raises(MalformedTemplateError):
            parse_template("+--+\n|#.|\n+--+")

    def test_ragged_flag(self) -> None:
        """Test ragged rows only parse when allowed."""
        text = "+--+\n|..|\n|..+-\n+--+"
        with pytest.raises(MalformedTemplateError):
            parse_template(text)
        grid = parse_template(text, allow_ragged=True)
        assert grid.width == 5
        assert grid.cell(0, 4) is Cell.EMPTY
