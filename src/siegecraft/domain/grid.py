"""Cell classification and the rectangular grid of cells.

This module defines the lowest level of the structural model:
- Cell: Classification of a single grid position
- Orientation: Horizontal or vertical wall direction
- Axis: Width or height of a grid
- Grid: Immutable rectangular arrangement of cells
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from siegecraft.exceptions import MalformedTemplateError


class Orientation(Enum):
    """Direction a wall run extends in."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class Axis(Enum):
    """Grid dimension."""

    WIDTH = "width"
    HEIGHT = "height"


class Cell(Enum):
    """Classification of one grid position.

    The value of each member is the template character that renders it.
    """

    CORNER = "+"
    WALL_HORIZONTAL = "-"
    WALL_VERTICAL = "|"
    FLOOR = "."
    GROUND_ANCHOR = "o"
    EMPTY = " "

    @classmethod
    def from_char(cls, char: str) -> "Cell":
        """Map a template character to its cell.

        Raises:
            ValueError: If the character is not part of the template alphabet
        """
        return cls(char)

    @property
    def char(self) -> str:
        """Template character for this cell."""
        return self.value

    @property
    def is_structural(self) -> bool:
        """True for cells that take part in the wall graph."""
        return self in _STRUCTURAL

    def bears(self, orientation: Orientation) -> bool:
        """Check whether this cell carries a wall along the given orientation.

        Corners and ground anchors bear both orientations, walls bear their
        own, floor and empty cells bear none.
        """
        if self in (Cell.CORNER, Cell.GROUND_ANCHOR):
            return True
        if orientation is Orientation.HORIZONTAL:
            return self is Cell.WALL_HORIZONTAL
        return self is Cell.WALL_VERTICAL


_STRUCTURAL = frozenset(
    {Cell.CORNER, Cell.WALL_HORIZONTAL, Cell.WALL_VERTICAL, Cell.GROUND_ANCHOR}
)


@dataclass(frozen=True, slots=True)
class Grid:
    """A rectangular, immutable grid of cells.

    Rows are indexed top to bottom, columns left to right. Every row has the
    same length and the grid is at least 1x1.

    Attributes:
        rows: Tuple of rows, each a tuple of cells
    """

    rows: tuple[tuple[Cell, ...], ...]

    def __post_init__(self) -> None:
        if not self.rows or not self.rows[0]:
            raise MalformedTemplateError("grid must be at least 1x1")
        width = len(self.rows[0])
        for row_idx, row in enumerate(self.rows):
            if len(row) != width:
                raise MalformedTemplateError(
                    f"row has {len(row)} cells, expected {width}",
                    position=(row_idx, min(len(row), width)),
                )

    @property
    def width(self) -> int:
        return len(self.rows[0])

    @property
    def height(self) -> int:
        return len(self.rows)

    def cell(self, row: int, col: int) -> Cell:
        """Cell at (row, col); out-of-bounds positions read as EMPTY."""
        if self.in_bounds(row, col):
            return self.rows[row][col]
        return Cell.EMPTY

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def positions(self) -> Iterator[tuple[int, int]]:
        """Iterate positions in reading order."""
        for row in range(self.height):
            for col in range(self.width):
                yield (row, col)

    def count(self, cell: Cell) -> int:
        return sum(r.count(cell) for r in self.rows)

    def to_ascii(self) -> str:
        """Render as template text, trailing spaces trimmed per row."""
        return "\n".join(
            "".join(c.char for c in row).rstrip() for row in self.rows
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with the untrimmed row strings
        """
        return {"rows": ["".join(c.char for c in row) for row in self.rows]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Grid":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with row strings

        Returns:
            Grid instance
        """
        return cls(
            rows=tuple(
                tuple(Cell.from_char(ch) for ch in row) for row in data["rows"]
            )
        )
