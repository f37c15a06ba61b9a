"""Template text parsing.

Parsing happens in two steps:
- scan: validate the text and produce a rectangular raw character grid
- disambiguate: classify every raw character into a Cell, looking at its
  four neighbours in the finished raw grid

``+`` is the only ambiguous character. It becomes a CORNER when it touches a
horizontal-wall-bearing neighbour on the left or right and a
vertical-wall-bearing neighbour above or below; otherwise it extends the wall
it touches. Classification reads only the raw grid, so the result does not
depend on the order cells are visited in.
"""

import logging

from siegecraft.domain import Cell, Grid
from siegecraft.exceptions import MalformedTemplateError

logger = logging.getLogger(__name__)

RawGrid = tuple[str, ...]

TEMPLATE_ALPHABET = frozenset("+-|.o ")

_HORIZONTAL_BEARING = frozenset("-+o")
_VERTICAL_BEARING = frozenset("|+o")


def scan(text: str, allow_ragged: bool = False) -> RawGrid:
    """Validate template text and split it into equal-length rows.

    Trailing whitespace of every line and trailing blank lines are dropped.

    Args:
        text: Raw template text, one grid row per line
        allow_ragged: Right-pad short rows with empty cells instead of
            rejecting them

    Returns:
        Tuple of row strings, all of the same length

    Raises:
        MalformedTemplateError: If the text is empty, contains a character
            outside the template alphabet, or (unless ``allow_ragged``) has
            rows of differing lengths
    """
    lines = [line.rstrip() for line in text.splitlines()]
    while lines and not lines[-1]:
        lines.pop()
    if not lines:
        raise MalformedTemplateError("template is empty")

    for row, line in enumerate(lines):
        for col, char in enumerate(line):
            if char not in TEMPLATE_ALPHABET:
                raise MalformedTemplateError(
                    f"unrecognized character {char!r}", position=(row, col)
                )

    width = max(len(line) for line in lines)
    if not allow_ragged:
        for row, line in enumerate(lines):
            if len(line) != width:
                raise MalformedTemplateError(
                    f"row has {len(line)} columns, expected {width}",
                    position=(row, len(line)),
                )

    return tuple(line.ljust(width) for line in lines)


def _raw_at(raw: RawGrid, row: int, col: int) -> str:
    if 0 <= row < len(raw) and 0 <= col < len(raw[row]):
        return raw[row][col]
    return " "


def classify(position: tuple[int, int], raw: RawGrid) -> Cell:
    """Classify the raw character at ``position``.

    Args:
        position: (row, col) of the cell
        raw: Finished raw grid from ``scan``

    Returns:
        The cell classification
    """
    row, col = position
    char = raw[row][col]
    if char != "+":
        return Cell.from_char(char)

    horizontal = (
        _raw_at(raw, row, col - 1) in _HORIZONTAL_BEARING
        or _raw_at(raw, row, col + 1) in _HORIZONTAL_BEARING
    )
    vertical = (
        _raw_at(raw, row - 1, col) in _VERTICAL_BEARING
        or _raw_at(raw, row + 1, col) in _VERTICAL_BEARING
    )

    if horizontal and vertical:
        return Cell.CORNER
    if horizontal:
        return Cell.WALL_HORIZONTAL
    if vertical:
        return Cell.WALL_VERTICAL
    # Isolated cross: nothing to extend
    return Cell.CORNER


def disambiguate(raw: RawGrid) -> Grid:
    """Classify every raw character into a grid of cells."""
    return Grid(
        rows=tuple(
            tuple(classify((row, col), raw) for col in range(len(raw[row])))
            for row in range(len(raw))
        )
    )


def parse_template(text: str, allow_ragged: bool = False) -> Grid:
    """Parse template text into a disambiguated grid.

    Args:
        text: Template text
        allow_ragged: Accept rows shorter than the widest row

    Returns:
        Grid of classified cells

    Raises:
        MalformedTemplateError: If the text is not a valid template
    """
    raw = scan(text, allow_ragged=allow_ragged)
    grid = disambiguate(raw)
    logger.debug("Parsed template: %dx%d", grid.width, grid.height)
    return grid
