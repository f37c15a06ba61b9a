"""Template reader for loading template files.

Two file formats are understood:
- ASCII templates (any extension except ``.csv``): the template text itself
- CSV templates: one numeric tile code per field, one grid row per record
"""

import csv
import io
from pathlib import Path

from siegecraft.core.parser import parse_template
from siegecraft.domain import Grid
from siegecraft.exceptions import MalformedTemplateError, TemplateLoadError

# Numeric tile codes used by CSV templates
CSV_TILE_CODES = {
    "0": " ",  # empty
    "1": "o",  # ground anchor (wheel)
    "2": "-",  # horizontal beam
    "3": "|",  # vertical beam
    "4": "+",  # cross
    "5": ".",  # wall fill
}


def csv_to_ascii(text: str) -> str:
    """Convert a CSV tile-code template to ASCII template text.

    Args:
        text: CSV text

    Returns:
        Equivalent ASCII template text

    Raises:
        MalformedTemplateError: If a field is not a known tile code
    """
    lines = []
    for row, record in enumerate(csv.reader(io.StringIO(text))):
        chars = []
        for col, field in enumerate(record):
            code = field.strip()
            if code not in CSV_TILE_CODES:
                raise MalformedTemplateError(
                    f"unknown tile code {code!r}", position=(row, col)
                )
            chars.append(CSV_TILE_CODES[code])
        lines.append("".join(chars))
    return "\n".join(lines)


class TemplateReader:
    """Loads template files into grids.

    Example:
        reader = TemplateReader(Path("tower.txt"))
        grid = reader.load()
        print(grid.width, grid.height)
    """

    def __init__(self, template_path: Path, allow_ragged: bool = True) -> None:
        """Initialize the template reader.

        Args:
            template_path: Path to an ASCII or CSV template
            allow_ragged: Accept ASCII rows shorter than the widest row
        """
        self._template_path = template_path
        self._allow_ragged = allow_ragged
        self._text: str | None = None

    @property
    def name(self) -> str:
        return self._template_path.stem

    @property
    def format(self) -> str:
        """Return 'CSV' for CSV templates, 'ASCII' otherwise."""
        if self._template_path.suffix.lower() == ".csv":
            return "CSV"
        return "ASCII"

    @property
    def text(self) -> str:
        """ASCII template text of the loaded file.

        Raises:
            RuntimeError: If the template has not been loaded yet
        """
        if self._text is None:
            raise RuntimeError("Template not loaded. Call load() first.")
        return self._text

    def load(self) -> Grid:
        """Read and parse the template file.

        Returns:
            Disambiguated grid

        Raises:
            TemplateLoadError: If the file cannot be read
            MalformedTemplateError: If the content is not a valid template
        """
        if not self._template_path.exists():
            raise TemplateLoadError(str(self._template_path), "file not found")

        try:
            content = self._template_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateLoadError(str(self._template_path), str(e)) from e

        if self.format == "CSV":
            self._text = csv_to_ascii(content)
        else:
            self._text = content

        return parse_template(self._text, allow_ragged=self._allow_ragged)
