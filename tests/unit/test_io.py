"""Unit tests for the template I/O layer.

Tests for TemplateReader, TemplateWriter, and converter functions.
"""

import json
from pathlib import Path

import pytest

from siegecraft.config import GeometryConfig, OutputFormat
from siegecraft.core.emitter import GeometryEmitter
from siegecraft.core.extractor import extract_topology
from siegecraft.core.parser import parse_template
from siegecraft.core.resizer import resize
from siegecraft.domain import Cell
from siegecraft.exceptions import MalformedTemplateError, TemplateLoadError, TemplateSaveError
from siegecraft.io import TemplateReader, TemplateWriter, csv_to_ascii, render_output

BOX = "+--+\n|..|\n+--+\n"


class TestCsvToAscii:
    """Tests for csv_to_ascii()."""

    def test_tile_codes(self) -> None:
        """Test every tile code maps to its template character."""
        assert csv_to_ascii("4,2,2,4\n3,5,5,3\n1,2,2,1\n") == "+--+\n|..|\no--o"

    def test_empty_tiles(self) -> None:
        """Test code 0 is an empty cell and fields may be padded."""
        assert csv_to_ascii("0, 4,2,4\n0, 4,2,4") == " +-+\n +-+"

    def test_unknown_code(self) -> None:
        """Test unknown codes report their position."""
        with pytest.raises(MalformedTemplateError) as exc_info:
            csv_to_ascii("4,2,4\n4,9,4")
        assert exc_info.value.position == (1, 1)


class TestTemplateReader:
    """Tests for TemplateReader class."""

    def test_init(self) -> None:
        """Test TemplateReader initialization."""
        path = Path("tower.txt")
        reader = TemplateReader(path)
        assert reader._template_path == path
        assert reader._text is None
        assert reader.name == "tower"

    def test_load_nonexistent_file(self) -> None:
        """Test loading a nonexistent file raises TemplateLoadError."""
        reader = TemplateReader(Path("nonexistent.txt"))
        with pytest.raises(TemplateLoadError, match="file not found"):
            reader.load()

    def test_text_before_load(self) -> None:
        """Test accessing text before loading raises RuntimeError."""
        reader = TemplateReader(Path("tower.txt"))
        with pytest.raises(RuntimeError, match="Template not loaded"):
            _ = reader.text

    def test_format(self) -> None:
        """Test format detection from the extension."""
        assert TemplateReader(Path("a.txt")).format == "ASCII"
        assert TemplateReader(Path("a.CSV")).format == "CSV"

    def test_load_ascii(self, tmp_path: Path) -> None:
        """Test loading an ASCII template."""
        path = tmp_path / "box.txt"
        path.write_text(BOX, encoding="utf-8")
        reader = TemplateReader(path)
        grid = reader.load()
        assert (grid.width, grid.height) == (4, 3)
        assert reader.text == BOX

    def test_load_csv(self, tmp_path: Path) -> None:
        """Test loading a CSV template."""
        path = tmp_path / "box.csv"
        path.write_text("4,2,2,4\n3,5,5,3\n4,2,2,4\n", encoding="utf-8")
        grid = TemplateReader(path).load()
        assert grid.to_ascii() == BOX.rstrip("\n")

    def test_ragged_rows(self, tmp_path: Path) -> None:
        """Test ragged rows are padded unless the reader is strict."""
        path = tmp_path / "ragged.txt"
        path.write_text("+--+\n|..+-\n+--+\n", encoding="utf-8")
        assert TemplateReader(path).load().width == 5
        with pytest.raises(MalformedTemplateError):
            TemplateReader(path, allow_ragged=False).load()

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        """Test undecodable files raise TemplateLoadError."""
        path = tmp_path / "bad.txt"
        path.write_bytes(b"\xff\xfe\x00+")
        with pytest.raises(TemplateLoadError):
            TemplateReader(path).load()


class TestTemplateWriter:
    """Tests for TemplateWriter class."""

    def test_write_creates_directories(self, tmp_path: Path) -> None:
        """Test writing into a missing directory."""
        path = tmp_path / "out" / "nested" / "box.txt"
        TemplateWriter(path).write("+-+\n")
        assert path.read_text(encoding="utf-8") == "+-+\n"

    def test_write_failure(self, tmp_path: Path) -> None:
        """Test writing onto a directory raises TemplateSaveError."""
        with pytest.raises(TemplateSaveError):
            TemplateWriter(tmp_path).write("+-+\n")

    def test_get_resized_path(self) -> None:
        """Test output path naming."""
        path = TemplateWriter.get_resized_path(Path("/tmp/tower.txt"), 20, 12)
        assert path == Path("/tmp/tower-20x12.txt")

    def test_get_resized_path_with_dir(self) -> None:
        """Test output path in a separate directory."""
        path = TemplateWriter.get_resized_path(
            Path("/tmp/tower.csv"), 8, 5, OutputFormat.SVG, Path("/out")
        )
        assert path == Path("/out/tower-8x5.svg")


class TestRenderOutput:
    """Tests for render_output()."""

    @pytest.fixture
    def resized(self):
        return resize(extract_topology(parse_template(BOX)), 6, 4)

    def test_ascii(self, resized) -> None:
        """Test ASCII output ends with a newline."""
        outlines = GeometryEmitter().emit(resized)
        text = render_output(resized, outlines, OutputFormat.ASCII)
        assert text == "+----+\n|....|\n|....|\n+----+\n"

    def test_svg(self, resized) -> None:
        """Test SVG output uses the cell size."""
        config = GeometryConfig(cell_size=5.0)
        outlines = GeometryEmitter(config).emit(resized)
        text = render_output(resized, outlines, OutputFormat.SVG, config)
        assert 'viewBox="0 0 30 20"' in text

    def test_json(self, resized) -> None:
        """Test JSON output carries grid, plans and outlines."""
        outlines = GeometryEmitter().emit(resized)
        data = json.loads(render_output(resized, outlines, OutputFormat.JSON))
        assert data["template"]["grid"]["rows"][0] == "+----+"
        assert data["column_plan"]["target_size"] == 6
        assert len(data["outlines"]) == 1
        assert data["outlines"][0]["closed"] is True
        assert len(data["template"]["anchors"]) == 4
        assert resized.grid.count(Cell.FLOOR) == 8
