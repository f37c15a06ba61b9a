"""Output writer for resized templates.

Writes a resized template as ASCII text, an SVG document or JSON.
"""

import json
from pathlib import Path

from siegecraft.config import GeometryConfig, OutputFormat
from siegecraft.core.emitter import to_svg
from siegecraft.domain import Outline, ResizedTemplate
from siegecraft.exceptions import TemplateSaveError

_EXTENSIONS = {
    OutputFormat.ASCII: "txt",
    OutputFormat.SVG: "svg",
    OutputFormat.JSON: "json",
}


def render_output(
    resized: ResizedTemplate,
    outlines: tuple[Outline, ...],
    output_format: OutputFormat,
    config: GeometryConfig | None = None,
) -> str:
    """Render a resized template in the requested format.

    Args:
        resized: Resized template
        outlines: Outlines emitted for it
        output_format: ASCII, SVG or JSON
        config: Geometry configuration used for the outlines

    Returns:
        Output text
    """
    if output_format is OutputFormat.SVG:
        return to_svg(outlines, resized.width, resized.height, config)
    if output_format is OutputFormat.JSON:
        data = resized.to_dict()
        data["outlines"] = [o.to_dict() for o in outlines]
        return json.dumps(data, indent=2) + "\n"
    return resized.grid.to_ascii() + "\n"


class TemplateWriter:
    """Saves generated output.

    Example:
        writer = TemplateWriter(Path("tower-20x12.svg"))
        writer.write(svg_text)
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize the writer.

        Args:
            output_path: Destination file
        """
        self._output_path = output_path

    @property
    def output_path(self) -> Path:
        return self._output_path

    def write(self, content: str) -> None:
        """Write output text, creating parent directories.

        Raises:
            TemplateSaveError: If the file cannot be written
        """
        try:
            self._output_path.parent.mkdir(parents=True, exist_ok=True)
            self._output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise TemplateSaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_resized_path(
        input_path: Path,
        width: int,
        height: int,
        output_format: OutputFormat = OutputFormat.ASCII,
        output_dir: Path | None = None,
    ) -> Path:
        """Generate the output path for a resized template.

        Args:
            input_path: Template path
            width: Target width
            height: Target height
            output_format: Output format (decides the extension)
            output_dir: Directory for the output (input directory if None)

        Returns:
            Path like ``{dir}/{stem}-{width}x{height}.{ext}``
        """
        directory = output_dir if output_dir is not None else input_path.parent
        ext = _EXTENSIONS[output_format]
        return directory / f"{input_path.stem}-{width}x{height}.{ext}"
