"""Template I/O layer for siegecraft.

Key responsibilities:
- Load ASCII and CSV templates
- Render resized templates as ASCII, SVG or JSON
- Write output files with the ``{stem}-{w}x{h}`` naming convention

Key classes:
- TemplateReader: Load templates into grids
- TemplateWriter: Save generated output
"""

from siegecraft.io.reader import TemplateReader, csv_to_ascii
from siegecraft.io.writer import TemplateWriter, render_output

__all__ = [
    "TemplateReader",
    "TemplateWriter",
    "csv_to_ascii",
    "render_output",
]
