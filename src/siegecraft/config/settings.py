"""Configuration settings for Siegecraft."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class OutputFormat(str, Enum):
    """Format of generated output."""

    ASCII = "ascii"
    SVG = "svg"
    JSON = "json"


class TemplateConfig(BaseModel):
    """Configuration for reading template text."""

    allow_ragged_rows: bool = Field(
        default=True,
        description="Pad rows shorter than the widest row with empty cells",
    )


class GeometryConfig(BaseModel):
    """Configuration for vector geometry emission."""

    cell_size: float = Field(
        default=10.0,
        gt=0.0,
        le=1000.0,
        description="Size of one grid cell in output units",
    )
    cell_centers: bool = Field(
        default=True,
        description="Place outline vertices at cell centers instead of cell corners",
    )
    stroke_width: float = Field(
        default=1.0,
        gt=0.0,
        description="Stroke width used for SVG output",
    )

    def to_point(self, row: int, col: int) -> tuple[float, float]:
        """Map a grid position to output coordinates.

        Args:
            row: Grid row
            col: Grid column

        Returns:
            (x, y) in output units
        """
        offset = 0.5 if self.cell_centers else 0.0
        return ((col + offset) * self.cell_size, (row + offset) * self.cell_size)


class ProcessingConfig(BaseModel):
    """Configuration for batch processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )
    output_format: OutputFormat = Field(
        default=OutputFormat.ASCII,
        description="Format written for every resized template",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class SiegecraftSettings(BaseModel):
    """Main application settings."""

    template: TemplateConfig = Field(default_factory=TemplateConfig)
    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> SiegecraftSettings:
    """Get default application settings."""
    return SiegecraftSettings()
