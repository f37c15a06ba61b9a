"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from siegecraft.config import (
    GeometryConfig,
    OutputFormat,
    SiegecraftSettings,
    get_default_settings,
)


class TestGeometryConfig:
    """Tests for GeometryConfig."""

    def test_defaults(self) -> None:
        """Test default cell size and centering."""
        config = GeometryConfig()
        assert config.cell_size == 10.0
        assert config.to_point(1, 2) == (25.0, 15.0)

    def test_cell_corners(self) -> None:
        """Test vertices on cell corners."""
        config = GeometryConfig(cell_size=4.0, cell_centers=False)
        assert config.to_point(1, 2) == (8.0, 4.0)

    def test_cell_size_must_be_positive(self) -> None:
        """Test invalid cell sizes are rejected."""
        with pytest.raises(ValidationError):
            GeometryConfig(cell_size=0.0)


class TestSiegecraftSettings:
    """Tests for the aggregate settings."""

    def test_defaults(self) -> None:
        """Test default settings."""
        settings = get_default_settings()
        assert settings.template.allow_ragged_rows is True
        assert settings.processing.output_format is OutputFormat.ASCII
        assert settings.logging.log_level == "WARNING"

    def test_round_trip(self) -> None:
        """Test settings survive the dict form sent to worker processes."""
        settings = SiegecraftSettings.model_validate(
            {"processing": {"output_format": "svg", "max_workers": 2}}
        )
        restored = SiegecraftSettings(**settings.model_dump(mode="json"))
        assert restored == settings
        assert restored.processing.output_format is OutputFormat.SVG
