"""Configuration management for siegecraft.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- TemplateConfig: Template reading settings
- GeometryConfig: Vector output settings
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- SiegecraftSettings: Main application settings
"""

from siegecraft.config.settings import (
    GeometryConfig,
    LoggingConfig,
    OutputFormat,
    ProcessingConfig,
    SiegecraftSettings,
    TemplateConfig,
    get_default_settings,
)

__all__ = [
    "GeometryConfig",
    "LoggingConfig",
    "OutputFormat",
    "ProcessingConfig",
    "SiegecraftSettings",
    "TemplateConfig",
    "get_default_settings",
]
