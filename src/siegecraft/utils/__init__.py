"""Utility functions for siegecraft.

This module provides logging setup and batch statistics helpers.
"""

from siegecraft.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
