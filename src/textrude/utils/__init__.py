"""Utility functions for textrude.

This module provides logging setup and run statistics.
"""

from textrude.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
