"""Configuration management for textrude.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- FontConfig: Font file and face selection
- LayoutConfig: Size, spacing, kerning and escaping
- GeometryConfig: Flattening tolerance and extrusion depth
- PlateConfig: Backing plate settings
- OutputConfig: Orientation, centering and destination
- ProcessingConfig: Worker settings
- LoggingConfig: Logging settings
- TextrudeSettings: Main application settings
"""

from textrude.config.settings import (
    DEFAULT_TOLERANCE,
    LOG_LEVELS,
    MAX_TOLERANCE,
    MIN_TOLERANCE,
    FontConfig,
    GeometryConfig,
    LayoutConfig,
    LoggingConfig,
    Orientation,
    OutputConfig,
    PlateConfig,
    ProcessingConfig,
    TextrudeSettings,
    get_default_settings,
    resolve_tolerance,
)

__all__ = [
    "DEFAULT_TOLERANCE",
    "LOG_LEVELS",
    "MAX_TOLERANCE",
    "MIN_TOLERANCE",
    "FontConfig",
    "GeometryConfig",
    "LayoutConfig",
    "LoggingConfig",
    "Orientation",
    "OutputConfig",
    "PlateConfig",
    "ProcessingConfig",
    "TextrudeSettings",
    "get_default_settings",
    "resolve_tolerance",
]
