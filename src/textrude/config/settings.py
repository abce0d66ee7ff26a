"""Configuration settings for Textrude."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

# Tolerance scales linearly with the font size around this reference point
DEFAULT_TOLERANCE = 0.01
DEFAULT_TOLERANCE_SIZE = 72.0
MIN_TOLERANCE = 0.0005
MAX_TOLERANCE = 0.2

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Orientation(str, Enum):
    """Plane the text is laid out in.

    - FLAT: text lies in the XY plane (on the print bed), depth along Z
    - FRONT: text stands in the XZ plane facing the viewer, depth along Y
    """

    FLAT = "flat"
    FRONT = "front"


def resolve_tolerance(size: float, tolerance: float | None = None) -> float:
    """Pick the curve flattening tolerance for a font size.

    Without an explicit value the tolerance scales with the size, so that
    small text is not over-tessellated and large text stays smooth. Both the
    scaled default and explicit values are clamped to a sane range.

    Args:
        size: Font size in layout units
        tolerance: Explicit tolerance, or None to derive it from the size

    Returns:
        Tolerance in layout units
    """
    scaled = DEFAULT_TOLERANCE * (size / DEFAULT_TOLERANCE_SIZE)
    value = scaled if tolerance is None else tolerance
    return min(max(value, MIN_TOLERANCE), MAX_TOLERANCE)


class FontConfig(BaseModel):
    """Which font (and which face of a collection) to render with."""

    path: Path = Field(description="Path to a TTF/OTF/TTC font file")
    face_index: int = Field(
        default=0,
        ge=0,
        description="Face index inside a font collection (0-based)",
    )


class LayoutConfig(BaseModel):
    """Configuration for placing glyphs and lines."""

    size: float = Field(
        default=72.0,
        gt=0.0,
        allow_inf_nan=False,
        description="Font size in layout units (one em)",
    )
    spacing: float = Field(
        default=0.0,
        allow_inf_nan=False,
        description="Extra spacing added after every glyph",
    )
    kerning: bool = Field(
        default=True,
        description="Apply kerning pairs from the font when available",
    )
    escape: bool = Field(
        default=True,
        description="Convert literal backslash-n sequences to line breaks",
    )


class GeometryConfig(BaseModel):
    """Configuration for flattening and extrusion."""

    tolerance: float | None = Field(
        default=None,
        allow_inf_nan=False,
        description="Curve flattening tolerance (None = derived from size)",
    )
    depth: float = Field(
        default=10.0,
        gt=0.0,
        allow_inf_nan=False,
        description="Extrusion depth of the glyphs",
    )

    def get_tolerance(self, size: float) -> float:
        """Get the effective flattening tolerance for a font size."""
        return resolve_tolerance(size, self.tolerance)


class PlateConfig(BaseModel):
    """Configuration for the optional backing plate."""

    thickness: float = Field(
        default=0.0,
        ge=0.0,
        allow_inf_nan=False,
        description="Plate thickness (0 disables the plate)",
    )
    margin: float = Field(
        default=2.0,
        ge=0.0,
        allow_inf_nan=False,
        description="How far the plate extends past the text on each side",
    )

    @property
    def enabled(self) -> bool:
        return self.thickness > 0.0


class OutputConfig(BaseModel):
    """Configuration for the produced mesh."""

    orient: Orientation = Field(
        default=Orientation.FRONT,
        description="Plane orientation of the text",
    )
    center: bool = Field(
        default=True,
        description="Move the centre of the bounding box to the origin",
    )
    path: Path | None = Field(
        default=None,
        description="Output STL path (None = standard output)",
    )


class ProcessingConfig(BaseModel):
    """Configuration for glyph processing."""

    max_workers: int | None = Field(
        default=None,
        ge=1,
        description="Worker processes for extrusion (None or 1 = in-process)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="ERROR",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )

    @field_validator("log_level", "file_log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(LOG_LEVELS)}")
        return level


class TextrudeSettings(BaseModel):
    """Main application settings."""

    font: FontConfig
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    plate: PlateConfig = Field(default_factory=PlateConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def tolerance(self) -> float:
        """Effective flattening tolerance for the configured size."""
        return self.geometry.get_tolerance(self.layout.size)


def get_default_settings(font_path: Path) -> TextrudeSettings:
    """Get default application settings for a font."""
    return TextrudeSettings(font=FontConfig(path=font_path))
