"""Glyph representations across the pipeline.

This module defines the glyph-level domain models:
- GlyphOutline: Raw outline of one character as read from the font
- FillRegion: One solid area of a glyph (outer boundary plus holes)
- GlyphInstance: A glyph placed on the page by the layout engine
- MissingGlyph: Warning record for a character the font cannot render
"""

from dataclasses import dataclass, field

from textrude.domain.contour import Contour, Polyline

BoundingBox = tuple[float, float, float, float]


@dataclass(frozen=True)
class GlyphOutline:
    """Outline of a single character in font units.

    Attributes:
        code_point: Unicode code point the outline was looked up with
        name: Glyph name in the font (e.g., "A", "uni3042")
        contours: Closed contours forming the glyph outline
        advance_width: Horizontal advance width in font units
    """

    code_point: int
    name: str
    contours: tuple[Contour, ...]
    advance_width: float

    def is_empty(self) -> bool:
        """Check if glyph has no outlines.

        Empty glyphs include spaces and other non-printing characters.

        Returns:
            True if glyph has no contours, False otherwise
        """
        return len(self.contours) == 0


@dataclass(frozen=True)
class FillRegion:
    """An area to be solidified: one outer boundary and its holes.

    Invariants:
        - outer winds counter-clockwise (positive signed area)
        - every hole winds clockwise (negative signed area)
        - holes lie inside the outer boundary and do not overlap

    Attributes:
        outer: Outer boundary
        holes: Hole boundaries enclosed by the outer boundary
    """

    outer: Polyline
    holes: tuple[Polyline, ...] = ()

    @property
    def rings(self) -> tuple[Polyline, ...]:
        """Outer boundary followed by the holes."""
        return (self.outer, *self.holes)

    def area(self) -> float:
        """Filled area (outer area minus hole areas)."""
        return self.outer.signed_area() + sum(hole.signed_area() for hole in self.holes)

    def bounding_box(self) -> BoundingBox:
        return self.outer.bounding_box()

    def edge_count(self) -> int:
        """Number of boundary edges over all rings."""
        return sum(len(ring) for ring in self.rings)

    def translated(self, dx: float, dy: float) -> "FillRegion":
        return FillRegion(
            outer=self.outer.translated(dx, dy),
            holes=tuple(hole.translated(dx, dy) for hole in self.holes),
        )


@dataclass(frozen=True)
class GlyphInstance:
    """A glyph placed by the layout engine.

    Regions are kept in glyph-local layout units so that repeated characters
    share them; the offset places them on the page.

    Attributes:
        char: The character
        code_point: Unicode code point
        regions: Fill regions in glyph-local coordinates
        offset: Pen position (x, baseline y) the glyph is drawn at
        advance: Advance width in layout units
    """

    char: str
    code_point: int
    regions: tuple[FillRegion, ...]
    offset: tuple[float, float]
    advance: float

    def is_empty(self) -> bool:
        return len(self.regions) == 0

    def placed_regions(self) -> tuple[FillRegion, ...]:
        """Regions translated to their position in the layout."""
        dx, dy = self.offset
        return tuple(region.translated(dx, dy) for region in self.regions)


@dataclass(frozen=True)
class MissingGlyph:
    """A character that was skipped because the font has no glyph for it.

    Attributes:
        char: The character
        index: Position of the character in the text
    """

    char: str
    index: int = field(default=0)

    @property
    def code_point(self) -> int:
        return ord(self.char)

    @property
    def label(self) -> str:
        """Code point in U+XXXX notation."""
        return f"U+{self.code_point:04X}"

    def __str__(self) -> str:
        return f"missing glyph {self.label} ({self.char!r})"
