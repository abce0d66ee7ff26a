"""Domain models for textrude.

This module contains the core domain models representing outlines, fill
regions, placed glyphs and meshes. All models are designed to be:

- Immutable (using frozen dataclasses)
- Picklable for inter-process communication (parallel extrusion)
- Independent of fonttools implementation details

Key classes:
- Point: A 2D point
- LineSegment, QuadraticSegment, CubicSegment: Outline curve segments
- Contour: A closed loop of curve segments
- Polyline: A flattened contour
- GlyphOutline: Raw outline of one character
- FillRegion: Outer boundary plus holes
- GlyphInstance: A glyph placed by the layout engine
- MissingGlyph: Warning for a character the font cannot render
- Solid, Mesh, Transform: 3D output types
"""

from textrude.domain.contour import (
    Contour,
    CubicSegment,
    CurveSegment,
    LineSegment,
    Point,
    Polyline,
    QuadraticSegment,
    WindingDirection,
)
from textrude.domain.glyph import (
    BoundingBox,
    FillRegion,
    GlyphInstance,
    GlyphOutline,
    MissingGlyph,
)
from textrude.domain.mesh import Face, Mesh, Solid, Transform, Vertex

__all__: list[str] = [
    # Enums
    "WindingDirection",
    # 2D types
    "Point",
    "LineSegment",
    "QuadraticSegment",
    "CubicSegment",
    "CurveSegment",
    "Contour",
    "Polyline",
    "BoundingBox",
    # Glyph types
    "GlyphOutline",
    "FillRegion",
    "GlyphInstance",
    "MissingGlyph",
    # 3D types
    "Vertex",
    "Face",
    "Solid",
    "Mesh",
    "Transform",
]
