"""Core processing algorithms for textrude.

This module contains the core algorithms for:

- Geometry operations (signed area, point-in-polygon, normals)
- Curve flattening (Bezier segments to polylines within a tolerance)
- Polygon resolution (outer boundaries and their holes)
- Text layout (pen advance, kerning, line breaks)
- Triangulation and extrusion (watertight glyph solids)
- Plate generation and mesh assembly (orientation, centering)

All services except the processor are:
- Stateless (safe for use in worker processes)
- Pure (no side effects)

Key functions:
- bezier_flatten: Convert Bezier curves to line segments
- flatten_contour: Convert a contour to a polyline
- triangulate_polygon_with_holes: Ear clipping with hole bridging
- extrude_region: Lift a fill region into a closed solid
- build_plate: Backing slab behind the text
- assemble_mesh: Merge, orient and center all solids

Key classes:
- PolygonResolver: Groups polylines into fill regions
- LayoutEngine: Places glyphs on lines
- TextProcessor: Orchestrates the whole pipeline
"""

from textrude.core.assemble import assemble_mesh, centering_transform, orientation_transform
from textrude.core.extrude import extrude_instance, extrude_region
from textrude.core.flatten import flatten_contour, flatten_contours
from textrude.core.geometry import (
    bezier_flatten,
    point_in_polygon,
    signed_area,
    triangle_normal,
)
from textrude.core.layout import LayoutEngine, LayoutResult, OutlineSource, unescape_newlines
from textrude.core.plate import build_plate
from textrude.core.processor import TextProcessor, TextResult
from textrude.core.resolver import PolygonResolver, RegionHierarchy
from textrude.core.triangulate import triangulate_polygon_with_holes

__all__ = [
    # Layout classes
    "LayoutEngine",
    "LayoutResult",
    "OutlineSource",
    # Resolver classes
    "PolygonResolver",
    "RegionHierarchy",
    # Processor classes
    "TextProcessor",
    "TextResult",
    # Mesh functions
    "assemble_mesh",
    "build_plate",
    "centering_transform",
    "extrude_instance",
    "extrude_region",
    "orientation_transform",
    "triangulate_polygon_with_holes",
    # Geometry functions
    "bezier_flatten",
    "flatten_contour",
    "flatten_contours",
    "point_in_polygon",
    "signed_area",
    "triangle_normal",
    "unescape_newlines",
]
