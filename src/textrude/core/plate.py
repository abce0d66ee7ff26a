"""Backing plate generation."""

from textrude.core.extrude import extrude_region
from textrude.domain import BoundingBox, FillRegion, Point, Polyline, Solid


def rectangle_region(min_x: float, min_y: float, max_x: float, max_y: float) -> FillRegion:
    """Counter-clockwise rectangle as a fill region without holes."""
    return FillRegion(
        outer=Polyline(
            (
                Point(min_x, min_y),
                Point(max_x, min_y),
                Point(max_x, max_y),
                Point(min_x, max_y),
            )
        )
    )


def build_plate(
    bounds: BoundingBox | None,
    thickness: float,
    margin: float,
    text_depth: float,
) -> Solid | None:
    """Build a flat slab directly behind the text.

    The slab covers the text bounding box grown by ``margin`` on every side.
    Its front face lies on the back face of the text (z = -text_depth / 2),
    so plate and glyphs touch without a gap or an overlap.

    Args:
        bounds: Bounding box (min_x, min_y, max_x, max_y) of the placed text
        thickness: Plate thickness; 0 disables the plate
        margin: Extra extent on each side
        text_depth: Extrusion depth of the glyphs

    Returns:
        Plate solid, or None when disabled or there is no text to back
    """
    if thickness <= 0.0 or bounds is None:
        return None

    min_x, min_y, max_x, max_y = bounds
    region = rectangle_region(min_x - margin, min_y - margin, max_x + margin, max_y + margin)
    z_offset = -(text_depth * 0.5 + thickness * 0.5)

    return extrude_region(region, thickness, z_offset=z_offset, label="plate")
