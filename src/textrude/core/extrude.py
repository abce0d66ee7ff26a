"""Extrusion of fill regions into closed solids.

Each fill region becomes a prism: a triangulated cap at each end of the
depth range and a quad (two triangles) per boundary edge in between. Caps
and walls share vertices, so the result is a closed, consistently oriented
mesh whenever the region itself is a valid polygon with holes.
"""

from textrude.core.triangulate import triangulate_polygon_with_holes
from textrude.domain import Face, FillRegion, GlyphInstance, Solid, Vertex


def extrude_region(
    region: FillRegion,
    depth: float,
    z_offset: float = 0.0,
    label: str = "",
) -> Solid:
    """Lift a fill region into a solid spanning ``z_offset +/- depth / 2``.

    Vertex layout: all ring vertices (outer, then holes) at the back face,
    followed by the same vertices at the front face.

    Args:
        region: Region to extrude (outer counter-clockwise, holes clockwise)
        depth: Extrusion depth
        z_offset: Centre of the depth range
        label: Label carried by the solid

    Returns:
        The extruded solid
    """
    z0 = z_offset - depth * 0.5
    z1 = z_offset + depth * 0.5

    ring_points = [point for ring in region.rings for point in ring.points]
    n = len(ring_points)

    vertices: list[Vertex] = [(p.x, p.y, z0) for p in ring_points]
    vertices.extend((p.x, p.y, z1) for p in ring_points)

    faces: list[Face] = []
    cap = triangulate_polygon_with_holes(
        region.outer.points, [hole.points for hole in region.holes]
    )

    # Front face keeps the counter-clockwise order (+z normal)
    faces.extend((a + n, b + n, c + n) for a, b, c in cap)
    # Back face (reverse winding so normal points down)
    faces.extend((c, b, a) for a, b, c in cap)

    # Side faces: material is on the left of every ring edge a->b, so
    # (top_b, top_a, bot_a) and (top_b, bot_a, bot_b) face away from it
    base = 0
    for ring in region.rings:
        count = len(ring)
        for i in range(count):
            a = base + i
            b = base + (i + 1) % count
            faces.append((b + n, a + n, a))
            faces.append((b + n, a, b))
        base += count

    return Solid(vertices=tuple(vertices), faces=tuple(faces), label=label)


def extrude_instance(instance: GlyphInstance, depth: float) -> Solid | None:
    """Extrude all regions of a placed glyph into one solid.

    Top-level function designed to be picklable for use with
    ProcessPoolExecutor.

    Args:
        instance: Placed glyph
        depth: Extrusion depth

    Returns:
        Solid for the glyph, or None for glyphs without regions (spaces)
    """
    if instance.is_empty():
        return None

    solids = [extrude_region(region, depth) for region in instance.placed_regions()]
    return Solid.merge(solids, label=instance.char)
