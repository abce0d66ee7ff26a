"""Mesh assembly: merge solids, orient and center.

Everything upstream works in layout space (text in XY, depth along Z).
Orientation and centering are expressed as Transform values, composed and
applied to the finished mesh in a single pass.
"""

from textrude.config import Orientation
from textrude.domain import Mesh, Solid, Transform

# Front: keep X, rotate +Z to -Y so the text faces the viewer and keeps its
# vertical sense on +Z (a proper rotation, normals stay outward)
_ORIENTATION_MATRICES = {
    Orientation.FLAT: (
        (1.0, 0.0, 0.0),
        (0.0, 1.0, 0.0),
        (0.0, 0.0, 1.0),
    ),
    Orientation.FRONT: (
        (1.0, 0.0, 0.0),
        (0.0, 0.0, -1.0),
        (0.0, 1.0, 0.0),
    ),
}

# Axes spanning the text plane after orientation
_PLANE_AXES = {
    Orientation.FLAT: (0, 1),
    Orientation.FRONT: (0, 2),
}


def orientation_transform(orient: Orientation) -> Transform:
    """Rotation taking layout space to the requested orientation."""
    return Transform(matrix=_ORIENTATION_MATRICES[orient])


def centering_transform(mesh: Mesh, orient: Orientation) -> Transform:
    """Translation moving the bounding box centre to the origin in-plane.

    The depth axis is left alone; it is centred at extrusion time.

    Args:
        mesh: Mesh in its final orientation
        orient: Orientation the mesh is in

    Returns:
        Translation (identity for an empty mesh)
    """
    bounds = mesh.bounds()
    if bounds is None:
        return Transform.identity()

    lo, hi = bounds
    offset = [0.0, 0.0, 0.0]
    for axis in _PLANE_AXES[orient]:
        offset[axis] = -(lo[axis] + hi[axis]) * 0.5
    return Transform.translation(*offset)


def assemble_mesh(
    glyph_solids: list[Solid],
    plate: Solid | None = None,
    orient: Orientation = Orientation.FRONT,
    center: bool = True,
) -> Mesh:
    """Merge solids into one mesh, then orient, then center.

    Args:
        glyph_solids: Glyph solids in text order
        plate: Optional backing plate, written first
        orient: Target orientation
        center: Center the bounding box on the origin in the text plane

    Returns:
        The assembled mesh
    """
    solids = ([plate] if plate is not None else []) + list(glyph_solids)
    mesh = Mesh(solids=tuple(solids))

    transform = orientation_transform(orient)
    if center:
        transform = transform.then(centering_transform(mesh.transformed(transform), orient))

    return mesh.transformed(transform)
