"""Polygon triangulation with holes.

Ear clipping after Eberly, "Triangulation by Ear Clipping":

1. Make the outer ring counter-clockwise and every hole clockwise
2. Sort holes by maximum x-value (rightmost first)
3. Bridge each hole into the outer ring through a mutually visible vertex,
   giving one pseudo-simple polygon
4. Clip ears until a single triangle is left

The polygon is handled as a list of vertex indices, so the bridge vertices
appear twice but refer to the same vertex. Triangles index into the outer
ring followed by the holes, which lets caps share vertices with side walls.
"""

import math
from collections.abc import Sequence

from textrude.core.geometry import cross, point_in_triangle, signed_area
from textrude.domain import Point
from textrude.exceptions import TriangulationError

Triangle = tuple[int, int, int]

_EPS = 1e-12


def triangulate_polygon_with_holes(
    outer: Sequence[Point],
    holes: Sequence[Sequence[Point]] = (),
) -> list[Triangle]:
    """Triangulate a polygon with holes using ear clipping.

    Args:
        outer: Outer ring vertices (either winding)
        holes: Hole rings, each fully inside the outer ring

    Returns:
        Counter-clockwise triangles as index triples into the concatenation
        of ``outer`` and all ``holes`` (in the order given)

    Raises:
        TriangulationError: If a coordinate is not a finite number
    """
    vertices: list[Point] = list(outer)
    for hole in holes:
        vertices.extend(hole)

    for point in vertices:
        if not (math.isfinite(point.x) and math.isfinite(point.y)):
            raise TriangulationError(f"Non-finite vertex {point!r}")

    if len(outer) < 3:
        return []

    # Step 1: Ensure correct winding
    polygon = list(range(len(outer)))
    if signed_area(outer) < 0:
        polygon.reverse()

    hole_rings: list[list[int]] = []
    base = len(outer)
    for hole in holes:
        ring = list(range(base, base + len(hole)))
        base += len(hole)
        if len(ring) < 3:
            continue
        if signed_area(hole) > 0:
            ring.reverse()
        hole_rings.append(ring)

    # Step 2: Sort holes by maximum x-value (process rightmost first)
    hole_rings.sort(key=lambda ring: max(vertices[i].x for i in ring), reverse=True)

    # Step 3: Merge each hole
    for ring in hole_rings:
        polygon = merge_hole(polygon, ring, vertices)

    # Step 4: Triangulate
    return clip_ears(polygon, vertices)


def merge_hole(polygon: list[int], hole: list[int], vertices: Sequence[Point]) -> list[int]:
    """Merge a hole into the polygon to create a pseudo-simple polygon.

    - Find M = vertex with max x-value in hole
    - Find V = mutually visible vertex in polygon
    - Create bridge with edges <V,M> and <M,V>

    The merged polygon is
    {polygon_before_V, V, hole_from_M, M, V, polygon_after_V}

    Args:
        polygon: Counter-clockwise polygon as vertex indices
        hole: Clockwise hole as vertex indices
        vertices: Vertex coordinates

    Returns:
        Merged polygon as vertex indices
    """
    m_pos = max(range(len(hole)), key=lambda i: (vertices[hole[i]].x, -vertices[hole[i]].y))
    m = hole[m_pos]

    v_pos = find_visible_vertex(vertices[m], polygon, vertices)
    v = polygon[v_pos]

    hole_from_m = hole[m_pos:] + hole[:m_pos]

    return polygon[: v_pos + 1] + hole_from_m + [m, v] + polygon[v_pos + 1 :]


def find_visible_vertex(m: Point, polygon: list[int], vertices: Sequence[Point]) -> int:
    """Find a polygon vertex mutually visible with point M.

    1. Cast ray from M in +X direction
    2. Find the closest hit: a polygon vertex lying on the ray, or the
       interior of an edge crossing it at I
    3. If the hit is a vertex, return that vertex
    4. Otherwise, P = endpoint of the hit edge with max x-value
    5. If reflex vertices lie inside triangle <M, I, P>, return the one
       with minimum angle to the ray direction
    6. Otherwise return P

    Vertices on the ray are tested on their own, so an edge ending on the
    ray followed by a horizontal edge cannot hide the nearer vertex. Bridge
    vertices occur twice in a merged polygon; only the occurrence whose
    interior angle opens towards M is returned.

    Args:
        m: The point (rightmost vertex of a hole)
        polygon: Counter-clockwise polygon as vertex indices
        vertices: Vertex coordinates

    Returns:
        Position in ``polygon`` of the visible vertex
    """
    n = len(polygon)

    vertex_pos = -1
    vertex_t = math.inf
    for i in range(n):
        v = vertices[polygon[i]]
        if v.y != m.y or v.x < m.x:
            continue
        t = v.x - m.x
        if t < vertex_t or (t == vertex_t and _opens_towards(polygon, i, m, vertices)):
            vertex_t = t
            vertex_pos = i

    edge_pos = -1
    edge_t = math.inf
    for i in range(n):
        vi = vertices[polygon[i]]
        vj = vertices[polygon[(i + 1) % n]]

        # Edges ending on the ray are covered by the vertex test above
        if not ((vi.y < m.y < vj.y) or (vj.y < m.y < vi.y)):
            continue

        x_int = vi.x + (m.y - vi.y) / (vj.y - vi.y) * (vj.x - vi.x)
        if x_int < m.x:
            continue

        t = x_int - m.x
        if t < edge_t:
            edge_t = t
            edge_pos = i

    if vertex_pos != -1 and vertex_t <= edge_t:
        return vertex_pos

    if edge_pos == -1:
        # Ray escaped (hole touching the outer ring); take the nearest vertex
        return min(
            range(n),
            key=lambda i: math.hypot(vertices[polygon[i]].x - m.x, vertices[polygon[i]].y - m.y),
        )

    i_point = Point(m.x + edge_t, m.y)
    vi_pos, vj_pos = edge_pos, (edge_pos + 1) % n
    vi, vj = vertices[polygon[vi_pos]], vertices[polygon[vj_pos]]

    p_pos = vi_pos if vi.x > vj.x else vj_pos
    p = vertices[polygon[p_pos]]

    best_pos = p_pos
    best_key = (math.inf, math.inf)
    for i in range(n):
        if i == p_pos:
            continue
        curr = vertices[polygon[i]]
        if curr == p or curr == m:
            continue
        prev_v = vertices[polygon[i - 1]]
        next_v = vertices[polygon[(i + 1) % n]]
        if cross(prev_v, curr, next_v) >= 0:
            continue
        if not point_in_triangle(curr, m, i_point, p):
            continue
        if not _opens_towards(polygon, i, m, vertices):
            continue

        dx = curr.x - m.x
        if dx <= _EPS:
            continue
        key = (abs(curr.y - m.y) / dx, dx)
        if key < best_key:
            best_key = key
            best_pos = i

    return best_pos


def _opens_towards(polygon: list[int], i: int, target: Point, vertices: Sequence[Point]) -> bool:
    """Check whether the interior angle at polygon[i] contains the direction to target."""
    n = len(polygon)
    prev_v = vertices[polygon[i - 1]]
    curr = vertices[polygon[i]]
    next_v = vertices[polygon[(i + 1) % n]]

    left_of_in = cross(prev_v, curr, target) >= 0
    left_of_out = cross(curr, next_v, target) >= 0
    if cross(prev_v, curr, next_v) >= 0:
        return left_of_in and left_of_out
    return left_of_in or left_of_out


def clip_ears(polygon: list[int], vertices: Sequence[Point]) -> list[Triangle]:
    """Triangulate a (pseudo-)simple counter-clockwise polygon.

    When a full pass finds no ear (self-intersecting or degenerate input)
    the most convex vertex is clipped anyway, so the result always has
    ``len(polygon) - 2`` triangles; invalid input is passed through, not
    repaired.

    Args:
        polygon: Polygon as vertex indices (may repeat bridge vertices)
        vertices: Vertex coordinates

    Returns:
        List of triangles, each as (i, j, k) vertex indices
    """
    remaining = list(polygon)
    triangles: list[Triangle] = []

    if len(remaining) < 3:
        return triangles

    i = 0
    misses = 0
    while len(remaining) > 3:
        n = len(remaining)
        if misses >= n:
            i = _most_convex(remaining, vertices)
        else:
            i %= n
            if not _is_ear(remaining, i, vertices):
                i += 1
                misses += 1
                continue

        triangles.append((remaining[i - 1], remaining[i], remaining[(i + 1) % n]))
        del remaining[i]
        misses = 0

    triangles.append((remaining[0], remaining[1], remaining[2]))
    return triangles


def _is_ear(remaining: list[int], i: int, vertices: Sequence[Point]) -> bool:
    n = len(remaining)
    prev_idx, cur_idx, next_idx = remaining[i - 1], remaining[i], remaining[(i + 1) % n]
    a, b, c = vertices[prev_idx], vertices[cur_idx], vertices[next_idx]

    if cross(a, b, c) <= _EPS:
        return False

    for j in range(n):
        idx = remaining[j]
        if idx in (prev_idx, cur_idx, next_idx):
            continue
        p = vertices[idx]
        if p == a or p == b or p == c:
            continue
        # Only reflex (or flat) vertices can sit inside a candidate ear
        if cross(vertices[remaining[j - 1]], p, vertices[remaining[(j + 1) % n]]) > 0:
            continue
        if point_in_triangle(p, a, b, c):
            return False

    return True


def _most_convex(remaining: list[int], vertices: Sequence[Point]) -> int:
    n = len(remaining)
    return max(
        range(n),
        key=lambda i: cross(
            vertices[remaining[i - 1]], vertices[remaining[i]], vertices[remaining[(i + 1) % n]]
        ),
    )
