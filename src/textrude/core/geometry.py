"""Geometric operations for outline and mesh calculations.

This module provides core mathematical utilities for:
- Signed area calculation (shoelace formula)
- Point-in-polygon and point-in-triangle testing
- Orientation (cross product) tests
- Bezier curve flattening
- Distance from a point to a segment or polyline, the measure bounded by
  the flattening tolerance (used to check flattened curves stay within it)
- Triangle normals

All functions are pure, stateless, and designed for use in parallel processing.
"""

import math
from collections.abc import Sequence

from textrude.core._bezier import flatten_cubic as _flatten_cubic
from textrude.core._bezier import flatten_quadratic as _flatten_quadratic
from textrude.domain import CubicSegment, CurveSegment, LineSegment, Point, QuadraticSegment, Vertex


def signed_area(points: Sequence[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    The sign of the area indicates winding direction:
    - Positive area: counter-clockwise winding
    - Negative area: clockwise winding

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square units. Returns 0.0 for degenerate polygons.

    Examples:
        >>> p1 = Point(0.0, 0.0)
        >>> p2 = Point(1.0, 0.0)
        >>> p3 = Point(1.0, 1.0)
        >>> p4 = Point(0.0, 1.0)
        >>> signed_area([p1, p2, p3, p4])  # CCW square
        1.0
        >>> signed_area([p1, p4, p3, p2])  # CW square
        -1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def cross(o: Point, a: Point, b: Point) -> float:
    """Cross product of vectors OA and OB.

    Positive when B is to the left of OA (counter-clockwise turn),
    negative when it is to the right, zero when the points are collinear.
    """
    return (a.x - o.x) * (b.y - o.y) - (a.y - o.y) * (b.x - o.x)


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting algorithm.

    Casts a horizontal ray from the point to the right and counts intersections
    with polygon edges. Odd number of intersections = inside, even = outside.

    Args:
        point: The point to test
        polygon: List of points forming the polygon boundary

    Returns:
        True if point is inside polygon, False otherwise

    Examples:
        >>> p1 = Point(0.0, 0.0)
        >>> p2 = Point(2.0, 0.0)
        >>> p3 = Point(2.0, 2.0)
        >>> p4 = Point(0.0, 2.0)
        >>> square = [p1, p2, p3, p4]
        >>> point_in_polygon(Point(1.0, 1.0), square)  # Center
        True
        >>> point_in_polygon(Point(3.0, 3.0), square)  # Outside
        False
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        # Check if ray from point intersects edge (j, i)
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def point_in_triangle(p: Point, a: Point, b: Point, c: Point) -> bool:
    """Check if p is inside or on the boundary of triangle abc (any winding)."""
    d1 = cross(a, b, p)
    d2 = cross(b, c, p)
    d3 = cross(c, a, p)

    has_neg = (d1 < 0) or (d2 < 0) or (d3 < 0)
    has_pos = (d1 > 0) or (d2 > 0) or (d3 > 0)

    return not (has_neg and has_pos)


def bezier_flatten(segment: CurveSegment, tolerance: float) -> list[Point]:
    """Convert a curve segment to line segments using recursive subdivision.

    Handles lines, quadratic and cubic Bezier curves. Curves are subdivided
    until every chord is within tolerance of the curve.

    Args:
        segment: The segment to flatten
        tolerance: Maximum distance from true curve (in layout units)

    Returns:
        List of points forming line segments that approximate the curve,
        start and end point included

    Raises:
        ValueError: If tolerance is not positive
        TypeError: If segment is not a known segment type
    """
    if tolerance <= 0:
        raise ValueError(f"Tolerance must be positive, got {tolerance}")

    if isinstance(segment, LineSegment):
        return [segment.p0, segment.p1]
    elif isinstance(segment, QuadraticSegment):
        return _flatten_quadratic(list(segment.control_points), tolerance)
    elif isinstance(segment, CubicSegment):
        return _flatten_cubic(list(segment.control_points), tolerance)
    else:
        raise TypeError(f"Unsupported segment type: {type(segment).__name__}")


def nearest_point_on_segment(point: Point, seg_start: Point, seg_end: Point) -> tuple[Point, float]:
    """Find the closest point on a line segment to a given point.

    Projects the point onto the infinite line, then clamps to the segment endpoints.

    Args:
        point: The point to project
        seg_start: Start point of line segment
        seg_end: End point of line segment

    Returns:
        Tuple of (nearest_point, distance) where nearest_point is the closest
        point on the segment and distance is the Euclidean distance to it

    Examples:
        >>> p = Point(1.0, 1.0)
        >>> seg_start = Point(0.0, 0.0)
        >>> seg_end = Point(2.0, 0.0)
        >>> nearest, dist = nearest_point_on_segment(p, seg_start, seg_end)
        >>> # nearest should be (1.0, 0.0), dist should be 1.0
    """
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y

    # Handle zero-length segment
    segment_length_sq = dx * dx + dy * dy
    if segment_length_sq < 1e-20:
        distance = math.hypot(point.x - seg_start.x, point.y - seg_start.y)
        return seg_start, distance

    # t = dot(point - start, end - start) / ||end - start||^2
    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / segment_length_sq
    t = max(0.0, min(1.0, t))

    nearest = Point(seg_start.x + t * dx, seg_start.y + t * dy)
    distance = math.hypot(point.x - nearest.x, point.y - nearest.y)

    return nearest, distance


def distance_to_polyline(point: Point, points: Sequence[Point], closed: bool = True) -> float:
    """Shortest distance from a point to a chain of segments.

    Args:
        point: The point to measure from
        points: Chain vertices
        closed: Include the edge from the last vertex back to the first

    Returns:
        Euclidean distance to the nearest segment
    """
    n = len(points)
    if n == 0:
        raise ValueError("Polyline must have at least 1 point")
    if n == 1:
        return math.hypot(point.x - points[0].x, point.y - points[0].y)

    last = n if closed else n - 1
    return min(
        nearest_point_on_segment(point, points[i], points[(i + 1) % n])[1] for i in range(last)
    )


def triangle_normal(a: Vertex, b: Vertex, c: Vertex) -> Vertex | None:
    """Unit normal of triangle abc by the right-hand rule.

    Args:
        a: First vertex
        b: Second vertex
        c: Third vertex

    Returns:
        Normalized (b - a) x (c - a), or None for zero-area triangles

    Examples:
        >>> triangle_normal((0, 0, 0), (1, 0, 0), (0, 1, 0))
        (0.0, 0.0, 1.0)
    """
    ux, uy, uz = b[0] - a[0], b[1] - a[1], b[2] - a[2]
    vx, vy, vz = c[0] - a[0], c[1] - a[1], c[2] - a[2]

    nx = uy * vz - uz * vy
    ny = uz * vx - ux * vz
    nz = ux * vy - uy * vx

    length = math.sqrt(nx * nx + ny * ny + nz * nz)
    if length == 0.0 or not math.isfinite(length):
        return None

    return (nx / length, ny / length, nz / length)
