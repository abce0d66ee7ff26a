"""Internal Bezier curve flattening algorithms.

This is an internal module containing helper functions for bezier_flatten.
Not intended for public use.
"""

import math

from textrude.domain import Point

# 2**16 chords per segment is far beyond anything a glyph needs
MAX_SUBDIVISION_DEPTH = 16


def _distance_to_chord(p: Point, a: Point, b: Point) -> float:
    """Distance from p to the segment a-b."""
    dx = b.x - a.x
    dy = b.y - a.y
    length_sq = dx * dx + dy * dy
    if length_sq == 0.0:
        return math.hypot(p.x - a.x, p.y - a.y)

    t = ((p.x - a.x) * dx + (p.y - a.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return math.hypot(p.x - (a.x + t * dx), p.y - (a.y + t * dy))


def _is_flat(points: list[Point], tolerance: float) -> bool:
    # The curve lies in the convex hull of its control points, so if every
    # control point is within tolerance of the chord the whole curve is.
    first, last = points[0], points[-1]
    return all(_distance_to_chord(p, first, last) <= tolerance for p in points[1:-1])


def flatten_quadratic(
    points: list[Point], tolerance: float, depth: int = 0
) -> list[Point]:
    """Flatten a quadratic Bezier curve using recursive subdivision.

    Args:
        points: List of 3 control points [p0, p1, p2]
        tolerance: Maximum distance from true curve
        depth: Current recursion depth

    Returns:
        List of points approximating the curve, both end points included
    """
    p0, p1, p2 = points

    if depth >= MAX_SUBDIVISION_DEPTH or _is_flat(points, tolerance):
        return [p0, p2]

    # Subdivide at t=0.5
    q1 = p0.lerp(p1, 0.5)
    r1 = p1.lerp(p2, 0.5)
    mid = q1.lerp(r1, 0.5)

    left = flatten_quadratic([p0, q1, mid], tolerance, depth + 1)
    right = flatten_quadratic([mid, r1, p2], tolerance, depth + 1)

    # Combine, avoiding duplicate midpoint
    return left[:-1] + right


def flatten_cubic(points: list[Point], tolerance: float, depth: int = 0) -> list[Point]:
    """Flatten a cubic Bezier curve using recursive subdivision.

    Uses De Casteljau's algorithm for subdivision.

    Args:
        points: List of 4 control points [p0, p1, p2, p3]
        tolerance: Maximum distance from true curve
        depth: Current recursion depth

    Returns:
        List of points approximating the curve, both end points included
    """
    p0, p1, p2, p3 = points

    if depth >= MAX_SUBDIVISION_DEPTH or _is_flat(points, tolerance):
        return [p0, p3]

    # First level
    q1 = p0.lerp(p1, 0.5)
    q2 = p1.lerp(p2, 0.5)
    q3 = p2.lerp(p3, 0.5)

    # Second level
    r1 = q1.lerp(q2, 0.5)
    r2 = q2.lerp(q3, 0.5)

    # Third level (midpoint)
    mid = r1.lerp(r2, 0.5)

    left = flatten_cubic([p0, q1, r1, mid], tolerance, depth + 1)
    right = flatten_cubic([mid, r2, q3, p3], tolerance, depth + 1)

    # Combine, avoiding duplicate midpoint
    return left[:-1] + right
