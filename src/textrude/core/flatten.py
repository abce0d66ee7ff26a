"""Curve flattening: contours of curve segments to polylines.

Every curve segment of a contour is replaced by chords that stay within the
tolerance of the true curve. Degenerate segments vanish silently, as do
repeated and collinear points, so that downstream triangulation and side
walls see a clean ring.
"""

import math

from textrude.core.geometry import bezier_flatten
from textrude.domain import Contour, CurveSegment, Point, Polyline

# Sine of the angle below which three consecutive points count as collinear
COLLINEAR_EPSILON = 1e-9


def is_degenerate(segment: CurveSegment) -> bool:
    """Check whether all control points of a segment coincide."""
    first = segment.start
    return all(p == first for p in segment.control_points)


def flatten_contour(contour: Contour, tolerance: float) -> Polyline | None:
    """Flatten a closed contour into a polyline.

    Args:
        contour: Contour to flatten
        tolerance: Maximum distance between the curve and its chords

    Returns:
        The flattened polyline, or None when nothing with an area is left
    """
    if not contour.segments:
        return None

    points: list[Point] = [contour.segments[0].start]
    for segment in contour.segments:
        if is_degenerate(segment):
            continue
        points.extend(bezier_flatten(segment, tolerance)[1:])

    points = _drop_duplicates(points)
    points = _drop_collinear(points)

    if len(points) < 3:
        return None
    return Polyline(tuple(points))


def flatten_contours(contours: tuple[Contour, ...], tolerance: float) -> list[Polyline]:
    """Flatten every contour of a glyph, dropping the ones that collapse."""
    polylines: list[Polyline] = []
    for contour in contours:
        polyline = flatten_contour(contour, tolerance)
        if polyline is not None:
            polylines.append(polyline)
    return polylines


def _same_point(a: Point, b: Point) -> bool:
    return math.isclose(a.x, b.x, abs_tol=1e-9) and math.isclose(a.y, b.y, abs_tol=1e-9)


def _drop_duplicates(points: list[Point]) -> list[Point]:
    result: list[Point] = []
    for point in points:
        if not result or not _same_point(result[-1], point):
            result.append(point)

    # The closing point repeats the first one
    while len(result) > 1 and _same_point(result[0], result[-1]):
        result.pop()

    return result


def _is_collinear(prev: Point, cur: Point, nxt: Point) -> bool:
    ax, ay = cur.x - prev.x, cur.y - prev.y
    bx, by = nxt.x - cur.x, nxt.y - cur.y
    scale = math.hypot(ax, ay) * math.hypot(bx, by)
    return abs(ax * by - ay * bx) <= COLLINEAR_EPSILON * scale


def _drop_collinear(points: list[Point]) -> list[Point]:
    pts = list(points)

    while True:
        before = len(pts)
        i = 0
        while len(pts) >= 3 and i < len(pts):
            if _is_collinear(pts[i - 1], pts[i], pts[(i + 1) % len(pts)]):
                del pts[i]
                i = max(i - 1, 0)
            else:
                i += 1

        if len(pts) == before or len(pts) < 3:
            return pts
