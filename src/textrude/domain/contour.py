"""Core geometric types for outline representation.

This module defines the fundamental 2D types used throughout textrude:
- Point: An immutable 2D point
- LineSegment, QuadraticSegment, CubicSegment: The curve segment variants
- Contour: A closed loop of curve segments, as read from the font
- Polyline: A flattened contour (straight edges only)
- WindingDirection: Enum for polyline winding direction
"""

from dataclasses import dataclass
from enum import Enum, auto
from functools import cached_property
from typing import Union


class WindingDirection(Enum):
    """Polyline winding direction.

    Outlines are normalized on read so that:
    - Outer boundaries wind counter-clockwise (positive area)
    - Holes wind clockwise (negative area)
    """

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def transformed(self, scale: float = 1.0, dx: float = 0.0, dy: float = 0.0) -> "Point":
        """Scale about the origin, then translate."""
        return Point(self.x * scale + dx, self.y * scale + dy)

    def lerp(self, other: "Point", t: float) -> "Point":
        """Linear interpolation towards another point."""
        return Point(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)


@dataclass(frozen=True, slots=True)
class LineSegment:
    """A straight segment from p0 to p1."""

    p0: Point
    p1: Point

    @property
    def start(self) -> Point:
        return self.p0

    @property
    def end(self) -> Point:
        return self.p1

    @property
    def control_points(self) -> tuple[Point, ...]:
        return (self.p0, self.p1)

    def point_at(self, t: float) -> Point:
        return self.p0.lerp(self.p1, t)

    def transformed(self, scale: float = 1.0, dx: float = 0.0, dy: float = 0.0) -> "LineSegment":
        return LineSegment(self.p0.transformed(scale, dx, dy), self.p1.transformed(scale, dx, dy))


@dataclass(frozen=True, slots=True)
class QuadraticSegment:
    """A quadratic Bezier segment (TrueType outlines)."""

    p0: Point
    ctrl: Point
    p1: Point

    @property
    def start(self) -> Point:
        return self.p0

    @property
    def end(self) -> Point:
        return self.p1

    @property
    def control_points(self) -> tuple[Point, ...]:
        return (self.p0, self.ctrl, self.p1)

    def point_at(self, t: float) -> Point:
        mt = 1.0 - t
        a, b, c = mt * mt, 2.0 * mt * t, t * t
        return Point(
            a * self.p0.x + b * self.ctrl.x + c * self.p1.x,
            a * self.p0.y + b * self.ctrl.y + c * self.p1.y,
        )

    def transformed(
        self, scale: float = 1.0, dx: float = 0.0, dy: float = 0.0
    ) -> "QuadraticSegment":
        return QuadraticSegment(
            self.p0.transformed(scale, dx, dy),
            self.ctrl.transformed(scale, dx, dy),
            self.p1.transformed(scale, dx, dy),
        )


@dataclass(frozen=True, slots=True)
class CubicSegment:
    """A cubic Bezier segment (PostScript/CFF outlines)."""

    p0: Point
    c1: Point
    c2: Point
    p1: Point

    @property
    def start(self) -> Point:
        return self.p0

    @property
    def end(self) -> Point:
        return self.p1

    @property
    def control_points(self) -> tuple[Point, ...]:
        return (self.p0, self.c1, self.c2, self.p1)

    def point_at(self, t: float) -> Point:
        mt = 1.0 - t
        a, b, c, d = mt * mt * mt, 3.0 * mt * mt * t, 3.0 * mt * t * t, t * t * t
        return Point(
            a * self.p0.x + b * self.c1.x + c * self.c2.x + d * self.p1.x,
            a * self.p0.y + b * self.c1.y + c * self.c2.y + d * self.p1.y,
        )

    def transformed(self, scale: float = 1.0, dx: float = 0.0, dy: float = 0.0) -> "CubicSegment":
        return CubicSegment(
            self.p0.transformed(scale, dx, dy),
            self.c1.transformed(scale, dx, dy),
            self.c2.transformed(scale, dx, dy),
            self.p1.transformed(scale, dx, dy),
        )


CurveSegment = Union[LineSegment, QuadraticSegment, CubicSegment]


@dataclass(frozen=True)
class Contour:
    """A closed loop of curve segments.

    The end point of the last segment is the start point of the first one.

    Attributes:
        segments: Segments in drawing order
    """

    segments: tuple[CurveSegment, ...]

    @property
    def start(self) -> Point | None:
        return self.segments[0].start if self.segments else None

    def is_closed(self) -> bool:
        """Check that the last segment ends where the first one starts."""
        if not self.segments:
            return False
        return self.segments[-1].end == self.segments[0].start

    def transformed(self, scale: float = 1.0, dx: float = 0.0, dy: float = 0.0) -> "Contour":
        """Scale about the origin, then translate every segment."""
        return Contour(tuple(seg.transformed(scale, dx, dy) for seg in self.segments))


@dataclass(frozen=True)
class Polyline:
    """A closed polygon approximating a contour.

    The closing edge from the last point back to the first is implicit;
    the first point is not repeated at the end.

    Attributes:
        points: Polygon vertices in order
    """

    points: tuple[Point, ...]

    def __len__(self) -> int:
        return len(self.points)

    @cached_property
    def _signed_area(self) -> float:
        n = len(self.points)
        if n < 3:
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self.points[i].x * self.points[j].y
            area -= self.points[j].x * self.points[i].y

        return area / 2.0

    def signed_area(self) -> float:
        """Calculate signed area using shoelace formula.

        The sign of the area indicates winding direction:
        - Positive area: counter-clockwise winding
        - Negative area: clockwise winding

        Result is cached for efficiency.

        Returns:
            Signed area of the polyline
        """
        return self._signed_area

    @property
    def direction(self) -> WindingDirection | None:
        """Winding direction, or None for degenerate (zero area) polylines."""
        area = self.signed_area()
        if area > 0:
            return WindingDirection.COUNTER_CLOCKWISE
        if area < 0:
            return WindingDirection.CLOCKWISE
        return None

    @cached_property
    def _bbox(self) -> tuple[float, float, float, float]:
        if not self.points:
            return (0.0, 0.0, 0.0, 0.0)

        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return (min(xs), min(ys), max(xs), max(ys))

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Calculate bounding box of the polyline.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        return self._bbox

    def contains_point(self, x: float, y: float) -> bool:
        """Check if point is inside polyline using ray casting algorithm.

        Casts a ray from the point to the right and counts intersections
        with polyline edges. Odd count means inside, even means outside.

        Args:
            x: X coordinate of point to test
            y: Y coordinate of point to test

        Returns:
            True if point is inside polyline, False otherwise
        """
        n = len(self.points)
        if n < 3:
            return False

        inside = False
        j = n - 1

        for i in range(n):
            xi, yi = self.points[i].x, self.points[i].y
            xj, yj = self.points[j].x, self.points[j].y

            if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
                inside = not inside

            j = i

        return inside

    def reversed(self) -> "Polyline":
        """Same polygon with the opposite winding."""
        return Polyline(tuple(reversed(self.points)))

    def translated(self, dx: float, dy: float) -> "Polyline":
        return Polyline(tuple(Point(p.x + dx, p.y + dy) for p in self.points))

    def edges(self) -> list[tuple[Point, Point]]:
        """Edges in order, including the closing edge."""
        n = len(self.points)
        return [(self.points[i], self.points[(i + 1) % n]) for i in range(n)]
