"""Converters between fonttools drawing commands and domain models.

Glyph outlines are drawn into a RecordingPen and the recorded commands are
turned into Contour objects made of explicit line, quadratic and cubic
segments. TrueType implied on-curve points are made explicit here.
"""

from typing import Any

from fontTools.pens.basePen import decomposeQuadraticSegment, decomposeSuperBezierSegment
from fontTools.pens.recordingPen import DecomposingRecordingPen, RecordingPen
from fontTools.pens.reverseContourPen import ReverseContourPen

from textrude.domain.contour import (
    Contour,
    CubicSegment,
    CurveSegment,
    LineSegment,
    Point,
    QuadraticSegment,
)

Recording = list[tuple[str, tuple[Any, ...]]]


def record_glyph(glyph: Any, glyph_set: Any, reverse: bool = False) -> Recording:
    """Draw a fonttools glyph and return the recorded pen commands.

    Components are drawn decomposed from ``glyph_set``; flipped components
    have their contours reversed so every contour keeps the winding of its
    base glyph. Reversal happens on the decomposed recording so component
    contours are reversed along with the glyph's own.

    Args:
        glyph: Glyph object from a fonttools glyph set
        glyph_set: Glyph set the glyph's components are looked up in
        reverse: Reverse the direction of every contour

    Returns:
        RecordingPen value without component references
    """
    decomposed = DecomposingRecordingPen(glyph_set, reverseFlipped=True)
    glyph.draw(decomposed)
    if not reverse:
        return decomposed.value

    recording = RecordingPen()
    decomposed.replay(ReverseContourPen(recording))
    return recording.value


def recording_to_contours(recording: Recording) -> list[Contour]:
    """Convert RecordingPen commands to closed contours.

    The RecordingPen records drawing commands like:
    - ('moveTo', ((x, y),))
    - ('lineTo', ((x, y),))
    - ('qCurveTo', ((x1, y1), (x2, y2), ...))  # Quadratic, implied on-curves
    - ('curveTo', ((x1, y1), (x2, y2), (x3, y3)))  # Cubic
    - ('closePath', ()) or ('endPath', ())

    A qCurveTo whose last point is None describes a contour made only of
    off-curve points; its start is the implied point between the last and
    first control points. Open paths are closed with a straight line.

    Args:
        recording: List of drawing commands from RecordingPen

    Returns:
        List of contours with at least one segment
    """
    builder = _ContourBuilder()

    for command, args in recording:
        if command == "moveTo":
            builder.finish()
            builder.move_to(_point(args[0]))

        elif command == "lineTo":
            builder.line_to(_point(args[0]))

        elif command == "qCurveTo":
            if args[-1] is None:
                builder.finish()
                builder.implied_quadratic_loop([_point(p) for p in args[:-1]])
            else:
                builder.quadratic_to([_point(p) for p in args])

        elif command == "curveTo":
            builder.cubic_to([_point(p) for p in args])

        elif command in ("closePath", "endPath"):
            builder.finish()

    builder.finish()
    return builder.contours


def _point(xy: tuple[float, float]) -> Point:
    return Point(float(xy[0]), float(xy[1]))


class _ContourBuilder:
    """Accumulates segments of the contour being drawn."""

    def __init__(self) -> None:
        self.contours: list[Contour] = []
        self._segments: list[CurveSegment] = []
        self._start: Point | None = None
        self._current: Point | None = None

    def move_to(self, point: Point) -> None:
        self._start = point
        self._current = point

    def line_to(self, point: Point) -> None:
        current = self._require_current(point)
        self._segments.append(LineSegment(current, point))
        self._current = point

    def quadratic_to(self, points: list[Point]) -> None:
        current = self._require_current(points[-1])
        if len(points) == 1:
            self.line_to(points[0])
            return

        pairs = decomposeQuadraticSegment([p.to_tuple() for p in points])
        for ctrl, end in pairs:
            end_point = _point(end)
            self._segments.append(QuadraticSegment(current, _point(ctrl), end_point))
            current = end_point
        self._current = current

    def cubic_to(self, points: list[Point]) -> None:
        current = self._require_current(points[-1])
        if len(points) == 1:
            self.line_to(points[0])
            return
        if len(points) == 2:
            # A single off-curve point is a quadratic curve
            self.quadratic_to(points)
            return

        for c1, c2, end in decomposeSuperBezierSegment([p.to_tuple() for p in points]):
            end_point = _point(end)
            self._segments.append(CubicSegment(current, _point(c1), _point(c2), end_point))
            current = end_point
        self._current = current

    def implied_quadratic_loop(self, off_curve: list[Point]) -> None:
        if not off_curve:
            return
        start = off_curve[-1].lerp(off_curve[0], 0.5)
        self.move_to(start)
        self.quadratic_to(off_curve + [start])

    def finish(self) -> None:
        if self._start is not None and self._current is not None:
            if self._current != self._start:
                self._segments.append(LineSegment(self._current, self._start))
        if self._segments:
            self.contours.append(Contour(tuple(self._segments)))

        self._segments = []
        self._start = None
        self._current = None

    def _require_current(self, fallback: Point) -> Point:
        # Pens may omit moveTo before the first segment; start there instead
        if self._current is None:
            self.move_to(fallback)
            return fallback
        return self._current
