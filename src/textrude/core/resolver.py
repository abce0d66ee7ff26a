"""Polygon resolution: flattened contours to fill regions.

This module groups the polylines of one glyph into fill regions:
- Outer boundaries (counter-clockwise winding, positive area)
- Holes (clockwise winding, negative area)
- Containment of every hole in exactly one outer boundary

The analysis uses signed area calculation to determine winding direction
and point-in-polygon tests to establish containment relationships.
"""

from dataclasses import dataclass, field

import structlog

from textrude.core.geometry import point_in_polygon
from textrude.domain import FillRegion, Polyline

logger = structlog.get_logger(__name__)


@dataclass
class RegionHierarchy:
    """Classification of the polylines of one glyph.

    Attributes:
        outer_contours: Indices of polylines with counter-clockwise winding
        hole_contours: Indices of polylines with clockwise winding
        containment: Maps hole index to the index of the outer boundary it
            belongs to
        orphan_holes: Hole indices not enclosed by any outer boundary
        degenerate: Indices of polylines with zero area
    """

    outer_contours: list[int] = field(default_factory=list)
    hole_contours: list[int] = field(default_factory=list)
    containment: dict[int, int] = field(default_factory=dict)
    orphan_holes: list[int] = field(default_factory=list)
    degenerate: list[int] = field(default_factory=list)

    def holes_of(self, outer_idx: int) -> list[int]:
        """Hole indices assigned to an outer boundary, in input order."""
        return [hole for hole in self.hole_contours if self.containment.get(hole) == outer_idx]

    def is_empty(self) -> bool:
        return not self.outer_contours


class PolygonResolver:
    """Resolves the polylines of a glyph into fill regions.

    The resolver is stateless and safe for use in parallel processing.
    """

    def analyze(self, polylines: list[Polyline]) -> RegionHierarchy:
        """Classify polylines and assign every hole to an outer boundary.

        Process:
        1. Classify polylines by winding direction (outer vs hole)
        2. For each hole, find the smallest outer boundary enclosing it

        Args:
            polylines: Flattened contours of one glyph

        Returns:
            RegionHierarchy containing classification and relationships
        """
        hierarchy = RegionHierarchy()

        for idx, polyline in enumerate(polylines):
            area = polyline.signed_area()
            if area > 0:
                hierarchy.outer_contours.append(idx)
            elif area < 0:
                hierarchy.hole_contours.append(idx)
            else:
                hierarchy.degenerate.append(idx)

        for hole_idx in hierarchy.hole_contours:
            outer_idx = self._find_containing_outer(
                polylines[hole_idx], polylines, hierarchy.outer_contours
            )
            if outer_idx is None:
                hierarchy.orphan_holes.append(hole_idx)
            else:
                hierarchy.containment[hole_idx] = outer_idx

        return hierarchy

    def resolve(self, polylines: list[Polyline]) -> list[FillRegion]:
        """Build one fill region per outer boundary.

        A glyph without outer boundaries (space, for instance) yields an
        empty list.

        Args:
            polylines: Flattened contours of one glyph

        Returns:
            Fill regions in the order their outer boundaries appeared
        """
        hierarchy = self.analyze(polylines)

        if hierarchy.orphan_holes:
            logger.debug(
                "Dropping holes outside every outer boundary",
                holes=hierarchy.orphan_holes,
            )

        return [
            FillRegion(
                outer=polylines[outer_idx],
                holes=tuple(polylines[hole_idx] for hole_idx in hierarchy.holes_of(outer_idx)),
            )
            for outer_idx in hierarchy.outer_contours
        ]

    def _find_containing_outer(
        self,
        hole: Polyline,
        all_polylines: list[Polyline],
        outer_indices: list[int],
    ) -> int | None:
        """Find the outer boundary a hole belongs to.

        Every point of the hole must lie inside the outer boundary. When
        several outer boundaries qualify (a hole inside a ring inside
        another ring) the innermost one, i.e. the one with the smallest
        area, wins. Holes touching their boundary can fail the strict test,
        so outer boundaries containing most of the hole are the fallback.

        Args:
            hole: The hole to place
            all_polylines: All polylines of the glyph
            outer_indices: Indices of outer boundaries to test against

        Returns:
            Index of the enclosing outer boundary, or None if not contained
        """
        if not hole.points:
            return None

        full: list[int] = []
        partial: list[int] = []
        for outer_idx in outer_indices:
            outer = all_polylines[outer_idx].points
            inside = sum(1 for point in hole.points if point_in_polygon(point, outer))
            if inside == len(hole.points):
                full.append(outer_idx)
            elif inside * 2 > len(hole.points):
                partial.append(outer_idx)

        candidates = full or partial
        if not candidates:
            return None

        return min(candidates, key=lambda i: all_polylines[i].signed_area())
