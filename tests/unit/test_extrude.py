"""Unit tests for extrusion and plate generation."""

import math

import pytest

from textrude.core.extrude import extrude_instance, extrude_region
from textrude.core.geometry import triangle_normal
from textrude.core.plate import build_plate, rectangle_region
from textrude.domain import FillRegion, GlyphInstance, Point, Polyline


def rect(x0: float, y0: float, x1: float, y1: float, clockwise: bool = False) -> Polyline:
    points = (Point(x0, y0), Point(x1, y0), Point(x1, y1), Point(x0, y1))
    return Polyline(tuple(reversed(points)) if clockwise else points)


def signed_volume(solid) -> float:
    """Volume via the divergence theorem; positive when normals face out."""
    total = 0.0
    for a, b, c in solid.triangles():
        total += (
            a[0] * (b[1] * c[2] - b[2] * c[1])
            - a[1] * (b[0] * c[2] - b[2] * c[0])
            + a[2] * (b[0] * c[1] - b[1] * c[0])
        )
    return total / 6.0


SQUARE = FillRegion(outer=rect(0, 0, 10, 10))
SQUARE_WITH_HOLE = FillRegion(outer=rect(0, 0, 10, 10), holes=(rect(3, 3, 7, 7, clockwise=True),))


class TestExtrudeRegion:
    """Tests for extrude_region function."""

    def test_cube_triangle_count(self):
        """Test a square prism has 2 cap + 2 cap + 8 wall triangles."""
        solid = extrude_region(SQUARE, depth=10)
        assert len(solid) == 12
        assert len(solid.vertices) == 8

    def test_triangle_count_formula(self):
        """Test count = 2 x ring edges + cap triangles on both ends."""
        region = SQUARE_WITH_HOLE
        solid = extrude_region(region, depth=4)
        edges = region.edge_count()
        cap = edges + 2 * len(region.holes) - 2
        assert len(solid) == 2 * edges + 2 * cap

    @pytest.mark.parametrize("region", [SQUARE, SQUARE_WITH_HOLE])
    def test_manifold(self, region):
        """Test every directed edge has exactly one opposite partner."""
        assert extrude_region(region, depth=5).is_manifold()

    def test_depth_centered_on_offset(self):
        """Test z spans offset +/- depth / 2."""
        solid = extrude_region(SQUARE, depth=10, z_offset=3)
        lo, hi = solid.bounds()
        assert lo[2] == pytest.approx(-2.0)
        assert hi[2] == pytest.approx(8.0)

    @pytest.mark.parametrize("region", [SQUARE, SQUARE_WITH_HOLE])
    def test_normals_point_outward(self, region):
        """Test the enclosed volume is positive (outward orientation)."""
        solid = extrude_region(region, depth=2)
        assert signed_volume(solid) == pytest.approx(region.area() * 2)

    def test_cap_normals(self):
        """Test front cap faces +z and back cap faces -z."""
        solid = extrude_region(SQUARE, depth=2)
        normals = [triangle_normal(*tri) for tri in solid.triangles()]
        assert normals.count((0.0, 0.0, 1.0)) == 2
        assert normals.count((0.0, 0.0, -1.0)) == 2

    def test_wall_normals_horizontal(self):
        """Test side walls are perpendicular to the caps."""
        solid = extrude_region(SQUARE, depth=2)
        for tri in list(solid.triangles())[4:]:
            normal = triangle_normal(*tri)
            assert normal is not None
            assert normal[2] == pytest.approx(0.0)
            assert math.hypot(normal[0], normal[1]) == pytest.approx(1.0)

    def test_label(self):
        """Test the label is carried over."""
        assert extrude_region(SQUARE, depth=1, label="X").label == "X"


class TestExtrudeInstance:
    """Tests for extrude_instance function."""

    def test_multi_region_glyph(self):
        """Test all regions of a glyph end up in one manifold solid."""
        instance = GlyphInstance(
            char="i",
            code_point=ord("i"),
            regions=(FillRegion(outer=rect(0, 0, 2, 6)), FillRegion(outer=rect(0, 8, 2, 10))),
            offset=(5.0, 0.0),
            advance=4.0,
        )
        solid = extrude_instance(instance, depth=1)
        assert solid is not None
        assert solid.label == "i"
        assert len(solid) == 24
        assert solid.is_manifold()
        assert solid.bounds()[0][0] == pytest.approx(5.0)

    def test_empty_instance(self):
        """Test glyphs without regions produce no solid."""
        instance = GlyphInstance(char=" ", code_point=32, regions=(), offset=(0, 0), advance=3)
        assert extrude_instance(instance, depth=1) is None


class TestPlate:
    """Tests for plate generation."""

    def test_rectangle_region_ccw(self):
        """Test plate outline winds counter-clockwise."""
        region = rectangle_region(0, 0, 4, 2)
        assert region.outer.signed_area() == pytest.approx(8.0)

    def test_plate_bounds(self):
        """Test plate covers text bounds grown by the margin, behind the text."""
        plate = build_plate((0.0, 0.0, 50.0, 20.0), thickness=2.0, margin=2.0, text_depth=10.0)
        assert plate is not None
        assert plate.label == "plate"
        assert plate.is_manifold()

        lo, hi = plate.bounds()
        assert (lo[0], lo[1], hi[0], hi[1]) == pytest.approx((-2.0, -2.0, 52.0, 22.0))
        # Front face on the back face of the text
        assert hi[2] == pytest.approx(-5.0)
        assert lo[2] == pytest.approx(-7.0)

    def test_disabled(self):
        """Test zero thickness or missing bounds disables the plate."""
        assert build_plate((0, 0, 1, 1), thickness=0.0, margin=2.0, text_depth=10.0) is None
        assert build_plate(None, thickness=2.0, margin=2.0, text_depth=10.0) is None
