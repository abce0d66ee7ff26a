"""Unit tests for mesh assembly: orientation and centering."""

import pytest

from textrude.config import Orientation
from textrude.core.assemble import assemble_mesh, centering_transform, orientation_transform
from textrude.core.extrude import extrude_region
from textrude.domain import FillRegion, Mesh, Point, Polyline


def box_solid(x0: float, y0: float, x1: float, y1: float, depth: float = 10.0, label: str = ""):
    outer = Polyline((Point(x0, y0), Point(x1, y0), Point(x1, y1), Point(x0, y1)))
    return extrude_region(FillRegion(outer=outer), depth, label=label)


class TestOrientation:
    """Tests for orientation transforms."""

    def test_flat_is_identity(self):
        """Test flat orientation leaves layout space unchanged."""
        assert orientation_transform(Orientation.FLAT).is_identity()

    def test_front_maps_axes(self):
        """Test front orientation maps (x, y, z) to (x, -z, y)."""
        assert orientation_transform(Orientation.FRONT).apply((1.0, 2.0, 3.0)) == (1.0, -3.0, 2.0)

    def test_front_keeps_manifold_orientation(self):
        """Test the rotation keeps outward normals outward."""
        mesh = assemble_mesh([box_solid(0, 0, 10, 10)], orient=Orientation.FRONT, center=False)
        solid = mesh.solids[0]
        assert solid.is_manifold()
        lo, hi = solid.bounds()
        # Text height now runs along Z, depth along -Y
        assert (lo[2], hi[2]) == pytest.approx((0.0, 10.0))
        assert (lo[1], hi[1]) == pytest.approx((-5.0, 5.0))


class TestCentering:
    """Tests for centering."""

    def test_centered_in_plane(self):
        """Test the in-plane bounding box is centered on the origin."""
        mesh = assemble_mesh(
            [box_solid(10, 20, 30, 60)], orient=Orientation.FLAT, center=True
        )
        lo, hi = mesh.bounds()
        assert lo[0] == pytest.approx(-hi[0])
        assert lo[1] == pytest.approx(-hi[1])
        assert (lo[2], hi[2]) == pytest.approx((-5.0, 5.0))

    def test_centered_front(self):
        """Test front orientation centers X and Z."""
        mesh = assemble_mesh([box_solid(10, 20, 30, 60)], orient=Orientation.FRONT)
        lo, hi = mesh.bounds()
        assert lo[0] == pytest.approx(-hi[0])
        assert lo[2] == pytest.approx(-hi[2])
        assert (lo[1], hi[1]) == pytest.approx((-5.0, 5.0))

    def test_idempotent(self):
        """Test centering an already centered mesh changes nothing."""
        mesh = assemble_mesh([box_solid(10, 20, 30, 60)], orient=Orientation.FLAT)
        again = mesh.transformed(centering_transform(mesh, Orientation.FLAT))
        (lo, hi), (again_lo, again_hi) = mesh.bounds(), again.bounds()
        assert again_lo + again_hi == pytest.approx(lo + hi)

    def test_no_center(self):
        """Test layout coordinates are kept when centering is off."""
        mesh = assemble_mesh([box_solid(10, 20, 30, 60)], orient=Orientation.FLAT, center=False)
        lo, hi = mesh.bounds()
        assert (lo[0], lo[1], hi[0], hi[1]) == pytest.approx((10.0, 20.0, 30.0, 60.0))

    def test_empty_mesh(self):
        """Test an empty mesh needs no translation."""
        assert centering_transform(Mesh(), Orientation.FRONT).is_identity()
        assert assemble_mesh([]).triangle_count == 0


class TestAssembleMesh:
    """Tests for assemble_mesh function."""

    def test_plate_written_first(self):
        """Test the plate precedes the glyph solids."""
        glyph = box_solid(0, 0, 10, 10, label="A")
        plate = box_solid(-2, -2, 12, 12, depth=2, label="plate")
        mesh = assemble_mesh([glyph], plate=plate, orient=Orientation.FLAT)
        assert [s.label for s in mesh.solids] == ["plate", "A"]

    def test_order_preserved(self):
        """Test glyph solids keep text order."""
        solids = [box_solid(i * 20, 0, i * 20 + 10, 10, label=str(i)) for i in range(3)]
        mesh = assemble_mesh(solids, orient=Orientation.FLAT)
        assert [s.label for s in mesh.solids] == ["0", "1", "2"]
        assert mesh.triangle_count == 36
