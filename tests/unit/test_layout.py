"""Unit tests for the layout engine.

Uses an in-memory outline source so no font file is needed.
"""

from unittest.mock import Mock

import pytest

from textrude.core.layout import LayoutEngine, unescape_newlines
from textrude.domain import Contour, GlyphOutline, LineSegment, Point


def square_contour(x0: float, y0: float, x1: float, y1: float) -> Contour:
    pts = [Point(x0, y0), Point(x1, y0), Point(x1, y1), Point(x0, y1)]
    return Contour(tuple(LineSegment(pts[i], pts[(i + 1) % 4]) for i in range(4)))


class FakeSource:
    """Outline source with square glyphs 500 units wide, advance 600."""

    units_per_em = 1000
    ascender = 800.0
    line_height = 1200.0

    def __init__(self, chars: str = "ABC", kerning: dict | None = None) -> None:
        self.chars = set(chars)
        self.pairs = kerning or {}
        self.lookups = 0

    def get_outline(self, code_point: int) -> GlyphOutline | None:
        self.lookups += 1
        char = chr(code_point)
        if char == " ":
            return GlyphOutline(code_point, "space", (), 300)
        if char not in self.chars:
            return None
        return GlyphOutline(code_point, char, (square_contour(50, 0, 550, 700),), 600)

    def kerning(self, left: int, right: int) -> float:
        return self.pairs.get((chr(left), chr(right)), 0.0)


def engine(source=None, **kwargs) -> LayoutEngine:
    return LayoutEngine(source=source or FakeSource(), size=100.0, tolerance=0.01, **kwargs)


class TestUnescape:
    """Tests for unescape_newlines function."""

    def test_literal_backslash_n(self):
        """Test literal backslash-n becomes a newline."""
        assert unescape_newlines("A\\nB") == "A\nB"

    def test_plain_text_unchanged(self):
        """Test text without escapes is unchanged."""
        assert unescape_newlines("AB\nC") == "AB\nC"


class TestLayoutEngine:
    """Tests for LayoutEngine class."""

    def test_scale(self):
        """Test layout units per font unit."""
        assert engine().scale == pytest.approx(0.1)
        assert engine().line_height == pytest.approx(120.0)

    def test_pen_advance(self):
        """Test glyphs are placed one advance apart on the first baseline."""
        result = engine().layout("AB")
        offsets = [inst.offset for inst in result.instances]
        assert offsets == [pytest.approx((0.0, 80.0)), pytest.approx((60.0, 80.0))]

    def test_spacing(self):
        """Test spacing is added after every glyph."""
        result = engine(spacing=5.0).layout("ABC")
        xs = [inst.offset[0] for inst in result.instances]
        assert xs == pytest.approx([0.0, 65.0, 130.0])

    def test_kerning_applied(self):
        """Test kerning moves the second glyph of a pair."""
        source = FakeSource(kerning={("A", "B"): -100})
        result = engine(source).layout("AB")
        assert result.instances[1].offset[0] == pytest.approx(50.0)

    def test_kerning_disabled(self):
        """Test kerning can be switched off."""
        source = FakeSource(kerning={("A", "B"): -100})
        result = engine(source, kerning=False).layout("AB")
        assert result.instances[1].offset[0] == pytest.approx(60.0)

    def test_newline(self):
        """Test a newline resets x and moves down one line height."""
        result = engine().layout("A\nB")
        first, second = result.instances
        assert second.offset[0] == pytest.approx(0.0)
        assert first.offset[1] - second.offset[1] == pytest.approx(120.0)
        assert result.line_count == 2

    def test_newline_resets_kerning_pair(self):
        """Test no kerning is applied across a line break."""
        source = FakeSource(kerning={("A", "B"): -100})
        result = engine(source).layout("A\nB")
        assert result.instances[1].offset[0] == pytest.approx(0.0)

    def test_missing_glyph_skipped(self):
        """Test a missing character is skipped without advancing."""
        result = engine().layout("AZB")

        assert [inst.char for inst in result.instances] == ["A", "B"]
        assert result.instances[1].offset[0] == pytest.approx(60.0)
        assert len(result.warnings) == 1
        assert result.warnings[0].label == "U+005A"
        assert result.warnings[0].index == 1

    def test_missing_glyph_keeps_previous_for_kerning(self):
        """Test kerning pairs the glyphs around a missing character."""
        source = FakeSource(kerning={("A", "B"): -100})
        result = engine(source).layout("AZB")
        assert result.instances[1].offset[0] == pytest.approx(50.0)

    def test_space_advances_without_geometry(self):
        """Test spaces advance the pen but have no regions."""
        result = engine().layout("A B")
        assert len(result.instances) == 3
        assert result.instances[1].is_empty()
        assert result.instances[2].offset[0] == pytest.approx(90.0)
        assert len(result.solid_instances) == 2

    def test_bounds(self):
        """Test bounds cover all placed regions."""
        result = engine().layout("AB")
        assert result.bounds == pytest.approx((5.0, 80.0, 115.0, 150.0))

    def test_empty_text(self):
        """Test empty text yields no instances and no bounds."""
        result = engine().layout("")
        assert result.instances == ()
        assert result.bounds is None

    def test_glyph_cache(self):
        """Test every code point is looked up once per engine."""
        source = FakeSource()
        engine(source).layout("AAAA")
        assert source.lookups == 1

    def test_regions_resolved(self):
        """Test glyph outlines become counter-clockwise fill regions."""
        result = engine().layout("A")
        region = result.instances[0].regions[0]
        assert region.outer.signed_area() == pytest.approx(50.0 * 70.0)

    def test_mock_source(self):
        """Test the engine only needs the outline source protocol."""
        source = Mock()
        source.units_per_em = 2000
        source.ascender = 1600
        source.line_height = 2400
        source.get_outline.return_value = None

        result = LayoutEngine(source=source, size=10.0, tolerance=0.01).layout("x")

        assert result.instances == ()
        source.get_outline.assert_called_once_with(ord("x"))
        source.kerning.assert_not_called()
