"""Text layout: characters to placed glyph instances.

Simple left-to-right, top-to-bottom layout. Each character is looked up in
the outline source, flattened and resolved into fill regions once per run,
and placed at the pen position. Characters the font cannot render are
skipped with a warning instead of failing the run.
"""

from dataclasses import dataclass, field
from typing import Protocol

import structlog

from textrude.core.flatten import flatten_contours
from textrude.core.resolver import PolygonResolver
from textrude.domain import BoundingBox, FillRegion, GlyphInstance, GlyphOutline, MissingGlyph

logger = structlog.get_logger(__name__)


class OutlineSource(Protocol):
    """Read-only access to glyph outlines and metrics, in font units."""

    @property
    def units_per_em(self) -> int: ...

    @property
    def ascender(self) -> float: ...

    @property
    def line_height(self) -> float: ...

    def get_outline(self, code_point: int) -> GlyphOutline | None: ...

    def kerning(self, left: int, right: int) -> float: ...


def unescape_newlines(text: str) -> str:
    """Convert literal backslash-n sequences into line breaks."""
    return text.replace("\\n", "\n")


@dataclass(frozen=True)
class LayoutResult:
    """Output of the layout engine.

    Attributes:
        instances: Placed glyphs in text order (missing glyphs omitted)
        bounds: Bounding box of all placed regions, None if nothing is drawn
        warnings: Characters that were skipped
        line_height: Distance between consecutive baselines
        line_count: Number of lines in the text
    """

    instances: tuple[GlyphInstance, ...]
    bounds: BoundingBox | None
    warnings: tuple[MissingGlyph, ...] = ()
    line_height: float = 0.0
    line_count: int = 1

    @property
    def solid_instances(self) -> tuple[GlyphInstance, ...]:
        """Instances that produce geometry."""
        return tuple(inst for inst in self.instances if not inst.is_empty())


@dataclass
class _GlyphEntry:
    outline: GlyphOutline
    regions: tuple[FillRegion, ...]
    advance: float


@dataclass
class LayoutEngine:
    """Places glyphs on lines and lines within a block.

    Attributes:
        source: Outline source (the loaded font)
        size: Font size in layout units (one em)
        tolerance: Curve flattening tolerance in layout units
        spacing: Extra advance after every glyph
        kerning: Apply pair kerning from the font
    """

    source: OutlineSource
    size: float
    tolerance: float
    spacing: float = 0.0
    kerning: bool = True
    resolver: PolygonResolver = field(default_factory=PolygonResolver)
    _cache: dict[int, _GlyphEntry | None] = field(default_factory=dict, init=False, repr=False)

    @property
    def scale(self) -> float:
        """Layout units per font unit."""
        return self.size / self.source.units_per_em

    @property
    def line_height(self) -> float:
        return self.source.line_height * self.scale

    def glyph(self, code_point: int) -> _GlyphEntry | None:
        """Scaled, flattened and resolved glyph for a code point (cached)."""
        if code_point in self._cache:
            return self._cache[code_point]

        outline = self.source.get_outline(code_point)
        entry = None
        if outline is not None:
            scale = self.scale
            contours = tuple(contour.transformed(scale) for contour in outline.contours)
            polylines = flatten_contours(contours, self.tolerance)
            regions = tuple(self.resolver.resolve(polylines))
            entry = _GlyphEntry(
                outline=outline,
                regions=regions,
                advance=outline.advance_width * scale,
            )
            logger.debug(
                "Glyph resolved",
                glyph=outline.name,
                code_point=code_point,
                contours=len(outline.contours),
                regions=len(regions),
            )

        self._cache[code_point] = entry
        return entry

    def layout(self, text: str) -> LayoutResult:
        """Lay out text into glyph instances.

        Args:
            text: Text to lay out; ``\\n`` starts a new line

        Returns:
            LayoutResult with the placed glyphs, their bounds and warnings
        """
        scale = self.scale
        line_height = self.line_height
        pen_x = 0.0
        baseline = self.source.ascender * scale
        prev_cp: int | None = None

        instances: list[GlyphInstance] = []
        warnings: list[MissingGlyph] = []
        bounds: BoundingBox | None = None
        line_count = 1

        for index, char in enumerate(text):
            if char == "\n":
                pen_x = 0.0
                baseline -= line_height
                prev_cp = None
                line_count += 1
                continue

            code_point = ord(char)
            entry = self.glyph(code_point)
            if entry is None:
                missing = MissingGlyph(char=char, index=index)
                warnings.append(missing)
                logger.warning("Skip missing glyph", char=char, code_point=missing.label)
                continue

            # Apply kerning relative to previous glyph when available
            if self.kerning and prev_cp is not None:
                pen_x += self.source.kerning(prev_cp, code_point) * scale

            instance = GlyphInstance(
                char=char,
                code_point=code_point,
                regions=entry.regions,
                offset=(pen_x, baseline),
                advance=entry.advance,
            )
            instances.append(instance)
            for region in instance.placed_regions():
                bounds = _union(bounds, region.bounding_box())

            pen_x += entry.advance + self.spacing
            prev_cp = code_point

        return LayoutResult(
            instances=tuple(instances),
            bounds=bounds,
            warnings=tuple(warnings),
            line_height=line_height,
            line_count=line_count,
        )


def _union(a: BoundingBox | None, b: BoundingBox) -> BoundingBox:
    if a is None:
        return b
    return (min(a[0], b[0]), min(a[1], b[1]), max(a[2], b[2]), max(a[3], b[3]))
