"""Font reader for loading TTF/OTF/TTC fonts.

This module provides the FontReader class for loading font files and
extracting per-character outlines, metrics and kerning into domain models.
"""

from pathlib import Path

import structlog
from fontTools.ttLib import TTCollection, TTFont

from textrude.domain.glyph import GlyphOutline
from textrude.exceptions import FaceIndexError, FontError, FontLoadError
from textrude.io.converter import record_glyph, recording_to_contours

logger = structlog.get_logger(__name__)

COLLECTION_TAG = b"ttcf"

# Coverage byte of a format 0 `kern` subtable, as exposed by fonttools
_MS_HORIZONTAL = 0x01
_MS_CROSS_STREAM = 0x04
_APPLE_VERTICAL = 0x80
_APPLE_CROSS_STREAM = 0x40


class FontReader:
    """Loads TTF/OTF/TTC fonts and extracts glyph outlines.

    Outlines are returned with outer boundaries counter-clockwise and holes
    clockwise. TrueType outlines wind the other way round, so their contours
    are reversed while drawing; CFF outlines already follow this rule.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            outline = reader.get_outline(ord("A"))
    """

    def __init__(self, font_path: Path, face_index: int = 0) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF, OTF or TTC font file
            face_index: Face to use inside a font collection
        """
        self._font_path = font_path
        self._face_index = face_index
        self._font: TTFont | None = None
        self._collection: TTCollection | None = None
        self._face_count = 0
        self._cmap: dict[int, str] = {}

    def load(self) -> None:
        """Load the font file.

        Raises:
            FontLoadError: If the file does not exist or cannot be parsed
            FaceIndexError: If face_index is out of range
        """
        path = str(self._font_path)
        if not self._font_path.is_file():
            raise FontLoadError(path, "file not found")

        try:
            with open(self._font_path, "rb") as f:
                tag = f.read(4)

            if tag == COLLECTION_TAG:
                collection = TTCollection(path)
                self._face_count = len(collection.fonts)
                if self._face_index >= self._face_count:
                    collection.close()
                    raise FaceIndexError(path, self._face_index, self._face_count)
                self._collection = collection
                font = collection.fonts[self._face_index]
            else:
                self._face_count = 1
                if self._face_index != 0:
                    raise FaceIndexError(path, self._face_index, self._face_count)
                font = TTFont(path)

            # Tables are loaded lazily; touch the required ones now so that
            # a broken font fails here and not halfway through the layout
            font["head"]
            font["hhea"]
            font["hmtx"]
            if not any(tag in font for tag in ("glyf", "CFF ", "CFF2")):
                raise FontLoadError(path, "font has no glyph outlines")
            self._cmap = font.getBestCmap() or {}
        except FontError:
            self.close()
            raise
        except Exception as e:
            self.close()
            raise FontLoadError(path, str(e) or type(e).__name__) from e

        self._font = font
        logger.debug(
            "Font opened",
            path=path,
            face_index=self._face_index,
            face_count=self._face_count,
            mapped_characters=len(self._cmap),
        )

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def path(self) -> Path:
        return self._font_path

    @property
    def face_index(self) -> int:
        return self._face_index

    @property
    def face_count(self) -> int:
        """Number of faces in the file (1 for plain TTF/OTF)."""
        self._require_font()
        return self._face_count

    @property
    def format(self) -> str:
        """Return font format.

        Returns:
            'TrueType' for glyf outlines, 'OpenType' for CFF outlines
        """
        font = self._require_font()
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def units_per_em(self) -> int:
        """Return font's units per em.

        The units per em (UPM) defines the resolution of the font's
        coordinate system. Common values are 1000 or 2048.
        """
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def ascender(self) -> float:
        return float(self._require_font()["hhea"].ascent)  # type: ignore[attr-defined]

    @property
    def descender(self) -> float:
        """Descender in font units (negative below the baseline)."""
        return float(self._require_font()["hhea"].descent)  # type: ignore[attr-defined]

    @property
    def line_gap(self) -> float:
        return float(self._require_font()["hhea"].lineGap)  # type: ignore[attr-defined]

    @property
    def line_height(self) -> float:
        """Baseline-to-baseline distance in font units."""
        return self.ascender - self.descender + self.line_gap

    @property
    def glyph_count(self) -> int:
        return self._require_font()["maxp"].numGlyphs  # type: ignore[attr-defined]

    def has_glyph(self, code_point: int) -> bool:
        self._require_font()
        return code_point in self._cmap

    def get_outline(self, code_point: int) -> GlyphOutline | None:
        """Get the outline for a Unicode code point.

        Components of composite glyphs are decomposed into plain contours.

        Args:
            code_point: Unicode code point

        Returns:
            GlyphOutline in font units, or None if the font has no glyph
            for the code point
        """
        font = self._require_font()
        name = self._cmap.get(code_point)
        if name is None:
            return None

        glyph_set = font.getGlyphSet()
        glyph = glyph_set[name]
        recording = record_glyph(glyph, glyph_set, reverse="glyf" in font)
        contours = recording_to_contours(recording)

        return GlyphOutline(
            code_point=code_point,
            name=name,
            contours=tuple(contours),
            advance_width=float(glyph.width),
        )

    def kerning(self, left: int, right: int) -> float:
        """Kerning adjustment between two characters.

        Only horizontal, non cross-stream format 0 subtables of the legacy
        `kern` table are consulted; the first subtable with the pair wins.

        Args:
            left: Code point of the preceding character
            right: Code point of the current character

        Returns:
            Adjustment in font units, 0 when the pair is not kerned
        """
        font = self._require_font()
        if "kern" not in font:
            return 0.0

        left_name = self._cmap.get(left)
        right_name = self._cmap.get(right)
        if left_name is None or right_name is None:
            return 0.0

        for subtable in getattr(font["kern"], "kernTables", []):
            pairs = getattr(subtable, "kernTable", None)
            if pairs is None or not _is_horizontal(subtable):
                continue
            value = pairs.get((left_name, right_name))
            if value is not None:
                return float(value)
        return 0.0

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._collection is not None:
            self._collection.close()
            self._collection = None
        elif self._font is not None:
            self._font.close()
        self._font = None
        self._cmap = {}

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()


def _is_horizontal(subtable: object) -> bool:
    coverage = getattr(subtable, "coverage", _MS_HORIZONTAL)
    if getattr(subtable, "apple", False):
        return not coverage & (_APPLE_VERTICAL | _APPLE_CROSS_STREAM)
    return bool(coverage & _MS_HORIZONTAL) and not coverage & _MS_CROSS_STREAM
