"""Shared fixtures: small fonts generated with fontTools FontBuilder.

The TrueType font maps H, E, L, O, A, B, #, D and space. O is drawn with
quadratic curves and has a hole; A has a triangular hole and B two
rectangular ones. The hole of # has its rightmost corner level with an outer
corner that starts a horizontal edge, and D has a curved notch cut into the
outer beside its hole. U+00C0 (A plus a grave accent) and U+2143 (L mirrored)
are composite glyphs.
The pair H/E is kerned by -100 units. UPM 1000, ascent 800, descent -200,
no line gap, so a line is exactly 1000 units tall.

The CFF font maps I and O (cubic curves with a hole).
"""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.t2CharStringPen import T2CharStringPen
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTCollection, TTFont, newTable
from fontTools.ttLib.tables._k_e_r_n import KernTable_format_0

UPM = 1000
ASCENT = 800
DESCENT = -200
KERN_H_E = -100

# Counter-clockwise polygons (outer boundaries in y-up coordinates)
H_POLYGON = [
    (50, 0), (150, 0), (150, 300), (450, 300), (450, 0), (550, 0),
    (550, 700), (450, 700), (450, 400), (150, 400), (150, 700), (50, 700),
]
E_POLYGON = [
    (50, 0), (450, 0), (450, 100), (150, 100), (150, 300), (400, 300),
    (400, 400), (150, 400), (150, 600), (450, 600), (450, 700), (50, 700),
]
L_POLYGON = [(50, 0), (450, 0), (450, 100), (150, 100), (150, 700), (50, 700)]
A_OUTER = [(0, 0), (600, 0), (300, 700)]
A_HOLE = [(220, 200), (380, 200), (300, 400)]
NUMBER_OUTER = [
    (50, 0), (400, 0), (400, 300), (550, 300), (550, 500), (400, 500),
    (400, 700), (50, 700),
]
GRAVE_POLYGON = [(200, 750), (280, 750), (200, 900), (120, 900)]

ADVANCES = {
    ".notdef": 500,
    "space": 250,
    "H": 600,
    "E": 500,
    "L": 500,
    "O": 600,
    "A": 600,
    "B": 500,
    "numbersign": 600,
    "D": 600,
    "grave": 400,
    "Agrave": 600,
    "uni2143": 500,
}

CHARACTER_MAP = {
    ord(" "): "space",
    ord("H"): "H",
    ord("E"): "E",
    ord("L"): "L",
    ord("O"): "O",
    ord("A"): "A",
    ord("B"): "B",
    ord("#"): "numbersign",
    ord("D"): "D",
    0x00C0: "Agrave",
    0x2143: "uni2143",
}

# Every mapped character that has an outline
OUTLINE_TEXT = "HELOAB#D\u00c0\u2143"


def rect(x0: float, y0: float, x1: float, y1: float) -> list[tuple[float, float]]:
    """Counter-clockwise rectangle."""
    return [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]


def _draw_polygon(pen, points, clockwise: bool) -> None:
    pts = list(reversed(points)) if clockwise else list(points)
    pen.moveTo(pts[0])
    for pt in pts[1:]:
        pen.lineTo(pt)
    pen.closePath()


def _truetype_glyphs() -> dict:
    # TrueType outer contours wind clockwise, holes counter-clockwise
    glyphs = {}

    pen = TTGlyphPen(None)
    _draw_polygon(pen, rect(50, 0, 450, 700), clockwise=True)
    glyphs[".notdef"] = pen.glyph()

    glyphs["space"] = TTGlyphPen(None).glyph()

    for name, polygon in (("H", H_POLYGON), ("E", E_POLYGON), ("L", L_POLYGON)):
        pen = TTGlyphPen(None)
        _draw_polygon(pen, polygon, clockwise=True)
        glyphs[name] = pen.glyph()

    pen = TTGlyphPen(None)
    pen.moveTo((300, 0))
    pen.qCurveTo((50, 0), (50, 350))
    pen.qCurveTo((50, 700), (300, 700))
    pen.qCurveTo((550, 700), (550, 350))
    pen.qCurveTo((550, 0), (300, 0))
    pen.closePath()
    pen.moveTo((300, 100))
    pen.qCurveTo((450, 100), (450, 350))
    pen.qCurveTo((450, 600), (300, 600))
    pen.qCurveTo((150, 600), (150, 350))
    pen.qCurveTo((150, 100), (300, 100))
    pen.closePath()
    glyphs["O"] = pen.glyph()

    pen = TTGlyphPen(None)
    _draw_polygon(pen, A_OUTER, clockwise=True)
    _draw_polygon(pen, A_HOLE, clockwise=False)
    glyphs["A"] = pen.glyph()

    pen = TTGlyphPen(None)
    _draw_polygon(pen, rect(50, 0, 450, 700), clockwise=True)
    _draw_polygon(pen, rect(150, 100, 350, 300), clockwise=False)
    _draw_polygon(pen, rect(150, 400, 350, 600), clockwise=False)
    glyphs["B"] = pen.glyph()

    pen = TTGlyphPen(None)
    _draw_polygon(pen, NUMBER_OUTER, clockwise=True)
    _draw_polygon(pen, rect(200, 300, 350, 500), clockwise=False)
    glyphs["numbersign"] = pen.glyph()

    # Quadratic notch bites into the right side level with the hole
    pen = TTGlyphPen(None)
    pen.moveTo((50, 0))
    pen.lineTo((50, 700))
    pen.lineTo((550, 700))
    pen.lineTo((550, 450))
    pen.qCurveTo((400, 350), (550, 250))
    pen.lineTo((550, 0))
    pen.closePath()
    _draw_polygon(pen, rect(150, 250, 400, 450), clockwise=False)
    glyphs["D"] = pen.glyph()

    pen = TTGlyphPen(None)
    _draw_polygon(pen, GRAVE_POLYGON, clockwise=True)
    glyphs["grave"] = pen.glyph()

    pen = TTGlyphPen(glyphs)
    pen.addComponent("A", (1, 0, 0, 1, 0, 0))
    pen.addComponent("grave", (1, 0, 0, 1, 50, 0))
    glyphs["Agrave"] = pen.glyph()

    pen = TTGlyphPen(glyphs)
    pen.addComponent("L", (-1, 0, 0, 1, 500, 0))
    glyphs["uni2143"] = pen.glyph()

    return glyphs


def build_truetype_font(path: Path, ascent: int = ASCENT, with_kerning: bool = True) -> Path:
    """Build the TrueType test font and save it to path."""
    glyph_order = list(ADVANCES)
    fb = FontBuilder(UPM, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap(CHARACTER_MAP)

    glyphs = _truetype_glyphs()
    fb.setupGlyf(glyphs)
    glyf = fb.font["glyf"]
    fb.setupHorizontalMetrics(
        {name: (ADVANCES[name], getattr(glyf[name], "xMin", 0)) for name in glyph_order}
    )
    fb.setupHorizontalHeader(ascent=ascent, descent=DESCENT)
    fb.setupNameTable({"familyName": "Textrude Test", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=ascent, sTypoDescender=DESCENT, usWinAscent=ascent, usWinDescent=-DESCENT)
    fb.setupPost()

    if with_kerning:
        kern = newTable("kern")
        kern.version = 0
        subtable = KernTable_format_0()
        subtable.coverage = 1
        subtable.kernTable = {("H", "E"): KERN_H_E}
        kern.kernTables = [subtable]
        fb.font["kern"] = kern

    fb.save(str(path))
    return path


def build_cff_font(path: Path) -> Path:
    """Build the CFF test font and save it to path."""
    glyph_order = [".notdef", "space", "I", "O"]
    fb = FontBuilder(UPM, isTTF=False)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({ord(" "): "space", ord("I"): "I", ord("O"): "O"})

    charstrings = {}

    # CFF outer contours wind counter-clockwise, holes clockwise
    pen = T2CharStringPen(500, None)
    _draw_polygon(pen, rect(50, 0, 450, 700), clockwise=False)
    charstrings[".notdef"] = pen.getCharString()

    charstrings["space"] = T2CharStringPen(250, None).getCharString()

    pen = T2CharStringPen(300, None)
    _draw_polygon(pen, rect(100, 0, 200, 700), clockwise=False)
    charstrings["I"] = pen.getCharString()

    pen = T2CharStringPen(600, None)
    pen.moveTo((300, 0))
    pen.curveTo((440, 0), (550, 160), (550, 350))
    pen.curveTo((550, 540), (440, 700), (300, 700))
    pen.curveTo((160, 700), (50, 540), (50, 350))
    pen.curveTo((50, 160), (160, 0), (300, 0))
    pen.closePath()
    pen.moveTo((300, 100))
    pen.curveTo((220, 100), (150, 220), (150, 350))
    pen.curveTo((150, 480), (220, 600), (300, 600))
    pen.curveTo((380, 600), (450, 480), (450, 350))
    pen.curveTo((450, 220), (380, 100), (300, 100))
    pen.closePath()
    charstrings["O"] = pen.getCharString()

    fb.setupCFF("TextrudeTestCFF", {"FullName": "Textrude Test CFF"}, charstrings, {})
    fb.setupHorizontalMetrics({".notdef": (500, 50), "space": (250, 0), "I": (300, 100), "O": (600, 50)})
    fb.setupHorizontalHeader(ascent=ASCENT, descent=DESCENT)
    fb.setupNameTable({"familyName": "Textrude Test CFF", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=ASCENT, sTypoDescender=DESCENT, usWinAscent=ASCENT, usWinDescent=-DESCENT)
    fb.setupPost()

    fb.save(str(path))
    return path


@pytest.fixture(scope="session")
def font_dir(tmp_path_factory) -> Path:
    return tmp_path_factory.mktemp("fonts")


@pytest.fixture(scope="session")
def ttf_path(font_dir) -> Path:
    """TrueType test font with quadratic outlines and a kern table."""
    return build_truetype_font(font_dir / "TextrudeTest.ttf")


@pytest.fixture(scope="session")
def cff_path(font_dir) -> Path:
    """CFF-flavoured OpenType test font with cubic outlines."""
    return build_cff_font(font_dir / "TextrudeTest.otf")


@pytest.fixture(scope="session")
def ttc_path(font_dir) -> Path:
    """Collection of two TrueType faces; face 1 has a taller ascent."""
    first = build_truetype_font(font_dir / "face0.ttf")
    second = build_truetype_font(font_dir / "face1.ttf", ascent=900, with_kerning=False)

    collection = TTCollection()
    collection.fonts = [TTFont(str(first)), TTFont(str(second))]
    path = font_dir / "TextrudeTest.ttc"
    collection.save(str(path))
    return path


@pytest.fixture
def outline_text() -> str:
    """Every character of the TrueType test font that has an outline."""
    return OUTLINE_TEXT
