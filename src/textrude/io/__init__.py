"""Font and mesh I/O layer for textrude.

This module handles reading fonts using fonttools and writing meshes. It
provides a clean abstraction layer between fonttools and the domain models.

Key responsibilities:
- Load TTF/OTF/TTC fonts and select a face
- Convert fonttools drawing commands to domain contours
- Normalize outline winding across font formats
- Look up kerning pairs
- Write meshes as ASCII STL

Key classes:
- FontReader: Load fonts and extract outlines
- StlWriter: Save meshes
"""

from textrude.io.reader import FontReader
from textrude.io.writer import StlWriter, WriteSummary, write_stl_ascii

__all__ = [
    "FontReader",
    "StlWriter",
    "WriteSummary",
    "write_stl_ascii",
]
