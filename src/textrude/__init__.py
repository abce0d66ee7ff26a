"""Textrude - Turn a line of text into a printable 3D solid.

Textrude is a CLI tool that lays out Unicode text with a TrueType/OpenType font,
extrudes every glyph outline into a closed solid (holes in glyphs like O, A, B,
8 and @ stay open all the way through) and writes the result as an ASCII STL
mesh, optionally standing on a backing plate.

Example:
    $ textrude --font Roboto-Regular.ttf --depth 4 --plate 2 "HELLO" -o hello.stl

This will create hello.stl with the word extruded 4 units deep on a 2 unit plate.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
