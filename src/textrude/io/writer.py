"""ASCII STL writer.

This module provides the StlWriter class for serializing a mesh either to a
file (atomically) or to a text stream such as standard output.
"""

import io
import os
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

import structlog

from textrude.core.geometry import triangle_normal
from textrude.domain import Mesh
from textrude.exceptions import MeshWriteError

logger = structlog.get_logger(__name__)

STDOUT_SOLID_NAME = "mesh"


@dataclass(frozen=True)
class WriteSummary:
    """Result of serializing a mesh.

    Attributes:
        facets_written: Facets present in the output
        facets_skipped: Zero-area triangles left out
        destination: Output path, or "<stdout>"
    """

    facets_written: int
    facets_skipped: int
    destination: str


def _num(value: float) -> str:
    # Adding 0.0 turns -0.0 into 0.0
    return format(value + 0.0, ".9g")


def write_stl_ascii(stream: TextIO, mesh: Mesh, name: str = STDOUT_SOLID_NAME) -> tuple[int, int]:
    """Write a mesh as ASCII STL to a text stream.

    Every facet carries the unit normal of its triangle by the right-hand
    rule and the vertices in stored order. Triangles without area have no
    normal and are skipped.

    Args:
        stream: Destination text stream
        mesh: Mesh to serialize
        name: Solid name for the header and footer lines

    Returns:
        Tuple of (facets written, facets skipped)
    """
    written = 0
    skipped = 0

    stream.write(f"solid {name}\n")
    for a, b, c in mesh.triangles():
        normal = triangle_normal(a, b, c)
        if normal is None:
            skipped += 1
            continue

        stream.write(f"  facet normal {_num(normal[0])} {_num(normal[1])} {_num(normal[2])}\n")
        stream.write("    outer loop\n")
        for v in (a, b, c):
            stream.write(f"      vertex {_num(v[0])} {_num(v[1])} {_num(v[2])}\n")
        stream.write("    endloop\n")
        stream.write("  endfacet\n")
        written += 1
    stream.write(f"endsolid {name}\n")

    return written, skipped


class StlWriter:
    """Writes a mesh as ASCII STL to a file or standard output.

    File output goes to a temporary file next to the destination which is
    then moved into place, so a failed run never leaves a truncated STL.
    Standard output receives the fully rendered text in a single write.

    Example:
        writer = StlWriter(Path("hello.stl"))
        summary = writer.save(mesh)
    """

    def __init__(self, output_path: Path | None = None) -> None:
        """Initialize the STL writer.

        Args:
            output_path: Destination file, or None for standard output
        """
        self._output_path = output_path

    @property
    def solid_name(self) -> str:
        """Name used in the ``solid``/``endsolid`` lines."""
        if self._output_path is None:
            return STDOUT_SOLID_NAME
        return self._output_path.stem or STDOUT_SOLID_NAME

    @property
    def destination(self) -> str:
        return "<stdout>" if self._output_path is None else str(self._output_path)

    def render(self, mesh: Mesh) -> tuple[str, int, int]:
        """Render the mesh to STL text.

        Returns:
            Tuple of (text, facets written, facets skipped)
        """
        buffer = io.StringIO()
        written, skipped = write_stl_ascii(buffer, mesh, self.solid_name)
        return buffer.getvalue(), written, skipped

    def save(self, mesh: Mesh, stream: TextIO | None = None) -> WriteSummary:
        """Serialize the mesh to its destination.

        Args:
            mesh: Mesh to write
            stream: Stream used instead of standard output when no output
                path is set (mainly for tests)

        Returns:
            WriteSummary with facet counts

        Raises:
            MeshWriteError: If the destination cannot be written
        """
        text, written, skipped = self.render(mesh)

        if self._output_path is None:
            out = stream if stream is not None else sys.stdout
            try:
                out.write(text)
                out.flush()
            except OSError as e:
                raise MeshWriteError(self.destination, str(e)) from e
        else:
            self._write_atomic(self._output_path, text)

        if skipped:
            logger.debug("Skipped zero-area facets", count=skipped)
        logger.info(
            "Mesh written",
            destination=self.destination,
            facets=written,
            skipped=skipped,
        )
        return WriteSummary(
            facets_written=written,
            facets_skipped=skipped,
            destination=self.destination,
        )

    @staticmethod
    def _write_atomic(path: Path, text: str) -> None:
        directory = path.parent if str(path.parent) else Path(".")
        tmp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                newline="\n",
                dir=directory,
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(text)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise MeshWriteError(str(path), str(e)) from e
