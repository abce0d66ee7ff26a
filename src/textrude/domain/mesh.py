"""3D mesh types.

This module defines the 3D side of the pipeline:
- Solid: A closed triangle mesh (one glyph or the plate)
- Mesh: The ordered set of solids that gets serialized
- Transform: An affine coordinate transform applied to a whole mesh
"""

from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

Vertex = tuple[float, float, float]
Face = tuple[int, int, int]
Bounds3D = tuple[Vertex, Vertex]

_IDENTITY: tuple[Vertex, Vertex, Vertex] = (
    (1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.0, 0.0, 1.0),
)


@dataclass(frozen=True)
class Transform:
    """Affine transform ``p -> matrix @ p + offset``.

    Attributes:
        matrix: Row-major 3x3 linear part
        offset: Translation applied after the linear part
    """

    matrix: tuple[Vertex, Vertex, Vertex] = _IDENTITY
    offset: Vertex = (0.0, 0.0, 0.0)

    @classmethod
    def identity(cls) -> "Transform":
        return cls()

    @classmethod
    def translation(cls, dx: float, dy: float, dz: float) -> "Transform":
        return cls(offset=(dx, dy, dz))

    def apply(self, v: Vertex) -> Vertex:
        """Transform a single vertex."""
        m = self.matrix
        return (
            m[0][0] * v[0] + m[0][1] * v[1] + m[0][2] * v[2] + self.offset[0],
            m[1][0] * v[0] + m[1][1] * v[1] + m[1][2] * v[2] + self.offset[1],
            m[2][0] * v[0] + m[2][1] * v[1] + m[2][2] * v[2] + self.offset[2],
        )

    def then(self, other: "Transform") -> "Transform":
        """Compose: apply ``self`` first, then ``other``."""
        a, b = self.matrix, other.matrix
        matrix = tuple(
            tuple(sum(b[i][k] * a[k][j] for k in range(3)) for j in range(3)) for i in range(3)
        )
        offset = other.apply(self.offset)
        return Transform(matrix=matrix, offset=offset)  # type: ignore[arg-type]

    def is_identity(self) -> bool:
        return self.matrix == _IDENTITY and self.offset == (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Solid:
    """A closed triangle mesh.

    Faces index into ``vertices`` and are wound counter-clockwise when seen
    from outside, so the right-hand normal points out of the solid.

    Attributes:
        vertices: Vertex positions
        faces: Vertex index triples
        label: Human readable origin (glyph character or "plate")
    """

    vertices: tuple[Vertex, ...]
    faces: tuple[Face, ...]
    label: str = ""

    def __len__(self) -> int:
        return len(self.faces)

    def triangles(self) -> Iterator[tuple[Vertex, Vertex, Vertex]]:
        """Iterate faces as vertex position triples."""
        verts = self.vertices
        for a, b, c in self.faces:
            yield verts[a], verts[b], verts[c]

    def bounds(self) -> Bounds3D | None:
        """Axis-aligned bounds as (min, max) corners, None when empty."""
        return _bounds(self.vertices)

    def transformed(self, transform: Transform) -> "Solid":
        if transform.is_identity():
            return self
        return Solid(
            vertices=tuple(transform.apply(v) for v in self.vertices),
            faces=self.faces,
            label=self.label,
        )

    def is_manifold(self) -> bool:
        """Check that every directed edge has exactly one opposite partner.

        Returns:
            True if the solid is closed and consistently oriented
        """
        edges: Counter[tuple[int, int]] = Counter()
        for a, b, c in self.faces:
            edges[(a, b)] += 1
            edges[(b, c)] += 1
            edges[(c, a)] += 1

        return all(count == 1 and edges.get((b, a)) == 1 for (a, b), count in edges.items())

    @classmethod
    def merge(cls, solids: list["Solid"], label: str = "") -> "Solid":
        """Concatenate solids into one, re-basing face indices."""
        vertices: list[Vertex] = []
        faces: list[Face] = []
        for solid in solids:
            base = len(vertices)
            vertices.extend(solid.vertices)
            faces.extend((a + base, b + base, c + base) for a, b, c in solid.faces)
        return cls(vertices=tuple(vertices), faces=tuple(faces), label=label)


@dataclass(frozen=True)
class Mesh:
    """All solids of one run, in output order.

    Attributes:
        solids: Solids in the order they are written
    """

    solids: tuple[Solid, ...] = ()

    @property
    def triangle_count(self) -> int:
        return sum(len(solid) for solid in self.solids)

    def triangles(self) -> Iterator[tuple[Vertex, Vertex, Vertex]]:
        for solid in self.solids:
            yield from solid.triangles()

    def bounds(self) -> Bounds3D | None:
        """Axis-aligned bounds over all solids, None when empty."""
        return _bounds(v for solid in self.solids for v in solid.vertices)

    def transformed(self, transform: Transform) -> "Mesh":
        if transform.is_identity():
            return self
        return Mesh(solids=tuple(solid.transformed(transform) for solid in self.solids))


def _bounds(vertices: Iterable[Vertex]) -> Bounds3D | None:
    min_x = min_y = min_z = float("inf")
    max_x = max_y = max_z = float("-inf")
    empty = True

    for x, y, z in vertices:
        empty = False
        min_x, max_x = min(min_x, x), max(max_x, x)
        min_y, max_y = min(min_y, y), max(max_y, y)
        min_z, max_z = min(min_z, z), max(max_z, z)

    if empty:
        return None
    return (min_x, min_y, min_z), (max_x, max_y, max_z)
