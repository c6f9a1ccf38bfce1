"""A polygon mesh stored as a point list and faces of vertex indices."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from meshgeom.bounding_box import BoundingBox
from meshgeom.exceptions import InvalidInputException, TopologyException
from meshgeom.matrix import Matrix, vector


@dataclass
class IndexedMesh:
    """Polygon mesh with optional per-vertex, per-face and per-corner attributes.

    Faces are tuples of vertex indices in counter-clockwise order.  Every
    directed edge may belong to at most one face, as in a halfedge mesh.
    Attribute lists, when present, are indexed like the element they belong
    to; ``corner_texcoords`` holds one tuple of texture coordinates per face.
    """

    points: list = field(default_factory=list)
    faces: list = field(default_factory=list)
    vertex_normals: list | None = None
    vertex_colors: list | None = None
    vertex_texcoords: list | None = None
    face_normals: list | None = None
    corner_texcoords: list | None = None
    _directed_edges: set = field(default_factory=set, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        points = list(self.points)
        faces = list(self.faces)
        self.points = []
        self.faces = []
        for p in points:
            self.add_vertex(p)
        for f in faces:
            self.add_face(f)

    def add_vertex(self, point) -> int:
        """Append a vertex at ``point`` and return its index."""
        p = point.copy() if isinstance(point, Matrix) else vector(*point)
        if p.size != 3:
            raise InvalidInputException("a vertex position needs three coordinates")
        self.points.append(p)
        return len(self.points) - 1

    def add_face(self, vertices: Iterable[int]) -> int:
        """Append a face over the given vertex indices and return its index."""
        face = tuple(int(v) for v in vertices)
        if len(face) < 3:
            raise InvalidInputException("a face needs at least three vertices")
        n = len(self.points)
        if any(not 0 <= v < n for v in face):
            raise InvalidInputException("face references a non-existent vertex")
        if len(set(face)) != len(face):
            raise TopologyException("face uses a vertex more than once")
        directed = [(a, b) for a, b in zip(face, face[1:] + face[:1])]
        if any(e in self._directed_edges for e in directed):
            raise TopologyException("complex edge")
        self._directed_edges.update(directed)
        self.faces.append(face)
        return len(self.faces) - 1

    def n_vertices(self) -> int:
        return len(self.points)

    def n_faces(self) -> int:
        return len(self.faces)

    def valence(self, face: int) -> int:
        """Number of vertices of a face."""
        return len(self.faces[face])

    def edges(self) -> list[tuple[int, int]]:
        """Undirected edges as sorted index pairs, in order of first appearance."""
        seen: dict[tuple[int, int], None] = {}
        for face in self.faces:
            for a, b in zip(face, face[1:] + face[:1]):
                seen.setdefault((min(a, b), max(a, b)), None)
        return list(seen)

    def is_triangle_mesh(self) -> bool:
        return all(len(f) == 3 for f in self.faces)


def bounds(mesh: IndexedMesh) -> BoundingBox:
    """Bounding box of the mesh vertices."""
    bb = BoundingBox()
    for p in mesh.points:
        bb += p
    return bb


def flip_faces(mesh: IndexedMesh) -> None:
    """Reverse the orientation of every face, keeping only positions and faces."""
    flipped = [tuple(reversed(f)) for f in mesh.faces]
    mesh.faces = []
    mesh._directed_edges.clear()
    mesh.vertex_normals = None
    mesh.vertex_colors = None
    mesh.vertex_texcoords = None
    mesh.face_normals = None
    mesh.corner_texcoords = None
    for face in flipped:
        mesh.add_face(face)