"""Optimal triangulation of polygons by dynamic programming.

Splits an n-gon into n-2 triangles, either minimising the sum of squared
triangle areas or maximising the smallest angle.
"""

from __future__ import annotations

import enum
import sys
from collections import Counter
from typing import Callable, Iterable, Sequence

from meshgeom.exceptions import InvalidInputException
from meshgeom.indexed_mesh import IndexedMesh
from meshgeom.matrix import Matrix, cross, dot, normalize, sqrnorm, vector

_INFINITE_WEIGHT = sys.float_info.max


class Objective(enum.Enum):
    """What the triangulation optimises."""

    MIN_AREA = "min_area"
    """Minimise the sum of squared triangle areas."""
    MAX_ANGLE = "max_angle"
    """Maximise the minimum angle (may fold over on non-convex polygons)."""


def _as_point(p) -> Matrix:
    return p if isinstance(p, Matrix) else vector(*p)


def _triangle_weight(pa: Matrix, pb: Matrix, pc: Matrix, objective: Objective) -> float:
    if objective is Objective.MIN_AREA:
        return sqrnorm(cross(pb - pa, pc - pa))
    cosa = dot(normalize(pb - pa), normalize(pc - pa))
    cosb = dot(normalize(pa - pb), normalize(pc - pb))
    cosc = dot(normalize(pa - pc), normalize(pb - pc))
    return max(cosa, cosb, cosc)


def _split_table(
    points: Sequence[Matrix],
    objective: Objective,
    has_edge: Callable[[int, int], bool],
) -> list[list[int]]:
    """For every chain [i, k] the vertex m that splits it optimally."""
    n = len(points)
    weight = [[_INFINITE_WEIGHT] * n for _ in range(n)]
    splits = [[0] * n for _ in range(n)]

    for i in range(n - 1):
        weight[i][i + 1] = 0.0
        splits[i][i + 1] = -1

    def triangle(i: int, j: int, k: int) -> float:
        # a triangle whose three edges already exist would duplicate an edge
        if has_edge(i, j) and has_edge(j, k) and has_edge(k, i):
            return _INFINITE_WEIGHT
        return _triangle_weight(points[i], points[j], points[k], objective)

    for span in range(2, n):
        for i in range(n - span):
            k = i + span
            best_weight = _INFINITE_WEIGHT
            best_split = -1
            for m in range(i + 1, k):
                tri = triangle(i, m, k)
                if objective is Objective.MIN_AREA:
                    w = weight[i][m] + tri + weight[m][k]
                else:
                    w = max(weight[i][m], tri, weight[m][k])
                if w < best_weight:
                    best_weight = w
                    best_split = m
            weight[i][k] = best_weight
            splits[i][k] = best_split if best_split >= 0 else i + 1
    return splits


def _polygon_pieces(
    n: int, splits: list[list[int]], can_insert: Callable[[int, int], bool]
) -> list[list[int]]:
    """Faces (as local index lists) resulting from inserting the chosen chords.

    A chord that cannot be inserted leaves its two sides merged in one face.
    """
    pieces: list[list[int]] = []

    def node(i: int, k: int) -> list[int]:
        m = splits[i][k]
        return side(i, m)[:-1] + side(m, k)

    def side(i: int, k: int) -> list[int]:
        if k - i < 2:
            return [i, k]
        chain = node(i, k)
        if can_insert(i, k):
            pieces.append(chain)
            return [i, k]
        return chain

    pieces.append(node(0, n - 1))
    return pieces


def triangulate_polygon(
    points: Iterable, objective: Objective | str = Objective.MIN_AREA
) -> list[tuple[int, int, int]]:
    """Triangulate a simple polygon given by its corners in order.

    Returns triangles as index triples into ``points``.
    """
    objective = Objective(objective)
    pts = [_as_point(p) for p in points]
    n = len(pts)
    if n < 3:
        raise InvalidInputException("a polygon needs at least three vertices")
    if n == 3:
        return [(0, 1, 2)]

    def is_side(a: int, b: int) -> bool:
        return abs(a - b) == 1 or {a, b} == {0, n - 1}

    splits = _split_table(pts, objective, is_side)
    pieces = _polygon_pieces(n, splits, lambda i, k: True)
    return [tuple(piece) for piece in pieces]


def _non_manifold_vertices(faces: Sequence[tuple[int, ...]]) -> set[int]:
    directed = {(a, b) for face in faces for a, b in zip(face, face[1:] + face[:1])}
    gaps = Counter(a for a, b in ((b, a) for a, b in directed) if (a, b) not in directed)
    return {v for v, count in gaps.items() if count > 1}


def triangulate(mesh: IndexedMesh, objective: Objective | str = Objective.MIN_AREA) -> None:
    """Triangulate every face of ``mesh`` in place.

    Raises InvalidInputException if a face touches a non-manifold vertex.
    """
    objective = Objective(objective)
    non_manifold = _non_manifold_vertices(mesh.faces)
    if any(v in non_manifold for face in mesh.faces for v in face):
        raise InvalidInputException("[Triangulation] Non-manifold polygon")

    edges = {frozenset(e) for e in mesh.edges()}
    new_faces: list[tuple[int, ...]] = []
    new_normals: list | None = [] if mesh.face_normals is not None else None
    new_corner_tex: list | None = [] if mesh.corner_texcoords is not None else None

    for index, face in enumerate(mesh.faces):
        if len(face) <= 3:
            pieces = [list(range(len(face)))]
        else:
            pts = [mesh.points[v] for v in face]

            def has_edge(i: int, k: int, face=face) -> bool:
                return frozenset((face[i], face[k])) in edges

            def can_insert(i: int, k: int, face=face) -> bool:
                key = frozenset((face[i], face[k]))
                if key in edges:
                    return False
                edges.add(key)
                return True

            splits = _split_table(pts, objective, has_edge)
            pieces = _polygon_pieces(len(face), splits, can_insert)

        for piece in pieces:
            new_faces.append(tuple(face[local] for local in piece))
            if new_normals is not None:
                new_normals.append(mesh.face_normals[index])
            if new_corner_tex is not None:
                corners = mesh.corner_texcoords[index]
                new_corner_tex.append(tuple(corners[local] for local in piece))

    mesh.faces = []
    mesh._directed_edges = set()
    for face in new_faces:
        mesh.add_face(face)
    mesh.face_normals = new_normals
    mesh.corner_texcoords = new_corner_tex