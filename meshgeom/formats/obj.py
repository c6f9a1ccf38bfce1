"""Reading and writing Wavefront OBJ files."""

from __future__ import annotations

import itertools
import os
import re
from typing import Iterable

from meshgeom.exceptions import IOException
from meshgeom.formats.flags import IOFlags
from meshgeom.indexed_mesh import IndexedMesh
from meshgeom.matrix import Matrix, vector

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def _leading_int(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _scan_floats(text: str, count: int) -> list[float]:
    values: list[float] = []
    for token in text.split()[:count]:
        try:
            values.append(float(token))
        except ValueError:
            break
    return values


def _lookup(items: list, index: int, what: str) -> Matrix:
    if not 0 <= index < len(items):
        raise IOException(f"OBJ face references a non-existent {what} ({index + 1})")
    return items[index]


def parse_obj(lines: Iterable[str]) -> IndexedMesh:
    """Build a mesh from the lines of an OBJ document.

    Corners sharing position, texture and normal indices become one vertex;
    texture coordinates and normals are stored per vertex.
    """
    mesh = IndexedMesh()
    positions: list[Matrix] = []
    normals: list[Matrix] = []
    texcoords: list[Matrix] = []
    xyz = [0.0, 0.0, 0.0]

    with_texcoords = False
    with_normals = False
    vertex_tex: list[Matrix] = []
    vertex_normals: list[Matrix] = []
    vertex_map: dict[tuple[int, int, int], int] = {}

    for raw in lines:
        line = raw.rstrip("\n")
        if not line or line[0] == "#" or line[0].isspace():
            continue

        if line.startswith("v "):
            values = _scan_floats(line[2:], 3)
            if values:
                xyz[:len(values)] = values
                positions.append(vector(*xyz))

        elif line.startswith("vn "):
            values = _scan_floats(line[3:], 3)
            if values:
                xyz[:len(values)] = values
                normals.append(vector(*xyz))

        elif line.startswith("vt "):
            values = _scan_floats(line[3:], 2)
            if values:
                xyz[:len(values)] = values
                texcoords.append(vector(xyz[0], xyz[1]))

        elif line.startswith("f "):
            corners: list[tuple[int, int, int]] = []
            for token in line[2:].split():
                attributes = [0, 0, 0]
                for component, part in enumerate(token.split("/")[:3]):
                    if not part:
                        continue
                    idx = _leading_int(part)
                    if component == 0:
                        if idx < 0:
                            idx += len(positions) + 1
                    elif component == 1:
                        if idx < 0:
                            idx += len(texcoords) + 1
                        with_texcoords = True
                    else:
                        if idx < 0:
                            idx += len(normals) + 1
                        with_normals = True
                    attributes[component] = idx - 1
                corners.append(tuple(attributes))

            face_vertices = []
            for key in corners:
                vid = vertex_map.get(key)
                if vid is None:
                    pos, tex, nrm = key
                    vid = mesh.add_vertex(_lookup(positions, pos, "vertex"))
                    vertex_tex.append(
                        _lookup(texcoords, tex, "texture coordinate").copy()
                        if with_texcoords else vector(0.0, 0.0)
                    )
                    vertex_normals.append(
                        _lookup(normals, nrm, "normal").copy()
                        if with_normals else vector(0.0, 0.0, 0.0)
                    )
                    vertex_map[key] = vid
                face_vertices.append(vid)
            mesh.add_face(face_vertices)

    mesh.vertex_texcoords = vertex_tex if with_texcoords else None
    mesh.vertex_normals = vertex_normals if with_normals else None
    return mesh


def read_obj(path: str | os.PathLike) -> IndexedMesh:
    """Read a mesh from an OBJ file."""
    try:
        handle = open(path, encoding="utf-8", errors="replace")
    except OSError as exc:
        raise IOException(f"Failed to open file: {path}") from exc
    with handle:
        return parse_obj(handle)


def write_obj(mesh: IndexedMesh, path: str | os.PathLike, flags: IOFlags | None = None) -> None:
    """Write a mesh as OBJ, with normals and corner texture coordinates on request."""
    flags = flags or IOFlags()
    write_normals = mesh.vertex_normals is not None and flags.use_vertex_normals
    write_tex = mesh.corner_texcoords is not None and flags.use_halfedge_texcoords

    try:
        handle = open(path, "w", encoding="utf-8")
    except OSError as exc:
        raise IOException(f"Failed to open file: {path}") from exc

    with handle:
        handle.write("# OBJ export\n")
        for p in mesh.points:
            handle.write(f"v {p[0]:.10f} {p[1]:.10f} {p[2]:.10f}\n")

        if write_normals:
            for n in mesh.vertex_normals:
                handle.write(f"vn {n[0]:.10f} {n[1]:.10f} {n[2]:.10f}\n")

        if write_tex:
            for corners in mesh.corner_texcoords:
                for t in corners:
                    handle.write(f"vt {t[0]:.10f} {t[1]:.10f}\n")

        tex_index = itertools.count(1)
        for face in mesh.faces:
            parts = []
            for v in face:
                idx = v + 1
                if write_tex:
                    t = next(tex_index)
                    parts.append(f"{idx}/{t}/{idx}" if write_normals else f"{idx}/{t}")
                else:
                    parts.append(f"{idx}//{idx}" if write_normals else f"{idx}")
            handle.write("f " + " ".join(parts) + "\n")