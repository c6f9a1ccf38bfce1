"""Reading ASCII and binary STL files and writing ASCII STL files."""

from __future__ import annotations

import os
import struct
from pathlib import Path
from typing import Iterator, Sequence

from meshgeom.exceptions import InvalidInputException, IOException
from meshgeom.formats.flags import IOFlags
from meshgeom.indexed_mesh import IndexedMesh
from meshgeom.matrix import vector


def _single(values: Sequence[float]) -> tuple[float, float, float]:
    return struct.unpack("<3f", struct.pack("<3f", *values))


class _Welder:
    """Adds triangles to a mesh, merging corners at identical positions."""

    def __init__(self, mesh: IndexedMesh):
        self._mesh = mesh
        self._index: dict[tuple[float, float, float], int] = {}

    def _vertex(self, p: tuple[float, float, float]) -> int:
        vid = self._index.get(p)
        if vid is None:
            vid = self._mesh.add_vertex(vector(*p))
            self._index[p] = vid
        return vid

    def triangle(self, corners: Sequence[tuple[float, float, float]]) -> None:
        ids = [self._vertex(p) for p in corners]
        if len(set(ids)) == 3:
            self._mesh.add_face(ids)


def _read_binary(data: bytes, welder: _Welder) -> None:
    try:
        (count,) = struct.unpack_from("<I", data, 80)
        offset = 84
        for _ in range(count):
            coords = struct.unpack_from("<9f", data, offset + 12)
            offset += 12 + 36 + 2
            welder.triangle([coords[0:3], coords[3:6], coords[6:9]])
    except struct.error as exc:
        raise IOException("Unexpected end of binary STL data") from exc


def _parse_vertex(line: str | None) -> tuple[float, float, float]:
    if line is None:
        raise IOException("Unexpected end of STL file")
    tokens = line.lstrip()[6:].split()[:3]
    try:
        values = [float(t) for t in tokens]
    except ValueError as exc:
        raise IOException("Failed to parse STL vertex") from exc
    if len(values) != 3:
        raise IOException("Failed to parse STL vertex")
    return _single(values)


def _read_ascii(text: str, welder: _Welder) -> None:
    lines: Iterator[str] = iter(text.splitlines())
    for line in lines:
        if line.lstrip()[:5] in ("outer", "OUTER"):
            welder.triangle([_parse_vertex(next(lines, None)) for _ in range(3)])


def read_stl(path: str | os.PathLike) -> IndexedMesh:
    """Read a triangle mesh from an STL file, merging coincident vertices.

    Degenerate triangles are skipped.
    """
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise IOException(f"Failed to open file: {path}") from exc

    mesh = IndexedMesh()
    welder = _Welder(mesh)
    if data[:5] in (b"SOLID", b"solid"):
        _read_ascii(data.decode("latin-1"), welder)
    else:
        _read_binary(data, welder)
    return mesh


def write_stl(mesh: IndexedMesh, path: str | os.PathLike, flags: IOFlags | None = None) -> None:
    """Write a triangle mesh with face normals as ASCII STL."""
    flags = flags or IOFlags()
    if not mesh.is_triangle_mesh():
        raise InvalidInputException("write_stl: Not a triangle mesh.")
    if flags.use_binary:
        raise IOException("Binary STL not supported.")
    if mesh.face_normals is None:
        raise InvalidInputException("write_stl: No face normals present.")

    out = ["solid stl\n"]
    for face, n in zip(mesh.faces, mesh.face_normals):
        out.append(f"  facet normal {n[0]:g} {n[1]:g} {n[2]:g}\n")
        out.append("    outer loop\n")
        for v in face:
            p = mesh.points[v]
            out.append(f"      vertex {p[0]:g} {p[1]:g} {p[2]:g}\n")
        out.append("    endloop\n")
        out.append("  endfacet\n")
    out.append("endsolid\n")

    try:
        with open(path, "w", encoding="utf-8", newline="\n") as handle:
            handle.write("".join(out))
    except OSError as exc:
        raise IOException(f"Failed to open file: {path}") from exc