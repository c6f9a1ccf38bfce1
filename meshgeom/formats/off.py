"""Reading and writing OFF (Object File Format) meshes, ASCII and binary."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from meshgeom.exceptions import IOException
from meshgeom.formats.flags import IOFlags
from meshgeom.indexed_mesh import IndexedMesh
from meshgeom.matrix import vector


@dataclass(frozen=True)
class _OffHeader:
    texcoords: bool
    colors: bool
    normals: bool
    binary: bool


def _parse_header(line: str) -> _OffHeader:
    """Parse a header of the form [ST][C][N][4][n]OFF [BINARY]."""
    rest = line
    has_texcoords = rest.startswith("ST")
    if has_texcoords:
        rest = rest[2:]
    has_colors = rest.startswith("C")
    if has_colors:
        rest = rest[1:]
    has_normals = rest.startswith("N")
    if has_normals:
        rest = rest[1:]
    has_hcoords = rest.startswith("4")
    if has_hcoords:
        rest = rest[1:]
    has_dim = rest.startswith("n")
    if has_dim:
        rest = rest[1:]
    if not rest.startswith("OFF"):
        raise IOException("Failed to parse OFF header")
    is_binary = rest[4:10] == "BINARY"
    if has_hcoords:
        raise IOException("Error: Homogeneous coordinates not supported.")
    if has_dim:
        raise IOException("Error: vertex dimension != 3 not supported")
    return _OffHeader(has_texcoords, has_colors, has_normals, is_binary)


def _next_line(lines: Iterator[str]) -> list[str]:
    line = next(lines, None)
    if line is None:
        raise IOException("Unexpected end of OFF file")
    return line.split()


def _take_floats(tokens: list[str], start: int, count: int) -> list[float] | None:
    chunk = tokens[start:start + count]
    if len(chunk) != count:
        return None
    try:
        return [float(t) for t in chunk]
    except ValueError:
        return None


def _read_ascii(mesh: IndexedMesh, text: str, header: _OffHeader) -> None:
    lines = (line for line in text.splitlines() if line.strip())

    counts = _next_line(lines)
    try:
        nv, nf = int(counts[0]), int(counts[1])
    except (IndexError, ValueError) as exc:
        raise IOException("Failed to parse OFF element counts") from exc

    normals: list | None = [] if header.normals else None
    colors: list | None = [] if header.colors else None
    texcoords: list | None = [] if header.texcoords else None

    for _ in range(nv):
        tokens = _next_line(lines)
        position = _take_floats(tokens, 0, 3)
        if position is None:
            raise IOException("Failed to parse OFF vertex position")
        mesh.add_vertex(vector(*position))
        offset = 3

        if normals is not None:
            n = _take_floats(tokens, offset, 3)
            normals.append(vector(*n) if n else vector(0.0, 0.0, 0.0))
            offset += 3

        if colors is not None:
            rgb = _take_floats(tokens, offset, 3)
            if rgb is None:
                colors.append(vector(0.0, 0.0, 0.0))
            else:
                if any(c > 1.0 for c in rgb):
                    rgb = [c / 255.0 for c in rgb]
                colors.append(vector(*rgb))
            offset += 3

        if texcoords is not None:
            t = _take_floats(tokens, offset, 2)
            if t is None:
                raise IOException("Failed to parse OFF texture coordinate")
            texcoords.append(vector(*t))
            offset += 2

    for _ in range(nf):
        tokens = _next_line(lines)
        try:
            count = int(tokens[0])
            indices = [int(t) for t in tokens[1:1 + count]]
        except (IndexError, ValueError) as exc:
            raise IOException("Failed to parse OFF face") from exc
        if len(indices) != count:
            raise IOException("Failed to parse OFF face")
        mesh.add_face(indices)

    mesh.vertex_normals = normals
    mesh.vertex_colors = colors
    mesh.vertex_texcoords = texcoords


def _read_binary(mesh: IndexedMesh, data: bytes, header: _OffHeader) -> None:
    if header.colors:
        raise IOException("Colors not supported for binary OFF file.")

    normals: list | None = [] if header.normals else None
    texcoords: list | None = [] if header.texcoords else None
    offset = 0

    def unpack(fmt: str) -> tuple:
        nonlocal offset
        try:
            values = struct.unpack_from(fmt, data, offset)
        except struct.error as exc:
            raise IOException("Unexpected end of binary OFF data") from exc
        offset += struct.calcsize(fmt)
        return values

    nv, nf, _ne = unpack("<3I")
    for _ in range(nv):
        mesh.add_vertex(vector(*unpack("<3f")))
        if normals is not None:
            normals.append(vector(*unpack("<3f")))
        if texcoords is not None:
            texcoords.append(vector(*unpack("<2f")))

    for _ in range(nf):
        (count,) = unpack("<I")
        mesh.add_face(unpack(f"<{count}I"))

    mesh.vertex_normals = normals
    mesh.vertex_texcoords = texcoords


def read_off(path: str | os.PathLike) -> IndexedMesh:
    """Read a mesh from an ASCII or binary OFF file."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise IOException(f"Failed to open file: {path}") from exc

    newline = data.find(b"\n")
    if newline < 0:
        header_bytes, body = data, b""
    else:
        header_bytes, body = data[:newline + 1], data[newline + 1:]
    header = _parse_header(header_bytes.decode("latin-1"))

    mesh = IndexedMesh()
    if header.binary:
        _read_binary(mesh, body, header)
    else:
        _read_ascii(mesh, body.decode("latin-1"), header)
    return mesh


def _write_binary(mesh: IndexedMesh, path: str | os.PathLike) -> None:
    chunks = [b"OFF BINARY\n", struct.pack("<3I", mesh.n_vertices(), mesh.n_faces(), 0)]
    chunks.extend(struct.pack("<3f", p[0], p[1], p[2]) for p in mesh.points)
    chunks.extend(struct.pack(f"<{len(f) + 1}I", len(f), *f) for f in mesh.faces)
    try:
        with open(path, "wb") as handle:
            handle.write(b"".join(chunks))
    except OSError as exc:
        raise IOException(f"Failed to open file: {path}") from exc


def write_off(mesh: IndexedMesh, path: str | os.PathLike, flags: IOFlags | None = None) -> None:
    """Write a mesh as OFF; attributes are written when present and requested."""
    flags = flags or IOFlags()
    if flags.use_binary:
        _write_binary(mesh, path)
        return

    has_normals = mesh.vertex_normals is not None and flags.use_vertex_normals
    has_texcoords = mesh.vertex_texcoords is not None and flags.use_vertex_texcoords
    has_colors = mesh.vertex_colors is not None and flags.use_vertex_colors

    prefix = ("ST" if has_texcoords else "") + ("C" if has_colors else "") + ("N" if has_normals else "")
    out = [f"{prefix}OFF\n{mesh.n_vertices()} {mesh.n_faces()} 0\n"]

    for index, p in enumerate(mesh.points):
        line = f"{p[0]:.10f} {p[1]:.10f} {p[2]:.10f}"
        if has_normals:
            n = mesh.vertex_normals[index]
            line += f" {n[0]:.10f} {n[1]:.10f} {n[2]:.10f}"
        if has_colors:
            c = mesh.vertex_colors[index]
            line += f" {c[0]:.10f} {c[1]:.10f} {c[2]:.10f}"
        if has_texcoords:
            t = mesh.vertex_texcoords[index]
            line += f" {t[0]:.10f} {t[1]:.10f}"
        out.append(line + "\n")

    for face in mesh.faces:
        out.append(f"{len(face)}" + "".join(f" {v}" for v in face) + "\n")

    try:
        with open(path, "w", encoding="utf-8", newline="\n") as handle:
            handle.write("".join(out))
    except OSError as exc:
        raise IOException(f"Failed to open file: {path}") from exc