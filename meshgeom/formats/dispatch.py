"""Reading and writing meshes in the format named by the file extension."""

from __future__ import annotations

import os
from pathlib import Path

from meshgeom.exceptions import IOException
from meshgeom.formats.flags import IOFlags
from meshgeom.formats.obj import read_obj, write_obj
from meshgeom.formats.off import read_off, write_off
from meshgeom.formats.stl import read_stl, write_stl
from meshgeom.indexed_mesh import IndexedMesh

_READERS = {".obj": read_obj, ".off": read_off, ".stl": read_stl}
_WRITERS = {".obj": write_obj, ".off": write_off, ".stl": write_stl}


def _extension(path: str | os.PathLike) -> str:
    return Path(path).suffix.lower()


def read(path: str | os.PathLike) -> IndexedMesh:
    """Read a mesh; the (case-insensitive) extension selects OBJ, OFF or STL."""
    reader = _READERS.get(_extension(path))
    if reader is None:
        raise IOException(f"Could not find reader for {path}")
    return reader(path)


def write(mesh: IndexedMesh, path: str | os.PathLike, flags: IOFlags | None = None) -> None:
    """Write a mesh; the (case-insensitive) extension selects OBJ, OFF or STL."""
    writer = _WRITERS.get(_extension(path))
    if writer is None:
        raise IOException(f"Could not find writer for {path}")
    writer(mesh, path, flags or IOFlags())