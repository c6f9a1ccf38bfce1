import struct

import pytest

from meshgeom.exceptions import InvalidInputException, IOException
from meshgeom.formats.flags import IOFlags
from meshgeom.formats.off import read_off, write_off
from meshgeom.indexed_mesh import IndexedMesh
from meshgeom.matrix import vector


def _mesh():
    return IndexedMesh(
        points=[(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0), (2, 0, 0)],
        faces=[(0, 1, 2, 3), (1, 4, 2)],
    )


def _coords(items):
    return [list(p) for p in items]


def test_ascii_round_trip(tmp_path):
    mesh = _mesh()
    path = tmp_path / "m.off"
    write_off(mesh, path)
    back = read_off(path)
    assert _coords(back.points) == _coords(mesh.points)
    assert back.faces == mesh.faces
    assert back.vertex_normals is None


def test_ascii_layout(tmp_path):
    path = tmp_path / "m.off"
    write_off(_mesh(), path, IOFlags())
    text = path.read_text()
    assert text.startswith("OFF\n5 2 0\n")
    lines = text.splitlines()
    assert lines[3] == "1.0000000000 0.0000000000 0.0000000000"
    assert lines[-1] == "3 1 4 2"


def test_attributes_round_trip(tmp_path):
    mesh = _mesh()
    mesh.vertex_normals = [vector(0.0, 0.0, 1.0) for _ in range(5)]
    mesh.vertex_colors = [vector(0.5, 0.25, 0.0) for _ in range(5)]
    mesh.vertex_texcoords = [vector(float(i), 0.5) for i in range(5)]
    flags = IOFlags(use_vertex_normals=True, use_vertex_colors=True, use_vertex_texcoords=True)
    path = tmp_path / "m.off"
    write_off(mesh, path, flags)
    assert path.read_text().startswith("STCNOFF\n")
    back = read_off(path)
    assert _coords(back.vertex_normals) == _coords(mesh.vertex_normals)
    assert _coords(back.vertex_colors) == _coords(mesh.vertex_colors)
    assert _coords(back.vertex_texcoords) == _coords(mesh.vertex_texcoords)


def test_attributes_not_requested_are_skipped(tmp_path):
    mesh = _mesh()
    mesh.vertex_normals = [vector(0.0, 0.0, 1.0) for _ in range(5)]
    path = tmp_path / "m.off"
    write_off(mesh, path)
    assert path.read_text().startswith("OFF\n")
    assert read_off(path).vertex_normals is None


def test_colors_above_one_are_scaled(tmp_path):
    path = tmp_path / "c.off"
    path.write_text("COFF\n3 1 0\n0 0 0 255 0 0\n1 0 0 0 255 0\n0 1 0 0 0 255\n3 0 1 2\n")
    mesh = read_off(path)
    assert list(mesh.vertex_colors[0]) == [1.0, 0.0, 0.0]
    assert list(mesh.vertex_colors[2]) == [0.0, 0.0, 1.0]


def test_normals_are_read(tmp_path):
    path = tmp_path / "n.off"
    path.write_text("NOFF\n3 1 0\n0 0 0 0 0 1\n1 0 0 0 0 1\n0 1 0 0 0 1\n3 0 1 2\n")
    mesh = read_off(path)
    assert _coords(mesh.vertex_normals) == [[0.0, 0.0, 1.0]] * 3
    assert mesh.faces == [(0, 1, 2)]


def test_binary_round_trip(tmp_path):
    mesh = _mesh()
    path = tmp_path / "b.off"
    write_off(mesh, path, IOFlags(use_binary=True))
    data = path.read_bytes()
    assert data.startswith(b"OFF BINARY\n")
    assert struct.unpack_from("<3I", data, 11) == (5, 2, 0)
    back = read_off(path)
    assert _coords(back.points) == _coords(mesh.points)
    assert back.faces == mesh.faces


def test_binary_stores_single_precision(tmp_path):
    mesh = IndexedMesh(points=[(0.1, 0, 0), (1, 0, 0), (0, 1, 0)], faces=[(0, 1, 2)])
    path = tmp_path / "b.off"
    write_off(mesh, path, IOFlags(use_binary=True))
    back = read_off(path)
    assert back.points[0][0] == pytest.approx(0.1, abs=1e-7)


@pytest.mark.parametrize(
    "header, message",
    [("4OFF\n", "Homogeneous"), ("nOFF\n", "dimension"), ("XOFF\n", "header"), ("", "header")],
)
def test_bad_headers(tmp_path, header, message):
    path = tmp_path / "bad.off"
    path.write_text(header + "3 1 0\n")
    with pytest.raises(IOException, match=message):
        read_off(path)


def test_binary_colors_rejected(tmp_path):
    path = tmp_path / "c.off"
    path.write_bytes(b"COFF BINARY\n" + struct.pack("<3I", 0, 0, 0))
    with pytest.raises(IOException, match="Colors"):
        read_off(path)


def test_truncated_binary(tmp_path):
    path = tmp_path / "t.off"
    path.write_bytes(b"OFF BINARY\n" + struct.pack("<3I", 3, 1, 0) + struct.pack("<3f", 0, 0, 0))
    with pytest.raises(IOException):
        read_off(path)


def test_missing_file(tmp_path):
    with pytest.raises(IOException, match="Failed to open"):
        read_off(tmp_path / "none.off")


def test_face_with_unknown_vertex(tmp_path):
    path = tmp_path / "f.off"
    path.write_text("OFF\n3 1 0\n0 0 0\n1 0 0\n0 1 0\n3 0 1 7\n")
    with pytest.raises(InvalidInputException):
        read_off(path)