# meshgeom

meshgeom is a small, dependency-free toolkit for polygon mesh geometry, written in pure Python.

## Contents

- **`meshgeom.matrix`** covers small dense matrices and vectors.
  - `Matrix` supports `+`, `-`, scalar `*` and `/`, `@` for matrix products, and indexing by `m[i, j]` or `m[k]`.
  - `vector` builds column vectors.
  - Helper functions: `dot`, `cross`, `norm`, `sqrnorm`, `normalize`, `transpose`, `cmult`, `minimum`, `maximum`, `distance`, `perp`, `parse_vector` and `format_vector`.
- **`meshgeom.transforms`** builds 4×4 graphics matrices and solves small linear-algebra problems.
  - Matrix builders: `viewport_matrix`, `frustum_matrix`, `perspective_matrix`, `ortho_matrix`, `look_at_matrix`, `translation_matrix`, `scaling_matrix`, `rotation_matrix_x/y/z`, `rotation_matrix` and `quaternion_rotation_matrix`. Each projection builder also has an inverse.
  - Point and direction transforms: `projective_transform`, `affine_transform` and `linear_transform`.
  - `linear_part` extracts the 3×3 linear part of a 4×4 matrix.
  - `determinant` works on 3×3 matrices.
  - `inverse` works on 3×3 and 4×4 matrices.
  - `symmetric_eigendecomposition` works on symmetric 3×3 matrices. It uses Jacobi rotations and returns an `EigenDecomposition` with the eigenvalues in descending order.
- **`meshgeom.bounding_box.BoundingBox`** is an axis-aligned box. It grows with `+=`, and provides `center()`, `is_empty()` and `size()` (the diagonal length).
- **`meshgeom.barycentric.barycentric_coordinates`** gives the barycentric coordinates of a point with respect to a triangle.
- **`meshgeom.normal_cone.NormalCone`** is a cone of normal directions. Cones can be merged.
- **`meshgeom.quadric.Quadric`** is a symmetric 4×4 error quadric built from a plane or from a point and normal. Quadrics can be added, scaled and evaluated at a point.
- **`meshgeom.timer.Timer`** is a millisecond stopwatch that can also be used as a context manager.
- **`meshgeom.indexed_mesh.IndexedMesh`** is a polygon mesh made of a point list and faces of vertex indices.
  - It can carry optional per-vertex normals, colors and texture coordinates, per-face normals and per-corner texture coordinates.
  - The module also provides `bounds` and `flip_faces`.
- **`meshgeom.triangulation`** finds optimal polygon triangulations by dynamic programming.
  - The objective is either `Objective.MIN_AREA`, which minimises the sum of squared triangle areas, or `Objective.MAX_ANGLE`, which maximises the smallest angle.
  - `triangulate_polygon(points, objective)` returns index triples.
  - `triangulate(mesh, objective)` rewrites every face of an `IndexedMesh` in place.
- **`meshgeom.formats`** handles mesh files.
  - `obj`, `off` and `stl` provide `read_*` and `write_*` functions for each format.
  - `dispatch.read` and `dispatch.write` choose the format from the file extension (`.obj`, `.off` or `.stl`, case-insensitive).
  - `flags.IOFlags` selects which attributes are written, and whether output is binary.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Examples

Vectors and matrices:

```python
from meshgeom.matrix import Matrix, vector, cross, dot
from meshgeom.transforms import rotation_matrix, affine_transform

x = vector(1.0, 0.0, 0.0)
y = vector(0.0, 1.0, 0.0)
z = cross(x, y)                       # (0, 0, 1)
assert dot(x, z) == 0.0

m = rotation_matrix(z, 90.0)          # 4x4, angle in degrees
print(affine_transform(m, x))         # approximately 0 1 0

a = Matrix.from_rows([[1.0, 2.0], [3.0, 4.0]])
print(a @ Matrix.identity(2) == a)    # True
```

Triangulating a polygon and writing it out:

```python
from meshgeom.indexed_mesh import IndexedMesh, bounds
from meshgeom.matrix import vector
from meshgeom.triangulation import Objective, triangulate
from meshgeom.formats.dispatch import read, write
from meshgeom.formats.flags import IOFlags

mesh = IndexedMesh()
corners = [mesh.add_vertex(vector(*p)) for p in
           [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)]]
mesh.add_face(corners)

triangulate(mesh, Objective.MIN_AREA)
print(mesh.n_faces(), mesh.is_triangle_mesh())   # 2 True
print(bounds(mesh).size())                       # diagonal length

write(mesh, "square.off", IOFlags())
again = read("square.off")
```

## File formats

| Format | Read | Write |
|---|---|---|
| OBJ | Positions, plus per-vertex texture coordinates and normals. Corners that share the same index triple become one vertex. | Positions, vertex normals (`use_vertex_normals`) and per-corner texture coordinates (`use_halfedge_texcoords`). |
| OFF | ASCII, with optional normals, colors and texture coordinates. Binary, with optional normals and texture coordinates. | ASCII, with normals, colors and texture coordinates on request. Binary (`use_binary`) writes positions and faces only. |
| STL | ASCII and binary. Coincident corners are merged and degenerate triangles are skipped. | ASCII only. Requires a triangle mesh with `face_normals`. |

## Limitations

- `IndexedMesh` stores faces as vertex index lists. It has no halfedge connectivity queries.
- The package has no algorithms beyond triangulation. In particular, there is no subdivision, smoothing, decimation or remeshing.
- Nothing in the package computes face or vertex normals. Before writing STL, set `mesh.face_normals` yourself.
- The package reads and writes only OBJ, OFF and STL. It has no native binary mesh format of its own.
- There is no command-line tool.

## Errors

Failures raise exceptions from `meshgeom.exceptions`. All of them derive from `MeshGeomError`.

| Exception | Raised when |
|---|---|
| `InvalidInputException` | Input breaks a precondition. Examples: a face with fewer than three vertices, a triangulation face at a non-manifold vertex, or writing STL from a non-triangle mesh or one without face normals. |
| `TopologyException` | A face repeats a vertex, or it reuses a directed edge that another face already has. |
| `SolverException` | A singular 3×3 matrix is passed to `inverse`, or `symmetric_eigendecomposition` does not converge. |
| `IOException` | A file cannot be opened or parsed, an OFF header is unsupported, or no reader or writer exists for the extension. |

`Timer.elapsed()` logs a warning through `logging` if the timer is still running.