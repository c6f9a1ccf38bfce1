"""Small dense matrices and vectors with the usual linear-algebra helpers."""

from __future__ import annotations

import math
import numbers
import operator
import sys
from itertools import chain
from typing import Iterable, Iterator, Sequence


def _format_scalar(x) -> str:
    if isinstance(x, bool):
        return "1" if x else "0"
    if isinstance(x, numbers.Integral):
        return str(int(x))
    return f"{x:g}"


class Matrix:
    """A rows x cols matrix; a column vector is a matrix with one column.

    Entries are stored column by column.  ``m[i, j]`` addresses row ``i`` and
    column ``j``; ``m[k]`` addresses the k-th entry in storage order, which for
    vectors is simply the k-th component.
    """

    __slots__ = ("_rows", "_cols", "_data")

    def __init__(self, rows: int, cols: int, values: Iterable | None = None):
        """Create a matrix from its entries given row by row (zeros if omitted)."""
        if rows < 1 or cols < 1:
            raise ValueError(f"invalid matrix shape {rows}x{cols}")
        self._rows = rows
        self._cols = cols
        if values is None:
            self._data = [0.0] * (rows * cols)
            return
        values = list(values)
        if len(values) != rows * cols:
            raise ValueError(
                f"expected {rows * cols} values for a {rows}x{cols} matrix, "
                f"got {len(values)}"
            )
        row_lists = [values[r * cols:(r + 1) * cols] for r in range(rows)]
        self._data = list(chain.from_iterable(zip(*row_lists)))

    @classmethod
    def _from_data(cls, rows: int, cols: int, data: list) -> "Matrix":
        m = cls.__new__(cls)
        m._rows = rows
        m._cols = cols
        m._data = data
        return m

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable]) -> "Matrix":
        """Build a matrix from a sequence of rows."""
        row_lists = [list(r) for r in rows]
        if not row_lists or not row_lists[0]:
            raise ValueError("a matrix needs at least one row and one column")
        width = len(row_lists[0])
        if any(len(r) != width for r in row_lists):
            raise ValueError("all rows must have the same length")
        return cls(len(row_lists), width, chain.from_iterable(row_lists))

    @classmethod
    def from_columns(cls, columns: Iterable[Iterable]) -> "Matrix":
        """Build a matrix from a sequence of column vectors."""
        col_lists = [list(c) for c in columns]
        if not col_lists or not col_lists[0]:
            raise ValueError("a matrix needs at least one row and one column")
        height = len(col_lists[0])
        if any(len(c) != height for c in col_lists):
            raise ValueError("all columns must have the same length")
        return cls._from_data(height, len(col_lists), list(chain.from_iterable(col_lists)))

    @classmethod
    def filled(cls, rows: int, cols: int, value) -> "Matrix":
        """Return a matrix with every entry set to ``value``."""
        if rows < 1 or cols < 1:
            raise ValueError(f"invalid matrix shape {rows}x{cols}")
        return cls._from_data(rows, cols, [value] * (rows * cols))

    @classmethod
    def identity(cls, n: int) -> "Matrix":
        """Return the n x n identity matrix."""
        m = cls.filled(n, n, 0.0)
        for i in range(n):
            m[i, i] = 1.0
        return m

    @property
    def shape(self) -> tuple[int, int]:
        """(rows, cols) of the matrix."""
        return (self._rows, self._cols)

    @property
    def size(self) -> int:
        """Number of entries."""
        return self._rows * self._cols

    def is_vector(self) -> bool:
        return self._cols == 1 or self._rows == 1

    def copy(self) -> "Matrix":
        return Matrix._from_data(self._rows, self._cols, list(self._data))

    def tolist(self) -> list[list]:
        """Return the entries as a list of rows."""
        return [self._data[r::self._rows] for r in range(self._rows)]

    def normalize(self) -> None:
        """Scale in place to unit Frobenius/Euclidean norm (zero if degenerate)."""
        n = norm(self)
        factor = 1.0 / n if n > sys.float_info.min else 0.0
        self._data = [x * factor for x in self._data]

    # -- element access -------------------------------------------------

    def _flat_index(self, key) -> int:
        if isinstance(key, tuple):
            if len(key) != 2:
                raise IndexError("matrix index must be (row, column)")
            i, j = (operator.index(k) for k in key)
            if not (0 <= i < self._rows and 0 <= j < self._cols):
                raise IndexError(f"index ({i}, {j}) out of range for {self._rows}x{self._cols}")
            return i + self._rows * j
        idx = operator.index(key)
        if idx < 0:
            idx += self.size
        if not 0 <= idx < self.size:
            raise IndexError(f"index {key} out of range for {self.size} entries")
        return idx

    def __getitem__(self, key):
        return self._data[self._flat_index(key)]

    def __setitem__(self, key, value) -> None:
        self._data[self._flat_index(key)] = value

    def __iter__(self) -> Iterator:
        return iter(self._data)

    def __len__(self) -> int:
        return self.size

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and self._data == other._data

    __hash__ = None

    # -- arithmetic -----------------------------------------------------

    def _check_same_shape(self, other: "Matrix") -> None:
        if self.shape != other.shape:
            raise ValueError(f"shape mismatch: {self.shape} vs {other.shape}")

    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other)
        return Matrix._from_data(
            self._rows, self._cols, [a + b for a, b in zip(self._data, other._data)]
        )

    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other)
        return Matrix._from_data(
            self._rows, self._cols, [a - b for a, b in zip(self._data, other._data)]
        )

    def __neg__(self):
        return Matrix._from_data(self._rows, self._cols, [-a for a in self._data])

    def __mul__(self, other):
        if isinstance(other, Matrix) or not isinstance(other, numbers.Number):
            return NotImplemented
        return Matrix._from_data(self._rows, self._cols, [a * other for a in self._data])

    def __rmul__(self, other):
        return self.__mul__(other)

    def __matmul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        if self._cols != other._rows:
            raise ValueError(f"cannot multiply {self.shape} by {other.shape}")
        rows = self.tolist()
        data = [
            sum(a * b for a, b in zip(row, column))
            for column in (other._data[c * other._rows:(c + 1) * other._rows]
                           for c in range(other._cols))
            for row in rows
        ]
        return Matrix._from_data(self._rows, other._cols, data)

    def __truediv__(self, other):
        if isinstance(other, Matrix) or not isinstance(other, numbers.Number):
            return NotImplemented
        return Matrix._from_data(self._rows, self._cols, [a / other for a in self._data])

    def __iadd__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other)
        self._data = [a + b for a, b in zip(self._data, other._data)]
        return self

    def __isub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other)
        self._data = [a - b for a, b in zip(self._data, other._data)]
        return self

    def __imul__(self, other):
        if isinstance(other, Matrix) or not isinstance(other, numbers.Number):
            return NotImplemented
        self._data = [a * other for a in self._data]
        return self

    def __itruediv__(self, other):
        if isinstance(other, Matrix) or not isinstance(other, numbers.Number):
            return NotImplemented
        self._data = [a / other for a in self._data]
        return self

    # -- text -----------------------------------------------------------

    def __str__(self) -> str:
        if self._cols == 1:
            return format_vector(self)
        return "".join(
            "".join(f"{_format_scalar(x)} " for x in row) + "\n" for row in self.tolist()
        )

    def __repr__(self) -> str:
        return f"Matrix({self._rows}, {self._cols}, {list(chain.from_iterable(self.tolist()))!r})"


def vector(*args) -> Matrix:
    """Build a column vector; vector arguments are spliced in, e.g. vector(xyz, w)."""
    components: list = []
    for a in args:
        if isinstance(a, Matrix) or (isinstance(a, Iterable) and not isinstance(a, str)):
            components.extend(a)
        else:
            components.append(a)
    if not components:
        raise ValueError("a vector needs at least one component")
    return Matrix._from_data(len(components), 1, components)


def _require_vector(v: Matrix, dim: int | None = None) -> None:
    if not v.is_vector():
        raise ValueError(f"expected a vector, got a {v.shape[0]}x{v.shape[1]} matrix")
    if dim is not None and v.size != dim:
        raise ValueError(f"expected a {dim}D vector, got {v.size}D")


def cmult(m1: Matrix, m2: Matrix) -> Matrix:
    """Component-wise product."""
    m1._check_same_shape(m2)
    return Matrix._from_data(*m1.shape, [a * b for a, b in zip(m1, m2)])


def transpose(m: Matrix) -> Matrix:
    rows, cols = m.shape
    return Matrix(cols, rows, m)


def sqrnorm(m: Matrix):
    """Squared Frobenius (or Euclidean) norm."""
    return sum(x * x for x in m)


def norm(m: Matrix) -> float:
    """Frobenius (or Euclidean) norm."""
    return math.sqrt(sqrnorm(m))


def normalize(m: Matrix) -> Matrix:
    """Return a copy scaled to unit norm, or a zero matrix if the norm vanishes."""
    result = m.copy()
    result.normalize()
    return result


def minimum(m1: Matrix, m2: Matrix) -> Matrix:
    """Component-wise minimum."""
    m1._check_same_shape(m2)
    return Matrix._from_data(*m1.shape, [min(a, b) for a, b in zip(m1, m2)])


def maximum(m1: Matrix, m2: Matrix) -> Matrix:
    """Component-wise maximum."""
    m1._check_same_shape(m2)
    return Matrix._from_data(*m1.shape, [max(a, b) for a, b in zip(m1, m2)])


def dot(v0: Matrix, v1: Matrix):
    _require_vector(v0)
    _require_vector(v1, v0.size)
    return sum(a * b for a, b in zip(v0, v1))


def distance(v0: Matrix, v1: Matrix) -> float:
    """Euclidean distance between two points."""
    _require_vector(v0)
    _require_vector(v1, v0.size)
    return math.sqrt(sum((a - b) ** 2 for a, b in zip(v0, v1)))


def perp(v: Matrix) -> Matrix:
    """Rotate a 2D vector counter-clockwise by 90 degrees."""
    _require_vector(v, 2)
    return vector(-v[1], v[0])


def cross(v0: Matrix, v1: Matrix) -> Matrix:
    _require_vector(v0, 3)
    _require_vector(v1, 3)
    return vector(
        v0[1] * v1[2] - v0[2] * v1[1],
        v0[2] * v1[0] - v0[0] * v1[2],
        v0[0] * v1[1] - v0[1] * v1[0],
    )


def parse_vector(text: str, n: int) -> Matrix:
    """Read the first ``n`` whitespace-separated numbers of ``text`` as a vector."""
    tokens = text.split()
    if len(tokens) < n:
        raise ValueError(f"expected {n} components, found {len(tokens)}")
    return vector(*(float(t) for t in tokens[:n]))


def format_vector(v: Sequence | Matrix) -> str:
    """Space-separated components of a vector."""
    return " ".join(_format_scalar(x) for x in v)