"""Small dense matrices with determinant and inverse."""

from __future__ import annotations

from numbers import Number
from typing import Iterable, List, Sequence


class MatrixError(Exception):
    """Base class for matrix errors."""


class NotInvertibleMatrixError(MatrixError):
    """The matrix is singular or not square."""


class IncompatibleMatrixError(MatrixError):
    """The operand shapes do not fit the operation."""


class NotSquareMatrixError(MatrixError):
    """The operation needs a square matrix."""


def _fmt(v) -> str:
    if isinstance(v, float):
        return format(v, "g")
    return str(v)


class DMatrix:
    """A rows x columns matrix, zero-filled; sizes below one become one."""

    def __init__(self, rows: int = 0, columns: int = 0):
        rows = max(rows, 1)
        columns = max(columns, 1)
        self._data: List[list] = [[0.0] * columns for _ in range(rows)]

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence]) -> DMatrix:
        data = [list(r) for r in rows]
        if not data or not data[0] or any(len(r) != len(data[0]) for r in data):
            raise ValueError("rows must be non-empty and of equal length")
        m = cls(len(data), len(data[0]))
        m._data = data
        return m

    @classmethod
    def identity(cls, n: int) -> DMatrix:
        m = cls(n, n)
        for i in range(m.rows):
            m._data[i][i] = 1.0
        return m

    @property
    def rows(self) -> int:
        return len(self._data)

    @property
    def columns(self) -> int:
        return len(self._data[0])

    def __getitem__(self, key):
        """m[i, j] gives an element; m[i] gives row i as a live list."""
        if isinstance(key, tuple):
            i, j = key
            return self._data[i][j]
        return self._data[key]

    def __setitem__(self, key, value) -> None:
        if isinstance(key, tuple):
            i, j = key
            self._data[i][j] = value
            return
        row = list(value)
        if len(row) != self.columns:
            raise IncompatibleMatrixError()
        self._data[key] = row

    def __eq__(self, other) -> bool:
        if not isinstance(other, DMatrix):
            return NotImplemented
        return self._data == other._data

    def tolist(self) -> List[list]:
        return [list(r) for r in self._data]

    def det(self):
        if self.rows != self.columns:
            raise NotSquareMatrixError()
        n = self.rows
        a = self.tolist()
        d = 1.0
        for i in range(n):
            k = next((k for k in range(i, n) if a[k][i] != 0), None)
            if k is None:
                return 0.0
            val = a[k][i]
            a[k] = [v / val for v in a[k]]
            d = d * val
            if k != i:
                a[k], a[i] = a[i], a[k]
                d = -d
            for j in range(i + 1, n):
                tmp = a[j][i]
                if tmp != 0:
                    a[j] = [x - tmp * y for x, y in zip(a[j], a[i])]
        return d

    def inv(self) -> DMatrix:
        if self.rows != self.columns:
            raise NotInvertibleMatrixError()
        n = self.rows
        a = self.tolist()
        b = DMatrix.identity(n).tolist()
        for i in range(n):
            k = next((k for k in range(i, n) if a[k][i] != 0), None)
            if k is None:
                raise NotInvertibleMatrixError()
            val = a[k][i]
            a[k] = [v / val for v in a[k]]
            b[k] = [v / val for v in b[k]]
            if k != i:
                a[k], a[i] = a[i], a[k]
                b[k], b[i] = b[i], b[k]
            for j in range(n):
                if j != i:
                    tmp = a[j][i]
                    a[j] = [x - tmp * y for x, y in zip(a[j], a[i])]
                    b[j] = [x - tmp * y for x, y in zip(b[j], b[i])]
        return DMatrix.from_rows(b)

    def transpose(self) -> DMatrix:
        return DMatrix.from_rows(zip(*self._data))

    def __mul__(self, other):
        if isinstance(other, DMatrix):
            if self.columns != other.rows:
                raise IncompatibleMatrixError()
            cols = list(zip(*other._data))
            return DMatrix.from_rows(
                [sum(x * y for x, y in zip(row, col)) for col in cols] for row in self._data
            )
        if isinstance(other, Number):
            return DMatrix.from_rows([v * other for v in row] for row in self._data)
        return NotImplemented

    def _elementwise(self, other: DMatrix, op) -> DMatrix:
        if self.rows != other.rows or self.columns != other.columns:
            raise IncompatibleMatrixError()
        return DMatrix.from_rows(
            [op(x, y) for x, y in zip(r1, r2)] for r1, r2 in zip(self._data, other._data)
        )

    def __add__(self, other):
        if not isinstance(other, DMatrix):
            return NotImplemented
        return self._elementwise(other, lambda x, y: x + y)

    def __sub__(self, other):
        if not isinstance(other, DMatrix):
            return NotImplemented
        return self._elementwise(other, lambda x, y: x - y)

    def __str__(self) -> str:
        inner = ",".join("{" + ",".join(_fmt(v) for v in row) + "}" for row in self._data)
        return "{" + inner + "}"

    def __repr__(self) -> str:
        return f"DMatrix.from_rows({self._data!r})"