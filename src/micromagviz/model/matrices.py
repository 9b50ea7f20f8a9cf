"""
Fixed-size square matrices (3x3 and 4x4).

Entries are held in a read-only NumPy array and every operation returns a new
matrix. Products use the `@` operator:

    m @ n      matrix-matrix product
    m @ v      matrix-vector product (row times column)
    v @ m      row-vector product, i.e. transpose(m) @ v

`*` and `/` are reserved for scalars.
"""
from __future__ import annotations

import math
import numbers
from typing import ClassVar, Optional, Sequence, Type, TypeVar, Union, TYPE_CHECKING

import numpy as np

from micromagviz.config import AXIS_TOLERANCE
from micromagviz.model.errors import DegenerateAxisError, ShapeError
from micromagviz.model.vectors import Vector3, Vector4

if TYPE_CHECKING:
    import numpy.typing as npt

M = TypeVar("M", bound="SquareMatrix")


class SquareMatrix:
    """
    Base class for the N x N matrix types. Subclasses fix `SIZE` and the
    vector type they multiply with.
    """
    SIZE: ClassVar[int]
    VECTOR: ClassVar[Type[Union[Vector3, Vector4]]]

    __array_ufunc__ = None

    def __init__(self, rows: Optional[Union[Sequence[Sequence[float]], npt.NDArray[np.float64]]] = None) -> None:
        """
        Create a matrix from nested rows; without rows the zero matrix.

        Raises:
            ShapeError: If `rows` is not exactly SIZE rows of SIZE entries.
        """
        n = self.SIZE
        if rows is None:
            data = np.zeros((n, n), dtype=np.float64)
        else:
            try:
                nested = [list(row) for row in rows]
            except TypeError as e:
                raise ShapeError(f"{type(self).__name__} rows must be sequences of numbers.") from e

            if len(nested) != n:
                raise ShapeError(f"{type(self).__name__} needs {n} rows, got {len(nested)}.")
            for i, row in enumerate(nested):
                if len(row) != n:
                    raise ShapeError(f"Row {i} of {type(self).__name__} needs {n} entries, got {len(row)}.")
            data = np.array(nested, dtype=np.float64)

        data.flags.writeable = False
        self._m = data

    @classmethod
    def _wrap(cls: Type[M], data: npt.NDArray[np.float64]) -> M:
        return cls(data)

    @classmethod
    def identity(cls: Type[M]) -> M:
        return cls(np.eye(cls.SIZE))

    def __repr__(self) -> str:
        rows = ", ".join(str([float(e) for e in row]) for row in self._m)
        return f"{self.__class__.__name__}([{rows}])"

    def __getitem__(self, index: tuple[int, int]) -> float:
        i, j = index
        return float(self._m[i, j])

    def rows(self) -> list[list[float]]:
        return self._m.tolist()

    def to_array(self) -> npt.NDArray[np.float64]:
        return self._m.copy()

    def _same_type(self, other: object) -> bool:
        return type(other) is type(self)

    def __add__(self: M, other: M) -> M:
        if not self._same_type(other):
            return NotImplemented
        return self._wrap(self._m + other._m)

    def __sub__(self: M, other: M) -> M:
        if not self._same_type(other):
            return NotImplemented
        return self._wrap(self._m - other._m)

    def __neg__(self: M) -> M:
        return self._wrap(-self._m)

    def __mul__(self: M, scalar: float) -> M:
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return self._wrap(self._m * scalar)

    __rmul__ = __mul__

    def __truediv__(self: M, scalar: float) -> M:
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._wrap(self._m / np.float64(scalar))

    def __matmul__(self, other):
        if self._same_type(other):
            return self._wrap(self._m @ other._m)
        if isinstance(other, self.VECTOR):
            return self.VECTOR(*(self._m @ other.to_array()))
        return NotImplemented

    def __rmatmul__(self, other):
        # Row vector times matrix
        if isinstance(other, self.VECTOR):
            return self.VECTOR(*(other.to_array() @ self._m))
        return NotImplemented

    def det(self) -> float:
        return float(np.linalg.det(self._m))

    def adj(self: M) -> M:
        """Adjugate: the transpose of the cofactor matrix, so that m @ adj(m) = det(m) I."""
        idx = np.arange(self.SIZE)
        # Stack of (n-1) x (n-1) minors, minors[i, j] drops row i and column j
        minors = np.array([
            [self._m[np.ix_(idx != i, idx != j)] for j in idx]
            for i in idx
        ])
        signs = (-1.0) ** np.add.outer(idx, idx)
        cofactors = signs * np.linalg.det(minors)
        return self._wrap(cofactors.T)

    def transpose(self: M) -> M:
        return self._wrap(self._m.T)

    def trace(self) -> float:
        return float(np.trace(self._m))

    def diag(self) -> Union[Vector3, Vector4]:
        return self.VECTOR(*np.diag(self._m))

    def dot(self: M, other: M) -> float:
        """Frobenius inner product."""
        if not self._same_type(other):
            raise TypeError(f"Cannot dot {type(self).__name__} with {type(other).__name__}.")
        return float(np.sum(self._m * other._m))

    def norm(self) -> float:
        """Frobenius norm (not regularised)."""
        return math.sqrt(self.dot(self))


def _rodrigues(angle: float, axis: Vector3) -> npt.NDArray[np.float64]:
    """3x3 rotation by `angle` radians about `axis` (right-hand rule)."""
    length = math.hypot(axis.x, axis.y, axis.z)
    if not length >= AXIS_TOLERANCE:
        raise DegenerateAxisError(
            f"Rotation axis {tuple(axis)} has length {length:.3g}, below tolerance {AXIS_TOLERANCE:.1g}."
        )
    x, y, z = (c / length for c in axis)
    c = math.cos(angle)
    s = math.sin(angle)
    t = 1.0 - c

    return np.array([
        [x * x * t + c,     x * y * t - z * s, x * z * t + y * s],
        [x * y * t + z * s, y * y * t + c,     y * z * t - x * s],
        [x * z * t - y * s, y * z * t + x * s, z * z * t + c],
    ], dtype=np.float64)


class Matrix3x3(SquareMatrix):
    SIZE = 3
    VECTOR = Vector3

    @classmethod
    def rotation(cls, angle: float, axis: Union[Vector3, Sequence[float]]) -> Matrix3x3:
        """
        Rotation matrix about an arbitrary (not necessarily unit) axis.

        Args:
            angle: Rotation angle in radians.
            axis: Rotation axis; normalised internally.

        Raises:
            DegenerateAxisError: If the axis length is below `AXIS_TOLERANCE`.
        """
        if not isinstance(axis, Vector3):
            axis = Vector3.from_sequence(axis)
        return cls(_rodrigues(angle, axis))


class Matrix4x4(SquareMatrix):
    SIZE = 4
    VECTOR = Vector4

    @classmethod
    def rotation(cls, angle: float, axis: Union[Vector4, Vector3, Sequence[float]]) -> Matrix4x4:
        """
        Homogeneous rotation matrix: the 3x3 rotation about the spatial part of
        `axis` in the upper-left block, identity in the last row and column.
        The `w` component of a Vector4 axis is ignored.
        """
        if isinstance(axis, Vector4):
            axis = axis.xyz
        elif not isinstance(axis, Vector3):
            values = list(axis)
            axis = Vector3.from_sequence(values[:3] if len(values) == 4 else values)

        data = np.eye(4, dtype=np.float64)
        data[:3, :3] = _rodrigues(angle, axis)
        return cls(data)


AnyMatrix = Union[Matrix3x3, Matrix4x4]


def det(m: AnyMatrix) -> float:
    return m.det()


def adj(m: AnyMatrix) -> AnyMatrix:
    return m.adj()


def transpose(m: AnyMatrix) -> AnyMatrix:
    return m.transpose()


def trace(m: AnyMatrix) -> float:
    return m.trace()


def diag(m: AnyMatrix) -> Union[Vector3, Vector4]:
    return m.diag()


def dot(a: AnyMatrix, b: AnyMatrix) -> float:
    """Frobenius inner product of two matrices of the same size."""
    return a.dot(b)


def norm(m: AnyMatrix) -> float:
    return m.norm()


def rotation(angle: float, axis: Union[Vector3, Vector4]) -> AnyMatrix:
    """
    Rotation by `angle` radians about `axis`: a Matrix3x3 for a Vector3 axis,
    a homogeneous Matrix4x4 for a Vector4 axis.
    """
    if isinstance(axis, Vector4):
        return Matrix4x4.rotation(angle, axis)
    return Matrix3x3.rotation(angle, axis)
