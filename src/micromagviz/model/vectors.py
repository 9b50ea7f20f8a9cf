"""
Fixed-size vectors in 3D and 4D space.

Both types are frozen dataclasses: every operation returns a new vector. The
norm is regularised, `norm(v) = sqrt(v.v + eps**2)`, so normalising a
(near-)zero vector never divides by zero. The epsilon defaults to
`config.DEFAULT_EPS` and can be overridden per call.
"""
from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Iterator, Sequence, Union, TYPE_CHECKING

import numpy as np

from micromagviz.config import DEFAULT_EPS
from micromagviz.model.errors import ShapeError

if TYPE_CHECKING:
    import numpy.typing as npt


def _divide(components: tuple[float, ...], scalar: float) -> tuple[float, ...]:
    """Component-wise division with IEEE semantics (no ZeroDivisionError)."""
    with np.errstate(divide="ignore", invalid="ignore"):
        quotient = np.asarray(components, dtype=np.float64) / np.float64(scalar)
    return tuple(float(c) for c in quotient)


@dataclass(frozen=True)
class Vector3:
    """
    A vector in 3D space representing direction and magnitude.
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    # Make NumPy scalars defer to the reflected operators below
    __array_ufunc__ = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))

    @classmethod
    def from_sequence(cls, values: Union[Sequence[float], npt.NDArray[np.float64]]) -> Vector3:
        """Build a vector from any sequence of exactly three numbers."""
        values = list(values)
        if len(values) != 3:
            raise ShapeError(f"Vector3 needs 3 components, got {len(values)}.")
        return cls(*values)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __len__(self) -> int:
        return 3

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    def __add__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> Vector3:
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector3:
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return Vector3(*_divide((self.x, self.y, self.z), scalar))

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def norm_squared(self) -> float:
        return self.dot(self)

    def norm(self, eps: float = DEFAULT_EPS) -> float:
        """Regularised length; returns `eps` for the zero vector."""
        return math.sqrt(self.dot(self) + eps * eps)

    def normalised(self, eps: float = DEFAULT_EPS) -> Vector3:
        return self / self.norm(eps)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z], dtype=np.float64)


@dataclass(frozen=True)
class Vector4:
    """
    A vector with four components, e.g. homogeneous coordinates.
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    __array_ufunc__ = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))
        object.__setattr__(self, "w", float(self.w))

    @classmethod
    def from_sequence(cls, values: Union[Sequence[float], npt.NDArray[np.float64]]) -> Vector4:
        """Build a vector from any sequence of exactly four numbers."""
        values = list(values)
        if len(values) != 4:
            raise ShapeError(f"Vector4 needs 4 components, got {len(values)}.")
        return cls(*values)

    @classmethod
    def from_vector3(cls, v: Vector3, w: float = 0.0) -> Vector4:
        return cls(v.x, v.y, v.z, w)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    def __len__(self) -> int:
        return 4

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z, self.w)[index]

    def __add__(self, other: Vector4) -> Vector4:
        if not isinstance(other, Vector4):
            return NotImplemented
        return Vector4(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def __sub__(self, other: Vector4) -> Vector4:
        if not isinstance(other, Vector4):
            return NotImplemented
        return Vector4(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)

    def __neg__(self) -> Vector4:
        return Vector4(-self.x, -self.y, -self.z, -self.w)

    def __mul__(self, scalar: float) -> Vector4:
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return Vector4(self.x * scalar, self.y * scalar, self.z * scalar, self.w * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector4:
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return Vector4(*_divide((self.x, self.y, self.z, self.w), scalar))

    def dot(self, other: Vector4) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def norm_squared(self) -> float:
        return self.dot(self)

    def norm(self, eps: float = DEFAULT_EPS) -> float:
        """Regularised length; returns `eps` for the zero vector."""
        return math.sqrt(self.dot(self) + eps * eps)

    def normalised(self, eps: float = DEFAULT_EPS) -> Vector4:
        return self / self.norm(eps)

    @property
    def xyz(self) -> Vector3:
        """The spatial part, dropping `w`."""
        return Vector3(self.x, self.y, self.z)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z, self.w], dtype=np.float64)


AnyVector = Union[Vector3, Vector4]


def dot(u: AnyVector, v: AnyVector) -> float:
    """Euclidean inner product of two vectors of the same type."""
    if type(u) is not type(v):
        raise TypeError(f"Cannot dot {type(u).__name__} with {type(v).__name__}.")
    return u.dot(v)


def cross(u: Vector3, v: Vector3) -> Vector3:
    return u.cross(v)


def norm(v: AnyVector, eps: float = DEFAULT_EPS) -> float:
    return v.norm(eps)


def norm_squared(v: AnyVector) -> float:
    return v.norm_squared()


def normalised(v: AnyVector, eps: float = DEFAULT_EPS) -> AnyVector:
    return v.normalised(eps)
