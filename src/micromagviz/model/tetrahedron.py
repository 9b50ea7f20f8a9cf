"""
Per-cell quantities of linear tetrahedra.

The batch functions take corner coordinates of shape (M, 4, 3) and are what
`Mesh` uses; the single-cell helpers wrap them for four loose points.
"""
from __future__ import annotations

from typing import Sequence, Union, TYPE_CHECKING

import numpy as np

from micromagviz.model.errors import ShapeError
from micromagviz.model.vectors import Vector3

if TYPE_CHECKING:
    import numpy.typing as npt

PointLike = Union[Vector3, Sequence[float]]


def _as_corners(corners: npt.ArrayLike) -> npt.NDArray[np.float64]:
    arr = np.asarray(corners, dtype=np.float64)
    if arr.ndim != 3 or arr.shape[1:] != (4, 3):
        raise ShapeError(f"Expected tetrahedron corners of shape (M, 4, 3), got {arr.shape}.")
    return arr


def volumes(corners: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """
    Signed volumes of M tetrahedra.

    Uses the scalar triple product V = (x1 - x0) . ((x2 - x0) x (x3 - x0)) / 6,
    which is positive for right-handed corner ordering.

    Args:
        corners: Array of shape (M, 4, 3) with the corner coordinates.

    Returns:
        Array of shape (M,).
    """
    x = _as_corners(corners)
    a = x[:, 1] - x[:, 0]
    b = x[:, 2] - x[:, 0]
    c = x[:, 3] - x[:, 0]
    return np.einsum("ij,ij->i", a, np.cross(b, c)) / 6.0


def centroids(corners: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """Arithmetic mean of the four corners of each tetrahedron, shape (M, 3)."""
    x = _as_corners(corners)
    return x.mean(axis=1)


def volume(x0: PointLike, x1: PointLike, x2: PointLike, x3: PointLike) -> float:
    """Signed volume of a single tetrahedron."""
    return float(volumes([[list(x0), list(x1), list(x2), list(x3)]])[0])


def centroid(x0: PointLike, x1: PointLike, x2: PointLike, x3: PointLike) -> Vector3:
    """Centroid of a single tetrahedron."""
    return Vector3.from_sequence(centroids([[list(x0), list(x1), list(x2), list(x3)]])[0])
