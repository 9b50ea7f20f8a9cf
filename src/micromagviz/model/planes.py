"""
Infinite planes, spheres and their intersection.
"""
from __future__ import annotations

from dataclasses import dataclass
from math import hypot, sqrt
from typing import Optional

from micromagviz.config import AXIS_TOLERANCE
from micromagviz.model.errors import DegenerateAxisError
from micromagviz.model.vectors import Vector3


class InfinitePlane:
    """
    An infinite plane in point-normal form, n . (x - r0) = 0.
    The normal is stored as a unit vector.
    """
    def __init__(self, r0: Vector3, n: Vector3) -> None:
        length = hypot(n.x, n.y, n.z)
        if not length >= AXIS_TOLERANCE:
            raise DegenerateAxisError(f"Plane normal {tuple(n)} is too short to normalise.")
        self._r0 = r0
        self._n = n / length

    @classmethod
    def from_coefficients(cls, A: float, B: float, C: float, x0: float, y0: float, z0: float) -> InfinitePlane:
        """
        Plane from the canonical form A (x - x0) + B (y - y0) + C (z - z0) = 0.
        A, B and C are normalised to a unit normal.
        """
        return cls(Vector3(x0, y0, z0), Vector3(A, B, C))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(r0={tuple(self._r0)}, n={tuple(self._n)})"

    @property
    def r0(self) -> Vector3:
        return self._r0

    @property
    def n(self) -> Vector3:
        return self._n

    @property
    def A(self) -> float:
        return self._n.x

    @property
    def B(self) -> float:
        return self._n.y

    @property
    def C(self) -> float:
        return self._n.z

    @property
    def x0(self) -> float:
        return self._r0.x

    @property
    def y0(self) -> float:
        return self._r0.y

    @property
    def z0(self) -> float:
        return self._r0.z

    def signed_distance(self, point: Vector3) -> float:
        """Positive on the side the normal points to."""
        return self._n.dot(point - self._r0)

    def project(self, point: Vector3) -> Vector3:
        """Orthogonal projection of `point` onto the plane."""
        return point - self.signed_distance(point) * self._n


@dataclass(frozen=True)
class Sphere:
    center: Vector3
    radius: float


@dataclass(frozen=True)
class Circle3D:
    """A circle in space: center, unit normal of its plane, radius."""
    center: Vector3
    normal: Vector3
    radius: float


def sphere_plane_intersection(sphere: Sphere, plane: InfinitePlane) -> Optional[Circle3D]:
    """
    Intersect a sphere with a plane.

    Returns:
        The intersection circle, a zero-radius circle when the plane is
        tangent, or None when they do not meet.
    """
    d = plane.signed_distance(sphere.center)
    if abs(d) > sphere.radius:
        return None
    return Circle3D(
        center=sphere.center - d * plane.n,
        normal=plane.n,
        radius=sqrt(max(0.0, sphere.radius * sphere.radius - d * d)),
    )
