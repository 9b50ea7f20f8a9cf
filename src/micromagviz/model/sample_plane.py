"""
Sample Plane (Geometry Model)
=============================
Positions an oriented rectangular sampling patch around a target point.

Why is this file needed?
------------------------
1. Geometry: It turns the user-facing spherical parameters (theta, phi, gamma,
   r) and the plane size into a unit normal, two in-plane tangents and the
   four corner points.
2. Decoupling: The GUI shell only sets parameters and reads vectors back; it
   builds its own markers/actors from them (see `view.vtk_utils`).

Conventions
-----------
Angles are in degrees. The normal points from the target outwards:

    n     = (sin t cos p, sin t sin p, cos t)
    pc    = r n                                (relative to the target)
    t_th  = R(gamma, n) (cos t cos p, cos t sin p, -sin t)
    t_ph  = R(gamma, n) (-sin p, cos p, 0)

Corners in (t_theta, t_phi) coordinates, offsets of height/2 and width/2:
p1 = (-, -), p2 = (-, +), p3 = (+, -), p4 = (+, +).

At theta = 0 or 180 the azimuth is degenerate (the frame still exists, it just
spins with phi).
"""
from __future__ import annotations

import logging
from math import cos, sin
from typing import Optional

from micromagviz.config import (
    DEFAULT_DISTANCE_FACTOR,
    DEFAULT_POINT_RESOLUTION,
    DEFAULT_SCALE_MULTIPLIER,
)
from micromagviz.model.geometry_utils import deg2rad
from micromagviz.model.matrices import Matrix3x3
from micromagviz.model.vectors import Vector3

logger = logging.getLogger(__name__)

_PARAMETERS = (
    "theta",
    "phi",
    "gamma",
    "r",
    "width",
    "height",
    "scale_multiplier",
    "point_resolution_theta",
    "point_resolution_phi",
    "target",
)


def _as_target(value: object) -> Vector3:
    if isinstance(value, Vector3):
        return value
    return Vector3.from_sequence(value)


def _convert(name: str, value: object) -> object:
    if name == "target":
        return _as_target(value)
    if name.startswith("point_resolution"):
        return int(value)
    return float(value)


class SamplePlane:
    """
    An oriented rectangle in 3D space, recomputed in full on every change.

    Every parameter setter re-derives the whole chain
    n -> pc -> rotation matrix -> t_theta, t_phi -> p1..p4.
    """
    def __init__(
        self,
        length_scale: float,
        *,
        theta: float = 0.0,
        phi: float = 0.0,
        gamma: float = 0.0,
        r: Optional[float] = None,
        width: Optional[float] = None,
        height: Optional[float] = None,
        target: Optional[Vector3] = None,
        scale_multiplier: float = DEFAULT_SCALE_MULTIPLIER,
        point_resolution_theta: int = DEFAULT_POINT_RESOLUTION,
        point_resolution_phi: int = DEFAULT_POINT_RESOLUTION,
    ) -> None:
        """
        Initialize the sample plane.

        Args:
            length_scale: Sizing reference, typically a mesh bounding-box diagonal.
            theta: Polar angle of the normal (degrees).
            phi: Azimuthal angle of the normal (degrees).
            gamma: In-plane orientation about the normal (degrees).
            r: Distance of the plane center from the target. Defaults to
               `DEFAULT_DISTANCE_FACTOR * length_scale`.
            width: Extent along t_phi. Defaults to `length_scale`.
            height: Extent along t_theta. Defaults to `length_scale`.
            target: The point the plane is placed around. Defaults to the origin.
            scale_multiplier: Corner-marker radius as a fraction of `length_scale`.
            point_resolution_theta: Marker tessellation in theta.
            point_resolution_phi: Marker tessellation in phi.
        """
        self._length_scale = float(length_scale)
        self._scale_multiplier = float(scale_multiplier)
        self._point_resolution_theta = int(point_resolution_theta)
        self._point_resolution_phi = int(point_resolution_phi)
        self._target = _as_target(target) if target is not None else Vector3()

        self._theta = float(theta)
        self._phi = float(phi)
        self._gamma = float(gamma)
        self._r = float(r) if r is not None else DEFAULT_DISTANCE_FACTOR * self._length_scale
        self._width = float(width) if width is not None else self._length_scale
        self._height = float(height) if height is not None else self._length_scale

        self._n = Vector3()
        self._pc = Vector3()
        self._rot_matrix = Matrix3x3.identity()
        self._t_theta = Vector3()
        self._t_phi = Vector3()
        self._p1 = Vector3()
        self._p2 = Vector3()
        self._p3 = Vector3()
        self._p4 = Vector3()

        self.update_sample_points()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(theta={self._theta}, phi={self._phi}, gamma={self._gamma}, "
            f"r={self._r}, width={self._width}, height={self._height})"
        )

    # ------------------------------------------------------------------
    # Derived quantities
    # ------------------------------------------------------------------

    def update_sample_points(self) -> None:
        """Recompute every derived vector from the current parameters."""
        theta = deg2rad(self._theta)
        phi = deg2rad(self._phi)

        self._n = Vector3(sin(theta) * cos(phi), sin(theta) * sin(phi), cos(theta))
        self._pc = self._r * self._n
        self._rot_matrix = Matrix3x3.rotation(deg2rad(self._gamma), self._n)

        self._t_theta = self._rot_matrix @ Vector3(cos(theta) * cos(phi), cos(theta) * sin(phi), -sin(theta))
        self._t_phi = self._rot_matrix @ Vector3(-sin(phi), cos(phi), 0.0)

        half_height = (self._height / 2.0) * self._t_theta
        half_width = (self._width / 2.0) * self._t_phi

        self._p1 = self._pc - half_height - half_width
        self._p2 = self._pc - half_height + half_width
        self._p3 = self._pc + half_height - half_width
        self._p4 = self._pc + half_height + half_width

        logger.debug(
            f"Sample plane updated: theta={self._theta}, phi={self._phi}, gamma={self._gamma}, "
            f"r={self._r}, pc={tuple(self._pc)}"
        )

    def configure(self, **parameters: object) -> None:
        """
        Set several parameters at once with a single recomputation.

        Raises:
            TypeError: If an unknown parameter name is given.
            ValueError: If a value cannot be converted; no parameter is changed then.
        """
        unknown = sorted(set(parameters) - set(_PARAMETERS))
        if unknown:
            raise TypeError(f"Unknown sample plane parameter(s): {unknown}")

        converted = {name: _convert(name, value) for name, value in parameters.items()}
        for name, value in converted.items():
            setattr(self, f"_{name}", value)
        self.update_sample_points()

    @property
    def n(self) -> Vector3:
        """Unit normal, pointing from the target outwards."""
        return self._n

    @property
    def pc(self) -> Vector3:
        """Plane center relative to the target."""
        return self._pc

    @property
    def t_theta(self) -> Vector3:
        return self._t_theta

    @property
    def t_phi(self) -> Vector3:
        return self._t_phi

    @property
    def rotation_matrix(self) -> Matrix3x3:
        """Rotation by gamma about the normal, applied to both tangents."""
        return self._rot_matrix

    @property
    def p1(self) -> Vector3:
        return self._p1

    @property
    def p2(self) -> Vector3:
        return self._p2

    @property
    def p3(self) -> Vector3:
        return self._p3

    @property
    def p4(self) -> Vector3:
        return self._p4

    @property
    def points(self) -> tuple[Vector3, Vector3, Vector3, Vector3]:
        """Corners p1..p4, relative to the target."""
        return self._p1, self._p2, self._p3, self._p4

    @property
    def world_points(self) -> tuple[Vector3, Vector3, Vector3, Vector3]:
        """Corners p1..p4 in absolute coordinates (target added)."""
        return tuple(self.to_world(p) for p in self.points)

    def to_world(self, point: Vector3) -> Vector3:
        """Translate a target-relative point into absolute coordinates."""
        return self._target + point

    @property
    def marker_radius(self) -> float:
        """Radius of the corner markers drawn by the shell."""
        return self._scale_multiplier * self._length_scale

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    @property
    def length_scale(self) -> float:
        return self._length_scale

    @property
    def scale_multiplier(self) -> float:
        return self._scale_multiplier

    @scale_multiplier.setter
    def scale_multiplier(self, value: float) -> None:
        self._scale_multiplier = float(value)
        self.update_sample_points()

    @property
    def point_resolution_theta(self) -> int:
        return self._point_resolution_theta

    @point_resolution_theta.setter
    def point_resolution_theta(self, value: int) -> None:
        self._point_resolution_theta = int(value)
        self.update_sample_points()

    @property
    def point_resolution_phi(self) -> int:
        return self._point_resolution_phi

    @point_resolution_phi.setter
    def point_resolution_phi(self, value: int) -> None:
        self._point_resolution_phi = int(value)
        self.update_sample_points()

    @property
    def target(self) -> Vector3:
        return self._target

    @target.setter
    def target(self, value: Vector3) -> None:
        self._target = _as_target(value)
        self.update_sample_points()

    @property
    def theta(self) -> float:
        """Polar angle (degrees)."""
        return self._theta

    @theta.setter
    def theta(self, value: float) -> None:
        self._theta = float(value)
        self.update_sample_points()

    @property
    def phi(self) -> float:
        """Azimuthal angle (degrees)."""
        return self._phi

    @phi.setter
    def phi(self, value: float) -> None:
        self._phi = float(value)
        self.update_sample_points()

    @property
    def gamma(self) -> float:
        """Orientation angle about the normal (degrees)."""
        return self._gamma

    @gamma.setter
    def gamma(self, value: float) -> None:
        self._gamma = float(value)
        self.update_sample_points()

    @property
    def r(self) -> float:
        """Distance from the target."""
        return self._r

    @r.setter
    def r(self, value: float) -> None:
        self._r = float(value)
        self.update_sample_points()

    @property
    def width(self) -> float:
        return self._width

    @width.setter
    def width(self, value: float) -> None:
        self._width = float(value)
        self.update_sample_points()

    @property
    def height(self) -> float:
        return self._height

    @height.setter
    def height(self, value: float) -> None:
        self._height = float(value)
        self.update_sample_points()
