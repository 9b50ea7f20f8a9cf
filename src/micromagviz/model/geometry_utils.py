from __future__ import annotations

from dataclasses import dataclass
from math import pi, sqrt

from micromagviz.model.vectors import Vector3


def deg2rad(degrees: float) -> float:
    return degrees * pi / 180


def rad2deg(radians: float) -> float:
    return radians * 180 / pi


def bounding_diagonal(box_min: Vector3, box_max: Vector3) -> float:
    """
    Length of the diagonal of an axis-aligned box.

    This is the usual length scale handed to a SamplePlane: plane size and
    marker radii are expressed as multiples of it.
    """
    return sqrt((box_max - box_min).norm_squared())


@dataclass(frozen=True)
class CameraView:
    """A camera preset: where the camera sits, what it looks at, which way is up."""
    position: Vector3
    focal_point: Vector3
    view_up: Vector3


def camera_views(center: Vector3) -> dict[str, CameraView]:
    """
    The axis-aligned camera presets used to look at a mesh along +x, +y and +z.

    Args:
        center: The focal point, usually the mesh centroid.

    Returns:
        Mapping "x" / "y" / "z" to the corresponding CameraView.
    """
    return {
        "x": CameraView(position=Vector3(-1.0, 0.0, 0.0), focal_point=center, view_up=Vector3(0.0, 1.0, 0.0)),
        "y": CameraView(position=Vector3(0.0, -1.0, 0.0), focal_point=center, view_up=Vector3(1.0, 0.0, 0.0)),
        "z": CameraView(position=Vector3(0.0, 0.0, -1.0), focal_point=center, view_up=Vector3(0.0, 1.0, 0.0)),
    }
