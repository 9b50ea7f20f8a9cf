"""
Configuration & Numeric Constants
=================================
This module serves as the central registry for the global constants used by
the geometry kernel.

Why is this file needed?
------------------------
1. Determinism: The regularisation epsilon is a single immutable value shared
   by every vector type, instead of a runtime-mutable class field.
2. Defaults: The sample plane falls back to these values when the GUI shell
   does not provide its own.

Exports:
    DEFAULT_EPS (float): Regularisation epsilon used inside vector norms.
    AXIS_TOLERANCE (float): Minimum axis length accepted by `rotation`.
    DEFAULT_SCALE_MULTIPLIER (float): Marker radius as a fraction of the length scale.
    DEFAULT_POINT_RESOLUTION (int): Theta/phi tessellation of the corner markers.
    DEFAULT_DISTANCE_FACTOR (float): Initial plane distance in units of the length scale.
"""
from typing import Final

# Vector norms
DEFAULT_EPS: Final[float] = 1e-7

# Rotation matrices
AXIS_TOLERANCE: Final[float] = 1e-12

# Sample plane
DEFAULT_SCALE_MULTIPLIER: Final[float] = 0.05
DEFAULT_POINT_RESOLUTION: Final[int] = 30
DEFAULT_DISTANCE_FACTOR: Final[float] = 2.0
