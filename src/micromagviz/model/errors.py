"""Exceptions raised by the geometry kernel."""


class ShapeError(ValueError):
    """A vector, matrix or cell was built from input of the wrong size."""


class DegenerateAxisError(ValueError):
    """A rotation was requested about an axis too short to normalise."""
