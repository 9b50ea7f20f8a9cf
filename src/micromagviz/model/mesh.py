from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Union, TYPE_CHECKING

import numpy as np

from micromagviz.model import tetrahedron
from micromagviz.model.errors import ShapeError
from micromagviz.model.geometry_utils import bounding_diagonal
from micromagviz.model.vectors import Vector3

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

VertexList = Union[Sequence[Sequence[float]], "npt.NDArray[np.float64]"]
TetrahedronList = Union[Sequence[Sequence[int]], "npt.NDArray[np.int64]"]


class Mesh:
    """
    A tetrahedral mesh together with its aggregate geometry.

    The bounding box, volume-weighted centroid and total volume are computed
    once at construction; the mesh is read-only afterwards. Build a new Mesh
    to change anything.
    """
    def __init__(
        self,
        vertices: VertexList,
        tetrahedra: TetrahedronList,
        submeshes: Optional[Any] = None,
    ) -> None:
        """
        Initialize the Mesh class.

        Args:
            vertices: Vertex coordinate list, N points of three coordinates.
            tetrahedra: Tetrahedron index list, M cells of four vertex indices.
            submeshes: Sub-mesh grouping metadata; stored unchanged.

        Raises:
            ShapeError: If vertices are not 3-points or cells are not 4-tuples.
            IndexError: If a cell refers to a vertex outside the vertex list.
        """
        self._vertices = self._as_vertex_array(vertices)
        self._tetrahedra = self._as_index_array(tetrahedra)
        self._validate_indices()
        self._vertices.flags.writeable = False
        self._tetrahedra.flags.writeable = False

        self.submeshes = submeshes if submeshes is not None else []

        self._box_min, self._box_max = self._bounding_box()
        self._volume, self._centroid = self._volume_and_centroid()

        logger.debug(
            f"Mesh built: {self.num_vertices} vertices, {self.num_tetrahedra} tetrahedra, "
            f"volume={self._volume:.6g}"
        )
        if self._volume == 0.0:
            logger.warning("Mesh has zero total volume; its centroid is undefined (NaN).")

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(vertices={self.num_vertices}, "
            f"tetrahedra={self.num_tetrahedra}, volume={self._volume:.6g})"
        )

    @staticmethod
    def _as_vertex_array(vertices: VertexList) -> npt.NDArray[np.float64]:
        try:
            arr = np.array(vertices, dtype=np.float64)
        except ValueError as e:
            raise ShapeError(f"Vertices must be 3-component points: {e}") from e

        if arr.size == 0:
            return np.empty((0, 3), dtype=np.float64)
        if arr.ndim != 2 or arr.shape[1] != 3:
            raise ShapeError(f"Expected vertices of shape (N, 3), got {arr.shape}.")
        return arr

    @staticmethod
    def _as_index_array(tetrahedra: TetrahedronList) -> npt.NDArray[np.int64]:
        try:
            raw = np.array(tetrahedra)
        except ValueError as e:
            raise ShapeError(f"Tetrahedra must be 4-tuples of vertex indices: {e}") from e

        if raw.size == 0:
            return np.empty((0, 4), dtype=np.int64)
        if raw.ndim != 2 or raw.shape[1] != 4:
            raise ShapeError(f"Expected tetrahedra of shape (M, 4), got {raw.shape}.")

        # Whole-valued floats are accepted, anything else would be truncated
        if raw.dtype.kind == "f":
            if not np.all(np.isfinite(raw) & (raw == np.round(raw))):
                raise ShapeError("Tetrahedron vertex indices must be integers.")
        elif raw.dtype.kind not in "iu":
            raise ShapeError(f"Tetrahedron vertex indices must be integers, got dtype {raw.dtype}.")
        return raw.astype(np.int64)

    def _validate_indices(self) -> None:
        n = self._vertices.shape[0]
        bad = np.flatnonzero(np.any((self._tetrahedra < 0) | (self._tetrahedra >= n), axis=1))
        if bad.size:
            cell = int(bad[0])
            raise IndexError(
                f"Tetrahedron {cell} {self._tetrahedra[cell].tolist()} refers to a vertex "
                f"outside the vertex list (size {n})."
            )

    def _bounding_box(self) -> tuple[Vector3, Vector3]:
        # Empty meshes keep the sentinels: box_min = +inf, box_max = -inf
        if self._vertices.shape[0] == 0:
            return Vector3(np.inf, np.inf, np.inf), Vector3(-np.inf, -np.inf, -np.inf)
        return (
            Vector3.from_sequence(self._vertices.min(axis=0)),
            Vector3.from_sequence(self._vertices.max(axis=0)),
        )

    def _volume_and_centroid(self) -> tuple[float, Vector3]:
        corners = self._vertices[self._tetrahedra]  # (M, 4, 3)
        if corners.shape[0] == 0:
            return 0.0, Vector3(np.nan, np.nan, np.nan)

        tet_volumes = tetrahedron.volumes(corners)
        tet_centroids = tetrahedron.centroids(corners)

        total_volume = float(tet_volumes.sum())
        weighted = (tet_volumes[:, np.newaxis] * tet_centroids).sum(axis=0)

        with np.errstate(divide="ignore", invalid="ignore"):
            centroid = weighted / np.float64(total_volume)

        return total_volume, Vector3.from_sequence(centroid)

    @property
    def vertices(self) -> npt.NDArray[np.float64]:
        """Vertex coordinate list, shape (N, 3), read-only."""
        return self._vertices

    @property
    def tetrahedra(self) -> npt.NDArray[np.int64]:
        """Tetrahedron index list, shape (M, 4), read-only."""
        return self._tetrahedra

    @property
    def num_vertices(self) -> int:
        return int(self._vertices.shape[0])

    @property
    def num_tetrahedra(self) -> int:
        return int(self._tetrahedra.shape[0])

    @property
    def centroid(self) -> Vector3:
        """
        Volume-weighted centroid. NaN when `volume` is zero, so check the
        volume before trusting this.
        """
        return self._centroid

    @property
    def box_min(self) -> Vector3:
        return self._box_min

    @property
    def box_max(self) -> Vector3:
        return self._box_max

    @property
    def volume(self) -> float:
        """Total signed volume of all tetrahedra."""
        return self._volume

    @property
    def length_scale(self) -> float:
        """Length of the bounding-box diagonal; 0 for a mesh without vertices."""
        if self.num_vertices == 0:
            return 0.0
        return bounding_diagonal(self._box_min, self._box_max)
