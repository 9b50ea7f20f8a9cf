"""
VTK and Geometry Utilities
Helper functions converting model objects into PyVista datasets.
"""
import logging

import numpy as np
import numpy.typing as npt
import pyvista as pv

from micromagviz.model.mesh import Mesh
from micromagviz.model.sample_plane import SamplePlane

logger = logging.getLogger(__name__)


class VtkUtils:
    @staticmethod
    def mesh_to_unstructured_grid(mesh: Mesh) -> pv.UnstructuredGrid:
        """
        Build an unstructured grid of linear tetrahedra from a Mesh.

        Cell layout is the flat VTK form [4, i0, i1, i2, i3, 4, ...].
        """
        n_cells = mesh.num_tetrahedra
        cells = np.hstack([
            np.full((n_cells, 1), 4, dtype=np.int64),
            mesh.tetrahedra.astype(np.int64),
        ]).ravel()
        cell_types = np.full(n_cells, pv.CellType.TETRA, dtype=np.uint8)

        grid = pv.UnstructuredGrid(cells, cell_types, np.array(mesh.vertices, dtype=np.float64))
        logger.debug(f"Unstructured grid created with {grid.n_points} points and {grid.n_cells} cells.")
        return grid

    @staticmethod
    def plane_corners(plane: SamplePlane) -> npt.NDArray[np.float64]:
        """Absolute corner coordinates p1..p4 as a (4, 3) array."""
        return np.array([p.to_array() for p in plane.world_points], dtype=np.float64)

    @staticmethod
    def sample_plane_to_polydata(plane: SamplePlane) -> pv.PolyData:
        """
        A single quad face through the four corners.

        The corners are ordered p1, p2, p4, p3 so the polygon does not
        self-intersect.
        """
        corners = VtkUtils.plane_corners(plane)[[0, 1, 3, 2]]
        return pv.PolyData(corners, faces=np.array([4, 0, 1, 2, 3], dtype=np.int64))

    @staticmethod
    def sample_point_markers(plane: SamplePlane) -> list[pv.PolyData]:
        """
        One sphere per corner, sized by the plane's marker radius and
        tessellated with its point resolutions.
        """
        return [
            pv.Sphere(
                radius=plane.marker_radius,
                center=corner,
                theta_resolution=plane.point_resolution_theta,
                phi_resolution=plane.point_resolution_phi,
            )
            for corner in VtkUtils.plane_corners(plane)
        ]
