from __future__ import annotations

import itertools
import math
import sys
import unittest
from pathlib import Path

import numpy as np
import numpy.testing as npt

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from micromagviz.model.errors import ShapeError
from micromagviz.model.sample_plane import SamplePlane
from micromagviz.model.vectors import Vector3

TOL = 1e-9


class SamplePlaneFixtureTests(unittest.TestCase):
    """Regression values for theta=90, phi=0, gamma=0, r=5, width=height=2."""

    def setUp(self) -> None:
        self.plane = SamplePlane(length_scale=10)
        self.plane.theta = 90
        self.plane.phi = 0
        self.plane.gamma = 0
        self.plane.r = 5
        self.plane.width = 2
        self.plane.height = 2

    def assertVector(self, actual: Vector3, expected: tuple[float, float, float]) -> None:
        npt.assert_allclose(actual.to_array(), expected, atol=TOL)

    def test_normal_and_center(self) -> None:
        self.assertVector(self.plane.n, (1, 0, 0))
        self.assertVector(self.plane.pc, (5, 0, 0))

    def test_tangents(self) -> None:
        self.assertVector(self.plane.t_theta, (0, 0, -1))
        self.assertVector(self.plane.t_phi, (0, 1, 0))

    def test_corners(self) -> None:
        self.assertVector(self.plane.p1, (5, -1, 1))
        self.assertVector(self.plane.p2, (5, 1, 1))
        self.assertVector(self.plane.p3, (5, -1, -1))
        self.assertVector(self.plane.p4, (5, 1, -1))
        self.assertEqual(self.plane.points, (self.plane.p1, self.plane.p2, self.plane.p3, self.plane.p4))

    def test_gamma_rotates_tangents_about_normal(self) -> None:
        self.plane.gamma = 90
        self.assertVector(self.plane.n, (1, 0, 0))
        self.assertVector(self.plane.t_theta, (0, 1, 0))
        self.assertVector(self.plane.t_phi, (0, 0, 1))


class SamplePlaneDefaultsTests(unittest.TestCase):
    def test_defaults_follow_length_scale(self) -> None:
        plane = SamplePlane(10.0)
        self.assertEqual(plane.length_scale, 10.0)
        self.assertEqual(plane.r, 20.0)
        self.assertEqual(plane.width, 10.0)
        self.assertEqual(plane.height, 10.0)
        self.assertEqual(plane.scale_multiplier, 0.05)
        self.assertEqual(plane.point_resolution_theta, 30)
        self.assertEqual(plane.point_resolution_phi, 30)
        self.assertAlmostEqual(plane.marker_radius, 0.5, places=15)
        self.assertEqual(plane.target, Vector3())

    def test_default_orientation_points_up(self) -> None:
        plane = SamplePlane(10.0)
        npt.assert_allclose(plane.n.to_array(), [0, 0, 1], atol=TOL)
        npt.assert_allclose(plane.pc.to_array(), [0, 0, 20], atol=TOL)
        npt.assert_allclose(plane.t_theta.to_array(), [1, 0, 0], atol=TOL)
        npt.assert_allclose(plane.t_phi.to_array(), [0, 1, 0], atol=TOL)


class SamplePlanePropertyTests(unittest.TestCase):
    ANGLES = sorted(set(np.linspace(-1000.0, 1000.0, 21).tolist()) | {0.0, 90.0, 180.0, -180.0, 270.0, 33.3})

    def assertOrthonormal(self, plane: SamplePlane) -> None:
        n, t_theta, t_phi = plane.n, plane.t_theta, plane.t_phi
        for v in (n, t_theta, t_phi):
            self.assertAlmostEqual(v.norm_squared(), 1.0, delta=TOL)
        self.assertAlmostEqual(n.dot(t_theta), 0.0, delta=TOL)
        self.assertAlmostEqual(n.dot(t_phi), 0.0, delta=TOL)
        self.assertAlmostEqual(t_theta.dot(t_phi), 0.0, delta=TOL)

    def test_frame_is_orthonormal_for_all_angles(self) -> None:
        plane = SamplePlane(1.0)
        for theta, phi, gamma in itertools.product(self.ANGLES, self.ANGLES, self.ANGLES[::3]):
            plane.configure(theta=theta, phi=phi, gamma=gamma)
            self.assertOrthonormal(plane)

    def test_frame_is_right_handed(self) -> None:
        plane = SamplePlane(1.0, theta=37.0, phi=-112.0, gamma=251.0)
        npt.assert_allclose(plane.t_theta.cross(plane.t_phi).to_array(), plane.n.to_array(), atol=TOL)

    def test_corners_form_parallelogram(self) -> None:
        plane = SamplePlane(3.0)
        for theta, phi, gamma in itertools.product((-300.0, 0.0, 45.0, 180.0), (-20.0, 90.0), (0.0, 77.0)):
            plane.configure(theta=theta, phi=phi, gamma=gamma, r=4.5, width=1.5, height=0.25)
            twice_center = (2.0 * plane.pc).to_array()
            npt.assert_allclose((plane.p1 + plane.p4).to_array(), twice_center, atol=TOL)
            npt.assert_allclose((plane.p2 + plane.p3).to_array(), twice_center, atol=TOL)

    def test_corner_spacing_matches_size(self) -> None:
        plane = SamplePlane(1.0, theta=60.0, phi=20.0, gamma=10.0, width=3.0, height=0.5)
        self.assertAlmostEqual(math.sqrt((plane.p2 - plane.p1).norm_squared()), 3.0, delta=TOL)
        self.assertAlmostEqual(math.sqrt((plane.p3 - plane.p1).norm_squared()), 0.5, delta=TOL)

    def test_center_lies_at_distance_r(self) -> None:
        plane = SamplePlane(1.0, theta=123.0, phi=-45.0, r=7.0)
        self.assertAlmostEqual(math.sqrt(plane.pc.norm_squared()), 7.0, delta=TOL)
        self.assertAlmostEqual(plane.n.dot(plane.p1 - plane.pc), 0.0, delta=TOL)

    def test_pole_is_numerically_defined(self) -> None:
        plane = SamplePlane(1.0, theta=0.0)
        for phi in (0.0, 45.0, 90.0, 270.0):
            plane.phi = phi
            npt.assert_allclose(plane.n.to_array(), [0, 0, 1], atol=TOL)
            self.assertOrthonormal(plane)
            self.assertTrue(all(math.isfinite(c) for p in plane.points for c in p))


class SamplePlaneSetterTests(unittest.TestCase):
    def test_each_setter_recomputes(self) -> None:
        plane = SamplePlane(1.0)
        before = plane.p1
        plane.theta = 90.0
        self.assertNotEqual(plane.p1, before)

        before = plane.p1
        plane.r = 3.0
        self.assertNotEqual(plane.p1, before)

        before = plane.p1
        plane.width = 0.1
        self.assertNotEqual(plane.p1, before)

    def test_configure_sets_several_parameters(self) -> None:
        plane = SamplePlane(1.0)
        plane.configure(theta=90, phi=0, r=5, width=2, height=2, point_resolution_phi=12)
        self.assertEqual(plane.point_resolution_phi, 12)
        npt.assert_allclose(plane.p1.to_array(), [5, -1, 1], atol=TOL)

    def test_configure_rejects_unknown_names(self) -> None:
        plane = SamplePlane(1.0)
        with self.assertRaises(TypeError):
            plane.configure(alpha=1.0)

    def test_failed_configure_changes_nothing(self) -> None:
        plane = SamplePlane(1.0)
        n, p1 = plane.n, plane.p1
        with self.assertRaises(ValueError):
            plane.configure(theta=90, r="bad")
        self.assertEqual(plane.theta, 0.0)
        self.assertEqual(plane.r, 2.0)
        self.assertEqual(plane.n, n)
        self.assertEqual(plane.p1, p1)

    def test_target_accepts_sequences(self) -> None:
        plane = SamplePlane(1.0, target=(1, 2, 3))
        self.assertEqual(plane.target, Vector3(1, 2, 3))
        plane.target = [4, 5, 6]
        self.assertEqual(plane.target, Vector3(4, 5, 6))
        plane.configure(target=np.array([0.0, 0.0, 1.0]))
        self.assertEqual(plane.to_world(Vector3()), Vector3(0, 0, 1))

    def test_bad_target_is_rejected(self) -> None:
        plane = SamplePlane(1.0)
        with self.assertRaises(ShapeError):
            plane.target = (1, 2)
        with self.assertRaises(ShapeError):
            plane.configure(theta=45, target=(1, 2, 3, 4))
        self.assertEqual(plane.target, Vector3())
        self.assertEqual(plane.theta, 0.0)

    def test_marker_radius_follows_scale_multiplier(self) -> None:
        plane = SamplePlane(4.0)
        plane.scale_multiplier = 0.25
        self.assertEqual(plane.marker_radius, 1.0)

    def test_target_offsets_world_points_only(self) -> None:
        plane = SamplePlane(1.0, theta=90.0, r=5.0, width=2.0, height=2.0)
        pc = plane.pc
        plane.target = Vector3(1.0, 2.0, 3.0)
        self.assertEqual(plane.pc, pc)
        for relative, world in zip(plane.points, plane.world_points):
            npt.assert_allclose(world.to_array(), (relative + Vector3(1.0, 2.0, 3.0)).to_array(), atol=TOL)


if __name__ == "__main__":
    unittest.main()
