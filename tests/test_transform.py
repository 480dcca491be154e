"""Tests for the 4x4 matrix helpers."""

import math
import pytest
import numpy as np

from minitracer.vec3 import Vec3, Point3
from minitracer.transform import look_at_rh, perspective_rh, inverse, unproject


class TestLookAt:
    """Test look_at_rh()."""

    def test_eye_maps_to_origin(self):
        view = look_at_rh(Point3(1, 2, 3), Point3(1, 2, 0), Vec3(0, 1, 0))
        p = view @ np.array([1.0, 2.0, 3.0, 1.0])
        assert np.allclose(p, [0, 0, 0, 1])

    def test_target_on_negative_z(self):
        view = look_at_rh(Point3(1, 2, 3), Point3(1, 2, 0), Vec3(0, 1, 0))
        p = view @ np.array([1.0, 2.0, 0.0, 1.0])
        assert np.allclose(p, [0, 0, -3, 1])

    def test_rotation_is_orthonormal(self):
        view = look_at_rh(Point3(0, 2, -4), Point3(0, 0, 0), Vec3(0, 1, 0))
        rotation = view[:3, :3]
        assert np.allclose(rotation @ rotation.T, np.eye(3))


class TestPerspective:
    """Test perspective_rh()."""

    def test_near_plane_depth_zero(self):
        proj = perspective_rh(math.radians(90), 1.0, 0.01, 100.0)
        clip = proj @ np.array([0.0, 0.0, -0.01, 1.0])
        assert abs(clip[2] / clip[3]) < 1e-9

    def test_far_plane_depth_one(self):
        proj = perspective_rh(math.radians(90), 1.0, 0.01, 100.0)
        clip = proj @ np.array([0.0, 0.0, -100.0, 1.0])
        assert abs(clip[2] / clip[3] - 1.0) < 1e-9

    def test_fov_edge_maps_to_unit_ndc(self):
        # 90 degree vertical FOV: y == -z is the top edge
        proj = perspective_rh(math.radians(90), 2.0, 0.01, 100.0)
        clip = proj @ np.array([2.0, 1.0, -1.0, 1.0])
        assert clip[0] / clip[3] == pytest.approx(1.0)
        assert clip[1] / clip[3] == pytest.approx(1.0)


class TestInverse:
    """Test inverse() and unproject()."""

    def test_round_trip(self):
        m = perspective_rh(math.radians(60), 1.5, 0.1, 50.0)
        assert np.allclose(inverse(m) @ m, np.eye(4))

    def test_singular_raises(self):
        with pytest.raises(ValueError):
            inverse(np.zeros((4, 4)))

    def test_unproject_divides_by_w(self):
        m = np.diag([1.0, 1.0, 1.0, 2.0])
        assert unproject(m, 2.0, 4.0, 6.0) == Point3(1, 2, 3)
