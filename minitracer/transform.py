"""
4x4 matrix helpers on numpy arrays.

Matrices are row-major ``(4, 4)`` float64 arrays that multiply column
vectors: ``clip = projection @ view @ point``. Both constructors are
right-handed and the projection maps view depth onto the [0, 1] clip range.
"""

from __future__ import annotations
import math
import numpy as np

from .vec3 import Vec3, Point3


def look_at_rh(eye: Point3, center: Point3, up: Vec3) -> np.ndarray:
    """Build a right-handed view matrix looking from eye towards center."""
    f = (center - eye).normalize()
    s = f.cross(up).normalize()
    u = s.cross(f)

    m = np.eye(4, dtype=np.float64)
    m[0, :3] = s.to_array()
    m[1, :3] = u.to_array()
    m[2, :3] = (-f).to_array()
    m[0, 3] = -s.dot(eye)
    m[1, 3] = -u.dot(eye)
    m[2, 3] = f.dot(eye)
    return m


def perspective_rh(fov_y: float, aspect_ratio: float, z_near: float, z_far: float) -> np.ndarray:
    """Build a right-handed perspective projection.

    Args:
        fov_y: Vertical field of view in radians
        aspect_ratio: Width / height
        z_near: Distance to the near plane (mapped to clip depth 0)
        z_far: Distance to the far plane (mapped to clip depth 1)
    """
    h = 1.0 / math.tan(0.5 * fov_y)
    w = h / aspect_ratio
    r = z_far / (z_near - z_far)

    m = np.zeros((4, 4), dtype=np.float64)
    m[0, 0] = w
    m[1, 1] = h
    m[2, 2] = r
    m[2, 3] = r * z_near
    m[3, 2] = -1.0
    return m


def inverse(m: np.ndarray) -> np.ndarray:
    """Invert a 4x4 matrix.

    Raises:
        ValueError: If the matrix is singular
    """
    try:
        return np.linalg.inv(m)
    except np.linalg.LinAlgError as e:
        raise ValueError(f"Matrix is not invertible: {e}") from e


def unproject(m: np.ndarray, x: float, y: float, z: float) -> Point3:
    """Transform the homogeneous point (x, y, z, 1) and divide by w."""
    p = m @ np.array([x, y, z, 1.0], dtype=np.float64)
    return Vec3.from_array(p[:3] / p[3])
