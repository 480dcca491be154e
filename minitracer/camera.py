"""
Camera module for generating primary rays.

The camera precomputes the inverse of its view-projection matrix once, so
producing a ray for a pixel needs no matrix products:
- Pixel coordinates are mapped into clip space
- A near and a far clip-space point are unprojected back to world space
  by combining the columns of the inverse matrix
- The ray runs from the camera position along (far - near)
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .vec3 import Vec3, Point3
from .ray import Ray
from .transform import look_at_rh, perspective_rh, inverse


@dataclass(frozen=True)
class CameraSettings:
    """Projection constants for the camera."""
    vfov: float = 90.0  # degrees
    near: float = 0.01
    far: float = 100.0
    world_up: Tuple[float, float, float] = (0.0, 1.0, 0.0)

    def __post_init__(self):
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {self.vfov}")
        if not 0.0 < self.near < self.far:
            raise ValueError(f"Expected 0 < near < far, got near={self.near}, far={self.far}")


class Camera:
    """A pinhole camera with perspective projection."""

    def __init__(
        self,
        position: Point3,
        look_at: Point3,
        aspect_ratio: float = 16.0 / 9.0,
        settings: CameraSettings = None
    ):
        """Create a camera.

        The up vector is derived from the world up axis, so the camera
        cannot look straight along it.

        Args:
            position: Camera position in world space
            look_at: Point the camera is looking at
            aspect_ratio: Width / Height ratio
            settings: Projection constants (defaults if None)

        Raises:
            ValueError: If the view direction is zero or parallel to the
                world up axis, or the aspect ratio is not positive
        """
        self.settings = settings if settings else CameraSettings()
        if aspect_ratio <= 0:
            raise ValueError(f"aspect_ratio must be positive, got {aspect_ratio}")

        direction = look_at - position
        if direction.length_squared() == 0:
            raise ValueError("Camera position and look_at point coincide")

        left = direction.cross(Vec3.coerce(self.settings.world_up))
        if left.length_squared() < 1e-12:
            raise ValueError("Camera view direction is parallel to the world up axis")
        up = left.cross(direction).normalize()

        view = look_at_rh(position, look_at, up)
        projection = perspective_rh(
            math.radians(self.settings.vfov),
            aspect_ratio,
            self.settings.near,
            self.settings.far
        )

        self.position = position
        self.look_at = look_at
        self.aspect_ratio = aspect_ratio
        self.inverse_view_projection: np.ndarray = inverse(projection @ view)

        # Columns of the inverse, so a clip point (x, y, z, 1) maps to
        # x * col_x + y * col_y + z * col_z + col_w
        m = self.inverse_view_projection
        self._col_x = m[:, 0].copy()
        self._col_y = m[:, 1].copy()
        self._col_z = m[:, 2].copy()
        self._col_w = m[:, 3].copy()

    def generate_ray(self, px: int, py: int, width: int, height: int) -> Ray:
        """Generate the primary ray for a pixel.

        Args:
            px: Pixel column (0 = left)
            py: Pixel row (0 = top)
            width: Viewport width in pixels
            height: Viewport height in pixels

        Returns:
            A ray from the camera position with a unit direction

        Raises:
            ValueError: If width or height is not positive
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport must be non-empty, got {width}x{height}")

        # Row 0 is the top of the image, clip-space +y is up
        x = (px - width // 2) / width
        y = -(py - height // 2) / height

        base = self._col_x * x + self._col_y * y + self._col_w
        near = base - self._col_z
        far = base + self._col_z
        direction = far[:3] / far[3] - near[:3] / near[3]

        return Ray(self.position, Vec3._wrap(direction).normalize())

    def with_aspect_ratio(self, aspect_ratio: float) -> Camera:
        """Return a camera with the same pose and a new aspect ratio."""
        return Camera(self.position, self.look_at, aspect_ratio, self.settings)

    def __repr__(self) -> str:
        return f"Camera(position={self.position}, look_at={self.look_at})"
