"""
Renderer module - the frame loop of the ray tracer.

For every pixel of the frame:
- Generate the camera ray
- Intersect it with the scene
- Shade the nearest hit, or write the background
and store the packed color in a retained frame buffer.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Callable, Tuple
import numpy as np

from .vec3 import Vec3
from .scene import Scene
from .shading import shade, BACKGROUND


@dataclass(frozen=True)
class RenderSettings:
    """Configuration for the renderer."""
    width: int = 640
    height: int = 360
    light_position: Tuple[float, float, float] = (-5.0, 5.0, -5.0)
    background: int = BACKGROUND

    def __post_init__(self):
        for name in ('width', 'height', 'background'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if not 0 <= self.background <= 0xFFFFFF:
            raise ValueError(f"Background must be a 24-bit packed color, got {self.background:#x}")


class Renderer:
    """Single-threaded renderer owning a reusable frame buffer."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._light_position = Vec3.coerce(self.settings.light_position)
        self._buffer = np.zeros(0, dtype=np.uint32)
        self._size: Tuple[int, int] = (0, 0)
        self._progress_callback: Optional[Callable[[float], None]] = None

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) of the current frame buffer."""
        return self._size

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0),
                called once per finished row
        """
        self._progress_callback = callback

    def render(self, scene: Scene, width: int, height: int) -> np.ndarray:
        """Render the scene into the frame buffer.

        Args:
            scene: The scene to render
            width: Frame width in pixels
            height: Frame height in pixels

        Returns:
            The frame buffer: ``width * height`` packed colors, row-major
            from the top-left. The array is reused by the next call, so
            copy it to keep a frame.

        Raises:
            ValueError: If width or height is not positive
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Frame size must be positive, got {width}x{height}")

        if self._size != (width, height):
            self._size = (width, height)
            self._buffer = np.zeros(width * height, dtype=np.uint32)

        camera = scene.camera
        light = self._light_position
        background = self.settings.background
        buffer = self._buffer

        for index in range(width * height):
            px = index % width
            py = index // width

            ray = camera.generate_ray(px, py, width, height)
            buffer[index] = shade(scene.intersect(ray), light, background)

            if self._progress_callback and px == width - 1:
                self._progress_callback((py + 1) / height)

        return buffer

    @staticmethod
    def to_rgb(buffer: np.ndarray, width: int, height: int) -> np.ndarray:
        """Unpack a frame buffer into an 8-bit RGB image.

        Returns:
            Array of shape (height, width, 3) and dtype uint8
        """
        words = np.asarray(buffer, dtype=np.uint32).reshape(height, width)
        image = np.empty((height, width, 3), dtype=np.uint8)
        image[..., 0] = (words >> 16) & 0xFF
        image[..., 1] = (words >> 8) & 0xFF
        image[..., 2] = words & 0xFF
        return image

    def save_image(self, buffer: np.ndarray, width: int, height: int, filename: str) -> None:
        """Save a frame buffer to an image file.

        Args:
            buffer: Packed frame buffer from render()
            width: Frame width
            height: Frame height
            filename: Output filename (extension determines format)
        """
        from PIL import Image as PILImage

        pil_image = PILImage.fromarray(self.to_rgb(buffer, width, height), 'RGB')
        pil_image.save(filename)
