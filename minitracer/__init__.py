"""
minitracer - A minimal interactive Python ray tracer

Casts one ray per pixel from a pinhole camera into a fixed scene of
spheres and planes and shades the nearest hit with a single point light:
- Inverse view-projection ray generation
- Nearest-hit sphere / plane intersection
- Lambertian grayscale shading into packed 32-bit pixels
- A pygame window that re-renders on every redraw
"""

__version__ = "0.1.0"

from .vec3 import Vec3, Point3
from .ray import Ray
from .camera import Camera, CameraSettings
from .shapes import HitInfo, Intersection, Sphere, Plane, Primitive
from .scene import Scene, create_default_scene
from .shading import shade, pack_color, unpack_color, BACKGROUND
from .renderer import Renderer, RenderSettings
from .config import Config, ConfigError, load_config, parse_config


# Window (lazy import to avoid loading pygame for headless use)
def run_viewer(scene: Scene = None, renderer: Renderer = None, **kwargs):
    """Open the interactive window on a scene (the demo scene if None)."""
    from .window import Viewer
    if scene is None:
        scene = create_default_scene()
    Viewer(scene, renderer, **kwargs).run()
