"""
Scene: the camera plus a fixed, ordered list of primitives.
"""

from __future__ import annotations
from typing import Iterable, Iterator, Optional, Tuple

from .vec3 import Vec3, Point3
from .ray import Ray
from .camera import Camera, CameraSettings
from .shapes import Intersection, Primitive, PRIMITIVE_TYPES, Sphere, Plane


class Scene:
    """An immutable collection of primitives seen through one camera."""

    def __init__(self, camera: Camera, objects: Optional[Iterable[Primitive]] = None):
        """Create a scene.

        Args:
            camera: The camera rays are generated from
            objects: Spheres and planes, in the order they are tested

        Raises:
            TypeError: If an object is not a Sphere or a Plane
        """
        objects = tuple(objects) if objects is not None else ()
        for obj in objects:
            if not isinstance(obj, PRIMITIVE_TYPES):
                raise TypeError(f"Unsupported primitive: {obj!r}")
        self._camera = camera
        self._objects: Tuple[Primitive, ...] = objects

    @property
    def camera(self) -> Camera:
        return self._camera

    @property
    def objects(self) -> Tuple[Primitive, ...]:
        return self._objects

    def intersect(self, ray: Ray) -> Intersection:
        """Find the nearest intersection among all objects.

        Ties keep the object that comes first in the list.
        """
        closest_hit: Intersection = None

        for obj in self._objects:
            hit = obj.intersect(ray)
            if hit is not None and (closest_hit is None or hit.distance < closest_hit.distance):
                closest_hit = hit

        return closest_hit

    def with_camera(self, camera: Camera) -> Scene:
        """Return a scene with the same objects seen through another camera."""
        return Scene(camera, self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[Primitive]:
        return iter(self._objects)

    def __repr__(self) -> str:
        return f"Scene(camera={self._camera}, objects={len(self._objects)})"


def create_default_scene(aspect_ratio: float = 16.0 / 9.0, settings: CameraSettings = None) -> Scene:
    """Create the demo scene: two spheres resting above a ground plane."""
    camera = Camera(
        position=Point3(0, 2, -4),
        look_at=Point3(0, 0, 0),
        aspect_ratio=aspect_ratio,
        settings=settings
    )

    return Scene(camera, [
        Sphere(Point3(-1, 0, 0.5), 1.0),
        Sphere(Point3(2, 0, 0.5), 1.0),
        Plane(Point3(0, -1, 0), Vec3(0, 1, 0)),
    ])
