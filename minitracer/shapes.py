"""
Geometric primitives for the ray tracer.

The set of primitives is closed: a scene holds only spheres and planes.
Each primitive exposes ``intersect(ray)`` which returns a HitInfo on a hit
and None on a miss. A miss is the common case on the per-pixel path and is
never signalled with an exception.

Intersection tests assume ``ray.direction`` is unit length.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union
import math

from .vec3 import Vec3, Point3
from .ray import Ray

# Rays closer than this to parallel with a plane are treated as misses
PARALLEL_EPSILON = 1e-4


@dataclass(frozen=True)
class HitInfo:
    """Stores information about a ray-object intersection.

    Attributes:
        position: The intersection point in world space
        normal: The unit surface normal at the intersection
        distance: The ray parameter t at the intersection (t >= 0)
    """
    position: Point3
    normal: Vec3
    distance: float


# Result of every intersection test: a HitInfo, or None for a miss
Intersection = Optional[HitInfo]


class Sphere:
    """A sphere defined by center and radius."""

    __slots__ = ('center', 'radius')

    def __init__(self, center: Point3, radius: float):
        """Create a sphere.

        Args:
            center: Center point of the sphere
            radius: Radius of the sphere (not squared)
        """
        if radius <= 0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")
        self.center = center
        self.radius = radius

    def intersect(self, ray: Ray) -> Intersection:
        """Test ray-sphere intersection geometrically.

        Projects the center onto the ray (tca) and compares the squared
        perpendicular distance against radius². When the ray starts inside
        the sphere the far root is used, so the hit lies in front of the
        origin.
        """
        l = self.center - ray.origin
        tca = l.dot(ray.direction)
        l2 = l.length_squared()
        r2 = self.radius * self.radius
        inside = l2 < r2

        # Center behind the origin and origin outside: nothing ahead to hit
        if tca < 0 and not inside:
            return None

        d2 = l2 - tca * tca
        if d2 > r2:
            return None

        thc = math.sqrt(r2 - d2)
        t = tca - thc
        if t < 0:
            t = tca + thc
            if t < 0:
                return None

        position = ray.at(t)
        return HitInfo(
            position=position,
            normal=(position - self.center).normalize(),
            distance=t
        )

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"


class Plane:
    """An infinite plane defined by a point and a unit normal."""

    __slots__ = ('point', 'normal')

    def __init__(self, point: Point3, normal: Vec3):
        """Create a plane.

        Args:
            point: Any point on the plane
            normal: The plane's normal vector, which must already be unit length
        """
        self.point = point
        self.normal = normal

    def intersect(self, ray: Ray) -> Intersection:
        """Test ray-plane intersection."""
        denom = self.normal.dot(ray.direction)

        # Ray is parallel to plane
        if abs(denom) <= PARALLEL_EPSILON:
            return None

        t = (self.point - ray.origin).dot(self.normal) / denom
        if t < 0:
            return None

        return HitInfo(position=ray.at(t), normal=self.normal, distance=t)

    def __repr__(self) -> str:
        return f"Plane(point={self.point}, normal={self.normal})"


Primitive = Union[Sphere, Plane]

PRIMITIVE_TYPES = (Sphere, Plane)
