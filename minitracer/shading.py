"""
Lambertian shading and packing of pixel colors.

A packed color is a single integer laid out as ``0x00RRGGBB``: blue in
the low byte, then green, then red. No alpha is stored.
"""

from __future__ import annotations
from typing import Tuple

from .vec3 import Vec3, Point3
from .shapes import Intersection

BACKGROUND = 0


def pack_color(red: int, green: int, blue: int) -> int:
    """Pack 8-bit channels into a single color word."""
    return blue | (green << 8) | (red << 16)


def unpack_color(word: int) -> Tuple[int, int, int]:
    """Split a color word into (red, green, blue)."""
    return (word >> 16) & 0xFF, (word >> 8) & 0xFF, word & 0xFF


def lambert(position: Point3, normal: Vec3, light_position: Point3) -> float:
    """Cosine between the normal and the direction to the light, clamped at 0."""
    light_dir = (light_position - position).normalize()
    return max(0.0, normal.dot(light_dir))


def shade(hit: Intersection, light_position: Point3, background: int = BACKGROUND) -> int:
    """Compute the packed grayscale color for an intersection result."""
    if hit is None:
        return background

    k = lambert(hit.position, hit.normal, light_position)
    level = min(255, int(round(k * 255.0)))
    return pack_color(level, level, level)
