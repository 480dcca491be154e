"""
Vector3 class for 3D math operations.

Used throughout the tracer for:
- Points in 3D space
- Direction vectors
- Surface normals
"""

from __future__ import annotations
import math
from typing import Union
import numpy as np


class Vec3:
    """An immutable 3D vector.

    Uses numpy internally for the arithmetic while providing
    a clean, Pythonic API. Every operation returns a new vector.
    """

    __slots__ = ('_data',)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self._data = np.array([x, y, z], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Vec3:
        """Create Vec3 from the first three entries of a numpy array."""
        v = cls.__new__(cls)
        v._data = np.array(arr[:3], dtype=np.float64)
        return v

    @classmethod
    def _wrap(cls, data: np.ndarray) -> Vec3:
        """Adopt a freshly computed float64 array without copying."""
        v = cls.__new__(cls)
        v._data = data
        return v

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    def __repr__(self) -> str:
        return f"Vec3({self.x:.4f}, {self.y:.4f}, {self.z:.4f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return np.allclose(self._data, other._data)

    # Equality is approximate, so vectors are not hashable
    __hash__ = None

    def __neg__(self) -> Vec3:
        return Vec3._wrap(-self._data)

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3._wrap(self._data + other._data)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3._wrap(self._data - other._data)

    def __mul__(self, other: float) -> Vec3:
        return Vec3._wrap(self._data * other)

    def __rmul__(self, other: float) -> Vec3:
        return Vec3._wrap(other * self._data)

    def __truediv__(self, other: float) -> Vec3:
        return Vec3._wrap(self._data / other)

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def length(self) -> float:
        """Return the magnitude (length) of the vector."""
        return math.sqrt(np.dot(self._data, self._data))

    def length_squared(self) -> float:
        """Return the squared magnitude (avoids sqrt for comparisons)."""
        return float(np.dot(self._data, self._data))

    def normalize(self) -> Vec3:
        """Return a unit vector in the same direction.

        Raises:
            ValueError: If the vector has zero length
        """
        length = self.length()
        if length == 0:
            raise ValueError("Cannot normalize a zero-length vector")
        return Vec3._wrap(self._data / length)

    def dot(self, other: Vec3) -> float:
        """Compute dot product with another vector."""
        return float(np.dot(self._data, other._data))

    def cross(self, other: Vec3) -> Vec3:
        """Compute cross product with another vector."""
        return Vec3.from_array(np.cross(self._data, other._data))

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()

    @classmethod
    def coerce(cls, value: Union[Vec3, tuple, list]) -> Vec3:
        """Accept a Vec3 or any 3-sequence of numbers."""
        if isinstance(value, Vec3):
            return value
        x, y, z = value
        return cls(float(x), float(y), float(z))


# Convenience type alias
Point3 = Vec3
