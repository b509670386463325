from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from visu3d.errors import DegenerateVectorError, ParseError

EPSILON: float = 1e-6  # two floats closer than this are considered equal


def parse_triple(text: str) -> Tuple[float, float, float]:
    """Reads the "(x, y, z)" notation used in scene files."""
    if not isinstance(text, str):
        raise ParseError("Expected a '(x, y, z)' string, got {!r}".format(text))
    stripped = text.strip()
    if not (stripped.startswith("(") and stripped.endswith(")")):
        raise ParseError("Missing parentheses in {!r}, expected '(x, y, z)'".format(text))
    tokens = stripped[1:-1].split(",")
    if len(tokens) != 3:
        raise ParseError("Expected exactly 3 components in {!r}, got {}".format(text, len(tokens)))
    try:
        x, y, z = (float(token) for token in tokens)
    except ValueError as exc:
        raise ParseError("Non-numeric component in {!r}".format(text)) from exc
    return x, y, z


def _format_triple(x: float, y: float, z: float) -> str:
    return "({:.2f}, {:.2f}, {:.2f})".format(x, y, z)


@dataclass(frozen=True, slots=True)
class Vector3:
    """Displacement in 3-D space."""

    x: float
    y: float
    z: float

    @classmethod
    def parse(cls, text: str) -> Vector3:
        return cls(*parse_triple(text))

    def __add__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3:
        return Vector3(scalar * self.x, scalar * self.y, scalar * self.z)

    __rmul__ = __mul__

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def squared_norm(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def norm(self) -> float:
        return math.sqrt(self.squared_norm())

    def normalize(self) -> Vector3:
        magnitude = self.norm()
        if magnitude < EPSILON:
            raise DegenerateVectorError("Cannot normalize near-zero vector {}".format(self))
        return self * (1.0 / magnitude)

    def is_unit(self) -> bool:
        return abs(self.squared_norm() - 1.0) < EPSILON

    def as_array(self) -> np.ndarray:
        return np.array((self.x, self.y, self.z), dtype=float)

    def __str__(self) -> str:
        return _format_triple(self.x, self.y, self.z)


@dataclass(frozen=True, slots=True)
class Point3:
    """Location in 3-D space."""

    x: float
    y: float
    z: float

    @classmethod
    def parse(cls, text: str) -> Point3:
        return cls(*parse_triple(text))

    def __add__(self, other: Vector3) -> Point3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Point3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other):
        # point - point is a displacement, point - vector is another point
        if isinstance(other, Point3):
            return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, Vector3):
            return Point3(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def as_array(self) -> np.ndarray:
        return np.array((self.x, self.y, self.z), dtype=float)

    def __str__(self) -> str:
        return _format_triple(self.x, self.y, self.z)


def normalize_vector(v: Vector3) -> Vector3:
    return v.normalize()


def vector_dot(a: Vector3, b: Vector3) -> float:
    return a.dot(b)


def vector_cross(a: Vector3, b: Vector3) -> Vector3: #cross product of two vectors (3D)
    return a.cross(b)


def reflect_vector(I: Vector3, N: Vector3) -> Vector3:
    """Calculates the reflection vector R given the incident vector I and surface normal N.
       Assumes I points toward the surface"""
    return I - N * (2.0 * vector_dot(I, N))
