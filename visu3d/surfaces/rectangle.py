from __future__ import annotations

from typing import Optional

import numpy as np

from visu3d.errors import GeometryError
from visu3d.typings.color import Color
from visu3d.typings.impact import Impact
from visu3d.utils.image import Image
from visu3d.utils.vector_operations import EPSILON, Point3, Vector3, vector_cross, vector_dot


class Rectangle:
    """One-sided rectangle given by its four corners.

          p0
      -   +----------------------+ p3
      |   |                      |
      u   |                      |
      |   |                      |
      V   +----------------------+
        p1|--------- v ---------->p2

    u = p1 - p0 runs along the left edge and v = p2 - p1 along the bottom edge.
    The rectangle is only visible from the side its normal (v x u) points to.
    """

    def __init__(
        self,
        p0: Point3,
        p1: Point3,
        p2: Point3,
        p3: Point3,
        color: Color,
        reflectivity: float = 0.0,
        texture: Optional[Image] = None,
        texture_path: Optional[str] = None,
    ) -> None:
        self.corners = (p0, p1, p2, p3)
        self.vertical: Vector3 = p1 - p0
        self.horizontal: Vector3 = p2 - p1

        if abs(vector_dot(self.vertical, self.horizontal)) > EPSILON:
            raise GeometryError("Rectangle corners {}, {}, {} do not form a right angle".format(p0, p1, p2))
        if (p0 + self.horizontal - p3).squared_norm() > EPSILON:
            raise GeometryError("Fourth rectangle corner {} does not close the rectangle".format(p3))

        self.normal: Vector3 = vector_cross(self.horizontal, self.vertical).normalize()
        self.color: Color = color
        self.reflectivity: float = float(reflectivity)
        self.texture: Optional[Image] = texture
        self.texture_path: Optional[str] = texture_path

    def intersect(self, origin: Point3, direction: Vector3) -> Impact | None:
        # Back face: the rectangle cannot be seen from behind.
        if vector_dot(direction, self.normal) >= 0.0:
            return None

        # Points of the plane are p0 + a*u + b*v, points of the ray origin + t*d, t > 0.
        #   p0 + a*u + b*v = origin + t*d  <=>  [u v -d] . (a, b, t) = origin - p0
        system = np.column_stack(
            (self.vertical.as_array(), self.horizontal.as_array(), (-direction).as_array())
        )
        try:
            a, b, t = np.linalg.solve(system, (origin - self.corners[0]).as_array())
        except np.linalg.LinAlgError:
            return None

        if t <= EPSILON or not (0.0 <= a < 1.0 and 0.0 <= b < 1.0):
            return None

        hit_distance = float(t)
        hit_point = origin + direction * hit_distance
        color = self.color
        if self.texture is not None:
            color = self.texture.color_at(float(b), float(a))
        return Impact(
            position=hit_point,
            squared_distance=hit_distance * hit_distance,
            normal=self.normal,
            color=color,
            reflectivity=self.reflectivity,
        )

    def __str__(self) -> str:
        return (
            "Rectangle\n"
            f"  corners      : {', '.join(str(p) for p in self.corners)}\n"
            f"  normal       : {self.normal}\n"
            f"  color        : {self.color}\n"
            f"  texture      : {self.texture_path}\n"
            f"  reflectivity : {self.reflectivity}"
        )
