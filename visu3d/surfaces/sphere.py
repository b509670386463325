from __future__ import annotations

import math

from visu3d.errors import GeometryError
from visu3d.typings.color import Color
from visu3d.typings.impact import Impact
from visu3d.utils.vector_operations import EPSILON, Point3, Vector3, vector_dot


class Sphere:
    def __init__(self, center: Point3, radius: float, color: Color, reflectivity: float = 0.0) -> None:
        if radius <= 0.0:
            raise GeometryError("Sphere radius must be positive, got {}".format(radius))
        self.center: Point3 = center
        self.radius: float = float(radius)
        self.color: Color = color
        self.reflectivity: float = float(reflectivity)

    def intersect(self, origin: Point3, direction: Vector3) -> Impact | None:
        # X is the foot of the perpendicular from the center onto the ray; origin, X and
        # the center form a right triangle, and so do X, the center and each crossing point.
        to_center = self.center - origin
        projection = vector_dot(to_center, direction)  # signed length origin -> X
        perpendicular_squared = to_center.squared_norm() - projection * projection
        radius_squared = self.radius * self.radius
        if perpendicular_squared > radius_squared:
            return None

        half_chord = math.sqrt(max(radius_squared - perpendicular_squared, 0.0))
        t_near = projection - half_chord
        t_far = projection + half_chord

        # origin inside the sphere: the near crossing is behind, keep the far one
        hit_distance = t_near if t_near > EPSILON else t_far
        if hit_distance <= EPSILON:
            return None

        hit_point = origin + direction * hit_distance
        surface_normal = (hit_point - self.center).normalize()
        return Impact(
            position=hit_point,
            squared_distance=hit_distance * hit_distance,
            normal=surface_normal,
            color=self.color,
            reflectivity=self.reflectivity,
        )

    def __str__(self) -> str:
        return (
            "Sphere\n"
            f"  center       : {self.center}\n"
            f"  radius       : {self.radius}\n"
            f"  color        : {self.color}\n"
            f"  reflectivity : {self.reflectivity}"
        )
