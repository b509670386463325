from __future__ import annotations

from visu3d.errors import GeometryError
from visu3d.typings.color import WHITE, Color
from visu3d.typings.impact import Impact
from visu3d.utils.vector_operations import EPSILON, Point3, Vector3

_AXIS_NORMALS = (
    (Vector3(-1.0, 0.0, 0.0), Vector3(1.0, 0.0, 0.0)),
    (Vector3(0.0, -1.0, 0.0), Vector3(0.0, 1.0, 0.0)),
    (Vector3(0.0, 0.0, -1.0), Vector3(0.0, 0.0, 1.0)),
)


class Cube:
    """Axis-aligned cube given by its center and edge length."""

    def __init__(self, center: Point3, size: float, color: Color = WHITE, reflectivity: float = 0.0) -> None:
        if size <= 0.0:
            raise GeometryError("Cube size must be positive, got {}".format(size))
        self.center: Point3 = center
        self.size: float = float(size)
        self.color: Color = color
        self.reflectivity: float = float(reflectivity)

    def intersect(self, origin: Point3, direction: Vector3) -> Impact | None:
        ray_origin = (origin.x, origin.y, origin.z)
        ray_direction = (direction.x, direction.y, direction.z)
        center = (self.center.x, self.center.y, self.center.z)
        half_size = 0.5 * self.size
        t_entry = -float("inf")
        t_exit = float("inf")
        entry_normal: Vector3 | None = None
        exit_normal: Vector3 | None = None

        for axis in range(3):
            box_min = center[axis] - half_size
            box_max = center[axis] + half_size
            if abs(ray_direction[axis]) < EPSILON:
                if ray_origin[axis] < box_min or ray_origin[axis] > box_max:
                    return None
                continue

            inverse_direction = 1.0 / ray_direction[axis]
            t_near = (box_min - ray_origin[axis]) * inverse_direction
            t_far = (box_max - ray_origin[axis]) * inverse_direction
            near_normal, far_normal = _AXIS_NORMALS[axis]
            if t_near > t_far:
                t_near, t_far = t_far, t_near
                near_normal, far_normal = far_normal, near_normal

            if t_near > t_entry:
                t_entry, entry_normal = t_near, near_normal
            if t_far < t_exit:
                t_exit, exit_normal = t_far, far_normal
            if t_exit < t_entry:
                return None

        if t_exit <= EPSILON:
            return None

        # origin inside the cube: the ray leaves through the exit face
        if t_entry > EPSILON:
            hit_distance, surface_normal = t_entry, entry_normal
        else:
            hit_distance, surface_normal = t_exit, exit_normal

        hit_point = origin + direction * hit_distance
        return Impact(
            position=hit_point,
            squared_distance=hit_distance * hit_distance,
            normal=surface_normal,
            color=self.color,
            reflectivity=self.reflectivity,
        )

    def __str__(self) -> str:
        return (
            "Cube\n"
            f"  center       : {self.center}\n"
            f"  size         : {self.size}\n"
            f"  color        : {self.color}\n"
            f"  reflectivity : {self.reflectivity}"
        )
