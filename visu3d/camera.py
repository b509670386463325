from __future__ import annotations

import math

from visu3d.errors import GeometryError
from visu3d.utils.vector_operations import EPSILON, Point3, Vector3, normalize_vector, vector_cross, vector_dot


class Camera:
    """Eye position, viewing orientation, and the screen the image is projected on.

    The camera computes no colors. It only tells the ray tracer where each
    pixel sits in the scene. The screen always has area 1: a short eye to
    screen distance gives a wide angle, a long one zooms in.

                                   horizontal
           |------------------------------------------->
          top_left                          x
       -   +-------------------------------------------+
       |   |                                |          |
       |  y| -  -  -  -  -  -  -  -  -  -  -+          |
       |   |                                           |
  vertical |                                           |
       |   |                                           |
       V   +-------------------------------------------+
    """

    def __init__(
        self,
        position: Point3,
        look_direction: Vector3,
        up_direction: Vector3,
        screen_distance: float,
        columns: int,
        rows: int,
        output_path: str | None = None,
    ) -> None:
        if screen_distance <= 0.0:
            raise GeometryError("Screen distance must be positive, got {}".format(screen_distance))
        if columns <= 0 or rows <= 0:
            raise GeometryError("Image resolution must be positive, got {}x{}".format(columns, rows))

        self.position: Point3 = position
        self.look_direction: Vector3 = normalize_vector(look_direction)
        self.up_direction: Vector3 = normalize_vector(up_direction)
        if abs(vector_dot(self.look_direction, self.up_direction)) > EPSILON:
            raise GeometryError(
                "Camera up direction {} must be orthogonal to look direction {}".format(
                    up_direction, look_direction
                )
            )

        self.screen_distance: float = float(screen_distance)
        self.columns: int = int(columns)
        self.rows: int = int(rows)
        self.output_path = output_path

        self._compute_screen()

    def _compute_screen(self) -> None:
        """Screen size keeps the image aspect ratio with width * height = 1."""
        screen_width = math.sqrt(self.columns / float(self.rows))
        screen_height = 1.0 / screen_width

        # left to right along the top edge, then top to bottom along the left edge
        horizontal = vector_cross(self.up_direction, self.look_direction)
        horizontal = horizontal * (screen_width / horizontal.norm())
        vertical = self.up_direction * (-screen_height)

        screen_center = self.position + self.look_direction * self.screen_distance

        self.screen_width: float = screen_width
        self.screen_height: float = screen_height
        self.horizontal: Vector3 = horizontal
        self.vertical: Vector3 = vertical
        self.top_left: Point3 = screen_center + horizontal * (-0.5) + vertical * (-0.5)

    def pixel_position(self, column: int, row: int) -> Point3:
        """Center of pixel (column, row) on the screen, in scene coordinates."""
        x = (column + 0.5) / self.columns
        y = (row + 0.5) / self.rows
        return self.top_left + self.horizontal * x + self.vertical * y

    def pixel_direction(self, column: int, row: int) -> Vector3:
        return normalize_vector(self.pixel_position(column, row) - self.position)

    def __str__(self) -> str:
        return (
            "Camera\n"
            f"  position        : {self.position}\n"
            f"  look direction  : {self.look_direction}\n"
            f"  up direction    : {self.up_direction}\n"
            f"  screen distance : {self.screen_distance:.2f}\n"
            f"  resolution      : {self.columns}x{self.rows}\n"
            f"  screen size     : {self.screen_width:.2f}x{self.screen_height:.2f}\n"
            f"  top left        : {self.top_left}\n"
            f"  horizontal      : {self.horizontal}\n"
            f"  vertical        : {self.vertical}"
        )
