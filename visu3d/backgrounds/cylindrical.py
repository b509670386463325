from __future__ import annotations

import math
from typing import Optional

from visu3d.typings.impact import Impact
from visu3d.utils.image import Image, clamp_relative
from visu3d.utils.vector_operations import Vector3


class CylindricalBackground:
    """Texture wrapped around a vertical cylinder centered on the scene.

    Directions within 45 degrees of the horizon read the texture; steeper
    directions get the average color of the texture's top or bottom row.
    The projection is known to stretch the texture vertically.
    """

    def __init__(self, image: Image, source: Optional[str] = None) -> None:
        self.image: Image = image
        self.source: Optional[str] = source
        self.top_average = image.row_average(0)
        self.bottom_average = image.row_average(image.rows - 1)

    def map_direction(self, direction: Vector3) -> Impact:
        x, y, z = direction.x, direction.y, direction.z
        if z * z < x * x + y * y:
            u = clamp_relative((math.atan2(y, x) + math.pi) / (2.0 * math.pi))
            v = clamp_relative((1.0 - z / math.sqrt(x * x + y * y + z * z)) / 2.0)
            color = self.image.color_at(u, v)
        elif z > 0.0:
            color = self.top_average
        else:
            color = self.bottom_average
        return Impact.color_only(color)

    def __str__(self) -> str:
        return f"Cylindrical background\n  image : \"{self.source}\""
