from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from visu3d.typings.color import Color
from visu3d.utils.vector_operations import Point3, Vector3

# squared distance reported by background impacts, never beaten by a real hit
INFINITE_DISTANCE: float = math.inf


@dataclass(frozen=True, slots=True)
class Impact:
    """Everything known about the point where a ray meets an object or the background.

    The distance is stored squared so that comparing two impacts never needs a square root.
    """

    position: Optional[Point3]
    squared_distance: float
    normal: Optional[Vector3]
    color: Color
    reflectivity: float = 0.0

    @classmethod
    def color_only(cls, color: Color) -> Impact:
        return cls(None, INFINITE_DISTANCE, None, color, 0.0)

    @classmethod
    def color_and_normal(cls, color: Color, normal: Vector3) -> Impact:
        return cls(None, INFINITE_DISTANCE, normal, color, 0.0)

    @property
    def is_finite(self) -> bool:
        return self.squared_distance != INFINITE_DISTANCE

    def __str__(self) -> str:
        return (
            "Impact\n"
            f"  position     : {self.position}\n"
            f"  distance     : {math.sqrt(self.squared_distance)}\n"
            f"  normal       : {self.normal}\n"
            f"  color        : {self.color}\n"
            f"  reflectivity : {self.reflectivity}"
        )
