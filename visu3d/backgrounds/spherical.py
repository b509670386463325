from __future__ import annotations

from typing import Optional

from visu3d.typings.impact import Impact
from visu3d.utils.image import Image, clamp_relative
from visu3d.utils.vector_operations import Vector3


class SphericalBackground:
    """Two textures, one per hemisphere (z >= 0 above, z < 0 below).

    A direction samples its hemisphere's texture at (0.5 + x/2, 0.5 + y/2),
    which flattens the hemisphere onto the image and distorts near the horizon.
    """

    def __init__(
        self,
        upper: Image,
        lower: Image,
        upper_source: Optional[str] = None,
        lower_source: Optional[str] = None,
    ) -> None:
        self.upper: Image = upper
        self.lower: Image = lower
        self.upper_source = upper_source
        self.lower_source = lower_source

    def map_direction(self, direction: Vector3) -> Impact:
        texture = self.upper if direction.z >= 0.0 else self.lower
        u = clamp_relative(0.5 + direction.x / 2.0)
        v = clamp_relative(0.5 + direction.y / 2.0)
        return Impact.color_only(texture.color_at(u, v))

    def __str__(self) -> str:
        return (
            "Spherical background\n"
            f"  upper image : \"{self.upper_source}\"\n"
            f"  lower image : \"{self.lower_source}\""
        )
