from __future__ import annotations

from typing import Optional, Protocol

from visu3d.typings.impact import Impact
from visu3d.utils.vector_operations import Point3, Vector3


class Visible(Protocol):
    """Any object a ray can hit."""

    def intersect(self, origin: Point3, direction: Vector3) -> Optional[Impact]:
        """Nearest impact strictly in front of origin along the unit vector direction, or None."""
        ...


class Background(Protocol):
    """Color seen along a direction when no visible object is hit."""

    def map_direction(self, direction: Vector3) -> Impact:
        ...
