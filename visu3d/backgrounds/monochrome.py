from visu3d.typings.color import Color
from visu3d.typings.impact import Impact
from visu3d.utils.vector_operations import Vector3


class MonochromeBackground:
    """Same color in every direction."""

    def __init__(self, color: Color) -> None:
        self.color: Color = color

    def map_direction(self, direction: Vector3) -> Impact:
        return Impact.color_only(self.color)

    def __str__(self) -> str:
        return f"Monochrome background {self.color}"
