from __future__ import annotations

from typing import List

from visu3d.backgrounds.monochrome import MonochromeBackground
from visu3d.typings.color import WHITE
from visu3d.typings.impact import INFINITE_DISTANCE, Impact
from visu3d.typings.light import Light
from visu3d.typings.visible import Background, Visible
from visu3d.utils.vector_operations import Point3, Vector3


class Scene:
    """Visible objects, lights and one background.

    A new scene is empty and its background is plain white.
    """

    def __init__(self) -> None:
        self.visibles: List[Visible] = []
        self.lights: List[Light] = []
        self.background: Background = MonochromeBackground(WHITE)

    def add(self, visible: Visible) -> None:
        self.visibles.append(visible)

    def add_light(self, light: Light) -> None:
        self.lights.append(light)

    def intersect(self, origin: Point3, direction: Vector3) -> Impact:
        """Impact of the ray with the nearest visible object, or with the background.

        Objects are tested in insertion order and the first one wins ties.
        """
        nearest: Impact | None = None
        nearest_distance = INFINITE_DISTANCE
        for visible in self.visibles:
            impact = visible.intersect(origin, direction)
            if impact is None:
                continue
            if impact.squared_distance < nearest_distance:
                nearest = impact
                nearest_distance = impact.squared_distance

        if nearest is None:
            return self.background.map_direction(direction)
        return nearest

    def __str__(self) -> str:
        lines = [f"Scene with {len(self.visibles)} visible objects and {len(self.lights)} lights:"]
        for index, visible in enumerate(self.visibles, start=1):
            lines.append(f" Visible #{index} : {visible}")
        for index, light in enumerate(self.lights, start=1):
            lines.append(f" Light #{index} : {light}")
        lines.append(f" Background : {self.background}")
        return "\n".join(lines)
