from __future__ import annotations

from typing import Dict, Optional, Tuple

from visu3d.typings.impact import Impact
from visu3d.utils.image import Image, clamp_relative
from visu3d.utils.vector_operations import Vector3

FACE_NAMES: Tuple[str, ...] = ("devant", "derriere", "gauche", "droite", "haut", "bas")

# normal of each face, pointing back towards the viewer at the center of the cube
FACE_NORMALS: Dict[str, Vector3] = {
    "devant": Vector3(-1.0, 0.0, 0.0),
    "derriere": Vector3(1.0, 0.0, 0.0),
    "droite": Vector3(0.0, -1.0, 0.0),
    "gauche": Vector3(0.0, 1.0, 0.0),
    "haut": Vector3(0.0, 0.0, -1.0),
    "bas": Vector3(0.0, 0.0, 1.0),
}


class CubicBackground:
    """Six textures on the faces of a cube surrounding the scene.

    Each face covers a sixth of the horizon and faces one axis:
      ( 1, 0, 0) hits the center of `devant`     (-1, 0, 0) the center of `derriere`
      ( 0, 1, 0) hits the center of `droite`     ( 0,-1, 0) the center of `gauche`
      ( 0, 0, 1) hits the center of `haut`       ( 0, 0,-1) the center of `bas`
    """

    def __init__(self, faces: Dict[str, Image], sources: Optional[Dict[str, str]] = None) -> None:
        missing = [name for name in FACE_NAMES if name not in faces]
        if missing:
            raise ValueError("Cubic background is missing faces: {}".format(", ".join(missing)))
        self.faces: Dict[str, Image] = dict(faces)
        self.sources: Dict[str, str] = dict(sources or {})

    @classmethod
    def from_single_image(cls, image: Image, source: Optional[str] = None) -> CubicBackground:
        sources = {name: source for name in FACE_NAMES} if source is not None else None
        return cls({name: image for name in FACE_NAMES}, sources)

    @staticmethod
    def face_coordinates(direction: Vector3) -> Tuple[str, float, float]:
        """Face hit by direction and the relative (u, v) coordinates on that face."""
        x, y, z = direction.x, direction.y, direction.z
        abs_x, abs_y, abs_z = abs(x), abs(y), abs(z)

        # rotate the direction so that the selected face becomes the front face
        if abs_x >= max(abs_y, abs_z):
            face, front = ("devant", (x, y, z)) if x > 0.0 else ("derriere", (-x, y, z))
        elif abs_y >= max(abs_x, abs_z):
            face, front = ("droite", (y, -x, z)) if y > 0.0 else ("gauche", (-y, x, z))
        else:
            face, front = ("haut", (z, y, -x)) if z > 0.0 else ("bas", (-z, y, x))

        front_x, front_y, front_z = front
        u = clamp_relative((front_y / front_x + 1.0) / 2.0)
        v = clamp_relative((1.0 - front_z / front_x) / 2.0)
        return face, u, v

    def map_direction(self, direction: Vector3) -> Impact:
        face, u, v = self.face_coordinates(direction)
        return Impact.color_and_normal(self.faces[face].color_at(u, v), FACE_NORMALS[face])

    def __str__(self) -> str:
        lines = ["Cubic background"]
        for name in FACE_NAMES:
            lines.append(f"  {name:<9}: \"{self.sources.get(name)}\"")
        return "\n".join(lines)
