from visu3d.utils.vector_operations import Point3


class Light:
    """Point light owned by a scene. Shading only uses the view angle, lights are carried for later use."""

    def __init__(self, position: Point3, intensity: float = 1.0) -> None:
        self.position: Point3 = position
        self.intensity: float = float(intensity)

    def __str__(self) -> str:
        return f"Light at {self.position}, intensity {self.intensity:.2f}"
