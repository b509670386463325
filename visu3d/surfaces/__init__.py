from visu3d.surfaces.cube import Cube
from visu3d.surfaces.rectangle import Rectangle
from visu3d.surfaces.sphere import Sphere

__all__ = ["Cube", "Rectangle", "Sphere"]
