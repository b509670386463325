import logging

from visu3d.camera import Camera
from visu3d.errors import ConfigurationError, DegenerateVectorError, GeometryError, ParseError, Visu3dError
from visu3d.render_settings import RenderSettings
from visu3d.renderer import RayTracer
from visu3d.scene import Scene
from visu3d.scene_parser import parse_scene_file
from visu3d.typings.color import Color
from visu3d.typings.impact import INFINITE_DISTANCE, Impact
from visu3d.utils.image import Image
from visu3d.utils.vector_operations import EPSILON, Point3, Vector3

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Camera",
    "Color",
    "ConfigurationError",
    "DegenerateVectorError",
    "EPSILON",
    "GeometryError",
    "INFINITE_DISTANCE",
    "Image",
    "Impact",
    "ParseError",
    "Point3",
    "RayTracer",
    "RenderSettings",
    "Scene",
    "Vector3",
    "Visu3dError",
    "parse_scene_file",
]
