from __future__ import annotations

import json
import os
import re
from typing import Any, Dict, List, Tuple

from visu3d.backgrounds import CubicBackground, CylindricalBackground, MonochromeBackground, SphericalBackground
from visu3d.backgrounds.cubic import FACE_NAMES
from visu3d.camera import Camera
from visu3d.errors import ConfigurationError, GeometryError, ParseError
from visu3d.render_settings import RenderSettings
from visu3d.scene import Scene
from visu3d.surfaces import Cube, Rectangle, Sphere
from visu3d.typings.color import WHITE, Color
from visu3d.typings.light import Light
from visu3d.typings.visible import Background, Visible
from visu3d.utils.image import Image
from visu3d.utils.vector_operations import Point3, Vector3

JsonObject = Dict[str, Any]

# one "(x, y, z)" group with the blanks around it
_POINT_PATTERN = re.compile(r"\s*(\([^()]*\))\s*")

# accepted spellings of each background type
_BACKGROUND_TYPES: Dict[str, str] = {
    "Monochrome": "Monochrome",
    "Cubique": "Cubique",
    "Cubic": "Cubique",
    "Cylindrique": "Cylindrique",
    "Cylindrical": "Cylindrique",
    "Spherique": "Spherique",
    "Spherical": "Spherique",
}


def _require(data: JsonObject, field: str, section: str) -> Any:
    value = _as_object(data, section).get(field)
    if value is None:
        raise ConfigurationError("{}: missing required field `{}`".format(section, field))
    return value


def _as_object(value: Any, section: str) -> JsonObject:
    if not isinstance(value, dict):
        raise ConfigurationError("{}: expected a JSON object, got {!r}".format(section, value))
    return value


def _as_list(value: Any, field: str, section: str) -> List[Any]:
    if not isinstance(value, list):
        raise ConfigurationError("{}: field `{}` must be a list, got {!r}".format(section, field, value))
    return value


def _as_number(value: Any, field: str, section: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError("{}: field `{}` must be a number, got {!r}".format(section, field, value))
    return float(value)


def _as_integer(value: Any, field: str, section: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError("{}: field `{}` must be an integer, got {!r}".format(section, field, value))
    return value


def _as_string(value: Any, field: str, section: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError("{}: field `{}` must be a string, got {!r}".format(section, field, value))
    return value


def _resolve(path: str, base_dir: str) -> str:
    return path if os.path.isabs(path) else os.path.join(base_dir, path)


def _load_texture(data: JsonObject, field: str, section: str, base_dir: str) -> Tuple[Image, str]:
    path = _as_string(_require(data, field, section), field, section)
    return Image.open(_resolve(path, base_dir)), path


def parse_point_list(text: str) -> List[Point3]:
    """Reads "[(x, y, z), (x, y, z), ...]"."""
    if not isinstance(text, str):
        raise ParseError("Expected a '[(x, y, z), ...]' string, got {!r}".format(text))
    stripped = text.strip()
    if not (stripped.startswith("[") and stripped.endswith("]")):
        raise ParseError("Point list {!r} must start with '[' and end with ']'".format(text))
    inner = stripped[1:-1]
    if not inner.strip():
        return []

    # groups must be separated by exactly one comma, with nothing else in between
    points = []
    position = 0
    while True:
        match = _POINT_PATTERN.match(inner, position)
        if match is None:
            raise ParseError("Malformed point list {!r} near position {}".format(text, position + 1))
        points.append(Point3.parse(match.group(1)))
        position = match.end()
        if position == len(inner):
            return points
        if inner[position] != ",":
            raise ParseError("Expected ',' between points in {!r}".format(text))
        position += 1


def parse_render_settings(data: JsonObject | None) -> RenderSettings:
    data = _as_object(data, "RayTracer") if data is not None else {}
    max_reflections = 0
    multithread = True
    if data.get("nbMaxReflexions") is not None:
        max_reflections = _as_integer(data["nbMaxReflexions"], "nbMaxReflexions", "RayTracer")
    if data.get("multithread") is not None:
        multithread = data["multithread"]
        if not isinstance(multithread, bool):
            raise ConfigurationError("RayTracer: field `multithread` must be true or false")
    return RenderSettings(max_reflections, multithread)


def parse_camera(data: JsonObject, base_dir: str = ".") -> Camera:
    section = "Camera"
    position = Point3.parse(_require(data, "position", section))
    look_direction = Vector3.parse(_require(data, "orientationRegard", section))
    up_direction = Vector3.parse(_require(data, "orientationVersLeHaut", section))
    screen_distance = _as_number(_require(data, "distanceOeilEcran", section), "distanceOeilEcran", section)
    columns = _as_integer(_require(data, "largeurImage", section), "largeurImage", section)
    rows = _as_integer(_require(data, "hauteurImage", section), "hauteurImage", section)
    output_path = _as_string(_require(data, "fichier", section), "fichier", section)
    return Camera(
        position,
        look_direction,
        up_direction,
        screen_distance,
        columns,
        rows,
        _resolve(output_path, base_dir),
    )


def _reflectivity(data: JsonObject, section: str) -> float:
    if data.get("reflexivite") is None:
        return 0.0
    reflectivity = _as_number(data["reflexivite"], "reflexivite", section)
    if not 0.0 <= reflectivity <= 1.0:
        raise ConfigurationError("{}: `reflexivite` must lie in [0, 1], got {}".format(section, reflectivity))
    return reflectivity


def parse_sphere(data: JsonObject, base_dir: str = ".") -> Sphere:
    section = "Sphere"
    center = Point3.parse(_require(data, "centre", section))
    radius = _as_number(_require(data, "rayon", section), "rayon", section)
    color = Color.parse(_require(data, "couleur", section))
    return Sphere(center, radius, color, _reflectivity(data, section))


def parse_cube(data: JsonObject, base_dir: str = ".") -> Cube:
    section = "Cube"
    center = Point3.parse(_require(data, "centre", section))
    size = _as_number(_require(data, "size", section), "size", section)
    color = Color.parse(data["couleur"]) if data.get("couleur") is not None else WHITE
    return Cube(center, size, color, _reflectivity(data, section))


def parse_rectangle(data: JsonObject, base_dir: str = ".") -> Rectangle:
    section = "Rectangle"
    points = parse_point_list(_require(data, "points", section))
    if len(points) != 4:
        raise ConfigurationError("{}: `points` must contain exactly 4 points, got {}".format(section, len(points)))
    color = Color.parse(_require(data, "couleur", section))
    texture = texture_path = None
    if data.get("texture") is not None:
        texture, texture_path = _load_texture(data, "texture", section, base_dir)
    return Rectangle(*points, color, _reflectivity(data, section), texture, texture_path)


_VISIBLE_PARSERS = {
    "Sphere": parse_sphere,
    "Cube": parse_cube,
    "Rectangle": parse_rectangle,
}


def parse_visible(data: JsonObject, base_dir: str = ".") -> Visible:
    visible_type = _as_string(_require(data, "type", "Visible"), "type", "Visible")
    parser = _VISIBLE_PARSERS.get(visible_type)
    if parser is None:
        raise GeometryError("Unknown visible type: {}".format(visible_type))
    return parser(data, base_dir)


def parse_background(data: JsonObject, base_dir: str = ".") -> Background:
    section = "Fond"
    background_type = _BACKGROUND_TYPES.get(_as_string(_require(data, "type", section), "type", section))
    if background_type is None:
        raise GeometryError("Unknown background type: {}".format(data.get("type")))

    if background_type == "Monochrome":
        return MonochromeBackground(Color.parse(_require(data, "couleur", section)))

    if background_type == "Cubique":
        if all(data.get(name) is not None for name in FACE_NAMES):
            faces = {}
            sources = {}
            for name in FACE_NAMES:
                faces[name], sources[name] = _load_texture(data, name, section, base_dir)
            return CubicBackground(faces, sources)
        if data.get("image") is not None:
            image, source = _load_texture(data, "image", section, base_dir)
            return CubicBackground.from_single_image(image, source)
        raise ConfigurationError(
            "{}: cubic background requires `image` or all of `{}`".format(section, "/".join(FACE_NAMES))
        )

    if background_type == "Cylindrique":
        image, source = _load_texture(data, "image", section, base_dir)
        return CylindricalBackground(image, source)

    upper, upper_source = _load_texture(data, "dessus", section, base_dir)
    lower, lower_source = _load_texture(data, "dessous", section, base_dir)
    return SphericalBackground(upper, lower, upper_source, lower_source)


def parse_light(data: JsonObject) -> Light:
    section = "Lumiere"
    data = _as_object(data, section)
    position = Point3.parse(_require(data, "position", section))
    intensity = 1.0
    if data.get("intensite") is not None:
        intensity = _as_number(data["intensite"], "intensite", section)
    return Light(position, intensity)


def parse_scene(data: JsonObject | None, base_dir: str = ".") -> Scene:
    data = _as_object(data, "Scene") if data is not None else {}
    scene = Scene()
    if data.get("Visibles") is not None:
        for visible_data in _as_list(data["Visibles"], "Visibles", "Scene"):
            scene.add(parse_visible(visible_data, base_dir))

    if data.get("Fond") is not None:
        scene.background = parse_background(_as_object(data["Fond"], "Fond"), base_dir)

    light_field = "Lumieres" if data.get("Lumieres") is not None else "Lumière"
    if data.get(light_field) is not None:
        for light_data in _as_list(data[light_field], light_field, "Scene"):
            scene.add_light(parse_light(light_data))
    return scene


def parse_description(description: JsonObject, base_dir: str = ".") -> Tuple[RenderSettings, Camera, Scene]:
    if not isinstance(description, dict):
        raise ConfigurationError("Scene description must be a JSON object")
    settings = parse_render_settings(description.get("RayTracer"))
    camera = parse_camera(_require(description, "Camera", "description"), base_dir)
    scene = parse_scene(description.get("Scene"), base_dir)
    return settings, camera, scene


def parse_scene_file(file_path: str) -> Tuple[RenderSettings, Camera, Scene]:
    """Reads a JSON scene description. Relative paths inside it are relative to the file."""
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            description = json.load(f)
    except OSError as exc:
        raise ConfigurationError("Cannot read scene file '{}': {}".format(file_path, exc)) from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError("Invalid JSON in '{}': {}".format(file_path, exc)) from exc
    return parse_description(description, os.path.dirname(os.path.abspath(file_path)))
