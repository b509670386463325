"""Shared fixtures: small textures written to disk and a few scene building blocks."""

import json

import numpy as np
import pytest
from PIL import Image as PILImage

from visu3d.camera import Camera
from visu3d.utils.image import Image
from visu3d.utils.vector_operations import Point3, Vector3


def write_png(path, pixels):
    PILImage.fromarray(np.asarray(pixels, dtype=np.uint8)).save(str(path))
    return str(path)


@pytest.fixture
def quadrant_pixels():
    """4x4 texture: red top-left, green top-right, blue bottom-left, white bottom-right."""
    pixels = np.zeros((4, 4, 3), dtype=np.uint8)
    pixels[:2, :2] = (255, 0, 0)
    pixels[:2, 2:] = (0, 255, 0)
    pixels[2:, :2] = (0, 0, 255)
    pixels[2:, 2:] = (255, 255, 255)
    return pixels


@pytest.fixture
def quadrant_texture(quadrant_pixels):
    return Image.from_array(quadrant_pixels)


@pytest.fixture
def quadrant_png(tmp_path, quadrant_pixels):
    return write_png(tmp_path / "quadrants.png", quadrant_pixels)


@pytest.fixture
def front_camera():
    """Eye at the origin looking along +x with +z up, 4x4 image."""
    return Camera(Point3(0, 0, 0), Vector3(1, 0, 0), Vector3(0, 0, 1), 1.0, 4, 4)


@pytest.fixture
def write_scene(tmp_path):
    def _write(description, name="scene.json"):
        path = tmp_path / name
        path.write_text(json.dumps(description), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def minimal_description():
    return {
        "RayTracer": {"nbMaxReflexions": 1, "multithread": False},
        "Camera": {
            "position": "(0, 0, 0)",
            "orientationRegard": "(1, 0, 0)",
            "orientationVersLeHaut": "(0, 0, 1)",
            "distanceOeilEcran": 1.0,
            "largeurImage": 6,
            "hauteurImage": 4,
            "fichier": "out.png",
        },
        "Scene": {
            "Visibles": [
                {"type": "Sphere", "centre": "(5, 0, 0)", "rayon": 1.0, "couleur": "rouge"},
            ],
            "Fond": {"type": "Monochrome", "couleur": "bleu"},
        },
    }
