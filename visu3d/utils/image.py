from __future__ import annotations

import math
import os
from typing import Dict

import numpy as np
from PIL import Image as PILImage

from visu3d.errors import ConfigurationError
from visu3d.typings.color import Color
from visu3d.utils.vector_operations import EPSILON

# output extension -> Pillow format name
SUPPORTED_FORMATS: Dict[str, str] = {
    "png": "PNG",
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "gif": "GIF",
    "bmp": "BMP",
}


def check_output_path(output_path: str) -> str:
    """Returns the Pillow format matching the extension of output_path."""
    extension = os.path.splitext(output_path)[1].lstrip(".").lower()
    image_format = SUPPORTED_FORMATS.get(extension)
    if image_format is None:
        raise ConfigurationError(
            "Unsupported image format '{}' for '{}' (expected one of: {})".format(
                extension, output_path, ", ".join(sorted(SUPPORTED_FORMATS))
            )
        )
    return image_format


class Image:
    """RGB pixel buffer, rows x columns x 3 bytes.

    Used both for rendered output and for textures. Pixels are addressed as
    (column, row) with (0, 0) the top-left corner.
    """

    def __init__(self, columns: int, rows: int) -> None:
        if columns <= 0 or rows <= 0:
            raise ValueError("Image dimensions must be positive, got {}x{}".format(columns, rows))
        self.pixels: np.ndarray = np.zeros((rows, columns, 3), dtype=np.uint8)

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> Image:
        array = np.asarray(pixels, dtype=np.uint8)
        if array.ndim != 3 or array.shape[2] != 3:
            raise ValueError("Expected a rows x columns x 3 array, got shape {}".format(array.shape))
        image = cls(array.shape[1], array.shape[0])
        image.pixels[...] = array
        return image

    @classmethod
    def open(cls, path: str) -> Image:
        try:
            with PILImage.open(path) as source:
                array = np.asarray(source.convert("RGB"), dtype=np.uint8)
        except OSError as exc:
            raise ConfigurationError("Cannot read image '{}': {}".format(path, exc)) from exc
        return cls.from_array(array)

    @property
    def columns(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def rows(self) -> int:
        return int(self.pixels.shape[0])

    def get_pixel(self, column: int, row: int) -> Color:
        red, green, blue = self.pixels[row, column]
        return Color(int(red), int(green), int(blue))

    def set_pixel(self, column: int, row: int, color: Color) -> None:
        self.pixels[row, column] = (color.red, color.green, color.blue)

    def set_row(self, row: int, values: np.ndarray) -> None:
        self.pixels[row, :, :] = values

    def color_at(self, u: float, v: float) -> Color:
        """Color at relative coordinates, u left to right and v top to bottom, both in [0, 1)."""
        if not (0.0 <= u < 1.0 and 0.0 <= v < 1.0):
            raise ValueError("Relative coordinates must lie in [0, 1), got ({}, {})".format(u, v))
        column = int(math.floor(u * self.columns))
        row = int(math.floor(v * self.rows))
        return self.get_pixel(column, row)

    def row_average(self, row: int) -> Color:
        mean = self.pixels[row].astype(float).mean(axis=0)
        return Color(int(mean[0]), int(mean[1]), int(mean[2]))

    def save(self, output_path: str) -> None:
        image_format = check_output_path(output_path)
        try:
            PILImage.fromarray(self.pixels).save(output_path, format=image_format)
        except OSError as exc:
            raise ConfigurationError("Cannot write image '{}': {}".format(output_path, exc)) from exc


def clamp_relative(value: float) -> float:
    """Pulls a relative texture coordinate into [0, 1); 1.0 becomes 1 - EPSILON."""
    if value >= 1.0:
        return 1.0 - EPSILON
    if value < 0.0:
        return 0.0
    return value
