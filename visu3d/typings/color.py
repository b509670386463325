from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import numpy as np

from visu3d.errors import ParseError
from visu3d.utils.vector_operations import Vector3, parse_triple


def _clamp_channel(value: float) -> int:
    # int() truncates toward zero, like the 8-bit conversion of the scene format
    return max(0, min(255, int(value)))


@dataclass(frozen=True, slots=True)
class Color:
    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue):
            if not 0 <= channel <= 255:
                raise ValueError("Color channel out of range [0, 255]: {}".format(channel))

    @classmethod
    def from_int(cls, rgb: int) -> Color:
        return cls((rgb >> 16) & 0xFF, (rgb >> 8) & 0xFF, rgb & 0xFF)

    @classmethod
    def from_vector(cls, v: Vector3) -> Color:
        return cls(_clamp_channel(v.x), _clamp_channel(v.y), _clamp_channel(v.z))

    @classmethod
    def parse(cls, text: str) -> Color:
        """Named color ("rouge", "gris", ...) or a literal "(r, g, b)" triple."""
        named = NAMED_COLORS.get(text.strip()) if isinstance(text, str) else None
        if named is not None:
            return named
        red, green, blue = parse_triple(text)
        try:
            return cls(int(red), int(green), int(blue))
        except (ValueError, OverflowError) as exc:
            raise ParseError("Invalid color {!r}: {}".format(text, exc)) from exc

    def to_int(self) -> int:
        return (self.red << 16) + (self.green << 8) + self.blue

    def to_vector(self) -> Vector3:
        return Vector3(float(self.red), float(self.green), float(self.blue))

    def to_array(self) -> np.ndarray:
        return np.array((self.red, self.green, self.blue), dtype=np.uint8)

    def scaled(self, factor: float) -> Color:
        return Color.from_vector(self.to_vector() * factor)

    def __str__(self) -> str:
        return "Color({}, {}, {})".format(self.red, self.green, self.blue)


def blend_colors(first: Color, second: Color, weight: float) -> Color:
    """(1 - weight) * first + weight * second, channel by channel."""
    mixed = first.to_vector() * (1.0 - weight) + second.to_vector() * weight
    return Color.from_vector(mixed)


NAMED_COLORS: Dict[str, Color] = {
    "blanc": Color(255, 255, 255),
    "noir": Color(0, 0, 0),
    "rouge": Color(255, 0, 0),
    "vert": Color(0, 255, 0),
    "bleu": Color(0, 0, 255),
    "cyan": Color(0, 255, 255),
    "jaune": Color(255, 255, 0),
    "magenta": Color(255, 0, 255),
    "orange": Color(237, 127, 16),
    "rose": Color(253, 108, 158),
    "mauve": Color(212, 115, 212),
    "turquoise": Color(37, 253, 233),
    "violet": Color(102, 0, 153),
    "gris": Color(96, 96, 96),
    "argent": Color(206, 206, 206),
    "brun": Color(91, 60, 17),
    "beige": Color(200, 173, 127),
}

WHITE: Color = NAMED_COLORS["blanc"]
