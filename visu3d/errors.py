from __future__ import annotations


class Visu3dError(Exception):
    """Base class for every error raised by visu3d."""


class ConfigurationError(Visu3dError):
    """Missing or malformed scene description, or an unusable file path."""


class ParseError(ConfigurationError, ValueError):
    """Text that should describe a vector, a color or a list of points does not."""


class GeometryError(Visu3dError, ValueError):
    """Degenerate geometry: non-orthogonal camera basis, malformed rectangle, ..."""


class DegenerateVectorError(GeometryError, ZeroDivisionError):
    """Raised when normalizing a vector whose length is (almost) zero."""
