from visu3d.backgrounds.cubic import CubicBackground
from visu3d.backgrounds.cylindrical import CylindricalBackground
from visu3d.backgrounds.monochrome import MonochromeBackground
from visu3d.backgrounds.spherical import SphericalBackground

__all__ = ["CubicBackground", "CylindricalBackground", "MonochromeBackground", "SphericalBackground"]
