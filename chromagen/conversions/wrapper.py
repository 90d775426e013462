"""
Conversion Wrapper
==================

Single entry point for moving coordinates between any two ``ColorSpace`` tags.
Every space knows how to reach the CIE XYZ (D65) hub; a handful of direct
routes (HSL <-> sRGB, LAB <-> LCH, OKLAB <-> OKLCH) skip the hub to avoid
needless precision loss.
"""
from __future__ import annotations
from typing import Callable, Dict, Tuple, Union, cast
import numpy as np
from numpy import ndarray as NDArray

from boundednumbers.np_functions import clamp01

from ..types.color_types import ColorSpace, Coords, RGB_SPACES, coords_to_array
from .css_to_hsl import np_css_hsl_to_rgb, np_css_rgb_to_hsl
from .lab import np_lab_to_xyz, np_polar_to_rectangular, np_rectangular_to_polar, np_xyz_to_lab
from .oklab import np_oklab_to_xyz, np_xyz_to_oklab
from .rgb_spaces import np_rgb_to_xyz, np_xyz_to_linear_rgb, np_xyz_to_rgb

ArrayFn = Callable[[NDArray], NDArray]

# Linear channels may overshoot [0, 1] by float noise for colors on the gamut surface
GAMUT_EPSILON = 1e-6


def _rgb_route(space: ColorSpace) -> Tuple[ArrayFn, ArrayFn]:
    return (lambda c: np_rgb_to_xyz(c, space)), (lambda c: np_xyz_to_rgb(c, space))


TO_XYZ: Dict[ColorSpace, ArrayFn] = {}
FROM_XYZ: Dict[ColorSpace, ArrayFn] = {}

for _space in RGB_SPACES:
    TO_XYZ[_space], FROM_XYZ[_space] = _rgb_route(_space)

TO_XYZ.update({
    ColorSpace.XYZ: lambda c: np.asarray(c, dtype=np.float64),
    ColorSpace.HSL: lambda c: np_rgb_to_xyz(np_css_hsl_to_rgb(c), ColorSpace.SRGB),
    ColorSpace.LAB: np_lab_to_xyz,
    ColorSpace.LCH: lambda c: np_lab_to_xyz(np_polar_to_rectangular(c)),
    ColorSpace.OKLAB: np_oklab_to_xyz,
    ColorSpace.OKLCH: lambda c: np_oklab_to_xyz(np_polar_to_rectangular(c)),
})
FROM_XYZ.update({
    ColorSpace.XYZ: lambda c: np.asarray(c, dtype=np.float64),
    ColorSpace.HSL: lambda c: np_css_rgb_to_hsl(np_xyz_to_rgb(c, ColorSpace.SRGB)),
    ColorSpace.LAB: np_xyz_to_lab,
    ColorSpace.LCH: lambda c: np_rectangular_to_polar(np_xyz_to_lab(c)),
    ColorSpace.OKLAB: np_xyz_to_oklab,
    ColorSpace.OKLCH: lambda c: np_rectangular_to_polar(np_xyz_to_oklab(c)),
})

CONVERT_DIRECT: Dict[Tuple[ColorSpace, ColorSpace], ArrayFn] = {
    (ColorSpace.HSL, ColorSpace.SRGB): np_css_hsl_to_rgb,
    (ColorSpace.SRGB, ColorSpace.HSL): np_css_rgb_to_hsl,
    (ColorSpace.LAB, ColorSpace.LCH): np_rectangular_to_polar,
    (ColorSpace.LCH, ColorSpace.LAB): np_polar_to_rectangular,
    (ColorSpace.OKLAB, ColorSpace.OKLCH): np_rectangular_to_polar,
    (ColorSpace.OKLCH, ColorSpace.OKLAB): np_polar_to_rectangular,
}


def np_convert(
    color: NDArray,
    from_space: Union[ColorSpace, str],
    to_space: Union[ColorSpace, str],
) -> NDArray:
    """
    Vectorized conversion of coordinates between color spaces.

    Args:
        color: array of shape (..., 3) in ``from_space``
        from_space: source ColorSpace tag or alias
        to_space: destination ColorSpace tag or alias

    Returns:
        array of shape (..., 3) in ``to_space``; never clipped to any gamut
    """
    src = ColorSpace.parse(from_space)
    dst = ColorSpace.parse(to_space)
    arr = coords_to_array(color)

    if src == dst:
        return arr.copy()

    direct = CONVERT_DIRECT.get((src, dst))
    if direct is not None:
        return direct(arr)

    return FROM_XYZ[dst](TO_XYZ[src](arr))


def convert(
    color: Union[Coords, NDArray],
    from_space: Union[ColorSpace, str],
    to_space: Union[ColorSpace, str],
) -> Union[Coords, NDArray]:
    """
    Convert a color between spaces.

    Tuples come back as tuples of floats; arrays are delegated to ``np_convert``.
    """
    if isinstance(color, NDArray):
        return np_convert(color, from_space, to_space)
    result = np_convert(np.asarray(color, dtype=np.float64), from_space, to_space)
    return cast(Coords, tuple(float(v) for v in result))


def to_linear_srgb(color: NDArray, from_space: Union[ColorSpace, str],
                   gamut_space: ColorSpace = ColorSpace.SRGB) -> NDArray:
    """Convert coordinates to the linear (decoded) channels of an RGB gamut space."""
    xyz = TO_XYZ[ColorSpace.parse(from_space)](coords_to_array(color))
    return np_xyz_to_linear_rgb(xyz, gamut_space)


def np_in_gamut(color: NDArray, from_space: Union[ColorSpace, str],
                gamut_space: ColorSpace = ColorSpace.SRGB) -> NDArray:
    """
    Vectorized gamut membership test.

    Args:
        color: array of shape (..., 3)
        from_space: space of ``color``
        gamut_space: RGB-like space whose gamut is tested

    Returns:
        boolean array of shape (...,): True where all linear channels lie in [0, 1]
    """
    linear = to_linear_srgb(color, from_space, gamut_space)
    return np.all((linear >= -GAMUT_EPSILON) & (linear <= 1 + GAMUT_EPSILON), axis=-1)


def to_display_rgb(color: NDArray, from_space: Union[ColorSpace, str]) -> NDArray:
    """Encoded sRGB clamped to [0, 1], ready for 8-bit quantization."""
    return clamp01(np_convert(color, from_space, ColorSpace.SRGB))


def to_rgb8(color: NDArray, from_space: Union[ColorSpace, str]) -> NDArray:
    """Display sRGB as uint8 channels (round half up)."""
    return np.floor(to_display_rgb(color, from_space) * 255 + 0.5).astype(np.uint8)
