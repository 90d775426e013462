from .transfer import transfer_function
from .rgb_spaces import RGB_TO_XYZ, XYZ_TO_RGB, D65_WHITE_XY, primaries_xy
from .wrapper import (
    convert,
    np_convert,
    np_in_gamut,
    to_linear_srgb,
    to_display_rgb,
    to_rgb8,
    GAMUT_EPSILON,
)

__all__ = [
    "transfer_function",
    "RGB_TO_XYZ",
    "XYZ_TO_RGB",
    "D65_WHITE_XY",
    "primaries_xy",
    "convert",
    "np_convert",
    "np_in_gamut",
    "to_linear_srgb",
    "to_display_rgb",
    "to_rgb8",
    "GAMUT_EPSILON",
]
