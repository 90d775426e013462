from .color_types import (
    ColorSpace,
    Coords,
    CoordsLike,
    RGBA8,
    RGB_SPACES,
    display_names,
    file_names,
    hue_channel,
    coords_to_array,
)
from .geometry import Point3D, ProjectedPoint

__all__ = [
    "ColorSpace",
    "Coords",
    "CoordsLike",
    "RGBA8",
    "RGB_SPACES",
    "display_names",
    "file_names",
    "hue_channel",
    "coords_to_array",
    "Point3D",
    "ProjectedPoint",
]
