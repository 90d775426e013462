"""RGB gamuts shown side by side in the XYZ comparison and chromaticity plots."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Tuple

from numpy import ndarray as NDArray

from ..conversions import np_convert
from ..types.color_types import ColorSpace, RGBA8, display_names


@dataclass(frozen=True)
class GamutSpec:
    """
    One RGB space in a gamut plot.

    Attributes:
        space: RGB-like ColorSpace tag
        color: overlay color (RGBA) used for its point cloud, wireframe and legend
        label: legend text
    """
    space: ColorSpace
    color: RGBA8
    label: str

    @property
    def name(self) -> str:
        return display_names[self.space]

    def to_xyz(self, rgb: NDArray) -> NDArray:
        """Encoded (r, g, b) in this space -> XYZ, vectorized over (..., 3)."""
        return np_convert(rgb, self.space, ColorSpace.XYZ)


GAMUT_COLORS: Dict[ColorSpace, RGBA8] = {
    ColorSpace.SRGB: (255, 0, 0, 200),
    ColorSpace.DISPLAY_P3: (0, 255, 0, 200),
    ColorSpace.ADOBE_RGB: (0, 0, 255, 200),
    ColorSpace.PROPHOTO_RGB: (255, 255, 0, 200),
    ColorSpace.REC2020: (255, 0, 255, 200),
}

DEFAULT_GAMUT_COLOR: RGBA8 = (200, 200, 200, 200)

COMPARISON_GAMUTS: Tuple[GamutSpec, ...] = (
    GamutSpec(ColorSpace.SRGB, GAMUT_COLORS[ColorSpace.SRGB], "sRGB"),
    GamutSpec(ColorSpace.DISPLAY_P3, GAMUT_COLORS[ColorSpace.DISPLAY_P3], "Display P3"),
    GamutSpec(ColorSpace.ADOBE_RGB, GAMUT_COLORS[ColorSpace.ADOBE_RGB], "Adobe RGB"),
    GamutSpec(ColorSpace.PROPHOTO_RGB, GAMUT_COLORS[ColorSpace.PROPHOTO_RGB], "ProPhoto RGB"),
    GamutSpec(ColorSpace.REC2020, GAMUT_COLORS[ColorSpace.REC2020], "Rec. 2020"),
)

# Spaces with their own volume and chromaticity images
VOLUME_SPACES: Tuple[ColorSpace, ...] = (
    ColorSpace.SRGB,
    ColorSpace.DISPLAY_P3,
    ColorSpace.ADOBE_RGB,
    ColorSpace.REC2020,
)
CHROMATICITY_SPACES = VOLUME_SPACES


def gamut_spec(space: ColorSpace) -> GamutSpec:
    space = ColorSpace.parse(space)
    for spec in COMPARISON_GAMUTS:
        if spec.space == space:
            return spec
    return GamutSpec(space, DEFAULT_GAMUT_COLOR, display_names[space])
