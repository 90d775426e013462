from __future__ import annotations
from enum import Enum
from typing import Dict, FrozenSet, Tuple, Union
import numpy as np
from numpy import ndarray

Scalar = int | float
Coords = Tuple[float, float, float]
CoordsLike = Union[Coords, Tuple[Scalar, Scalar, Scalar], ndarray]
RGBA8 = Tuple[int, int, int, int]


class ColorSpace(str, Enum):
    """Enumerated color-space tags understood by the conversion layer."""
    SRGB = "srgb"
    DISPLAY_P3 = "display-p3"
    ADOBE_RGB = "a98-rgb"
    PROPHOTO_RGB = "prophoto-rgb"
    REC2020 = "rec2020"
    HSL = "hsl"
    LAB = "lab"
    OKLAB = "oklab"
    LCH = "lch"
    OKLCH = "oklch"
    XYZ = "xyz"

    @classmethod
    def parse(cls, value: Union[str, "ColorSpace"]) -> "ColorSpace":
        """
        Resolve a tag from its value or one of its common aliases.

        Args:
            value: ColorSpace member, tag value ("display-p3") or alias ("rgb", "p3")

        Returns:
            ColorSpace: the matching tag
        """
        if isinstance(value, ColorSpace):
            return value
        key = str(value).strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown color space: {value!r}") from None


_ALIASES: Dict[str, str] = {
    "rgb": "srgb",
    "s-rgb": "srgb",
    "p3": "display-p3",
    "displayp3": "display-p3",
    "adobergb": "a98-rgb",
    "adobe-rgb": "a98-rgb",
    "a98": "a98-rgb",
    "prophoto": "prophoto-rgb",
    "prophotorgb": "prophoto-rgb",
    "rec.2020": "rec2020",
    "bt2020": "rec2020",
    "xyz-d65": "xyz",
}

RGB_SPACES: FrozenSet[ColorSpace] = frozenset({
    ColorSpace.SRGB,
    ColorSpace.DISPLAY_P3,
    ColorSpace.ADOBE_RGB,
    ColorSpace.PROPHOTO_RGB,
    ColorSpace.REC2020,
})

# Channel index holding the hue angle, for cylindrical spaces only
hue_channel: Dict[ColorSpace, int] = {
    ColorSpace.HSL: 0,
    ColorSpace.LCH: 2,
    ColorSpace.OKLCH: 2,
}

# Channel index holding saturation/chroma; a hue is powerless when it is ~0
chroma_channel: Dict[ColorSpace, int] = {
    ColorSpace.HSL: 1,
    ColorSpace.LCH: 1,
    ColorSpace.OKLCH: 1,
}

achromatic_threshold: Dict[ColorSpace, float] = {
    ColorSpace.HSL: 1e-6,
    ColorSpace.LCH: 1e-4,
    ColorSpace.OKLCH: 1e-6,
}

# Human readable names used by legends and labels
display_names: Dict[ColorSpace, str] = {
    ColorSpace.SRGB: "sRGB",
    ColorSpace.DISPLAY_P3: "DisplayP3",
    ColorSpace.ADOBE_RGB: "AdobeRGB",
    ColorSpace.PROPHOTO_RGB: "ProPhotoRGB",
    ColorSpace.REC2020: "Rec2020",
    ColorSpace.HSL: "HSL",
    ColorSpace.LAB: "LAB",
    ColorSpace.OKLAB: "OKLAB",
    ColorSpace.LCH: "LCH",
    ColorSpace.OKLCH: "OKLCH",
    ColorSpace.XYZ: "XYZ",
}

# Short identifiers used in output file names
file_names: Dict[ColorSpace, str] = {
    ColorSpace.SRGB: "rgb",
    ColorSpace.DISPLAY_P3: "displayp3",
    ColorSpace.ADOBE_RGB: "adobergb",
    ColorSpace.PROPHOTO_RGB: "prophotorgb",
    ColorSpace.REC2020: "rec2020",
    ColorSpace.HSL: "hsl",
    ColorSpace.LAB: "lab",
    ColorSpace.OKLAB: "oklab",
    ColorSpace.LCH: "lch",
    ColorSpace.OKLCH: "oklch",
    ColorSpace.XYZ: "xyz",
}


def coords_to_array(coords: CoordsLike) -> np.ndarray:
    """
    Convert a coordinate triple (or stack of triples) to a float array.

    Args:
        coords: tuple of three numbers or an array whose last dimension is 3

    Returns:
        numpy float64 array with last dimension 3
    """
    arr = np.asarray(coords, dtype=np.float64)
    if arr.shape[-1:] != (3,):
        raise ValueError(f"Expected last dimension of size 3, got shape {arr.shape}")
    return arr
