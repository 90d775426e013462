import numpy as np
from numpy import ndarray as NDArray

from boundednumbers.np_functions import cyclic_wrap_float


def normalize_hue(h: NDArray) -> NDArray:
    """Normalize hue(s) to the [0, 360) range."""
    return cyclic_wrap_float(np.asarray(h, dtype=np.float64), 0.0, 360.0)


def np_css_hsl_to_rgb(hsl: NDArray) -> NDArray:
    """
    Vectorized: Convert HSL to encoded sRGB using the CSS Color 4 algorithm.

    Args:
        hsl: array of shape (..., 3): hue in degrees, saturation and lightness in [0, 1]

    Returns:
        rgb: array of shape (..., 3): (r, g, b), nominally in [0, 1]
    """
    hsl = np.asarray(hsl, dtype=np.float64)
    h = normalize_hue(hsl[..., 0])
    s = hsl[..., 1]
    l = hsl[..., 2]

    a = s * np.minimum(l, 1 - l)

    def channel(n: int) -> NDArray:
        k = (n + h / 30) % 12
        return l - a * np.maximum(-1, np.minimum(np.minimum(k - 3, 9 - k), 1))

    return np.stack([channel(0), channel(8), channel(4)], axis=-1)


def np_css_rgb_to_hsl(rgb: NDArray) -> NDArray:
    """
    Vectorized: Convert encoded sRGB to HSL using the CSS Color 4 algorithm.

    Args:
        rgb: array of shape (..., 3)

    Returns:
        hsl: array of shape (..., 3): (hue [0,360), saturation, lightness)
    """
    rgb = np.asarray(rgb, dtype=np.float64)
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]

    max_c = np.maximum(np.maximum(r, g), b)
    min_c = np.minimum(np.minimum(r, g), b)
    delta = max_c - min_c
    lightness = (max_c + min_c) / 2.0

    chromatic = delta > 0
    safe_delta = np.where(chromatic, delta, 1.0)
    denom = np.minimum(lightness, 1 - lightness)
    saturation = np.where(
        chromatic & (denom != 0),
        (max_c - lightness) / np.where(denom != 0, denom, 1.0),
        0.0,
    )

    hue = np.where(
        max_c == r,
        (g - b) / safe_delta + np.where(g < b, 6, 0),
        np.where(max_c == g, (b - r) / safe_delta + 2, (r - g) / safe_delta + 4),
    ) * 60
    hue = np.where(chromatic, hue, 0.0)

    # Negative saturation flips the hue (possible for out-of-gamut input)
    negative = saturation < 0
    hue = np.where(negative, hue + 180, hue)
    saturation = np.abs(saturation)

    return np.stack([normalize_hue(hue), saturation, lightness], axis=-1)
