"""CIE LAB / LCH conversions relative to the D65 white point."""
from __future__ import annotations
import numpy as np
from numpy import ndarray as NDArray

from .css_to_hsl import normalize_hue

D65_WHITE = np.array([0.95047, 1.0, 1.08883])

EPSILON = 216 / 24389
KAPPA = 24389 / 27


def np_xyz_to_lab(xyz: NDArray) -> NDArray:
    xyz = np.asarray(xyz, dtype=np.float64) / D65_WHITE
    f = np.where(xyz > EPSILON, np.cbrt(xyz), (KAPPA * xyz + 16) / 116)
    fx, fy, fz = f[..., 0], f[..., 1], f[..., 2]
    return np.stack([116 * fy - 16, 500 * (fx - fy), 200 * (fy - fz)], axis=-1)


def np_lab_to_xyz(lab: NDArray) -> NDArray:
    lab = np.asarray(lab, dtype=np.float64)
    L, a, b = lab[..., 0], lab[..., 1], lab[..., 2]
    fy = (L + 16) / 116
    fx = a / 500 + fy
    fz = fy - b / 200

    x = np.where(fx ** 3 > EPSILON, fx ** 3, (116 * fx - 16) / KAPPA)
    y = np.where(L > KAPPA * EPSILON, fy ** 3, L / KAPPA)
    z = np.where(fz ** 3 > EPSILON, fz ** 3, (116 * fz - 16) / KAPPA)
    return np.stack([x, y, z], axis=-1) * D65_WHITE


def np_rectangular_to_polar(lab: NDArray) -> NDArray:
    """(L, a, b) -> (L, C, h) with h in degrees [0, 360). Shared by LCH and OKLCH."""
    lab = np.asarray(lab, dtype=np.float64)
    a, b = lab[..., 1], lab[..., 2]
    chroma = np.hypot(a, b)
    hue = normalize_hue(np.degrees(np.arctan2(b, a)))
    return np.stack([lab[..., 0], chroma, hue], axis=-1)


def np_polar_to_rectangular(lch: NDArray) -> NDArray:
    lch = np.asarray(lch, dtype=np.float64)
    chroma = lch[..., 1]
    hue = np.radians(lch[..., 2])
    return np.stack([lch[..., 0], chroma * np.cos(hue), chroma * np.sin(hue)], axis=-1)
