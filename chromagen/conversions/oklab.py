"""OKLab (Björn Ottosson, 2020), defined on linear sRGB."""
from __future__ import annotations
import numpy as np
from numpy import ndarray as NDArray

from ..types.color_types import ColorSpace
from .rgb_spaces import np_linear_rgb_to_xyz, np_xyz_to_linear_rgb

LINEAR_SRGB_TO_LMS = np.array([
    [0.4122214708, 0.5363325363, 0.0514459929],
    [0.2119034982, 0.6806995451, 0.1073969566],
    [0.0883024619, 0.2817188376, 0.6299787005],
])

LMS_TO_OKLAB = np.array([
    [0.2104542553, 0.7936177850, -0.0040720468],
    [1.9779984951, -2.4285922050, 0.4505937099],
    [0.0259040371, 0.7827717662, -0.8086757660],
])

LMS_TO_LINEAR_SRGB = np.linalg.inv(LINEAR_SRGB_TO_LMS)
OKLAB_TO_LMS = np.linalg.inv(LMS_TO_OKLAB)


def np_linear_srgb_to_oklab(rgb: NDArray) -> NDArray:
    lms = np.asarray(rgb, dtype=np.float64) @ LINEAR_SRGB_TO_LMS.T
    return np.cbrt(lms) @ LMS_TO_OKLAB.T


def np_oklab_to_linear_srgb(lab: NDArray) -> NDArray:
    lms = np.asarray(lab, dtype=np.float64) @ OKLAB_TO_LMS.T
    return (lms ** 3) @ LMS_TO_LINEAR_SRGB.T


def np_xyz_to_oklab(xyz: NDArray) -> NDArray:
    return np_linear_srgb_to_oklab(np_xyz_to_linear_rgb(xyz, ColorSpace.SRGB))


def np_oklab_to_xyz(lab: NDArray) -> NDArray:
    return np_linear_rgb_to_xyz(np_oklab_to_linear_srgb(lab), ColorSpace.SRGB)
