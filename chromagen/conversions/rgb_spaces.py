"""
RGB Space Definitions
=====================

Linear RGB <-> CIE XYZ (D65) matrices for the RGB-like color spaces. ProPhoto
RGB is defined relative to D50, so its matrix is chromatically adapted to D65
with the Bradford transform before use; every space then shares the same
XYZ hub.
"""
from __future__ import annotations
from typing import Dict
import numpy as np
from numpy import ndarray as NDArray

from ..types.color_types import ColorSpace
from .transfer import transfer_function

SRGB_TO_XYZ = np.array([
    [0.41239079926595934, 0.357584339383878, 0.1804807884018343],
    [0.21263900587151027, 0.715168678767756, 0.07219231536073371],
    [0.01933081871559182, 0.11919477979462598, 0.9505321522496607],
])

DISPLAY_P3_TO_XYZ = np.array([
    [0.4865709486482162, 0.26566769316909306, 0.1982172852343625],
    [0.2289745640697488, 0.6917385218365064, 0.079286914093745],
    [0.0, 0.04511338185890264, 1.043944368900976],
])

ADOBE_RGB_TO_XYZ = np.array([
    [0.5766690429101305, 0.1855582379065463, 0.1882286462349947],
    [0.29734497525053605, 0.6273635662554661, 0.07529145849399788],
    [0.02703136138641234, 0.07068885253582723, 0.9913375368376388],
])

REC2020_TO_XYZ = np.array([
    [0.6369580483012914, 0.14461690358620832, 0.1688809751641721],
    [0.2627002120112671, 0.6779980715188708, 0.05930171646986196],
    [0.0, 0.028072693049087428, 1.060985057710791],
])

PROPHOTO_TO_XYZ_D50 = np.array([
    [0.7977604896723027, 0.13518583717574031, 0.0313493495815248],
    [0.2880711282292934, 0.7118432178101014, 0.00008565396060525902],
    [0.0, 0.0, 0.8251046025104601],
])

BRADFORD_D50_TO_D65 = np.array([
    [0.955473421488075, -0.02309845494876471, 0.06325924320057072],
    [-0.0283697093338637, 1.0099953980813041, 0.021041441191917323],
    [0.012314014864481998, -0.020507649298898964, 1.330365926242124],
])

RGB_TO_XYZ: Dict[ColorSpace, NDArray] = {
    ColorSpace.SRGB: SRGB_TO_XYZ,
    ColorSpace.DISPLAY_P3: DISPLAY_P3_TO_XYZ,
    ColorSpace.ADOBE_RGB: ADOBE_RGB_TO_XYZ,
    ColorSpace.PROPHOTO_RGB: BRADFORD_D50_TO_D65 @ PROPHOTO_TO_XYZ_D50,
    ColorSpace.REC2020: REC2020_TO_XYZ,
}

XYZ_TO_RGB: Dict[ColorSpace, NDArray] = {
    space: np.linalg.inv(matrix) for space, matrix in RGB_TO_XYZ.items()
}

# D65 reference white used for chromaticity plots
D65_WHITE_XY = (0.3127, 0.3290)


def np_linear_rgb_to_xyz(rgb: NDArray, space: ColorSpace) -> NDArray:
    return np.asarray(rgb, dtype=np.float64) @ RGB_TO_XYZ[space].T


def np_xyz_to_linear_rgb(xyz: NDArray, space: ColorSpace) -> NDArray:
    return np.asarray(xyz, dtype=np.float64) @ XYZ_TO_RGB[space].T


def np_rgb_to_xyz(rgb: NDArray, space: ColorSpace) -> NDArray:
    """
    Vectorized: encoded RGB in ``space`` -> XYZ (D65).

    Args:
        rgb: array of shape (..., 3), encoded channels (nominally [0, 1])
        space: one of the RGB-like ColorSpace tags

    Returns:
        xyz: array of shape (..., 3)
    """
    _, decode = transfer_function(space)
    return np_linear_rgb_to_xyz(decode(rgb), space)


def np_xyz_to_rgb(xyz: NDArray, space: ColorSpace) -> NDArray:
    """Vectorized: XYZ (D65) -> encoded RGB in ``space`` (unclamped)."""
    encode, _ = transfer_function(space)
    return encode(np_xyz_to_linear_rgb(xyz, space))


def primaries_xy(space: ColorSpace) -> NDArray:
    """
    Chromaticity coordinates of a space's red, green and blue primaries.

    Returns:
        array of shape (3, 2): rows R, G, B as (x, y)
    """
    xyz = RGB_TO_XYZ[space].T
    return xyz[:, :2] / xyz.sum(axis=1, keepdims=True)
