"""
Transfer Functions
==================

Encode/decode curves relating linear light to stored channel values for every
``ColorSpace`` tag. All curves are extended to negative input by mirroring
around zero so that out-of-gamut values survive a decode/encode round trip.

Features:
    - sRGB piecewise curve (shared by sRGB and Display P3)
    - Adobe RGB (1998) pure gamma 563/256
    - ProPhoto RGB piecewise gamma 1.8
    - ITU-R BT.2020 piecewise curve
    - Identity for every non-RGB space
"""
from __future__ import annotations
from typing import Callable, Dict, Tuple
import numpy as np
from numpy import ndarray as NDArray

from ..types.color_types import ColorSpace

TransferPair = Tuple[Callable[[NDArray], NDArray], Callable[[NDArray], NDArray]]

# BT.2020 constants (12-bit precision values)
REC2020_ALPHA = 1.09929682680944
REC2020_BETA = 0.018053968510807

A98_GAMMA = 563 / 256
PROPHOTO_GAMMA = 1.8
PROPHOTO_LINEAR_LIMIT = 1 / 512


def _mirrored(fn: Callable[[NDArray], NDArray]) -> Callable[[NDArray], NDArray]:
    def wrapped(values: NDArray) -> NDArray:
        values = np.asarray(values, dtype=np.float64)
        return np.sign(values) * fn(np.abs(values))
    wrapped.__name__ = fn.__name__
    wrapped.__doc__ = fn.__doc__
    return wrapped


@_mirrored
def srgb_decode(c: NDArray) -> NDArray:
    """Encoded sRGB channel -> linear light."""
    return np.where(c <= 0.04045, c / 12.92, ((c + 0.055) / 1.055) ** 2.4)


@_mirrored
def srgb_encode(v: NDArray) -> NDArray:
    """Linear light -> encoded sRGB channel."""
    return np.where(v <= 0.0031308, v * 12.92, 1.055 * v ** (1 / 2.4) - 0.055)


@_mirrored
def a98_decode(c: NDArray) -> NDArray:
    return c ** A98_GAMMA


@_mirrored
def a98_encode(v: NDArray) -> NDArray:
    return v ** (1 / A98_GAMMA)


@_mirrored
def prophoto_decode(c: NDArray) -> NDArray:
    return np.where(c <= 16 * PROPHOTO_LINEAR_LIMIT, c / 16, c ** PROPHOTO_GAMMA)


@_mirrored
def prophoto_encode(v: NDArray) -> NDArray:
    return np.where(v < PROPHOTO_LINEAR_LIMIT, v * 16, v ** (1 / PROPHOTO_GAMMA))


@_mirrored
def rec2020_decode(c: NDArray) -> NDArray:
    return np.where(
        c < REC2020_BETA * 4.5,
        c / 4.5,
        ((c + REC2020_ALPHA - 1) / REC2020_ALPHA) ** (1 / 0.45),
    )


@_mirrored
def rec2020_encode(v: NDArray) -> NDArray:
    return np.where(
        v < REC2020_BETA,
        v * 4.5,
        REC2020_ALPHA * v ** 0.45 - (REC2020_ALPHA - 1),
    )


def identity(values: NDArray) -> NDArray:
    return np.asarray(values, dtype=np.float64)


TRANSFER_FUNCTIONS: Dict[ColorSpace, TransferPair] = {
    ColorSpace.SRGB: (srgb_encode, srgb_decode),
    ColorSpace.DISPLAY_P3: (srgb_encode, srgb_decode),
    ColorSpace.ADOBE_RGB: (a98_encode, a98_decode),
    ColorSpace.PROPHOTO_RGB: (prophoto_encode, prophoto_decode),
    ColorSpace.REC2020: (rec2020_encode, rec2020_decode),
}


def transfer_function(space: ColorSpace | str) -> TransferPair:
    """
    Look up the (encode, decode) pair for a color space.

    Args:
        space: ColorSpace tag or alias

    Returns:
        Tuple of vectorized callables ``(encode, decode)``; identity for
        spaces without a transfer curve.
    """
    space = ColorSpace.parse(space)
    return TRANSFER_FUNCTIONS.get(space, (identity, identity))
