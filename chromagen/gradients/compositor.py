"""
Gradient Compositor
===================

Two-color gradients interpolated inside a chosen color space.

Coordinates are interpolated linearly, except hue angles which travel along
the circle (shortest arc by default, so 350° -> 10° passes through 0°).
Intermediate colors are never gamut-clipped; clamping happens only when they
are reported as display RGB.

Functions:
    hue_lerp: wrap-aware hue interpolation
    interpolate: coordinate interpolation for one space
    gradient: list of Colors between two endpoints
    gradient_rgba8: the same gradient as a (steps, 4) uint8 array
"""
from __future__ import annotations
from enum import IntEnum
from typing import List, Union

import numpy as np
from numpy import ndarray as NDArray
from boundednumbers import BoundType, bound_type_to_np_function

from ..colors.color import Color
from ..conversions import np_convert, to_rgb8
from ..conversions.css_to_hsl import normalize_hue
from ..errors import EmptyInputError
from ..types.color_types import ColorSpace, achromatic_threshold, chroma_channel, hue_channel


class HueMode(IntEnum):
    """
    Hue interpolation modes for the cyclical hue axis.

    CW:       Clockwise (increasing hue direction)
    CCW:      Counterclockwise (decreasing hue direction)
    SHORTEST: Shortest path (≤180° arc)
    LONGEST:  Longest path (≥180° arc)
    """
    CW = 0
    CCW = 1
    SHORTEST = 2
    LONGEST = 3


def _hue_delta(h0: float, h1: float, mode: HueMode) -> float:
    delta = (h1 - h0) % 360.0
    if mode == HueMode.CW:
        return delta
    if mode == HueMode.CCW:
        return delta - 360.0 if delta > 0 else 0.0
    if mode == HueMode.SHORTEST:
        return delta - 360.0 if delta > 180.0 else delta
    return delta - 360.0 if 0.0 < delta <= 180.0 else delta


def hue_lerp(h0: float, h1: float, coeffs: NDArray, mode: HueMode = HueMode.SHORTEST) -> NDArray:
    """
    Interpolate between two hues around the circle.

    Args:
        h0: Start hue in degrees
        h1: End hue in degrees
        coeffs: Interpolation coefficients, shape (N,)
        mode: Arc to travel along

    Returns:
        Interpolated hues, shape (N,), values in [0, 360)
    """
    coeffs = np.asarray(coeffs, dtype=np.float64)
    h0 = float(normalize_hue(h0))
    return normalize_hue(h0 + _hue_delta(h0, float(normalize_hue(h1)), mode) * coeffs)


def _resolve_powerless_hues(start: NDArray, end: NDArray, space: ColorSpace) -> None:
    """An achromatic endpoint has no meaningful hue; borrow the other endpoint's."""
    hue_i = hue_channel[space]
    chroma_i = chroma_channel[space]
    threshold = achromatic_threshold[space]
    start_grey = abs(start[chroma_i]) < threshold
    end_grey = abs(end[chroma_i]) < threshold
    if start_grey and not end_grey:
        start[hue_i] = end[hue_i]
    elif end_grey and not start_grey:
        end[hue_i] = start[hue_i]


def interpolate(
    start: NDArray,
    end: NDArray,
    coeffs: NDArray,
    space: ColorSpace,
    hue_mode: HueMode = HueMode.SHORTEST,
) -> NDArray:
    """
    Interpolate two coordinate triples that already live in ``space``.

    Args:
        start, end: arrays of shape (3,)
        coeffs: interpolation coefficients, clamped to [0, 1]
        space: space of the coordinates (decides which channel is a hue)
        hue_mode: arc used for the hue channel

    Returns:
        array of shape (N, 3)
    """
    clamp = bound_type_to_np_function[BoundType.CLAMP]
    t = clamp(np.asarray(coeffs, dtype=np.float64), 0.0, 1.0)[:, None]
    start = np.array(start, dtype=np.float64)
    end = np.array(end, dtype=np.float64)

    hue_i = hue_channel.get(space)
    if hue_i is not None:
        _resolve_powerless_hues(start, end, space)

    out = start + (end - start) * t
    if hue_i is not None:
        out[:, hue_i] = hue_lerp(start[hue_i], end[hue_i], t[:, 0], hue_mode)
    return out


def _coefficients(steps: int) -> NDArray:
    if steps < 1:
        raise EmptyInputError(f"A gradient needs at least one step, got {steps}")
    if steps == 1:
        return np.zeros(1)
    return np.arange(steps, dtype=np.float64) / (steps - 1)


def _endpoint_coords(start: Color, end: Color, space: ColorSpace):
    return np.asarray(start.convert(space).coords), np.asarray(end.convert(space).coords)


def gradient(
    start: Color,
    end: Color,
    steps: int,
    space: Union[ColorSpace, str],
    hue_mode: HueMode = HueMode.SHORTEST,
    output_space: Union[ColorSpace, str] = ColorSpace.SRGB,
) -> List[Color]:
    """
    Build a gradient of ``steps`` colors from ``start`` to ``end``.

    Step ``i`` interpolates at ``t = i / (steps - 1)`` inside ``space`` and is
    converted to ``output_space`` without clipping.

    Args:
        start: first color
        end: last color
        steps: number of colors, at least 1
        space: interpolation space
        hue_mode: arc for hue channels
        output_space: space of the returned colors (sRGB by default)

    Returns:
        list of Color
    """
    space = ColorSpace.parse(space)
    output_space = ColorSpace.parse(output_space)
    coeffs = _coefficients(steps)
    s, e = _endpoint_coords(start, end, space)

    coords = np_convert(interpolate(s, e, coeffs, space, hue_mode), space, output_space)
    alphas = start.alpha + (end.alpha - start.alpha) * coeffs
    return [Color(output_space, c, a) for c, a in zip(coords, alphas)]


def gradient_rgba8(
    start: Color,
    end: Color,
    steps: int,
    space: Union[ColorSpace, str],
    hue_mode: HueMode = HueMode.SHORTEST,
) -> NDArray:
    """
    Vectorized gradient straight to display pixels.

    Returns:
        (steps, 4) uint8 array of clamped sRGB + alpha
    """
    space = ColorSpace.parse(space)
    coeffs = _coefficients(steps)
    s, e = _endpoint_coords(start, end, space)
    rgb = to_rgb8(interpolate(s, e, coeffs, space, hue_mode), space)
    alphas = start.alpha + (end.alpha - start.alpha) * coeffs
    a = np.floor(alphas * 255 + 0.5).astype(np.uint8)[:, None]
    return np.concatenate([rgb, a], axis=1)
