"""
Color Space Sampler
===================

Enumerates a regular grid over a color space's parameter domain. Each axis is
either held fixed or swept with its own step size, so the same sampler serves
full volumes (RGB cube), surfaces (a cube face, a cylinder wall) and slices
(LAB at L=50, OKLCH at L=0.5).

Sample counts are derived up front from ``ceil(range / step) + 1`` instead of
accumulating floats in a loop, so a sweep produces the same number of samples
on every platform.

Classes:
    Axis: one parameter of the sweep
    Sample: a single (coordinates, display RGB, in-gamut) record
    SampleBatch: the same data for many samples as numpy arrays
    ColorSpaceSampler: lazy, restartable sample sequence
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterator, NamedTuple, Sequence, Tuple, Union

import numpy as np
from numpy import ndarray as NDArray

from ..conversions import np_convert, np_in_gamut, to_display_rgb
from ..types.color_types import ColorSpace, Coords

# Absorbs float noise in range/step before taking the ceiling (0.3/0.003 == 99.999...)
COUNT_TOLERANCE = 1e-9
DEFAULT_CHUNK_SIZE = 1 << 16


@dataclass(frozen=True)
class Axis:
    """
    One sampled parameter.

    Args:
        start: first value
        stop: last value (inclusive when ``endpoint`` is True)
        step: spacing between samples; ignored for fixed axes
        endpoint: include ``stop`` itself; periodic axes such as hue use False
    """
    start: float
    stop: float
    step: float = 0.0
    endpoint: bool = True

    def __post_init__(self):
        if self.stop < self.start:
            raise ValueError(f"Axis stop ({self.stop}) is below start ({self.start})")
        if not self.is_fixed and self.step <= 0:
            raise ValueError(f"Axis step must be positive, got {self.step}")

    @classmethod
    def fixed(cls, value: float) -> Axis:
        return cls(value, value)

    @classmethod
    def sweep(cls, start: float, stop: float, step: float, endpoint: bool = True) -> Axis:
        return cls(start, stop, step, endpoint)

    @property
    def is_fixed(self) -> bool:
        return self.start == self.stop

    @property
    def count(self) -> int:
        if self.is_fixed:
            return 1
        intervals = math.ceil((self.stop - self.start) / self.step - COUNT_TOLERANCE)
        if self.endpoint:
            return intervals + 1
        return max(intervals, 1)

    def values(self) -> NDArray:
        """All sample positions along the axis, never overshooting ``stop``."""
        values = self.start + np.arange(self.count, dtype=np.float64) * self.step
        if self.endpoint:
            values = np.minimum(values, self.stop)
        return values


class Sample(NamedTuple):
    coords: Coords
    rgb: Tuple[float, float, float]
    in_gamut: bool


class SampleBatch(NamedTuple):
    space: ColorSpace
    coords: NDArray
    rgb: NDArray
    in_gamut: NDArray

    def __len__(self) -> int:
        return int(self.coords.shape[0])

    def to(self, space: Union[ColorSpace, str]) -> NDArray:
        """Coordinates of every sample converted into ``space``."""
        return np_convert(self.coords, self.space, space)

    def rgba8(self, alpha: int = 255) -> NDArray:
        """Display colors as (N, 4) uint8 rows."""
        rgb8 = np.floor(self.rgb * 255 + 0.5).astype(np.uint8)
        a = np.full((rgb8.shape[0], 1), alpha, dtype=np.uint8)
        return np.concatenate([rgb8, a], axis=1)


def _empty_batch(space: ColorSpace) -> SampleBatch:
    empty = np.empty((0, 3), dtype=np.float64)
    return SampleBatch(space, empty, empty.copy(), np.empty((0,), dtype=bool))


class ColorSpaceSampler:
    """
    Regular grid sampler over a color space.

    Args:
        space: space the axes are expressed in
        axes: exactly three Axis objects, one per coordinate
        gamut_space: RGB space whose linear [0, 1] cube defines "in gamut"
        chunk_size: samples converted per numpy batch

    Iterating the sampler yields every sample with its in-gamut flag. Use
    ``samples(gamut_filter=True)`` for slices that should only contain
    displayable colors.
    """

    def __init__(
        self,
        space: Union[ColorSpace, str],
        axes: Sequence[Axis],
        gamut_space: ColorSpace = ColorSpace.SRGB,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if len(axes) != 3:
            raise ValueError(f"Expected three axes, got {len(axes)}")
        if chunk_size < 1:
            raise ValueError("chunk_size must be positive")
        self.space = ColorSpace.parse(space)
        self.axes: Tuple[Axis, Axis, Axis] = (axes[0], axes[1], axes[2])
        self.gamut_space = ColorSpace.parse(gamut_space)
        self.chunk_size = chunk_size
        self._axis_values = [axis.values() for axis in self.axes]

    @classmethod
    def cube(cls, space: Union[ColorSpace, str], step: float, **kwargs) -> ColorSpaceSampler:
        """Full [0, 1]^3 sweep of an RGB-like space."""
        axis = Axis.sweep(0.0, 1.0, step)
        return cls(space, (axis, axis, axis), **kwargs)

    @property
    def shape(self) -> Tuple[int, int, int]:
        return (self.axes[0].count, self.axes[1].count, self.axes[2].count)

    @property
    def size(self) -> int:
        a, b, c = self.shape
        return a * b * c

    def __len__(self) -> int:
        return self.size

    def _coords_for(self, flat: NDArray) -> NDArray:
        i, j, k = np.unravel_index(flat, self.shape)
        v0, v1, v2 = self._axis_values
        return np.stack([v0[i], v1[j], v2[k]], axis=-1)

    def iter_batches(self, gamut_filter: bool = False) -> Iterator[SampleBatch]:
        """
        Yield samples chunk by chunk as numpy arrays.

        Args:
            gamut_filter: drop samples outside ``gamut_space``

        Yields:
            SampleBatch with coords (N, 3), clamped display sRGB (N, 3) and flags (N,)
        """
        for begin in range(0, self.size, self.chunk_size):
            flat = np.arange(begin, min(begin + self.chunk_size, self.size))
            coords = self._coords_for(flat)
            in_gamut = np_in_gamut(coords, self.space, self.gamut_space)
            if gamut_filter:
                coords = coords[in_gamut]
                in_gamut = in_gamut[in_gamut]
            rgb = to_display_rgb(coords, self.space)
            yield SampleBatch(self.space, coords, rgb, in_gamut)

    def batch(self, gamut_filter: bool = False) -> SampleBatch:
        """All samples in one SampleBatch."""
        batches = list(self.iter_batches(gamut_filter))
        if not batches:
            return _empty_batch(self.space)
        return SampleBatch(
            self.space,
            np.concatenate([b.coords for b in batches]),
            np.concatenate([b.rgb for b in batches]),
            np.concatenate([b.in_gamut for b in batches]),
        )

    def samples(self, gamut_filter: bool = False) -> Iterator[Sample]:
        """Lazy per-sample sequence; each call starts a fresh pass over the grid."""
        for batch in self.iter_batches(gamut_filter):
            for coords, rgb, flag in zip(batch.coords, batch.rgb, batch.in_gamut):
                yield Sample(
                    (float(coords[0]), float(coords[1]), float(coords[2])),
                    (float(rgb[0]), float(rgb[1]), float(rgb[2])),
                    bool(flag),
                )

    def __iter__(self) -> Iterator[Sample]:
        return self.samples()

    def __repr__(self) -> str:
        return f"ColorSpaceSampler({self.space.value}, shape={self.shape})"
