"""
Canvas
======

Mutable RGBA pixel grid (8-bit straight alpha) that every renderer draws on.

A canvas remembers its supersampling factor: an "oversampled" working canvas
has ``supersample > 1`` and is turned into a "final" canvas (``supersample ==
1``) by ``downscale``.
"""
from __future__ import annotations
from typing import Sequence, Tuple, Union

import numpy as np
from numpy import ndarray as NDArray
from PIL import Image

from ..types.color_types import RGBA8

ColorLike = Union[RGBA8, Sequence[int], NDArray]

TRANSPARENT: RGBA8 = (0, 0, 0, 0)
BLACK: RGBA8 = (0, 0, 0, 255)
WHITE: RGBA8 = (255, 255, 255, 255)


def as_rgba8(color: ColorLike) -> NDArray:
    """Normalize an RGB or RGBA color (or an (N, 3|4) array of them) to uint8 RGBA."""
    arr = np.asarray(color)
    if arr.shape[-1] == 3:
        alpha = np.full(arr.shape[:-1] + (1,), 255, dtype=np.int64)
        arr = np.concatenate([arr.astype(np.int64), alpha], axis=-1)
    if arr.shape[-1] != 4:
        raise ValueError(f"Expected RGB or RGBA channels, got shape {arr.shape}")
    return np.clip(arr, 0, 255).astype(np.uint8)


def composite_over(dst: NDArray, src: NDArray) -> NDArray:
    """
    Straight-alpha "over" compositing of ``src`` onto ``dst``, both (..., 4) uint8.

    Fully transparent sources leave the destination untouched and transparent
    destination pixels take the source as-is. Otherwise each color
    channel becomes ``dst * (1 - a) + src * a`` and the resulting alpha is
    ``max(dst.alpha, src.alpha)``.
    """
    dst = dst.astype(np.int64)
    src = src.astype(np.int64)
    a = src[..., 3:4]
    mixed = (dst[..., :3] * (255 - a) + src[..., :3] * a + 127) // 255
    alpha = np.maximum(dst[..., 3:4], a)
    out = np.concatenate([mixed, alpha], axis=-1)
    empty = dst[..., 3:4] == 0
    out = np.where(empty, src, out)
    out = np.where(a == 0, dst, out)
    return out.astype(np.uint8)


class Canvas:
    """
    RGBA canvas backed by a (height, width, 4) uint8 array.

    A fresh canvas is fully transparent.
    """

    def __init__(self, width: int, height: int, supersample: int = 1) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        if supersample < 1:
            raise ValueError(f"supersample must be >= 1, got {supersample}")
        self._pixels = np.zeros((height, width, 4), dtype=np.uint8)
        self.supersample = supersample

    @classmethod
    def oversampled(cls, width: int, height: int, factor: int) -> Canvas:
        """Working canvas for a ``width x height`` final image rendered at ``factor``x."""
        return cls(width * factor, height * factor, supersample=factor)

    @classmethod
    def from_array(cls, pixels: NDArray, supersample: int = 1) -> Canvas:
        pixels = np.asarray(pixels)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"Expected (height, width, 4) pixels, got {pixels.shape}")
        canvas = cls(pixels.shape[1], pixels.shape[0], supersample)
        canvas._pixels[...] = pixels.astype(np.uint8)
        return canvas

    @classmethod
    def from_image(cls, image: Image.Image) -> Canvas:
        return cls.from_array(np.asarray(image.convert("RGBA")))

    # ------------------ PROPERTIES ------------------
    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def pixels(self) -> NDArray:
        """The live pixel array; writes go straight to the canvas."""
        return self._pixels

    @property
    def alpha(self) -> NDArray:
        return self._pixels[..., 3]

    # ------------------ PIXEL ACCESS ------------------
    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x: int, y: int) -> RGBA8:
        r, g, b, a = (int(v) for v in self._pixels[y, x])
        return r, g, b, a

    def set_pixel(self, x: int, y: int, color: ColorLike) -> None:
        """Replace one pixel; coordinates outside the canvas are ignored."""
        if self.contains(x, y):
            self._pixels[y, x] = as_rgba8(color)

    def fill(self, color: ColorLike) -> None:
        self._pixels[...] = as_rgba8(color)

    def is_blank(self) -> bool:
        return not bool(np.any(self._pixels[..., 3]))

    def copy(self) -> Canvas:
        return Canvas.from_array(self._pixels.copy(), self.supersample)

    def to_image(self) -> Image.Image:
        return Image.fromarray(self._pixels)

    def __repr__(self) -> str:
        return f"Canvas({self.width}x{self.height}, supersample={self.supersample})"
