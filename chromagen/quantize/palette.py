"""
Palette Quantizer
=================

Global 256-entry palettes for GIF animations.

A palette is built from every frame of an animation before any frame is
encoded. Sampled colors are bucketed by the top bits of their channels and the
first color seen in each bucket is kept as-is; no averaging, no perceptual
ranking. Entry 0 is always fully transparent.

Functions:
    bucket_keys: coarse hash keys for RGBA pixels
    build_palette: palette from a sequence of frames
    nearest_color: palette index closest to one pixel
    quantize: map a whole canvas onto palette indices
"""
from __future__ import annotations
import logging
import warnings
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple, Union

import numpy as np
from numpy import ndarray as NDArray

from ..errors import EmptyInputError
from ..raster.canvas import Canvas
from ..types.color_types import RGBA8

logger = logging.getLogger(__name__)

PALETTE_SIZE = 256
MAX_COLORS = PALETTE_SIZE - 1
TRANSPARENT_ENTRY: RGBA8 = (0, 0, 0, 0)

DEFAULT_STRIDE = 4
DEFAULT_BITS = 6

# Pixels mapped per chunk in quantize (keeps the distance matrix small)
_QUANTIZE_CHUNK = 8192

FrameLike = Union[Canvas, NDArray]


@dataclass(frozen=True)
class Palette:
    """
    Exactly 256 RGBA entries.

    Attributes:
        entries: all 256 entries; index 0 is transparent
        size: number of meaningful entries (transparent + collected colors)
        truncated: True when more than 255 colors were found and the rest dropped
    """
    entries: Tuple[RGBA8, ...]
    size: int
    truncated: bool = False

    def __post_init__(self):
        if len(self.entries) != PALETTE_SIZE:
            raise ValueError(f"Palette must have {PALETTE_SIZE} entries, got {len(self.entries)}")
        if self.entries[0] != TRANSPARENT_ENTRY:
            raise ValueError("Palette entry 0 must be fully transparent")

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> RGBA8:
        return self.entries[index]

    @property
    def colors(self) -> Tuple[RGBA8, ...]:
        """The collected opaque colors, without the transparent slot or padding."""
        return self.entries[1:self.size]

    def as_array(self) -> NDArray:
        return np.array(self.entries, dtype=np.uint8)

    def rgb_bytes(self) -> List[int]:
        """Flat [r, g, b, r, g, b, ...] list in the layout Pillow's putpalette expects."""
        return [channel for entry in self.entries for channel in entry[:3]]


def _frame_pixels(frame: FrameLike) -> NDArray:
    pixels = frame.pixels if isinstance(frame, Canvas) else np.asarray(frame)
    if pixels.ndim != 3 or pixels.shape[2] != 4:
        raise ValueError(f"Expected (height, width, 4) frames, got shape {pixels.shape}")
    return pixels


def bucket_keys(pixels: NDArray, bits: int = DEFAULT_BITS) -> NDArray:
    """
    Hash keys for RGB(A) pixels after dropping low-order channel bits.

    Channels are widened from 8 to 16 bits (``c * 257``) and only the top
    ``bits`` bits of each are kept, so near-identical colors share a key.

    Args:
        pixels: (N, 3|4) uint8 array; only RGB participates in the key
        bits: bits kept per channel, 1..16

    Returns:
        (N,) int64 keys
    """
    if not 1 <= bits <= 16:
        raise ValueError(f"bits must be within [1, 16], got {bits}")
    wide = pixels[:, :3].astype(np.int64) * 257
    reduced = wide >> (16 - bits)
    return (reduced[:, 0] << (2 * bits)) | (reduced[:, 1] << bits) | reduced[:, 2]


def collect_colors(
    frames: Iterable[FrameLike],
    stride: int = DEFAULT_STRIDE,
    bits: int = DEFAULT_BITS,
    limit: int = MAX_COLORS,
) -> Tuple[List[RGBA8], bool, int]:
    """
    Scan frames in order and keep the first color of every bucket.

    Only every ``stride``-th row and column is sampled and fully transparent
    pixels are skipped.

    Returns:
        (colors, truncated, frame_count): at most ``limit`` opaque colors in
        discovery order, whether more buckets existed, and how many frames
        were scanned
    """
    if stride < 1:
        raise ValueError(f"stride must be >= 1, got {stride}")

    seen: Dict[int, RGBA8] = {}
    truncated = False
    frame_count = 0
    for frame in frames:
        frame_count += 1
        if truncated:
            continue
        sampled = _frame_pixels(frame)[::stride, ::stride].reshape(-1, 4)
        sampled = sampled[sampled[:, 3] > 0]
        if sampled.shape[0] == 0:
            continue

        keys = bucket_keys(sampled, bits)
        unique_keys, first = np.unique(keys, return_index=True)
        for pos in np.sort(first[~np.isin(unique_keys, list(seen))]):
            if len(seen) >= limit:
                truncated = True
                break
            r, g, b = (int(v) for v in sampled[pos, :3])
            seen[int(keys[pos])] = (r, g, b, 255)

    return list(seen.values()), truncated, frame_count


def build_palette(
    frames: Iterable[FrameLike],
    stride: int = DEFAULT_STRIDE,
    bits: int = DEFAULT_BITS,
    max_colors: int = MAX_COLORS,
) -> Palette:
    """
    Build the global palette for an animation.

    Args:
        frames: every frame of the animation (Canvas or (H, W, 4) arrays)
        stride: sample every ``stride``-th row and column
        bits: bucket precision per channel
        max_colors: opaque colors kept at most (entry 0 is reserved)

    Returns:
        Palette of exactly 256 entries

    Raises:
        EmptyInputError: no frames were supplied
    """
    if not 1 <= max_colors <= MAX_COLORS:
        raise ValueError(f"max_colors must be within [1, {MAX_COLORS}], got {max_colors}")
    colors, truncated, frame_count = collect_colors(frames, stride, bits, max_colors)
    if frame_count == 0:
        raise EmptyInputError("Cannot build a palette from zero frames")

    if truncated:
        warnings.warn(
            f"More than {max_colors} color buckets found; keeping the first {max_colors}",
            stacklevel=2,
        )
        logger.info("Palette truncated to %d colors", max_colors)

    entries: List[RGBA8] = [TRANSPARENT_ENTRY] + colors
    size = len(entries)
    entries.extend([entries[-1]] * (PALETTE_SIZE - size))
    return Palette(tuple(entries), size, truncated)


def _distances(pixels: NDArray, palette_array: NDArray) -> NDArray:
    # 4 * (dR² + dG² + dB²) + dA², i.e. alpha counts a quarter, kept in integers
    diff = pixels[:, None, :].astype(np.int64) - palette_array[None, :, :].astype(np.int64)
    sq = diff * diff
    return 4 * sq[..., :3].sum(axis=-1) + sq[..., 3]


def nearest_color(pixel: Union[RGBA8, NDArray], palette: Palette) -> int:
    """
    Index of the palette entry closest to ``pixel``.

    Distance is ``dR² + dG² + dB² + dA²/4``; ties go to the lowest index.
    """
    pixel_arr = np.asarray(pixel, dtype=np.int64).reshape(1, 4)
    return int(np.argmin(_distances(pixel_arr, palette.as_array())[0]))


def quantize(frame: FrameLike, palette: Palette) -> NDArray:
    """
    Map every pixel of a frame to a palette index.

    Fully transparent pixels always map to index 0; every other pixel goes to
    its ``nearest_color``.

    Returns:
        (height, width) uint8 index array
    """
    pixels = _frame_pixels(frame)
    height, width = pixels.shape[:2]
    flat = pixels.reshape(-1, 4)

    packed = flat.astype(np.uint32)
    packed = (packed[:, 0] << 24) | (packed[:, 1] << 16) | (packed[:, 2] << 8) | packed[:, 3]
    _, first, inverse = np.unique(packed, return_index=True, return_inverse=True)
    unique_pixels = flat[first]

    palette_array = palette.as_array()
    lookup = np.zeros(unique_pixels.shape[0], dtype=np.uint8)
    for begin in range(0, unique_pixels.shape[0], _QUANTIZE_CHUNK):
        chunk = unique_pixels[begin:begin + _QUANTIZE_CHUNK]
        lookup[begin:begin + len(chunk)] = np.argmin(_distances(chunk, palette_array), axis=1)
    lookup[unique_pixels[:, 3] == 0] = 0

    return lookup[inverse.reshape(-1)].reshape(height, width)
