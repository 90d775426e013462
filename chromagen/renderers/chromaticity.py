"""
CIE 1931 xy Chromaticity Diagrams
=================================

Per-space chromaticity plots: the colors of the space's RGB cube placed at their
xy chromaticity, the spectral locus with its purple line, the gamut triangle
and the D65 white point.

The colored fill is built at output resolution (several cube samples can land
on one pixel and are averaged, gaps are filled from the nearest colored pixel)
and then upscaled so the outlines can be drawn on the oversampled canvas.
"""
from __future__ import annotations
import logging
from typing import Optional, Tuple

import numpy as np
from numpy import ndarray as NDArray

from ..config import RenderConfig
from ..conversions import D65_WHITE_XY, np_convert, primaries_xy
from ..raster.canvas import WHITE, Canvas
from ..raster.downscale import downscale
from ..raster.rasterizer import draw_disk, draw_line, draw_polyline
from ..sampling.sampler import ColorSpaceSampler
from ..types.color_types import ColorSpace

logger = logging.getLogger(__name__)

X_RANGE = (0.0, 0.8)
Y_RANGE = (0.0, 0.9)
MARGIN = 50
FILL_STEP = 0.02
FILL_RADIUS = 10
MIN_XYZ_SUM = 0.001
LOCUS_COLOR = (150, 150, 150, 255)
PURPLE_LINE_COLOR = (100, 100, 100, 255)
WHITE_POINT_RADIUS = 5

# CIE 1931 2-degree spectral locus, 380-700 nm in 10 nm steps
SPECTRAL_LOCUS = np.array([
    (0.1741, 0.0050), (0.1738, 0.0049), (0.1733, 0.0048), (0.1726, 0.0048),
    (0.1714, 0.0051), (0.1689, 0.0069), (0.1644, 0.0109), (0.1566, 0.0177),
    (0.1440, 0.0297), (0.1241, 0.0578), (0.0913, 0.1327), (0.0454, 0.2950),
    (0.0082, 0.5384), (0.0139, 0.7502), (0.0743, 0.8338), (0.1547, 0.8059),
    (0.2296, 0.7543), (0.3016, 0.6923), (0.3731, 0.6245), (0.4441, 0.5547),
    (0.5125, 0.4866), (0.5752, 0.4242), (0.6270, 0.3725), (0.6658, 0.3340),
    (0.6915, 0.3083), (0.7079, 0.2920), (0.7190, 0.2809), (0.7260, 0.2740),
    (0.7300, 0.2700), (0.7320, 0.2680), (0.7334, 0.2666), (0.7344, 0.2656),
    (0.7347, 0.2653),
])


class XYMapping:
    """Linear map from the xy plot range to pixel coordinates (y grows downwards)."""

    def __init__(self, width: int, height: int, margin: float) -> None:
        self.margin = margin
        self.scale_x = (width - 2 * margin) / (X_RANGE[1] - X_RANGE[0])
        self.scale_y = (height - 2 * margin) / (Y_RANGE[1] - Y_RANGE[0])

    def __call__(self, x, y) -> Tuple[NDArray, NDArray]:
        px = self.margin + self.scale_x * (np.asarray(x) - X_RANGE[0])
        py = self.margin + self.scale_y * (Y_RANGE[1] - np.asarray(y))
        return px, py


def xyz_to_xy(xyz: NDArray) -> Tuple[NDArray, NDArray]:
    """
    XYZ -> xy chromaticity, dropping samples too dark to carry a chromaticity.

    Returns:
        (xy, keep) where xy has one row per kept sample and keep is the boolean mask
    """
    total = xyz.sum(axis=-1)
    keep = total > MIN_XYZ_SUM
    xy = xyz[keep, :2] / total[keep, None]
    return xy, keep


def _average_fill(width: int, height: int, px: NDArray, py: NDArray, rgb: NDArray) -> NDArray:
    """Mean color of the samples landing on each pixel, as an (h, w, 4) uint8 image."""
    xi = px.astype(np.int64)
    yi = py.astype(np.int64)
    inside = (xi >= 0) & (xi < width) & (yi >= 0) & (yi < height)
    flat = yi[inside] * width + xi[inside]
    sums = np.zeros((width * height, 3), dtype=np.float64)
    counts = np.zeros(width * height, dtype=np.int64)
    np.add.at(sums, flat, rgb[inside])
    np.add.at(counts, flat, 1)

    out = np.zeros((width * height, 4), dtype=np.uint8)
    hit = counts > 0
    out[hit, :3] = np.floor(sums[hit] / counts[hit, None] * 255 + 0.5).clip(0, 255).astype(np.uint8)
    out[hit, 3] = 255
    return out.reshape(height, width, 4)


def fill_gaps(image: NDArray, radius: int = FILL_RADIUS) -> NDArray:
    """
    Give each transparent pixel the color of the nearest colored pixel within ``radius``.

    Neighbours are searched ring by ring outwards; within a ring the first offset
    in row-major order wins. Only pixels colored before the fill are sources.
    """
    height, width = image.shape[:2]
    filled = image[..., 3] > 0
    out = image.copy()
    remaining = ~filled

    padded = np.zeros((height + 2 * radius, width + 2 * radius, 4), dtype=image.dtype)
    padded[radius:radius + height, radius:radius + width] = image
    padded_filled = padded[..., 3] > 0

    span = np.arange(-radius, radius + 1)
    oy, ox = np.meshgrid(span, span, indexing="ij")
    dist2 = (ox ** 2 + oy ** 2).ravel()
    ring = np.ceil(np.sqrt(dist2)).astype(np.int64)
    offsets = np.stack([oy.ravel(), ox.ravel()], axis=-1)
    usable = (dist2 > 0) & (ring <= radius)
    order = np.lexsort((offsets[:, 1], offsets[:, 0], ring))

    for k in order:
        if not usable[k] or not remaining.any():
            continue
        dy, dx = offsets[k]
        window = (slice(radius + dy, radius + dy + height), slice(radius + dx, radius + dx + width))
        take = remaining & padded_filled[window]
        out[take] = padded[window][take]
        remaining &= ~take
    return out


def render_chromaticity(space: ColorSpace, config: Optional[RenderConfig] = None) -> Canvas:
    """
    Render the xy chromaticity diagram of one RGB space.

    Args:
        space: RGB-like ColorSpace whose cube fills the diagram
        config: RenderConfig (diagram size, supersample factor)

    Returns:
        Canvas at final resolution
    """
    config = config or RenderConfig()
    space = ColorSpace.parse(space)
    s = config.supersample
    size = config.chromaticity_size

    batch = ColorSpaceSampler.cube(space, FILL_STEP).batch()
    xy, keep = xyz_to_xy(np_convert(batch.coords, space, ColorSpace.XYZ))
    base_mapping = XYMapping(size, size, MARGIN)
    px, py = base_mapping(xy[:, 0], xy[:, 1])
    fill = fill_gaps(_average_fill(size, size, px, py, batch.rgb[keep]))
    logger.debug("Chromaticity fill for %s covers %d pixels", space.value, int((fill[..., 3] > 0).sum()))

    canvas = Canvas.from_array(np.repeat(np.repeat(fill, s, axis=0), s, axis=1), supersample=s)
    mapping = XYMapping(canvas.width, canvas.height, MARGIN * s)

    lx, ly = mapping(SPECTRAL_LOCUS[:, 0], SPECTRAL_LOCUS[:, 1])
    draw_polyline(canvas, list(zip(lx, ly)), LOCUS_COLOR, thickness=2 * s)
    draw_line(canvas, lx[-1], ly[-1], lx[0], ly[0], PURPLE_LINE_COLOR, thickness=s)

    primaries = primaries_xy(space)
    tx, ty = mapping(primaries[:, 0], primaries[:, 1])
    draw_polyline(canvas, list(zip(tx, ty)), WHITE, thickness=2 * s, closed=True)

    wx, wy = mapping(D65_WHITE_XY[0], D65_WHITE_XY[1])
    draw_disk(canvas, float(wx), float(wy), WHITE_POINT_RADIUS * s, WHITE)
    return downscale(canvas)
