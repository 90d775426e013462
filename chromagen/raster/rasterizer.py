"""
Rasterizer
==========

Drawing primitives shared by every renderer. All functions draw into the
Canvas they are given and never allocate a new one.

Features:
    - Thick Bresenham lines (square brush, replace or blend)
    - Analytically anti-aliased rounded rectangles, solid or per-column fill
    - Point splats (disks) for point clouds, overwrite or straight-alpha blend
"""
from __future__ import annotations
import math
from typing import List, Sequence, Tuple, Union

import numpy as np
from numpy import ndarray as NDArray

from .canvas import Canvas, ColorLike, as_rgba8, composite_over

Number = Union[int, float]


def _round(value: Number) -> int:
    return int(math.floor(value + 0.5))


# =============================================================================
# Index-level writes
# =============================================================================

def _flat_buffer(canvas: Canvas) -> NDArray:
    return canvas.pixels.reshape(-1, 4)


def _occurrence_rank(flat: NDArray) -> NDArray:
    """For each entry, how many earlier entries hit the same pixel."""
    n = flat.shape[0]
    order = np.argsort(flat, kind="stable")
    sorted_flat = flat[order]
    starts = np.ones(n, dtype=bool)
    starts[1:] = sorted_flat[1:] != sorted_flat[:-1]
    positions = np.arange(n)
    group_start = np.maximum.accumulate(np.where(starts, positions, 0))
    rank = np.empty(n, dtype=np.int64)
    rank[order] = positions - group_start
    return rank


def _write_overwrite(canvas: Canvas, flat: NDArray, colors: NDArray) -> None:
    """Replace pixels; when an index repeats the last write wins."""
    if flat.size == 0:
        return
    _, first_in_reversed = np.unique(flat[::-1], return_index=True)
    keep = flat.shape[0] - 1 - first_in_reversed
    _flat_buffer(canvas)[flat[keep]] = colors[keep]


def _write_blend(canvas: Canvas, flat: NDArray, colors: NDArray) -> None:
    """Composite writes in order; repeated indices are applied one layer at a time."""
    if flat.size == 0:
        return
    buffer = _flat_buffer(canvas)
    rank = _occurrence_rank(flat)
    for layer in range(int(rank.max()) + 1):
        selected = rank == layer
        idx = flat[selected]
        buffer[idx] = composite_over(buffer[idx], colors[selected])


def _scatter(canvas: Canvas, xs: NDArray, ys: NDArray, colors: NDArray, blend: bool) -> None:
    inside = (xs >= 0) & (xs < canvas.width) & (ys >= 0) & (ys < canvas.height)
    flat = ys[inside] * canvas.width + xs[inside]
    colors = colors[inside]
    if blend:
        _write_blend(canvas, flat, colors)
    else:
        _write_overwrite(canvas, flat, colors)


# =============================================================================
# Lines
# =============================================================================

def bresenham(x0: int, y0: int, x1: int, y1: int) -> List[Tuple[int, int]]:
    """Integer points on the segment from (x0, y0) to (x1, y1), endpoints included."""
    points = []
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    x, y = x0, y0
    while True:
        points.append((x, y))
        if x == x1 and y == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x += sx
        if e2 <= dx:
            err += dx
            y += sy
    return points


def _brush_offsets(thickness: int) -> NDArray:
    low = -(thickness // 2)
    span = np.arange(low, low + thickness)
    ox, oy = np.meshgrid(span, span)
    return np.stack([ox.ravel(), oy.ravel()], axis=-1)


def draw_line(
    canvas: Canvas,
    x0: Number, y0: Number,
    x1: Number, y1: Number,
    color: ColorLike,
    thickness: int = 1,
    blend: bool = False,
) -> None:
    """
    Draw a thick line with a square brush.

    Args:
        canvas: target canvas
        x0, y0, x1, y1: endpoints (rounded to the nearest pixel)
        color: RGB or RGBA
        thickness: side of the square brush in pixels
        blend: alpha-composite instead of replacing pixels; each pixel is
            blended once even where brush steps overlap
    """
    if thickness < 1:
        raise ValueError(f"thickness must be >= 1, got {thickness}")
    points = np.array(bresenham(_round(x0), _round(y0), _round(x1), _round(y1)))
    offsets = _brush_offsets(thickness)
    covered = (points[:, None, :] + offsets[None, :, :]).reshape(-1, 2)

    inside = ((covered[:, 0] >= 0) & (covered[:, 0] < canvas.width)
              & (covered[:, 1] >= 0) & (covered[:, 1] < canvas.height))
    flat = np.unique(covered[inside, 1] * canvas.width + covered[inside, 0])
    rgba = np.broadcast_to(as_rgba8(color), (flat.shape[0], 4))

    buffer = _flat_buffer(canvas)
    if blend:
        buffer[flat] = composite_over(buffer[flat], rgba)
    else:
        buffer[flat] = rgba


def draw_polyline(
    canvas: Canvas,
    points: Sequence[Tuple[Number, Number]],
    color: ColorLike,
    thickness: int = 1,
    closed: bool = False,
    blend: bool = False,
) -> None:
    pairs = list(zip(points[:-1], points[1:]))
    if closed and len(points) > 2:
        pairs.append((points[-1], points[0]))
    for (xa, ya), (xb, yb) in pairs:
        draw_line(canvas, xa, ya, xb, yb, color, thickness, blend)


# =============================================================================
# Rounded rectangles
# =============================================================================

def coverage_alpha(distance: float, radius: float) -> int:
    """
    Edge coverage for a pixel at ``distance`` from a corner circle's center.

    Fully opaque inside ``radius - 0.5``, fully transparent beyond
    ``radius + 0.5``, and a linear ramp ``0.5 - (distance - radius)`` across the
    one-pixel band in between.
    """
    if distance <= radius - 0.5:
        return 255
    if distance >= radius + 0.5:
        return 0
    return int((0.5 - (distance - radius)) * 255)


def _np_coverage_alpha(distance: NDArray, radius: float) -> NDArray:
    ramp = np.clip(0.5 - (distance - radius), 0.0, 1.0)
    return (ramp * 255).astype(np.uint8)


def _corner_distance(px: NDArray, py: NDArray, width: int, height: int, radius: float) -> NDArray:
    # Nearest point of the inner rectangle; zero inside the central cross
    cx = np.clip(px, radius, width - radius)
    cy = np.clip(py, radius, height - radius)
    return np.hypot(px - cx, py - cy)


def _effective_radius(width: int, height: int, radius: float) -> float:
    return max(0.0, min(float(radius), width / 2, height / 2))


def rounded_rect_alpha(x: int, y: int, width: int, height: int, radius: float) -> int:
    """
    Alpha of pixel (x, y) inside a ``width x height`` rounded rectangle.

    The corner distance is taken from the pixel center (x + 0.5, y + 0.5) to the
    nearest point of the inner rectangle inset by the radius.
    """
    if not (0 <= x < width and 0 <= y < height):
        return 0
    r = _effective_radius(width, height, radius)
    d = float(_corner_distance(np.array(x + 0.5), np.array(y + 0.5), width, height, r))
    if d == 0.0:
        return 255
    return coverage_alpha(d, r)


def rounded_rect_mask(width: int, height: int, radius: float) -> NDArray:
    """
    Alpha mask of a rounded rectangle, measured at pixel centers.

    Returns:
        (height, width) uint8 array
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Rectangle size must be positive, got {width}x{height}")
    r = _effective_radius(width, height, radius)
    px = np.arange(width, dtype=np.float64)[None, :] + 0.5
    py = np.arange(height, dtype=np.float64)[:, None] + 0.5
    d = _corner_distance(px, py, width, height, r)
    return np.where(d == 0.0, 255, _np_coverage_alpha(d, r)).astype(np.uint8)


def fill_rounded_rect(
    canvas: Canvas,
    x: int, y: int,
    width: int, height: int,
    radius: float,
    color: Union[ColorLike, NDArray],
) -> None:
    """
    Composite an anti-aliased rounded rectangle onto the canvas.

    Args:
        canvas: target canvas
        x, y: top-left corner
        width, height: rectangle size
        radius: corner radius
        color: a single RGB(A) color, or an array of shape (width, 3|4) giving
            one color per column (gradient bars)
    """
    mask = rounded_rect_mask(width, height, radius)
    rgba = as_rgba8(color)
    if rgba.ndim == 1:
        rgba = np.broadcast_to(rgba, (height, width, 4))
    elif rgba.shape == (width, 4):
        rgba = np.broadcast_to(rgba[None, :, :], (height, width, 4))
    else:
        raise ValueError(f"Color array must have shape ({width}, 3|4), got {rgba.shape}")

    src = rgba.astype(np.int64)
    src_alpha = (src[..., 3] * mask.astype(np.int64) + 127) // 255
    src = np.concatenate([src[..., :3], src_alpha[..., None]], axis=-1).astype(np.uint8)

    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + width, canvas.width), min(y + height, canvas.height)
    if x1 <= x0 or y1 <= y0:
        return
    region = canvas.pixels[y0:y1, x0:x1]
    region[...] = composite_over(region, src[y0 - y:y1 - y, x0 - x:x1 - x])


# =============================================================================
# Point splats
# =============================================================================

def disk_offsets(radius: float) -> NDArray:
    """(K, 2) integer offsets covering a disk; radius 0 is a single pixel."""
    reach = int(math.ceil(radius))
    span = np.arange(-reach, reach + 1)
    ox, oy = np.meshgrid(span, span)
    inside = ox ** 2 + oy ** 2 <= radius ** 2
    return np.stack([ox[inside], oy[inside]], axis=-1)


def splat_points(
    canvas: Canvas,
    xs: NDArray,
    ys: NDArray,
    colors: Union[ColorLike, NDArray],
    radius: float = 1.0,
    blend: bool = True,
) -> None:
    """
    Draw a disk at each (x, y), in array order.

    Args:
        canvas: target canvas
        xs, ys: screen coordinates, shape (N,)
        colors: one RGB(A) color, or (N, 3|4) per-point colors
        radius: disk radius in pixels
        blend: straight-alpha blend (resulting alpha is the max of both);
            when False later points replace earlier ones
    """
    xs = np.floor(np.asarray(xs, dtype=np.float64) + 0.5).astype(np.int64)
    ys = np.floor(np.asarray(ys, dtype=np.float64) + 0.5).astype(np.int64)
    n = xs.shape[0]
    if n == 0:
        return
    rgba = as_rgba8(colors)
    if rgba.ndim == 1:
        rgba = np.broadcast_to(rgba, (n, 4))

    offsets = disk_offsets(radius)
    k = offsets.shape[0]
    px = (xs[:, None] + offsets[None, :, 0]).ravel()
    py = (ys[:, None] + offsets[None, :, 1]).ravel()
    per_pixel = np.repeat(rgba, k, axis=0)
    _scatter(canvas, px, py, per_pixel, blend)


def splat(canvas: Canvas, x: Number, y: Number, color: ColorLike, radius: float = 1.0,
          blend: bool = True) -> None:
    splat_points(canvas, np.array([x]), np.array([y]), color, radius, blend)


def draw_disk(canvas: Canvas, cx: Number, cy: Number, radius: float, color: ColorLike) -> None:
    """Solid disk that replaces whatever is underneath."""
    splat(canvas, cx, cy, color, radius, blend=False)


def fill_rect(canvas: Canvas, x: int, y: int, width: int, height: int, color: ColorLike) -> None:
    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + width, canvas.width), min(y + height, canvas.height)
    if x1 > x0 and y1 > y0:
        canvas.pixels[y0:y1, x0:x1] = as_rgba8(color)

