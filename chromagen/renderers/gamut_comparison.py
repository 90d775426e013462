"""
XYZ Gamut Comparison
====================

Several RGB gamuts overlaid in one isometric XYZ plot: a translucent point
cloud per gamut, its cube wireframe on top, XYZ axes, a title and a legend.

The plot is scaled to fit the actual XYZ extent of all gamuts (bounds padded by
10%) rather than using a fixed scale, so adding or removing a gamut keeps the
picture framed.
"""
from __future__ import annotations
import logging
import math
from typing import Optional, Sequence, Tuple

import numpy as np
from numpy import ndarray as NDArray

from ..config import RenderConfig
from ..geometry.projector import CUBE_EDGES, Projector3D, ViewParams
from ..raster.canvas import Canvas
from ..raster.crop import bounding_box, crop
from ..raster.downscale import downscale
from ..raster.rasterizer import draw_line, fill_rect, splat_points
from ..raster.text import FontConfig, TextColor, draw_label
from ..sampling.sampler import ColorSpaceSampler
from ..types.color_types import ColorSpace
from .gamuts import GamutSpec

logger = logging.getLogger(__name__)

TITLE = "RGB Gamuts in XYZ Color Space"

VIEW_ANGLE_Y = math.radians(45.0)
VIEW_ANGLE_X = math.radians(30.0)
BOUNDS_STEP = 0.1
BOUNDS_PADDING = 0.1
CLOUD_STEP = 0.05
# Oversampled pixels
POINT_RADIUS = 2
WIREFRAME_THICKNESS = 5
AXIS_THICKNESS = 3
AXIS_COLORS = (
    (255, 100, 100, 255),
    (100, 255, 100, 255),
    (100, 100, 255, 255),
)
# Final pixels
LEGEND_SQUARE = 20
LEGEND_SPACING = 35
LEGEND_GAP = 10


def xyz_bounds(gamuts: Sequence[GamutSpec], step: float = BOUNDS_STEP,
               padding: float = BOUNDS_PADDING) -> Tuple[NDArray, NDArray]:
    """
    Padded XYZ bounding box over every gamut's RGB cube.

    Returns:
        (minimum, maximum) arrays of shape (3,)
    """
    lows, highs = [], []
    for gamut in gamuts:
        # Every sample counts here, in gamut of sRGB or not
        batch = ColorSpaceSampler.cube(gamut.space, step).batch(gamut_filter=False)
        xyz = batch.to(ColorSpace.XYZ)
        lows.append(xyz.min(axis=0))
        highs.append(xyz.max(axis=0))
    low = np.min(lows, axis=0)
    high = np.max(highs, axis=0)
    span = high - low
    return low - span * padding, high + span * padding


def _legend_height(count: int, s: int) -> int:
    return count * LEGEND_SPACING * s


def render_gamut_comparison(
    gamuts: Sequence[GamutSpec],
    text_color: TextColor,
    config: Optional[RenderConfig] = None,
    font: Optional[FontConfig] = None,
) -> Canvas:
    """
    Render the multi-gamut XYZ comparison.

    Args:
        gamuts: gamuts to overlay, drawn in order
        text_color: label color variant
        config: RenderConfig (plot size, supersample factor)
        font: FontConfig; loaded from ``config`` when omitted

    Returns:
        Cropped canvas at final resolution
    """
    config = config or RenderConfig()
    s = config.supersample
    font = font or FontConfig.load(config.font_size, s)
    if not gamuts:
        raise ValueError("At least one gamut is required")

    width, height = config.gamut_width * s, config.gamut_height * s
    label_reserve = height * 0.15
    legend_top = int(height - label_reserve * 0.5)
    # Grow the canvas downwards when the legend does not fit
    canvas_height = max(height, legend_top + _legend_height(len(gamuts), s))
    canvas_height = -(-canvas_height // s) * s
    canvas = Canvas(width, canvas_height, supersample=s)

    low, high = xyz_bounds(gamuts)
    center = (low + high) / 2
    max_range = float(np.max(high - low))
    uniform_scale = min(width * 0.7, height * 0.6) / max_range
    view = ViewParams(width / 2, (height - label_reserve) / 2, uniform_scale)
    projector = Projector3D(view, angle_y=VIEW_ANGLE_Y, angle_x=VIEW_ANGLE_X)

    for gamut in gamuts:
        batch = ColorSpaceSampler.cube(gamut.space, CLOUD_STEP).batch()
        xs, ys, _ = projector.project_points(gamut.to_xyz(batch.coords) - center)
        splat_points(canvas, xs, ys, gamut.color, POINT_RADIUS, blend=True)

    for gamut in gamuts:
        for a, b in CUBE_EDGES:
            ends = gamut.to_xyz(np.array([a, b])) - center
            xs, ys, _ = projector.project_points(ends)
            draw_line(canvas, xs[0], ys[0], xs[1], ys[1], gamut.color, WIREFRAME_THICKNESS, blend=True)

    axis_length = max_range * 0.3
    for i, color in enumerate(AXIS_COLORS):
        tip = np.zeros(3)
        tip[i] = axis_length
        x, y, _ = projector.project_point(tuple(tip))
        draw_line(canvas, view.center_x, view.center_y, x, y, color, AXIS_THICKNESS)

    legend_x = int(width * 0.05)
    legend_right = legend_x
    for i, gamut in enumerate(gamuts):
        square = LEGEND_SQUARE * s
        top = legend_top + i * LEGEND_SPACING * s
        fill_rect(canvas, legend_x, top, square, square, gamut.color)
        label_x = legend_x + square + LEGEND_GAP * s
        left, _, text_width, _ = draw_label(canvas, label_x, top + square / 2, gamut.label, font, text_color)
        legend_right = max(legend_right, left + text_width)

    draw_label(canvas, width / 2, height * 0.05, TITLE, font, text_color, align="center")

    legend_bottom = legend_top + _legend_height(len(gamuts), s)
    box = bounding_box(canvas).extend(legend_x, legend_top, legend_right, legend_bottom - 1)
    logger.debug("Gamut comparison content box %s", box)
    return downscale(crop(canvas, box, padding=config.crop_padding * s))
