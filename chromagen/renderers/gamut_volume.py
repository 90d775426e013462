"""
Single-space gamut volume: the RGB cube of one space, sampled in its own
coordinates and shown in the colors it actually produces on an sRGB display.
"""
from __future__ import annotations
import math
from typing import Optional

import numpy as np

from ..config import RenderConfig
from ..geometry.projector import Projector3D, ViewParams
from ..raster.canvas import Canvas
from ..raster.crop import crop
from ..raster.downscale import downscale
from ..raster.rasterizer import draw_line, splat_points
from ..raster.text import FontConfig, TextColor, draw_label
from ..sampling.sampler import ColorSpaceSampler
from ..types.color_types import ColorSpace, display_names

VOLUME_STEP = 0.03
VIEW_ANGLE_Y = math.radians(45.0)
VIEW_ANGLE_X = math.radians(30.0)
SCALE_RATIO = 0.35
HALO_ALPHA = 128
AXIS_THICKNESS = 3
AXES = (
    ((1.0, 0.0, 0.0), (255, 50, 50, 255), "R"),
    ((0.0, 1.0, 0.0), (50, 255, 50, 255), "G"),
    ((0.0, 0.0, 1.0), (50, 50, 255, 255), "B"),
)
# Final pixels
LABEL_BAND = 30
PADDING = 10
AXIS_LABEL_OFFSET = 8


def render_gamut_volume(
    space: ColorSpace,
    text_color: TextColor,
    config: Optional[RenderConfig] = None,
    font: Optional[FontConfig] = None,
) -> Canvas:
    """
    Render the RGB cube of ``space`` as a depth-ordered point volume.

    Each sample keeps the nearest point per pixel, with a dim halo filling the
    transparent pixels around it. R/G/B axes run from the black corner and the
    space name sits in a label band under the volume.

    Args:
        space: RGB-like ColorSpace
        text_color: label color variant
        config: RenderConfig (volume size, supersample factor)
        font: FontConfig; loaded from ``config`` when omitted

    Returns:
        Canvas at final resolution
    """
    config = config or RenderConfig()
    space = ColorSpace.parse(space)
    s = config.supersample
    font = font or FontConfig.load(config.font_size, s)

    canvas = Canvas.oversampled(config.gamut_volume_width, config.gamut_volume_height, s)
    view = ViewParams(canvas.width / 2, canvas.height / 2, canvas.width * SCALE_RATIO)
    projector = Projector3D(view, angle_y=VIEW_ANGLE_Y, angle_x=VIEW_ANGLE_X)

    batch = ColorSpaceSampler.cube(space, VOLUME_STEP).batch()
    xs, ys, depth = projector.project_points(batch.coords - 0.5)
    order = np.argsort(depth, kind="stable")
    xs, ys = xs[order], ys[order]
    colors = batch.rgba8()[order]

    halo = colors.copy()
    halo[:, :3] //= 3
    halo[:, 3] = HALO_ALPHA
    # Overwritten in reverse depth order, so the farthest halo over a pixel wins
    splat_points(canvas, xs[::-1], ys[::-1], halo[::-1], radius=1.5 * s, blend=False)
    splat_points(canvas, xs, ys, colors, radius=0.5 * s, blend=False)

    origin_x, origin_y, _ = projector.project_point((-0.5, -0.5, -0.5))
    for direction, color, label in AXES:
        tip = tuple(c - 0.5 for c in direction)
        x, y, _ = projector.project_point(tip)
        draw_line(canvas, origin_x, origin_y, x, y, color, AXIS_THICKNESS * s)
        draw_label(canvas, x + AXIS_LABEL_OFFSET * s, y, label, font, text_color)

    cropped = crop(canvas, padding=PADDING * s)
    band = LABEL_BAND * s
    framed = Canvas(cropped.width, cropped.height + band, supersample=s)
    framed.pixels[:cropped.height] = cropped.pixels
    draw_label(framed, framed.width / 2, cropped.height + band / 2, display_names[space], font,
               text_color, align="center")
    return downscale(framed)
