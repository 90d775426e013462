"""
Gradient Bars
=============

Rounded gradient bars with a label row underneath: the start color in the
space's own notation on the left, the space name in the middle and the end
color right-aligned.
"""
from __future__ import annotations
from typing import Optional, Tuple

import numpy as np

from ..colors.color import Color
from ..colors.formatting import format_color
from ..config import RenderConfig
from ..gradients.compositor import gradient_rgba8
from ..raster.canvas import Canvas
from ..raster.downscale import downscale
from ..raster.rasterizer import fill_rounded_rect
from ..raster.text import FontConfig, TextColor, draw_label
from ..types.color_types import ColorSpace, display_names

# Spaces rendered as gradient bars
GRADIENT_SPACES: Tuple[ColorSpace, ...] = (
    ColorSpace.SRGB,
    ColorSpace.HSL,
    ColorSpace.LAB,
    ColorSpace.OKLAB,
    ColorSpace.LCH,
    ColorSpace.OKLCH,
)

# Height (final pixels) of the label row below the bar
LABEL_ROW_HEIGHT = 20


def space_title(space: ColorSpace) -> str:
    if space == ColorSpace.SRGB:
        return "RGB"
    return display_names[space].upper()


def render_gradient_bar(
    start: Color,
    end: Color,
    space: ColorSpace,
    text_color: TextColor,
    config: Optional[RenderConfig] = None,
    font: Optional[FontConfig] = None,
) -> Canvas:
    """
    Render one gradient bar image.

    Args:
        start: left color
        end: right color
        space: interpolation space
        text_color: label color variant
        config: RenderConfig (sizes, supersample factor)
        font: FontConfig; loaded from ``config`` when omitted

    Returns:
        Canvas at final resolution
    """
    config = config or RenderConfig()
    s = config.supersample
    font = font or FontConfig.load(config.font_size, s)
    space = ColorSpace.parse(space)

    width = config.gradient_width
    height = config.gradient_height + config.padding + LABEL_ROW_HEIGHT
    canvas = Canvas.oversampled(width, height, s)

    # One gradient color per final column, repeated across its oversampled block
    columns = np.repeat(gradient_rgba8(start, end, width, space), s, axis=0)
    columns[:, 3] = 255
    bar_height = config.gradient_height * s
    fill_rounded_rect(canvas, 0, 0, canvas.width, bar_height, config.corner_radius * s, columns)

    text_y = bar_height + (canvas.height - bar_height) / 2
    left = config.padding * s
    draw_label(canvas, left, text_y, format_color(start, space), font, text_color)
    draw_label(canvas, canvas.width / 2, text_y, space_title(space), font, text_color, align="center")
    draw_label(canvas, canvas.width - left, text_y, format_color(end, space), font, text_color,
               align="right")
    return downscale(canvas)
