"""Color stop swatches: start and end colors as rounded squares with hex labels."""
from __future__ import annotations
from typing import Optional

from ..colors.color import Color
from ..config import RenderConfig
from ..raster.canvas import Canvas
from ..raster.downscale import downscale
from ..raster.rasterizer import fill_rounded_rect
from ..raster.text import FontConfig, TextColor, draw_label

# Gap (final pixels) between a swatch and its label
LABEL_GAP = 10


def stop_size(config: RenderConfig) -> int:
    """Swatch side: two thirds of the gradient bar height."""
    return config.gradient_height * 2 // 3


def render_stops(
    start: Color,
    end: Color,
    text_color: TextColor,
    config: Optional[RenderConfig] = None,
    font: Optional[FontConfig] = None,
) -> Canvas:
    """
    Render the start swatch at the left edge (label to its right) and the end
    swatch flush with the right edge (label to its left).
    """
    config = config or RenderConfig()
    s = config.supersample
    font = font or FontConfig.load(config.font_size, s)

    size = stop_size(config)
    canvas = Canvas.oversampled(config.gradient_width, size + 2 * config.stops_padding, s)
    top = config.stops_padding * s
    side = size * s
    radius = config.corner_radius * s
    center_y = top + side / 2

    fill_rounded_rect(canvas, 0, top, side, side, radius, start.with_alpha(1.0).rgba8())
    draw_label(canvas, side + LABEL_GAP * s, center_y, start.to_hex(), font, text_color)

    end_x = canvas.width - side
    fill_rounded_rect(canvas, end_x, top, side, side, radius, end.with_alpha(1.0).rgba8())
    draw_label(canvas, end_x - LABEL_GAP * s, center_y, end.to_hex(), font, text_color, align="right")
    return downscale(canvas)
