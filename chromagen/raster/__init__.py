from .canvas import Canvas, BLACK, TRANSPARENT, WHITE, as_rgba8, composite_over
from .crop import BoundingBox, bounding_box, crop
from .downscale import downscale
from .rasterizer import (
    bresenham,
    coverage_alpha,
    draw_disk,
    draw_line,
    draw_polyline,
    fill_rect,
    fill_rounded_rect,
    rounded_rect_alpha,
    rounded_rect_mask,
    splat,
    splat_points,
)
from .text import FontConfig, TextColor, draw_label, draw_text

__all__ = [
    "Canvas",
    "BLACK",
    "TRANSPARENT",
    "WHITE",
    "as_rgba8",
    "composite_over",
    "BoundingBox",
    "bounding_box",
    "crop",
    "downscale",
    "bresenham",
    "coverage_alpha",
    "draw_disk",
    "draw_line",
    "draw_polyline",
    "fill_rect",
    "fill_rounded_rect",
    "rounded_rect_alpha",
    "rounded_rect_mask",
    "splat",
    "splat_points",
    "FontConfig",
    "TextColor",
    "draw_label",
    "draw_text",
]
