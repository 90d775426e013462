"""Chromagen: rendering and quantization pipeline for color-space documentation images."""

from .types import ColorSpace
from .colors import Color, format_color
from .conversions import convert, np_convert
from .config import AnimationConfig, PaletteConfig, RenderConfig, RunConfig
from .errors import ChromagenError, EmptyInputError, SetupError
from .logging_config import configure_logging

from .sampling import Axis, ColorSpaceSampler, Sample, SampleBatch
from .geometry import Projector3D, ViewParams, project, rotate
from .raster import BoundingBox, Canvas, FontConfig, TextColor, bounding_box, crop, downscale
from .gradients import HueMode, gradient
from .quantize import Palette, build_palette, nearest_color, quantize
from .animation import MODELS, Animation, Frame, FrameAnimator, frame_angle
from .output import OutputLayout
from .renderers import (
    GamutSpec,
    render_chromaticity,
    render_gamut_comparison,
    render_gamut_volume,
    render_gradient_bar,
    render_stops,
)
from .pipeline import (
    RunReport,
    generate_all,
    generate_animations,
    generate_chromaticity,
    generate_gamuts,
    generate_gifs,
    generate_gradients,
    generate_stops,
)

__all__ = [
    # colors
    "ColorSpace",
    "Color",
    "format_color",
    "convert",
    "np_convert",
    # configuration
    "AnimationConfig",
    "PaletteConfig",
    "RenderConfig",
    "RunConfig",
    "configure_logging",
    # errors
    "ChromagenError",
    "EmptyInputError",
    "SetupError",
    # pipeline stages
    "Axis",
    "ColorSpaceSampler",
    "Sample",
    "SampleBatch",
    "Projector3D",
    "ViewParams",
    "project",
    "rotate",
    "BoundingBox",
    "Canvas",
    "FontConfig",
    "TextColor",
    "bounding_box",
    "crop",
    "downscale",
    "HueMode",
    "gradient",
    "Palette",
    "build_palette",
    "nearest_color",
    "quantize",
    "MODELS",
    "Animation",
    "Frame",
    "FrameAnimator",
    "frame_angle",
    "OutputLayout",
    # renderers
    "GamutSpec",
    "render_chromaticity",
    "render_gamut_comparison",
    "render_gamut_volume",
    "render_gradient_bar",
    "render_stops",
    # runner
    "RunReport",
    "generate_all",
    "generate_animations",
    "generate_chromaticity",
    "generate_gamuts",
    "generate_gifs",
    "generate_gradients",
    "generate_stops",
]
