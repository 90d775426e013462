"""Label text for colors, written in each space's native notation."""
from __future__ import annotations
from typing import Callable, Dict

from ..types.color_types import ColorSpace
from .color import Color


def _rgb(color: Color) -> str:
    r, g, b, _ = color.rgba()
    return f"rgb({r * 255:.0f}, {g * 255:.0f}, {b * 255:.0f})"


def _hsl(color: Color) -> str:
    h, s, l = color.convert(ColorSpace.HSL).coords
    return f"hsl({h:.0f}, {s * 100:.0f}%, {l * 100:.0f}%)"


def _lab(color: Color) -> str:
    L, a, b = color.convert(ColorSpace.LAB).coords
    return f"lab({L:.0f}, {a:.1f}, {b:.1f})"


def _oklab(color: Color) -> str:
    L, a, b = color.convert(ColorSpace.OKLAB).coords
    return f"oklab({L:.2f}, {a:.2f}, {b:.2f})"


def _lch(color: Color) -> str:
    L, c, h = color.convert(ColorSpace.LCH).coords
    return f"lch({L:.0f}, {c:.1f}, {h:.0f})"


def _oklch(color: Color) -> str:
    L, c, h = color.convert(ColorSpace.OKLCH).coords
    return f"oklch({L:.2f}, {c:.2f}, {h:.0f})"


LABEL_FORMATTERS: Dict[ColorSpace, Callable[[Color], str]] = {
    ColorSpace.SRGB: _rgb,
    ColorSpace.HSL: _hsl,
    ColorSpace.LAB: _lab,
    ColorSpace.OKLAB: _oklab,
    ColorSpace.LCH: _lch,
    ColorSpace.OKLCH: _oklch,
}


def format_color(color: Color, space: ColorSpace) -> str:
    """
    Render a color as label text in the notation of ``space``.

    Spaces without a dedicated notation fall back to the hex code.
    """
    formatter = LABEL_FORMATTERS.get(ColorSpace.parse(space))
    if formatter is None:
        return color.to_hex()
    return formatter(color)
