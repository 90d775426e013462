"""
Text Rendering
==============

Label drawing on top of Pillow's font machinery. Fonts are described by a
``FontConfig`` built once per run (or per worker) and handed to every drawing
call.

Fallback chain used by ``FontConfig.load``:
    1. an explicit TrueType path, then the bundled Roboto / system DejaVu paths
    2. Pillow's scalable default font
    3. Pillow's fixed bitmap font, drawn at native size and scaled up with
       nearest-neighbour sampling to match the supersample factor
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional, Sequence, Tuple, Union

import numpy as np
from numpy import ndarray as NDArray
from PIL import Image, ImageDraw, ImageFont

from .canvas import BLACK, WHITE, Canvas, ColorLike, as_rgba8, composite_over

logger = logging.getLogger(__name__)

Align = Literal["left", "center", "right"]
AnyFont = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]

DEFAULT_FONT_PATHS: Tuple[str, ...] = (
    "fonts/Roboto/static/Roboto-Regular.ttf",
    "fonts/Roboto/static/Roboto-Medium.ttf",
    "fonts/Roboto/Roboto-Regular.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "DejaVuSans.ttf",
)

# Reference glyphs for a line box shared by every label of one font
_LINE_REFERENCE = "Ag|"


class TextColor(str, Enum):
    """Label color variants; white labels get a dark drop shadow for contrast."""
    BLACK = "black"
    WHITE = "white"

    @property
    def rgba(self):
        return BLACK if self is TextColor.BLACK else WHITE

    @property
    def has_shadow(self) -> bool:
        return self is TextColor.WHITE


@dataclass(frozen=True)
class FontConfig:
    font: AnyFont
    size: int
    scale: int
    is_vector: bool
    source: str

    @classmethod
    def load(
        cls,
        size: int = 16,
        scale: int = 1,
        font_path: Optional[str] = None,
        search_paths: Sequence[str] = DEFAULT_FONT_PATHS,
    ) -> FontConfig:
        """
        Resolve a font for ``size`` final pixels drawn on a ``scale``x canvas.

        Args:
            size: font size at final resolution
            scale: supersample factor of the canvases text is drawn on
            font_path: preferred TrueType/OpenType file
            search_paths: candidates tried after ``font_path``

        Returns:
            FontConfig describing the first font that loaded
        """
        if size <= 0 or scale < 1:
            raise ValueError(f"Invalid font size/scale: {size}/{scale}")

        candidates = ([font_path] if font_path else []) + list(search_paths)
        for path in candidates:
            try:
                font = ImageFont.truetype(path, size * scale)
            except OSError:
                continue
            logger.debug("Loaded font %s", path)
            return cls(font, size, scale, True, path)

        default = ImageFont.load_default(size=size * scale)
        if isinstance(default, ImageFont.FreeTypeFont):
            logger.debug("Using Pillow's scalable default font")
            return cls(default, size, scale, True, "pillow-default")

        logger.warning("No scalable font available; falling back to the bitmap font")
        return cls(ImageFont.load_default(), size, scale, False, "pillow-bitmap")

    @property
    def shadow_offset(self) -> int:
        """One final-resolution pixel, in canvas pixels."""
        return self.scale

    def _line_box(self) -> Tuple[int, int]:
        _, top, _, bottom = self.font.getbbox(_LINE_REFERENCE)
        return int(top), int(bottom)

    def render_mask(self, text: str) -> NDArray:
        """
        Rasterize ``text`` into a coverage mask at canvas resolution.

        Returns:
            (height, width) uint8 array; height is the font's line box so
            labels of the same font share a baseline
        """
        left, _, right, _ = self.font.getbbox(text)
        top, bottom = self._line_box()
        width = max(int(right - left), 1)
        height = max(bottom - top, 1)

        image = Image.new("L", (width, height), 0)
        ImageDraw.Draw(image).text((-left, -top), text, font=self.font, fill=255)
        if not self.is_vector and self.scale > 1:
            image = image.resize((width * self.scale, height * self.scale), Image.Resampling.NEAREST)
        return np.asarray(image, dtype=np.uint8)

    def measure(self, text: str) -> Tuple[int, int]:
        """(width, height) of ``text`` in canvas pixels."""
        mask = self.render_mask(text)
        return mask.shape[1], mask.shape[0]


def draw_text(
    canvas: Canvas,
    x: float,
    y: float,
    text: str,
    font: FontConfig,
    color: ColorLike,
    align: Align = "left",
) -> Tuple[int, int, int, int]:
    """
    Composite ``text`` onto the canvas.

    Args:
        canvas: target canvas
        x: left edge, center or right edge depending on ``align``
        y: vertical center of the line
        text: label text
        font: FontConfig to draw with
        color: RGB(A) text color
        align: horizontal anchoring of ``x``

    Returns:
        (left, top, width, height) of the drawn text box in canvas pixels
    """
    if not text:
        return int(x), int(y), 0, 0
    mask = font.render_mask(text)
    height, width = mask.shape
    if align == "center":
        left = int(round(x - width / 2))
    elif align == "right":
        left = int(round(x - width))
    else:
        left = int(round(x))
    top = int(round(y - height / 2))

    x0, y0 = max(left, 0), max(top, 0)
    x1, y1 = min(left + width, canvas.width), min(top + height, canvas.height)
    if x1 > x0 and y1 > y0:
        coverage = mask[y0 - top:y1 - top, x0 - left:x1 - left].astype(np.int64)
        rgba = as_rgba8(color).astype(np.int64)
        src = np.empty(coverage.shape + (4,), dtype=np.int64)
        src[..., :3] = rgba[:3]
        src[..., 3] = (coverage * rgba[3] + 127) // 255
        region = canvas.pixels[y0:y1, x0:x1]
        region[...] = composite_over(region, src.astype(np.uint8))
    return left, top, width, height


def draw_label(
    canvas: Canvas,
    x: float,
    y: float,
    text: str,
    font: FontConfig,
    text_color: TextColor,
    align: Align = "left",
) -> Tuple[int, int, int, int]:
    """Draw text in one of the two label colors, adding the shadow for white text."""
    if text_color.has_shadow:
        offset = font.shadow_offset
        draw_text(canvas, x + offset, y + offset, text, font, BLACK, align)
    return draw_text(canvas, x, y, text, font, text_color.rgba, align)
