from .palette import (
    PALETTE_SIZE,
    TRANSPARENT_ENTRY,
    Palette,
    bucket_keys,
    build_palette,
    collect_colors,
    nearest_color,
    quantize,
)

__all__ = [
    "PALETTE_SIZE",
    "TRANSPARENT_ENTRY",
    "Palette",
    "bucket_keys",
    "build_palette",
    "collect_colors",
    "nearest_color",
    "quantize",
]
