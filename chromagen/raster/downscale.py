"""Area-average downscaling of oversampled canvases."""
from __future__ import annotations
from typing import Optional

import numpy as np

from .canvas import Canvas


def downscale(canvas: Canvas, target_width: Optional[int] = None,
              target_height: Optional[int] = None) -> Canvas:
    """
    Box-filter an oversampled canvas down to its final resolution.

    Every destination pixel averages an ``S x S`` block of source pixels with
    integer accumulation. Color channels are weighted by alpha so transparent
    neighbours do not darken anti-aliased edges; alpha is the plain block mean.
    A uniform input block therefore reproduces its color exactly.

    Args:
        canvas: source canvas
        target_width: final width; defaults to ``canvas.width // canvas.supersample``
        target_height: final height; defaults to ``canvas.height // canvas.supersample``

    Returns:
        Canvas: new canvas with ``supersample == 1``
    """
    if target_width is None:
        target_width = canvas.width // canvas.supersample
    if target_height is None:
        target_height = canvas.height // canvas.supersample
    if target_width <= 0 or target_height <= 0:
        raise ValueError(f"Target size must be positive, got {target_width}x{target_height}")

    factor_x = canvas.width // target_width
    factor_y = canvas.height // target_height
    if factor_x < 1 or factor_y < 1:
        raise ValueError(
            f"Cannot downscale {canvas.width}x{canvas.height} to {target_width}x{target_height}"
        )
    if factor_x == 1 and factor_y == 1:
        return Canvas.from_array(canvas.pixels[:target_height, :target_width].copy())

    src = canvas.pixels[:target_height * factor_y, :target_width * factor_x].astype(np.int64)
    blocks = src.reshape(target_height, factor_y, target_width, factor_x, 4)
    count = factor_x * factor_y

    alpha = blocks[..., 3]
    alpha_sum = alpha.sum(axis=(1, 3))
    weighted = (blocks[..., :3] * alpha[..., None]).sum(axis=(1, 3))

    safe_sum = np.maximum(alpha_sum, 1)[..., None]
    rgb = (weighted + safe_sum // 2) // safe_sum
    out_alpha = (alpha_sum + count // 2) // count

    out = np.concatenate([rgb, out_alpha[..., None]], axis=-1)
    out[alpha_sum == 0] = 0
    return Canvas.from_array(np.clip(out, 0, 255).astype(np.uint8))
