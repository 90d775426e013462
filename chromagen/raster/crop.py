"""Bounding-box detection and cropping of rendered canvases."""
from __future__ import annotations
from typing import NamedTuple, Optional

import numpy as np

from .canvas import Canvas


class BoundingBox(NamedTuple):
    """Inclusive pixel bounds; ``max < min`` marks an empty box."""
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @classmethod
    def empty(cls) -> BoundingBox:
        return cls(0, 0, -1, -1)

    @property
    def is_empty(self) -> bool:
        return self.max_x < self.min_x or self.max_y < self.min_y

    @property
    def width(self) -> int:
        return 0 if self.is_empty else self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return 0 if self.is_empty else self.max_y - self.min_y + 1

    def union(self, other: BoundingBox) -> BoundingBox:
        if self.is_empty:
            return other
        if other.is_empty:
            return self
        return BoundingBox(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def extend(self, min_x: int, min_y: int, max_x: int, max_y: int) -> BoundingBox:
        """Grow the box so it also covers a known region (e.g. a legend)."""
        return self.union(BoundingBox(min_x, min_y, max_x, max_y))

    def pad(self, padding: int, width: int, height: int) -> BoundingBox:
        """Pad on every side, clipped to a ``width x height`` canvas."""
        if self.is_empty:
            return self
        return BoundingBox(
            max(self.min_x - padding, 0),
            max(self.min_y - padding, 0),
            min(self.max_x + padding, width - 1),
            min(self.max_y + padding, height - 1),
        )

    def scaled(self, factor: int) -> BoundingBox:
        """Snap outwards to multiples of ``factor`` so a downscale keeps whole blocks."""
        if self.is_empty or factor == 1:
            return self
        return BoundingBox(
            (self.min_x // factor) * factor,
            (self.min_y // factor) * factor,
            (self.max_x // factor + 1) * factor - 1,
            (self.max_y // factor + 1) * factor - 1,
        )


def bounding_box(canvas: Canvas) -> BoundingBox:
    """
    Tight box around every pixel with alpha > 0.

    Returns:
        BoundingBox; ``BoundingBox.empty()`` for a fully transparent canvas
    """
    opaque = canvas.alpha > 0
    rows = np.flatnonzero(opaque.any(axis=1))
    if rows.size == 0:
        return BoundingBox.empty()
    cols = np.flatnonzero(opaque.any(axis=0))
    return BoundingBox(int(cols[0]), int(rows[0]), int(cols[-1]), int(rows[-1]))


def crop(canvas: Canvas, box: Optional[BoundingBox] = None, padding: int = 0) -> Canvas:
    """
    Crop a canvas to ``box`` (detected when omitted) plus ``padding``.

    An empty box means nothing to crop: a copy of the full canvas is returned.
    Oversampled canvases are cropped on supersample boundaries.
    """
    if box is None:
        box = bounding_box(canvas)
    if box.is_empty:
        return canvas.copy()
    box = box.pad(padding, canvas.width, canvas.height)
    box = box.scaled(canvas.supersample)
    max_x = min(box.max_x, canvas.width - 1)
    max_y = min(box.max_y, canvas.height - 1)
    pixels = canvas.pixels[box.min_y:max_y + 1, box.min_x:max_x + 1].copy()
    return Canvas.from_array(pixels, canvas.supersample)
