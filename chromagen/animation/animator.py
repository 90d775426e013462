"""
Frame Animator
==============

Drives one model through a full turn. Frame ``i`` of ``n`` is rendered at
angle ``2π·i/n``; frames share no state, so they can be rendered in any order
or in parallel.
"""
from __future__ import annotations
import logging
import math
from concurrent.futures import Executor
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional

from ..config import AnimationConfig
from ..errors import EmptyInputError
from ..raster.canvas import Canvas
from ..raster.crop import BoundingBox, bounding_box, crop

logger = logging.getLogger(__name__)

FrameRenderer = Callable[[float, AnimationConfig], Canvas]


def frame_angle(index: int, total_frames: int) -> float:
    """Rotation angle (radians) of frame ``index`` in a ``total_frames`` turn."""
    if total_frames <= 0:
        raise EmptyInputError("An animation needs at least one frame")
    return 2 * math.pi * index / total_frames


@dataclass
class Frame:
    index: int
    angle: float
    canvas: Canvas


@dataclass
class Animation:
    """Ordered frames of one model."""
    name: str
    frames: List[Frame] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.frames)

    @property
    def canvases(self) -> List[Canvas]:
        return [frame.canvas for frame in self.frames]

    def union_box(self) -> BoundingBox:
        """Box covering the visible pixels of every frame."""
        box = BoundingBox.empty()
        for frame in self.frames:
            box = box.union(bounding_box(frame.canvas))
        return box

    def cropped(self, padding: int = 0) -> Animation:
        """
        Crop all frames to one shared box so they keep identical dimensions.

        Raises:
            EmptyInputError: the animation has no frames
        """
        if not self.frames:
            raise EmptyInputError(f"Animation {self.name!r} has no frames")
        box = self.union_box()
        return Animation(
            self.name,
            [Frame(f.index, f.angle, crop(f.canvas, box, padding)) for f in self.frames],
        )


class FrameAnimator:
    """
    Frame-by-frame driver for one model.

    The animator is a small state machine: ``index`` runs from 0 to
    ``total_frames`` and the animator is done once it gets there. Iterating
    it renders the remaining frames in order.

    Args:
        name: model name
        renderer: callable ``(angle, config) -> Canvas``
        config: AnimationConfig (frame count, size, ...)
    """

    def __init__(self, name: str, renderer: FrameRenderer, config: AnimationConfig) -> None:
        self.name = name
        self.renderer = renderer
        self.config = config
        self.index = 0

    @property
    def total_frames(self) -> int:
        return self.config.total_frames

    @property
    def is_done(self) -> bool:
        return self.index >= self.total_frames

    def reset(self) -> None:
        self.index = 0

    def angle_for(self, index: int) -> float:
        return frame_angle(index, self.total_frames)

    def render_frame(self, index: int) -> Frame:
        if not 0 <= index < self.total_frames:
            raise IndexError(f"Frame index {index} outside [0, {self.total_frames})")
        angle = self.angle_for(index)
        return Frame(index, angle, self.renderer(angle, self.config))

    def __iter__(self) -> Iterator[Frame]:
        return self

    def __next__(self) -> Frame:
        if self.is_done:
            raise StopIteration
        frame = self.render_frame(self.index)
        self.index += 1
        return frame

    def run(self, executor: Optional[Executor] = None) -> Animation:
        """
        Render every frame.

        Args:
            executor: optional pool; the renderer must be picklable for
                process pools

        Returns:
            Animation with frames in index order

        Raises:
            EmptyInputError: ``total_frames`` is zero
        """
        if self.total_frames <= 0:
            raise EmptyInputError(f"Model {self.name!r} has zero frames to render")

        if executor is None:
            self.reset()
            frames = list(self)
        else:
            indices = range(self.total_frames)
            angles = [self.angle_for(i) for i in indices]
            canvases = executor.map(self.renderer, angles, [self.config] * len(angles))
            frames = [Frame(i, a, c) for i, a, c in zip(indices, angles, canvases)]
            self.index = self.total_frames

        logger.debug("Rendered %d frames for %s", len(frames), self.name)
        return Animation(self.name, frames)
