"""
Image Writers
=============

The boundary to the file system. PNG and GIF containers are encoded by
Pillow; this module only decides what goes where and reports failures in the
pipeline's error vocabulary.
"""
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import List, Sequence, Union

import numpy as np
from numpy import ndarray as NDArray
from PIL import Image

from ..errors import EmptyInputError, SetupError
from ..quantize.palette import Palette
from ..raster.canvas import Canvas
from .paths import FRAME_GLOB, FRAME_PATTERN, OutputLayout

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def ensure_directory(path: PathLike) -> Path:
    """
    Create ``path`` (and parents) and check it is writable.

    Raises:
        SetupError: the directory cannot be created or written to
    """
    path = Path(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SetupError(f"Cannot create output directory {path}: {exc}") from exc
    if not os.access(path, os.W_OK):
        raise SetupError(f"Output directory {path} is not writable")
    return path


def prepare_layout(layout: OutputLayout) -> OutputLayout:
    """Create every output directory of a layout up front."""
    for directory in layout.directories():
        ensure_directory(directory)
    return layout


def save_png(canvas: Canvas, path: PathLike) -> Path:
    path = Path(path)
    canvas.to_image().save(path, format="PNG")
    logger.info("Generated %s", path)
    return path


def write_frame(canvas: Canvas, directory: PathLike, index: int) -> Path:
    """Write one animation frame as ``frame_NNN.png``."""
    path = Path(directory) / FRAME_PATTERN.format(index=index)
    canvas.to_image().save(path, format="PNG")
    logger.debug("Wrote frame %s", path)
    return path


def frame_files(directory: PathLike) -> List[Path]:
    return sorted(Path(directory).glob(FRAME_GLOB))


def clear_frames(directory: PathLike) -> int:
    """Remove frames left over from an earlier run; returns how many were deleted."""
    files = frame_files(directory)
    for path in files:
        path.unlink()
    return len(files)


def load_frames(directory: PathLike) -> List[Canvas]:
    """
    Read back every ``frame_NNN.png`` of a model, in index order.

    Raises:
        EmptyInputError: the directory holds no frames
    """
    files = frame_files(directory)
    if not files:
        raise EmptyInputError(f"No frames found in {directory}")
    canvases = []
    for path in files:
        with Image.open(path) as image:
            canvases.append(Canvas.from_image(image))
    return canvases


def save_gif(
    path: PathLike,
    indexed_frames: Sequence[NDArray],
    palette: Palette,
    delay_ms: int = 50,
) -> Path:
    """
    Encode palette-indexed frames as an infinitely looping GIF.

    Args:
        path: destination file
        indexed_frames: (height, width) uint8 arrays of palette indices
        palette: shared palette; index 0 is written as the transparent color
        delay_ms: per-frame delay

    Raises:
        EmptyInputError: no frames were given
    """
    if not indexed_frames:
        raise EmptyInputError(f"No frames to encode for {path}")

    rgb_palette = palette.rgb_bytes()
    images = []
    for indices in indexed_frames:
        indices = np.ascontiguousarray(indices, dtype=np.uint8)
        height, width = indices.shape
        image = Image.frombytes("P", (width, height), indices.tobytes())
        image.putpalette(rgb_palette)
        image.info["transparency"] = 0
        images.append(image)

    path = Path(path)
    images[0].save(
        path,
        format="GIF",
        save_all=True,
        append_images=images[1:],
        duration=delay_ms,
        loop=0,
        transparency=0,
        disposal=2,
        optimize=False,
    )
    logger.info("Generated %s (%d frames)", path, len(images))
    return path
