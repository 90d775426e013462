from .paths import OutputLayout, space_slug
from .writers import (
    clear_frames,
    ensure_directory,
    frame_files,
    load_frames,
    prepare_layout,
    save_gif,
    save_png,
    write_frame,
)

__all__ = [
    "OutputLayout",
    "space_slug",
    "clear_frames",
    "ensure_directory",
    "frame_files",
    "load_frames",
    "prepare_layout",
    "save_gif",
    "save_png",
    "write_frame",
]
