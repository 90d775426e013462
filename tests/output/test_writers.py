import os

import numpy as np
import pytest
from PIL import Image

from chromagen.errors import EmptyInputError, SetupError
from chromagen.output import (
    OutputLayout,
    clear_frames,
    ensure_directory,
    frame_files,
    load_frames,
    prepare_layout,
    save_gif,
    save_png,
    write_frame,
)
from chromagen.quantize import build_palette, quantize
from chromagen.raster import Canvas, TextColor
from chromagen.types import ColorSpace


def _canvas(color, width=6, height=4):
    canvas = Canvas(width, height)
    canvas.fill(color)
    return canvas


def test_layout_paths(tmp_path):
    layout = OutputLayout(tmp_path)
    assert layout.gradient_path(ColorSpace.OKLCH, TextColor.WHITE) == tmp_path / "gradients" / "gradient_oklch_white.png"
    assert layout.gradient_path(ColorSpace.SRGB, TextColor.BLACK).name == "gradient_rgb_black.png"
    assert layout.stops_path(TextColor.BLACK).name == "stops_black.png"
    assert layout.gamut_comparison_path(TextColor.WHITE).name == "gamut_xyz_comparison_white.png"
    assert layout.gamut_volume_path(ColorSpace.DISPLAY_P3, TextColor.BLACK).name == "gamut_displayp3_black.png"
    assert layout.chromaticity_path("rec2020") == tmp_path / "chromaticity" / "chromaticity_rec2020.png"
    assert layout.frame_path("rgb_cube", 7) == tmp_path / "animations" / "rgb_cube" / "frame_007.png"
    assert layout.gif_path("lab_space").name == "model_lab_space.gif"
    assert layout.static_path("lab_space").name == "model_lab_space_static.png"


def test_layout_accepts_strings(tmp_path):
    assert OutputLayout(str(tmp_path)).root == tmp_path


def test_prepare_layout_creates_directories(tmp_path):
    layout = prepare_layout(OutputLayout(tmp_path / "out"))
    for directory in layout.directories():
        assert directory.is_dir()


def test_unwritable_root_is_a_setup_error(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    with pytest.raises(SetupError):
        ensure_directory(blocker / "sub")


def test_png_round_trip(tmp_path):
    canvas = _canvas((10, 20, 30, 128))
    path = save_png(canvas, tmp_path / "image.png")
    with Image.open(path) as image:
        assert image.mode == "RGBA"
        assert np.array_equal(np.asarray(image), canvas.pixels)


def test_frames_are_written_and_read_in_order(tmp_path):
    for index in (2, 0, 1, 10):
        write_frame(_canvas((index, 0, 0, 255)), tmp_path, index)
    assert [p.name for p in frame_files(tmp_path)] == [
        "frame_000.png", "frame_001.png", "frame_002.png", "frame_010.png",
    ]
    frames = load_frames(tmp_path)
    assert [f.get_pixel(0, 0)[0] for f in frames] == [0, 1, 2, 10]


def test_load_frames_from_empty_directory(tmp_path):
    with pytest.raises(EmptyInputError):
        load_frames(tmp_path)


def test_clear_frames(tmp_path):
    write_frame(_canvas((1, 2, 3, 255)), tmp_path, 0)
    (tmp_path / "keep.txt").write_text("x")
    assert clear_frames(tmp_path) == 1
    assert frame_files(tmp_path) == []
    assert (tmp_path / "keep.txt").exists()


def test_gif_keeps_palette_and_transparency(tmp_path):
    frames = [_canvas((255, 0, 0, 255)), _canvas((0, 0, 255, 255))]
    frames[0].set_pixel(0, 0, (0, 0, 0, 0))
    palette = build_palette(frames, stride=1)
    indexed = [quantize(frame, palette) for frame in frames]
    path = save_gif(tmp_path / "anim.gif", indexed, palette, delay_ms=80)

    with Image.open(path) as image:
        assert image.n_frames == 2
        assert image.info.get("duration") == 80
        first = np.asarray(image.convert("RGBA"))
        assert first[0, 0, 3] == 0
        assert tuple(first[2, 2]) == (255, 0, 0, 255)
        image.seek(1)
        second = np.asarray(image.convert("RGBA"))
        assert tuple(second[2, 2]) == (0, 0, 255, 255)


def test_gif_needs_frames(tmp_path):
    palette = build_palette([_canvas((1, 1, 1, 255))])
    with pytest.raises(EmptyInputError):
        save_gif(tmp_path / "empty.gif", [], palette)
