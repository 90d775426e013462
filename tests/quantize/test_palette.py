import numpy as np
import pytest

from chromagen.errors import EmptyInputError
from chromagen.quantize import (
    PALETTE_SIZE,
    TRANSPARENT_ENTRY,
    Palette,
    bucket_keys,
    build_palette,
    nearest_color,
    quantize,
)
from chromagen.raster import Canvas


def _frame(colors, width=8, height=8):
    """Frame whose rows cycle through ``colors``."""
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    for y in range(height):
        pixels[y, :] = colors[y % len(colors)]
    return pixels


def _many_colors_frame(side=64):
    ys, xs = np.mgrid[0:side, 0:side]
    pixels = np.zeros((side, side, 4), dtype=np.uint8)
    pixels[..., 0] = xs * 4
    pixels[..., 1] = ys * 4
    pixels[..., 2] = 128
    pixels[..., 3] = 255
    return pixels


def test_palette_has_256_entries_and_transparent_slot():
    frames = [_frame([(255, 0, 0, 255), (0, 255, 0, 255)]), _frame([(0, 0, 255, 255)])]
    palette = build_palette(frames, stride=1)
    assert len(palette) == PALETTE_SIZE
    assert palette[0] == TRANSPARENT_ENTRY
    assert palette.size == 4
    assert palette.colors == ((255, 0, 0, 255), (0, 255, 0, 255), (0, 0, 255, 255))
    assert not palette.truncated


def test_palette_colors_appear_once():
    frames = [_many_colors_frame(12), _many_colors_frame(12)]
    palette = build_palette(frames, stride=1)
    assert len(set(palette.colors)) == len(palette.colors)
    keys = bucket_keys(np.array(palette.colors, dtype=np.uint8))
    assert len(set(keys.tolist())) == len(palette.colors)


def test_first_color_of_a_bucket_wins():
    frame = _frame([(100, 100, 100, 255), (101, 100, 100, 255)])
    palette = build_palette([frame], stride=1)
    assert palette.colors == ((100, 100, 100, 255),)


def test_transparent_pixels_are_not_collected():
    frame = _frame([(0, 0, 0, 0), (10, 20, 30, 0), (40, 50, 60, 255)])
    palette = build_palette([frame], stride=1)
    assert palette.colors == ((40, 50, 60, 255),)


def test_translucent_pixels_are_stored_opaque():
    palette = build_palette([_frame([(40, 50, 60, 90)])], stride=1)
    assert palette.colors == ((40, 50, 60, 255),)


def test_stride_skips_rows_and_columns():
    frame = _frame([(255, 0, 0, 255), (0, 255, 0, 255)])
    palette = build_palette([frame], stride=2)
    assert palette.colors == ((255, 0, 0, 255),)


def test_truncation_keeps_first_255_and_warns():
    with pytest.warns(UserWarning, match="keeping the first 255"):
        palette = build_palette([_many_colors_frame()], stride=1)
    assert palette.truncated
    assert palette.size == PALETTE_SIZE
    assert len(set(palette.colors)) == 255
    # Discovery order is row-major
    assert palette[1] == (0, 0, 128, 255)
    assert palette[2] == (4, 0, 128, 255)


def test_zero_frames_is_an_error():
    with pytest.raises(EmptyInputError):
        build_palette([])


def test_all_transparent_frames_give_transparent_palette():
    palette = build_palette([np.zeros((4, 4, 4), dtype=np.uint8)])
    assert palette.size == 1
    assert set(palette.entries) == {TRANSPARENT_ENTRY}


def test_palette_validation():
    with pytest.raises(ValueError):
        Palette(((0, 0, 0, 0),) * 10, 1)
    with pytest.raises(ValueError):
        Palette(((1, 0, 0, 255),) * PALETTE_SIZE, 1)


def test_nearest_color_is_idempotent():
    palette = build_palette([_many_colors_frame(12)], stride=1)
    for i in range(palette.size):
        assert nearest_color(palette[i], palette) == i


def test_nearest_color_ties_go_to_lowest_index():
    frame = _frame([(0, 0, 0, 255), (20, 0, 0, 255)])
    palette = build_palette([frame], stride=1)
    assert nearest_color((10, 0, 0, 255), palette) == 1


def test_quantize_maps_transparent_to_zero():
    canvas = Canvas(4, 4)
    canvas.set_pixel(1, 1, (255, 0, 0, 255))
    canvas.set_pixel(2, 2, (0, 255, 0, 255))
    canvas.set_pixel(3, 3, (0, 255, 0, 0))
    palette = build_palette([canvas], stride=1)
    indices = quantize(canvas, palette)
    assert indices.shape == (4, 4)
    assert indices.dtype == np.uint8
    assert indices[1, 1] == 1
    assert indices[2, 2] == 2
    assert indices[3, 3] == 0
    assert indices[0, 0] == 0


def test_quantize_uses_nearest_entry():
    palette = build_palette([_frame([(200, 0, 0, 255), (0, 0, 200, 255)])], stride=1)
    frame = _frame([(190, 10, 0, 255), (5, 0, 210, 128)], width=3, height=2)
    indices = quantize(frame, palette)
    assert indices[0].tolist() == [1, 1, 1]
    assert indices[1].tolist() == [2, 2, 2]
