import numpy as np
import pytest

from chromagen.raster import BoundingBox, Canvas, bounding_box, crop, downscale


def test_downscale_uniform_canvas_is_exact():
    canvas = Canvas.oversampled(7, 5, 3)
    canvas.fill((200, 100, 50, 255))
    small = downscale(canvas)
    assert small.size == (7, 5)
    assert small.supersample == 1
    assert np.all(small.pixels == np.array([200, 100, 50, 255], dtype=np.uint8))


def test_downscale_alpha_weighted_edges():
    canvas = Canvas.oversampled(1, 1, 2)
    canvas.set_pixel(0, 0, (255, 0, 0, 255))
    small = downscale(canvas)
    # Transparent neighbours lower alpha but do not darken the color
    assert small.get_pixel(0, 0) == (255, 0, 0, 64)


def test_downscale_transparent_stays_transparent():
    small = downscale(Canvas.oversampled(4, 4, 3))
    assert small.is_blank()
    assert small.pixels.sum() == 0


def test_downscale_rejects_upscaling():
    with pytest.raises(ValueError):
        downscale(Canvas(4, 4), 8, 8)


def test_bounding_box_single_pixel():
    canvas = Canvas(100, 100)
    canvas.set_pixel(10, 10, (1, 2, 3, 4))
    box = bounding_box(canvas)
    assert box == BoundingBox(10, 10, 10, 10)
    assert box.width == 1 and box.height == 1


def test_bounding_box_empty_canvas():
    box = bounding_box(Canvas(50, 20))
    assert box.is_empty
    assert box.width == 0 and box.height == 0


def test_crop_empty_canvas_returns_full_copy():
    canvas = Canvas(30, 20)
    cropped = crop(canvas)
    assert cropped.size == (30, 20)
    assert cropped is not canvas


def test_crop_with_padding_is_clipped():
    canvas = Canvas(50, 40)
    canvas.set_pixel(10, 12, (255, 255, 255, 255))
    canvas.set_pixel(20, 15, (255, 255, 255, 255))
    cropped = crop(canvas, padding=5)
    assert cropped.size == (21, 14)
    assert cropped.get_pixel(5, 5) == (255, 255, 255, 255)

    edge = crop(canvas, BoundingBox(0, 0, 2, 2), padding=5)
    assert edge.size == (8, 8)


def test_crop_snaps_to_supersample_blocks():
    canvas = Canvas.oversampled(10, 10, 3)
    canvas.set_pixel(7, 8, (255, 0, 0, 255))
    cropped = crop(canvas)
    assert cropped.size == (3, 3)
    assert downscale(cropped).size == (1, 1)


def test_union_and_extend():
    a = BoundingBox(5, 5, 10, 10)
    assert a.union(BoundingBox.empty()) == a
    assert BoundingBox.empty().union(a) == a
    assert a.union(BoundingBox(0, 7, 6, 20)) == BoundingBox(0, 5, 10, 20)
    assert a.extend(12, 12, 14, 14) == BoundingBox(5, 5, 14, 14)
