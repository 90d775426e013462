import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from chromagen.animation import Animation, Frame, FrameAnimator, frame_angle
from chromagen.config import AnimationConfig
from chromagen.errors import EmptyInputError
from chromagen.raster import Canvas


def dot_renderer(angle, config):
    """Single white pixel orbiting the canvas center."""
    canvas = Canvas(config.width, config.height)
    x = int(round(config.width / 2 + 10 * math.cos(angle)))
    y = int(round(config.height / 2 + 10 * math.sin(angle)))
    canvas.set_pixel(x, y, (255, 255, 255, 255))
    return canvas


def test_frame_angle():
    assert frame_angle(0, 60) == 0.0
    assert frame_angle(15, 60) == pytest.approx(math.pi / 2)
    with pytest.raises(EmptyInputError):
        frame_angle(0, 0)


def test_animator_state_machine():
    animator = FrameAnimator("dot", dot_renderer, AnimationConfig(width=40, height=40, total_frames=4))
    assert animator.index == 0
    assert not animator.is_done

    frames = list(animator)
    assert [f.index for f in frames] == [0, 1, 2, 3]
    assert animator.is_done
    assert list(animator) == []

    animator.reset()
    assert animator.index == 0
    assert next(animator).index == 0
    assert animator.index == 1


def test_render_frame_bounds():
    animator = FrameAnimator("dot", dot_renderer, AnimationConfig(width=40, height=40, total_frames=4))
    assert animator.render_frame(2).angle == pytest.approx(math.pi)
    with pytest.raises(IndexError):
        animator.render_frame(4)


def test_run_in_order_with_and_without_executor():
    config = AnimationConfig(width=40, height=40, total_frames=8)
    serial = FrameAnimator("dot", dot_renderer, config).run()
    with ThreadPoolExecutor(max_workers=3) as pool:
        pooled = FrameAnimator("dot", dot_renderer, config).run(executor=pool)
    assert len(serial) == len(pooled) == 8
    for a, b in zip(serial.frames, pooled.frames):
        assert a.index == b.index
        assert np.array_equal(a.canvas.pixels, b.canvas.pixels)


def test_zero_frames_is_an_error():
    animator = FrameAnimator("dot", dot_renderer, AnimationConfig(total_frames=0))
    with pytest.raises(EmptyInputError):
        animator.run()
    with pytest.raises(EmptyInputError):
        Animation("empty").cropped()


def test_cropped_frames_share_dimensions():
    animation = FrameAnimator("dot", dot_renderer, AnimationConfig(width=40, height=40, total_frames=12)).run()
    cropped = animation.cropped()
    sizes = {frame.canvas.size for frame in cropped.frames}
    assert sizes == {(21, 21)}
    assert all(not frame.canvas.is_blank() for frame in cropped.frames)


def test_blank_frames_are_not_cropped():
    blank = Animation("blank", [Frame(i, 0.0, Canvas(10, 6)) for i in range(3)])
    assert blank.union_box().is_empty
    assert {f.canvas.size for f in blank.cropped().frames} == {(10, 6)}
