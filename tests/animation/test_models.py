from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest
from PIL import Image

from chromagen.animation import MODELS, FrameAnimator, get_model
from chromagen.config import AnimationConfig
from chromagen.output import save_gif
from chromagen.quantize import build_palette, quantize

SMALL_STEPS = {
    "rgb_cube": 0.05,
    "hsl_cylinder": 0.05,
    "lab_space": 4.0,
    "oklch_space": 0.02,
    "oklch_space.hue": 6.0,
}


@pytest.fixture
def small_config():
    return AnimationConfig(width=64, height=64, supersample=1, total_frames=60, steps=SMALL_STEPS)


@pytest.mark.parametrize("name", sorted(MODELS))
def test_model_frame_has_configured_size(name):
    config = AnimationConfig(width=48, height=40, supersample=2, steps=SMALL_STEPS)
    canvas = get_model(name)(0.0, config)
    assert canvas.size == (48, 40)
    assert canvas.supersample == 1
    assert not canvas.is_blank()


def test_rotation_changes_the_frame():
    config = AnimationConfig(width=48, height=48, supersample=1, steps=SMALL_STEPS)
    render = get_model("rgb_cube")
    assert not np.array_equal(render(0.0, config).pixels, render(1.0, config).pixels)


def test_unknown_model():
    with pytest.raises(ValueError, match="Unknown model"):
        get_model("cmyk_cube")


def test_rgb_cube_end_to_end_gif(tmp_path, small_config):
    with ThreadPoolExecutor(max_workers=4) as pool:
        animation = FrameAnimator("rgb_cube", get_model("rgb_cube"), small_config).run(executor=pool)
    assert len(animation) == 60

    cropped = animation.cropped()
    assert len({frame.canvas.size for frame in cropped.frames}) == 1

    palette = build_palette(cropped.canvases)
    assert len(palette) == 256
    assert palette[0] == (0, 0, 0, 0)
    assert len(set(palette.colors)) == len(palette.colors)

    indexed = [quantize(canvas, palette) for canvas in cropped.canvases]
    path = save_gif(tmp_path / "model_rgb_cube.gif", indexed, palette, small_config.frame_delay_ms)

    with Image.open(path) as image:
        assert image.n_frames == 60
        assert image.size == cropped.frames[0].canvas.size
        assert image.info.get("loop") == 0
