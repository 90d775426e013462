from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest
from PIL import Image

import chromagen.pipeline as pipeline
from chromagen.config import AnimationConfig, PaletteConfig, RenderConfig, RunConfig
from chromagen.errors import SetupError
from chromagen.output import OutputLayout
from chromagen.pipeline import (
    RunReport,
    SerialExecutor,
    create_executor,
    generate_all,
    generate_animations,
    generate_gifs,
    generate_gradients,
    generate_stops,
    run_tasks,
)
from chromagen.renderers import GRADIENT_SPACES
from chromagen.types import ColorSpace

SMALL_STEPS = {
    "rgb_cube": 0.1,
    "hsl_cylinder": 0.1,
    "lab_space": 8.0,
    "oklch_space": 0.04,
    "oklch_space.hue": 12.0,
}


def small_config(total_frames=3, executor="serial"):
    return RunConfig(
        render=RenderConfig(
            supersample=1,
            font_size=10,
            gradient_width=100,
            gradient_height=20,
            gamut_width=200,
            gamut_height=160,
            gamut_volume_width=120,
            gamut_volume_height=100,
            chromaticity_size=160,
        ),
        animation=AnimationConfig(width=40, height=40, supersample=1, total_frames=total_frames,
                                  steps=SMALL_STEPS),
        palette=PaletteConfig(),
        executor=executor,
    )


def _double(value):
    return value * 2


def _identity(value):
    return value


def _boom(value):
    raise RuntimeError(f"bad value {value}")


def test_create_executor_kinds():
    assert isinstance(create_executor("serial"), SerialExecutor)
    with create_executor("thread", max_workers=2) as executor:
        assert isinstance(executor, ThreadPoolExecutor)
    with pytest.raises(ValueError):
        create_executor("cluster")


def test_serial_executor_captures_exceptions():
    executor = SerialExecutor()
    assert executor.submit(_double, 4).result() == 8
    future = executor.submit(_boom, 1)
    with pytest.raises(RuntimeError):
        future.result()


def test_run_config_rejects_unknown_executor():
    with pytest.raises(ValueError):
        RunConfig(executor="gpu")


def test_run_tasks_isolates_failures(tmp_path):
    tasks = [
        ("a", _identity, (tmp_path / "a",)),
        ("b", _boom, (2,)),
        ("c", lambda: [tmp_path / "c1", tmp_path / "c2"], ()),
    ]
    report = run_tasks(tasks, small_config(), "test")
    assert not report.ok
    assert report.failed == [("b", "RuntimeError: bad value 2")]
    assert len(report.succeeded) == 3


def test_run_tasks_empty():
    report = run_tasks([], small_config(), "nothing")
    assert report.ok
    assert report.succeeded == []


def test_run_tasks_on_thread_pool(tmp_path):
    tasks = [(str(i), _double, (i,)) for i in range(10)]
    report = run_tasks(tasks, small_config(executor="thread"), "threads")
    assert sorted(report.succeeded) == [i * 2 for i in range(10)]


def test_report_merge_and_repr():
    first = RunReport(succeeded=["x"])
    second = RunReport(failed=[("y", "Error: y")])
    merged = first.merge(second)
    assert merged is first
    assert not merged.ok
    assert repr(merged) == "RunReport(succeeded=1, failed=1)"


def test_generate_gradients_writes_every_variant(tmp_path):
    report = generate_gradients(tmp_path, small_config())
    assert report.ok
    layout = OutputLayout(tmp_path)
    assert len(report.succeeded) == len(GRADIENT_SPACES) * 2
    for space in GRADIENT_SPACES:
        for text_color in pipeline.TEXT_COLORS:
            path = layout.gradient_path(space, text_color)
            assert path.exists()
            with Image.open(path) as image:
                assert image.size == (100, 20 + 8 + 20)
                assert image.mode == "RGBA"


def test_generate_stops(tmp_path):
    report = generate_stops(tmp_path, small_config())
    assert report.ok
    names = sorted(path.name for path in report.succeeded)
    assert names == ["stops_black.png", "stops_white.png"]


def test_one_failing_render_does_not_stop_siblings(tmp_path, monkeypatch):
    original = pipeline.render_gradient_bar

    def flaky(start, end, space, *args, **kwargs):
        if space == ColorSpace.LAB:
            raise RuntimeError("lab broke")
        return original(start, end, space, *args, **kwargs)

    monkeypatch.setattr(pipeline, "render_gradient_bar", flaky)
    report = generate_gradients(tmp_path, small_config())
    assert sorted(label for label, _ in report.failed) == ["gradient_lab_black.png", "gradient_lab_white.png"]
    assert all(message == "RuntimeError: lab broke" for _, message in report.failed)
    assert len(report.succeeded) == (len(GRADIENT_SPACES) - 1) * 2
    assert not (tmp_path / "gradients" / "gradient_lab_black.png").exists()


def test_animations_and_gifs(tmp_path):
    config = small_config(total_frames=3)
    frames = generate_animations(tmp_path, config, models=["rgb_cube"])
    assert frames.ok
    layout = OutputLayout(tmp_path)
    assert sorted(p.name for p in layout.frames_dir("rgb_cube").iterdir()) == [
        "frame_000.png", "frame_001.png", "frame_002.png",
    ]

    gifs = generate_gifs(tmp_path, config, models=["rgb_cube"])
    assert gifs.ok
    assert set(gifs.succeeded) == {layout.gif_path("rgb_cube"), layout.static_path("rgb_cube")}
    with Image.open(layout.gif_path("rgb_cube")) as gif:
        assert gif.n_frames == 3
        assert gif.info["loop"] == 0
        size = gif.size
    with Image.open(layout.static_path("rgb_cube")) as static:
        assert static.size == size


def test_sixty_frame_rgb_cube_run(tmp_path):
    report = generate_animations(tmp_path, small_config(total_frames=60), models=["rgb_cube"])
    assert report.ok
    files = sorted(OutputLayout(tmp_path).frames_dir("rgb_cube").iterdir())
    assert [p.name for p in files] == [f"frame_{i:03d}.png" for i in range(60)]

    frames = []
    for path in files:
        with Image.open(path) as image:
            frames.append(np.asarray(image.convert("RGBA")))
    assert {frame.shape for frame in frames} == {(40, 40, 4)}
    assert all(frame[..., 3].any() for frame in frames)
    assert len({frame.tobytes() for frame in frames}) == 60


def test_rerun_replaces_stale_frames(tmp_path):
    layout = OutputLayout(tmp_path)
    generate_animations(tmp_path, small_config(total_frames=3), models=["rgb_cube"])
    generate_animations(tmp_path, small_config(total_frames=2), models=["rgb_cube"])
    assert len(list(layout.frames_dir("rgb_cube").glob("frame_*.png"))) == 2


def test_zero_frames_is_reported_per_model(tmp_path):
    report = generate_animations(tmp_path, small_config(total_frames=0), models=["rgb_cube", "lab_space"])
    assert [label for label, _ in report.failed] == ["rgb_cube", "lab_space"]
    assert all(message.startswith("EmptyInputError") for _, message in report.failed)
    assert report.succeeded == []


def test_unknown_model_is_rejected(tmp_path):
    with pytest.raises(ValueError):
        generate_animations(tmp_path, small_config(), models=["teapot"])


def test_gif_without_frames_fails(tmp_path):
    report = generate_gifs(tmp_path, small_config(), models=["hsl_cylinder"])
    assert [label for label, _ in report.failed] == ["model_hsl_cylinder.gif"]


def test_generate_all_needs_writable_root(tmp_path):
    root = tmp_path / "not_a_dir"
    root.write_text("occupied")
    with pytest.raises(SetupError):
        generate_all(root, small_config())


def test_generate_all_skips_gifs_without_frames(tmp_path):
    report = generate_all(tmp_path, small_config(total_frames=0))
    failed = [label for label, _ in report.failed]
    assert sorted(failed) == ["hsl_cylinder", "lab_space", "oklch_space", "rgb_cube"]
    layout = OutputLayout(tmp_path)
    assert layout.chromaticity_path(ColorSpace.REC2020).exists()
    assert layout.gamut_comparison_path("white").exists()
    assert layout.gamut_volume_path(ColorSpace.DISPLAY_P3, "black").exists()
    assert not any(layout.models_dir.iterdir())
