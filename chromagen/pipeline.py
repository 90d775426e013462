"""
Generation Pipeline
===================

Runs every renderer over its parameter grid and writes the results under one
output root. Each image (and each animation frame) is an independent task on a
bounded worker pool; a failing task is logged and reported without stopping its
siblings. Only shared setup, i.e. creating the output directories, aborts a run.

GIF assembly is the one ordering constraint: a model's GIF is built after all of
its frames exist. Frames are read back from disk, cropped to their common box,
a palette is built from all of them and each frame is then quantized in order.

Functions:
    generate_gradients: gradient bars per interpolation space and text color
    generate_stops: start/end swatches per text color
    generate_gamuts: XYZ gamut comparison plus per-space gamut volumes
    generate_chromaticity: one xy diagram per RGB space
    generate_animations: every frame of every animated model
    generate_gifs: palette GIF and static PNG per model
    generate_all: everything above, in order
"""
from __future__ import annotations
import logging
from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .animation.animator import Animation, Frame, frame_angle
from .animation.models import MODELS, get_model
from .colors.color import Color
from .config import AnimationConfig, PaletteConfig, RenderConfig, RunConfig
from .errors import EmptyInputError
from .output.paths import OutputLayout
from .output.writers import (
    clear_frames,
    ensure_directory,
    load_frames,
    prepare_layout,
    save_gif,
    save_png,
    write_frame,
)
from .quantize.palette import build_palette, quantize
from .raster.text import FontConfig, TextColor
from .renderers.chromaticity import render_chromaticity
from .renderers.gamut_comparison import render_gamut_comparison
from .renderers.gamut_volume import render_gamut_volume
from .renderers.gamuts import CHROMATICITY_SPACES, COMPARISON_GAMUTS, VOLUME_SPACES
from .renderers.gradient_bars import GRADIENT_SPACES, render_gradient_bar
from .renderers.stops import render_stops
from .types.color_types import ColorSpace

logger = logging.getLogger(__name__)

TEXT_COLORS: Tuple[TextColor, ...] = (TextColor.BLACK, TextColor.WHITE)


@dataclass
class RunReport:
    """Outcome of a generation run: files written and artifacts that failed."""
    succeeded: List[Path] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed

    def merge(self, other: RunReport) -> RunReport:
        self.succeeded.extend(other.succeeded)
        self.failed.extend(other.failed)
        return self

    def __repr__(self) -> str:
        return f"RunReport(succeeded={len(self.succeeded)}, failed={len(self.failed)})"


# =============================================================================
# Worker pool
# =============================================================================

class SerialExecutor(Executor):
    """Runs each task at submission time, in the calling thread."""

    def submit(self, fn, /, *args, **kwargs) -> Future:
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future


def create_executor(kind: str = "process", max_workers: Optional[int] = None) -> Executor:
    """
    Build the worker pool for a run.

    Args:
        kind: "process", "thread" or "serial"
        max_workers: pool bound; None lets concurrent.futures decide
    """
    if kind == "process":
        return ProcessPoolExecutor(max_workers=max_workers)
    if kind == "thread":
        return ThreadPoolExecutor(max_workers=max_workers)
    if kind == "serial":
        return SerialExecutor()
    raise ValueError(f"Unknown executor kind: {kind!r}")


Task = Tuple[str, Callable[..., Union[Path, List[Path]]], Tuple[Any, ...]]


def run_tasks(tasks: Iterable[Task], config: RunConfig, stage: str) -> RunReport:
    """
    Run ``(label, function, args)`` tasks on the configured pool.

    Every task result (a path or list of paths) is recorded as a success; an
    exception fails only its own task.
    """
    report = RunReport()
    tasks = list(tasks)
    if not tasks:
        return report
    with create_executor(config.executor, config.max_workers) as executor:
        futures: Dict[Future, str] = {}
        for label, fn, args in tasks:
            futures[executor.submit(fn, *args)] = label
        for future in as_completed(futures):
            label = futures[future]
            try:
                result = future.result()
            except Exception as exc:
                logger.exception("Failed to generate %s", label)
                report.failed.append((label, f"{type(exc).__name__}: {exc}"))
                continue
            if isinstance(result, list):
                report.succeeded.extend(result)
            else:
                report.succeeded.append(result)
    logger.info("%s: %d written, %d failed", stage, len(report.succeeded), len(report.failed))
    return report


# =============================================================================
# Tasks (module level so process pools can pickle them)
# =============================================================================

@lru_cache(maxsize=None)
def _font(size: int, scale: int, font_path: Optional[str]) -> FontConfig:
    return FontConfig.load(size, scale, font_path)


def _render_font(config: RenderConfig, font_path: Optional[str]) -> FontConfig:
    return _font(config.font_size, config.supersample, font_path)


def _gradient_task(start: Color, end: Color, space: ColorSpace, text_color: TextColor,
                   config: RenderConfig, font_path: Optional[str], path: Path) -> Path:
    canvas = render_gradient_bar(start, end, space, text_color, config, _render_font(config, font_path))
    return save_png(canvas, path)


def _stops_task(start: Color, end: Color, text_color: TextColor, config: RenderConfig,
                font_path: Optional[str], path: Path) -> Path:
    canvas = render_stops(start, end, text_color, config, _render_font(config, font_path))
    return save_png(canvas, path)


def _gamut_comparison_task(text_color: TextColor, config: RenderConfig,
                           font_path: Optional[str], path: Path) -> Path:
    canvas = render_gamut_comparison(COMPARISON_GAMUTS, text_color, config, _render_font(config, font_path))
    return save_png(canvas, path)


def _gamut_volume_task(space: ColorSpace, text_color: TextColor, config: RenderConfig,
                       font_path: Optional[str], path: Path) -> Path:
    canvas = render_gamut_volume(space, text_color, config, _render_font(config, font_path))
    return save_png(canvas, path)


def _chromaticity_task(space: ColorSpace, config: RenderConfig, path: Path) -> Path:
    return save_png(render_chromaticity(space, config), path)


def _frame_task(model: str, index: int, config: AnimationConfig, directory: Path) -> Path:
    angle = frame_angle(index, config.total_frames)
    canvas = get_model(model)(angle, config)
    return write_frame(canvas, directory, index)


def _gif_task(model: str, layout: OutputLayout, animation: AnimationConfig,
              palette_config: PaletteConfig) -> List[Path]:
    canvases = load_frames(layout.frames_dir(model))
    total = len(canvases)
    frames = [Frame(i, frame_angle(i, total), canvas) for i, canvas in enumerate(canvases)]
    cropped = Animation(model, frames).cropped()

    static = save_png(cropped.frames[0].canvas, layout.static_path(model))
    palette = build_palette(cropped.canvases, palette_config.stride, palette_config.bits,
                            palette_config.max_colors)
    logger.debug("Palette for %s: %d entries in use", model, palette.size)
    indexed = [quantize(canvas, palette) for canvas in cropped.canvases]
    gif = save_gif(layout.gif_path(model), indexed, palette, animation.frame_delay_ms)
    return [gif, static]


# =============================================================================
# Stages
# =============================================================================

def _layout(output: Union[OutputLayout, str, Path]) -> OutputLayout:
    return output if isinstance(output, OutputLayout) else OutputLayout(Path(output))


def _endpoints(config: RunConfig) -> Tuple[Color, Color]:
    return Color.parse(config.start_color), Color.parse(config.end_color)


def generate_gradients(
    output: Union[OutputLayout, str, Path],
    config: Optional[RunConfig] = None,
    spaces: Sequence[ColorSpace] = GRADIENT_SPACES,
) -> RunReport:
    """Gradient bar per {space x text color}: ``gradients/gradient_<space>_<color>.png``."""
    config = config or RunConfig()
    layout = _layout(output)
    ensure_directory(layout.gradients_dir)
    start, end = _endpoints(config)
    tasks = [
        (
            layout.gradient_path(space, text_color).name,
            _gradient_task,
            (start, end, space, text_color, config.render, config.font_path,
             layout.gradient_path(space, text_color)),
        )
        for space in spaces
        for text_color in TEXT_COLORS
    ]
    return run_tasks(tasks, config, "gradients")


def generate_stops(output: Union[OutputLayout, str, Path], config: Optional[RunConfig] = None) -> RunReport:
    """Start/end swatches per text color: ``gradients/stops_<color>.png``."""
    config = config or RunConfig()
    layout = _layout(output)
    ensure_directory(layout.gradients_dir)
    start, end = _endpoints(config)
    tasks = [
        (
            layout.stops_path(text_color).name,
            _stops_task,
            (start, end, text_color, config.render, config.font_path, layout.stops_path(text_color)),
        )
        for text_color in TEXT_COLORS
    ]
    return run_tasks(tasks, config, "stops")


def generate_gamuts(
    output: Union[OutputLayout, str, Path],
    config: Optional[RunConfig] = None,
    spaces: Sequence[ColorSpace] = VOLUME_SPACES,
) -> RunReport:
    """XYZ comparison per text color plus one volume per {space x text color}."""
    config = config or RunConfig()
    layout = _layout(output)
    ensure_directory(layout.gamuts_dir)
    tasks: List[Task] = []
    for text_color in TEXT_COLORS:
        path = layout.gamut_comparison_path(text_color)
        tasks.append((path.name, _gamut_comparison_task,
                      (text_color, config.render, config.font_path, path)))
    for space in spaces:
        for text_color in TEXT_COLORS:
            path = layout.gamut_volume_path(space, text_color)
            tasks.append((path.name, _gamut_volume_task,
                          (space, text_color, config.render, config.font_path, path)))
    return run_tasks(tasks, config, "gamuts")


def generate_chromaticity(
    output: Union[OutputLayout, str, Path],
    config: Optional[RunConfig] = None,
    spaces: Sequence[ColorSpace] = CHROMATICITY_SPACES,
) -> RunReport:
    """xy diagram per RGB space: ``chromaticity/chromaticity_<space>.png``."""
    config = config or RunConfig()
    layout = _layout(output)
    ensure_directory(layout.chromaticity_dir)
    tasks = [
        (layout.chromaticity_path(space).name, _chromaticity_task,
         (space, config.render, layout.chromaticity_path(space)))
        for space in spaces
    ]
    return run_tasks(tasks, config, "chromaticity")


def generate_animations(
    output: Union[OutputLayout, str, Path],
    config: Optional[RunConfig] = None,
    models: Sequence[str] = tuple(MODELS),
) -> RunReport:
    """
    Render the {model x frame index} grid to ``animations/<model>/frame_NNN.png``.

    A model with zero frames is reported as failed; the other models still run.
    """
    config = config or RunConfig()
    layout = _layout(output)
    animation = config.animation
    report = RunReport()
    tasks: List[Task] = []
    for model in models:
        get_model(model)
        if animation.total_frames <= 0:
            error = EmptyInputError(f"Model {model!r} has zero frames")
            logger.error("Skipping %s: %s", model, error)
            report.failed.append((model, f"{type(error).__name__}: {error}"))
            continue
        directory = ensure_directory(layout.frames_dir(model))
        removed = clear_frames(directory)
        if removed:
            logger.debug("Removed %d stale frames from %s", removed, directory)
        for index in range(animation.total_frames):
            tasks.append((f"{model} frame {index}", _frame_task, (model, index, animation, directory)))
    return report.merge(run_tasks(tasks, config, "animation frames"))


def generate_gifs(
    output: Union[OutputLayout, str, Path],
    config: Optional[RunConfig] = None,
    models: Sequence[str] = tuple(MODELS),
) -> RunReport:
    """Assemble ``models/model_<name>.gif`` and ``model_<name>_static.png`` from rendered frames."""
    config = config or RunConfig()
    layout = _layout(output)
    ensure_directory(layout.models_dir)
    tasks = [
        (layout.gif_path(model).name, _gif_task, (model, layout, config.animation, config.palette))
        for model in models
    ]
    return run_tasks(tasks, config, "gifs")


def generate_all(output: Union[OutputLayout, str, Path], config: Optional[RunConfig] = None) -> RunReport:
    """
    Produce every output category under ``output``.

    Raises:
        SetupError: the output directories cannot be created
    """
    config = config or RunConfig()
    layout = prepare_layout(_layout(output))
    logger.info("Generating images under %s", layout.root)

    report = RunReport()
    report.merge(generate_gradients(layout, config))
    report.merge(generate_stops(layout, config))
    report.merge(generate_gamuts(layout, config))
    report.merge(generate_chromaticity(layout, config))
    frames = generate_animations(layout, config)
    report.merge(frames)
    failed_models = {label.split(" ")[0] for label, _ in frames.failed}
    models = [model for model in MODELS if model not in failed_models]
    report.merge(generate_gifs(layout, config, models))

    if report.failed:
        logger.warning("Finished with %d failures: %s", len(report.failed),
                       ", ".join(label for label, _ in report.failed))
    else:
        logger.info("Finished: %d files written", len(report.succeeded))
    return report
