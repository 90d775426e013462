"""
Model Renderers
===============

One frame renderer per animated color model. Each renderer samples its model
with ``ColorSpaceSampler``, places the samples in 3-D, projects them with
``Projector3D``, draws them with the rasterizer on an oversampled canvas and
returns the downscaled frame.

Models:
    rgb_cube: the six faces of the sRGB cube
    hsl_cylinder: HSL cylinder wall plus the L=0.5 disc
    lab_space: LAB slice at L=50 (in-gamut colors only)
    oklch_space: OKLCH slice at L=0.5 (in-gamut colors only)

Sampling does not depend on the angle, so sample sets are cached per step
size and reused by every frame rendered in the same process.
"""
from __future__ import annotations
import math
from functools import lru_cache
from typing import Dict, List, Tuple

import numpy as np
from numpy import ndarray as NDArray

from ..config import AnimationConfig
from ..geometry.projector import CUBE_EDGES, Projector3D, ViewParams
from ..raster.canvas import WHITE, Canvas
from ..raster.downscale import downscale
from ..raster.rasterizer import draw_disk, draw_line, splat_points
from ..sampling.sampler import Axis, ColorSpaceSampler
from ..types.color_types import ColorSpace
from .animator import FrameRenderer

PointCloud = Tuple[NDArray, NDArray]

LAB_AB_LIMIT = 80.0
OKLCH_MAX_CHROMA = 0.3
AXIS_COLORS = {
    "x": (255, 100, 100, 255),
    "y": (100, 255, 100, 255),
    "z": (100, 100, 255, 255),
}


def _view_for(angle: float, config: AnimationConfig, scale_ratio: float) -> Tuple[Canvas, Projector3D]:
    canvas = Canvas.oversampled(config.width, config.height, config.supersample)
    view = ViewParams(canvas.width / 2, canvas.height / 2, min(canvas.width, canvas.height) * scale_ratio)
    # Negative tilt opens horizontal planes toward the viewer under the oblique z term
    projector = Projector3D(view, angle_y=angle, angle_x=-math.radians(config.tilt_degrees))
    return canvas, projector


def _draw_cloud(canvas: Canvas, projector: Projector3D, cloud: PointCloud, radius: float) -> None:
    """Depth-sorted point cloud fill; nearer (larger depth) points replace farther ones."""
    positions, colors = cloud
    xs, ys, depth = projector.project_points(positions)
    order = np.argsort(depth, kind="stable")
    splat_points(canvas, xs[order], ys[order], colors[order], radius, blend=False)


def _draw_segment(canvas: Canvas, projector: Projector3D, a, b, color, thickness: int) -> None:
    xa, ya, _ = projector.project_point(a)
    xb, yb, _ = projector.project_point(b)
    draw_line(canvas, xa, ya, xb, yb, color, thickness, blend=True)


def _point_radius(config: AnimationConfig) -> float:
    return config.point_radius * config.supersample


def _concat(clouds: List[PointCloud]) -> PointCloud:
    return (np.concatenate([c[0] for c in clouds]), np.concatenate([c[1] for c in clouds]))


# =============================================================================
# Sample sets
# =============================================================================

@lru_cache(maxsize=8)
def rgb_cube_cloud(step: float) -> PointCloud:
    """Points on the six faces of the RGB cube, centered on the origin."""
    sweep = Axis.sweep(0.0, 1.0, step)
    clouds = []
    for fixed_axis in range(3):
        for value in (0.0, 1.0):
            axes = [sweep, sweep, sweep]
            axes[fixed_axis] = Axis.fixed(value)
            batch = ColorSpaceSampler(ColorSpace.SRGB, axes).batch()
            # R -> x, B -> z, G -> up
            r, g, b = batch.coords[:, 0], batch.coords[:, 1], batch.coords[:, 2]
            positions = np.stack([r - 0.5, g - 0.5, b - 0.5], axis=-1)
            clouds.append((positions, batch.rgba8()))
    return _concat(clouds)


@lru_cache(maxsize=8)
def hsl_cylinder_cloud(step: float) -> PointCloud:
    """Cylinder wall at full saturation plus the mid-lightness disc."""
    # Rim is longer than the wall is tall, so hue steps are half as coarse
    hue = Axis.sweep(0.0, 360.0, 180.0 * step, endpoint=False)
    unit = Axis.sweep(0.0, 1.0, step)
    wall = ColorSpaceSampler(ColorSpace.HSL, (hue, Axis.fixed(1.0), unit)).batch()
    disc = ColorSpaceSampler(ColorSpace.HSL, (hue, unit, Axis.fixed(0.5))).batch()

    clouds = []
    for batch in (wall, disc):
        h = np.radians(batch.coords[:, 0])
        s = batch.coords[:, 1]
        l = batch.coords[:, 2]
        positions = np.stack([0.5 * s * np.cos(h), l - 0.5, 0.5 * s * np.sin(h)], axis=-1)
        clouds.append((positions, batch.rgba8()))
    return _concat(clouds)


@lru_cache(maxsize=8)
def lab_slice_cloud(step: float, lightness: float = 50.0) -> PointCloud:
    """In-gamut colors of the LAB plane at constant L, laid flat (a -> x, b -> z)."""
    ab = Axis.sweep(-LAB_AB_LIMIT, LAB_AB_LIMIT, step)
    batch = ColorSpaceSampler(ColorSpace.LAB, (Axis.fixed(lightness), ab, ab)).batch(gamut_filter=True)
    half = 2 * LAB_AB_LIMIT
    positions = np.stack([
        batch.coords[:, 1] / half,
        np.zeros(len(batch)),
        batch.coords[:, 2] / half,
    ], axis=-1)
    return positions, batch.rgba8()


@lru_cache(maxsize=8)
def oklch_slice_cloud(chroma_step: float, hue_step: float, lightness: float = 0.5) -> PointCloud:
    """In-gamut colors of the OKLCH plane at constant L, in polar layout."""
    axes = (
        Axis.fixed(lightness),
        Axis.sweep(0.0, OKLCH_MAX_CHROMA, chroma_step),
        Axis.sweep(0.0, 360.0, hue_step, endpoint=False),
    )
    batch = ColorSpaceSampler(ColorSpace.OKLCH, axes).batch(gamut_filter=True)
    radius = batch.coords[:, 1] / (2 * OKLCH_MAX_CHROMA)
    h = np.radians(batch.coords[:, 2])
    positions = np.stack([radius * np.cos(h), np.zeros(len(batch)), radius * np.sin(h)], axis=-1)
    return positions, batch.rgba8()


# =============================================================================
# Frame renderers
# =============================================================================

def render_rgb_cube(angle: float, config: AnimationConfig) -> Canvas:
    canvas, projector = _view_for(angle, config, 0.4)
    _draw_cloud(canvas, projector, rgb_cube_cloud(config.step_for("rgb_cube", 0.01)), _point_radius(config))

    for a, b in CUBE_EDGES:
        shifted_a = tuple(v - 0.5 for v in a)
        shifted_b = tuple(v - 0.5 for v in b)
        _draw_segment(canvas, projector, shifted_a, shifted_b, WHITE, config.supersample)
    return downscale(canvas)


def render_hsl_cylinder(angle: float, config: AnimationConfig) -> Canvas:
    canvas, projector = _view_for(angle, config, 0.55)
    cloud = hsl_cylinder_cloud(config.step_for("hsl_cylinder", 0.005))
    _draw_cloud(canvas, projector, cloud, _point_radius(config))
    _draw_segment(canvas, projector, (0.0, -0.5, 0.0), (0.0, 0.6, 0.0), WHITE, config.supersample)
    return downscale(canvas)


def render_lab_space(angle: float, config: AnimationConfig) -> Canvas:
    canvas, projector = _view_for(angle, config, 0.8)
    cloud = lab_slice_cloud(config.step_for("lab_space", 0.3))
    _draw_cloud(canvas, projector, cloud, _point_radius(config))

    thickness = config.supersample
    _draw_segment(canvas, projector, (-0.5, 0.0, 0.0), (0.5, 0.0, 0.0), AXIS_COLORS["x"], thickness)
    _draw_segment(canvas, projector, (0.0, 0.0, -0.5), (0.0, 0.0, 0.5), AXIS_COLORS["z"], thickness)
    _draw_segment(canvas, projector, (0.0, -0.3, 0.0), (0.0, 0.3, 0.0), WHITE, thickness)
    return downscale(canvas)


def render_oklch_space(angle: float, config: AnimationConfig) -> Canvas:
    canvas, projector = _view_for(angle, config, 0.8)
    cloud = oklch_slice_cloud(
        config.step_for("oklch_space", 0.003),
        config.step_for("oklch_space.hue", 0.5),
    )
    _draw_cloud(canvas, projector, cloud, _point_radius(config))

    cx, cy, _ = projector.project_point((0.0, 0.0, 0.0))
    draw_disk(canvas, cx, cy, 3 * config.supersample, WHITE)
    return downscale(canvas)


MODELS: Dict[str, FrameRenderer] = {
    "rgb_cube": render_rgb_cube,
    "hsl_cylinder": render_hsl_cylinder,
    "lab_space": render_lab_space,
    "oklch_space": render_oklch_space,
}


def get_model(name: str) -> FrameRenderer:
    try:
        return MODELS[name]
    except KeyError:
        raise ValueError(f"Unknown model {name!r}; expected one of {sorted(MODELS)}") from None
