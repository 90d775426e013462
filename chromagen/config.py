"""
Render Configuration
====================

Read-only settings shared by the renderers. Values are constructed once per
run and passed explicitly; nothing here is mutated after start-up.

Classes:
    RenderConfig: static images (gradients, stops, gamut plots, diagrams)
    AnimationConfig: rotating model animations
    PaletteConfig: GIF palette construction
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional

DEFAULT_START_COLOR = "rgb(255, 0, 0)"
DEFAULT_END_COLOR = "rgb(0, 0, 255)"

DEFAULT_SUPERSAMPLE = 3
DEFAULT_TOTAL_FRAMES = 60


@dataclass(frozen=True)
class RenderConfig:
    supersample: int = DEFAULT_SUPERSAMPLE
    font_size: int = 16
    gradient_width: int = 830
    gradient_height: int = 50
    corner_radius: int = 8
    padding: int = 8
    stops_padding: int = 20
    # Extra room (final pixels) around cropped plots
    crop_padding: int = 20
    gamut_width: int = 1200
    gamut_height: int = 1000
    gamut_volume_width: int = 1000
    gamut_volume_height: int = 800
    chromaticity_size: int = 1000

    def __post_init__(self):
        if self.supersample < 1:
            raise ValueError(f"supersample must be >= 1, got {self.supersample}")
        if self.gradient_width <= 0 or self.gradient_height <= 0:
            raise ValueError("gradient dimensions must be positive")
        if self.corner_radius < 0:
            raise ValueError("corner_radius must be non-negative")

    def scaled(self, value: float) -> int:
        """Convert a final-resolution length to oversampled pixels."""
        return int(round(value * self.supersample))


@dataclass(frozen=True)
class AnimationConfig:
    width: int = 400
    height: int = 400
    supersample: int = DEFAULT_SUPERSAMPLE
    total_frames: int = DEFAULT_TOTAL_FRAMES
    frame_delay_ms: int = 50
    tilt_degrees: float = 30.0
    # Point splat radius in final pixels
    point_radius: float = 1.0
    # Per-model sampling step overrides, keyed by model name
    steps: Dict[str, float] = field(default_factory=dict)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Frame size must be positive, got {self.width}x{self.height}")
        if self.supersample < 1:
            raise ValueError(f"supersample must be >= 1, got {self.supersample}")
        if self.total_frames < 0:
            raise ValueError(f"total_frames must be >= 0, got {self.total_frames}")

    def step_for(self, model: str, default: float) -> float:
        return self.steps.get(model, default)


@dataclass(frozen=True)
class PaletteConfig:
    stride: int = 4
    bits: int = 6
    # Stop collecting once this many opaque colors are found
    max_colors: int = 255

    def __post_init__(self):
        if self.stride < 1:
            raise ValueError(f"stride must be >= 1, got {self.stride}")
        if not 1 <= self.bits <= 16:
            raise ValueError(f"bits must be within [1, 16], got {self.bits}")
        if not 1 <= self.max_colors <= 255:
            raise ValueError(f"max_colors must be within [1, 255], got {self.max_colors}")


@dataclass(frozen=True)
class RunConfig:
    """Everything a full generation run needs besides the output directory."""
    start_color: str = DEFAULT_START_COLOR
    end_color: str = DEFAULT_END_COLOR
    render: RenderConfig = field(default_factory=RenderConfig)
    animation: AnimationConfig = field(default_factory=AnimationConfig)
    palette: PaletteConfig = field(default_factory=PaletteConfig)
    # None lets concurrent.futures pick from the CPU count
    max_workers: Optional[int] = None
    # "process", "thread" or "serial"
    executor: str = "process"
    font_path: Optional[str] = None

    def __post_init__(self):
        if self.executor not in ("process", "thread", "serial"):
            raise ValueError(f"Unknown executor kind: {self.executor!r}")
