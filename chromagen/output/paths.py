"""
Output Layout
=============

Every file name the pipeline writes, in one place.

    gradients/gradient_<space>_<black|white>.png
    gradients/stops_<black|white>.png
    gamuts/gamut_xyz_comparison_<black|white>.png
    gamuts/gamut_<space>_<black|white>.png
    chromaticity/chromaticity_<space>.png
    models/model_<name>.gif
    models/model_<name>_static.png
    animations/<name>/frame_NNN.png
"""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ..raster.text import TextColor
from ..types.color_types import ColorSpace, file_names

FRAME_PATTERN = "frame_{index:03d}.png"
FRAME_GLOB = "frame_*.png"


def space_slug(space: Union[ColorSpace, str]) -> str:
    return file_names[ColorSpace.parse(space)]


@dataclass(frozen=True)
class OutputLayout:
    root: Path

    def __post_init__(self):
        object.__setattr__(self, "root", Path(self.root))

    @property
    def gradients_dir(self) -> Path:
        return self.root / "gradients"

    @property
    def gamuts_dir(self) -> Path:
        return self.root / "gamuts"

    @property
    def chromaticity_dir(self) -> Path:
        return self.root / "chromaticity"

    @property
    def models_dir(self) -> Path:
        return self.root / "models"

    @property
    def animations_dir(self) -> Path:
        return self.root / "animations"

    def gradient_path(self, space: Union[ColorSpace, str], text_color: TextColor) -> Path:
        return self.gradients_dir / f"gradient_{space_slug(space)}_{TextColor(text_color).value}.png"

    def stops_path(self, text_color: TextColor) -> Path:
        return self.gradients_dir / f"stops_{TextColor(text_color).value}.png"

    def gamut_comparison_path(self, text_color: TextColor) -> Path:
        return self.gamuts_dir / f"gamut_xyz_comparison_{TextColor(text_color).value}.png"

    def gamut_volume_path(self, space: Union[ColorSpace, str], text_color: TextColor) -> Path:
        return self.gamuts_dir / f"gamut_{space_slug(space)}_{TextColor(text_color).value}.png"

    def chromaticity_path(self, space: Union[ColorSpace, str]) -> Path:
        return self.chromaticity_dir / f"chromaticity_{space_slug(space)}.png"

    def frames_dir(self, model: str) -> Path:
        return self.animations_dir / model

    def frame_path(self, model: str, index: int) -> Path:
        return self.frames_dir(model) / FRAME_PATTERN.format(index=index)

    def gif_path(self, model: str) -> Path:
        return self.models_dir / f"model_{model}.gif"

    def static_path(self, model: str) -> Path:
        return self.models_dir / f"model_{model}_static.png"

    def directories(self):
        return (
            self.gradients_dir,
            self.gamuts_dir,
            self.chromaticity_dir,
            self.models_dir,
            self.animations_dir,
        )
