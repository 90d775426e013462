from .chromaticity import SPECTRAL_LOCUS, fill_gaps, render_chromaticity, xyz_to_xy
from .gamut_comparison import render_gamut_comparison, xyz_bounds
from .gamut_volume import render_gamut_volume
from .gamuts import (
    CHROMATICITY_SPACES,
    COMPARISON_GAMUTS,
    VOLUME_SPACES,
    GamutSpec,
    gamut_spec,
)
from .gradient_bars import GRADIENT_SPACES, render_gradient_bar, space_title
from .stops import render_stops

__all__ = [
    "SPECTRAL_LOCUS",
    "fill_gaps",
    "render_chromaticity",
    "xyz_to_xy",
    "render_gamut_comparison",
    "xyz_bounds",
    "render_gamut_volume",
    "CHROMATICITY_SPACES",
    "COMPARISON_GAMUTS",
    "VOLUME_SPACES",
    "GamutSpec",
    "gamut_spec",
    "GRADIENT_SPACES",
    "render_gradient_bar",
    "space_title",
    "render_stops",
]
