"""
Color
=====

Immutable color value tagged with the space its coordinates live in.

Coordinates are never clipped: a color may sit outside every display gamut
while it is being interpolated or sampled. Clamping only happens when a color
is reported as display RGB(A).
"""
from __future__ import annotations
import re
from typing import Any, Tuple, Union, cast

import numpy as np
from boundednumbers import UnitFloat

from ..conversions import convert, np_in_gamut, to_display_rgb
from ..types.color_types import ColorSpace, Coords, CoordsLike, RGBA8, coords_to_array

_FUNCTIONAL = re.compile(r"^\s*([a-z0-9-]+)\s*\(\s*(.*?)\s*\)\s*$", re.IGNORECASE)
_HEX = re.compile(r"^#?([0-9a-f]{3}|[0-9a-f]{6}|[0-9a-f]{8})$", re.IGNORECASE)


class Color:
    __slots__ = ('_space', '_coords', '_alpha', '_is_frozen')

    def __setattr__(self, name, value):
        """Block attribute changes after __init__ finishes."""
        if getattr(self, '_is_frozen', False):
            raise AttributeError(f"{self.__class__.__name__} is immutable; cannot assign to {name}")
        super().__setattr__(name, value)

    def __init__(self, space: Union[ColorSpace, str], coords: CoordsLike, alpha: float = 1.0) -> None:
        arr = coords_to_array(coords)
        if arr.shape != (3,):
            raise ValueError(f"Color expects exactly three coordinates, got shape {arr.shape}")
        if not np.all(np.isfinite(arr)):
            raise ValueError(f"Color coordinates must be finite, got {tuple(arr)}")

        self._space = ColorSpace.parse(space)
        self._coords = cast(Coords, tuple(float(v) for v in arr))
        self._alpha = float(UnitFloat(alpha))
        super().__setattr__('_is_frozen', True)

    def __reduce__(self):
        return (self.__class__, (self._space, self._coords, self._alpha))

    # ------------------ CONSTRUCTORS ------------------
    @classmethod
    def srgb(cls, r: float, g: float, b: float, alpha: float = 1.0) -> Color:
        """sRGB color from channels in [0, 1]."""
        return cls(ColorSpace.SRGB, (r, g, b), alpha)

    @classmethod
    def from_rgb255(cls, r: int, g: int, b: int, alpha: int = 255) -> Color:
        return cls(ColorSpace.SRGB, (r / 255, g / 255, b / 255), alpha / 255)

    @classmethod
    def from_hex(cls, text: str) -> Color:
        """
        Parse ``#rgb``, ``#rrggbb`` or ``#rrggbbaa`` (leading ``#`` optional).
        """
        match = _HEX.match(text.strip())
        if match is None:
            raise ValueError(f"Invalid hex color: {text!r}")
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
        return cls.from_rgb255(*channels)

    @classmethod
    def parse(cls, text: str) -> Color:
        """
        Parse a CSS-like color string.

        Supported forms:
            - hex: ``#ff0000``
            - ``rgb(255, 0, 0)`` (0-255 or percentages)
            - ``hsl(0, 100%, 50%)``
            - ``<space>(a, b, c)`` for any other space tag, e.g. ``oklch(0.6, 0.2, 30)``

        An optional fourth argument (or ``/ alpha``) sets alpha.
        """
        text = text.strip()
        if text.startswith("#"):
            return cls.from_hex(text)

        match = _FUNCTIONAL.match(text)
        if match is None:
            raise ValueError(f"Unrecognized color string: {text!r}")

        name = match.group(1).lower()
        parts = [p for p in re.split(r"[\s,/]+", match.group(2)) if p]
        if len(parts) not in (3, 4):
            raise ValueError(f"Expected 3 or 4 components in {text!r}")

        alpha = _parse_component(parts[3], 1.0) if len(parts) == 4 else 1.0
        if name in ("rgb", "rgba"):
            r, g, b = (_parse_component(p, 255.0) for p in parts[:3])
            return cls(ColorSpace.SRGB, (r / 255, g / 255, b / 255), alpha)
        if name in ("hsl", "hsla"):
            h = _parse_component(parts[0], 360.0)
            s, l = (_parse_component(p, 1.0, percent_scale=1.0) for p in parts[1:3])
            return cls(ColorSpace.HSL, (h, s, l), alpha)

        space = ColorSpace.parse(name)
        coords = tuple(_parse_component(p, 1.0) for p in parts[:3])
        return cls(space, coords, alpha)

    # ------------------ READ-ONLY PROPERTIES ------------------
    @property
    def space(self) -> ColorSpace:
        return self._space

    @property
    def coords(self) -> Coords:
        return self._coords

    @property
    def alpha(self) -> float:
        return self._alpha

    # ------------------ CONVERSION ------------------
    def convert(self, space: Union[ColorSpace, str]) -> Color:
        space = ColorSpace.parse(space)
        if space == self._space:
            return self
        return Color(space, convert(self._coords, self._space, space), self._alpha)

    def with_alpha(self, alpha: float) -> Color:
        return Color(self._space, self._coords, alpha)

    def in_gamut(self, gamut_space: ColorSpace = ColorSpace.SRGB) -> bool:
        return bool(np_in_gamut(np.asarray(self._coords), self._space, gamut_space))

    def rgba(self) -> Tuple[float, float, float, float]:
        """Normalized display (R, G, B, A) in [0, 1]; out-of-gamut channels are clamped."""
        r, g, b = (float(v) for v in to_display_rgb(np.asarray(self._coords), self._space))
        return r, g, b, self._alpha

    def rgba8(self) -> RGBA8:
        r, g, b, a = self.rgba()
        return cast(RGBA8, tuple(int(np.floor(v * 255 + 0.5)) for v in (r, g, b, a)))

    def to_hex(self) -> str:
        r, g, b, _ = self.rgba8()
        return f"#{r:02x}{g:02x}{b:02x}"

    # ------------------ DUNDER ------------------
    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return (self._space == other._space
                and self._coords == other._coords
                and self._alpha == other._alpha)

    def __hash__(self) -> int:
        return hash((self._space, self._coords, self._alpha))

    def __repr__(self) -> str:
        c0, c1, c2 = self._coords
        alpha = "" if self._alpha == 1.0 else f", alpha={self._alpha:g}"
        return f"Color({self._space.value}, ({c0:g}, {c1:g}, {c2:g}){alpha})"

    def isclose(self, other: Color, tol: float = 1e-6) -> bool:
        """Compare two colors after converting ``other`` into this color's space."""
        other = other.convert(self._space)
        return bool(np.allclose(self._coords, other._coords, atol=tol)
                    and abs(self._alpha - other._alpha) <= tol)


def _parse_component(token: str, scale: float, percent_scale: float | None = None) -> float:
    """Parse a number or percentage; percentages map onto ``percent_scale`` (default ``scale``)."""
    token = token.strip()
    if token.endswith("%"):
        full = scale if percent_scale is None else percent_scale
        return float(token[:-1]) / 100.0 * full
    if token.endswith("deg"):
        return float(token[:-3])
    return float(token)
