import numpy as np
import pytest

from chromagen.colors import Color
from chromagen.errors import EmptyInputError
from chromagen.gradients import HueMode, gradient, gradient_rgba8, hue_lerp, interpolate
from chromagen.types import ColorSpace

GRADIENT_SPACES = [
    ColorSpace.SRGB, ColorSpace.HSL, ColorSpace.LAB,
    ColorSpace.OKLAB, ColorSpace.LCH, ColorSpace.OKLCH,
]


def _angle_diff(a, b):
    return (np.asarray(a) - np.asarray(b) + 180.0) % 360.0 - 180.0


@pytest.mark.parametrize("space", GRADIENT_SPACES)
def test_gradient_between_identical_colors_is_constant(space):
    color = Color.parse("rgb(40, 180, 220)")
    colors = gradient(color, color, 16, space)
    assert len(colors) == 16
    for c in colors:
        assert np.allclose(c.coords, color.coords, atol=1e-6)


@pytest.mark.parametrize("space", GRADIENT_SPACES)
def test_gradient_endpoints(space):
    start = Color.parse("rgb(255, 0, 0)")
    end = Color.parse("rgb(0, 0, 255)")
    colors = gradient(start, end, 9, space)
    assert colors[0].rgba8() == start.rgba8()
    assert colors[-1].rgba8() == end.rgba8()


def test_hue_wraps_through_zero():
    start = Color(ColorSpace.HSL, (350.0, 1.0, 0.5))
    end = Color(ColorSpace.HSL, (10.0, 1.0, 0.5))
    colors = gradient(start, end, 5, ColorSpace.HSL, output_space=ColorSpace.HSL)
    hues = [c.coords[0] for c in colors]
    assert np.allclose(_angle_diff(hues, [350.0, 355.0, 0.0, 5.0, 10.0]), 0.0, atol=1e-9)
    # Never sweeps backwards through the far side of the circle
    assert all(abs(_angle_diff(h, 0.0)) <= 10.0 + 1e-9 for h in hues)


def test_lch_hue_wraps_through_zero():
    start = Color(ColorSpace.LCH, (50.0, 30.0, 350.0))
    end = Color(ColorSpace.LCH, (50.0, 30.0, 10.0))
    colors = gradient(start, end, 3, ColorSpace.LCH, output_space=ColorSpace.LCH)
    assert abs(_angle_diff(colors[1].coords[2], 0.0)) < 1e-9


def test_hue_lerp_modes():
    coeffs = np.linspace(0, 1, 5)
    np.testing.assert_allclose(hue_lerp(30.0, 300.0, coeffs, HueMode.SHORTEST),
                               [30.0, 7.5, 345.0, 322.5, 300.0], atol=1e-9)
    np.testing.assert_allclose(hue_lerp(30.0, 300.0, coeffs, HueMode.CW),
                               [30.0, 97.5, 165.0, 232.5, 300.0], atol=1e-9)
    np.testing.assert_allclose(hue_lerp(30.0, 300.0, coeffs, HueMode.CCW),
                               [30.0, 7.5, 345.0, 322.5, 300.0], atol=1e-9)
    np.testing.assert_allclose(hue_lerp(30.0, 60.0, coeffs, HueMode.LONGEST),
                               [30.0, 307.5, 225.0, 142.5, 60.0], atol=1e-9)


def test_achromatic_endpoint_borrows_hue():
    white = Color(ColorSpace.HSL, (0.0, 0.0, 1.0))
    blue = Color(ColorSpace.HSL, (240.0, 1.0, 0.5))
    colors = gradient(white, blue, 3, ColorSpace.HSL, output_space=ColorSpace.HSL)
    assert colors[1].coords[0] == pytest.approx(240.0)


def test_interpolate_clamps_coefficients():
    out = interpolate(np.array([0.0, 0.0, 0.0]), np.array([1.0, 1.0, 1.0]),
                      np.array([-1.0, 0.5, 2.0]), ColorSpace.SRGB)
    assert out[:, 0].tolist() == [0.0, 0.5, 1.0]


def test_out_of_gamut_midpoints_are_kept_not_rejected():
    start = Color(ColorSpace.OKLCH, (0.7, 0.35, 140.0))
    end = Color(ColorSpace.OKLCH, (0.7, 0.35, 320.0))
    colors = gradient(start, end, 11, ColorSpace.OKLCH)
    assert len(colors) == 11
    assert any(not c.in_gamut() for c in colors)
    for c in colors:
        assert all(0 <= v <= 255 for v in c.rgba8())


def test_single_step_and_empty_gradient():
    start = Color.parse("#102030")
    end = Color.parse("#ffffff")
    assert [c.to_hex() for c in gradient(start, end, 1, ColorSpace.LAB)] == ["#102030"]
    with pytest.raises(EmptyInputError):
        gradient(start, end, 0, ColorSpace.LAB)


def test_gradient_rgba8_matches_colors():
    start = Color.parse("rgb(255, 0, 0)")
    end = Color.parse("rgb(0, 0, 255)")
    pixels = gradient_rgba8(start, end, 7, ColorSpace.OKLAB)
    expected = [c.rgba8() for c in gradient(start, end, 7, ColorSpace.OKLAB)]
    assert pixels.shape == (7, 4)
    assert [tuple(p) for p in pixels.tolist()] == expected
