import numpy as np
import pytest

from chromagen.conversions import convert, np_convert, np_in_gamut, primaries_xy, to_rgb8, transfer_function
from chromagen.types import ColorSpace

round_trip_tolerance = 1e-3

ALL_SPACES = list(ColorSpace)


def _in_gamut_srgb(n=1000, seed=7):
    rng = np.random.default_rng(seed)
    return rng.random((n, 3))


@pytest.mark.parametrize("space", [s for s in ALL_SPACES if s != ColorSpace.SRGB])
def test_round_trip_srgb_through_space(space):
    """sRGB -> space -> sRGB reproduces 1000 random in-gamut colors."""
    rgb = _in_gamut_srgb()
    there = np_convert(rgb, ColorSpace.SRGB, space)
    back = np_convert(there, space, ColorSpace.SRGB)
    assert np.allclose(back, rgb, atol=round_trip_tolerance)


@pytest.mark.parametrize("a, b", [
    (ColorSpace.LAB, ColorSpace.OKLCH),
    (ColorSpace.OKLAB, ColorSpace.LCH),
    (ColorSpace.HSL, ColorSpace.REC2020),
    (ColorSpace.DISPLAY_P3, ColorSpace.PROPHOTO_RGB),
    (ColorSpace.ADOBE_RGB, ColorSpace.XYZ),
    (ColorSpace.LCH, ColorSpace.HSL),
])
def test_round_trip_between_spaces(a, b):
    rgb = _in_gamut_srgb(seed=11)
    start = np_convert(rgb, ColorSpace.SRGB, a)
    back = np_convert(np_convert(start, a, b), b, a)
    assert np.allclose(np_convert(back, a, ColorSpace.SRGB), rgb, atol=round_trip_tolerance)


def test_srgb_white_in_xyz_and_lab():
    xyz = convert((1.0, 1.0, 1.0), ColorSpace.SRGB, ColorSpace.XYZ)
    assert np.allclose(xyz, (0.95047, 1.0, 1.08883), atol=1e-3)

    L, a, b = convert((1.0, 1.0, 1.0), ColorSpace.SRGB, ColorSpace.LAB)
    assert abs(L - 100.0) < 0.05
    assert abs(a) < 0.05
    assert abs(b) < 0.05


def test_oklab_white_and_black():
    L, a, b = convert((1.0, 1.0, 1.0), "srgb", "oklab")
    assert abs(L - 1.0) < 2e-3
    assert abs(a) < 1e-3 and abs(b) < 1e-3
    assert np.allclose(convert((0.0, 0.0, 0.0), "srgb", "oklab"), (0.0, 0.0, 0.0), atol=1e-9)


def test_red_in_hsl():
    h, s, l = convert((1.0, 0.0, 0.0), ColorSpace.SRGB, ColorSpace.HSL)
    assert abs(h) < 1e-9
    assert abs(s - 1.0) < 1e-9
    assert abs(l - 0.5) < 1e-9


def test_convert_returns_tuple_for_tuple_input():
    result = convert((0.2, 0.4, 0.6), ColorSpace.SRGB, ColorSpace.SRGB)
    assert isinstance(result, tuple)
    assert result == (0.2, 0.4, 0.6)


def test_convert_accepts_aliases():
    a = np_convert(np.array([0.3, 0.5, 0.7]), "rgb", "p3")
    b = np_convert(np.array([0.3, 0.5, 0.7]), ColorSpace.SRGB, ColorSpace.DISPLAY_P3)
    assert np.allclose(a, b)


def test_unknown_space_raises():
    with pytest.raises(ValueError):
        np_convert(np.zeros(3), "cmyk", "srgb")


@pytest.mark.parametrize("space", [
    ColorSpace.SRGB, ColorSpace.DISPLAY_P3, ColorSpace.ADOBE_RGB,
    ColorSpace.PROPHOTO_RGB, ColorSpace.REC2020,
])
def test_transfer_functions_invert(space):
    encode, decode = transfer_function(space)
    values = np.linspace(-0.5, 1.5, 201)
    assert np.allclose(encode(decode(values)), values, atol=1e-9)
    assert np.allclose(decode(encode(values)), values, atol=1e-9)


def test_srgb_transfer_known_value():
    encode, decode = transfer_function(ColorSpace.SRGB)
    assert abs(float(encode(np.array(0.5))) - 0.7353569830) < 1e-6
    assert abs(float(decode(np.array(0.04045))) - 0.04045 / 12.92) < 1e-9


def test_in_gamut_flags():
    colors = np.array([
        [0.5, 0.5, 0.5],
        [1.0, 0.0, 0.0],
        [1.2, 0.0, 0.0],
        [-0.1, 0.5, 0.5],
    ])
    assert np_in_gamut(colors, ColorSpace.SRGB).tolist() == [True, True, False, False]


def test_wide_gamut_red_outside_srgb():
    red = np.array([1.0, 0.0, 0.0])
    assert not bool(np_in_gamut(red, ColorSpace.REC2020))
    assert bool(np_in_gamut(red, ColorSpace.REC2020, ColorSpace.REC2020))


def test_srgb_primaries():
    xy = primaries_xy(ColorSpace.SRGB)
    assert np.allclose(xy, [[0.64, 0.33], [0.30, 0.60], [0.15, 0.06]], atol=2e-3)


def test_to_rgb8_clamps_and_rounds():
    out = to_rgb8(np.array([[1.5, 0.5, -0.2]]), ColorSpace.SRGB)
    assert out.dtype == np.uint8
    assert out.tolist() == [[255, 128, 0]]
