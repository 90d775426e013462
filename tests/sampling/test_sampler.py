import math

import numpy as np
import pytest

from chromagen.conversions import np_in_gamut
from chromagen.sampling import Axis, ColorSpaceSampler, Sample
from chromagen.types import ColorSpace


def test_axis_count_uses_ceil_plus_one():
    assert Axis.sweep(0.0, 1.0, 0.01).count == 101
    assert Axis.sweep(0.0, 1.0, 0.3).count == math.ceil(1.0 / 0.3) + 1
    # 0.3 / 0.003 is 99.99999... in floating point
    assert Axis.sweep(0.0, 0.3, 0.003).count == 101
    assert Axis.sweep(-80.0, 80.0, 0.3).count == math.ceil(160.0 / 0.3) + 1


def test_axis_values_never_overshoot():
    values = Axis.sweep(0.0, 1.0, 0.3).values()
    assert values[0] == 0.0
    assert values[-1] == 1.0
    assert np.all(np.diff(values) > 0)


def test_periodic_axis_excludes_endpoint():
    hue = Axis.sweep(0.0, 360.0, 0.5, endpoint=False)
    assert hue.count == 720
    assert hue.values()[-1] == pytest.approx(359.5)


def test_fixed_axis():
    axis = Axis.fixed(0.5)
    assert axis.is_fixed
    assert axis.count == 1
    assert axis.values().tolist() == [0.5]


def test_invalid_axes():
    with pytest.raises(ValueError):
        Axis.sweep(0.0, 1.0, 0.0)
    with pytest.raises(ValueError):
        Axis(1.0, 0.0, 0.1)
    with pytest.raises(ValueError):
        ColorSpaceSampler(ColorSpace.SRGB, [Axis.fixed(0.0)])


def test_cube_sample_count():
    sampler = ColorSpaceSampler.cube(ColorSpace.SRGB, 0.1)
    assert sampler.shape == (11, 11, 11)
    assert len(sampler) == 1331
    assert sum(1 for _ in sampler) == 1331


def test_samples_are_restartable():
    sampler = ColorSpaceSampler.cube(ColorSpace.SRGB, 0.25, chunk_size=7)
    first = list(sampler.samples())
    second = list(sampler.samples())
    assert len(first) == 125
    assert first == second
    assert isinstance(first[0], Sample)


def test_srgb_cube_is_entirely_in_gamut():
    batch = ColorSpaceSampler.cube(ColorSpace.SRGB, 0.1).batch()
    assert batch.in_gamut.all()
    assert np.allclose(batch.rgb, batch.coords)


def test_gamut_flags_match_direct_test():
    ab = Axis.sweep(-80.0, 80.0, 10.0)
    sampler = ColorSpaceSampler(ColorSpace.LAB, (Axis.fixed(50.0), ab, ab))
    batch = sampler.batch()
    assert len(batch) == 17 * 17
    assert batch.in_gamut.tolist() == np_in_gamut(batch.coords, ColorSpace.LAB).tolist()
    assert batch.in_gamut.any() and not batch.in_gamut.all()


def test_gamut_filter_drops_out_of_gamut_samples():
    ab = Axis.sweep(-80.0, 80.0, 10.0)
    sampler = ColorSpaceSampler(ColorSpace.LAB, (Axis.fixed(50.0), ab, ab))
    everything = sampler.batch()
    filtered = sampler.batch(gamut_filter=True)
    assert len(filtered) == int(everything.in_gamut.sum())
    assert filtered.in_gamut.all()
    assert all(sample.in_gamut for sample in sampler.samples(gamut_filter=True))


def test_out_of_gamut_samples_are_clamped_for_display():
    batch = ColorSpaceSampler.cube(ColorSpace.REC2020, 0.5).batch()
    assert not batch.in_gamut.all()
    assert batch.rgb.min() >= 0.0
    assert batch.rgb.max() <= 1.0


def test_batch_conversion_and_rgba8():
    batch = ColorSpaceSampler.cube(ColorSpace.SRGB, 1.0).batch()
    assert batch.to(ColorSpace.XYZ).shape == (8, 3)
    rgba = batch.rgba8(alpha=200)
    assert rgba.dtype == np.uint8
    assert set(rgba[:, 3].tolist()) == {200}
