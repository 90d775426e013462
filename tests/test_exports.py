import importlib

import pytest

PACKAGES = [
    "chromagen",
    "chromagen.animation",
    "chromagen.colors",
    "chromagen.conversions",
    "chromagen.geometry",
    "chromagen.gradients",
    "chromagen.output",
    "chromagen.quantize",
    "chromagen.raster",
    "chromagen.renderers",
    "chromagen.sampling",
    "chromagen.types",
]


@pytest.mark.parametrize("name", PACKAGES)
def test_public_names_resolve(name):
    module = importlib.import_module(name)
    for attr in module.__all__:
        assert hasattr(module, attr), f"{name}.{attr}"
    assert len(set(module.__all__)) == len(module.__all__)


def test_canvas_api_is_minimal():
    from chromagen.raster import Canvas

    for removed in ("blend_pixel", "region", "is_oversampled"):
        assert not hasattr(Canvas, removed)
