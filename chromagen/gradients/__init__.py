from .compositor import HueMode, gradient, gradient_rgba8, hue_lerp, interpolate

__all__ = ["HueMode", "gradient", "gradient_rgba8", "hue_lerp", "interpolate"]
