from .animator import Animation, Frame, FrameAnimator, FrameRenderer, frame_angle
from .models import MODELS, get_model

__all__ = [
    "Animation",
    "Frame",
    "FrameAnimator",
    "FrameRenderer",
    "frame_angle",
    "MODELS",
    "get_model",
]
