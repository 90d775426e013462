from .color import Color
from .formatting import format_color

__all__ = ["Color", "format_color"]
