"""
Customizer controls.

Each control renders one settings widget bound to one or more settings and
exports the data its client template needs.
"""

from .base import CustomizeControl
from .color import ColorControl, normalize_hex
from .registry import ControlRegistry
from .upload import BackgroundImageControl, HeaderImageControl, ImageControl, UploadControl
from .widget_area import WidgetAreaControl, WidgetFormControl

__all__ = [
    "CustomizeControl",
    "ColorControl",
    "UploadControl",
    "ImageControl",
    "BackgroundImageControl",
    "HeaderImageControl",
    "WidgetAreaControl",
    "WidgetFormControl",
    "ControlRegistry",
    "normalize_hex",
]
