"""
Customizer - theme customization controls with live preview templates
"""

__version__ = "0.2.0"

from .controls import (
    BackgroundImageControl,
    ColorControl,
    CustomizeControl,
    HeaderImageControl,
    ImageControl,
    UploadControl,
    WidgetAreaControl,
    WidgetFormControl,
)
from .fields import Field
from .manager import CustomizeManager

__all__ = [
    "CustomizeManager",
    "Field",
    "CustomizeControl",
    "ColorControl",
    "UploadControl",
    "ImageControl",
    "BackgroundImageControl",
    "HeaderImageControl",
    "WidgetAreaControl",
    "WidgetFormControl",
]
