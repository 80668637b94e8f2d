"""
Utility modules for the customizer.
"""

from .errors import (
    ConfigurationError,
    ControlTypeError,
    CustomizerError,
    MediaError,
    error_boundary,
)
from .html import attrs, checked, esc_attr, esc_html, esc_textarea, selected

__all__ = [
    "CustomizerError",
    "ConfigurationError",
    "ControlTypeError",
    "MediaError",
    "error_boundary",
    "attrs",
    "checked",
    "selected",
    "esc_attr",
    "esc_html",
    "esc_textarea",
]
