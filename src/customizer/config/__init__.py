"""
Screen definition loading.
"""

from .loader import ConfigLoader, build_manager

__all__ = ["ConfigLoader", "build_manager"]
