"""
Control type registry for building controls from their type name.
"""

import logging
from typing import Dict, List, Optional, Type

from ..utils.errors import ControlTypeError
from .base import CustomizeControl

logger = logging.getLogger(__name__)


class ControlRegistry:
    """Registry of control classes keyed by their ``type``."""

    def __init__(self):
        self._controls: Dict[str, Type[CustomizeControl]] = {}

    def register(self, control_class: Type[CustomizeControl]) -> None:
        """
        Register a control class.

        Raises:
            ControlTypeError: If the class is not a CustomizeControl or has no type
        """
        if not isinstance(control_class, type) or not issubclass(control_class, CustomizeControl):
            raise ControlTypeError(f"{control_class} must inherit from CustomizeControl")

        control_type = control_class.type
        if not control_type:
            raise ControlTypeError(f"{control_class.__name__} must define a type")

        if control_type in self._controls and self._controls[control_type] is not control_class:
            logger.warning(f"Overwriting existing control type: {control_type}")

        self._controls[control_type] = control_class
        logger.debug(f"Registered control type: {control_type}")

    def get_control_class(self, control_type: str) -> Optional[Type[CustomizeControl]]:
        return self._controls.get(control_type)

    def list_controls(self) -> List[str]:
        return list(self._controls.keys())

    def __contains__(self, control_type: str) -> bool:
        return control_type in self._controls

    def auto_discover(self) -> None:
        """Register every CustomizeControl subclass in the controls package."""
        import importlib
        import pkgutil

        import customizer.controls as controls_pkg

        for _importer, modname, _ispkg in pkgutil.iter_modules(controls_pkg.__path__):
            if modname in ["base", "registry", "__init__"]:
                continue

            try:
                module = importlib.import_module(f"customizer.controls.{modname}")
            except ImportError as e:
                logger.error(f"Failed to load control module {modname}: {e}")
                continue

            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if (
                    isinstance(attr, type)
                    and issubclass(attr, CustomizeControl)
                    and attr is not CustomizeControl
                    and attr.__module__ == module.__name__
                ):
                    self.register(attr)
                    logger.debug(f"Auto-registered control: {attr.type}")
