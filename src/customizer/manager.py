"""
Customize manager: the settings, controls and collaborators of one request.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Type, Union

from .assets import AssetQueue
from .controls.base import CustomizeControl
from .controls.registry import ControlRegistry
from .fields import Field
from .header import CustomHeader
from .hooks import HookRegistry
from .media import DEFAULT_ICON_BASE_URL, MediaLibrary
from .utils.errors import ControlTypeError, error_boundary
from .widgets import WidgetRegistry

logger = logging.getLogger(__name__)


class CustomizeManager:
    """
    Owns everything the customizer screen needs for one request.

    Responsibilities:
    - Setting registration and value lookup (stored and previewed values)
    - Control registration, ordering and rendering
    - Control templates for registered control types
    - Access to hooks, media, widgets, assets and theme support

    Attributes:
        hooks: Action/filter registry shared by every control
        media: Attachment store used by upload controls
        widgets: Registered widgets used by widget controls
        assets: Script/style queue filled by ``enqueue_control_scripts()``
        theme_support: {feature: options} declared by the theme
        pages: Page dictionaries offered by ``dropdown-pages`` controls
        custom_header: Header image provider, or None
        control_types: Control classes available by type name
    """

    def __init__(
        self,
        *,
        theme_support: Optional[Dict[str, Any]] = None,
        pages: Optional[List[Dict[str, Any]]] = None,
        capabilities: Optional[Iterable[str]] = None,
        custom_header: Optional[CustomHeader] = None,
        icon_base_url: str = DEFAULT_ICON_BASE_URL,
        nonce_secret: Optional[str] = None,
    ):
        """
        Initialize the manager.

        Args:
            theme_support: Theme features, e.g. {"custom-header": {"width": 1200}}
            pages: Pages for ``dropdown-pages`` controls
            capabilities: Capabilities of the current user (None grants all)
            custom_header: Header image provider for the header image control
            icon_base_url: URL prefix for attachment type icons
            nonce_secret: Secret used to derive nonces (random when omitted)
        """
        self.hooks = HookRegistry()
        self.media = MediaLibrary(icon_base_url)
        self.widgets = WidgetRegistry()
        self.assets = AssetQueue(nonce_secret)
        self.theme_support: Dict[str, Any] = dict(theme_support or {})
        self.pages: List[Dict[str, Any]] = list(pages or [])
        self.custom_header = custom_header
        self.capabilities = set(capabilities) if capabilities is not None else None

        self.control_types = ControlRegistry()
        self.control_types.auto_discover()
        self.control_types.register(CustomizeControl)

        self._settings: Dict[str, Field] = {}
        self._controls: Dict[str, CustomizeControl] = {}
        self._registered_control_types: List[Type[CustomizeControl]] = []
        self._values: Dict[str, Any] = {}
        self._post_values: Dict[str, Any] = {}

    # Settings

    def add_setting(self, setting: Union[str, Field], **args: Any) -> Field:
        """
        Register a setting.

        Args:
            setting: Setting id, or a Field instance
            **args: Field arguments (default, type, transport, ...)

        Returns:
            The registered Field
        """
        field = setting if isinstance(setting, Field) else Field(self, setting, **args)
        if field.id in self._settings:
            logger.warning(f"Overwriting existing setting: {field.id}")
        self._settings[field.id] = field
        logger.debug(f"Added setting: {field.id}")
        return field

    def get_setting(self, setting_id: str) -> Optional[Field]:
        return self._settings.get(setting_id)

    def remove_setting(self, setting_id: str) -> None:
        self._settings.pop(setting_id, None)

    def settings(self) -> List[Field]:
        return list(self._settings.values())

    def set_value(self, setting_id: str, value: Any) -> None:
        """Store a saved value for a setting."""
        self._values[setting_id] = value

    def get_value(self, setting_id: str, default: Any = None) -> Any:
        return self._values.get(setting_id, default)

    def set_post_value(self, setting_id: str, value: Any) -> None:
        """Record an unsaved value being previewed."""
        self._post_values[setting_id] = value

    def has_post_value(self, setting_id: str) -> bool:
        return setting_id in self._post_values

    def get_post_value(self, setting_id: str, default: Any = None) -> Any:
        return self._post_values.get(setting_id, default)

    def current_user_can(self, capability: Optional[str]) -> bool:
        if not capability or self.capabilities is None:
            return True
        return capability in self.capabilities

    def get_theme_support(self, feature: str, key: Optional[str] = None) -> Any:
        """
        Look up a theme feature, or one option of it.

        Returns:
            The feature's options (or the requested option), None when unsupported
        """
        support = self.theme_support.get(feature)
        if key is None:
            return support
        if isinstance(support, dict):
            return support.get(key)
        return None

    # Controls

    def add_control(self, control: Union[str, CustomizeControl], **args: Any) -> CustomizeControl:
        """
        Register a control.

        Args:
            control: Control instance, or a control id
            **args: Control arguments when an id is given; ``type`` selects
                the control class (plain CustomizeControl for unknown types)

        Returns:
            The registered control
        """
        if not isinstance(control, CustomizeControl):
            control = self.create_control(control, **args)

        existing = self._controls.get(control.id)
        if existing is not None and existing is not control:
            logger.warning(f"Overwriting existing control: {control.id}")
            existing.remove_hooks()
        self._controls[control.id] = control
        logger.debug(f"Added control: {control.id} ({control.type})")
        return control

    def create_control(self, control_id: str, **args: Any) -> CustomizeControl:
        """Build a control of the class registered for ``args["type"]``."""
        control_type = args.get("type", CustomizeControl.type)
        control_class = self.control_types.get_control_class(control_type) or CustomizeControl

        fixed_id = getattr(control_class, "control_id", None)
        if fixed_id:
            if control_id != fixed_id:
                logger.warning(
                    f"Control type '{control_type}' always uses id '{fixed_id}', ignoring '{control_id}'"
                )
            args.pop("type", None)
            return control_class(self, **args)

        return control_class(self, control_id, **args)

    def get_control(self, control_id: str) -> Optional[CustomizeControl]:
        return self._controls.get(control_id)

    def remove_control(self, control_id: str) -> None:
        control = self._controls.pop(control_id, None)
        if control is not None:
            control.remove_hooks()

    def controls(self) -> List[CustomizeControl]:
        """Registered controls ordered by priority, then registration order."""
        return sorted(self._controls.values(), key=lambda c: (c.priority, c.instance_number))

    def register_control_type(self, control_class: Type[CustomizeControl]) -> None:
        """
        Register a control class whose content is rendered from a client template.

        Raises:
            ControlTypeError: If the class is not a CustomizeControl
        """
        if not isinstance(control_class, type) or not issubclass(control_class, CustomizeControl):
            raise ControlTypeError(f"{control_class} must inherit from CustomizeControl")

        self.control_types.register(control_class)
        if control_class not in self._registered_control_types:
            self._registered_control_types.append(control_class)

    def registered_control_types(self) -> List[Type[CustomizeControl]]:
        return list(self._registered_control_types)

    def render_control_templates(self) -> str:
        """Print the client template of each registered control type once."""
        templates = []
        for control_class in self._registered_control_types:
            if getattr(control_class, "control_id", None):
                control = control_class(self, fields={})
            else:
                control = control_class(self, "temp", fields={})
            templates.append(control.print_template())
            control.remove_hooks()
        return "\n".join(templates)

    def enqueue_control_scripts(self) -> None:
        """Let every editable control queue its scripts and styles."""
        for control in self.controls():
            if control.check_capabilities():
                control.enqueue()

    @error_boundary(default_return="")
    def render_control(self, control: CustomizeControl) -> str:
        return control.maybe_render()

    def render_controls(self) -> str:
        """Render every control; a control that fails renders as nothing."""
        rendered = (self.render_control(control) for control in self.controls())
        return "\n".join(html for html in rendered if html)

    @error_boundary(default_return=None)
    def export_control(self, control: CustomizeControl) -> Optional[Dict[str, Any]]:
        if not control.check_capabilities():
            return None
        return control.json()

    def export(self) -> Dict[str, Any]:
        """
        Data for the client: every editable control and every setting.

        Returns:
            {"controls": {id: json}, "settings": {id: json}}
        """
        controls = {}
        for control in self.controls():
            data = self.export_control(control)
            if data is not None:
                controls[control.id] = data

        return {
            "controls": controls,
            "settings": {field.id: field.json() for field in self.settings()},
        }

    def __repr__(self) -> str:
        return f"<CustomizeManager(settings={len(self._settings)}, controls={len(self._controls)})>"
