"""
Settings and the generic fields-API control.

A ``Field`` is one named configuration value. A ``FieldsControl`` binds one or
more fields to a piece of UI; the customizer controls in ``customizer.controls``
are built on top of it.
"""

import itertools
import logging
from typing import Any, Callable, Dict, Optional

from markupsafe import Markup

from .utils.html import attrs, esc_attr

logger = logging.getLogger(__name__)

_MISSING = object()


class Field:
    """
    A named, typed configuration value edited through a control.

    Attributes:
        id: Unique setting identifier (e.g. "blogname", "header_image")
        default: Value used when nothing is stored or previewed
        type: Storage type ("theme_mod" or "option")
        transport: How the preview updates ("refresh" or "postMessage")
        capability: Capability required to edit the value
        sanitize_callback: Optional callable applied to previewed values
    """

    def __init__(
        self,
        manager,
        id: str,
        default: Any = "",
        type: str = "theme_mod",
        transport: str = "refresh",
        capability: str = "edit_theme_options",
        sanitize_callback: Optional[Callable[[Any], Any]] = None,
    ):
        self.manager = manager
        self.id = id
        self.default = default
        self.type = type
        self.transport = transport
        self.capability = capability
        self.sanitize_callback = sanitize_callback

    def sanitize(self, value: Any) -> Any:
        """Run a previewed value through the sanitize filter and callback."""
        value = self.manager.hooks.apply_filters(f"customize_sanitize_{self.id}", value, self)
        if self.sanitize_callback:
            value = self.sanitize_callback(value)
        return value

    @property
    def dirty(self) -> bool:
        """True when the value has been changed in the current preview."""
        return self.manager.has_post_value(self.id)

    def value(self) -> Any:
        """Return the previewed value, else the stored value, else the default."""
        if self.manager.has_post_value(self.id):
            return self.sanitize(self.manager.get_post_value(self.id))
        return self.manager.get_value(self.id, self.default)

    def json(self) -> Dict[str, Any]:
        """Data exported to the client for this setting."""
        return {
            "value": self.value(),
            "transport": self.transport,
            "dirty": self.dirty,
        }

    def __repr__(self) -> str:
        return f"<Field(id={self.id}, type={self.type})>"


class FieldsControl:
    """
    Generic control bound to one or more fields.

    Keyword arguments passed to the constructor override class attribute
    defaults. Unknown keywords are ignored.

    The ``fields`` argument may be:
        - a single setting id, bound under the key ``"default"``
        - a list of ids, bound under ``"0"``, ``"1"``, ...
        - a mapping of key to id

    When ``fields`` is omitted the control id is used as the setting id.

    Class Attributes:
        type: Control type, used to pick the rendering branch
        object: Object type the control belongs to (e.g. "customize")
    """

    type: str = "text"
    object: str = "fields"
    label: str = ""
    description: str = ""
    screen: str = ""
    section: str = ""
    priority: int = 10
    capability: Optional[str] = None
    active_callback: Optional[Callable[..., bool]] = None
    manager = None

    _instance_counter = itertools.count(1)

    def __init__(self, object_type: str, id: str, **args: Any):
        self.object = object_type
        self.id = id
        self.choices: Dict[Any, Any] = {}
        self.input_attrs: Dict[str, Any] = {}
        self.fields: Dict[str, Optional[Field]] = {}
        self.instance_number = next(FieldsControl._instance_counter)

        field_ids = args.pop("fields", None)

        for key, value in args.items():
            if self._accepts(key):
                setattr(self, key, value)
            else:
                logger.debug(f"Ignoring unknown argument '{key}' for control '{id}'")

        if field_ids is None and not self.fields:
            field_ids = self.id
        if field_ids is not None:
            self.fields = self._resolve_fields(field_ids)

    def _accepts(self, key: str) -> bool:
        if key.startswith("_"):
            return False
        if key in self.__dict__ or key == "active_callback":
            return True
        default = getattr(type(self), key, _MISSING)
        if default is _MISSING:
            return False
        return not callable(default) and not isinstance(default, property)

    def _resolve_fields(self, field_ids: Any) -> Dict[str, Optional[Field]]:
        if isinstance(field_ids, str):
            field_ids = {"default": field_ids}
        elif isinstance(field_ids, (list, tuple)):
            field_ids = {str(index): value for index, value in enumerate(field_ids)}

        resolved: Dict[str, Optional[Field]] = {}
        for key, field_id in field_ids.items():
            if isinstance(field_id, Field):
                resolved[str(key)] = field_id
                continue
            field = self.manager.get_setting(field_id) if self.manager else None
            if field is None:
                logger.warning(f"Control '{self.id}' references unknown setting '{field_id}'")
            resolved[str(key)] = field
        return resolved

    @property
    def field(self) -> Optional[Field]:
        """The field bound under the ``default`` key."""
        return self.fields.get("default")

    @field.setter
    def field(self, value: Optional[Field]) -> None:
        self.fields["default"] = value

    def value(self, key: str = "default") -> Any:
        """Return the value of the field bound under ``key``, or None."""
        field = self.fields.get(key)
        if field is None:
            return None
        return field.value()

    def get_link(self, key: str = "default") -> Markup:
        """
        Get the data link attribute for a field.

        Returns:
            ``data-customize-setting-link="<id>"`` if ``key`` is bound, empty otherwise
        """
        field = self.fields.get(key)
        if field is None:
            return Markup("")
        return Markup(f'data-customize-setting-link="{esc_attr(field.id)}"')

    def link(self, key: str = "default") -> Markup:
        return self.get_link(key)

    def input_attrs_html(self) -> Markup:
        """Render ``input_attrs`` as escaped attribute pairs."""
        return attrs(self.input_attrs)

    def check_capabilities(self) -> bool:
        """Check that every bound field exists and may be edited."""
        for field in self.fields.values():
            if field is None:
                return False
            if self.manager and not self.manager.current_user_can(field.capability):
                return False
        if self.capability and self.manager and not self.manager.current_user_can(self.capability):
            return False
        return True

    def active(self) -> bool:
        """Whether the control is active in the current preview."""
        callback = self.active_callback
        active = bool(callback(self)) if callback else True
        if self.manager:
            active = self.manager.hooks.apply_filters(
                f"fields_control_active_{self.object}_{self.id}", active, self
            )
        return active

    def json(self) -> Dict[str, Any]:
        """Data exported to the client template for this control."""
        return {
            "settings": {key: field.id for key, field in self.fields.items() if field},
            "type": self.type,
            "priority": self.priority,
            "screen": self.screen,
            "section": self.section,
            "content": self.get_content(),
            "label": self.label,
            "description": self.description,
            "instanceNumber": self.instance_number,
        }

    def maybe_render(self) -> str:
        """Render the control if the current user may edit its fields."""
        if not self.check_capabilities():
            return ""

        if self.manager:
            self.manager.hooks.do_action(f"fields_render_control_{self.object}", self)
            self.manager.hooks.do_action(f"fields_render_control_{self.object}_{self.id}", self)

        return self.render()

    def render(self) -> str:
        """Render the control wrapper around ``render_content()``."""
        return (
            f'<div id="fields-control-{esc_attr(self.id)}" '
            f'class="fields-control fields-control-{esc_attr(self.type)}">'
            f"{self.render_content()}</div>"
        )

    def render_content(self) -> str:
        return ""

    def get_content(self) -> str:
        """Return the rendered control as a string."""
        return self.render().strip()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id}, type={self.type})>"
