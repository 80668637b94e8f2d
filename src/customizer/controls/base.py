"""
Base class for all customizer controls.
"""

import logging
from typing import Any, Dict, List, Optional

from ..fields import FieldsControl
from ..utils.html import checked, esc_attr, esc_html, esc_textarea, selected

logger = logging.getLogger(__name__)

DROPDOWN_NONE_LABEL = "&mdash; Select &mdash;"


def dropdown_pages(
    pages: List[Dict[str, Any]],
    name: str,
    selected_value: Any = None,
    show_option_none: str = "",
    option_none_value: str = "",
) -> str:
    """
    Render a ``<select>`` of pages, indenting child pages under their parent.

    Args:
        pages: Page dictionaries with ``id``, ``title`` and optional ``parent``
        name: Name attribute of the select element
        selected_value: Page id to mark as selected
        show_option_none: Label of the leading "none" option (omitted when empty)
        option_none_value: Value of the leading "none" option

    Returns:
        Select element HTML, or an empty string when there are no pages
    """
    if not pages:
        return ""

    # Pages whose parent is missing from the list, or is the page itself, are top level
    page_ids = {page["id"] for page in pages}
    children: Dict[Any, List[Dict[str, Any]]] = {}
    for page in pages:
        parent = page.get("parent") or 0
        if parent not in page_ids or parent == page["id"]:
            parent = 0
        children.setdefault(parent, []).append(page)

    options = []
    if show_option_none:
        options.append(f'<option value="{esc_attr(option_none_value)}">{show_option_none}</option>')

    def walk(parent: Any, depth: int) -> None:
        for page in children.get(parent, []):
            indent = "&nbsp;" * 3 * depth
            options.append(
                f'<option class="level-{depth}" value="{esc_attr(page["id"])}"'
                f'{selected(page["id"], selected_value)}>{indent}{esc_html(page.get("title", ""))}</option>'
            )
            walk(page["id"], depth + 1)

    walk(0, 0)
    return f'<select name="{esc_attr(name)}" id="{esc_attr(name)}">\n' + "\n".join(options) + "\n</select>"


class CustomizeControl(FieldsControl):
    """
    A customizer control bound to one or more settings.

    On construction the control registers its render and active-state hooks on
    the manager's hook registry. Rendering switches on ``type``: ``checkbox``,
    ``radio``, ``select``, ``textarea`` and ``dropdown-pages`` have dedicated
    markup; any other type renders a plain ``<input type="...">`` so ``email``,
    ``url``, ``number``, ``hidden`` and ``date`` work without subclasses.

    Subclasses that render on the client override ``content_template()`` and
    extend ``json()`` with the data their template needs.

    Backward compatible attribute aliases:
        settings -> fields
        setting  -> field

    Example:
        >>> control = CustomizeControl(
        ...     manager, "blogname", label="Site Title", type="text"
        ... )
        >>> control.get_content()
        '<li id="customize-control-blogname" class="customize-control customize-control-text">...'
    """

    type = "text"

    # Backward compatible attribute names
    property_map = {
        "settings": "fields",
        "setting": "field",
    }

    def __init__(self, manager, id: str, **args: Any):
        if "type" in args:
            self.type = args.pop("type")

        self.manager = manager

        if "settings" in args:
            args.setdefault("fields", args.pop("settings"))
        if "setting" in args:
            args.setdefault("fields", {"default": args.pop("setting")})
        if not args.get("active_callback"):
            args.pop("active_callback", None)

        super().__init__("customize", id, **args)

        hooks = manager.hooks
        hooks.add_action(
            f"fields_render_control_{self.object}", self.customize_render_control
        )
        hooks.add_action(
            f"fields_render_control_{self.object}_{self.id}", self.customize_render_control_id
        )
        hooks.add_filter(
            f"fields_control_active_{self.object}_{self.id}",
            self.customize_control_active,
            10,
            2,
        )

    def remove_hooks(self) -> None:
        """Unregister the hooks added by the constructor."""
        hooks = self.manager.hooks
        hooks.remove_action(
            f"fields_render_control_{self.object}", self.customize_render_control
        )
        hooks.remove_action(
            f"fields_render_control_{self.object}_{self.id}", self.customize_render_control_id
        )
        hooks.remove_filter(
            f"fields_control_active_{self.object}_{self.id}", self.customize_control_active
        )

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails
        if name.startswith("_"):
            raise AttributeError(name)
        target = self.property_map.get(name)
        if target:
            return getattr(self, target)
        return None

    def __setattr__(self, name: str, value: Any) -> None:
        target = self.property_map.get(name)
        if target == "fields" and not self._is_resolved(value):
            value = self._resolve_fields(value)
        elif target == "field" and isinstance(value, str):
            value = self._resolve_fields(value)["default"]
        super().__setattr__(target or name, value)

    @staticmethod
    def _is_resolved(value: Any) -> bool:
        return isinstance(value, dict) and all(
            not isinstance(item, str) for item in value.values()
        )

    def has_alias(self, name: str) -> bool:
        """Whether ``name`` is a backward compatible alias whose target is set."""
        target = self.property_map.get(name)
        if not target:
            return False
        return getattr(self, target) is not None

    def active_callback(self, control: Optional["CustomizeControl"] = None) -> bool:
        """Default active state; subclasses override to hide themselves."""
        return True

    def enqueue(self) -> None:
        """Enqueue control related scripts/styles."""
        pass

    def customize_control_active(self, active: bool, control: FieldsControl) -> bool:
        """Filter the active state through ``customize_control_active``."""
        return self.manager.hooks.apply_filters("customize_control_active", active, control)

    def customize_render_control(self, control: Optional[FieldsControl] = None) -> None:
        """Fire ``customize_render_control`` just before this control renders."""
        if control is not None and control is not self:
            return
        self.manager.hooks.do_action("customize_render_control", self)

    def customize_render_control_id(self, control: Optional[FieldsControl] = None) -> None:
        """Fire ``customize_render_control_<id>`` just before this control renders."""
        self.manager.hooks.do_action(f"customize_render_control_{self.id}", self)

    def to_json(self) -> None:
        """Deprecated: extend ``json()`` instead."""
        pass

    def json(self) -> Dict[str, Any]:
        """
        Get the data to export to the client via JSON.

        Returns:
            The fields-API export with ``active`` added and ``screen``
            renamed to ``panel``.
        """
        data = super().json()
        data["active"] = self.active()
        data["panel"] = data.pop("screen")
        return data

    def render(self) -> str:
        """Render the ``<li>`` wrapper and the control content."""
        control_id = "customize-control-" + self.id.replace("]", "").replace("[", "-")
        css_class = f"customize-control customize-control-{self.type}"
        return (
            f'<li id="{esc_attr(control_id)}" class="{esc_attr(css_class)}">\n'
            f"{self.render_content()}\n"
            f"</li>"
        )

    def _title(self) -> str:
        if not self.label:
            return ""
        return f'<span class="customize-control-title">{esc_html(self.label)}</span>\n'

    def _description(self) -> str:
        if not self.description:
            return ""
        return f'<span class="description customize-control-description">{self.description}</span>\n'

    def render_content(self) -> str:
        """
        Render the control's content.

        Content can alternately be rendered on the client; see
        ``print_template()``.
        """
        renderers = {
            "checkbox": self._render_checkbox,
            "radio": self._render_radio,
            "select": self._render_select,
            "textarea": self._render_textarea,
            "dropdown-pages": self._render_dropdown_pages,
        }
        return renderers.get(self.type, self._render_input)()

    def _render_checkbox(self) -> str:
        value = self.value()
        return (
            "<label>\n"
            f'<input type="checkbox" value="{esc_attr(value)}" {self.link()}{checked(value)} />\n'
            f"{esc_html(self.label)}\n"
            f"{self._description()}"
            "</label>"
        )

    def _render_radio(self) -> str:
        if not self.choices:
            return ""

        name = f"_customize-radio-{self.id}"
        value = self.value()
        parts = [self._title(), self._description()]
        for choice_value, choice_label in self.choices.items():
            parts.append(
                "<label>\n"
                f'<input type="radio" value="{esc_attr(choice_value)}" name="{esc_attr(name)}" '
                f"{self.link()}{checked(value, choice_value)} />\n"
                f"{esc_html(choice_label)}<br/>\n"
                "</label>\n"
            )
        return "".join(parts)

    def _render_select(self) -> str:
        if not self.choices:
            return ""

        value = self.value()
        options = "".join(
            f'<option value="{esc_attr(choice_value)}"{selected(value, choice_value)}>{choice_label}</option>'
            for choice_value, choice_label in self.choices.items()
        )
        return (
            "<label>\n"
            f"{self._title()}{self._description()}"
            f"<select {self.link()}>\n{options}\n</select>\n"
            "</label>"
        )

    def _render_textarea(self) -> str:
        return (
            "<label>\n"
            f"{self._title()}{self._description()}"
            f'<textarea rows="5" {self.link()}>{esc_textarea(self.value())}</textarea>\n'
            "</label>"
        )

    def _render_dropdown_pages(self) -> str:
        dropdown = dropdown_pages(
            self.manager.pages,
            name=f"_customize-dropdown-pages-{self.id}",
            selected_value=self.value(),
            show_option_none=DROPDOWN_NONE_LABEL,
            option_none_value="0",
        )

        # The page dropdown has no link attribute of its own
        dropdown = dropdown.replace("<select", f"<select {self.get_link()}", 1)

        return (
            f'<label class="customize-control-select">'
            f'<span class="customize-control-title">{self.label}</span> {dropdown}</label>'
        )

    def _render_input(self) -> str:
        input_attrs = self.input_attrs_html()
        if input_attrs:
            input_attrs = f" {input_attrs}"
        return (
            "<label>\n"
            f"{self._title()}{self._description()}"
            f'<input type="{esc_attr(self.type)}"{input_attrs} '
            f'value="{esc_attr(self.value())}" {self.link()} />\n'
            "</label>"
        )

    def print_template(self) -> str:
        """
        Render the control's client template.

        Only called for control types registered with
        ``CustomizeManager.register_control_type()``.
        """
        return (
            f'<script type="text/html" id="tmpl-customize-control-{self.type}-content">\n'
            f"{self.content_template()}\n"
            "</script>"
        )

    def content_template(self) -> str:
        """
        Client template for this control's content (not its container).

        Values exported by ``json()`` are available as ``data`` in the template.
        """
        return ""
