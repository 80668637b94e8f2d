"""
Sidebar (widget area) and widget form controls.
"""

import logging
from typing import Any, Dict, Optional

from .base import CustomizeControl

logger = logging.getLogger(__name__)


class WidgetAreaControl(CustomizeControl):
    """Control listing the widgets of one sidebar, with add and reorder buttons."""

    type = "sidebar_widgets"
    sidebar_id = None

    exported_properties = ("sidebar_id",)

    def json(self) -> Dict[str, Any]:
        data = super().json()
        for key in self.exported_properties:
            data[key] = getattr(self, key)
        return data

    def render_content(self) -> str:
        return """<span class="button-secondary add-new-widget" tabindex="0">
    Add a Widget
</span>

<span class="reorder-toggle" tabindex="0">
    <span class="reorder">Reorder</span>
    <span class="reorder-done">Done</span>
</span>"""


class WidgetFormControl(CustomizeControl):
    """
    Control wrapping one widget's settings form.

    Configuration:
        widget_id: Registered widget instance id (e.g. "text-2")
        widget_id_base: Widget type id (e.g. "text")
        sidebar_id: Sidebar the widget belongs to
        is_new: True for widgets added during this session
        width, height: Form dimensions requested by the widget
        is_wide: True when the form needs the wide layout
    """

    type = "widget_form"
    widget_id = None
    widget_id_base = None
    sidebar_id = None
    is_new = False
    width = None
    height = None
    is_wide = False

    exported_properties = ("widget_id", "widget_id_base", "sidebar_id", "width", "height", "is_wide")

    def json(self) -> Dict[str, Any]:
        data = super().json()
        for key in self.exported_properties:
            data[key] = getattr(self, key)
        return data

    def render_content(self) -> str:
        widgets = self.manager.widgets
        widget = widgets.get(self.widget_id)
        if widget is None:
            logger.warning(f"Widget form control '{self.id}' has no registered widget '{self.widget_id}'")
            return ""

        params = widget["params"][0] if widget["params"] else {}
        args = {
            "widget_id": widget["id"],
            "widget_name": widget["name"],
        }

        control_params = widgets.list_widget_controls_dynamic_sidebar([args, params])
        return widgets.get_widget_control(control_params)

    def active_callback(self, control: Optional[CustomizeControl] = None) -> bool:
        """Whether the widget is rendered on the previewed page."""
        return self.manager.widgets.is_widget_rendered(self.widget_id)
