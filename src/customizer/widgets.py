"""
Registered widgets and the sidebar forms shown in the customizer.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Set

from .utils.html import esc_attr, esc_html

logger = logging.getLogger(__name__)


class WidgetRegistry:
    """
    Registry of widgets available to the customizer.

    Each registered widget is stored as a dictionary:
        id: Widget instance id (e.g. "text-2")
        name: Human readable widget name
        id_base: Widget type id (e.g. "text")
        params: Positional parameters used when displaying the widget
        form: Callable returning the widget's settings form HTML
    """

    def __init__(self):
        self.registered_widgets: Dict[str, Dict[str, Any]] = {}
        self._rendered: Set[str] = set()

    def register(
        self,
        widget_id: str,
        name: str,
        form: Optional[Callable[[Dict[str, Any]], str]] = None,
        params: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        """
        Register a widget instance.

        Args:
            widget_id: Widget instance id, "<id_base>-<number>"
            name: Widget name shown in the title bar
            form: Callable producing the form body (receives the widget args)
            params: Display parameters
        """
        if widget_id in self.registered_widgets:
            logger.warning(f"Overwriting existing widget: {widget_id}")

        id_base = widget_id.rsplit("-", 1)[0] if "-" in widget_id else widget_id
        self.registered_widgets[widget_id] = {
            "id": widget_id,
            "name": name,
            "id_base": id_base,
            "params": list(params or []),
            "form": form,
        }
        logger.debug(f"Registered widget: {widget_id}")

    def get(self, widget_id: str) -> Optional[Dict[str, Any]]:
        return self.registered_widgets.get(widget_id)

    def mark_rendered(self, widget_id: str) -> None:
        """Record that a widget was rendered on the previewed page."""
        self._rendered.add(widget_id)

    def is_widget_rendered(self, widget_id: str) -> bool:
        return widget_id in self._rendered

    def list_widget_controls_dynamic_sidebar(self, params: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Prepare display parameters for a widget's admin control.

        Args:
            params: [widget args, widget instance params]

        Returns:
            The params with ``_display`` and ``_temp_id`` filled in
        """
        args = dict(params[0])
        widget_id = args.get("widget_id", "")
        args["_display"] = "control"
        args["_temp_id"] = f"{widget_id}-__i__" if widget_id else "__i__"
        return [args] + list(params[1:])

    def get_widget_control(self, params: List[Dict[str, Any]]) -> str:
        """
        Render the admin form for a widget.

        Args:
            params: Parameters from ``list_widget_controls_dynamic_sidebar``

        Returns:
            Widget control HTML
        """
        args = params[0]
        widget = self.registered_widgets.get(args.get("widget_id", ""))
        if widget is None:
            logger.warning(f"No registered widget for control: {args.get('widget_id')}")
            return ""

        form = widget.get("form")
        body = form(args) if form else '<p class="no-options-widget">There are no options for this widget.</p>'

        return (
            f'<div id="widget-{esc_attr(widget["id"])}" class="widget">'
            f'<div class="widget-top"><div class="widget-title">'
            f"<h3>{esc_html(args.get('widget_name', widget['name']))}</h3></div></div>"
            f'<div class="widget-inside"><div class="form">'
            f'<div class="widget-content">{body}</div>'
            f'<input type="hidden" name="widget-id" class="widget-id" value="{esc_attr(widget["id"])}" />'
            f'<input type="hidden" name="id_base" class="id_base" value="{esc_attr(widget["id_base"])}" />'
            f"</div></div></div>"
        )

    def __len__(self) -> int:
        return len(self.registered_widgets)
