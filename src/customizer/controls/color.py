"""
Color picker control.
"""

import logging
from typing import Any, Dict

from .base import CustomizeControl

logger = logging.getLogger(__name__)


def normalize_hex(value: Any) -> str:
    """
    Prefix a color value with ``#`` if it does not already start with one.

    Empty values stay empty so the picker shows no default.
    """
    if not value:
        return ""
    value = str(value)
    return value if value.startswith("#") else f"#{value}"


class ColorControl(CustomizeControl):
    """
    Color picker bound to a hex color setting.

    The content is rendered on the client from ``content_template()``; the
    setting's default is exported as ``defaultValue`` and offered as the
    picker's reset color.

    Configuration:
        statuses: Mapping of status value to label (default: {"": "Default"})
    """

    type = "color"
    statuses = None

    def __init__(self, manager, id: str, **args: Any):
        self.statuses = {"": "Default"}
        super().__init__(manager, id, **args)

    def enqueue(self) -> None:
        self.manager.assets.enqueue_script("wp-color-picker")
        self.manager.assets.enqueue_style("wp-color-picker")

    def json(self) -> Dict[str, Any]:
        data = super().json()
        data["statuses"] = self.statuses
        data["defaultValue"] = self.field.default if self.field else ""
        return data

    def render_content(self) -> str:
        # Rendered from content_template() on load
        return ""

    def content_template(self) -> str:
        return """<# var defaultValue = '';
if ( data.defaultValue ) {
    if ( '#' !== data.defaultValue.substring( 0, 1 ) ) {
        defaultValue = '#' + data.defaultValue;
    } else {
        defaultValue = data.defaultValue;
    }
    defaultValue = ' data-default-color=' + defaultValue;
} #>
<label>
    <# if ( data.label ) { #>
        <span class="customize-control-title">{{{ data.label }}}</span>
    <# } #>
    <# if ( data.description ) { #>
        <span class="description customize-control-description">{{{ data.description }}}</span>
    <# } #>
    <div class="customize-control-content">
        <input class="color-picker-hex" type="text" maxlength="7" placeholder="Hex Value" {{ defaultValue }} />
    </div>
</label>"""
