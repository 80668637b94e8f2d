"""
HTML escaping helpers shared by the controls.

Escaping is delegated to markupsafe; values that are already ``Markup`` pass
through untouched.
"""

from typing import Any, Dict, Optional

from markupsafe import Markup, escape


def form_string(value: Any) -> str:
    """Return the string form of a value as it would be posted by a form."""
    if value is True:
        return "1"
    if value is None or value is False:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def esc_attr(value: Any) -> str:
    """Escape a value for use inside a double-quoted attribute."""
    return str(escape(form_string(value)))


def esc_html(value: Any) -> str:
    """Escape a value for use as element text."""
    return str(escape(form_string(value)))


def esc_textarea(value: Any) -> str:
    """Escape a value for use as the body of a ``<textarea>``."""
    return str(escape(form_string(value)))


def _compare(helper: Any, current: Any, attribute: str) -> str:
    if form_string(helper) == form_string(current):
        return f' {attribute}="{attribute}"'
    return ""


def checked(helper: Any, current: Any = True) -> str:
    """Return ``checked="checked"`` when both values have the same form string."""
    return _compare(helper, current, "checked")


def selected(helper: Any, current: Any = True) -> str:
    """Return ``selected="selected"`` when both values have the same form string."""
    return _compare(helper, current, "selected")


def attrs(values: Optional[Dict[str, Any]]) -> Markup:
    """Render a mapping as space separated ``key="value"`` pairs."""
    if not values:
        return Markup("")
    return Markup(" ").join(
        Markup('{}="{}"').format(key, form_string(value)) for key, value in values.items()
    )
