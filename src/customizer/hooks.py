"""
Action and filter hooks.

Controls never call each other directly; they announce lifecycle points through
named actions and let other code adjust values through named filters.
"""

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 10

# (priority, sequence, callback, accepted_args)
_Entry = Tuple[int, int, Callable[..., Any], int]


class HookRegistry:
    """
    Registry of named action and filter callbacks.

    Callbacks run in ascending priority; callbacks with the same priority run
    in the order they were added. Each callback receives at most
    ``accepted_args`` positional arguments.

    Example:
        >>> hooks = HookRegistry()
        >>> hooks.add_filter("title", lambda title: title.upper())
        >>> hooks.apply_filters("title", "header")
        'HEADER'
    """

    def __init__(self):
        self._hooks: Dict[str, List[_Entry]] = defaultdict(list)
        self._fired: Dict[str, int] = defaultdict(int)
        self._sequence = 0

    def add_filter(
        self,
        tag: str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
        accepted_args: int = 1,
    ) -> None:
        """Register a callback for a filter or action tag."""
        if not callable(callback):
            raise TypeError(f"Hook callback for '{tag}' must be callable, got {callback!r}")

        self._sequence += 1
        self._hooks[tag].append((priority, self._sequence, callback, accepted_args))
        self._hooks[tag].sort(key=lambda entry: (entry[0], entry[1]))
        logger.debug(f"Added hook '{tag}' at priority {priority}")

    # Actions and filters share one table.
    add_action = add_filter

    def remove_filter(
        self, tag: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY
    ) -> bool:
        """
        Remove a previously added callback.

        Returns:
            True if a callback was removed, False otherwise
        """
        entries = self._hooks.get(tag, [])
        for entry in entries:
            if entry[0] == priority and entry[2] == callback:
                entries.remove(entry)
                return True
        return False

    remove_action = remove_filter

    def has_filter(self, tag: str) -> bool:
        """Check if any callback is registered for a tag."""
        return bool(self._hooks.get(tag))

    has_action = has_filter

    def apply_filters(self, tag: str, value: Any, *args: Any) -> Any:
        """
        Pass a value through every callback registered for a tag.

        Args:
            tag: Filter name
            value: Value to filter
            *args: Extra arguments offered to callbacks

        Returns:
            The filtered value
        """
        for _priority, _seq, callback, accepted_args in list(self._hooks.get(tag, [])):
            call_args = (value,) + args
            value = callback(*call_args[:accepted_args])
        return value

    def do_action(self, tag: str, *args: Any) -> None:
        """Call every callback registered for an action tag."""
        self._fired[tag] += 1
        for _priority, _seq, callback, accepted_args in list(self._hooks.get(tag, [])):
            callback(*args[:accepted_args])

    def did_action(self, tag: str) -> int:
        """Return how many times an action has fired."""
        return self._fired.get(tag, 0)

    def __repr__(self) -> str:
        return f"<HookRegistry(tags={len(self._hooks)})>"
