"""
Error handling utilities and boundaries for the customizer.

Controls degrade to empty output instead of failing the whole screen, so
rendering paths are wrapped in boundaries that log and return a default.
"""

import logging
from functools import wraps
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def error_boundary(
    *,
    reraise: bool = False,
    default_return: Any = None,
    log_level: int = logging.ERROR,
) -> Callable[[F], F]:
    """
    Decorator to create consistent error boundaries around functions.

    Args:
        reraise: If True, re-raise the exception after logging
        default_return: Value to return if error occurs and not reraising
        log_level: Logging level for the error (default: ERROR)

    Returns:
        Decorated function with error handling

    Example:
        >>> @error_boundary(default_return="")
        ... def render_sidebar(control):
        ...     # A broken control renders as nothing
        ...     return control.get_content()
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.log(
                    log_level,
                    f"Error in {func.__name__}: {e}",
                    exc_info=True,
                    extra={"function": func.__name__, "source_module": func.__module__},
                )

                if reraise:
                    raise

                return default_return

        return wrapper  # type: ignore

    return decorator


class CustomizerError(Exception):
    """Base exception for all customizer-specific errors."""

    pass


class ConfigurationError(CustomizerError):
    """Raised when a screen definition is invalid."""

    pass


class ControlTypeError(CustomizerError):
    """Raised when a control class or control type cannot be used."""

    pass


class MediaError(CustomizerError):
    """Raised when an attachment cannot be registered or read."""

    pass
