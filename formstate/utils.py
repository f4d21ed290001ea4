"""Small helpers shared by the binding engine and the state store."""

from collections.abc import Callable, Mapping
from typing import Any


def noop(*args: Any, **kwargs: Any) -> None:
    """Accept anything, do nothing."""
    return None


def to_string(value: Any) -> str:
    """Render a value the way a DOM attribute would.

    ``None`` becomes the empty string and booleans are lowercased, so
    ``to_string(True) == "true"`` just like ``String(true)`` in a browser.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def omit(key: str) -> Callable[[Mapping[str, Any]], dict[str, Any]]:
    """Build an updater that drops ``key`` from a mapping.

    Used with ``StateStore.set_error`` to clear a field's error.
    """

    def updater(mapping: Mapping[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in mapping.items() if k != key}

    return updater
