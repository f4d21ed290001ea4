"""Accessibility id generation for inputs and their labels."""

import re
from collections.abc import Callable
from typing import Any

from formstate.utils import to_string

IdFactory = Callable[[str, str], str]

_WHITESPACE = re.compile(r"\s")


def default_id(name: str, own_value: str) -> str:
    """Build the default id: ``__fs__<name>`` plus ``__<own_value>`` if set."""
    return "__".join(part for part in ("__fs", name, own_value) if part)


class InputIdProvider:
    """Generates stable DOM ids keyed by field name and own value.

    ``with_ids`` may be ``False`` (ids disabled), ``True`` (the default
    scheme) or a callable ``(name, own_value) -> str``.
    """

    def __init__(self, with_ids: bool | IdFactory = False) -> None:
        self.with_ids = with_ids

    @property
    def enabled(self) -> bool:
        return bool(self.with_ids)

    def get_id(self, name: str, own_value: Any = None) -> str | None:
        """Return the id for ``(name, own_value)`` or None when disabled."""
        if not self.with_ids:
            return None
        factory: IdFactory = self.with_ids if callable(self.with_ids) else default_id
        return _WHITESPACE.sub("", factory(to_string(name), to_string(own_value)))

    def get_id_prop(self, attribute: str, name: str, own_value: Any = None) -> dict[str, str]:
        """Return ``{attribute: id}``, or an empty dict when ids are disabled.

        Args:
            attribute: Property the id is stored under (``id`` for inputs,
                ``html_for`` for labels).
            name: Field name.
            own_value: The field's own value (checkbox and radio).
        """
        input_id = self.get_id(name, own_value)
        return {} if input_id is None else {attribute: input_id}
