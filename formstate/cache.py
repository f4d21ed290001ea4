"""Memoizing key -> value cache.

The binding engine uses one of these to keep handler identity stable
across repeated binding requests, and another one to track which fields
are dirty since their last blur validation.
"""

from collections.abc import Hashable
from typing import Any, TypeVar

T = TypeVar("T")


class MemoCache:
    """Key -> value store with get-or-create semantics.

    Scoped to a single engine instance; never shared between forms.
    """

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._store: dict[Hashable, Any] = {}

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the cached value for ``key`` or ``default``."""
        return self._store.get(key, default)

    def get_or_set(self, key: Hashable, value: T) -> T:
        """Return the cached value, storing ``value`` first if absent.

        Args:
            key: Cache key.
            value: The value to store on a miss. Callables are stored as-is,
                not called, so handlers can be cached directly.

        Returns:
            The value now associated with ``key``.
        """
        if key not in self._store:
            self._store[key] = value
        return self._store[key]

    def set(self, key: Hashable, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        self._store[key] = value

    def has(self, key: Hashable) -> bool:
        """Whether ``key`` has been stored."""
        return key in self._store

    def delete(self, key: Hashable) -> bool:
        """Drop ``key``. Returns True if it was present."""
        return self._store.pop(key, _MISSING) is not _MISSING

    def clear(self) -> None:
        self._store.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)


_MISSING = object()
