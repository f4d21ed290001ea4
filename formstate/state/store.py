"""State store holding the four form-state maps.

Setters merge partial updates into the live maps in place, so a
``FormStateView`` handed out earlier always reflects the latest commit.
"""

import copy
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

ErrorUpdate = Mapping[str, Any] | Callable[[Mapping[str, Any]], Mapping[str, Any]]


class FormStateView:
    """Live, read-only view of a ``StateStore``."""

    __slots__ = ("_store",)

    def __init__(self, store: "StateStore") -> None:
        self._store = store

    @property
    def values(self) -> Mapping[str, Any]:
        return MappingProxyType(self._store._values)

    @property
    def touched(self) -> Mapping[str, bool]:
        return MappingProxyType(self._store._touched)

    @property
    def validity(self) -> Mapping[str, bool]:
        return MappingProxyType(self._store._validity)

    @property
    def errors(self) -> Mapping[str, Any]:
        return MappingProxyType(self._store._errors)

    def as_dict(self) -> dict[str, dict[str, Any]]:
        """Deep copy of the current state, safe to serialize or mutate."""
        return copy.deepcopy(
            {
                "values": self._store._values,
                "touched": self._store._touched,
                "validity": self._store._validity,
                "errors": self._store._errors,
            }
        )

    def __repr__(self) -> str:
        return f"FormStateView({self.as_dict()!r})"


StateListener = Callable[[FormStateView], None]


class StateStore:
    """Holds ``{values, touched, validity, errors}`` for one form.

    Only the binding engine writes through the setters; everything else
    reads via ``current``.
    """

    def __init__(self, initial_values: Mapping[str, Any] | None = None) -> None:
        """Initialize the store.

        Args:
            initial_values: Caller-supplied starting values. Copied, so
                later mutation of the argument does not leak in.
        """
        self._values: dict[str, Any] = dict(initial_values or {})
        self._touched: dict[str, bool] = {}
        self._validity: dict[str, bool] = {}
        self._errors: dict[str, Any] = {}
        self._listeners: list[StateListener] = []
        self._view = FormStateView(self)

    @property
    def current(self) -> FormStateView:
        """The live read-only snapshot."""
        return self._view

    def set_values(self, partial: Mapping[str, Any]) -> None:
        self._values.update(partial)
        self._notify()

    def set_touched(self, partial: Mapping[str, bool]) -> None:
        self._touched.update(partial)
        self._notify()

    def set_validity(self, partial: Mapping[str, bool]) -> None:
        self._validity.update(partial)
        self._notify()

    def set_error(self, update: ErrorUpdate) -> None:
        """Merge or replace the errors map.

        Args:
            update: A mapping merged into the errors, or a callable that
                receives the current errors and returns the replacement
                (see ``formstate.utils.omit``).
        """
        if callable(update):
            replacement = dict(update(MappingProxyType(self._errors)))
            self._errors.clear()
            self._errors.update(replacement)
        else:
            self._errors.update(update)
        self._notify()

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener`` with the view after every commit.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._view)
