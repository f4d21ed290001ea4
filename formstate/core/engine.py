"""Binding engine: per-field-type props, handlers and validation.

For each field type the engine derives the current ``value``/``checked``
from the state store, builds the change and blur handlers that compute
the next value from an event, and decides when validation runs:

- on change, unless the field validates on blur only;
- on blur, the first time the field is touched or whenever its value
  changed since the last blur validation.

Handlers are cached per ``(type, name, own_value)`` so repeated binding
requests hand out the same callables.
"""

import copy
import logging
from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from formstate.cache import MemoCache
from formstate.constants import (
    CHECKBOX,
    LOGGER_NAME,
    ON_BLUR_HANDLER,
    ON_CHANGE_HANDLER,
    RADIO,
    SELECT_MULTIPLE,
    TYPES,
    UNTYPED_ELEMENTS,
)
from formstate.core.models import FieldOptions, FormOptions, InputArgs
from formstate.core.parsing import InputArgumentError, parse_input_args
from formstate.diagnostics import DiagnosticsCollector
from formstate.events import Event, ProgrammaticValue, UIEvent, coerce_event, event_value
from formstate.identifiers import InputIdProvider
from formstate.state.store import StateStore
from formstate.utils import omit, to_string

logger = logging.getLogger(LOGGER_NAME)

FieldKey = tuple[str, str, str]


class UnknownFieldTypeError(KeyError):
    """Raised when bindings are requested for an unsupported field type."""

    def __init__(self, field_type: str) -> None:
        self.field_type = field_type
        super().__init__(f"Unsupported field type: {field_type}")

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0])


class InputProps(Mapping[str, Any]):
    """Property bag for one field, meant to be spread onto an element.

    Keys that do not apply to the field type (``type`` for selects and
    textareas, ``multiple`` outside select-multiple, ``checked`` outside
    checkbox and radio, ``id`` when ids are disabled) are left out.

    ``checked`` is computed when the bag is built and never touches the
    store. ``value`` is the one read with a side effect: the first read
    writes the field's default value into the store if it has none.
    """

    __slots__ = (
        "name",
        "type",
        "multiple",
        "checked",
        "on_change",
        "on_blur",
        "id",
        "_resolve_value",
        "_keys",
    )

    def __init__(
        self,
        *,
        name: str,
        type: str | None,
        multiple: bool | None,
        checked: bool | None,
        on_change: Callable[[Any], None],
        on_blur: Callable[[Any], None],
        id: str | None,
        resolve_value: Callable[[], Any],
    ) -> None:
        self.name = name
        self.type = type
        self.multiple = multiple
        self.checked = checked
        self.on_change = on_change
        self.on_blur = on_blur
        self.id = id
        self._resolve_value = resolve_value

        keys = ["name"]
        if type is not None:
            keys.append("type")
        if multiple:
            keys.append("multiple")
        if checked is not None:
            keys.append("checked")
        keys.extend(["value", "on_change", "on_blur"])
        if id is not None:
            keys.append("id")
        self._keys = tuple(keys)

    @property
    def value(self) -> Any:
        return self._resolve_value()

    def __getitem__(self, key: str) -> Any:
        if key not in self._keys:
            raise KeyError(key)
        return getattr(self, key)

    def __contains__(self, key: object) -> bool:
        # Mapping's default would call __getitem__ and initialize the value
        return key in self._keys

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return f"InputProps(name={self.name!r}, type={self.type!r}, keys={list(self._keys)!r})"


class FieldBinding:
    """Behaviour of one ``(type, name, own_value)`` field.

    One instance lives per key for the engine's lifetime; its bound
    ``handle_change``/``handle_blur`` methods are what the props expose.
    """

    def __init__(
        self,
        engine: "BindingEngine",
        field_type: str,
        name: str,
        own_value: Any,
        options: FieldOptions,
    ) -> None:
        self.engine = engine
        self.type = field_type
        self.name = name
        self.own_value = to_string(own_value)
        self.options = options

    @property
    def key(self) -> FieldKey:
        return (self.type, self.name, self.own_value)

    @property
    def has_own_value(self) -> bool:
        return bool(self.own_value)

    @property
    def store(self) -> StateStore:
        return self.engine.store

    def default_value(self) -> Any:
        """Value written on first read: ``[]``, ``False`` or ``''``."""
        if self.type == CHECKBOX:
            # A checkbox with its own value collects checked values in a
            # list; without one it is a plain toggle.
            return [] if self.has_own_value else False
        if self.type == SELECT_MULTIPLE:
            return []
        return ""

    def ensure_initialized(self) -> None:
        """Write the default value if the store has none for this field."""
        if self.store.current.values.get(self.name) is None:
            self.store.set_values({self.name: self.default_value()})

    def resolve_checked(self) -> bool | None:
        """Checked state for radio and checkbox; None for other types."""
        current = self.store.current.values.get(self.name)
        if self.type == RADIO:
            return current is not None and to_string(current) == self.own_value
        if self.type == CHECKBOX:
            if not self.has_own_value:
                return bool(current)
            return current is not None and self.own_value in current
        return None

    def resolve_value(self) -> Any:
        """DOM value of the element, initializing the field on first read.

        Checkbox and radio report their own value; the state value of
        those is a check status, not what the element's value attribute
        should show.
        """
        current = self.store.current.values.get(self.name)
        if current is None:
            self.ensure_initialized()
        if self.type in (CHECKBOX, RADIO):
            return self.own_value
        return "" if current is None else current

    def _checked_values(self) -> dict[str, None]:
        # Ordered set of the group's checked own values
        current = self.store.current.values.get(self.name)
        return dict.fromkeys(current if isinstance(current, list) else [])

    def next_checkbox_value(self, event: UIEvent) -> bool | list[str]:
        if not self.has_own_value:
            return event.target.checked
        checked_values = self._checked_values()
        if event.target.checked:
            checked_values[self.own_value] = None
        else:
            checked_values.pop(self.own_value, None)
        return list(checked_values)

    def next_programmatic_checkbox_value(self, value: Any) -> list[str]:
        """List value of a checkbox group after a value set in code.

        A list or tuple replaces the group's checked values. A bool checks
        or unchecks this checkbox; any other scalar checks it.

        Raises:
            TypeError: If ``value`` is neither a sequence nor a scalar.
        """
        if isinstance(value, (list, tuple)):
            return list(dict.fromkeys(to_string(v) for v in value))
        if not isinstance(value, (str, int, float, bool)):
            raise TypeError(
                f"Cannot set checkbox group {self.name!r} from {type(value).__name__}"
            )
        checked_values = self._checked_values()
        if value is False:
            checked_values.pop(self.own_value, None)
        else:
            checked_values[self.own_value] = None
        return list(checked_values)

    @staticmethod
    def next_select_multiple_value(event: UIEvent) -> list[str]:
        return [option.value for option in event.target.options if option.selected]

    def next_value(self, event: Event, override: Any = None) -> Any:
        """Value the field takes after ``event``."""
        if override is not None:
            return override
        if isinstance(event, ProgrammaticValue):
            if self.type == CHECKBOX and self.has_own_value:
                return self.next_programmatic_checkbox_value(event.value)
            return event.value
        if self.type == CHECKBOX:
            return self.next_checkbox_value(event)
        if self.type == SELECT_MULTIPLE:
            return self.next_select_multiple_value(event)
        if self.type == RADIO:
            # The element's value attribute is the own value
            return event.target.value or self.own_value
        return event.target.value

    def validate(self, event: Any, values: Mapping[str, Any] | None = None) -> bool:
        """Validate the field and commit its validity and error.

        Args:
            event: The triggering event, or a bare value for programmatic
                validation.
            values: Values map handed to a custom validator; defaults to
                the store's current values.

        Returns:
            Whether the field is valid.
        """
        event = coerce_event(event)
        if values is None:
            values = self.store.current.values
        validator = self.options.validate_

        if validator is not None:
            result = validator(event_value(event), values, event)
            is_valid = result is True or result is None
            error = None if is_valid else ("" if result is False else result)
        elif isinstance(event, UIEvent):
            is_valid = event.target.validity.valid
            error = None if is_valid else event.target.validation_message
        else:
            # No element, no native validation
            self.engine.warn_missing_validator(self)
            is_valid, error = True, None

        self.store.set_validity({self.name: is_valid})
        self.store.set_error(omit(self.name) if is_valid else {self.name: error})
        return is_valid

    def touch(self, event: Event) -> None:
        if not self.store.current.touched.get(self.name):
            self.store.set_touched({self.name: True})
            self.engine.options.on_touched(event)

    def handle_change(self, event: Any) -> None:
        event = coerce_event(event)
        engine = self.engine
        engine.mark_dirty(self.name, True)

        override = self.options.on_change(event)
        value = self.next_value(event, override)

        # Hooks and validators only ever see copies of the stored values
        previous_values = copy.deepcopy(dict(self.store.current.values))
        next_values = copy.deepcopy({**self.store.current.values, self.name: value})
        engine.options.on_change(
            event,
            MappingProxyType(previous_values),
            MappingProxyType(next_values),
        )

        if not self.options.validate_on_blur:
            self.validate(event, MappingProxyType(next_values))
        if self.options.touched_on_change:
            self.touch(event)

        self.store.set_values({self.name: value})
        logger.debug("Committed %s field %r = %r", self.type, self.name, value)

    def handle_blur(self, event: Any) -> None:
        event = coerce_event(event)
        engine = self.engine
        was_touched = bool(self.store.current.touched.get(self.name))

        self.touch(event)
        self.options.on_blur(event)
        engine.options.on_blur(event)

        # Validate on the first blur, then only after the value changed
        if not was_touched or engine.is_dirty(self.name):
            self.validate(event)
            engine.mark_dirty(self.name, False)


class BindingEngine:
    """Builds ``InputProps`` for every supported field type of one form."""

    def __init__(
        self,
        store: StateStore,
        options: FormOptions | None = None,
        id_provider: InputIdProvider | None = None,
        diagnostics: DiagnosticsCollector | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            store: State store the engine reads from and commits into.
            options: Form-level options (hooks, ids, debug).
            id_provider: Id generator; built from ``options.with_ids`` when
                not given.
            diagnostics: Collector receiving developer warnings.
        """
        self.store = store
        self.options = options if options is not None else FormOptions()
        self.id_provider = (
            id_provider if id_provider is not None else InputIdProvider(self.options.with_ids)
        )
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticsCollector()

        self._fields = MemoCache()
        self._handlers = MemoCache()
        self._dirty = MemoCache()
        self._warned = MemoCache()
        self._checkbox_modes: dict[str, bool] = {}

    def bindings_for_type(self, field_type: str) -> Callable[..., InputProps]:
        """Return the binding generator for ``field_type``.

        Raises:
            UnknownFieldTypeError: If the type is not supported.
        """
        if field_type not in TYPES:
            raise UnknownFieldTypeError(field_type)

        def get_props(*args: Any, **kwargs: Any) -> InputProps:
            return self.bind(field_type, parse_input_args(args, kwargs))

        get_props.__name__ = field_type.replace("-", "_")
        get_props.__qualname__ = f"{type(self).__name__}.{get_props.__name__}"
        return get_props

    def field(self, field_type: str, input_args: InputArgs) -> FieldBinding:
        """Return the field binding for these arguments, creating it once.

        The latest options replace the stored ones, so a re-render with a
        new validator takes effect while handler identity stays the same.
        """
        key: FieldKey = (field_type, input_args.name, to_string(input_args.own_value))
        binding = self._fields.get(key)
        if binding is None:
            binding = FieldBinding(
                self, field_type, input_args.name, input_args.own_value, input_args.options
            )
            self._fields.set(key, binding)
        else:
            binding.options = input_args.options
        return binding

    def bind(self, field_type: str, input_args: InputArgs) -> InputProps:
        """Build a fresh ``InputProps`` for one field."""
        binding = self.field(field_type, input_args)
        if field_type == CHECKBOX:
            self._check_checkbox_mode(binding)

        return InputProps(
            name=binding.name,
            type=None if field_type in UNTYPED_ELEMENTS else field_type,
            multiple=True if field_type == SELECT_MULTIPLE else None,
            checked=binding.resolve_checked(),
            on_change=self._handlers.get_or_set(
                (ON_CHANGE_HANDLER, binding.key), binding.handle_change
            ),
            on_blur=self._handlers.get_or_set((ON_BLUR_HANDLER, binding.key), binding.handle_blur),
            id=self.id_provider.get_id(binding.name, binding.own_value),
            resolve_value=binding.resolve_value,
        )

    def label(self, name: str, own_value: Any = None) -> dict[str, str]:
        """Props for a ``<label>``: ``{"html_for": id}`` or ``{}``."""
        return self.id_provider.get_id_prop("html_for", name, own_value)

    def is_dirty(self, name: str) -> bool:
        return bool(self._dirty.get(name, False))

    def mark_dirty(self, name: str, dirty: bool) -> None:
        self._dirty.set(name, dirty)

    def warn_missing_validator(self, binding: FieldBinding) -> None:
        """Warn once per field key that a programmatic value went unvalidated."""
        if not self.options.debug or self._warned.has(binding.key):
            return
        self._warned.set(binding.key, True)

        message = (
            f'You provided a custom value for input "{binding.name}" without a '
            "custom validate method. As a result, validation of this input "
            'will be set to "true" automatically. If you need to validate '
            "this input, provide a custom validation option."
        )
        logger.warning(message)
        self.diagnostics.add_warning(
            stage="validation",
            code="MISSING_VALIDATOR",
            message=message,
            field_name=binding.name,
            details={"type": binding.type, "own_value": binding.own_value},
        )

    def _check_checkbox_mode(self, binding: FieldBinding) -> None:
        # A name is either a toggle (bool) or a group of own values (list);
        # mixing both on one name leaves its state shape undefined.
        mode = self._checkbox_modes.setdefault(binding.name, binding.has_own_value)
        if mode != binding.has_own_value:
            raise InputArgumentError(
                f'Checkbox "{binding.name}" is bound both with and without an own value'
            )
