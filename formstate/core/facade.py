"""Entry point assembling state, engine and binding generators."""

from collections.abc import Callable, Iterator, Mapping
from typing import Any

from formstate.constants import LABEL, TYPES
from formstate.core.engine import BindingEngine
from formstate.core.models import FormOptions, normalize_keys
from formstate.diagnostics import DiagnosticsCollector
from formstate.state.store import FormStateView, StateStore


class Inputs(Mapping[str, Callable[..., Any]]):
    """Binding generators keyed by field type, plus ``label``.

    Type tags are the mapping keys (``inputs["select-multiple"]``); the
    same generators are reachable as attributes with dashes turned into
    underscores (``inputs.select_multiple``).
    """

    def __init__(self, engine: BindingEngine) -> None:
        self.engine = engine
        self._generators: dict[str, Callable[..., Any]] = {
            field_type: engine.bindings_for_type(field_type) for field_type in TYPES
        }
        self._generators[LABEL] = engine.label

    def __getitem__(self, key: str) -> Callable[..., Any]:
        return self._generators[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._generators)

    def __len__(self) -> int:
        return len(self._generators)

    def __getattr__(self, attr: str) -> Callable[..., Any]:
        generators = self.__dict__.get("_generators", {})
        key = attr.replace("_", "-")
        if key in generators:
            return generators[key]
        raise AttributeError(f"{type(self).__name__!r} has no field type {attr!r}")

    def label(self, name: str, own_value: Any = None) -> dict[str, str]:
        return self.engine.label(name, own_value)


def use_form_state(
    initial_values: Mapping[str, Any] | None = None,
    options: FormOptions | Mapping[str, Any] | None = None,
    *,
    diagnostics: DiagnosticsCollector | None = None,
    **option_kwargs: Any,
) -> tuple[FormStateView, Inputs]:
    """Create the state and binding generators for one form.

    Args:
        initial_values: Starting field values.
        options: ``FormOptions`` or a mapping of them (``on_change``,
            ``on_blur``, ``on_touched``, ``with_ids``, ``debug``; camelCase
            spellings accepted).
        diagnostics: Collector for developer warnings. A fresh one is
            created when omitted; reach it via ``inputs.engine.diagnostics``.
        **option_kwargs: Form options given as keywords, merged over
            ``options``.

    Returns:
        The live read-only state view and the ``Inputs`` generators.

    Example::

        state, inputs = use_form_state({"email": ""}, with_ids=True)
        props = inputs.email("email")
        props.on_change(UIEvent.change("a@b.com"))
        state.values["email"]  # "a@b.com"
    """
    if isinstance(options, FormOptions):
        base = {name: getattr(options, name) for name in options.model_fields_set}
    else:
        base = normalize_keys(FormOptions, options or {})
    base.update(normalize_keys(FormOptions, option_kwargs))
    form_options = FormOptions.model_validate(base)

    store = StateStore(initial_values)
    engine = BindingEngine(store, form_options, diagnostics=diagnostics)
    return store.current, Inputs(engine)
