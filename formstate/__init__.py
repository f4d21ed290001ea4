"""formstate: form-state controller with per-field-type input bindings."""

__version__ = "0.1.0"

# Imported after __version__ so submodules can read it without a cycle
from formstate.core import (
    FieldOptions,
    FormOptions,
    InputArgumentError,
    InputProps,
    Inputs,
    UnknownFieldTypeError,
    use_form_state,
)
from formstate.events import EventTarget, ProgrammaticValue, SelectOption, UIEvent, ValidityState
from formstate.state import FormStateView, StateStore

__all__ = [
    "__version__",
    "EventTarget",
    "FieldOptions",
    "FormOptions",
    "FormStateView",
    "InputArgumentError",
    "InputProps",
    "Inputs",
    "ProgrammaticValue",
    "SelectOption",
    "StateStore",
    "UIEvent",
    "UnknownFieldTypeError",
    "ValidityState",
    "use_form_state",
]
