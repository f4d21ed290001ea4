"""Core of formstate: argument parsing, the binding engine and the facade."""

from formstate.core.engine import (
    BindingEngine,
    FieldBinding,
    InputProps,
    UnknownFieldTypeError,
)
from formstate.core.facade import Inputs, use_form_state
from formstate.core.models import FieldOptions, FormOptions, InputArgs
from formstate.core.parsing import InputArgumentError, parse_input_args

__all__ = [
    # Models
    "FieldOptions",
    "FormOptions",
    "InputArgs",
    # Parsing
    "InputArgumentError",
    "parse_input_args",
    # Engine
    "BindingEngine",
    "FieldBinding",
    "InputProps",
    "UnknownFieldTypeError",
    # Facade
    "Inputs",
    "use_form_state",
]
