"""Normalizes the argument forms accepted by binding generators.

A field's bindings can be requested as::

    inputs.text("email")
    inputs.checkbox("colors", "red")
    inputs.text("email", {"validate": check_email})
    inputs.radio("plan", "pro", {"touched_on_change": True})
    inputs.text({"name": "email", "validateOnBlur": True})
    inputs.text("email", validate=check_email)

Every shape resolves to one ``InputArgs``.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from formstate.core.models import FieldOptions, InputArgs, normalize_keys

_PRIMITIVES = (str, int, float, bool)


class InputArgumentError(TypeError):
    """Raised when a binding request cannot be understood.

    This is a usage error in the calling code, never a validation
    outcome, so it is raised immediately instead of defaulting.
    """


def _is_own_value(value: Any) -> bool:
    return value is None or isinstance(value, _PRIMITIVES)


def _is_options(value: Any) -> bool:
    return isinstance(value, (Mapping, FieldOptions))


def _normalize_name(name: Any) -> str:
    if isinstance(name, bool) or not isinstance(name, (str, int, float)):
        raise InputArgumentError(
            f"Field name must be a string, got {type(name).__name__}"
        )
    name = str(name)
    if not name:
        raise InputArgumentError("Field name is required")
    return name


def _merge_options(*sources: Mapping[str, Any] | FieldOptions | None) -> FieldOptions:
    merged: dict[str, Any] = {}
    for source in sources:
        if source is None:
            continue
        if isinstance(source, FieldOptions):
            merged.update({key: getattr(source, key) for key in source.model_fields_set})
        else:
            merged.update(normalize_keys(FieldOptions, source))
    try:
        return FieldOptions.model_validate(merged)
    except ValidationError as e:
        raise InputArgumentError(f"Invalid field options: {e}") from e


def parse_input_args(args: tuple[Any, ...], kwargs: Mapping[str, Any] | None = None) -> InputArgs:
    """Resolve a binding request's arguments into ``InputArgs``.

    Args:
        args: Positional arguments of the binding call.
        kwargs: Keyword arguments; merged over any positional options.

    Returns:
        The field name, own value and field options.

    Raises:
        InputArgumentError: If the name is missing or the shape is not one
            of the supported call forms.
    """
    kwargs = dict(kwargs or {})

    match args:
        case ():
            raise InputArgumentError("Field name is required")
        case (Mapping() as descriptor,):
            descriptor = dict(descriptor)
            if "name" not in descriptor:
                raise InputArgumentError("Field descriptor is missing 'name'")
            name = descriptor.pop("name")
            own_value = descriptor.pop("value", None)
            options_source: Any = descriptor
        case (name,):
            own_value = None
            options_source = None
        case (name, options) if _is_options(options):
            own_value = None
            options_source = options
        case (name, own_value) if _is_own_value(own_value):
            options_source = None
        case (name, own_value, options) if _is_own_value(own_value) and _is_options(options):
            options_source = options
        case _:
            raise InputArgumentError(
                "Expected (name), (name, value), (name, options) or "
                f"(name, value, options); got {len(args)} argument(s)"
            )

    if not _is_own_value(own_value):
        raise InputArgumentError(
            f"Own value must be a primitive, got {type(own_value).__name__}"
        )

    return InputArgs(
        name=_normalize_name(name),
        own_value=own_value,
        options=_merge_options(options_source, kwargs),
    )
