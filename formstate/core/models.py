"""Option models for forms and individual fields.

Both accept the snake_case field names and the camelCase spellings
(``validateOnBlur``, ``onChange``...) so option dicts written for a
browser-side form library can be reused unchanged.
"""

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from formstate.config import is_debug_enabled
from formstate.utils import noop

OwnValue = str | int | float | bool | None


def normalize_keys(model: type[BaseModel], source: Mapping[str, Any]) -> dict[str, Any]:
    """Map camelCase aliases in ``source`` onto ``model``'s field names."""
    aliases = {field.alias: name for name, field in model.model_fields.items() if field.alias}
    return {aliases.get(str(key), str(key)): value for key, value in source.items()}


class FieldOptions(BaseModel):
    """Per-field options passed when requesting a field's bindings."""

    validate_: Callable[..., Any] | None = Field(default=None, alias="validate")
    validate_on_blur: bool = Field(default=False, alias="validateOnBlur")
    touched_on_change: bool = Field(default=False, alias="touchedOnChange")
    on_change: Callable[..., Any] = Field(default=noop, alias="onChange")
    on_blur: Callable[..., Any] = Field(default=noop, alias="onBlur")

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)


class FormOptions(BaseModel):
    """Form-level options given to ``use_form_state``."""

    on_change: Callable[..., Any] = Field(default=noop, alias="onChange")
    on_blur: Callable[..., Any] = Field(default=noop, alias="onBlur")
    on_touched: Callable[..., Any] = Field(default=noop, alias="onTouched")
    with_ids: bool | Callable[[str, str], str] = Field(default=False, alias="withIds")
    debug: bool = Field(default_factory=is_debug_enabled)

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)


class InputArgs(BaseModel):
    """Normalized result of a binding request's arguments."""

    name: str
    own_value: OwnValue = None
    options: FieldOptions = Field(default_factory=FieldOptions)

    model_config = ConfigDict(frozen=True)
