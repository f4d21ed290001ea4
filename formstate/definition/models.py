"""Pydantic models for declarative form definitions."""

from collections.abc import Callable, Mapping
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from formstate.constants import CHECKBOX, TYPES
from formstate.core import Inputs, use_form_state
from formstate.definition import rules as rule_factories
from formstate.definition.rules import Rule
from formstate.state import FormStateView
from formstate.utils import to_string

Validator = Callable[[Any, Mapping[str, Any], Any], Any]


class FieldDefinition(BaseModel):
    """One field of a form definition."""

    name: str = Field(min_length=1)
    type: str
    value: str | int | float | bool | None = None  # own value (checkbox/radio)
    validate_on_blur: bool = False
    touched_on_change: bool = False
    required: bool = False
    pattern: str | None = None
    min_length: int | None = Field(default=None, ge=0)
    max_length: int | None = Field(default=None, ge=0)
    choices: list[str] | None = None
    message: str | None = None  # replaces the message of any failing rule

    @field_validator("type")
    @classmethod
    def known_type(cls, value: str) -> str:
        if value not in TYPES:
            raise ValueError(f"Unsupported field type: {value}")
        return value

    @property
    def key(self) -> tuple[str, str]:
        """Lookup key: name plus stringified own value."""
        return (self.name, to_string(self.value))

    def rules(self) -> list[Rule]:
        """Constraint rules declared on this field, in evaluation order."""
        declared: list[Rule] = []
        if self.required:
            declared.append(rule_factories.required)
        if self.min_length is not None:
            declared.append(rule_factories.min_length(self.min_length))
        if self.max_length is not None:
            declared.append(rule_factories.max_length(self.max_length))
        if self.pattern is not None:
            declared.append(rule_factories.matches(self.pattern, self.message))
        if self.choices is not None:
            declared.append(rule_factories.one_of(*self.choices))
        return declared

    def build_validator(self) -> Validator | None:
        """Turn the declared constraints into a custom field validator.

        The validator checks the field's prospective state value (so a
        checkbox group is judged by its list of checked values, not by the
        single checkbox that changed).

        Returns:
            A validator returning ``True`` or an error message, or None
            when the field declares no constraints.
        """
        declared = self.rules()
        if not declared:
            return None
        name = self.name
        message = self.message

        def validate(value: Any, values: Mapping[str, Any], event: Any) -> Any:
            current = values.get(name, value)
            for rule in declared:
                error = rule(current)
                if error is not None:
                    return message or error
            return True

        return validate

    def field_options(self) -> dict[str, Any]:
        """Options passed to the binding generator for this field."""
        options: dict[str, Any] = {
            "validate_on_blur": self.validate_on_blur,
            "touched_on_change": self.touched_on_change,
        }
        validator = self.build_validator()
        if validator is not None:
            options["validate"] = validator
        return options


class FormDefinition(BaseModel):
    """Complete declarative form definition."""

    type: Literal["form_definition"] = "form_definition"
    form_id: str
    version: str
    description: str | None = None
    with_ids: bool = False
    initial_values: dict[str, Any] = Field(default_factory=dict)
    fields: list[FieldDefinition]

    @model_validator(mode="after")
    def unique_field_keys(self) -> "FormDefinition":
        seen: set[tuple[str, str]] = set()
        for field in self.fields:
            if field.key in seen:
                raise ValueError(f"Duplicate field: {field.name} ({to_string(field.value)!r})")
            seen.add(field.key)
        return self

    @model_validator(mode="after")
    def consistent_checkbox_modes(self) -> "FormDefinition":
        modes: dict[str, bool] = {}
        for field in self.fields:
            if field.type != CHECKBOX:
                continue
            has_own_value = bool(to_string(field.value))
            if modes.setdefault(field.name, has_own_value) != has_own_value:
                raise ValueError(
                    f"Checkbox {field.name} is declared both with and without an own value"
                )
        return self

    def get_field(self, name: str, value: Any = None) -> FieldDefinition | None:
        """Get a field by name and own value.

        A bare name also finds the only field of a radio or checkbox group
        when the group has exactly one member.
        """
        key = (name, to_string(value))
        for field in self.fields:
            if field.key == key:
                return field
        if value is None:
            matches = [f for f in self.fields if f.name == name]
            if len(matches) == 1:
                return matches[0]
        return None

    def group(self, name: str) -> list[FieldDefinition]:
        """All fields sharing ``name`` (radio and checkbox groups)."""
        return [f for f in self.fields if f.name == name]

    def bind(
        self, options: Mapping[str, Any] | None = None, **option_kwargs: Any
    ) -> tuple[FormStateView, Inputs]:
        """Create form state seeded with ``initial_values``.

        Args:
            options: Form options (hooks) passed to ``use_form_state``.
            **option_kwargs: Keyword form options; ``with_ids`` defaults to
                the definition's setting.

        Returns:
            The state view and binding generators. Bind a field with
            ``inputs[field.type](field.name, field.value, field.field_options())``.
        """
        option_kwargs.setdefault("with_ids", self.with_ids)
        return use_form_state(self.initial_values, options, **option_kwargs)
