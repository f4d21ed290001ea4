"""Declarative form definitions: models, constraint rules and loading."""

from formstate.definition.loader import (
    DEFAULT_SCHEMA_PATH,
    FormDefinitionLoader,
    FormDefinitionNotFoundError,
    FormDefinitionValidationError,
    read_definition_file,
)
from formstate.definition.models import FieldDefinition, FormDefinition

__all__ = [
    "DEFAULT_SCHEMA_PATH",
    "FieldDefinition",
    "FormDefinition",
    "FormDefinitionLoader",
    "FormDefinitionNotFoundError",
    "FormDefinitionValidationError",
    "read_definition_file",
]
