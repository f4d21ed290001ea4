"""Data models for form diagnostics.

Tracks developer-facing warnings raised while binding and validating
fields, plus a per-field summary of the form's state.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field

Stage = Literal["binding", "validation", "replay"]


class DiagnosticStatus(str, Enum):
    """Overall status of a form."""

    CLEAN = "clean"  # Every validated field is valid, nothing to report
    WARNINGS = "warnings"  # Valid, but advisory warnings were raised
    INVALID = "invalid"  # At least one field failed validation


class DiagnosticError(BaseModel):
    """A field that failed validation, or a failed replay step."""

    stage: Stage
    code: str  # Error code like "FIELD_INVALID"
    message: str
    field_name: str | None = None
    details: dict | None = None


class DiagnosticWarning(BaseModel):
    """An advisory condition worth a developer's attention."""

    stage: Stage
    code: str  # Warning code like "MISSING_VALIDATOR"
    message: str
    field_name: str | None = None
    details: dict | None = None


class FieldDiagnostic(BaseModel):
    """State summary for one field."""

    name: str
    value: Any = None
    touched: bool = False
    valid: bool | None = None  # None when no validation has run
    error: Any = None


class FormDiagnostic(BaseModel):
    """Diagnostics for a complete form."""

    form_id: str
    status: DiagnosticStatus
    fields: list[FieldDiagnostic] = Field(default_factory=list)
    errors: list[DiagnosticError] = Field(default_factory=list)
    warnings: list[DiagnosticWarning] = Field(default_factory=list)

    @property
    def invalid_fields(self) -> list[str]:
        return [f.name for f in self.fields if f.valid is False]
