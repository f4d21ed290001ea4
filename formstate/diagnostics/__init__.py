"""Diagnostics collection for forms.

Tracks developer warnings and per-field validation outcomes.
"""

from formstate.diagnostics.collector import DiagnosticsCollector
from formstate.diagnostics.models import (
    DiagnosticError,
    DiagnosticStatus,
    DiagnosticWarning,
    FieldDiagnostic,
    FormDiagnostic,
)

__all__ = [
    "DiagnosticsCollector",
    "DiagnosticError",
    "DiagnosticStatus",
    "DiagnosticWarning",
    "FieldDiagnostic",
    "FormDiagnostic",
]
