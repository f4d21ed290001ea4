"""Collector for form diagnostics.

The binding engine reports advisory warnings here as they happen;
``collect_from_state`` adds one error per invalid field when a report
is produced.
"""

from formstate.diagnostics.models import (
    DiagnosticError,
    DiagnosticStatus,
    DiagnosticWarning,
    FieldDiagnostic,
    FormDiagnostic,
    Stage,
)
from formstate.state.store import FormStateView


class DiagnosticsCollector:
    """Collects warnings and errors for one form."""

    def __init__(self, form_id: str = "form") -> None:
        """Initialize the collector.

        Args:
            form_id: Identifier for the form the diagnostics belong to.
        """
        self.form_id = form_id

        self._errors: list[DiagnosticError] = []
        self._warnings: list[DiagnosticWarning] = []
        self._fields: dict[str, FieldDiagnostic] = {}

    @property
    def warnings(self) -> list[DiagnosticWarning]:
        return list(self._warnings)

    @property
    def errors(self) -> list[DiagnosticError]:
        return list(self._errors)

    def add_error(
        self,
        stage: Stage,
        code: str,
        message: str,
        field_name: str | None = None,
        details: dict | None = None,
    ) -> None:
        """Add an error.

        Args:
            stage: Where the error occurred.
            code: Error code (e.g., "FIELD_INVALID").
            message: Human-readable error message.
            field_name: Optional field the error relates to.
            details: Optional additional details.
        """
        self._errors.append(
            DiagnosticError(
                stage=stage,
                code=code,
                message=message,
                field_name=field_name,
                details=details,
            )
        )

    def add_warning(
        self,
        stage: Stage,
        code: str,
        message: str,
        field_name: str | None = None,
        details: dict | None = None,
    ) -> None:
        """Add a warning.

        Args:
            stage: Where the warning was raised.
            code: Warning code (e.g., "MISSING_VALIDATOR").
            message: Human-readable warning message.
            field_name: Optional field the warning relates to.
            details: Optional additional details.
        """
        self._warnings.append(
            DiagnosticWarning(
                stage=stage,
                code=code,
                message=message,
                field_name=field_name,
                details=details,
            )
        )

    def collect_from_state(self, state: FormStateView) -> None:
        """Summarize every known field and record errors for invalid ones.

        Args:
            state: The form's current state view.
        """
        names = list(
            dict.fromkeys([*state.values, *state.touched, *state.validity, *state.errors])
        )
        for name in names:
            valid = state.validity.get(name)
            self._fields[name] = FieldDiagnostic(
                name=name,
                value=state.values.get(name),
                touched=bool(state.touched.get(name, False)),
                valid=valid,
                error=state.errors.get(name),
            )
            if valid is False:
                error = state.errors.get(name)
                self.add_error(
                    stage="validation",
                    code="FIELD_INVALID",
                    message=f"Field {name} is invalid"
                    + (f": {error}" if error not in (None, "") else ""),
                    field_name=name,
                )

    def finalize(self) -> FormDiagnostic:
        """Finalize and return the diagnostic report."""
        if self._errors:
            status = DiagnosticStatus.INVALID
        elif self._warnings:
            status = DiagnosticStatus.WARNINGS
        else:
            status = DiagnosticStatus.CLEAN

        return FormDiagnostic(
            form_id=self.form_id,
            status=status,
            fields=list(self._fields.values()),
            errors=list(self._errors),
            warnings=list(self._warnings),
        )
