"""Tests for diagnostics collection."""

from formstate import UIEvent, use_form_state
from formstate.diagnostics import DiagnosticsCollector, DiagnosticStatus


class TestDiagnosticsCollector:
    """Tests for DiagnosticsCollector."""

    def test_clean(self) -> None:
        """Test an empty collector reports clean."""
        report = DiagnosticsCollector(form_id="signup").finalize()
        assert report.form_id == "signup"
        assert report.status == DiagnosticStatus.CLEAN
        assert report.fields == []

    def test_warnings_status(self) -> None:
        """Test warnings alone give the warnings status."""
        collector = DiagnosticsCollector()
        collector.add_warning(stage="validation", code="MISSING_VALIDATOR", message="x")
        report = collector.finalize()
        assert report.status == DiagnosticStatus.WARNINGS
        assert report.warnings[0].code == "MISSING_VALIDATOR"

    def test_errors_win_over_warnings(self) -> None:
        """Test any error makes the report invalid."""
        collector = DiagnosticsCollector()
        collector.add_warning(stage="validation", code="W", message="w")
        collector.add_error(stage="replay", code="E", message="e", details={"line": 3})
        report = collector.finalize()
        assert report.status == DiagnosticStatus.INVALID
        assert report.errors[0].details == {"line": 3}

    def test_properties_are_copies(self) -> None:
        """Test the exposed lists cannot alter the collector."""
        collector = DiagnosticsCollector()
        collector.warnings.append("junk")
        assert collector.warnings == []


class TestCollectFromState:
    """Tests for summarizing a form's state."""

    def test_field_summaries(self) -> None:
        """Test every known field is summarized."""
        state, inputs = use_form_state({"name": "Ada"})
        inputs.text("email").on_change(
            UIEvent.change("nope", valid=False, validation_message="Not an email")
        )
        inputs.text("name").on_blur(UIEvent())

        collector = DiagnosticsCollector()
        collector.collect_from_state(state)
        report = collector.finalize()

        fields = {f.name: f for f in report.fields}
        assert fields["name"].touched is True
        assert fields["name"].valid is True
        assert fields["email"].value == "nope"
        assert fields["email"].error == "Not an email"
        assert report.invalid_fields == ["email"]
        assert report.status == DiagnosticStatus.INVALID
        assert report.errors[0].code == "FIELD_INVALID"
        assert report.errors[0].message == "Field email is invalid: Not an email"

    def test_unvalidated_field(self) -> None:
        """Test a field never validated has no verdict and no error."""
        state, inputs = use_form_state({"name": "Ada"})
        collector = DiagnosticsCollector()
        collector.collect_from_state(state)
        report = collector.finalize()
        assert report.fields[0].valid is None
        assert report.status == DiagnosticStatus.CLEAN

    def test_empty_error_message(self) -> None:
        """Test an invalid field with an empty payload still reports."""
        state, inputs = use_form_state()
        inputs.text("f", validate=lambda value, values, event: False).on_change(
            UIEvent.change("x")
        )
        collector = DiagnosticsCollector()
        collector.collect_from_state(state)
        assert collector.errors[0].message == "Field f is invalid"
