"""Replays recorded UI events against a form definition.

A session binds every field of a ``FormDefinition`` the way a host
would on each render, then feeds change and blur events through the
fields' handlers and reports the resulting state and diagnostics.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, ValidationError

from formstate.core import InputProps, Inputs
from formstate.diagnostics import DiagnosticsCollector, FormDiagnostic
from formstate.definition.models import FieldDefinition, FormDefinition
from formstate.events import Event, EventTarget, ProgrammaticValue, UIEvent
from formstate.state.store import FormStateView


class ReplayError(Exception):
    """Raised when an event record cannot be applied."""

    def __init__(self, message: str, record_number: int | None = None) -> None:
        self.record_number = record_number
        if record_number is not None:
            message = f"Record {record_number}: {message}"
        super().__init__(message)


class EventRecord(BaseModel):
    """One recorded event.

    ``target`` carries element state for a UI event; ``input`` carries a
    value set in code. ``value`` picks the member of a radio or checkbox
    group by its own value.
    """

    field: str
    value: str | int | float | bool | None = None
    event: Literal["change", "blur"] = "change"
    target: EventTarget | None = None
    input: Any = None

    model_config = ConfigDict(extra="forbid")

    def to_event(self) -> Event:
        if self.target is not None:
            return UIEvent(target=self.target)
        if self.input is not None:
            return ProgrammaticValue(value=self.input)
        return UIEvent()


class ReplayResult(BaseModel):
    """Outcome of replaying events against a form."""

    form_id: str
    version: str
    events_applied: int
    state: dict[str, dict[str, Any]]
    diagnostics: FormDiagnostic

    @property
    def valid(self) -> bool:
        return not self.diagnostics.errors


class FormSession:
    """A bound form plus the bookkeeping needed to replay events."""

    def __init__(
        self,
        definition: FormDefinition,
        options: Mapping[str, Any] | None = None,
        debug: bool | None = None,
    ) -> None:
        """Bind a definition.

        Args:
            definition: The form to bind.
            options: Extra form options (hooks) passed to ``use_form_state``.
            debug: Force developer warnings on or off; None defers to the
                global configuration.
        """
        self.definition = definition
        self.events_applied = 0

        option_kwargs: dict[str, Any] = {}
        if debug is not None:
            option_kwargs["debug"] = debug

        self.state: FormStateView
        self.inputs: Inputs
        self.state, self.inputs = definition.bind(
            options,
            diagnostics=DiagnosticsCollector(form_id=definition.form_id),
            **option_kwargs,
        )

    def field(self, name: str, value: Any = None) -> FieldDefinition:
        field = self.definition.get_field(name, value)
        if field is None:
            label = name if value is None else f"{name} ({value!r})"
            raise ReplayError(f"Field not defined in {self.definition.form_id}: {label}")
        return field

    def props(self, name: str, value: Any = None) -> InputProps:
        """Bind one field as the host would on render."""
        field = self.field(name, value)
        return self.inputs[field.type](field.name, field.value, field.field_options())

    def render(self) -> dict[tuple[str, str], dict[str, Any]]:
        """Bind every field and spread its props, like one host render.

        Spreading reads each ``value``, which initializes fields that have
        no value yet.
        """
        return {
            field.key: dict(self.inputs[field.type](field.name, field.value, field.field_options()))
            for field in self.definition.fields
        }

    def apply(self, record: EventRecord | Mapping[str, Any]) -> None:
        """Dispatch one event record to its field's handler."""
        if not isinstance(record, EventRecord):
            record = EventRecord.model_validate(record)

        props = self.props(record.field, record.value)
        handler = props.on_change if record.event == "change" else props.on_blur
        handler(record.to_event())
        self.events_applied += 1

    def replay(self, records: Iterable[Mapping[str, Any]]) -> ReplayResult:
        """Render, then apply each record followed by a re-render.

        Raises:
            ReplayError: If a record is malformed or names an unknown field.
        """
        self.render()
        for record_number, record in enumerate(records, 1):
            try:
                self.apply(record)
            except ValidationError as e:
                raise ReplayError(f"Invalid event record: {e}", record_number) from e
            except ReplayError as e:
                raise ReplayError(str(e), record_number) from e
            self.render()
        return self.result()

    def result(self) -> ReplayResult:
        """Snapshot the state and build a diagnostic report."""
        report = DiagnosticsCollector(form_id=self.definition.form_id)
        for warning in self.inputs.engine.diagnostics.warnings:
            report.add_warning(**warning.model_dump())
        report.collect_from_state(self.state)

        return ReplayResult(
            form_id=self.definition.form_id,
            version=self.definition.version,
            events_applied=self.events_applied,
            state=self.state.as_dict(),
            diagnostics=report.finalize(),
        )
