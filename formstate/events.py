"""Event models delivered to change and blur handlers.

A handler receives either a ``UIEvent`` (carrying the element state the
host read from its widget, including native constraint validation) or a
``ProgrammaticValue`` (a value set in code, with no element behind it).
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field


class SelectOption(BaseModel):
    """One ``<option>`` of a select element."""

    value: str
    selected: bool = False


class ValidityState(BaseModel):
    """Native constraint-validation verdict of an element."""

    valid: bool = True


class EventTarget(BaseModel):
    """The element an event was dispatched on."""

    value: str = ""
    checked: bool = False
    options: list[SelectOption] = Field(default_factory=list)
    validity: ValidityState = Field(default_factory=ValidityState)
    validation_message: str = ""


class UIEvent(BaseModel):
    """A change or blur event coming from a real UI element."""

    target: EventTarget = Field(default_factory=EventTarget)

    @classmethod
    def change(
        cls,
        value: str = "",
        checked: bool = False,
        options: list[SelectOption] | None = None,
        valid: bool = True,
        validation_message: str = "",
    ) -> "UIEvent":
        """Shorthand for building an event from element state."""
        return cls(
            target=EventTarget(
                value=value,
                checked=checked,
                options=options or [],
                validity=ValidityState(valid=valid),
                validation_message=validation_message,
            )
        )


class ProgrammaticValue(BaseModel):
    """A value supplied in code rather than read from an element.

    Native validation is impossible for these, so fields fed this way
    are only validated by a custom validator.
    """

    value: Any


Event = UIEvent | ProgrammaticValue


def coerce_event(event: Any) -> Event:
    """Normalize whatever a host passed to a handler into an ``Event``.

    Args:
        event: A ``UIEvent``, a ``ProgrammaticValue``, a bare ``str``
            (treated as a programmatic value) or a mapping shaped like a
            ``UIEvent``.

    Returns:
        The corresponding ``UIEvent`` or ``ProgrammaticValue``.

    Raises:
        TypeError: If the object cannot be interpreted as an event.
    """
    if isinstance(event, (UIEvent, ProgrammaticValue)):
        return event
    if isinstance(event, str):
        return ProgrammaticValue(value=event)
    if isinstance(event, Mapping):
        return UIEvent.model_validate(event)
    raise TypeError(f"Cannot interpret {type(event).__name__} as a form event")


def event_value(event: Event) -> Any:
    """The raw value carried by an event."""
    if isinstance(event, ProgrammaticValue):
        return event.value
    return event.target.value
