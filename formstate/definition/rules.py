"""Declarative constraint rules for form definitions.

Each rule takes the field's state value (a string, a bool for a toggle
checkbox, or a list for checkbox groups and multi-selects) and returns
an error message, or ``None`` when the value passes.
"""

import re
from collections.abc import Callable
from typing import Any

Rule = Callable[[Any], str | None]


def _is_blank(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def required(value: Any) -> str | None:
    """Field must be present and non-empty (or checked)."""
    if _is_blank(value):
        return "This field is required"
    return None


def min_length(n: int) -> Rule:
    """At least *n* characters, or *n* selections for list values."""

    def check(value: Any) -> str | None:
        if isinstance(value, (str, list)) and value and len(value) < n:
            unit = "selections" if isinstance(value, list) else "characters"
            return f"Must be at least {n} {unit}"
        return None

    return check


def max_length(n: int) -> Rule:
    """At most *n* characters, or *n* selections for list values."""

    def check(value: Any) -> str | None:
        if isinstance(value, (str, list)) and len(value) > n:
            unit = "selections" if isinstance(value, list) else "characters"
            return f"Must be at most {n} {unit}"
        return None

    return check


def matches(pattern: str, message: str | None = None) -> Rule:
    """Non-empty string values must fully match *pattern*."""
    compiled = re.compile(pattern)

    def check(value: Any) -> str | None:
        if isinstance(value, str) and value and not compiled.fullmatch(value):
            return message or f"Must match pattern: {pattern}"
        return None

    return check


def one_of(*choices: str) -> Rule:
    """Every selected value must be one of *choices*."""
    allowed = frozenset(choices)

    def check(value: Any) -> str | None:
        selected = value if isinstance(value, list) else [value]
        if any(v not in allowed for v in selected if not _is_blank(v)):
            return f"Must be one of: {', '.join(sorted(allowed))}"
        return None

    return check
