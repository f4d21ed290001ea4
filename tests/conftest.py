"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import yaml

from formstate import Inputs, FormStateView, use_form_state


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the global config at an empty temp dir and clear env overrides."""
    home = tmp_path / "formstate-home"
    monkeypatch.setenv("FORMSTATE_HOME", str(home))
    monkeypatch.delenv("FORMSTATE_DEBUG", raising=False)
    monkeypatch.delenv("FORMSTATE_DEFINITIONS", raising=False)
    return home


@pytest.fixture
def make_form() -> Callable[..., tuple[FormStateView, Inputs]]:
    """Factory for fresh forms."""

    def factory(initial_values: dict[str, Any] | None = None, **options: Any):
        return use_form_state(initial_values, **options)

    return factory


@pytest.fixture
def signup_definition() -> dict[str, Any]:
    """A form definition exercising every field family."""
    return {
        "type": "form_definition",
        "form_id": "signup",
        "version": "1.0.0",
        "description": "Newsletter signup",
        "with_ids": True,
        "initial_values": {"plan": "free"},
        "fields": [
            {"name": "email", "type": "email", "required": True, "pattern": r"[^@\s]+@[^@\s]+"},
            {"name": "bio", "type": "textarea", "max_length": 10, "validate_on_blur": True},
            {"name": "colors", "type": "checkbox", "value": "red"},
            {"name": "colors", "type": "checkbox", "value": "blue"},
            {"name": "terms", "type": "checkbox", "required": True},
            {"name": "plan", "type": "radio", "value": "free"},
            {"name": "plan", "type": "radio", "value": "pro"},
            {"name": "tags", "type": "select-multiple", "choices": ["a", "b", "c"]},
            {"name": "country", "type": "select"},
        ],
    }


@pytest.fixture
def signup_path(tmp_path: Path, signup_definition: dict[str, Any]) -> Path:
    """The signup definition written as YAML."""
    path = tmp_path / "signup.yaml"
    with open(path, "w") as f:
        yaml.safe_dump(signup_definition, f, sort_keys=False)
    return path
