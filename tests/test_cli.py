"""Tests for the formstate command line."""

import json
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from formstate import __version__
from formstate.cli import app
from formstate.config import GlobalConfig, load_global_config, save_global_config
from formstate.io import write_events

runner = CliRunner()

VALID_EVENTS = [
    {"field": "email", "target": {"value": "ada@example.com"}},
    {"field": "colors", "value": "red", "target": {"checked": True}},
    {"field": "email", "event": "blur"},
]


@pytest.fixture
def events_path(tmp_path: Path) -> Path:
    path = tmp_path / "events.jsonl"
    write_events(path, VALID_EVENTS)
    return path


@pytest.fixture
def definitions_dir(tmp_path: Path, signup_definition: dict) -> Path:
    form_dir = tmp_path / "definitions" / "forms" / "signup"
    form_dir.mkdir(parents=True)
    for version in ("1.0.0", "1.1.0"):
        with open(form_dir / f"{version.replace('.', '-')}.yaml", "w") as f:
            yaml.safe_dump({**signup_definition, "version": version}, f)
    return tmp_path / "definitions"


class TestVersion:
    """Tests for --version."""

    def test_version(self) -> None:
        """Test the version is printed."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"formstate version {__version__}" in result.output


class TestInit:
    """Tests for the init command."""

    def test_creates_config(self, tmp_path: Path) -> None:
        """Test init writes the global config."""
        result = runner.invoke(app, ["init", "--debug", "--definitions", str(tmp_path)])
        assert result.exit_code == 0
        config = load_global_config()
        assert config.debug is True
        assert config.default_definitions_path == str(tmp_path.resolve())

    def test_refuses_to_overwrite(self) -> None:
        """Test an existing config needs --force."""
        assert runner.invoke(app, ["init"]).exit_code == 0
        result = runner.invoke(app, ["init", "--debug"])
        assert result.exit_code == 1
        assert "--force" in result.output
        assert load_global_config().debug is False

        assert runner.invoke(app, ["init", "--debug", "--force"]).exit_code == 0
        assert load_global_config().debug is True


class TestValidate:
    """Tests for the validate command."""

    def test_valid(self, signup_path: Path) -> None:
        """Test a valid definition passes."""
        result = runner.invoke(app, ["validate", str(signup_path)])
        assert result.exit_code == 0
        assert "Valid" in result.output

    def test_invalid(self, tmp_path: Path, signup_definition: dict) -> None:
        """Test schema failures exit 1."""
        signup_definition["fields"][0]["type"] = "file"
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(signup_definition))
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "Invalid" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing definition exits 1."""
        result = runner.invoke(app, ["validate", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1

    def test_missing_schema(self, signup_path: Path, tmp_path: Path) -> None:
        """Test a missing schema exits 1."""
        result = runner.invoke(
            app, ["validate", str(signup_path), "--schema", str(tmp_path / "none.json")]
        )
        assert result.exit_code == 1
        assert "Schema file not found" in result.output


class TestReplay:
    """Tests for the replay command."""

    def test_replay_file(self, signup_path: Path, events_path: Path, tmp_path: Path) -> None:
        """Test replaying events and writing the result."""
        out = tmp_path / "result.json"
        result = runner.invoke(
            app,
            ["replay", str(signup_path), "--events", str(events_path), "--out", str(out)],
        )
        assert result.exit_code == 0, result.output
        assert "signup@1.0.0" in result.output
        assert "Events applied: 3" in result.output

        written = json.loads(out.read_text())
        assert written["state"]["values"]["email"] == "ada@example.com"
        assert written["state"]["values"]["colors"] == ["red"]
        assert written["diagnostics"]["status"] == "clean"

    def test_invalid_state_exits_2(self, signup_path: Path, tmp_path: Path) -> None:
        """Test invalid fields give exit code 2."""
        events = tmp_path / "bad.jsonl"
        write_events(events, [{"field": "email", "target": {"value": "nope"}}])
        result = runner.invoke(app, ["replay", str(signup_path), "--events", str(events)])
        assert result.exit_code == 2
        assert "Status: invalid" in result.output

    def test_unknown_field_exits_1(self, signup_path: Path, tmp_path: Path) -> None:
        """Test a bad record is reported."""
        events = tmp_path / "bad.jsonl"
        write_events(events, [{"field": "nope"}])
        result = runner.invoke(app, ["replay", str(signup_path), "--events", str(events)])
        assert result.exit_code == 1
        assert "Error replaying events" in result.output

    def test_bad_json_exits_1(self, signup_path: Path, tmp_path: Path) -> None:
        """Test unreadable event files are reported."""
        events = tmp_path / "bad.jsonl"
        events.write_text("{oops\n")
        result = runner.invoke(app, ["replay", str(signup_path), "--events", str(events)])
        assert result.exit_code == 1

    def test_missing_events(self, signup_path: Path, tmp_path: Path) -> None:
        """Test a missing events file exits 1."""
        result = runner.invoke(
            app, ["replay", str(signup_path), "--events", str(tmp_path / "none.jsonl")]
        )
        assert result.exit_code == 1
        assert "Events file not found" in result.output

    def test_form_id_lookup(self, definitions_dir: Path, events_path: Path) -> None:
        """Test form ids resolve in the definitions directory."""
        result = runner.invoke(
            app,
            [
                "replay",
                "signup@1.0.0",
                "--events",
                str(events_path),
                "--definitions",
                str(definitions_dir),
            ],
        )
        assert result.exit_code == 0, result.output
        assert "signup@1.0.0" in result.output

    def test_latest_from_env(self, definitions_dir: Path, events_path: Path) -> None:
        """Test FORMSTATE_DEFINITIONS and latest-version lookup."""
        result = runner.invoke(
            app,
            ["replay", "signup", "--events", str(events_path)],
            env={"FORMSTATE_DEFINITIONS": str(definitions_dir)},
        )
        assert result.exit_code == 0, result.output
        assert "signup@1.1.0" in result.output

    def test_definitions_from_config(self, definitions_dir: Path, events_path: Path) -> None:
        """Test the configured default directory is used."""
        save_global_config(GlobalConfig(default_definitions_path=str(definitions_dir)))
        result = runner.invoke(app, ["replay", "signup", "--events", str(events_path)])
        assert result.exit_code == 0, result.output

    def test_unknown_form(self, definitions_dir: Path, events_path: Path) -> None:
        """Test an unknown form id exits 1."""
        result = runner.invoke(
            app,
            [
                "replay",
                "contact",
                "--events",
                str(events_path),
                "--definitions",
                str(definitions_dir),
            ],
        )
        assert result.exit_code == 1

    def test_debug_warnings(self, signup_path: Path, tmp_path: Path) -> None:
        """Test --debug surfaces missing-validator warnings."""
        events = tmp_path / "events.jsonl"
        write_events(events, [{"field": "country", "input": "NZ"}])
        result = runner.invoke(
            app, ["replay", str(signup_path), "--events", str(events), "--debug"]
        )
        assert result.exit_code == 0, result.output
        assert "Status: warnings" in result.output
