"""Tests for global configuration."""

import logging
from pathlib import Path

import pytest

from formstate import use_form_state
from formstate.config import (
    GlobalConfig,
    get_config_path,
    is_debug_enabled,
    load_global_config,
    save_global_config,
)


class TestGlobalConfig:
    """Tests for loading and saving config.yaml."""

    def test_path_follows_home(self, isolated_config: Path) -> None:
        """Test FORMSTATE_HOME relocates the config."""
        assert get_config_path() == isolated_config / "config.yaml"

    def test_defaults_when_absent(self) -> None:
        """Test a missing file gives defaults."""
        config = load_global_config()
        assert config.debug is False
        assert config.default_definitions_path is None

    def test_empty_file(self, isolated_config: Path) -> None:
        """Test an empty file gives defaults."""
        isolated_config.mkdir(parents=True)
        (isolated_config / "config.yaml").write_text("")
        assert load_global_config() == GlobalConfig()

    def test_save_and_load(self) -> None:
        """Test saved settings load back."""
        path = save_global_config(GlobalConfig(debug=True, default_definitions_path="/defs"))
        assert path.exists()
        assert load_global_config() == GlobalConfig(debug=True, default_definitions_path="/defs")


class TestDebugFlag:
    """Tests for resolving the debug flag."""

    def test_off_by_default(self) -> None:
        """Test debug is off without env or config."""
        assert is_debug_enabled() is False

    @pytest.mark.parametrize("value", ["1", "true", "YES", " on "])
    def test_truthy_env(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        """Test truthy environment values enable debug."""
        monkeypatch.setenv("FORMSTATE_DEBUG", value)
        assert is_debug_enabled() is True

    def test_env_overrides_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the environment wins over the file."""
        save_global_config(GlobalConfig(debug=True))
        monkeypatch.setenv("FORMSTATE_DEBUG", "0")
        assert is_debug_enabled() is False

    def test_config_enables_debug(self) -> None:
        """Test the file enables debug for new forms."""
        save_global_config(GlobalConfig(debug=True))
        state, inputs = use_form_state()
        assert inputs.engine.options.debug is True

    @pytest.mark.parametrize("content", ["debug: [1, 2]\n", "debug: [unclosed\n", "- a\n"])
    def test_unreadable_config_means_off(
        self, isolated_config: Path, caplog: pytest.LogCaptureFixture, content: str
    ) -> None:
        """Test a broken config file does not break new forms."""
        isolated_config.mkdir(parents=True)
        (isolated_config / "config.yaml").write_text(content)
        with caplog.at_level(logging.WARNING, logger="formstate"):
            state, inputs = use_form_state()
        assert inputs.engine.options.debug is False
        assert any("Ignoring unreadable config" in r.getMessage() for r in caplog.records)

    def test_explicit_option_wins(self) -> None:
        """Test a form's debug option overrides the global setting."""
        save_global_config(GlobalConfig(debug=True))
        state, inputs = use_form_state(debug=False)
        assert inputs.engine.options.debug is False
