"""Global configuration for formstate.

Settings live in ``$FORMSTATE_HOME/config.yaml`` (default
``~/.config/formstate``). Environment variables take precedence over
the file.
"""

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

from formstate.constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

_TRUTHY = {"1", "true", "yes", "on"}


class GlobalConfig(BaseModel):
    """Contents of ``config.yaml``."""

    debug: bool = False
    default_definitions_path: str | None = None


def get_formstate_home() -> Path:
    """Directory holding the global config."""
    env_home = os.environ.get("FORMSTATE_HOME")
    if env_home:
        return Path(env_home)
    return Path.home() / ".config" / "formstate"


def get_config_path() -> Path:
    return get_formstate_home() / "config.yaml"


def load_global_config() -> GlobalConfig:
    """Load ``config.yaml``, falling back to defaults when absent or empty."""
    config_path = get_config_path()
    if not config_path.exists():
        return GlobalConfig()

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    return GlobalConfig.model_validate(data)


def save_global_config(config: GlobalConfig) -> Path:
    """Write ``config`` to ``config.yaml`` and return its path."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        yaml.dump(config.model_dump(), f, sort_keys=False)
    return config_path


def is_debug_enabled() -> bool:
    """Whether developer warnings should be emitted.

    ``FORMSTATE_DEBUG`` wins when set; otherwise the ``debug`` key of the
    global config decides. An unreadable config file counts as debug off.
    """
    env_debug = os.environ.get("FORMSTATE_DEBUG")
    if env_debug is not None:
        return env_debug.strip().lower() in _TRUTHY
    try:
        return load_global_config().debug
    except (yaml.YAMLError, ValidationError) as e:
        logger.warning("Ignoring unreadable config %s: %s", get_config_path(), e)
        return False
