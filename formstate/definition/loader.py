"""Loader for form definitions stored as JSON or YAML.

Definitions live either as standalone files or in a directory laid out
as::

    <definitions_path>/forms/<form_id>/<version>.(json|yaml|yml)

where the version uses dashes instead of dots (``1-0-0.yaml`` for 1.0.0).
"""

import json
import re
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from pydantic import ValidationError

from formstate.definition.models import FormDefinition

DEFAULT_SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "form_definition.schema.json"

_SUFFIXES = (".yaml", ".yml", ".json")
_VERSION_STEM = re.compile(r"\d+(-\d+)*")


class FormDefinitionNotFoundError(Exception):
    """Raised when a form definition is not found."""

    pass


class FormDefinitionValidationError(Exception):
    """Raised when a form definition fails schema or model validation."""

    pass


def read_definition_file(path: Path | str) -> dict[str, Any]:
    """Parse a JSON or YAML definition file into a dict."""
    path = Path(path)
    if not path.exists():
        raise FormDefinitionNotFoundError(f"Form definition not found: {path}")

    with open(path) as f:
        if path.suffix == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise FormDefinitionValidationError(f"Form definition must be a mapping: {path}")
    return data


class FormDefinitionLoader:
    """Loads, validates and caches form definitions."""

    def __init__(
        self,
        definitions_path: Path | str | None = None,
        schema_path: Path | str | None = DEFAULT_SCHEMA_PATH,
    ) -> None:
        """Initialize the loader.

        Args:
            definitions_path: Optional directory of versioned definitions.
            schema_path: JSON schema to validate definitions against; pass
                None to skip schema validation.
        """
        self.definitions_path = Path(definitions_path) if definitions_path else None
        self._cache: dict[Path, FormDefinition] = {}
        self._schema: dict | None = None

        if schema_path:
            with open(schema_path) as f:
                self._schema = json.load(f)

    @property
    def forms_path(self) -> Path | None:
        return self.definitions_path / "forms" if self.definitions_path else None

    def _version_to_stem(self, version: str) -> str:
        """Convert version string to a file stem (1.0.0 -> 1-0-0)."""
        return version.replace(".", "-")

    def load_file(self, path: Path | str) -> FormDefinition:
        """Load a single definition file.

        Raises:
            FormDefinitionNotFoundError: If the file doesn't exist.
            FormDefinitionValidationError: If it fails schema or model
                validation.
        """
        path = Path(path).resolve()
        if path in self._cache:
            return self._cache[path]

        data = read_definition_file(path)

        if self._schema:
            try:
                jsonschema.validate(data, self._schema)
            except jsonschema.ValidationError as e:
                raise FormDefinitionValidationError(
                    f"Form definition validation failed for {path}: {e.message}"
                ) from e

        try:
            definition = FormDefinition.model_validate(data)
        except ValidationError as e:
            raise FormDefinitionValidationError(
                f"Form definition validation failed for {path}: {e}"
            ) from e

        self._cache[path] = definition
        return definition

    def get(self, form_id: str, version: str) -> FormDefinition:
        """Get a definition by form ID and version from the directory.

        Raises:
            FormDefinitionNotFoundError: If no file exists for that version.
        """
        form_dir = self._form_dir(form_id)
        stem = self._version_to_stem(version)
        for suffix in _SUFFIXES:
            candidate = form_dir / f"{stem}{suffix}"
            if candidate.exists():
                return self.load_file(candidate)
        raise FormDefinitionNotFoundError(
            f"Form definition not found: {form_id}@{version} (looked in {form_dir})"
        )

    def list_forms(self) -> list[str]:
        """List all available form IDs."""
        if self.forms_path is None or not self.forms_path.exists():
            return []
        return sorted(d.name for d in self.forms_path.iterdir() if d.is_dir())

    def list_versions(self, form_id: str) -> list[str]:
        """List all available versions for a form, oldest first."""
        form_dir = self._form_dir(form_id)
        if not form_dir.exists():
            return []
        versions = {
            f.stem.replace("-", ".")
            for f in form_dir.iterdir()
            if f.suffix in _SUFFIXES and _VERSION_STEM.fullmatch(f.stem)
        }
        return sorted(versions, key=lambda v: tuple(int(p) for p in v.split(".")))

    def get_latest(self, form_id: str) -> FormDefinition:
        """Get the latest version of a form definition.

        Raises:
            FormDefinitionNotFoundError: If no versions exist.
        """
        versions = self.list_versions(form_id)
        if not versions:
            raise FormDefinitionNotFoundError(f"No versions found for form: {form_id}")
        return self.get(form_id, versions[-1])

    def _form_dir(self, form_id: str) -> Path:
        if self.forms_path is None:
            raise FormDefinitionNotFoundError(
                f"No definitions directory configured to look up form: {form_id}"
            )
        return self.forms_path / form_id
