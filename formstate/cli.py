"""CLI for formstate."""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from formstate import __version__
from formstate.config import GlobalConfig, get_config_path, load_global_config, save_global_config
from formstate.definition import (
    DEFAULT_SCHEMA_PATH,
    FormDefinitionLoader,
    FormDefinitionNotFoundError,
    FormDefinitionValidationError,
)
from formstate.io import read_events, write_result
from formstate.session import FormSession, ReplayError, ReplayResult

app = typer.Typer(
    name="formstate",
    help="Form-state controller: replay UI events against declarative forms.",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"formstate version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """formstate: form-state controller with per-field-type input bindings."""
    pass


@app.command()
def init(
    definitions: Annotated[
        Path | None,
        typer.Option("--definitions", "-d", help="Default directory of form definitions"),
    ] = None,
    debug: bool = typer.Option(False, "--debug", help="Enable developer warnings by default"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config"),
) -> None:
    """Create the global config file.

    Writes ~/.config/formstate/config.yaml (or $FORMSTATE_HOME/config.yaml).
    """
    config_path = get_config_path()
    if config_path.exists() and not force:
        console.print(f"[yellow]Warning:[/yellow] Config already exists at {config_path}")
        console.print("Use --force to overwrite")
        raise typer.Exit(1)

    config = GlobalConfig(
        debug=debug,
        default_definitions_path=str(definitions.resolve()) if definitions else None,
    )
    written = save_global_config(config)
    console.print(f"[green]✓[/green] Created config at {written}")


@app.command()
def validate(
    definition_path: Annotated[
        Path,
        typer.Argument(help="Path to the form definition (JSON or YAML)"),
    ],
    schema_path: Annotated[
        Path | None,
        typer.Option("--schema", "-s", help="Path to the schema file"),
    ] = None,
) -> None:
    """Validate a form definition against its schema."""
    schema_path = schema_path or DEFAULT_SCHEMA_PATH
    if not schema_path.exists():
        console.print(f"[red]Error:[/red] Schema file not found: {schema_path}")
        raise typer.Exit(1)

    loader = FormDefinitionLoader(schema_path=schema_path)
    try:
        definition = loader.load_file(definition_path)
    except FormDefinitionNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except FormDefinitionValidationError as e:
        console.print(f"[red]Invalid:[/red] {e}")
        raise typer.Exit(1)

    console.print(
        f"[green]Valid:[/green] {definition_path} "
        f"({definition.form_id}@{definition.version}, {len(definition.fields)} fields)"
    )


@app.command()
def replay(
    definition_ref: Annotated[
        str,
        typer.Argument(
            help="Definition file path, or <form_id>[@version] in the definitions directory"
        ),
    ],
    events_path: Annotated[
        Path,
        typer.Option("--events", "-e", help="Input JSONL file of event records"),
    ],
    output_path: Annotated[
        Path | None,
        typer.Option("--out", "-o", help="Write the replay result as JSON"),
    ] = None,
    definitions: Annotated[
        Path | None,
        typer.Option(
            "--definitions",
            envvar="FORMSTATE_DEFINITIONS",
            help="Directory of versioned form definitions",
        ),
    ] = None,
    debug: Annotated[
        bool | None,
        typer.Option("--debug/--no-debug", help="Force developer warnings on or off"),
    ] = None,
) -> None:
    """Replay recorded change/blur events and print the resulting form state."""
    if not events_path.exists():
        console.print(f"[red]Error:[/red] Events file not found: {events_path}")
        raise typer.Exit(1)

    if definitions is None:
        configured = load_global_config().default_definitions_path
        if configured:
            definitions = Path(configured)

    loader = FormDefinitionLoader(definitions)
    try:
        definition_file = Path(definition_ref)
        if definition_file.exists():
            definition = loader.load_file(definition_file)
        else:
            form_id, _, version = definition_ref.partition("@")
            definition = (
                loader.get(form_id, version) if version else loader.get_latest(form_id)
            )
    except (FormDefinitionNotFoundError, FormDefinitionValidationError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[bold]formstate[/bold] v{__version__}")
    console.print(f"  Form: {definition.form_id}@{definition.version}")
    console.print(f"  Events: {events_path}")

    session = FormSession(definition, debug=debug)
    try:
        result = session.replay(read_events(events_path))
    except (ReplayError, ValueError) as e:
        console.print(f"\n[red]Error replaying events:[/red] {e}")
        raise typer.Exit(1)

    _print_result(result)

    if output_path:
        write_result(output_path, result)
        console.print(f"\n  Result written: {output_path}")

    if not result.valid:
        raise typer.Exit(2)


def _print_result(result: ReplayResult) -> None:
    table = Table(title=f"{result.form_id}@{result.version}")
    table.add_column("Field")
    table.add_column("Value")
    table.add_column("Touched")
    table.add_column("Valid")
    table.add_column("Error")

    for field in result.diagnostics.fields:
        if field.valid is None:
            valid = "[dim]-[/dim]"
        else:
            valid = "[green]yes[/green]" if field.valid else "[red]no[/red]"
        table.add_row(
            field.name,
            escape(json.dumps(field.value, ensure_ascii=False, default=str)),
            "yes" if field.touched else "no",
            valid,
            "" if field.error is None else escape(str(field.error)),
        )
    console.print(table)

    console.print("\n[bold]Summary:[/bold]")
    console.print(f"  Events applied: {result.events_applied}")
    console.print(f"  Status: {result.diagnostics.status.value}")
    for warning in result.diagnostics.warnings:
        console.print(f"  [yellow]Warning:[/yellow] {warning.message}")
    for error in result.diagnostics.errors:
        console.print(f"  [red]Invalid:[/red] {error.message}")


if __name__ == "__main__":
    app()
