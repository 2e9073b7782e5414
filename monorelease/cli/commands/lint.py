"""Commit-scope commands: ``scopes``, ``commitlint-config`` and ``lint``.

``lint`` is meant for a ``commit-msg`` git hook::

    monorelease lint "$1"
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console

from monorelease.config import ReleaseSettings
from monorelease.core.commitlint import (
    DEFAULT_CONFIG_FILE,
    build_commitlint_config,
    lint_message,
    write_commitlint_config,
)
from monorelease.core.scopes import discover_scopes

console = Console()
err_console = Console(stderr=True)


def scopes_cmd(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print a JSON array."),
) -> None:
    """Print the valid commit scopes (the plugin folder names)."""
    settings: ReleaseSettings = ctx.obj
    scopes = discover_scopes(settings.plugins_path)
    if as_json:
        typer.echo(json.dumps(scopes))
        return
    for scope in scopes:
        typer.echo(scope)


def commitlint_config_cmd(
    ctx: typer.Context,
    output: str = typer.Option(
        DEFAULT_CONFIG_FILE,
        "--output",
        "-o",
        help="Where to write the config ('-' for stdout).",
    ),
) -> None:
    """Write the commitlint configuration restricting scopes to plugin names."""
    settings: ReleaseSettings = ctx.obj
    scopes = discover_scopes(settings.plugins_path)
    if output == "-":
        typer.echo(json.dumps(build_commitlint_config(scopes), indent=2))
        return

    path = write_commitlint_config(Path(output), scopes)
    console.print(f"[green]Wrote[/green] {path} [dim]({len(scopes)} scopes)[/dim]")


def lint_cmd(
    ctx: typer.Context,
    message_file: Path = typer.Argument(..., help="File holding the commit message."),
) -> None:
    """Check a commit message against the commit rules; exit 1 when invalid."""
    settings: ReleaseSettings = ctx.obj
    try:
        message = message_file.read_text(encoding="utf-8")
    except OSError as exc:
        err_console.print(f"[bold red]Cannot read commit message:[/bold red] {exc}")
        raise typer.Exit(code=1)

    result = lint_message(message, discover_scopes(settings.plugins_path))
    if result.valid:
        return

    err_console.print(f"[bold red]Invalid commit message:[/bold red] {result.header}")
    for error in result.errors:
        err_console.print(f"  [red]- {error}[/red]")
    err_console.print(
        "\n[dim]Example: 'feat(ansible): add inventory plugin'[/dim]"
    )
    raise typer.Exit(code=1)
