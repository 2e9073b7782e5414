"""``monorelease changed`` — list the plugins changed in the revision range."""

from __future__ import annotations

import json

import typer
from rich.console import Console

from monorelease.config import ReleaseSettings
from monorelease.core.changes import GitDiffError, resolve_revision_range
from monorelease.core.releaser import PluginReleaser

console = Console()


def changed_cmd(
    ctx: typer.Context,
    prev: str = typer.Option(None, "--prev", help="Previous revision."),
    current: str = typer.Option(None, "--current", help="Current revision."),
    as_json: bool = typer.Option(False, "--json", help="Print a JSON array."),
) -> None:
    """Print the distinct plugin folders touched between two revisions."""
    settings: ReleaseSettings = ctx.obj
    revision_range = resolve_revision_range(
        prev if prev is not None else settings.previous_sha,
        current if current is not None else settings.current_sha,
    )

    try:
        plugins = PluginReleaser(settings).changed_plugins(revision_range)
    except GitDiffError as exc:
        console.print(f"[bold red]Change detection failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(plugins))
        return
    for plugin in plugins:
        typer.echo(plugin)
