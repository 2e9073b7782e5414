"""``monorelease release`` — release every plugin changed in the revision range.

Detects the changed plugins, then runs the release tool once per plugin.
The first failure stops the run and the command exits with code 1.
"""

from __future__ import annotations

import json
import logging

import typer
from rich.console import Console
from rich.panel import Panel

from monorelease.config import ReleaseSettings
from monorelease.core.changes import GitDiffError
from monorelease.core.release_config import build_release_config
from monorelease.core.releaser import PluginReleaser, ReleaseError

console = Console()
logger = logging.getLogger(__name__)


def release_cmd(
    ctx: typer.Context,
    prev: str = typer.Option(
        None,
        "--prev",
        help="Previous revision (default: $CI_PREV_COMMIT_SHA, else HEAD~1).",
    ),
    current: str = typer.Option(
        None,
        "--current",
        help="Current revision (default: $CI_COMMIT_SHA, else HEAD).",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Pass --dry-run to the release tool.",
    ),
) -> None:
    """Release every plugin changed between the previous and current revision.

    - Plugins whose directory no longer exists are skipped.
    - Plugins without a package.json get a placeholder manifest.
    - The first failing release aborts the run with exit code 1.
    """
    settings: ReleaseSettings = ctx.obj
    updates = {}
    if prev is not None:
        updates["previous_sha"] = prev
    if current is not None:
        updates["current_sha"] = current
    if dry_run:
        updates["dry_run"] = True
    if updates:
        settings = settings.model_copy(update=updates)

    releaser = PluginReleaser(settings)
    revision_range = settings.revision_range
    console.print(f"[bold cyan]Detecting plugin changes in {revision_range}...[/bold cyan]")

    try:
        report = releaser.run(revision_range)
    except ReleaseError as exc:
        logger.error("%s", exc)
        console.print(f"[bold red]Release failed for {exc.plugin}:[/bold red] {exc}")
        raise typer.Exit(code=1)
    except (GitDiffError, OSError) as exc:
        logger.error("%s", exc)
        console.print(f"[bold red]Release aborted:[/bold red] {exc}")
        raise typer.Exit(code=1)

    console.print()
    console.print(
        Panel(
            "\n".join([
                "[bold green]Release run complete![/bold green]",
                "",
                f"[bold]Range:[/bold]    {revision_range}",
                f"[bold]Changed:[/bold]  {', '.join(report.changed) or '-'}",
                f"[bold]Released:[/bold] {', '.join(report.released) or '-'}",
                f"[bold]Skipped:[/bold]  {', '.join(report.skipped) or '-'}",
                *(["", "[dim]Dry run: nothing was published.[/dim]"] if report.dry_run else []),
            ]),
            title="[bold]monorelease[/bold]",
            border_style="green",
            padding=(1, 2),
        )
    )


def release_config_cmd(
    ctx: typer.Context,
    plugin: str = typer.Argument(..., help="Plugin name."),
) -> None:
    """Print the semantic-release configuration generated for PLUGIN."""
    settings: ReleaseSettings = ctx.obj
    config = build_release_config(plugin, registry_user=settings.docker_registry_username)
    typer.echo(json.dumps(config, indent=2))
