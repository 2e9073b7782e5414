"""Main Typer application — imports and registers all CLI commands.

Entry point: ``monorelease`` (configured via pyproject.toml console_scripts).

Commands: release, changed, release-config, scopes, commitlint-config, lint.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from monorelease.cli.commands.changes import changed_cmd
from monorelease.cli.commands.lint import commitlint_config_cmd, lint_cmd, scopes_cmd
from monorelease.cli.commands.release import release_cmd, release_config_cmd
from monorelease.config import ReleaseSettings

app = typer.Typer(
    name="monorelease",
    help="monorelease: commit-scope linting and per-plugin releases for plugin monorepos.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="release", help="Release every plugin changed in the revision range.")(release_cmd)
app.command(name="changed", help="List the plugins changed in the revision range.")(changed_cmd)
app.command(name="release-config", help="Print the release configuration for a plugin.")(
    release_config_cmd
)
app.command(name="scopes", help="List the valid commit scopes.")(scopes_cmd)
app.command(name="commitlint-config", help="Write the commitlint configuration.")(
    commitlint_config_cmd
)
app.command(name="lint", help="Check a commit message file (commit-msg hook).")(lint_cmd)


def configure_logging(level: str) -> None:
    """Route log records through Rich on stderr at *level*."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main_callback(
    ctx: typer.Context,
    plugins_dir: Path = typer.Option(
        None,
        "--plugins-dir",
        "-d",
        help="Directory whose subdirectories are the plugins.",
    ),
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Log level (DEBUG, INFO, WARNING, ERROR).",
    ),
) -> None:
    """Load settings from the environment and apply command-line overrides."""
    overrides = {}
    if plugins_dir is not None:
        overrides["plugins_dir"] = plugins_dir
    if log_level is not None:
        overrides["log_level"] = log_level

    try:
        settings = ReleaseSettings(**overrides)
    except ValidationError as exc:
        Console(stderr=True).print(f"[bold red]Invalid configuration:[/bold red] {exc}")
        raise typer.Exit(code=1)

    configure_logging(settings.log_level)
    ctx.obj = settings


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
