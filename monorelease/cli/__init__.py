"""monorelease CLI — Typer-based command-line interface.

Provides the ``monorelease`` command with subcommands for releasing changed
plugins, inspecting the change set and scope allow-list, and generating
commit-linting and release configuration.

All output uses Rich for formatted terminal display.
"""
