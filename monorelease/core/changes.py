"""Change-set detection — which plugins changed between two revisions.

Runs ``git diff --name-only`` over the revision range and reduces the file
list to the distinct plugin directories it touches, in first-seen order.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from pathlib import Path
from typing import Any

from monorelease.models.revisions import RevisionRange

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "plugins"

Runner = Callable[..., "subprocess.CompletedProcess[Any]"]


class GitDiffError(RuntimeError):
    """Raised when the changed-file list cannot be computed."""


def resolve_revision_range(previous: str | None, current: str | None = None) -> RevisionRange:
    """Build the range to diff; a missing current revision means ``HEAD``."""
    return RevisionRange(previous=previous or None, current=current or "HEAD")


def changed_files(
    revision_range: RevisionRange,
    cwd: Path | None = None,
    *,
    runner: Runner = subprocess.run,
) -> list[str]:
    """Return the paths changed in *revision_range*, relative to the repo root."""
    cmd = [
        "git", "-c", "core.quotePath=false",
        "diff", "--name-only", "-z", *revision_range.as_git_args(),
    ]
    logger.debug("Running %s", " ".join(cmd))
    try:
        result = runner(cmd, cwd=cwd, capture_output=True, text=True)
    except OSError as exc:
        raise GitDiffError(f"Could not run git: {exc}") from exc

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        raise GitDiffError(
            f"git diff {revision_range} failed with exit code {result.returncode}: {stderr}"
        )
    # -z: NUL-separated, never quoted
    return [path for path in result.stdout.split("\0") if path.strip()]


def parse_changed_plugins(diff_output: str | list[str], prefix: str = DEFAULT_PREFIX) -> list[str]:
    """Extract the distinct plugin names from a ``--name-only`` file list.

    A path counts when it lies inside a plugin folder, i.e. it has the form
    ``<prefix>/<plugin>/...``. Paths outside the prefix and files directly
    under it are ignored.

    Examples
    --------
    >>> parse_changed_plugins("plugins/a/x\\nplugins/b/y\\nplugins/a/z\\nnotplugins/c")
    ['a', 'b']
    """
    lines = diff_output.splitlines() if isinstance(diff_output, str) else diff_output
    root = prefix.strip("/") + "/"

    plugins: dict[str, None] = {}
    for line in lines:
        path = line.strip()
        if not path.startswith(root):
            continue
        name, sep, _ = path[len(root):].partition("/")
        if name and sep:
            plugins.setdefault(name, None)
    return list(plugins)


def detect_changed_plugins(
    revision_range: RevisionRange,
    plugins_dir: Path = Path(DEFAULT_PREFIX),
    cwd: Path | None = None,
    *,
    runner: Runner = subprocess.run,
) -> list[str]:
    """Diff *revision_range* and return the plugins it touches."""
    files = changed_files(revision_range, cwd=cwd, runner=runner)
    plugins = parse_changed_plugins(files, prefix=plugins_dir.as_posix())
    logger.info(
        "%d file(s) changed in %s; plugins: %s",
        len(files),
        revision_range,
        ", ".join(plugins) or "none",
    )
    return plugins
