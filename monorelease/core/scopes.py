"""Commit-scope allow-list derived from the plugin directory layout.

Every immediate subdirectory of the plugins directory is a valid commit
scope. Plain files next to the plugin folders are not.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


def discover_scopes(plugins_dir: Path) -> list[str]:
    """Return the sorted names of the immediate subdirectories of *plugins_dir*.

    A missing plugins directory yields an empty allow-list.
    """
    if not plugins_dir.is_dir():
        logger.debug("Plugins directory %s not found; no scopes", plugins_dir)
        return []
    return sorted(entry.name for entry in plugins_dir.iterdir() if entry.is_dir())


def is_valid_scope(scope: str, scopes: Iterable[str]) -> bool:
    return scope in set(scopes)
