"""Placeholder manifest materialization for plugins without a package.json."""

from __future__ import annotations

import logging
from pathlib import Path

from monorelease.models.manifest import DEFAULT_MANIFEST_VERSION, PluginManifest

logger = logging.getLogger(__name__)

MANIFEST_FILE = "package.json"


def ensure_manifest(plugin_dir: Path, version: str = DEFAULT_MANIFEST_VERSION) -> bool:
    """Write a placeholder manifest into *plugin_dir* unless one exists.

    Returns True when a manifest was created. An existing manifest is
    never modified.
    """
    path = plugin_dir / MANIFEST_FILE
    if path.exists():
        return False

    manifest = PluginManifest(name=plugin_dir.name, version=version)
    path.write_text(manifest.to_json(), encoding="utf-8")
    logger.info("Created placeholder manifest %s", path)
    return True
