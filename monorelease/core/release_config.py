"""Per-plugin semantic-release configuration.

Each plugin is released on its own: tags look like ``ansible-v1.0.1``, only
commits scoped to the plugin trigger a release, and the release builds and
pushes a versioned Docker image named after the plugin.

``${...}`` placeholders are left for semantic-release's template engine.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from monorelease.core.manifest import MANIFEST_FILE
from monorelease.models.release import ReleaseRule

logger = logging.getLogger(__name__)

CHANGELOG_FILE = "CHANGELOG.md"
REGISTRY_USER_TEMPLATE = "${process.env.DOCKER_REG_USERNAME}"
NEXT_VERSION = "${nextRelease.version}"


def tag_format(plugin: str) -> str:
    return f"{plugin}-v${{version}}"


def release_rules(plugin: str) -> list[ReleaseRule]:
    """Any commit scoped to *plugin* is a patch; a ``feat`` is a minor."""
    return [
        ReleaseRule(scope=plugin, release="patch"),
        ReleaseRule(scope=plugin, type="feat", release="minor"),
    ]


def image_name(plugin: str, registry_user: str | None = None) -> str:
    return f"{registry_user or REGISTRY_USER_TEMPLATE}/{plugin}:{NEXT_VERSION}"


def build_release_config(plugin: str, registry_user: str | None = None) -> dict[str, Any]:
    """Build the semantic-release configuration object for *plugin*."""
    image = image_name(plugin, registry_user)
    return {
        "extends": "semantic-release-monorepo",
        "tagFormat": tag_format(plugin),
        "plugins": [
            [
                "@semantic-release/commit-analyzer",
                {
                    "preset": "angular",
                    "releaseRules": [
                        rule.model_dump(exclude_none=True) for rule in release_rules(plugin)
                    ],
                },
            ],
            "@semantic-release/release-notes-generator",
            [
                "@semantic-release/changelog",
                {"changelogFile": CHANGELOG_FILE},
            ],
            [
                "@semantic-release/exec",
                {
                    "prepareCmd": (
                        f"npm pkg set version={NEXT_VERSION} && docker build -t {image} ."
                    ),
                    "publishCmd": f"docker push {image}",
                },
            ],
            [
                "@semantic-release/git",
                {
                    "assets": [CHANGELOG_FILE, MANIFEST_FILE],
                    "message": f"chore({plugin}): release {NEXT_VERSION} [skip ci]",
                },
            ],
        ],
    }


def write_release_config(
    plugin: str, directory: Path, registry_user: str | None = None
) -> Path:
    """Write the configuration for *plugin* into *directory* and return its path."""
    path = directory / f"release.config.{plugin}.json"
    config = build_release_config(plugin, registry_user)
    path.write_text(json.dumps(config, indent=2) + "\n", encoding="utf-8")
    logger.debug("Wrote release config for %s to %s", plugin, path)
    return path
