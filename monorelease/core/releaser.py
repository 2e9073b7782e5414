"""Per-plugin release invoker — the central coordinator of a release run.

For every changed plugin, in order:

1. skip it when its directory no longer exists;
2. materialize a placeholder manifest when the plugin has none;
3. render the plugin's semantic-release configuration;
4. run the release command in the plugin directory with ``PLUGIN_NAME``
   set in its environment.

Releases are strictly sequential and fail fast: the first failing plugin
raises ``ReleaseError`` and the remaining plugins are not attempted.
"""

from __future__ import annotations

import logging
import os
import subprocess
import tempfile
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from monorelease.config import ReleaseSettings
from monorelease.core.changes import GitDiffError, detect_changed_plugins
from monorelease.core.manifest import ensure_manifest
from monorelease.core.release_config import write_release_config
from monorelease.models.release import ReleaseReport
from monorelease.models.revisions import RevisionRange

logger = logging.getLogger(__name__)

PLUGIN_NAME_ENV = "PLUGIN_NAME"

Runner = Callable[..., "subprocess.CompletedProcess[Any]"]


class ReleaseError(RuntimeError):
    """Raised when the release command fails for a plugin."""

    def __init__(self, plugin: str, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.plugin = plugin
        self.returncode = returncode


class PluginReleaser:
    """Releases changed plugins one at a time through the external release tool.

    Parameters
    ----------
    settings:
        Release settings. Loaded from the environment if not provided.
    runner:
        Callable with the ``subprocess.run`` signature, used for both the
        git diff and the release command.
    """

    def __init__(
        self,
        settings: ReleaseSettings | None = None,
        *,
        runner: Runner = subprocess.run,
    ) -> None:
        self.settings = settings or ReleaseSettings()
        self._runner = runner

    @property
    def plugins_path(self) -> Path:
        return self.settings.plugins_path

    # ------------------------------------------------------------------
    # Detection
    # ------------------------------------------------------------------

    def plugins_prefix(self) -> str:
        """The plugins directory as git reports it: relative to the repo root.

        Raises ``GitDiffError`` when the plugins directory lies outside the
        repository, since no diff path could ever match it.
        """
        root = self.settings.repo_root.resolve()
        plugins = self.plugins_path.resolve()
        try:
            return plugins.relative_to(root).as_posix()
        except ValueError as exc:
            raise GitDiffError(
                f"Plugins directory {plugins} is outside the repository {root}"
            ) from exc

    def changed_plugins(self, revision_range: RevisionRange | None = None) -> list[str]:
        """Return the plugins changed in *revision_range* (default: from settings)."""
        return detect_changed_plugins(
            revision_range or self.settings.revision_range,
            plugins_dir=Path(self.plugins_prefix()),
            cwd=self.settings.repo_root,
            runner=self._runner,
        )

    # ------------------------------------------------------------------
    # Release
    # ------------------------------------------------------------------

    def build_command(self, config_path: Path) -> list[str]:
        cmd = [*self.settings.release_command, "--extends", str(config_path)]
        if self.settings.dry_run:
            cmd.append("--dry-run")
        return cmd

    def release_plugin(self, plugin: str, config_dir: Path) -> bool:
        """Release one plugin. Returns False when its directory is gone."""
        plugin_dir = self.plugins_path / plugin
        if not plugin_dir.is_dir():
            logger.warning("Skipping %s: %s is not a directory", plugin, plugin_dir)
            return False

        logger.info("Releasing plugin: %s", plugin)
        ensure_manifest(plugin_dir, version=self.settings.manifest_version)

        config_path = write_release_config(
            plugin, config_dir, registry_user=self.settings.docker_registry_username
        )
        cmd = self.build_command(config_path.resolve())
        env = {**os.environ, PLUGIN_NAME_ENV: plugin}
        logger.debug("Running %s in %s", " ".join(cmd), plugin_dir)

        try:
            result = self._runner(cmd, cwd=plugin_dir, env=env)
        except OSError as exc:
            raise ReleaseError(plugin, f"Could not run release for {plugin}: {exc}") from exc

        if result.returncode != 0:
            raise ReleaseError(
                plugin,
                f"Release of {plugin} failed with exit code {result.returncode}",
                returncode=result.returncode,
            )
        return True

    def release_all(self, plugins: Iterable[str]) -> ReleaseReport:
        """Release *plugins* in order; the first failure aborts the rest."""
        report = ReleaseReport(changed=list(plugins), dry_run=self.settings.dry_run)
        with tempfile.TemporaryDirectory(prefix="monorelease-") as tmp:
            config_dir = Path(tmp)
            for plugin in report.changed:
                if self.release_plugin(plugin, config_dir):
                    report.released.append(plugin)
                else:
                    report.skipped.append(plugin)
        return report

    def run(self, revision_range: RevisionRange | None = None) -> ReleaseReport:
        """Detect the changed plugins and release each of them."""
        plugins = self.changed_plugins(revision_range)
        if not plugins:
            logger.info("No plugin changes detected; nothing to release")
        return self.release_all(plugins)
