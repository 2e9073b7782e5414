"""Shared test fixtures for monorelease."""

from __future__ import annotations

import subprocess
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from monorelease.config import ReleaseSettings

_CI_ENV_VARS = (
    "CI_PREV_COMMIT_SHA",
    "CI_COMMIT_SHA",
    "DOCKER_REG_USERNAME",
    "MONORELEASE_PLUGINS_DIR",
    "MONORELEASE_LOG_LEVEL",
    "MONORELEASE_RELEASE_COMMAND",
    "MONORELEASE_DRY_RUN",
    "MONORELEASE_MANIFEST_VERSION",
)


def _is_git_diff(cmd: list[str]) -> bool:
    return bool(cmd) and cmd[0] == "git" and "diff" in cmd


class FakeRunner:
    """Stands in for ``subprocess.run``: records calls and replays canned results.

    ``git diff`` calls return *diff_output*, one path per line, NUL-separated
    the way ``git diff -z`` prints it; any other command returns the
    exit code mapped to its ``PLUGIN_NAME`` in *release_codes* (default 0).
    """

    def __init__(
        self,
        diff_output: str = "",
        *,
        diff_returncode: int = 0,
        release_codes: dict[str, int] | None = None,
    ) -> None:
        self.diff_output = diff_output
        self.diff_returncode = diff_returncode
        self.release_codes = release_codes or {}
        self.calls: list[dict[str, Any]] = []

    @property
    def release_calls(self) -> list[dict[str, Any]]:
        return [c for c in self.calls if not _is_git_diff(c["cmd"])]

    def __call__(self, cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        self.calls.append({"cmd": list(cmd), **kwargs})
        if _is_git_diff(cmd):
            stdout = "".join(f"{path}\0" for path in self.diff_output.splitlines())
            return subprocess.CompletedProcess(
                cmd, self.diff_returncode, stdout=stdout, stderr="fatal: bad revision"
            )
        plugin = (kwargs.get("env") or {}).get("PLUGIN_NAME", "")
        return subprocess.CompletedProcess(cmd, self.release_codes.get(plugin, 0))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate settings from the CI environment and any local .env file."""
    for name in _CI_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """A monorepo root with plugins ``ansible`` and ``terraform`` and a stray file."""
    plugins = tmp_path / "plugins"
    (plugins / "ansible").mkdir(parents=True)
    (plugins / "terraform").mkdir()
    (plugins / "README.md").write_text("# Plugins\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(repo: Path) -> ReleaseSettings:
    return ReleaseSettings(repo_root=repo)


@pytest.fixture
def make_runner() -> Callable[..., FakeRunner]:
    """Factory fixture: build a FakeRunner."""
    return FakeRunner
