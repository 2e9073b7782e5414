"""Tests for change-set detection."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from monorelease.core.changes import (
    GitDiffError,
    changed_files,
    detect_changed_plugins,
    parse_changed_plugins,
    resolve_revision_range,
)
from monorelease.models.revisions import RevisionRange


class TestParseChangedPlugins:
    def test_distinct_plugins(self):
        output = "plugins/a/x\nplugins/b/y\nplugins/a/z\nnotplugins/c\n"
        assert parse_changed_plugins(output) == ["a", "b"]

    def test_first_seen_order(self):
        output = "plugins/b/1\nplugins/a/2\nplugins/b/3"
        assert parse_changed_plugins(output) == ["b", "a"]

    def test_accepts_list(self):
        assert parse_changed_plugins(["plugins/a/x", "src/main.py"]) == ["a"]

    def test_ignores_files_directly_under_prefix(self):
        assert parse_changed_plugins("plugins/README.md\nplugins/") == []

    def test_ignores_similar_prefix(self):
        assert parse_changed_plugins("plugins-old/a/x\nsrc/plugins/a/x") == []

    def test_blank_output(self):
        assert parse_changed_plugins("") == []
        assert parse_changed_plugins("\n\n") == []

    def test_custom_prefix(self):
        output = "packages/plugins/a/x\nplugins/b/y"
        assert parse_changed_plugins(output, prefix="packages/plugins") == ["a"]

    def test_nested_paths(self):
        assert parse_changed_plugins("plugins/a/deep/er/file.py") == ["a"]


class TestResolveRevisionRange:
    def test_explicit(self):
        rng = resolve_revision_range("abc", "def")
        assert rng.as_git_args() == ["abc", "def"]

    def test_no_previous(self):
        assert resolve_revision_range(None, "def").as_git_args() == ["HEAD~1", "def"]
        assert resolve_revision_range("", "def").as_git_args() == ["HEAD~1", "def"]

    def test_zero_sentinel(self):
        rng = resolve_revision_range("0" * 40, "def")
        assert rng.is_initial is True
        assert rng.as_git_args() == ["HEAD~1", "def"]

    def test_current_defaults_to_head(self):
        assert resolve_revision_range("abc").current == "HEAD"
        assert resolve_revision_range("abc", "").current == "HEAD"


class TestChangedFiles:
    def test_invokes_git_diff(self, make_runner):
        runner = make_runner("plugins/a/x\n\nREADME.md\n")
        files = changed_files(RevisionRange(previous="abc", current="def"), runner=runner)

        assert files == ["plugins/a/x", "README.md"]
        assert runner.calls[0]["cmd"] == [
            "git", "-c", "core.quotePath=false", "diff", "--name-only", "-z", "abc", "def",
        ]

    def test_initial_range_diffs_previous_commit(self, make_runner):
        runner = make_runner("")
        changed_files(RevisionRange(previous="0000000000", current="def"), runner=runner)
        assert runner.calls[0]["cmd"][-2:] == ["HEAD~1", "def"]

    def test_unquoted_special_paths(self, make_runner):
        runner = make_runner("plugins/caf\u00e9/notes.md\nplugins/a/with space.txt\n")
        files = changed_files(RevisionRange(previous="abc"), runner=runner)

        assert files == ["plugins/caf\u00e9/notes.md", "plugins/a/with space.txt"]
        assert parse_changed_plugins(files) == ["caf\u00e9", "a"]
        assert "-z" in runner.calls[0]["cmd"]
        assert "core.quotePath=false" in runner.calls[0]["cmd"]

    def test_splits_on_nul_not_newline(self):
        def runner(cmd, **kwargs):
            return subprocess.CompletedProcess(cmd, 0, stdout="plugins/a/line\nbreak.md\0plugins/b/x\0")

        files = changed_files(RevisionRange(previous="abc"), runner=runner)
        assert files == ["plugins/a/line\nbreak.md", "plugins/b/x"]

    def test_failure_raises(self, make_runner):
        runner = make_runner(diff_returncode=128)
        with pytest.raises(GitDiffError, match="exit code 128"):
            changed_files(RevisionRange(previous="abc"), runner=runner)

    def test_missing_git_raises(self):
        def runner(cmd, **kwargs):
            raise FileNotFoundError("git")

        with pytest.raises(GitDiffError, match="Could not run git"):
            changed_files(RevisionRange(), runner=runner)


class TestDetectChangedPlugins:
    def test_detect(self, make_runner, tmp_path: Path):
        runner = make_runner("plugins/ansible/main.yml\nplugins/terraform/x.tf\n")
        plugins = detect_changed_plugins(
            RevisionRange(previous="abc"), Path("plugins"), cwd=tmp_path, runner=runner
        )
        assert plugins == ["ansible", "terraform"]
        assert runner.calls[0]["cwd"] == tmp_path
