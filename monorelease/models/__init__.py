"""Pydantic models for monorelease."""

from monorelease.models.lint import LintResult
from monorelease.models.manifest import DEFAULT_MANIFEST_VERSION, PluginManifest
from monorelease.models.release import ReleaseReport, ReleaseRule
from monorelease.models.revisions import RevisionRange, is_null_revision

__all__ = [
    "DEFAULT_MANIFEST_VERSION",
    "LintResult",
    "PluginManifest",
    "ReleaseReport",
    "ReleaseRule",
    "RevisionRange",
    "is_null_revision",
]
