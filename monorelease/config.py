"""Runtime configuration — env-driven, CI-aware.

Centralized settings using pydantic-settings. Reads from a .env file,
MONORELEASE_* environment variables, and the CI-native revision and
registry variables (``CI_PREV_COMMIT_SHA``, ``CI_COMMIT_SHA``,
``DOCKER_REG_USERNAME``).
"""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from monorelease.models.revisions import RevisionRange

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ReleaseSettings(BaseSettings):
    """Release orchestration settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export CI_PREV_COMMIT_SHA=3f1c2a9
        export CI_COMMIT_SHA=8be04d1
        export MONORELEASE_LOG_LEVEL=DEBUG
        export MONORELEASE_RELEASE_COMMAND='["npx", "semantic-release"]'

    Or via .env file::

        MONORELEASE_PLUGINS_DIR=plugins
        MONORELEASE_DRY_RUN=true
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="MONORELEASE_",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    log_level: str = "INFO"

    # Layout
    plugins_dir: Path = Path("plugins")
    repo_root: Path = Path(".")

    # Revision range, as exported by the CI runner
    previous_sha: str | None = Field(
        default=None,
        validation_alias=AliasChoices("CI_PREV_COMMIT_SHA", "MONORELEASE_PREVIOUS_SHA"),
    )
    current_sha: str = Field(
        default="HEAD",
        validation_alias=AliasChoices("CI_COMMIT_SHA", "MONORELEASE_CURRENT_SHA"),
    )

    # External release tool
    release_command: list[str] = Field(
        default_factory=lambda: ["npx", "semantic-release"]
    )
    docker_registry_username: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "DOCKER_REG_USERNAME", "MONORELEASE_DOCKER_REGISTRY_USERNAME"
        ),
    )
    manifest_version: str = "0.0.0-dev"
    dry_run: bool = False

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def plugins_path(self) -> Path:
        """The plugins directory resolved against the repository root."""
        if self.plugins_dir.is_absolute():
            return self.plugins_dir
        return self.repo_root / self.plugins_dir

    @property
    def revision_range(self) -> RevisionRange:
        """The range to diff, falling back to the preceding commit."""
        return RevisionRange(previous=self.previous_sha, current=self.current_sha or "HEAD")
