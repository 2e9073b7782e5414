"""Release configuration and reporting models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ReleaseRule(BaseModel):
    """A commit-analyzer release rule: which commits trigger which bump."""

    model_config = ConfigDict(frozen=True)

    scope: str
    type: str | None = None
    release: str


class ReleaseReport(BaseModel):
    """Outcome of a release run.

    ``released`` holds plugins whose release command exited cleanly;
    ``skipped`` holds changed plugins whose directory no longer exists.
    """

    changed: list[str] = Field(default_factory=list)
    released: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    dry_run: bool = False
