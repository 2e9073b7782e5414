"""Commit-message lint result model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LintResult(BaseModel):
    """Result of checking one commit message against the commit rules."""

    model_config = ConfigDict(frozen=True)

    header: str
    valid: bool
    ignored: bool = False
    errors: list[str] = Field(default_factory=list)
