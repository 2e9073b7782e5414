"""Revision range model — the pair of commits changed files are computed between."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

PREVIOUS_COMMIT = "HEAD~1"


def is_null_revision(sha: str | None) -> bool:
    """True for a missing revision or the all-zero "no prior revision" sentinel."""
    if not sha:
        return True
    return set(sha) == {"0"}


class RevisionRange(BaseModel):
    """Previous and current revision identifiers.

    CI runners report the all-zero SHA for the previous revision of a
    branch's first pipeline; both that and a missing value diff against
    the immediately preceding commit instead.

    Examples
    --------
    >>> RevisionRange(previous=None, current="abc123").as_git_args()
    ['HEAD~1', 'abc123']
    >>> str(RevisionRange(previous="0" * 40))
    'HEAD~1 HEAD'
    """

    model_config = ConfigDict(frozen=True)

    previous: str | None = None
    current: str = "HEAD"

    @property
    def is_initial(self) -> bool:
        return is_null_revision(self.previous)

    @property
    def base(self) -> str:
        return PREVIOUS_COMMIT if self.is_initial else str(self.previous)

    def as_git_args(self) -> list[str]:
        return [self.base, self.current]

    def __str__(self) -> str:
        return f"{self.base} {self.current}"
