"""commitlint configuration and the matching local commit-message check.

The rendered configuration extends ``@commitlint/config-conventional`` and
restricts the commit scope to plugin folder names:

- ``scope-enum`` at error level: the scope must name a plugin folder.
- ``scope-empty`` disabled: commits without a scope are accepted.

JSON configuration cannot carry commitlint's ``ignores`` predicates, so the
"Initial plan" ignore lives in :func:`lint_message`, which applies the same
rules locally (for example from a ``commit-msg`` git hook).
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from monorelease.core.scopes import is_valid_scope
from monorelease.models.lint import LintResult

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = ".commitlintrc.json"

# commitlint rule severities
RULE_DISABLED = 0
RULE_ERROR = 2

# Types accepted by @commitlint/config-conventional
CONVENTIONAL_TYPES: tuple[str, ...] = (
    "build",
    "chore",
    "ci",
    "docs",
    "feat",
    "fix",
    "perf",
    "refactor",
    "revert",
    "style",
    "test",
)

HEADER_MAX_LENGTH = 100

# The initial planning commit predates commit validation.
IGNORED_MARKERS: tuple[str, ...] = ("Initial plan",)
IGNORED_PREFIXES: tuple[str, ...] = ("Merge ", "Revert ", "fixup!", "squash!", "amend!")

_HEADER_PATTERN = re.compile(
    r"^(?P<type>[A-Za-z]+)(?:\((?P<scope>[^)]*)\))?(?P<breaking>!)?:\s*(?P<subject>.*)$"
)

# commitlint splits multi-scope headers like "feat(a,b)" or "feat(a/b)"
_SCOPE_DELIMITERS = re.compile(r"[,/\\]")


def build_commitlint_config(scopes: Iterable[str]) -> dict[str, Any]:
    """Render the commitlint configuration for the given scope allow-list."""
    return {
        "extends": ["@commitlint/config-conventional"],
        "rules": {
            "scope-enum": [RULE_ERROR, "always", list(scopes)],
            "scope-empty": [RULE_DISABLED, "never"],
        },
    }


def write_commitlint_config(path: Path, scopes: Iterable[str]) -> Path:
    """Write the commitlint configuration to *path* as JSON."""
    config = build_commitlint_config(scopes)
    path.write_text(json.dumps(config, indent=2) + "\n", encoding="utf-8")
    logger.info(
        "Wrote commitlint config to %s (%d scopes)",
        path,
        len(config["rules"]["scope-enum"][2]),
    )
    return path


def split_scopes(scope: str) -> list[str]:
    return [part.strip() for part in _SCOPE_DELIMITERS.split(scope) if part.strip()]


def is_ignored(message: str) -> bool:
    header = _header_of(message)
    if any(marker in message for marker in IGNORED_MARKERS):
        return True
    return header.startswith(IGNORED_PREFIXES)


def lint_message(message: str, scopes: Iterable[str]) -> LintResult:
    """Check a commit message against the configured commit rules.

    Only the header (first non-comment line) is checked. A present scope
    must be in *scopes*; an absent scope is always accepted.
    """
    header = _header_of(message)
    if is_ignored(message):
        return LintResult(header=header, valid=True, ignored=True)

    errors: list[str] = []
    match = _HEADER_PATTERN.match(header)
    if match is None:
        errors.append("header must match 'type(scope): subject'")
        return LintResult(header=header, valid=False, errors=errors)

    commit_type = match.group("type")
    scope = match.group("scope")
    subject = match.group("subject").strip()

    if commit_type not in CONVENTIONAL_TYPES:
        errors.append(
            f"type '{commit_type}' must be one of [{', '.join(CONVENTIONAL_TYPES)}]"
        )
    if not subject:
        errors.append("subject may not be empty")
    if len(header) > HEADER_MAX_LENGTH:
        errors.append(f"header must not be longer than {HEADER_MAX_LENGTH} characters")
    if scope:
        allowed = list(scopes)
        for part in split_scopes(scope):
            if not is_valid_scope(part, allowed):
                errors.append(f"scope '{part}' must be one of [{', '.join(allowed)}]")

    return LintResult(header=header, valid=not errors, errors=errors)


def _header_of(message: str) -> str:
    for line in message.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            return stripped
    return ""
