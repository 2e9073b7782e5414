"""monorelease: commit-scope linting and per-plugin release orchestration.

Keeps a plugin monorepo's commit scopes in sync with its plugin folders and
releases every changed plugin independently through semantic-release:
  - Scope allow-list derived from the plugin directory layout
  - commitlint configuration plus a local commit-msg check
  - Changed-plugin detection over a CI revision range
  - Per-plugin tag, changelog, version and Docker image configuration
"""

__version__ = "0.1.0"
__description__ = (
    "Commit-scope linting and per-plugin release orchestration for plugin monorepos"
)

from monorelease.config import ReleaseSettings
from monorelease.core.releaser import PluginReleaser, ReleaseError
from monorelease.cli.app import app as cli

__all__ = ["PluginReleaser", "ReleaseError", "ReleaseSettings", "cli", "__version__"]
