"""Placeholder plugin manifest model."""

from __future__ import annotations

import json

from pydantic import BaseModel, ConfigDict

DEFAULT_MANIFEST_VERSION = "0.0.0-dev"


class PluginManifest(BaseModel):
    """Minimal ``package.json`` the release tool needs to version a plugin.

    The name always equals the plugin directory name. The version is a
    placeholder; the release tool overwrites it on the first release.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    version: str = DEFAULT_MANIFEST_VERSION
    private: bool = True

    def to_json(self) -> str:
        return json.dumps(self.model_dump(), indent=2)
