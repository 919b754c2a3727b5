"""Configuration for manifest discovery.

Manifest filenames and the build output directory are configuration values
rather than literals so callers (and tests) can point discovery at fixture
names. Values come from a small JSON file; every key is optional:

    {"workspaceManifest": "dist-workspace.toml",
     "packageManifest": "dist.toml",
     "targetDir": "target"}
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import ConfigError


CONFIG_PATH_ENV_VAR = "DIST_WORKSPACE_CONFIG"

DEFAULT_WORKSPACE_MANIFEST = "dist-workspace.toml"
DEFAULT_PACKAGE_MANIFEST = "dist.toml"
DEFAULT_TARGET_DIR = "target"

_KEYS = {
    "workspaceManifest": "workspace_manifest",
    "packageManifest": "package_manifest",
    "targetDir": "target_dir_name",
}


@dataclass(slots=True, frozen=True)
class DiscoveryConfig:
    """Filenames used while searching for and assembling a workspace."""

    workspace_manifest: str = DEFAULT_WORKSPACE_MANIFEST
    package_manifest: str = DEFAULT_PACKAGE_MANIFEST
    target_dir_name: str = DEFAULT_TARGET_DIR

    def __post_init__(self) -> None:
        for field_name in _KEYS.values():
            value = getattr(self, field_name)
            if not value or not isinstance(value, str):
                raise ConfigError(f"'{field_name}' must be a non-empty string")
            if "/" in value or "\\" in value:
                raise ConfigError(f"'{field_name}' must be a bare file name, got '{value}'")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DiscoveryConfig:
        kwargs: dict[str, str] = {}
        for key, field_name in _KEYS.items():
            if key not in data:
                continue
            value = data[key]
            if not isinstance(value, str) or not value:
                raise ConfigError(f"Invalid '{key}' field (must be non-empty string)")
            kwargs[field_name] = value
        return cls(**kwargs)


def _resolve_config_path(path: Path | str | None = None) -> Path | None:
    """Resolve the configuration file path.

    Priority:
    1. Explicit path argument
    2. DIST_WORKSPACE_CONFIG environment variable
    3. None (built-in defaults)
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    return None


def load_config(path: Path | str | None = None) -> DiscoveryConfig:
    """Load discovery settings from a JSON file, or return the defaults.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path = _resolve_config_path(path)
    if config_path is None:
        return DiscoveryConfig()

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")

    return DiscoveryConfig.from_dict(data)
