"""dist-workspace core package.

Discovers release workspaces (``dist-workspace.toml``) and standalone
packages (``dist.toml``) and normalizes every distributable package they
declare, including members described by Cargo or npm manifests.
"""

from .config import DiscoveryConfig, load_config
from .core import get_workspace
from .members import WorkspaceMember

__all__ = [
    "DiscoveryConfig",
    "WorkspaceMember",
    "get_workspace",
    "load_config",
]
