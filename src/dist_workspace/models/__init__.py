"""Data models for workspace discovery."""

from __future__ import annotations

from .auto_includes import AutoIncludes
from .package import PackageRecord
from .version import Ecosystem, EcosystemCategory, PackageVersion, SemanticVersion
from .workspace import Broken, Found, Missing, WorkspaceKind, WorkspaceRecord, WorkspaceSearch

__all__ = [
    "AutoIncludes",
    "Broken",
    "Ecosystem",
    "EcosystemCategory",
    "Found",
    "Missing",
    "PackageRecord",
    "PackageVersion",
    "SemanticVersion",
    "WorkspaceKind",
    "WorkspaceRecord",
    "WorkspaceSearch",
]
