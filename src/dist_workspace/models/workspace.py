"""Workspace record and the outcome of a workspace search."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TypeAlias

from ..errors import WorkspaceBrokenError, WorkspaceMissingError
from .auto_includes import AutoIncludes
from .package import PackageRecord


class WorkspaceKind(Enum):
    GENERIC = "generic"
    CARGO = "cargo"
    NPM = "npm"


@dataclass(frozen=True)
class WorkspaceRecord:
    """Every distributable package found under one workspace manifest.

    ``packages`` keeps manifest declaration order. Nested workspaces resolved
    by a compiled-ecosystem resolver are kept as search outcomes in
    ``sub_workspaces`` and are not flattened into ``packages``.
    """

    kind: WorkspaceKind
    workspace_dir: Path
    manifest_path: Path
    target_dir: Path
    packages: tuple[PackageRecord, ...] = ()
    sub_workspaces: tuple[WorkspaceSearch, ...] = ()
    root_auto_includes: AutoIncludes = AutoIncludes()
    warnings: tuple[str, ...] = ()

    def package_names(self) -> list[str]:
        return [package.name for package in self.packages]


@dataclass(frozen=True)
class Found:
    workspace: WorkspaceRecord

    def into_result(self) -> WorkspaceRecord:
        return self.workspace


@dataclass(frozen=True)
class Broken:
    """A manifest exists at ``manifest_path`` but could not be processed."""

    manifest_path: Path
    cause: Exception

    def into_result(self) -> WorkspaceRecord:
        raise WorkspaceBrokenError(self.manifest_path, self.cause) from self.cause


@dataclass(frozen=True)
class Missing:
    """No manifest was found on the search path."""

    cause: Exception

    def into_result(self) -> WorkspaceRecord:
        raise WorkspaceMissingError(self.cause) from self.cause


WorkspaceSearch: TypeAlias = Found | Broken | Missing
