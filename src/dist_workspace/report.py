"""JSON-friendly rendering of workspace search outcomes."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from .errors import ManifestError
from .models import Broken, Found, PackageRecord, WorkspaceRecord, WorkspaceSearch


def _cause_to_dict(cause: Exception) -> dict[str, Any]:
    data: dict[str, Any] = {"type": type(cause).__name__, "message": str(cause)}
    if isinstance(cause, ManifestError):
        data["location"] = {
            "path": str(cause.source_path),
            "line": cause.line,
            "column": cause.column,
        }
    return data


def workspace_to_dict(workspace: WorkspaceRecord) -> dict[str, Any]:
    return {
        "kind": workspace.kind.value,
        "workspaceDir": str(workspace.workspace_dir),
        "manifestPath": str(workspace.manifest_path),
        "targetDir": str(workspace.target_dir),
        "packages": [package.to_dict() for package in workspace.packages],
        "subWorkspaces": [search_to_dict(sub) for sub in workspace.sub_workspaces],
        "rootAutoIncludes": workspace.root_auto_includes.to_dict(),
        "warnings": list(workspace.warnings),
    }


def search_to_dict(search: WorkspaceSearch) -> dict[str, Any]:
    """Render a search outcome, including nested workspaces, as a dict."""
    if isinstance(search, Found):
        return {"status": "found", "workspace": workspace_to_dict(search.workspace)}
    if isinstance(search, Broken):
        return {
            "status": "broken",
            "manifestPath": str(search.manifest_path),
            "cause": _cause_to_dict(search.cause),
        }
    return {"status": "missing", "cause": _cause_to_dict(search.cause)}


def iter_packages(search: WorkspaceSearch) -> Iterator[PackageRecord]:
    """Yield every package of a found workspace, then of its found sub-workspaces.

    Nested workspaces are never merged into the record itself; callers that
    want one flat list use this.
    """
    if not isinstance(search, Found):
        return
    yield from search.workspace.packages
    for sub in search.workspace.sub_workspaces:
        yield from iter_packages(sub)
