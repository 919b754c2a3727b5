"""Human-readable Markdown summary of a workspace search."""

from __future__ import annotations

from .models import Broken, Found, WorkspaceSearch


def _lines_for(search: WorkspaceSearch, label: str) -> list[str]:
    if isinstance(search, Broken):
        return [f"| {label} | (broken: {search.cause}) | n/a | n/a | n/a |"]
    if not isinstance(search, Found):
        return [f"| {label} | (missing) | n/a | n/a | n/a |"]

    workspace = search.workspace
    lines: list[str] = []
    for package in workspace.packages:
        version = str(package.version) if package.version else "n/a"
        command = " ".join(package.build_command) if package.build_command else "n/a"
        publish = "yes" if package.publish else "no"
        lines.append(f"| {label} | {package.name} | {version} | {command} | {publish} |")
    for sub in workspace.sub_workspaces:
        sub_label = f"{label} > {_label(sub)}"
        lines.extend(_lines_for(sub, sub_label))
    return lines


def _label(search: WorkspaceSearch) -> str:
    if isinstance(search, Found):
        return search.workspace.kind.value
    if isinstance(search, Broken):
        return str(search.manifest_path)
    return "missing"


def render_summary(search: WorkspaceSearch) -> str:
    """Return a Markdown string with a table of discovered packages."""
    lines = ["# dist-workspace Summary", ""]

    if isinstance(search, Found):
        workspace = search.workspace
        lines.append(f"Workspace: `{workspace.workspace_dir}` ({workspace.kind.value})")
        lines.append(
            f"Packages: {len(workspace.packages)} | Nested workspaces: {len(workspace.sub_workspaces)}"
        )
    elif isinstance(search, Broken):
        lines.append(f"Broken manifest: `{search.manifest_path}`")
    else:
        lines.append("No release configuration found")
    lines.append("")

    lines.append("| Workspace | Package | Version | Build command | Publish |")
    lines.append("| --- | --- | --- | --- | --- |")
    rows = _lines_for(search, _label(search))
    if not rows:
        rows = ["| (empty workspace) | n/a | n/a | n/a | n/a |"]
    lines.extend(rows)

    return "\n".join(lines) + "\n"
