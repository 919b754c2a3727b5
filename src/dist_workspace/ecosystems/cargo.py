"""Resolve Cargo workspaces and packages from ``Cargo.toml`` files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from ..autoincludes import find_auto_includes, merge_auto_includes
from ..errors import DistWorkspaceError, ManifestNotFoundError, ManifestValidationError
from ..manifest import SourceFile
from ..models import (
    Broken,
    Ecosystem,
    Found,
    Missing,
    PackageRecord,
    PackageVersion,
    WorkspaceKind,
    WorkspaceRecord,
    WorkspaceSearch,
)
from ..search import find_file

logger = logging.getLogger(__name__)

CARGO_MANIFEST = "Cargo.toml"
CARGO_TARGET_DIR = "target"


def get_workspace(start_dir: Path, clamp_dir: Path | None = None) -> WorkspaceSearch:
    """Find the Cargo workspace containing ``start_dir``."""
    try:
        manifest_path = find_file(CARGO_MANIFEST, start_dir, clamp_dir)
    except ManifestNotFoundError as exc:
        return Missing(exc)

    try:
        manifest_path = _workspace_root(manifest_path, clamp_dir)
        return Found(workspace_from(manifest_path))
    except DistWorkspaceError as exc:
        logger.warning("Cargo workspace at %s is broken: %s", manifest_path, exc)
        return Broken(manifest_path=manifest_path, cause=exc)


def _load(manifest_path: Path) -> tuple[SourceFile, dict[str, Any]]:
    source = SourceFile.load(manifest_path)
    return source, source.deserialize_toml()


def _workspace_root(manifest_path: Path, clamp_dir: Path | None) -> Path:
    """Walk up from a crate manifest to the manifest declaring ``[workspace]``."""
    _, document = _load(manifest_path)
    if "workspace" in document:
        return manifest_path

    directory = manifest_path.parent
    if clamp_dir is not None and directory == clamp_dir.resolve():
        return manifest_path

    try:
        parent_manifest = find_file(CARGO_MANIFEST, directory.parent, clamp_dir)
    except ManifestNotFoundError:
        return manifest_path

    _, parent_document = _load(parent_manifest)
    if "workspace" in parent_document:
        return parent_manifest
    return manifest_path


def _member_manifests(workspace_dir: Path, table: dict[str, Any]) -> list[Path]:
    excluded = {(workspace_dir / p).resolve() for p in table.get("exclude", [])}
    manifests: list[Path] = []
    for pattern in table.get("members", []):
        for match in sorted(workspace_dir.glob(pattern)):
            candidate = match / CARGO_MANIFEST
            if match.resolve() in excluded or not candidate.is_file():
                continue
            if candidate not in manifests:
                manifests.append(candidate)
    return manifests


def workspace_from(manifest_path: Path) -> WorkspaceRecord:
    _, document = _load(manifest_path)
    workspace_dir = manifest_path.parent
    workspace_table = document.get("workspace") or {}
    inherited = workspace_table.get("package") or {}

    manifests: list[Path] = []
    if "package" in document:
        manifests.append(manifest_path)
    for member_manifest in _member_manifests(workspace_dir, workspace_table):
        if member_manifest not in manifests:
            manifests.append(member_manifest)

    root_auto_includes = find_auto_includes(workspace_dir)
    packages = tuple(
        merge_auto_includes(package_from(path, inherited), root_auto_includes)
        for path in manifests
    )

    return WorkspaceRecord(
        kind=WorkspaceKind.CARGO,
        workspace_dir=workspace_dir,
        manifest_path=manifest_path,
        target_dir=workspace_dir / CARGO_TARGET_DIR,
        packages=packages,
        root_auto_includes=root_auto_includes,
    )


def _inherit(table: dict[str, Any], key: str, inherited: dict[str, Any]) -> Any:
    value = table.get(key)
    if isinstance(value, dict) and value.get("workspace") is True:
        return inherited.get(key)
    return value


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _binaries(document: dict[str, Any], package_root: Path, name: str) -> tuple[str, ...]:
    names = [b["name"] for b in document.get("bin", []) if isinstance(b, dict) and "name" in b]
    if not names:
        if (package_root / "src" / "main.rs").is_file():
            names.append(name)
        bin_dir = package_root / "src" / "bin"
        if bin_dir.is_dir():
            names.extend(p.stem for p in sorted(bin_dir.glob("*.rs")))
    return tuple(names)


def _libs(document: dict[str, Any], name: str) -> tuple[tuple[str, ...], tuple[str, ...]]:
    lib = document.get("lib") or {}
    lib_name = lib.get("name") or name.replace("-", "_")
    crate_types = lib.get("crate-type") or []
    static = (lib_name,) if "staticlib" in crate_types else ()
    dynamic = (lib_name,) if "cdylib" in crate_types else ()
    return static, dynamic


def package_from(manifest_path: Path, inherited: dict[str, Any] | None = None) -> PackageRecord:
    source, document = _load(manifest_path)
    inherited = inherited or {}
    table = document.get("package")
    if not isinstance(table, dict):
        raise ManifestValidationError(
            manifest_path, "missing table [package]", source_text=source.contents
        )

    name = _text(table.get("name"))
    if name is None:
        raise ManifestValidationError(
            manifest_path, "missing field name", source_text=source.contents
        )

    version = None
    raw_version = _text(_inherit(table, "version", inherited))
    if raw_version is not None:
        try:
            version = PackageVersion(Ecosystem.CARGO, raw_version)
        except ValueError as exc:
            raise ManifestValidationError(
                manifest_path,
                f"package.version: invalid version '{raw_version}'",
                source_text=source.contents,
            ) from exc

    package_root = manifest_path.parent
    readme = _inherit(table, "readme", inherited)
    license_file = _text(_inherit(table, "license-file", inherited))
    publish = _inherit(table, "publish", inherited)
    authors = _inherit(table, "authors", inherited)
    if not isinstance(authors, list):
        authors = []
    static_libs, dynamic_libs = _libs(document, name)

    package = PackageRecord(
        name=name,
        manifest_path=manifest_path,
        version=version,
        description=_text(_inherit(table, "description", inherited)),
        authors=tuple(a for a in authors if isinstance(a, str)),
        license=_text(_inherit(table, "license", inherited)),
        license_files=(package_root / license_file,) if license_file else (),
        readme_file=package_root / readme if isinstance(readme, str) else None,
        repository_url=_text(_inherit(table, "repository", inherited)),
        homepage_url=_text(_inherit(table, "homepage", inherited)),
        documentation_url=_text(_inherit(table, "documentation", inherited)),
        binaries=_binaries(document, package_root, name),
        static_libs=static_libs,
        dynamic_libs=dynamic_libs,
        publish=publish is not False and publish != [],
    )
    return merge_auto_includes(package, find_auto_includes(package_root))
