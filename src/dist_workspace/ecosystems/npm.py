"""Resolve npm packages from ``package.json`` and workspace declarations."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ..autoincludes import find_auto_includes, merge_auto_includes
from ..errors import ManifestValidationError
from ..manifest import SourceFile
from ..models import Ecosystem, PackageRecord, PackageVersion
from ..search import find_file

PACKAGE_JSON = "package.json"
PNPM_WORKSPACE = "pnpm-workspace.yaml"


def get_packages(start_dir: Path, clamp_dir: Path | None = None) -> list[PackageRecord]:
    """Return the npm packages of the project containing ``start_dir``.

    A ``package.json`` that declares workspaces (directly or through
    ``pnpm-workspace.yaml``) contributes its members, not itself.

    Raises:
        ManifestNotFoundError: If no package.json is found.
        ManifestError: If a package.json is unreadable or invalid.
    """
    manifest_path = find_file(PACKAGE_JSON, start_dir, clamp_dir)
    root_dir = manifest_path.parent
    source, data = _load_package_json(manifest_path)

    patterns = _workspace_patterns(root_dir, data)
    if not patterns:
        return [package_from(source, data)]

    excluded = {
        match.resolve()
        for pattern in patterns
        if pattern.startswith("!")
        for match in root_dir.glob(pattern[1:])
    }
    packages: list[PackageRecord] = []
    seen: set[Path] = set()
    for pattern in patterns:
        if pattern.startswith("!"):
            continue
        for match in sorted(root_dir.glob(pattern)):
            member_manifest = match / PACKAGE_JSON
            if match.resolve() in excluded or member_manifest in seen:
                continue
            if not member_manifest.is_file():
                continue
            seen.add(member_manifest)
            packages.append(package_from(*_load_package_json(member_manifest)))
    return packages


def _load_package_json(path: Path) -> tuple[SourceFile, dict[str, Any]]:
    source = SourceFile.load(path)
    data = source.deserialize_json()
    if not isinstance(data, dict):
        raise ManifestValidationError(
            path, "package.json must be an object", source_text=source.contents
        )
    return source, data


def _workspace_patterns(root_dir: Path, data: dict[str, Any]) -> list[str]:
    workspaces = data.get("workspaces")
    if isinstance(workspaces, dict):
        workspaces = workspaces.get("packages")
    if isinstance(workspaces, list):
        return [str(p) for p in workspaces]

    pnpm = root_dir / PNPM_WORKSPACE
    if pnpm.is_file():
        config = yaml.safe_load(pnpm.read_text(encoding="utf-8")) or {}
        pkgs = config.get("packages") or []
        return [str(p) for p in pkgs]

    return []


def _person(value: Any) -> str | None:
    if isinstance(value, str):
        return value or None
    if isinstance(value, dict) and value.get("name"):
        email = value.get("email")
        return f"{value['name']} <{email}>" if email else str(value["name"])
    return None


def _url(value: Any) -> str | None:
    if isinstance(value, dict):
        value = value.get("url")
    return value if isinstance(value, str) and value else None


def _binaries(name: str, value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        # A bare string names the binary after the unscoped package name.
        return (name.rsplit("/", 1)[-1],)
    if isinstance(value, dict):
        return tuple(value.keys())
    return ()


def package_from(source: SourceFile, data: dict[str, Any]) -> PackageRecord:
    name = data.get("name")
    if not isinstance(name, str) or not name:
        raise ManifestValidationError(
            source.path, "missing field name", source_text=source.contents
        )

    raw_version = data.get("version")
    version = (
        PackageVersion(Ecosystem.NPM, raw_version)
        if isinstance(raw_version, str) and raw_version
        else None
    )

    contributors = data.get("contributors")
    if not isinstance(contributors, list):
        contributors = []
    authors = [_person(data.get("author")), *(_person(c) for c in contributors)]
    license_value = data.get("license")
    if isinstance(license_value, dict):
        license_value = license_value.get("type")

    package = PackageRecord(
        name=name,
        manifest_path=source.path,
        version=version,
        description=data.get("description") or None,
        authors=tuple(a for a in authors if a),
        license=license_value if isinstance(license_value, str) and license_value else None,
        repository_url=_url(data.get("repository")),
        homepage_url=_url(data.get("homepage")),
        binaries=_binaries(name, data.get("bin")),
        publish=data.get("private") is not True,
    )
    return merge_auto_includes(package, find_auto_includes(package.package_root))
