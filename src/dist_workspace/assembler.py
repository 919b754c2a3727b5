"""Assemble a generic workspace from its manifest and member packages."""

from __future__ import annotations

import logging
from pathlib import Path

from .autoincludes import find_auto_includes, merge_auto_includes
from .config import DiscoveryConfig
from .ecosystems import EcosystemHandler, EcosystemRegistry, get_handler
from .errors import DelegatedEcosystemError, ManifestLoadError
from .manifest import load_workspace_manifest
from .members import WorkspaceMember
from .merge import merge_package_with_raw_generic
from .models import (
    AutoIncludes,
    Broken,
    EcosystemCategory,
    Found,
    PackageRecord,
    WorkspaceKind,
    WorkspaceRecord,
    WorkspaceSearch,
)
from .normalize import AutoIncludeDetector, package_from, raw_package_from

logger = logging.getLogger(__name__)


def workspace_from(
    manifest_path: Path,
    config: DiscoveryConfig,
    handlers: EcosystemRegistry,
    detect: AutoIncludeDetector = find_auto_includes,
) -> WorkspaceRecord:
    """Load a workspace manifest and resolve its members in declaration order.

    A failing generic or interpreted-ecosystem member aborts the whole
    workspace. A compiled-ecosystem member is resolved into a nested search
    outcome which is kept even when it is Broken or Missing.
    """
    manifest = load_workspace_manifest(manifest_path, enabled=handlers.keys())
    workspace_dir = manifest_path.parent
    root_auto_includes = detect(workspace_dir)

    packages: list[PackageRecord] = []
    sub_workspaces: list[WorkspaceSearch] = []
    for member in manifest.members:
        member_dir = workspace_dir / member.path
        category = member.ecosystem.category
        logger.debug("Resolving workspace member %s", member)

        if category is EcosystemCategory.GENERIC:
            packages.append(
                _generic_member(member_dir, config, root_auto_includes, detect)
            )
        elif category is EcosystemCategory.COMPILED:
            handler = get_handler(handlers, member.ecosystem, str(member))
            sub_workspaces.append(_compiled_member(handler, member, member_dir))
        else:
            handler = get_handler(handlers, member.ecosystem, str(member))
            packages.extend(
                _interpreted_member(handler, member_dir, config, root_auto_includes)
            )

    return WorkspaceRecord(
        kind=WorkspaceKind.GENERIC,
        workspace_dir=workspace_dir,
        manifest_path=manifest_path,
        target_dir=workspace_dir / config.target_dir_name,
        packages=tuple(packages),
        sub_workspaces=tuple(sub_workspaces),
        root_auto_includes=root_auto_includes,
    )


def _generic_member(
    member_dir: Path,
    config: DiscoveryConfig,
    root_auto_includes: AutoIncludes,
    detect: AutoIncludeDetector,
) -> PackageRecord:
    member_manifest = member_dir / config.package_manifest
    if not member_manifest.is_file():
        raise ManifestLoadError(
            member_manifest, f"workspace member {member_dir} has no {config.package_manifest}"
        )
    package = package_from(member_manifest, detect)
    return merge_auto_includes(package, root_auto_includes)


def _compiled_member(
    handler: EcosystemHandler, member: WorkspaceMember, member_dir: Path
) -> WorkspaceSearch:
    try:
        search = handler.resolve(member_dir, member_dir)
    except Exception as exc:
        error = DelegatedEcosystemError(handler.display_name, member_dir, exc)
        logger.warning("Workspace member %s failed to resolve: %s", member, exc)
        return Broken(manifest_path=member_dir, cause=error)

    if not isinstance(search, Found):
        logger.warning("Workspace member %s did not resolve: %s", member, search)
    return search


def _interpreted_member(
    handler: EcosystemHandler,
    member_dir: Path,
    config: DiscoveryConfig,
    root_auto_includes: AutoIncludes,
) -> list[PackageRecord]:
    try:
        resolved = handler.resolve(member_dir, member_dir)
    except Exception as exc:
        raise DelegatedEcosystemError(handler.display_name, member_dir, exc) from exc

    packages: list[PackageRecord] = []
    for package in resolved:
        # A dist manifest beside the package's own manifest overrides it.
        paired_manifest = package.package_root / config.package_manifest
        if paired_manifest.is_file():
            package = merge_package_with_raw_generic(package, raw_package_from(paired_manifest))
        packages.append(merge_auto_includes(package, root_auto_includes))
    return packages
