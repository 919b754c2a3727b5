"""Workspace discovery entrypoints.

``get_workspace`` searches upward from a directory for a workspace manifest,
falling back to a standalone package manifest, and reports the result as a
:class:`Found`, :class:`Broken` or :class:`Missing` outcome.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .assembler import workspace_from
from .autoincludes import find_auto_includes
from .config import DiscoveryConfig
from .ecosystems import EcosystemRegistry, default_handlers
from .errors import DistWorkspaceError, ManifestNotFoundError
from .models import Broken, Found, Missing, WorkspaceKind, WorkspaceRecord, WorkspaceSearch
from .normalize import AutoIncludeDetector, package_from
from .search import find_file

logger = logging.getLogger(__name__)


def get_workspace(
    start_dir: Path,
    clamp_dir: Path | None = None,
    *,
    config: DiscoveryConfig | None = None,
    handlers: EcosystemRegistry | None = None,
    detect: AutoIncludeDetector = find_auto_includes,
) -> WorkspaceSearch:
    """Find and load the workspace that ``start_dir`` belongs to.

    Params:
        start_dir: directory to start searching from
        clamp_dir: last directory to search; None searches up to the root
        config: manifest filenames and build directory name
        handlers: enabled ecosystem resolvers (default: Cargo and npm)
        detect: auto-include detector applied to package and workspace roots

    A workspace manifest anywhere on the search path wins over a package
    manifest. Absence of both is reported as Missing, never raised.
    """
    config = config or DiscoveryConfig()
    handlers = default_handlers() if handlers is None else handlers

    try:
        manifest_path = find_file(config.workspace_manifest, start_dir, clamp_dir)
    except ManifestNotFoundError:
        logger.debug(
            "No %s found from %s, trying %s",
            config.workspace_manifest,
            start_dir,
            config.package_manifest,
        )
        return _get_single_package(start_dir, clamp_dir, config, detect)

    logger.debug("Found workspace manifest %s", manifest_path)
    try:
        return Found(workspace_from(manifest_path, config, handlers, detect))
    except DistWorkspaceError as exc:
        logger.warning("Workspace manifest %s is broken: %s", manifest_path, exc)
        return Broken(manifest_path=manifest_path, cause=exc)


def _get_single_package(
    start_dir: Path,
    clamp_dir: Path | None,
    config: DiscoveryConfig,
    detect: AutoIncludeDetector,
) -> WorkspaceSearch:
    try:
        manifest_path = find_file(config.package_manifest, start_dir, clamp_dir)
    except ManifestNotFoundError as exc:
        return Missing(exc)

    logger.debug("Found package manifest %s", manifest_path)
    try:
        return Found(single_package_workspace_from(manifest_path, config, detect))
    except DistWorkspaceError as exc:
        logger.warning("Package manifest %s is broken: %s", manifest_path, exc)
        return Broken(manifest_path=manifest_path, cause=exc)


def single_package_workspace_from(
    manifest_path: Path,
    config: DiscoveryConfig,
    detect: AutoIncludeDetector = find_auto_includes,
) -> WorkspaceRecord:
    """Treat a lone package manifest as a workspace of one generic package."""
    package = package_from(manifest_path, detect)
    root_auto_includes = detect(package.package_root)
    return WorkspaceRecord(
        kind=WorkspaceKind.GENERIC,
        workspace_dir=package.package_root,
        manifest_path=package.manifest_path,
        target_dir=package.package_root / config.target_dir_name,
        packages=(package,),
        root_auto_includes=root_auto_includes,
    )
