"""Tests for workspace discovery and dispatch."""

from __future__ import annotations

import pytest

from dist_workspace.config import DiscoveryConfig
from dist_workspace.core import get_workspace
from dist_workspace.errors import (
    ManifestNotFoundError,
    ManifestParseError,
    ManifestValidationError,
    WorkspaceBrokenError,
    WorkspaceMissingError,
)
from dist_workspace.models import (
    Broken,
    Ecosystem,
    Found,
    Missing,
    PackageVersion,
    WorkspaceKind,
)


def test_empty_tree_is_missing(root):
    (root / "sub").mkdir()

    search = get_workspace(root / "sub", root, handlers={})

    assert isinstance(search, Missing)
    assert isinstance(search.cause, ManifestNotFoundError)
    assert search.cause.filename == "dist.toml"
    with pytest.raises(WorkspaceMissingError):
        search.into_result()


def test_workspace_manifest_wins_in_same_directory(root, write_workspace, write_package):
    manifest = write_workspace(["dist:member"])
    write_package("member", name="member")
    write_package(".", name="root-package")

    search = get_workspace(root, root, handlers={})

    assert isinstance(search, Found)
    assert search.workspace.manifest_path == manifest
    assert search.workspace.package_names() == ["member"]


def test_workspace_manifest_above_package_manifest_wins(root, write_workspace, write_package):
    write_workspace(["dist:member"])
    write_package("member", name="member")

    search = get_workspace(root / "member", root, handlers={})

    workspace = search.into_result()
    assert workspace.workspace_dir == root
    assert workspace.package_names() == ["member"]


def test_package_manifest_becomes_single_package_workspace(root, write_package):
    manifest = write_package(".", name="solo", version="0.1.0")

    search = get_workspace(root, root, handlers={})

    assert isinstance(search, Found)
    workspace = search.workspace
    assert workspace.kind is WorkspaceKind.GENERIC
    assert workspace.workspace_dir == root
    assert workspace.manifest_path == manifest
    assert workspace.target_dir == root / "target"
    assert workspace.sub_workspaces == ()
    assert workspace.package_names() == ["solo"]


def test_invalid_workspace_manifest_is_broken(root, write_file):
    manifest = write_file(root / "dist-workspace.toml", "[workspace\nmembers = []\n")

    search = get_workspace(root, root, handlers={})

    assert isinstance(search, Broken)
    assert search.manifest_path == manifest
    assert isinstance(search.cause, ManifestParseError)
    with pytest.raises(WorkspaceBrokenError) as exc_info:
        search.into_result()
    assert exc_info.value.manifest_path == manifest


def test_non_utf8_workspace_manifest_is_broken(root):
    manifest = root / "dist-workspace.toml"
    manifest.write_bytes(b'[workspace]\nmembers = ["dist:\xff"]\n')

    search = get_workspace(root, root, handlers={})

    assert isinstance(search, Broken)
    assert search.manifest_path == manifest
    assert isinstance(search.cause, ManifestParseError)
    assert "UTF-8" in search.cause.details


def test_invalid_package_manifest_is_broken(root, write_package):
    manifest = write_package(".", name=None)

    search = get_workspace(root, root, handlers={})

    assert isinstance(search, Broken)
    assert search.manifest_path == manifest
    assert isinstance(search.cause, ManifestValidationError)
    assert search.cause.source_path == manifest


def test_malformed_member_breaks_workspace(root, write_workspace):
    write_workspace(["no-prefix-here"])

    search = get_workspace(root, root, handlers={})

    assert isinstance(search, Broken)
    assert "no ecosystem prefix" in str(search.cause)


def test_filenames_come_from_config(root, write_file):
    write_file(root / "release.toml", '[workspace]\nmembers = ["dist:a"]\n')
    write_file(root / "a" / "pkg.toml", '[package]\nname = "a"\nbuild-command = ["make"]\n')
    write_file(root / "dist-workspace.toml", "not even toml [")
    config = DiscoveryConfig(
        workspace_manifest="release.toml",
        package_manifest="pkg.toml",
        target_dir_name="out",
    )

    workspace = get_workspace(root, root, config=config, handlers={}).into_result()

    assert workspace.manifest_path == root / "release.toml"
    assert workspace.target_dir == root / "out"
    assert workspace.package_names() == ["a"]


def test_end_to_end_generic_member(root, write_workspace, write_package):
    write_workspace(["dist:pkg-a"])
    write_package("pkg-a", name="a", build_command=["make"], version="1.2.3")

    workspace = get_workspace(root, root, handlers={}).into_result()

    assert workspace.kind is WorkspaceKind.GENERIC
    assert workspace.target_dir == root / "target"
    [package] = workspace.packages
    assert package.name == "a"
    assert package.version == PackageVersion(Ecosystem.GENERIC, "1.2.3")
    assert package.build_command == ("make",)
    assert package.publish is True
    assert package.authors == ()
    assert package.license_files == ()
    assert package.binaries == ()
    assert package.static_libs == ()
    assert package.dynamic_libs == ()
    assert package.package_root == root / "pkg-a"
    assert package.manifest_path == root / "pkg-a" / "dist.toml"


def test_package_exports_only_public_names():
    import dist_workspace

    assert "core" not in dist_workspace.__all__
    assert all(hasattr(dist_workspace, name) for name in dist_workspace.__all__)
