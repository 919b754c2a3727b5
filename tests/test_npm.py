"""Tests for the built-in npm resolver."""

from __future__ import annotations

import json

import pytest

from dist_workspace.core import get_workspace
from dist_workspace.ecosystems import npm
from dist_workspace.errors import ManifestNotFoundError, ManifestValidationError
from dist_workspace.models import Ecosystem, PackageVersion


def _package_json(write_file, path, **data):
    return write_file(path / "package.json", json.dumps(data))


def test_single_package(root, write_file):
    _package_json(
        write_file,
        root,
        name="@scope/tool",
        version="1.0.0-beta.1",
        description="A tool",
        author={"name": "Ann", "email": "ann@example.com"},
        contributors=["Bo"],
        license="MIT",
        repository={"type": "git", "url": "https://example.com/tool.git"},
        bin="cli.js",
        private=True,
    )

    [package] = npm.get_packages(root, root)

    assert package.name == "@scope/tool"
    assert package.version == PackageVersion(Ecosystem.NPM, "1.0.0-beta.1")
    assert package.authors == ("Ann <ann@example.com>", "Bo")
    assert package.license == "MIT"
    assert package.repository_url == "https://example.com/tool.git"
    assert package.binaries == ("tool",)
    assert package.publish is False
    assert package.build_command is None
    assert package.package_root == root


def test_string_contributors_are_ignored(root, write_file):
    _package_json(write_file, root, name="tool", author="Ann", contributors="Bo")

    [package] = npm.get_packages(root, root)

    assert package.authors == ("Ann",)


def test_workspaces_field_lists_members(root, write_file):
    _package_json(write_file, root, name="monorepo", private=True, workspaces=["packages/*"])
    _package_json(write_file, root / "packages" / "b", name="b", bin={"b-cli": "bin.js"})
    _package_json(write_file, root / "packages" / "a", name="a")

    packages = npm.get_packages(root, root)

    assert [p.name for p in packages] == ["a", "b"]
    assert packages[1].binaries == ("b-cli",)


def test_pnpm_workspace_file_lists_members(root, write_file):
    _package_json(write_file, root, name="monorepo", private=True)
    write_file(root / "pnpm-workspace.yaml", "packages:\n  - 'apps/*'\n  - '!apps/skip'\n")
    _package_json(write_file, root / "apps" / "web", name="web")
    _package_json(write_file, root / "apps" / "skip", name="skip")

    packages = npm.get_packages(root, root)

    assert [p.name for p in packages] == ["web"]


def test_missing_package_json_raises(root):
    with pytest.raises(ManifestNotFoundError):
        npm.get_packages(root, root)


def test_package_without_name_is_rejected(root, write_file):
    _package_json(write_file, root, version="1.0.0")

    with pytest.raises(ManifestValidationError):
        npm.get_packages(root, root)


def test_npm_member_with_companion_manifest(root, write_file, write_workspace, write_raw_package):
    write_workspace(["npm:js"])
    _package_json(write_file, root / "js", name="web", version="2.0.0", license="MIT")
    write_raw_package("js", license="Apache-2.0", build_command=["npm", "run", "dist"])

    workspace = get_workspace(root, root).into_result()

    [package] = workspace.packages
    assert package.name == "web"
    assert package.license == "Apache-2.0"
    assert package.build_command == ("npm", "run", "dist")
    assert package.version == PackageVersion(Ecosystem.NPM, "2.0.0")
