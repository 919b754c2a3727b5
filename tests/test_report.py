"""Tests for report rendering and the discover CLI."""

from __future__ import annotations

import json

import discover
from dist_workspace.core import get_workspace
from dist_workspace.models import Found, PackageRecord, WorkspaceKind, WorkspaceRecord
from dist_workspace.report import iter_packages, search_to_dict
from dist_workspace.summary import render_summary


def test_found_workspace_report(root, write_workspace, write_package):
    write_workspace(["dist:pkg-a"])
    write_package("pkg-a", name="a", version="1.2.3")

    report = search_to_dict(get_workspace(root, root, handlers={}))

    assert report["status"] == "found"
    workspace = report["workspace"]
    assert workspace["kind"] == "generic"
    assert workspace["subWorkspaces"] == []
    [package] = workspace["packages"]
    assert package["name"] == "a"
    assert package["version"] == {"ecosystem": "dist", "value": "1.2.3"}
    assert package["buildCommand"] == ["make"]
    assert package["authors"] == []
    assert package["publish"] is True


def test_broken_report_has_location(root, write_package):
    manifest = write_package(".", name=None)

    report = search_to_dict(get_workspace(root, root, handlers={}))

    assert report["status"] == "broken"
    assert report["manifestPath"] == str(manifest)
    assert report["cause"]["type"] == "ManifestValidationError"
    assert report["cause"]["location"] == {"path": str(manifest), "line": 1, "column": 1}


def test_missing_report(root):
    report = search_to_dict(get_workspace(root, root, handlers={}))

    assert report["status"] == "missing"
    assert report["cause"]["type"] == "ManifestNotFoundError"


def test_iter_packages_walks_nested_workspaces(root):
    def record(kind, names, subs=()):
        return WorkspaceRecord(
            kind=kind,
            workspace_dir=root,
            manifest_path=root / "m",
            target_dir=root / "target",
            packages=tuple(PackageRecord(name=n, manifest_path=root / n / "m") for n in names),
            sub_workspaces=subs,
        )

    nested = Found(record(WorkspaceKind.CARGO, ["crate"]))
    search = Found(record(WorkspaceKind.GENERIC, ["a", "b"], (nested,)))

    assert [p.name for p in iter_packages(search)] == ["a", "b", "crate"]
    assert search.workspace.package_names() == ["a", "b"]


def test_summary_lists_packages(root, write_workspace, write_package):
    write_workspace(["dist:pkg-a"])
    write_package("pkg-a", name="a", version="1.2.3")

    summary = render_summary(get_workspace(root, root, handlers={}))

    assert "| generic | a | 1.2.3 | make | yes |" in summary


def test_summary_for_missing(root):
    summary = render_summary(get_workspace(root, root, handlers={}))

    assert "No release configuration found" in summary


def test_cli_exit_codes(root, write_package, capsys):
    assert discover.main(["--root", str(root), "--clamp", str(root)]) == discover.EXIT_MISSING
    capsys.readouterr()

    write_package(".", name="solo")
    assert discover.main(["--root", str(root), "--clamp", str(root)]) == 0
    output = json.loads(capsys.readouterr().out)
    assert output["workspace"]["packages"][0]["name"] == "solo"


def test_cli_reports_broken_manifest(root, write_package, capsys):
    write_package(".", name=None)

    code = discover.main(["--root", str(root), "--clamp", str(root), "--format", "markdown"])

    assert code == discover.EXIT_BROKEN
    captured = capsys.readouterr()
    assert "Broken manifest" in captured.out
    assert "missing field name" in captured.err
