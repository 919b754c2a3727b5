"""Shared fixtures: on-disk manifest trees and fake ecosystem resolvers."""

from __future__ import annotations

from pathlib import Path

import pytest

from dist_workspace.models import AutoIncludes


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def _package_toml(
    name: str | None = "pkg",
    build_command: list[str] | None = None,
    **fields: object,
) -> str:
    lines = ["[package]"]
    if name is not None:
        lines.append(f'name = "{name}"')
    if build_command is not None:
        items = ", ".join(f'"{part}"' for part in build_command)
        lines.append(f"build-command = [{items}]")
    for key, value in fields.items():
        key = key.replace("_", "-")
        if isinstance(value, list):
            items = ", ".join(f'"{item}"' for item in value)
            lines.append(f"{key} = [{items}]")
        else:
            lines.append(f'{key} = "{value}"')
    return "\n".join(lines) + "\n"


def _workspace_toml(members: list[str]) -> str:
    items = ", ".join(f'"{member}"' for member in members)
    return f"[workspace]\nmembers = [{items}]\n"


@pytest.fixture
def root(tmp_path: Path) -> Path:
    return tmp_path.resolve()


@pytest.fixture
def write_file():
    return _write


@pytest.fixture
def write_package(root: Path):
    """Write ``<root>/<subdir>/dist.toml``; defaults to a valid package."""

    def _factory(
        subdir: str = ".",
        name: str | None = "pkg",
        build_command: list[str] | None = None,
        **fields: object,
    ) -> Path:
        if build_command is None:
            build_command = ["make"]
        text = _package_toml(name, build_command, **fields)
        return _write(root / subdir / "dist.toml", text)

    return _factory


@pytest.fixture
def write_raw_package(root: Path):
    """Write a dist.toml without filling in mandatory fields."""

    def _factory(subdir: str, **fields: object) -> Path:
        name = fields.pop("name", None)
        build_command = fields.pop("build_command", None)
        text = _package_toml(name, build_command, **fields)
        return _write(root / subdir / "dist.toml", text)

    return _factory


@pytest.fixture
def write_workspace(root: Path):
    def _factory(members: list[str], subdir: str = ".") -> Path:
        return _write(root / subdir / "dist-workspace.toml", _workspace_toml(members))

    return _factory


@pytest.fixture
def no_auto_includes():
    def _detect(directory: Path) -> AutoIncludes:
        return AutoIncludes()

    return _detect
