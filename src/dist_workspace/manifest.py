"""Loading and structural validation of workspace and package manifests."""

from __future__ import annotations

import json
import re
import tomllib
from collections.abc import Container
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from .errors import ManifestLoadError, ManifestParseError, ManifestValidationError
from .members import WorkspaceMember
from .models import Ecosystem, PackageVersion

_SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"
WORKSPACE_SCHEMA = "workspace.schema.json"
PACKAGE_SCHEMA = "package.schema.json"

_TOML_POSITION = re.compile(r"\(at line (\d+), column (\d+)\)")


@dataclass(frozen=True)
class SourceFile:
    """A manifest's path and text, kept together for diagnostics."""

    path: Path
    contents: str

    @classmethod
    def load(cls, path: Path) -> SourceFile:
        try:
            contents = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ManifestLoadError(path, f"failed to read manifest: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise ManifestParseError(path, f"manifest is not valid UTF-8: {exc}") from exc
        return cls(path=path, contents=contents)

    def deserialize_toml(self) -> dict[str, Any]:
        try:
            return tomllib.loads(self.contents)
        except tomllib.TOMLDecodeError as exc:
            line, column = _decode_error_position(exc)
            raise ManifestParseError(
                self.path,
                f"invalid TOML: {exc}",
                source_text=self.contents,
                line=line,
                column=column,
            ) from exc

    def deserialize_json(self) -> Any:
        try:
            return json.loads(self.contents)
        except json.JSONDecodeError as exc:
            raise ManifestParseError(
                self.path,
                f"invalid JSON: {exc.msg}",
                source_text=self.contents,
                line=exc.lineno,
                column=exc.colno,
            ) from exc


def _decode_error_position(exc: tomllib.TOMLDecodeError) -> tuple[int, int]:
    lineno = getattr(exc, "lineno", None)
    colno = getattr(exc, "colno", None)
    if isinstance(lineno, int) and isinstance(colno, int):
        return lineno, colno
    match = _TOML_POSITION.search(str(exc))
    if match:
        return int(match.group(1)), int(match.group(2))
    return 1, 1


@lru_cache(maxsize=None)
def _validator(schema_name: str) -> Draft202012Validator:
    schema = json.loads((_SCHEMA_DIR / schema_name).read_text(encoding="utf-8"))
    return Draft202012Validator(schema)


def validate_document(source: SourceFile, document: Any, schema_name: str) -> None:
    """Check ``document`` against a bundled schema, reporting the first error."""
    errors = sorted(
        _validator(schema_name).iter_errors(document),
        key=lambda e: [str(p) for p in e.absolute_path],
    )
    if errors:
        first = errors[0]
        pointer = ".".join(str(p) for p in first.absolute_path)
        raise ManifestValidationError(
            source.path,
            f"{pointer or '<root>'}: {first.message}",
            source_text=source.contents,
        )


@dataclass(frozen=True)
class WorkspaceManifest:
    members: tuple[WorkspaceMember, ...]


@dataclass(frozen=True)
class RawPackage:
    """The ``[package]`` table of a package manifest, with every field optional.

    Relative paths are resolved against the directory holding the manifest.
    """

    name: str | None = None
    version: PackageVersion | None = None
    description: str | None = None
    authors: tuple[str, ...] | None = None
    license: str | None = None
    license_files: tuple[Path, ...] | None = None
    readme: Path | None = None
    changelog: Path | None = None
    repository: str | None = None
    homepage: str | None = None
    documentation: str | None = None
    binaries: tuple[str, ...] | None = None
    cstaticlibs: tuple[str, ...] | None = None
    cdylibs: tuple[str, ...] | None = None
    build_command: tuple[str, ...] | None = None


def _optional_tuple(table: dict[str, Any], key: str) -> tuple[str, ...] | None:
    value = table.get(key)
    return tuple(value) if value is not None else None


def _raw_package_from_table(source: SourceFile, table: dict[str, Any]) -> RawPackage:
    root = source.path.parent

    version = None
    raw_version = table.get("version")
    if raw_version is not None:
        try:
            version = PackageVersion(Ecosystem.GENERIC, raw_version)
        except ValueError as exc:
            raise ManifestValidationError(
                source.path,
                f"package.version: invalid version '{raw_version}': {exc}",
                source_text=source.contents,
            ) from exc

    license_files = table.get("license-files")
    readme = table.get("readme")
    changelog = table.get("changelog")

    return RawPackage(
        name=table.get("name"),
        version=version,
        description=table.get("description"),
        authors=_optional_tuple(table, "authors"),
        license=table.get("license"),
        license_files=(
            tuple(root / p for p in license_files) if license_files is not None else None
        ),
        readme=root / readme if readme is not None else None,
        changelog=root / changelog if changelog is not None else None,
        repository=table.get("repository"),
        homepage=table.get("homepage"),
        documentation=table.get("documentation"),
        binaries=_optional_tuple(table, "binaries"),
        cstaticlibs=_optional_tuple(table, "cstaticlibs"),
        cdylibs=_optional_tuple(table, "cdylibs"),
        build_command=_optional_tuple(table, "build-command"),
    )


def load_package_manifest(manifest_path: Path) -> tuple[SourceFile, RawPackage]:
    """Read a package manifest into a :class:`RawPackage`.

    Only types are checked here; mandatory fields are the caller's concern.
    """
    source = SourceFile.load(manifest_path)
    document = source.deserialize_toml()
    validate_document(source, document, PACKAGE_SCHEMA)
    return source, _raw_package_from_table(source, document["package"])


def load_workspace_manifest(
    manifest_path: Path,
    enabled: Container[Ecosystem] | None = None,
) -> WorkspaceManifest:
    """Read a workspace manifest and parse its member directives in order."""
    source = SourceFile.load(manifest_path)
    document = source.deserialize_toml()
    validate_document(source, document, WORKSPACE_SCHEMA)
    members = tuple(
        WorkspaceMember.parse(value, enabled) for value in document["workspace"]["members"]
    )
    return WorkspaceManifest(members=members)
