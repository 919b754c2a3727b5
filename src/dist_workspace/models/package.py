"""Normalized package record."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .version import PackageVersion


@dataclass(frozen=True)
class PackageRecord:
    """A single distributable package with fully-defaulted metadata."""

    name: str
    manifest_path: Path
    version: PackageVersion | None = None
    description: str | None = None
    authors: tuple[str, ...] = ()
    license: str | None = None
    license_files: tuple[Path, ...] = ()
    readme_file: Path | None = None
    changelog_file: Path | None = None
    repository_url: str | None = None
    homepage_url: str | None = None
    documentation_url: str | None = None
    binaries: tuple[str, ...] = ()
    static_libs: tuple[str, ...] = ()
    dynamic_libs: tuple[str, ...] = ()
    build_command: tuple[str, ...] | None = None
    publish: bool = True

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Package name must be non-empty")

    @property
    def package_root(self) -> Path:
        return self.manifest_path.parent

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "version": self.version.to_dict() if self.version else None,
            "packageRoot": str(self.package_root),
            "manifestPath": str(self.manifest_path),
            "description": self.description,
            "authors": list(self.authors),
            "license": self.license,
            "licenseFiles": [str(p) for p in self.license_files],
            "readmeFile": str(self.readme_file) if self.readme_file else None,
            "changelogFile": str(self.changelog_file) if self.changelog_file else None,
            "repositoryUrl": self.repository_url,
            "homepageUrl": self.homepage_url,
            "documentationUrl": self.documentation_url,
            "binaries": list(self.binaries),
            "staticLibs": list(self.static_libs),
            "dynamicLibs": list(self.dynamic_libs),
            "buildCommand": list(self.build_command) if self.build_command is not None else None,
            "publish": self.publish,
        }
