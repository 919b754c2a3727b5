"""Ecosystem tags and ecosystem-tagged package versions."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum


class EcosystemCategory(Enum):
    GENERIC = "generic"
    COMPILED = "compiled"
    INTERPRETED = "interpreted"


class Ecosystem(Enum):
    """Project conventions a workspace member can be described with.

    The value doubles as the workspace member prefix (``"cargo:path"``).
    """

    GENERIC = "dist"
    CARGO = "cargo"
    NPM = "npm"

    @property
    def category(self) -> EcosystemCategory:
        return _CATEGORIES[self]


_CATEGORIES = {
    Ecosystem.GENERIC: EcosystemCategory.GENERIC,
    Ecosystem.CARGO: EcosystemCategory.COMPILED,
    Ecosystem.NPM: EcosystemCategory.INTERPRETED,
}

# npm versions follow node-semver and are kept opaque.
_CHECKED_ECOSYSTEMS = {Ecosystem.GENERIC, Ecosystem.CARGO}

# Semantic Versioning 2.0.0, https://semver.org/#is-there-a-suggested-regular-expression-regex-to-check-a-semver-string
_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


@dataclass(frozen=True)
class SemanticVersion:
    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    @classmethod
    def parse(cls, value: str) -> SemanticVersion:
        match = _SEMVER_RE.match(value)
        if match is None:
            raise ValueError(f"Invalid semantic version: '{value}'")
        major, minor, patch, prerelease, build = match.groups()
        return cls(
            major=int(major),
            minor=int(minor),
            patch=int(patch),
            prerelease=tuple(prerelease.split(".")) if prerelease else (),
            build=tuple(build.split(".")) if build else (),
        )


@dataclass(frozen=True)
class PackageVersion:
    """A version string that remembers which ecosystem produced it."""

    ecosystem: Ecosystem
    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Version must be non-empty")
        if self.ecosystem in _CHECKED_ECOSYSTEMS:
            SemanticVersion.parse(self.value)

    def __str__(self) -> str:
        return self.value

    def parsed(self) -> SemanticVersion:
        """Parse the value as SemVer; raises ValueError for npm ranges."""
        return SemanticVersion.parse(self.value)

    def to_dict(self) -> dict[str, str]:
        return {"ecosystem": self.ecosystem.value, "value": self.value}

    @classmethod
    def generic(cls, value: str) -> PackageVersion:
        return cls(ecosystem=Ecosystem.GENERIC, value=value)
