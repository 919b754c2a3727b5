"""Metadata inferred from conventional files in a directory."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AutoIncludes:
    """Values detected from README/LICENSE/CHANGELOG files.

    These only ever fill gaps in a package; they never replace explicit values.
    """

    readme: Path | None = None
    license: str | None = None
    license_files: tuple[Path, ...] = ()
    changelog: Path | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "readme": str(self.readme) if self.readme else None,
            "license": self.license,
            "licenseFiles": [str(p) for p in self.license_files],
            "changelog": str(self.changelog) if self.changelog else None,
        }
