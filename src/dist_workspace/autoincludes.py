"""Detection of conventional README/LICENSE/CHANGELOG files.

Detected values are merged into packages as a gap-fill: a field that already
holds a value (or a non-empty list) is left untouched.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

from .models import AutoIncludes, PackageRecord

logger = logging.getLogger(__name__)

README_PREFIXES = ("README",)
LICENSE_PREFIXES = ("LICENSE", "LICENCE", "UNLICENSE", "COPYING")
CHANGELOG_PREFIXES = ("CHANGELOG", "RELEASES")

# LICENSE-<suffix> naming, as in dual-licensed repositories.
_SUFFIX_IDS = {
    "MIT": "MIT",
    "APACHE": "Apache-2.0",
    "APACHE-2.0": "Apache-2.0",
    "BSD": "BSD-3-Clause",
    "ISC": "ISC",
    "MPL": "MPL-2.0",
    "ZLIB": "Zlib",
}

# Title fragments looked for in the first lines of a license file.
_TITLE_IDS = (
    ("mit license", "MIT"),
    ("apache license", "Apache-2.0"),
    ("mozilla public license", "MPL-2.0"),
    ("gnu lesser general public license", "LGPL-3.0"),
    ("gnu general public license", "GPL-3.0"),
    ("isc license", "ISC"),
    ("bsd 2-clause", "BSD-2-Clause"),
    ("bsd 3-clause", "BSD-3-Clause"),
    ("this is free and unencumbered software", "Unlicense"),
)

_TITLE_LINES = 5


def _startswith_any(name: str, prefixes: tuple[str, ...]) -> bool:
    upper = name.upper()
    return any(upper.startswith(prefix) for prefix in prefixes)


def _license_id(path: Path) -> str | None:
    stem = path.name.upper()
    for prefix in LICENSE_PREFIXES:
        if stem.startswith(prefix + "-"):
            suffix = stem[len(prefix) + 1 :]
            # Drop extensions one at a time so "APACHE-2.0.TXT" still matches.
            while suffix not in _SUFFIX_IDS and "." in suffix:
                suffix = suffix.rsplit(".", 1)[0]
            if suffix in _SUFFIX_IDS:
                return _SUFFIX_IDS[suffix]

    try:
        with path.open(encoding="utf-8", errors="replace") as handle:
            head = " ".join(handle.readline() for _ in range(_TITLE_LINES)).lower()
    except OSError as exc:
        logger.debug("Could not read %s for license detection: %s", path, exc)
        return None

    for fragment, spdx_id in _TITLE_IDS:
        if fragment in head:
            return spdx_id
    return None


def _infer_license(license_files: tuple[Path, ...]) -> str | None:
    ids: list[str] = []
    for path in license_files:
        spdx_id = _license_id(path)
        if spdx_id and spdx_id not in ids:
            ids.append(spdx_id)
    return " OR ".join(ids) if ids else None


def find_auto_includes(directory: Path) -> AutoIncludes:
    """Inspect the files directly inside ``directory``."""
    readme: Path | None = None
    changelog: Path | None = None
    license_files: list[Path] = []

    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if not entry.is_file():
            continue
        if readme is None and _startswith_any(entry.name, README_PREFIXES):
            readme = entry
        elif changelog is None and _startswith_any(entry.name, CHANGELOG_PREFIXES):
            changelog = entry
        elif _startswith_any(entry.name, LICENSE_PREFIXES):
            license_files.append(entry)

    found = tuple(license_files)
    return AutoIncludes(
        readme=readme,
        license=_infer_license(found),
        license_files=found,
        changelog=changelog,
    )


def merge_auto_includes(package: PackageRecord, includes: AutoIncludes) -> PackageRecord:
    """Return ``package`` with unset fields filled from ``includes``."""
    changes: dict[str, object] = {}
    if package.readme_file is None and includes.readme is not None:
        changes["readme_file"] = includes.readme
    if package.changelog_file is None and includes.changelog is not None:
        changes["changelog_file"] = includes.changelog
    if package.license is None and includes.license is not None:
        changes["license"] = includes.license
    if not package.license_files and includes.license_files:
        changes["license_files"] = includes.license_files

    if not changes:
        return package
    return replace(package, **changes)
