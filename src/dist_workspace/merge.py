"""Override merge of a companion generic manifest onto an ecosystem package."""

from __future__ import annotations

from dataclasses import fields, replace

from .manifest import RawPackage
from .models import PackageRecord

# RawPackage field -> PackageRecord field
_FIELD_MAP = {
    "name": "name",
    "version": "version",
    "description": "description",
    "authors": "authors",
    "license": "license",
    "license_files": "license_files",
    "readme": "readme_file",
    "changelog": "changelog_file",
    "repository": "repository_url",
    "homepage": "homepage_url",
    "documentation": "documentation_url",
    "binaries": "binaries",
    "cstaticlibs": "static_libs",
    "cdylibs": "dynamic_libs",
    "build_command": "build_command",
}


def merge_package_with_raw_generic(package: PackageRecord, raw: RawPackage) -> PackageRecord:
    """Return ``package`` with every field set in ``raw`` taking precedence.

    Unlike auto-include merging this overwrites existing values. A version
    from ``raw`` is already tagged as a generic version and replaces the
    ecosystem's own.
    """
    changes = {
        _FIELD_MAP[f.name]: getattr(raw, f.name)
        for f in fields(raw)
        if getattr(raw, f.name) is not None
    }
    if not changes:
        return package
    return replace(package, **changes)
