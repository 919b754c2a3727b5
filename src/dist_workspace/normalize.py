"""Turn a raw package manifest into a fully-defaulted :class:`PackageRecord`."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from .autoincludes import find_auto_includes, merge_auto_includes
from .errors import ManifestValidationError
from .manifest import RawPackage, load_package_manifest
from .models import AutoIncludes, PackageRecord

AutoIncludeDetector = Callable[[Path], AutoIncludes]


def raw_package_from(manifest_path: Path) -> RawPackage:
    """Load a package manifest without checking mandatory fields."""
    _, raw = load_package_manifest(manifest_path)
    return raw


def _missing_field(manifest_path: Path, field_name: str) -> ManifestValidationError:
    # Not tied to a location in the file: the span is always line 1, column 1.
    return ManifestValidationError(manifest_path, f"missing field {field_name}")


def package_from(
    manifest_path: Path,
    detect: AutoIncludeDetector = find_auto_includes,
) -> PackageRecord:
    """Load and validate a package manifest.

    ``name`` and ``build-command`` are mandatory. The package's own
    auto-includes are merged in as a gap-fill before returning.

    Raises:
        ManifestError: If the manifest cannot be read, parsed or validated.
    """
    raw = raw_package_from(manifest_path)

    if raw.build_command is None:
        raise _missing_field(manifest_path, "build-command")
    if raw.name is None:
        raise _missing_field(manifest_path, "name")

    package = PackageRecord(
        name=raw.name,
        manifest_path=manifest_path,
        version=raw.version,
        description=raw.description,
        authors=raw.authors or (),
        license=raw.license,
        license_files=raw.license_files or (),
        readme_file=raw.readme,
        changelog_file=raw.changelog,
        repository_url=raw.repository,
        homepage_url=raw.homepage,
        documentation_url=raw.documentation,
        binaries=raw.binaries or (),
        static_libs=raw.cstaticlibs or (),
        dynamic_libs=raw.cdylibs or (),
        build_command=raw.build_command,
        publish=True,
    )

    return merge_auto_includes(package, detect(package.package_root))
