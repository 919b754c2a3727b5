"""Upward search for manifest files."""

from __future__ import annotations

from pathlib import Path

from .errors import ManifestNotFoundError


def find_file(filename: str, start_dir: Path, clamp_dir: Path | None = None) -> Path:
    """Return the first ``filename`` found in ``start_dir`` or one of its parents.

    The search includes ``clamp_dir`` and stops there. Without a clamp (or
    when the clamp is not an ancestor of ``start_dir``) it runs up to the
    filesystem root.
    """
    start = start_dir.resolve()
    clamp = clamp_dir.resolve() if clamp_dir is not None else None

    for directory in (start, *start.parents):
        candidate = directory / filename
        if candidate.is_file():
            return candidate
        if clamp is not None and directory == clamp:
            break

    raise ManifestNotFoundError(filename, start, clamp)
