"""Error taxonomy for workspace discovery and manifest processing."""

from __future__ import annotations

from pathlib import Path


class DistWorkspaceError(RuntimeError):
    """Base error for every failure raised by dist-workspace."""


class ConfigError(DistWorkspaceError):
    """Raised when the discovery configuration cannot be loaded or is invalid."""


class ManifestNotFoundError(DistWorkspaceError):
    """Raised when an upward search finds no file with the requested name."""

    def __init__(self, filename: str, start_dir: Path, clamp_dir: Path | None) -> None:
        self.filename = filename
        self.start_dir = start_dir
        self.clamp_dir = clamp_dir
        bound = f" (stopped at {clamp_dir})" if clamp_dir is not None else ""
        super().__init__(f"Could not find {filename} in {start_dir} or its parents{bound}")


class WorkspaceBrokenError(DistWorkspaceError):
    """Raised when a manifest was found but could not be turned into a workspace."""

    def __init__(self, manifest_path: Path, cause: Exception) -> None:
        self.manifest_path = manifest_path
        self.cause = cause
        super().__init__(f"Failed to read workspace at {manifest_path}: {cause}")


class WorkspaceMissingError(DistWorkspaceError):
    """Raised when a search result that was expected to be found is missing."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(str(cause))


class MemberDirectiveError(DistWorkspaceError, ValueError):
    """Base error for malformed workspace member strings."""

    def __init__(self, value: str, message: str) -> None:
        self.value = value
        super().__init__(message)


class NoPrefixError(MemberDirectiveError):
    def __init__(self, value: str) -> None:
        super().__init__(
            value,
            f"workspace member '{value}' has no ecosystem prefix "
            "(expected something like 'dist:path/to/package')",
        )


class UnknownPrefixError(MemberDirectiveError):
    def __init__(self, prefix: str, value: str) -> None:
        self.prefix = prefix
        super().__init__(value, f"workspace member '{value}' has unknown prefix '{prefix}'")


class DelegatedEcosystemError(DistWorkspaceError):
    """Raised when an ecosystem resolver fails for a workspace member."""

    def __init__(self, ecosystem: str, directory: Path, cause: Exception) -> None:
        self.ecosystem = ecosystem
        self.directory = directory
        self.cause = cause
        super().__init__(f"{ecosystem} resolver failed for {directory}: {cause}")


class ManifestError(DistWorkspaceError):
    """Manifest failure that carries enough context to point at the source.

    ``line`` and ``column`` are 1-based. ``source_text`` may be empty when the
    error is not tied to the file contents (for example a missing field).
    """

    def __init__(
        self,
        source_path: Path,
        details: str,
        *,
        source_text: str = "",
        line: int = 1,
        column: int = 1,
    ) -> None:
        self.source_path = source_path
        self.details = details
        self.source_text = source_text
        self.line = line
        self.column = column
        super().__init__(f"{source_path}:{line}:{column}: {details}")

    def render(self) -> str:
        """Return a human-readable diagnostic with a caret under the span."""
        lines = [f"error: {self.details}", f"  --> {self.source_path}:{self.line}:{self.column}"]
        source_lines = self.source_text.splitlines()
        if 0 < self.line <= len(source_lines):
            gutter = str(self.line)
            pad = " " * len(gutter)
            lines.append(f"{pad} |")
            lines.append(f"{gutter} | {source_lines[self.line - 1]}")
            lines.append(f"{pad} | {' ' * (self.column - 1)}^")
        return "\n".join(lines)


class ManifestLoadError(ManifestError):
    """Raised when a manifest file cannot be read."""


class ManifestParseError(ManifestError):
    """Raised when a manifest is not syntactically valid."""


class ManifestValidationError(ManifestError):
    """Raised when a manifest parses but violates the expected structure."""
