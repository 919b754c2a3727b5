"""Workspace member directives: ``"prefix:relative/path"`` strings."""

from __future__ import annotations

from collections.abc import Container
from dataclasses import dataclass
from pathlib import PurePosixPath

from .errors import NoPrefixError, UnknownPrefixError
from .models import Ecosystem

SEPARATOR = ":"

_BY_PREFIX = {ecosystem.value: ecosystem for ecosystem in Ecosystem}


@dataclass(frozen=True)
class WorkspaceMember:
    """A workspace member: which ecosystem describes it and where it lives.

    ``path`` is relative to the workspace directory and is not checked for
    existence. ``str()`` renders the canonical ``prefix:path`` form, which
    ``parse`` reads back to an equal value.
    """

    ecosystem: Ecosystem
    path: PurePosixPath

    def __str__(self) -> str:
        return f"{self.ecosystem.value}{SEPARATOR}{self.path}"

    @classmethod
    def parse(
        cls,
        value: str,
        enabled: Container[Ecosystem] | None = None,
    ) -> WorkspaceMember:
        """Parse a member string.

        ``enabled`` restricts the accepted ecosystems to those with a
        registered resolver; the generic ecosystem is always accepted.

        Raises:
            NoPrefixError: If the string has no ``:`` separator.
            UnknownPrefixError: If the prefix is not an enabled ecosystem.
        """
        prefix, sep, path = value.partition(SEPARATOR)
        if not sep:
            raise NoPrefixError(value)

        ecosystem = _BY_PREFIX.get(prefix)
        if ecosystem is None:
            raise UnknownPrefixError(prefix, value)
        if ecosystem is not Ecosystem.GENERIC and enabled is not None and ecosystem not in enabled:
            raise UnknownPrefixError(prefix, value)

        return cls(ecosystem=ecosystem, path=PurePosixPath(path))
