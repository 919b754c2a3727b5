"""Registry of ecosystem resolvers keyed by workspace member prefix.

The generic ecosystem is handled by the assembler itself. Every other
ecosystem is enabled by registering an :class:`EcosystemHandler`; member
directives naming an ecosystem without a handler are rejected at parse time.

Compiled-ecosystem handlers return a workspace search outcome, which the
assembler keeps as a nested workspace. Interpreted-ecosystem handlers return
a list of packages, which are flattened into the containing workspace.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypeAlias

from ..errors import UnknownPrefixError
from ..models import Ecosystem, PackageRecord, WorkspaceSearch
from . import cargo, npm

CompiledResolver: TypeAlias = Callable[[Path, Path | None], WorkspaceSearch]
InterpretedResolver: TypeAlias = Callable[[Path, Path | None], list[PackageRecord]]


@dataclass(slots=True, frozen=True)
class EcosystemHandler:
    """Binds an ecosystem to the callable that resolves its members."""

    ecosystem: Ecosystem
    display_name: str
    resolve: Callable[[Path, Path | None], Any]

    def __post_init__(self) -> None:
        if self.ecosystem is Ecosystem.GENERIC:
            raise ValueError("The generic ecosystem is built in and takes no handler")


EcosystemRegistry: TypeAlias = Mapping[Ecosystem, EcosystemHandler]


def default_handlers() -> dict[Ecosystem, EcosystemHandler]:
    """Return the built-in Cargo and npm handlers."""
    return {
        Ecosystem.CARGO: EcosystemHandler(
            ecosystem=Ecosystem.CARGO,
            display_name="Cargo",
            resolve=cargo.get_workspace,
        ),
        Ecosystem.NPM: EcosystemHandler(
            ecosystem=Ecosystem.NPM,
            display_name="npm",
            resolve=npm.get_packages,
        ),
    }


def get_handler(registry: EcosystemRegistry, ecosystem: Ecosystem, member: str) -> EcosystemHandler:
    """Return the handler for ``ecosystem`` or raise UnknownPrefixError."""
    handler = registry.get(ecosystem)
    if handler is None:
        raise UnknownPrefixError(ecosystem.value, member)
    return handler


__all__ = [
    "CompiledResolver",
    "EcosystemHandler",
    "EcosystemRegistry",
    "InterpretedResolver",
    "default_handlers",
    "get_handler",
]
