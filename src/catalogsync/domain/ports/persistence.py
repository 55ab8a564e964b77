"""Ports for reading and writing persisted actor definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from uuid import UUID

    from catalogsync.domain.model import (
        ActorDefinition,
        ActorDefinitionBreakingChange,
        ActorDefinitionVersion,
        ProtocolVersionRange,
    )


@runtime_checkable
class ActorDefinitionStore(Protocol):
    """Persistence contract for actor definitions and their default versions.

    Both write methods must be atomic from the caller's point of view and raise
    ``DefinitionWriteError`` when the write is rejected.
    """

    def ids_in_use(self) -> set[UUID]: ...

    def default_versions_by_id(self) -> Mapping[UUID, ActorDefinitionVersion]: ...

    def write_metadata(
        self,
        definition: ActorDefinition,
        version: ActorDefinitionVersion,
        breaking_changes: Sequence[ActorDefinitionBreakingChange],
    ) -> None: ...

    def update_metadata_only(self, definition: ActorDefinition) -> None: ...


@runtime_checkable
class ProtocolVersionRangeProvider(Protocol):
    """Supplies the protocol range the platform currently supports (if configured)."""

    def current_range(self) -> ProtocolVersionRange | None: ...


@runtime_checkable
class SupportStateUpdater(Protocol):
    """Recomputes version support states from persisted breaking changes."""

    def update_support_states(self) -> None: ...
