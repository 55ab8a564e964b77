"""Catalog entries and the persisted artifacts derived from them.

``CatalogEntry`` is what the registry declares. ``ActorDefinition``,
``ActorDefinitionVersion`` and ``ActorDefinitionBreakingChange`` are what the
store persists. All of them are immutable value objects; the store assigns
``version_id`` when a version row is written.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .enums import SupportState

if TYPE_CHECKING:
    from datetime import date
    from uuid import UUID

    from .enums import ActorType, ReleaseStage, SupportLevel

DEFAULT_PROTOCOL_VERSION = "0.2.0"


@dataclass(frozen=True, slots=True, kw_only=True)
class BreakingChangeEntry:
    """One breaking change as declared by the catalog (raw strings)."""

    target_version: str
    message: str
    upgrade_deadline: str
    migration_documentation_url: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CatalogEntry:
    """One declared connector definition."""

    definition_id: UUID
    actor_type: ActorType
    name: str
    docker_repository: str
    docker_image_tag: str
    documentation_url: str | None = None
    protocol_version: str = DEFAULT_PROTOCOL_VERSION
    breaking_changes: tuple[BreakingChangeEntry, ...] = ()
    icon: str | None = None
    support_level: SupportLevel | None = None
    release_stage: ReleaseStage | None = None
    release_date: str | None = None
    tombstone: bool = False
    public: bool = True
    custom: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class RejectedCatalogRecord:
    """A catalog record that could not be read into a ``CatalogEntry``."""

    actor_type: ActorType
    docker_repository: str
    docker_image_tag: str
    reason: str
    definition_id: UUID | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ActorDefinition:
    """Non-versioned definition metadata."""

    id: UUID
    actor_type: ActorType
    name: str
    docker_repository: str
    documentation_url: str | None = None
    icon: str | None = None
    support_level: SupportLevel | None = None
    release_stage: ReleaseStage | None = None
    tombstone: bool = False
    public: bool = True
    custom: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class ActorDefinitionVersion:
    """A concrete connector version; the default one is served to unpinned actors."""

    actor_definition_id: UUID
    docker_repository: str
    docker_image_tag: str
    protocol_version: str
    documentation_url: str | None = None
    support_level: SupportLevel | None = None
    release_stage: ReleaseStage | None = None
    release_date: date | None = None
    support_state: SupportState = SupportState.SUPPORTED
    version_id: UUID | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class ActorDefinitionBreakingChange:
    """A version boundary that requires migration before upgrading past it."""

    actor_definition_id: UUID
    version: str
    message: str
    upgrade_deadline: date
    migration_documentation_url: str | None = None
