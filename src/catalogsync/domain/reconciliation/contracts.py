"""Shared reconciliation contract components.

This module holds only:
- the persisted-state snapshot handed to the decision procedure
- the apply strategy vocabulary
- per-entry outcomes and the run summary built from them
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from uuid import UUID

    from catalogsync.domain.model import (
        ActorDefinitionVersion,
        ActorType,
        CatalogEntry,
        RejectedCatalogRecord,
    )


@dataclass(frozen=True, slots=True)
class PersistedDefinitionState:
    """Snapshot of the store taken once at the start of a reconciliation run."""

    ids_in_use: frozenset[UUID]
    default_versions_by_id: Mapping[UUID, ActorDefinitionVersion]

    @classmethod
    def capture(
        cls,
        ids_in_use: Iterable[UUID],
        default_versions_by_id: Mapping[UUID, ActorDefinitionVersion],
    ) -> PersistedDefinitionState:
        return cls(
            ids_in_use=frozenset(ids_in_use),
            default_versions_by_id=MappingProxyType(dict(default_versions_by_id)),
        )

    def default_version_for(self, definition_id: UUID) -> ActorDefinitionVersion | None:
        return self.default_versions_by_id.get(definition_id)

    def is_in_use(self, definition_id: UUID) -> bool:
        return definition_id in self.ids_in_use


class ApplyStrategy(StrEnum):
    """Policy decision on which write a catalog entry needs."""

    CREATE = "create"
    UPDATE_DEFAULT = "update_default"
    UPDATE_METADATA_ONLY = "update_metadata_only"
    NOOP = "noop"


class OutcomeStatus(StrEnum):
    OK = "ok"
    FAILED = "failed"


class OutcomeKind(StrEnum):
    INITIAL_VERSION_ADDED = "initial_version_added"
    DEFAULT_VERSION_UPDATED = "default_version_updated"
    VERSION_UNCHANGED = "version_unchanged"
    INCOMPATIBLE_PROTOCOL_VERSION = "incompatible_protocol_version"
    DEFINITION_CONVERSION_FAILED = "definition_conversion_failed"
    DEFINITION_WRITE_FAILED = "definition_write_failed"

    @property
    def status(self) -> OutcomeStatus:
        if self in _SUCCESS_KINDS:
            return OutcomeStatus.OK
        return OutcomeStatus.FAILED


_SUCCESS_KINDS = frozenset(
    {
        OutcomeKind.INITIAL_VERSION_ADDED,
        OutcomeKind.DEFAULT_VERSION_UPDATED,
        OutcomeKind.VERSION_UNCHANGED,
    }
)

OUTCOME_BY_STRATEGY: Mapping[ApplyStrategy, OutcomeKind] = MappingProxyType(
    {
        ApplyStrategy.CREATE: OutcomeKind.INITIAL_VERSION_ADDED,
        ApplyStrategy.UPDATE_DEFAULT: OutcomeKind.DEFAULT_VERSION_UPDATED,
        ApplyStrategy.UPDATE_METADATA_ONLY: OutcomeKind.VERSION_UNCHANGED,
        ApplyStrategy.NOOP: OutcomeKind.VERSION_UNCHANGED,
    }
)


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconciliationOutcome:
    """Exactly one of these is produced for every processed catalog record."""

    kind: OutcomeKind
    actor_type: ActorType
    definition_id: UUID | None
    docker_repository: str
    docker_image_tag: str
    reason: str | None = None

    @classmethod
    def for_entry(
        cls,
        entry: CatalogEntry,
        kind: OutcomeKind,
        *,
        reason: str | None = None,
    ) -> ReconciliationOutcome:
        return cls(
            kind=kind,
            actor_type=entry.actor_type,
            definition_id=entry.definition_id,
            docker_repository=entry.docker_repository,
            docker_image_tag=entry.docker_image_tag,
            reason=reason,
        )

    @classmethod
    def for_rejected(cls, record: RejectedCatalogRecord) -> ReconciliationOutcome:
        return cls(
            kind=OutcomeKind.DEFINITION_CONVERSION_FAILED,
            actor_type=record.actor_type,
            definition_id=record.definition_id,
            docker_repository=record.docker_repository,
            docker_image_tag=record.docker_image_tag,
            reason=record.reason,
        )

    @property
    def status(self) -> OutcomeStatus:
        return self.kind.status

    @property
    def succeeded(self) -> bool:
        return self.status is OutcomeStatus.OK


@dataclass(slots=True)
class ReconciliationResult:
    """Summary of one ``apply`` call."""

    outcomes: list[ReconciliationOutcome] = field(
        default_factory=list["ReconciliationOutcome"]
    )

    def add(self, outcome: ReconciliationOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def counts(self) -> Counter[OutcomeKind]:
        return Counter(outcome.kind for outcome in self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.succeeded)

    @property
    def failed(self) -> int:
        return len(self.outcomes) - self.succeeded
