"""Translate registry payloads into domain catalog entries."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from catalogsync.domain.model import (
    DEFAULT_PROTOCOL_VERSION,
    ActorType,
    BreakingChangeEntry,
    CatalogEntry,
    ReleaseStage,
    SupportLevel,
)

if TYPE_CHECKING:
    from enum import StrEnum
    from uuid import UUID

    from .schema import (
        RegistryDefinition,
        RegistryDestinationDefinition,
        RegistrySourceDefinition,
    )

log = getLogger(__name__)


def translate_source_definition(definition: RegistrySourceDefinition) -> CatalogEntry:
    return _build_entry(
        definition,
        definition_id=definition.source_definition_id,
        actor_type=ActorType.SOURCE,
    )


def translate_destination_definition(definition: RegistryDestinationDefinition) -> CatalogEntry:
    return _build_entry(
        definition,
        definition_id=definition.destination_definition_id,
        actor_type=ActorType.DESTINATION,
    )


def _build_entry(
    definition: RegistryDefinition,
    *,
    definition_id: UUID,
    actor_type: ActorType,
) -> CatalogEntry:
    protocol_version = DEFAULT_PROTOCOL_VERSION
    if definition.spec is not None and definition.spec.protocol_version:
        protocol_version = definition.spec.protocol_version

    breaking_changes: tuple[BreakingChangeEntry, ...] = ()
    if definition.releases is not None:
        breaking_changes = tuple(
            BreakingChangeEntry(
                target_version=target_version,
                message=change.message,
                upgrade_deadline=change.upgrade_deadline,
                migration_documentation_url=change.migration_documentation_url,
            )
            for target_version, change in definition.releases.breaking_changes.items()
        )

    return CatalogEntry(
        definition_id=definition_id,
        actor_type=actor_type,
        name=definition.name,
        docker_repository=definition.docker_repository,
        docker_image_tag=definition.docker_image_tag,
        documentation_url=definition.documentation_url,
        protocol_version=protocol_version,
        breaking_changes=breaking_changes,
        icon=definition.icon,
        support_level=_coerce(SupportLevel, definition.support_level, definition),
        release_stage=_coerce(ReleaseStage, definition.release_stage, definition),
        release_date=definition.release_date,
        tombstone=definition.tombstone,
        public=definition.public,
        custom=definition.custom,
    )


def _coerce[TEnum: StrEnum](
    enum_cls: type[TEnum],
    value: str | None,
    definition: RegistryDefinition,
) -> TEnum | None:
    if value is None:
        return None
    try:
        return enum_cls(value.lower())
    except ValueError:
        log.warning(
            "Ignoring unknown %s %r for %s",
            enum_cls.__name__,
            value,
            definition.docker_repository,
        )
        return None
