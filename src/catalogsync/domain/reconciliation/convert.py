"""Translate catalog entries into persistable artifacts.

Every function here is pure. Malformed values surface as
``DefinitionConversionError`` so the engine can isolate the offending entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from catalogsync.domain.errors import DefinitionConversionError
from catalogsync.domain.model import (
    ActorDefinition,
    ActorDefinitionBreakingChange,
    ActorDefinitionVersion,
    InvalidSemanticVersionError,
    SemanticVersion,
)

if TYPE_CHECKING:
    from catalogsync.domain.model import CatalogEntry


@dataclass(frozen=True, slots=True)
class ConvertedDefinition:
    definition: ActorDefinition
    version: ActorDefinitionVersion
    breaking_changes: tuple[ActorDefinitionBreakingChange, ...]


def to_definition_metadata(entry: CatalogEntry) -> ActorDefinition:
    return ActorDefinition(
        id=entry.definition_id,
        actor_type=entry.actor_type,
        name=entry.name,
        docker_repository=entry.docker_repository,
        documentation_url=entry.documentation_url,
        icon=entry.icon,
        support_level=entry.support_level,
        release_stage=entry.release_stage,
        tombstone=entry.tombstone,
        public=entry.public,
        custom=entry.custom,
    )


def to_default_version(entry: CatalogEntry) -> ActorDefinitionVersion:
    """Build the version record; the image tag must be a semantic version."""

    try:
        SemanticVersion.parse(entry.docker_image_tag)
    except InvalidSemanticVersionError as exc:
        raise DefinitionConversionError(
            entry.docker_repository, entry.docker_image_tag, str(exc)
        ) from exc

    return ActorDefinitionVersion(
        actor_definition_id=entry.definition_id,
        docker_repository=entry.docker_repository,
        docker_image_tag=entry.docker_image_tag,
        protocol_version=entry.protocol_version,
        documentation_url=entry.documentation_url,
        support_level=entry.support_level,
        release_stage=entry.release_stage,
        release_date=_parse_date(entry, entry.release_date, field_name="releaseDate"),
    )


def to_breaking_changes(entry: CatalogEntry) -> tuple[ActorDefinitionBreakingChange, ...]:
    """Return the entry's breaking changes ordered by target version."""

    keyed: list[tuple[SemanticVersion, ActorDefinitionBreakingChange]] = []
    for change in entry.breaking_changes:
        try:
            target = SemanticVersion.parse(change.target_version)
        except InvalidSemanticVersionError as exc:
            raise DefinitionConversionError(
                entry.docker_repository,
                entry.docker_image_tag,
                f"breaking change has invalid target version: {exc}",
            ) from exc
        deadline = _parse_date(entry, change.upgrade_deadline, field_name="upgradeDeadline")
        if deadline is None:
            raise DefinitionConversionError(
                entry.docker_repository,
                entry.docker_image_tag,
                f"breaking change {change.target_version} has no upgrade deadline",
            )
        keyed.append(
            (
                target,
                ActorDefinitionBreakingChange(
                    actor_definition_id=entry.definition_id,
                    version=str(target),
                    message=change.message,
                    upgrade_deadline=deadline,
                    migration_documentation_url=change.migration_documentation_url,
                ),
            )
        )
    keyed.sort(key=lambda item: item[0])
    return tuple(change for _target, change in keyed)


def convert_entry(entry: CatalogEntry) -> ConvertedDefinition:
    return ConvertedDefinition(
        definition=to_definition_metadata(entry),
        version=to_default_version(entry),
        breaking_changes=to_breaking_changes(entry),
    )


def _parse_date(entry: CatalogEntry, value: str | None, *, field_name: str) -> date | None:
    if value is None or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise DefinitionConversionError(
            entry.docker_repository,
            entry.docker_image_tag,
            f"{field_name} is not an ISO date: {value!r}",
        ) from exc
