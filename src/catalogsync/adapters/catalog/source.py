"""Catalog source backed by a registry JSON file on disk."""

from __future__ import annotations

import json
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING
from uuid import UUID

from pydantic import BaseModel, ValidationError

from catalogsync.domain.errors import CatalogFormatError
from catalogsync.domain.model import ActorType, RejectedCatalogRecord

from .schema import ConnectorRegistry, RegistryDestinationDefinition, RegistrySourceDefinition
from .translator import translate_destination_definition, translate_source_definition

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from catalogsync.domain.model import CatalogEntry

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _LoadedCatalog:
    sources: tuple[CatalogEntry, ...]
    destinations: tuple[CatalogEntry, ...]
    rejected: tuple[RejectedCatalogRecord, ...]


class LocalCatalogSource:
    """Read source and destination definitions from a registry file.

    The file is read once, on first access. Records that fail schema
    validation are reported through ``rejected_definitions`` when they still
    name a docker repository and tag, and are otherwise skipped with a
    warning. A definition id that appears twice within one list makes the
    whole catalog invalid.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._loaded: _LoadedCatalog | None = None

    def source_definitions(self) -> Sequence[CatalogEntry]:
        return self._catalog().sources

    def destination_definitions(self) -> Sequence[CatalogEntry]:
        return self._catalog().destinations

    def rejected_definitions(self) -> Sequence[RejectedCatalogRecord]:
        return self._catalog().rejected

    def _catalog(self) -> _LoadedCatalog:
        if self._loaded is None:
            self._loaded = self._load()
        return self._loaded

    def _load(self) -> _LoadedCatalog:
        registry = self._read_registry()
        sources, rejected_sources = _translate_all(
            registry.sources,
            RegistrySourceDefinition,
            translate_source_definition,
            actor_type=ActorType.SOURCE,
            id_key="sourceDefinitionId",
        )
        destinations, rejected_destinations = _translate_all(
            registry.destinations,
            RegistryDestinationDefinition,
            translate_destination_definition,
            actor_type=ActorType.DESTINATION,
            id_key="destinationDefinitionId",
        )
        rejected = rejected_sources + rejected_destinations
        log.info(
            "Loaded catalog %s: sources=%s, destinations=%s, rejected=%s",
            self.path,
            len(sources),
            len(destinations),
            len(rejected),
        )
        return _LoadedCatalog(sources=sources, destinations=destinations, rejected=rejected)

    def _read_registry(self) -> ConnectorRegistry:
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise CatalogFormatError(f"Could not read catalog {self.path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise CatalogFormatError(f"Catalog {self.path} is not valid JSON: {exc}") from exc
        try:
            return ConnectorRegistry.model_validate(payload)
        except ValidationError as exc:
            raise CatalogFormatError(f"Catalog {self.path} has an invalid layout: {exc}") from exc


def _translate_all[TModel: BaseModel](
    records: list[dict[str, object]],
    model: type[TModel],
    translate: Callable[[TModel], CatalogEntry],
    *,
    actor_type: ActorType,
    id_key: str,
) -> tuple[tuple[CatalogEntry, ...], tuple[RejectedCatalogRecord, ...]]:
    entries: list[CatalogEntry] = []
    rejected: list[RejectedCatalogRecord] = []
    seen: set[object] = set()
    for index, record in enumerate(records):
        try:
            parsed = model.model_validate(record)
        except ValidationError as exc:
            reason = _summarize(exc)
            log.warning(
                "Malformed %s definition #%s (%s): %s",
                actor_type,
                index,
                record.get("dockerRepository", "<unknown>"),
                reason,
            )
            rejection = _rejection(record, actor_type=actor_type, id_key=id_key, reason=reason)
            if rejection is not None:
                rejected.append(rejection)
            continue
        entry = translate(parsed)
        if entry.definition_id in seen:
            raise CatalogFormatError(
                f"Duplicate {actor_type} definition id {entry.definition_id} "
                f"({entry.docker_repository})"
            )
        seen.add(entry.definition_id)
        entries.append(entry)
    return tuple(entries), tuple(rejected)


def _rejection(
    record: dict[str, object],
    *,
    actor_type: ActorType,
    id_key: str,
    reason: str,
) -> RejectedCatalogRecord | None:
    repository = record.get("dockerRepository")
    tag = record.get("dockerImageTag")
    if not isinstance(repository, str) or not isinstance(tag, str):
        return None
    definition_id: UUID | None
    try:
        definition_id = UUID(str(record.get(id_key)))
    except ValueError:
        definition_id = None
    return RejectedCatalogRecord(
        actor_type=actor_type,
        docker_repository=repository,
        docker_image_tag=tag,
        reason=reason,
        definition_id=definition_id,
    )


def _summarize(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or '<record>'}: {error['msg']}"
        for error in exc.errors(include_url=False)
    )
