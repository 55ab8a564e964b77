"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import uuid
from collections import defaultdict
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from catalogsync.adapters.sqlalchemy.mappings import (
    PROTOCOL_VERSION_MAX_KEY,
    PROTOCOL_VERSION_MIN_KEY,
    actor_definition_breaking_change_table,
    actor_definition_table,
    actor_definition_version_table,
    actor_table,
    platform_metadata_table,
)
from catalogsync.domain.errors import DefinitionWriteError
from catalogsync.domain.model import (
    ActorDefinitionBreakingChange,
    ActorDefinitionVersion,
    ProtocolVersionRange,
)
from catalogsync.domain.support_states import support_state_for

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence
    from datetime import date

    from sqlalchemy import Row
    from sqlalchemy.orm import Session

    from catalogsync.domain.model import ActorDefinition

log = getLogger(__name__)


class SqlAlchemyActorDefinitionStore:
    """Read the reconciliation snapshot and apply per-definition writes.

    Every write runs inside a SAVEPOINT so a rejected definition leaves the
    surrounding transaction usable for the rest of the batch.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def ids_in_use(self) -> set[uuid.UUID]:
        stmt = (
            select(actor_table.c.actor_definition_id)
            .where(actor_table.c.tombstone.is_(False))
            .distinct()
        )
        return set(self.session.execute(stmt).scalars())

    def default_versions_by_id(self) -> dict[uuid.UUID, ActorDefinitionVersion]:
        version = actor_definition_version_table
        stmt = select(version).join(
            actor_definition_table,
            actor_definition_table.c.default_version_id == version.c.id,
        )
        return {
            row.actor_definition_id: _version_from_row(row)
            for row in self.session.execute(stmt)
        }

    def write_metadata(
        self,
        definition: ActorDefinition,
        version: ActorDefinitionVersion,
        breaking_changes: Sequence[ActorDefinitionBreakingChange],
    ) -> None:
        try:
            with self.session.begin_nested():
                self._upsert_definition(definition)
                version_id = self._upsert_version(version)
                self.session.execute(
                    actor_definition_table.update()
                    .where(actor_definition_table.c.id == definition.id)
                    .values(default_version_id=version_id)
                )
                for change in breaking_changes:
                    self._upsert_breaking_change(change)
        except SQLAlchemyError as exc:
            raise DefinitionWriteError(
                version.docker_repository,
                str(exc),
                docker_image_tag=version.docker_image_tag,
            ) from exc

    def update_metadata_only(self, definition: ActorDefinition) -> None:
        try:
            with self.session.begin_nested():
                self._upsert_definition(definition)
        except SQLAlchemyError as exc:
            raise DefinitionWriteError(definition.docker_repository, str(exc)) from exc

    def breaking_changes_for(self, definition_id: uuid.UUID) -> list[ActorDefinitionBreakingChange]:
        table = actor_definition_breaking_change_table
        stmt = select(table).where(table.c.actor_definition_id == definition_id)
        return [_breaking_change_from_row(row) for row in self.session.execute(stmt)]

    def _upsert_definition(self, definition: ActorDefinition) -> None:
        values = _definition_values(definition)
        exists = self.session.execute(
            select(actor_definition_table.c.id).where(actor_definition_table.c.id == definition.id)
        ).scalar_one_or_none()
        if exists is None:
            self.session.execute(actor_definition_table.insert().values(id=definition.id, **values))
            return
        self.session.execute(
            actor_definition_table.update()
            .where(actor_definition_table.c.id == definition.id)
            .values(**values)
        )

    def _upsert_version(self, version: ActorDefinitionVersion) -> uuid.UUID:
        table = actor_definition_version_table
        values = _version_values(version)
        existing_id = self.session.execute(
            select(table.c.id)
            .where(table.c.actor_definition_id == version.actor_definition_id)
            .where(table.c.docker_image_tag == version.docker_image_tag)
        ).scalar_one_or_none()
        if existing_id is None:
            version_id = version.version_id or uuid.uuid4()
            self.session.execute(table.insert().values(id=version_id, **values))
            return version_id
        self.session.execute(table.update().where(table.c.id == existing_id).values(**values))
        return existing_id

    def _upsert_breaking_change(self, change: ActorDefinitionBreakingChange) -> None:
        table = actor_definition_breaking_change_table
        key = (
            (table.c.actor_definition_id == change.actor_definition_id)
            & (table.c.version == change.version)
        )
        values = {
            "message": change.message,
            "upgrade_deadline": change.upgrade_deadline,
            "migration_documentation_url": change.migration_documentation_url,
        }
        exists = self.session.execute(select(table.c.version).where(key)).scalar_one_or_none()
        if exists is None:
            self.session.execute(
                table.insert().values(
                    actor_definition_id=change.actor_definition_id,
                    version=change.version,
                    **values,
                )
            )
            return
        self.session.execute(table.update().where(key).values(**values))


class SqlAlchemyProtocolVersionRangeProvider:
    """Protocol range stored as two keys in ``platform_metadata``."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def current_range(self) -> ProtocolVersionRange | None:
        table = platform_metadata_table
        stmt = select(table.c.key, table.c.value).where(
            table.c.key.in_((PROTOCOL_VERSION_MIN_KEY, PROTOCOL_VERSION_MAX_KEY))
        )
        stored: dict[str, str] = {key: value for key, value in self.session.execute(stmt)}
        min_version = stored.get(PROTOCOL_VERSION_MIN_KEY)
        max_version = stored.get(PROTOCOL_VERSION_MAX_KEY)
        if min_version is None or max_version is None:
            return None
        return ProtocolVersionRange.from_strings(min_version, max_version)

    def store_range(self, supported: ProtocolVersionRange) -> None:
        table = platform_metadata_table
        for key, value in (
            (PROTOCOL_VERSION_MIN_KEY, str(supported.min)),
            (PROTOCOL_VERSION_MAX_KEY, str(supported.max)),
        ):
            self.session.execute(table.delete().where(table.c.key == key))
            self.session.execute(table.insert().values(key=key, value=value))


def _today() -> date:
    return datetime.now(UTC).date()


class SqlAlchemySupportStateUpdater:
    """Recompute ``support_state`` for every persisted version."""

    def __init__(self, session: Session, *, today: Callable[[], date] = _today) -> None:
        self.session = session
        self._today = today

    def update_support_states(self) -> None:
        today = self._today()
        changes_by_definition: dict[uuid.UUID, list[ActorDefinitionBreakingChange]] = defaultdict(
            list
        )
        for row in self.session.execute(select(actor_definition_breaking_change_table)):
            change = _breaking_change_from_row(row)
            changes_by_definition[change.actor_definition_id].append(change)

        table = actor_definition_version_table
        rows = self.session.execute(
            select(
                table.c.id,
                table.c.actor_definition_id,
                table.c.docker_image_tag,
                table.c.support_state,
            )
        ).all()
        changed = 0
        for version_id, definition_id, tag, current_state in rows:
            state = support_state_for(
                tag,
                changes_by_definition.get(definition_id, ()),
                today=today,
            )
            if state is None or state == current_state:
                continue
            self.session.execute(
                table.update().where(table.c.id == version_id).values(support_state=state)
            )
            changed += 1
        log.info("Updated support states: versions=%s, changed=%s", len(rows), changed)


def _definition_values(definition: ActorDefinition) -> dict[str, Any]:
    return {
        "actor_type": definition.actor_type,
        "name": definition.name,
        "docker_repository": definition.docker_repository,
        "documentation_url": definition.documentation_url,
        "icon": definition.icon,
        "support_level": definition.support_level,
        "release_stage": definition.release_stage,
        "tombstone": definition.tombstone,
        "public": definition.public,
        "custom": definition.custom,
    }


def _version_values(version: ActorDefinitionVersion) -> dict[str, Any]:
    return {
        "actor_definition_id": version.actor_definition_id,
        "docker_repository": version.docker_repository,
        "docker_image_tag": version.docker_image_tag,
        "protocol_version": version.protocol_version,
        "documentation_url": version.documentation_url,
        "support_level": version.support_level,
        "release_stage": version.release_stage,
        "release_date": version.release_date,
        "support_state": version.support_state,
    }


def _version_from_row(row: Row[Any]) -> ActorDefinitionVersion:
    mapping: Mapping[str, Any] = row._mapping  # noqa: SLF001
    return ActorDefinitionVersion(
        version_id=mapping["id"],
        actor_definition_id=mapping["actor_definition_id"],
        docker_repository=mapping["docker_repository"],
        docker_image_tag=mapping["docker_image_tag"],
        protocol_version=mapping["protocol_version"],
        documentation_url=mapping["documentation_url"],
        support_level=mapping["support_level"],
        release_stage=mapping["release_stage"],
        release_date=mapping["release_date"],
        support_state=mapping["support_state"],
    )


def _breaking_change_from_row(row: Row[Any]) -> ActorDefinitionBreakingChange:
    mapping: Mapping[str, Any] = row._mapping  # noqa: SLF001
    return ActorDefinitionBreakingChange(
        actor_definition_id=mapping["actor_definition_id"],
        version=mapping["version"],
        message=mapping["message"],
        upgrade_deadline=mapping["upgrade_deadline"],
        migration_documentation_url=mapping["migration_documentation_url"],
    )


if TYPE_CHECKING:
    from typing import cast

    from catalogsync.domain.ports import (
        ActorDefinitionStore,
        ProtocolVersionRangeProvider,
        SupportStateUpdater,
    )

    _session_stub = cast("Session", object())
    _store_check: ActorDefinitionStore = SqlAlchemyActorDefinitionStore(_session_stub)
    _range_check: ProtocolVersionRangeProvider = SqlAlchemyProtocolVersionRangeProvider(
        _session_stub
    )
    _support_check: SupportStateUpdater = SqlAlchemySupportStateUpdater(_session_stub)
