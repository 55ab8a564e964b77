"""SQLAlchemy table metadata for persisted actor definitions."""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Final

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    Enum,
    ForeignKey,
    MetaData,
    String,
    Table,
    UniqueConstraint,
    Uuid,
)

from catalogsync.domain.model import ActorType, ReleaseStage, SupportLevel, SupportState

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]

PROTOCOL_VERSION_MIN_KEY: Final[str] = "protocol_version_min"
PROTOCOL_VERSION_MAX_KEY: Final[str] = "protocol_version_max"

metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

# default_version_id carries no foreign key; versions already reference their definition.
actor_definition_table = Table(
    "actor_definition",
    metadata,
    Column("id", UUIDColumnType, primary_key=True),
    Column("actor_type", Enum(ActorType, native_enum=False), nullable=False),
    Column("name", String, nullable=False),
    Column("docker_repository", String, nullable=False),
    Column("documentation_url", String, nullable=True),
    Column("icon", String, nullable=True),
    Column("support_level", Enum(SupportLevel, native_enum=False), nullable=True),
    Column("release_stage", Enum(ReleaseStage, native_enum=False), nullable=True),
    Column("tombstone", Boolean, nullable=False, default=False),
    Column("public", Boolean, nullable=False, default=True),
    Column("custom", Boolean, nullable=False, default=False),
    Column("default_version_id", UUIDColumnType, nullable=True),
)

actor_definition_version_table = Table(
    "actor_definition_version",
    metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "actor_definition_id",
        UUIDColumnType,
        ForeignKey("actor_definition.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("docker_repository", String, nullable=False),
    Column("docker_image_tag", String, nullable=False),
    Column("protocol_version", String, nullable=False),
    Column("documentation_url", String, nullable=True),
    Column("support_level", Enum(SupportLevel, native_enum=False), nullable=True),
    Column("release_stage", Enum(ReleaseStage, native_enum=False), nullable=True),
    Column("release_date", Date, nullable=True),
    Column(
        "support_state",
        Enum(SupportState, native_enum=False),
        nullable=False,
        default=SupportState.SUPPORTED,
    ),
    UniqueConstraint("actor_definition_id", "docker_image_tag"),
)

actor_definition_breaking_change_table = Table(
    "actor_definition_breaking_change",
    metadata,
    Column(
        "actor_definition_id",
        UUIDColumnType,
        ForeignKey("actor_definition.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("version", String, primary_key=True),
    Column("message", String, nullable=False),
    Column("upgrade_deadline", Date, nullable=False),
    Column("migration_documentation_url", String, nullable=True),
)

actor_table = Table(
    "actor",
    metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "actor_definition_id",
        UUIDColumnType,
        ForeignKey("actor_definition.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("name", String, nullable=False),
    Column("tombstone", Boolean, nullable=False, default=False),
)

platform_metadata_table = Table(
    "platform_metadata",
    metadata,
    Column("key", String, primary_key=True),
    Column("value", String, nullable=False),
)


def create_all_tables(engine: Engine) -> None:
    """Create all tables that do not exist yet."""

    log.info("Creating catalogsync tables")
    metadata.create_all(engine)
