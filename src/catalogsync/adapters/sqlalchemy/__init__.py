"""SQLAlchemy adapter package for catalogsync."""

from __future__ import annotations

from .mappings import create_all_tables, metadata
from .repositories import (
    SqlAlchemyActorDefinitionStore,
    SqlAlchemyProtocolVersionRangeProvider,
    SqlAlchemySupportStateUpdater,
)
from .unit_of_work import (
    SqlAlchemyDefinitionUnitOfWork,
    StartupError,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyActorDefinitionStore",
    "SqlAlchemyDefinitionUnitOfWork",
    "SqlAlchemyProtocolVersionRangeProvider",
    "SqlAlchemySupportStateUpdater",
    "StartupError",
    "create_all_tables",
    "metadata",
    "shutdown",
    "startup",
]
