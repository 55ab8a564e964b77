"""Domain port definitions for adapters."""

from __future__ import annotations

from .catalog import CatalogSource
from .metrics import MetricsSink
from .persistence import ActorDefinitionStore, ProtocolVersionRangeProvider, SupportStateUpdater
from .unit_of_work import (
    DefinitionRepositories,
    DefinitionUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "ActorDefinitionStore",
    "CatalogSource",
    "DefinitionRepositories",
    "DefinitionUnitOfWork",
    "MetricsSink",
    "ProtocolVersionRangeProvider",
    "RepositoryCollection",
    "SupportStateUpdater",
    "UnitOfWork",
]
