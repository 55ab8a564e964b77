"""Domain model for connector definitions."""

from __future__ import annotations

from .definitions import (
    DEFAULT_PROTOCOL_VERSION,
    ActorDefinition,
    ActorDefinitionBreakingChange,
    ActorDefinitionVersion,
    BreakingChangeEntry,
    CatalogEntry,
    RejectedCatalogRecord,
)
from .enums import ActorType, ReleaseStage, SupportLevel, SupportState
from .versions import InvalidSemanticVersionError, ProtocolVersionRange, SemanticVersion

__all__ = [
    "DEFAULT_PROTOCOL_VERSION",
    "ActorDefinition",
    "ActorDefinitionBreakingChange",
    "ActorDefinitionVersion",
    "ActorType",
    "BreakingChangeEntry",
    "CatalogEntry",
    "InvalidSemanticVersionError",
    "ProtocolVersionRange",
    "RejectedCatalogRecord",
    "ReleaseStage",
    "SemanticVersion",
    "SupportLevel",
    "SupportState",
]
