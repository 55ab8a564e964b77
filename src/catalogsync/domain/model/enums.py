"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ActorType(StrEnum):
    SOURCE = "source"
    DESTINATION = "destination"


class SupportLevel(StrEnum):
    COMMUNITY = "community"
    CERTIFIED = "certified"
    ARCHIVED = "archived"
    NONE = "none"


class ReleaseStage(StrEnum):
    ALPHA = "alpha"
    BETA = "beta"
    GENERALLY_AVAILABLE = "generally_available"
    CUSTOM = "custom"


class SupportState(StrEnum):
    """Lifecycle state of a persisted version relative to its breaking changes."""

    SUPPORTED = "supported"
    DEPRECATED = "deprecated"
    UNSUPPORTED = "unsupported"
