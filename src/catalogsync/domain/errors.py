"""Error taxonomy for definition reconciliation."""

from __future__ import annotations


class CatalogSyncError(RuntimeError):
    """Base class for reconciliation failures."""


class DefinitionConversionError(CatalogSyncError, ValueError):
    """A catalog entry could not be turned into persistable artifacts."""

    def __init__(self, docker_repository: str, docker_image_tag: str, reason: str) -> None:
        super().__init__(
            f"Could not convert definition {docker_repository}:{docker_image_tag}: {reason}"
        )
        self.docker_repository = docker_repository
        self.docker_image_tag = docker_image_tag
        self.reason = reason


class DefinitionWriteError(CatalogSyncError):
    """The store rejected the write for a single definition."""

    def __init__(
        self,
        docker_repository: str,
        reason: str,
        *,
        docker_image_tag: str | None = None,
    ) -> None:
        target = docker_repository
        if docker_image_tag:
            target = f"{docker_repository}:{docker_image_tag}"
        super().__init__(f"Could not persist definition {target}: {reason}")
        self.docker_repository = docker_repository
        self.docker_image_tag = docker_image_tag
        self.reason = reason


class SnapshotLoadError(CatalogSyncError):
    """Persisted definition state or the protocol range could not be loaded."""


class CatalogFormatError(CatalogSyncError):
    """The catalog could not be read or violates its structural rules."""
