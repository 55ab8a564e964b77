"""Usage policy for replacing default versions.

An actor definition that is in use must not have its default version swapped
underneath running workloads unless the caller forces it. Non-versioned
metadata (name, documentation, icon, ...) is always refreshed.

This stage is deterministic given its arguments; it reads nothing else.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from .contracts import ApplyStrategy

if TYPE_CHECKING:
    from catalogsync.domain.model import ActorDefinitionVersion, CatalogEntry


class DecideApplyStrategy(Protocol):
    """Choose the write a catalog entry needs given the persisted default version."""

    def __call__(
        self,
        existing_version: ActorDefinitionVersion | None,
        entry: CatalogEntry,
        *,
        id_in_use: bool,
        force_update_all: bool,
    ) -> ApplyStrategy: ...


def decide(
    existing_version: ActorDefinitionVersion | None,
    entry: CatalogEntry,
    *,
    id_in_use: bool,
    force_update_all: bool,
) -> ApplyStrategy:
    if existing_version is None:
        return ApplyStrategy.CREATE
    if entry.docker_image_tag == existing_version.docker_image_tag:
        return ApplyStrategy.UPDATE_METADATA_ONLY
    if not id_in_use or force_update_all:
        return ApplyStrategy.UPDATE_DEFAULT
    return ApplyStrategy.UPDATE_METADATA_ONLY
