"""Support-state rules for persisted connector versions.

A version is deprecated while a newer breaking change is pending, and
unsupported once the upgrade deadline of such a change has passed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from catalogsync.domain.model import SemanticVersion, SupportState

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date

    from catalogsync.domain.model import ActorDefinitionBreakingChange


def support_state_for(
    docker_image_tag: str,
    breaking_changes: Iterable[ActorDefinitionBreakingChange],
    *,
    today: date,
) -> SupportState | None:
    """Return the support state of ``docker_image_tag``, or ``None`` if the tag is not semver."""

    current = SemanticVersion.try_parse(docker_image_tag)
    if current is None:
        return None

    pending = [
        change
        for change in breaking_changes
        if (target := SemanticVersion.try_parse(change.version)) is not None and target > current
    ]
    if not pending:
        return SupportState.SUPPORTED
    if any(change.upgrade_deadline < today for change in pending):
        return SupportState.UNSUPPORTED
    return SupportState.DEPRECATED
