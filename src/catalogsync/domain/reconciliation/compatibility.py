"""Protocol compatibility gate.

A catalog entry is only reconciled when the protocol version declared by its
connector spec lies inside the range the platform supports. A missing range
lets everything through so a fresh installation can bootstrap before a range
has been recorded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from catalogsync.domain.model import SemanticVersion

if TYPE_CHECKING:
    from catalogsync.domain.model import ProtocolVersionRange


def is_supported(
    declared_protocol_version: str | None,
    supported: ProtocolVersionRange | None,
) -> bool:
    """Return whether ``declared_protocol_version`` falls inside ``supported`` (inclusive)."""

    if supported is None:
        return True
    declared = SemanticVersion.try_parse(declared_protocol_version)
    if declared is None:
        return False
    return supported.contains(declared)
