"""Port for reading the declared connector catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from catalogsync.domain.model import CatalogEntry, RejectedCatalogRecord


@runtime_checkable
class CatalogSource(Protocol):
    """Supplies the catalog entries to reconcile, in no particular order."""

    def source_definitions(self) -> Sequence[CatalogEntry]: ...

    def destination_definitions(self) -> Sequence[CatalogEntry]: ...

    def rejected_definitions(self) -> Sequence[RejectedCatalogRecord]:
        """Records of either list that could not be read as catalog entries."""
        ...


__all__ = ["CatalogSource"]
