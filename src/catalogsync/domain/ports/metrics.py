"""Port for emitting counters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping


@runtime_checkable
class MetricsSink(Protocol):
    """Counter sink; implementations must tolerate arbitrary attribute keys."""

    def count(self, name: str, value: int, *, attributes: Mapping[str, str]) -> None: ...
