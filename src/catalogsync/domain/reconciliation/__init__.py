"""Reconciliation core for applying a connector catalog to persisted definitions.

Layered flow per catalog entry:
1) protocol compatibility gate
2) conversion into definition, default version and breaking changes
3) usage policy decision against the persisted snapshot
4) the single write implied by that decision
5) one recorded outcome
"""

from __future__ import annotations

from .compatibility import is_supported
from .contracts import (
    ApplyStrategy,
    OutcomeKind,
    OutcomeStatus,
    PersistedDefinitionState,
    ReconciliationOutcome,
    ReconciliationResult,
)
from .convert import (
    ConvertedDefinition,
    convert_entry,
    to_breaking_changes,
    to_default_version,
    to_definition_metadata,
)
from .engine import ReconciliationEngine
from .outcomes import OutcomeRecorder
from .policy import decide

__all__ = [
    "ApplyStrategy",
    "ConvertedDefinition",
    "OutcomeKind",
    "OutcomeRecorder",
    "OutcomeStatus",
    "PersistedDefinitionState",
    "ReconciliationEngine",
    "ReconciliationOutcome",
    "ReconciliationResult",
    "convert_entry",
    "decide",
    "is_supported",
    "to_breaking_changes",
    "to_default_version",
    "to_definition_metadata",
]
