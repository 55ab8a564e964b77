"""Orchestrator for definition reconciliation.

One ``apply`` call:
1) loads the persisted-state snapshot and the protocol range once
2) gates, converts, decides and writes every catalog entry independently
3) records exactly one outcome per entry
4) asks the support-state updater to recompute, once, after all writes

Per-entry failures (incompatible protocol, malformed entry, rejected write)
become failure outcomes. A snapshot load failure aborts before any write;
any other escaping error still leaves step 4 run exactly once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from catalogsync.domain.errors import (
    DefinitionConversionError,
    DefinitionWriteError,
    SnapshotLoadError,
)

from .compatibility import is_supported
from .contracts import (
    OUTCOME_BY_STRATEGY,
    ApplyStrategy,
    OutcomeKind,
    PersistedDefinitionState,
    ReconciliationOutcome,
    ReconciliationResult,
)
from .convert import convert_entry
from .policy import decide

if TYPE_CHECKING:
    from collections.abc import Iterable

    from catalogsync.domain.model import (
        CatalogEntry,
        ProtocolVersionRange,
        RejectedCatalogRecord,
    )
    from catalogsync.domain.ports import (
        ActorDefinitionStore,
        CatalogSource,
        ProtocolVersionRangeProvider,
        SupportStateUpdater,
    )

    from .outcomes import OutcomeRecorder
    from .policy import DecideApplyStrategy

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationEngine:
    """Bring persisted actor definitions in line with a catalog."""

    store: ActorDefinitionStore
    protocol_versions: ProtocolVersionRangeProvider
    support_states: SupportStateUpdater
    recorder: OutcomeRecorder
    policy: DecideApplyStrategy = field(default=decide)

    def apply_catalog(
        self,
        catalog: CatalogSource,
        *,
        force_update_all: bool = False,
    ) -> ReconciliationResult:
        """Reconcile both definition lists supplied by ``catalog``."""

        return self.apply(
            catalog.source_definitions(),
            catalog.destination_definitions(),
            force_update_all=force_update_all,
            rejected=catalog.rejected_definitions(),
        )

    def apply(
        self,
        source_entries: Iterable[CatalogEntry],
        destination_entries: Iterable[CatalogEntry],
        *,
        force_update_all: bool = False,
        rejected: Iterable[RejectedCatalogRecord] = (),
    ) -> ReconciliationResult:
        """Reconcile source and destination entries, then refresh support states.

        ``rejected`` records never reach the store; each one is recorded as a
        failed conversion after the readable entries. Support states are
        refreshed once even when a collaborator error escapes the loop.
        """

        state, supported_range = self._load_state()
        log.info(
            "Starting definition reconciliation: persisted=%s, in_use=%s, "
            "protocol_range=%s, force_update_all=%s",
            len(state.default_versions_by_id),
            len(state.ids_in_use),
            supported_range,
            force_update_all,
        )

        result = ReconciliationResult()
        try:
            for entries in (source_entries, destination_entries):
                for entry in entries:
                    self._finish(
                        result,
                        self._process_entry(
                            entry,
                            state=state,
                            supported_range=supported_range,
                            force_update_all=force_update_all,
                        ),
                    )
            for record in rejected:
                self._finish(result, ReconciliationOutcome.for_rejected(record))
        finally:
            self.support_states.update_support_states()

        log.info(
            "Finished definition reconciliation: processed=%s, succeeded=%s, failed=%s",
            len(result.outcomes),
            result.succeeded,
            result.failed,
        )
        return result

    def _finish(self, result: ReconciliationResult, outcome: ReconciliationOutcome) -> None:
        self.recorder.record(outcome)
        result.add(outcome)

    def _load_state(self) -> tuple[PersistedDefinitionState, ProtocolVersionRange | None]:
        try:
            state = PersistedDefinitionState.capture(
                self.store.ids_in_use(),
                self.store.default_versions_by_id(),
            )
            supported_range = self.protocol_versions.current_range()
        except Exception as exc:
            raise SnapshotLoadError("Could not load persisted definition state") from exc
        return state, supported_range

    def _process_entry(
        self,
        entry: CatalogEntry,
        *,
        state: PersistedDefinitionState,
        supported_range: ProtocolVersionRange | None,
        force_update_all: bool,
    ) -> ReconciliationOutcome:
        if not is_supported(entry.protocol_version, supported_range):
            return ReconciliationOutcome.for_entry(
                entry,
                OutcomeKind.INCOMPATIBLE_PROTOCOL_VERSION,
                reason=f"protocol {entry.protocol_version} outside {supported_range}",
            )

        try:
            converted = convert_entry(entry)
        except DefinitionConversionError as exc:
            return ReconciliationOutcome.for_entry(
                entry,
                OutcomeKind.DEFINITION_CONVERSION_FAILED,
                reason=exc.reason,
            )

        strategy = self.policy(
            state.default_version_for(entry.definition_id),
            entry,
            id_in_use=state.is_in_use(entry.definition_id),
            force_update_all=force_update_all,
        )

        try:
            if strategy in (ApplyStrategy.CREATE, ApplyStrategy.UPDATE_DEFAULT):
                self.store.write_metadata(
                    converted.definition,
                    converted.version,
                    converted.breaking_changes,
                )
            elif strategy is ApplyStrategy.UPDATE_METADATA_ONLY:
                self.store.update_metadata_only(converted.definition)
        except DefinitionWriteError as exc:
            return ReconciliationOutcome.for_entry(
                entry,
                OutcomeKind.DEFINITION_WRITE_FAILED,
                reason=exc.reason,
            )

        return ReconciliationOutcome.for_entry(entry, OUTCOME_BY_STRATEGY[strategy])
