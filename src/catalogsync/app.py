"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from catalogsync.adapters.catalog import LocalCatalogSource
from catalogsync.adapters.metrics import LoggingMetricsSink
from catalogsync.adapters.sqlalchemy.repositories import SqlAlchemyProtocolVersionRangeProvider
from catalogsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyDefinitionUnitOfWork,
    is_started,
    startup,
)
from catalogsync.config import get_catalog_config, get_reconciliation_config
from catalogsync.domain.model import ProtocolVersionRange
from catalogsync.domain.ports.unit_of_work import DefinitionUnitOfWork
from catalogsync.domain.reconciliation import OutcomeRecorder, ReconciliationEngine

if TYPE_CHECKING:
    from pathlib import Path

    from catalogsync.domain.ports import CatalogSource, MetricsSink
    from catalogsync.domain.reconciliation import ReconciliationResult

UnitOfWorkFactory = Callable[[], DefinitionUnitOfWork]


log = getLogger(__name__)


def _ensure_started(*, database_uri: str | None) -> None:
    if not is_started():
        startup(database_uri=database_uri)


def apply_catalog_definitions(
    *,
    catalog: CatalogSource | None = None,
    catalog_path: str | Path | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    metrics: MetricsSink | None = None,
    force_update_all: bool | None = None,
    database_uri: str | None = None,
) -> ReconciliationResult:
    """Apply a connector catalog to the persisted actor definitions.

    The whole run shares one unit of work and is committed once at the end.
    A ``SnapshotLoadError`` (or any other escaping exception) rolls it back.
    """

    config = get_reconciliation_config(force_update_all=force_update_all)
    if catalog is None:
        catalog = LocalCatalogSource(get_catalog_config(path=catalog_path).path)
    if unit_of_work_factory is None:
        _ensure_started(database_uri=database_uri)
        unit_of_work_factory = SqlAlchemyDefinitionUnitOfWork
    recorder = OutcomeRecorder(metrics or LoggingMetricsSink(), metric_name=config.metric_name)

    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        engine = ReconciliationEngine(
            store=repositories.definitions,
            protocol_versions=repositories.protocol_versions,
            support_states=repositories.support_states,
            recorder=recorder,
        )
        result = engine.apply_catalog(catalog, force_update_all=config.force_update_all)
        uow.commit()

    counts = result.counts
    log.info(
        "Catalog applied: %s",
        ", ".join(f"{kind}={counts[kind]}" for kind in sorted(counts)) or "no entries",
    )
    return result


def set_protocol_version_range(
    min_version: str,
    max_version: str,
    *,
    database_uri: str | None = None,
) -> ProtocolVersionRange:
    """Persist the protocol range the platform accepts."""

    supported = ProtocolVersionRange.from_strings(min_version, max_version)
    _ensure_started(database_uri=database_uri)
    with SqlAlchemyDefinitionUnitOfWork() as uow:
        SqlAlchemyProtocolVersionRangeProvider(uow.session).store_range(supported)
        uow.commit()
    log.info("Stored supported protocol range %s", supported)
    return supported
