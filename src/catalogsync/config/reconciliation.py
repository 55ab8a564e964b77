"""Reconciliation defaults."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_flag

DEFINITION_PROCESSED_METRIC = "connector_registry_definition_processed"
FORCE_UPDATE_ALL_ENV = "CATALOGSYNC_FORCE_UPDATE_ALL"


@dataclass(frozen=True, slots=True)
class ReconciliationConfig:
    force_update_all: bool = False
    metric_name: str = DEFINITION_PROCESSED_METRIC


def get_reconciliation_config(*, force_update_all: bool | None = None) -> ReconciliationConfig:
    if force_update_all is None:
        force_update_all = env_flag(FORCE_UPDATE_ALL_ENV)
    return ReconciliationConfig(force_update_all=force_update_all)
