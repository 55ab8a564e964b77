"""Application configuration helpers."""

from __future__ import annotations

from .catalog import CatalogConfig, get_catalog_config
from .env import env_flag, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .logging import configure_logging
from .metrics import MetricsExportConfig, get_metrics_export_config
from .reconciliation import (
    DEFINITION_PROCESSED_METRIC,
    ReconciliationConfig,
    get_reconciliation_config,
)
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "DEFINITION_PROCESSED_METRIC",
    "CatalogConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "MetricsExportConfig",
    "MissingConfigurationError",
    "ReconciliationConfig",
    "StorageConfig",
    "configure_logging",
    "env_flag",
    "get_catalog_config",
    "get_database_config",
    "get_metrics_export_config",
    "get_reconciliation_config",
    "get_storage_config",
    "require_env_vars",
]
