"""Catalog location configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .env import require_env_vars

CATALOG_PATH_ENV = "CATALOGSYNC_CATALOG_PATH"


@dataclass(frozen=True, slots=True)
class CatalogConfig:
    """Where the connector registry file lives."""

    path: Path


def get_catalog_config(*, path: str | Path | None = None) -> CatalogConfig:
    if path is not None:
        return CatalogConfig(path=Path(path).expanduser())
    values = require_env_vars((CATALOG_PATH_ENV,))
    return CatalogConfig(path=Path(values[CATALOG_PATH_ENV]).expanduser())
