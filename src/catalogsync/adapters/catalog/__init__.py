"""Connector registry catalog adapter package."""

from __future__ import annotations

from .schema import (
    ConnectorRegistry,
    RegistryDestinationDefinition,
    RegistrySourceDefinition,
)
from .source import LocalCatalogSource
from .translator import translate_destination_definition, translate_source_definition

__all__ = [
    "ConnectorRegistry",
    "LocalCatalogSource",
    "RegistryDestinationDefinition",
    "RegistrySourceDefinition",
    "translate_destination_definition",
    "translate_source_definition",
]
