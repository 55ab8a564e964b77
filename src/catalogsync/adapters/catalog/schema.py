"""Minimal Pydantic models for the connector registry file."""

from __future__ import annotations

from uuid import UUID  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field


class RegistryBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RegistryConnectorSpec(RegistryBaseModel):
    protocol_version: str | None = Field(default=None, alias="protocolVersion")


class RegistryBreakingChange(RegistryBaseModel):
    message: str
    upgrade_deadline: str = Field(alias="upgradeDeadline")
    migration_documentation_url: str | None = Field(
        default=None, alias="migrationDocumentationUrl"
    )


class RegistryReleases(RegistryBaseModel):
    breaking_changes: dict[str, RegistryBreakingChange] = Field(
        default_factory=dict, alias="breakingChanges"
    )


class RegistryDefinition(RegistryBaseModel):
    name: str
    docker_repository: str = Field(alias="dockerRepository")
    docker_image_tag: str = Field(alias="dockerImageTag")
    documentation_url: str | None = Field(default=None, alias="documentationUrl")
    icon: str | None = None
    spec: RegistryConnectorSpec | None = None
    releases: RegistryReleases | None = None
    support_level: str | None = Field(default=None, alias="supportLevel")
    release_stage: str | None = Field(default=None, alias="releaseStage")
    release_date: str | None = Field(default=None, alias="releaseDate")
    tombstone: bool = False
    public: bool = True
    custom: bool = False


class RegistrySourceDefinition(RegistryDefinition):
    source_definition_id: UUID = Field(alias="sourceDefinitionId")


class RegistryDestinationDefinition(RegistryDefinition):
    destination_definition_id: UUID = Field(alias="destinationDefinitionId")


class ConnectorRegistry(RegistryBaseModel):
    """Top-level registry document; entries are validated one at a time later."""

    sources: list[dict[str, object]] = Field(default_factory=list)
    destinations: list[dict[str, object]] = Field(default_factory=list)
