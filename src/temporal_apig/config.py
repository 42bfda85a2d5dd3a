"""Configuration for the gateway process.

Configuration is loaded once at startup from:
- environment variables
- and a local `.env` file (if present)

The resulting settings object is passed explicitly to the app factory and the
workflow-engine client; nothing reads it from module state.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DeploymentEnvironment(str, Enum):
    LOCAL = "local"
    DEV = "dev"
    STAGE = "stage"
    PROD = "prod"


class GatewaySettings(BaseSettings):
    """Settings for the API gateway.

    Environment variables:
    - TEMPORAL_SERVICE_HOST / TEMPORAL_SERVICE_PORT
    - ENVIRONMENT       (local, dev, stage, prod; any case)
    - APIG_HOST / APIG_PORT
    - APIG_API_TOKEN    (bearer token for the interact endpoint)
    - TEMPORAL_IDENTITY (optional)
    - LOG_LEVEL         (optional)

    Notes:
        Tests can override the env file via `GatewaySettings(_env_file=path)`.
    """

    temporal_service_host: str = Field(
        default="localhost",
        validation_alias="TEMPORAL_SERVICE_HOST",
        description="Host of the Temporal frontend service",
    )
    temporal_service_port: int = Field(
        default=7233,
        validation_alias="TEMPORAL_SERVICE_PORT",
        ge=1,
        le=65535,
        description="Port of the Temporal frontend service",
    )
    temporal_identity: str = Field(
        default="TemporalAPIG",
        validation_alias="TEMPORAL_IDENTITY",
        description="Client identity reported to Temporal for signals and starts",
    )

    environment: DeploymentEnvironment = Field(
        default=DeploymentEnvironment.LOCAL,
        validation_alias="ENVIRONMENT",
    )

    host: str = Field(default="0.0.0.0", validation_alias="APIG_HOST")
    port: int = Field(default=8080, validation_alias="APIG_PORT", ge=1, le=65535)

    api_token: str = Field(
        default="",
        validation_alias="APIG_API_TOKEN",
        description=(
            "Bearer token required by /temporal/interact. "
            "The endpoint is disabled while this is empty."
        ),
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("environment", mode="before")
    @classmethod
    def _lowercase_environment(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def temporal_target(self) -> str:
        """``host:port`` of the Temporal frontend."""

        return f"{self.temporal_service_host}:{self.temporal_service_port}"
