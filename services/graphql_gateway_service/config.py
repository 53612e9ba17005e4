"""
Configuration for GraphQL Gateway Service.

Uses Pydantic settings for environment-based configuration. The settings
object is frozen: it is built once when the DI container starts and handed
to every collaborator that needs a backend URL or timeout.
"""

from __future__ import annotations

from enum import Enum

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from services.graphql_gateway_service.models import Backend


class Environment(str, Enum):
    """Defines application environments."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class GatewayMode(str, Enum):
    """Deployment strategy for the /graphql endpoint."""

    STITCHED = "stitched"
    PASSTHROUGH = "passthrough"


class Settings(BaseSettings):
    """Configuration settings for GraphQL Gateway Service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="GATEWAY_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    # Service identity
    SERVICE_NAME: str = "graphql-gateway-service"

    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        validation_alias=AliasChoices("ENVIRONMENT", "GATEWAY_ENVIRONMENT"),
        description="Runtime environment for the service",
    )

    # HTTP server configuration
    HTTP_HOST: str = Field(default="0.0.0.0", description="HTTP server host")
    HTTP_PORT: int = Field(
        default=4000,
        description="HTTP server port",
        validation_alias=AliasChoices("GATEWAY_HTTP_PORT", "PORT"),
    )

    # Logging configuration
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # CORS configuration, permissive by default like a bare cors() middleware
    CORS_ORIGINS: list[str] = Field(default=["*"], description="Allowed CORS origins")
    CORS_ALLOW_CREDENTIALS: bool = Field(
        default=False, description="Allow credentials in CORS requests"
    )
    CORS_ALLOW_METHODS: list[str] = Field(
        default=["GET", "POST", "OPTIONS"], description="Allowed HTTP methods for CORS"
    )
    CORS_ALLOW_HEADERS: list[str] = Field(
        default=["*"], description="Allowed headers for CORS requests"
    )

    # Backend GraphQL endpoints
    AUTH_SERVICE_URL: str = Field(
        default="http://localhost:4001/graphql",
        description="Authentication/user service GraphQL endpoint",
        validation_alias=AliasChoices("GATEWAY_AUTH_SERVICE_URL", "AUTH_SERVICE_URL"),
    )
    PRODUCTS_SERVICE_URL: str = Field(
        default="http://localhost:4002/graphql",
        description="Products/orders service GraphQL endpoint",
        validation_alias=AliasChoices("GATEWAY_PRODUCTS_SERVICE_URL", "PRODUCTS_SERVICE_URL"),
    )

    # Dispatch strategy
    GATEWAY_MODE: GatewayMode = Field(
        default=GatewayMode.STITCHED,
        description="stitched: unified schema; passthrough: classify and forward raw operations",
        validation_alias=AliasChoices("GATEWAY_MODE", "GATEWAY_GATEWAY_MODE"),
    )

    # Backend call deadlines
    BACKEND_TIMEOUT_SECONDS: float = Field(
        default=10.0, gt=0, description="Hard upper bound for one backend call"
    )
    HEALTH_PROBE_TIMEOUT_SECONDS: float = Field(
        default=3.0, gt=0, description="Deadline for the { __typename } liveness probe"
    )

    def backend_url(self, backend: Backend) -> str:
        if backend is Backend.AUTH:
            return self.AUTH_SERVICE_URL
        return self.PRODUCTS_SERVICE_URL
