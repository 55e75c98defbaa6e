"""Configuration management using environment variables."""

from collections.abc import Mapping
from functools import lru_cache
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError
from pydantic_settings import BaseSettings, SettingsConfigDict

from elastic_mcp.models.arguments import describe_validation_error
from elastic_mcp.models.errors import ConfigurationError

SUPPORTED_VERSIONS = ("8", "9")
DEFAULT_VERSION = "8"
AUTH_ERROR_MESSAGE = (
    "Either ES_API_KEY or both ES_USERNAME and ES_PASSWORD must be provided, "
    "or no auth for local development"
)

AuthMode = Literal["api_key", "basic", "none"]


class StoreConfig(BaseModel):
    """Validated, immutable connection settings for the Elasticsearch client."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    url: str = Field(..., description="Elasticsearch server URL")
    api_key: SecretStr | None = Field(None, description="API key for Elasticsearch authentication")
    username: str | None = Field(None, description="Username for Elasticsearch authentication")
    password: SecretStr | None = Field(None, description="Password for Elasticsearch authentication")
    ca_cert: str | None = Field(None, description="Path to custom CA certificate for Elasticsearch")
    path_prefix: str | None = Field(None, description="Path prefix for Elasticsearch")
    version: Literal["8", "9"] = Field(DEFAULT_VERSION, description="Elasticsearch version (8 or 9)")
    ssl_skip_verify: bool = Field(False, description="Skip SSL certificate verification")

    @field_validator("url")
    @classmethod
    def _url_not_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError("required", "Elasticsearch URL cannot be empty")
        return value

    @field_validator("version", mode="before")
    @classmethod
    def _normalize_version(cls, value: Any) -> str:
        value = str(value) if value is not None else None
        return value if value in SUPPORTED_VERSIONS else DEFAULT_VERSION

    @model_validator(mode="after")
    def _check_auth(self) -> "StoreConfig":
        # An API key wins over basic auth; otherwise username and password go together.
        if self.api_key is not None:
            return self
        if (self.username is None) != (self.password is None):
            raise PydanticCustomError("auth_mode", AUTH_ERROR_MESSAGE)
        return self

    @property
    def auth_mode(self) -> AuthMode:
        if self.api_key is not None:
            return "api_key"
        if self.username is not None and self.password is not None:
            return "basic"
        return "none"


def validate_config(raw: Mapping[str, Any]) -> StoreConfig:
    """
    Validate connection settings once, before a session starts.

    Args:
        raw: Settings keyed by field name (snake_case or camelCase)

    Returns:
        The frozen StoreConfig

    Raises:
        ConfigurationError: If the URL is empty or the auth fields are contradictory
    """
    try:
        return StoreConfig.model_validate(dict(raw))
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"Invalid Elasticsearch configuration: {describe_validation_error(e)}"
        ) from e


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
    )

    # Elasticsearch connection
    es_url: str = Field(default="http://localhost:9200", description="Elasticsearch server URL")
    es_api_key: str | None = Field(None, description="API key for Elasticsearch authentication")
    es_username: str | None = Field(None, description="Username for basic authentication")
    es_password: str | None = Field(None, description="Password for basic authentication")
    es_ca_cert: str | None = Field(None, description="Path to a custom CA certificate")
    es_version: str = Field(default=DEFAULT_VERSION, description="Elasticsearch major version (8 or 9)")
    es_ssl_skip_verify: bool = Field(default=False, description="Skip SSL certificate verification")
    es_path_prefix: str | None = Field(None, description="Prefix prepended to every request path")

    # Server
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    mcp_transport: Literal["stdio", "http"] = Field(
        default="stdio", description="Serve MCP over stdio, or over HTTP with the REST endpoints"
    )
    server_host: str = Field(default="0.0.0.0", description="Server bind address (http transport)")
    mcp_port: int = Field(default=8080, description="Server port (http transport)", ge=1, le=65535)

    def store_config(self) -> StoreConfig:
        """Run the store settings through `validate_config`."""
        return validate_config(
            {
                "url": self.es_url,
                "api_key": self.es_api_key,
                "username": self.es_username,
                "password": self.es_password,
                "ca_cert": self.es_ca_cert,
                "path_prefix": self.es_path_prefix,
                "version": self.es_version,
                "ssl_skip_verify": self.es_ssl_skip_verify,
            }
        )


@lru_cache
def get_config() -> Settings:
    """Get cached configuration instance."""
    return Settings()
