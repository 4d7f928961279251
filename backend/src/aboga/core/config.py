"""
Configuration management for ABOGA.

Settings are read from environment variables (and a local .env file) and
grouped by concern. A hosted backend without its URL and public key is a
fatal startup condition; a missing generative API key only degrades the
generative response path.
"""

import logging
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from aboga.core.exceptions import ConfigurationError

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class BackendConfig(BaseSettings):
    """Data backend configuration."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Hosted database-as-a-service
    supabase_url: str = Field(default="", description="Hosted backend base URL")
    supabase_anon_key: str = Field(default="", description="Hosted backend public key")
    supabase_jwt_secret: str = Field(default="", description="Secret used to verify user access tokens")

    # "hosted" talks to the REST data API, "sql" goes through SQLAlchemy
    data_backend: Literal["hosted", "sql"] = Field(default="hosted")
    database_url: str = Field(default="sqlite:///./aboga.db")
    db_pool_size: int = Field(default=5)
    db_max_overflow: int = Field(default=10)
    db_pool_timeout: int = Field(default=30)

    @field_validator("supabase_url")
    @classmethod
    def strip_trailing_slash(cls, v):
        """Normalize the base URL."""
        return v.rstrip("/")

    @model_validator(mode="after")
    def require_hosted_credentials(self):
        """The hosted backend cannot work without its URL and public key."""
        if self.data_backend == "hosted":
            missing = [
                name for name, value in (
                    ("SUPABASE_URL", self.supabase_url),
                    ("SUPABASE_ANON_KEY", self.supabase_anon_key),
                )
                if not value
            ]
            if missing:
                raise ValueError(f"Missing backend environment variables: {', '.join(missing)}")
        return self

    @property
    def rest_url(self) -> str:
        """Base URL of the hosted REST data API."""
        return f"{self.supabase_url}/rest/v1"

    @property
    def auth_url(self) -> str:
        """Base URL of the hosted auth API."""
        return f"{self.supabase_url}/auth/v1"


class GenerativeConfig(BaseSettings):
    """Generative-language endpoint configuration."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    gemini_api_key: str = Field(default="")
    gemini_model: str = Field(default="gemini-2.5-flash")
    gemini_api_base: str = Field(default="https://generativelanguage.googleapis.com/v1/models")

    @property
    def endpoint_url(self) -> str:
        """Full generateContent URL, without the key."""
        return f"{self.gemini_api_base.rstrip('/')}/{self.gemini_model}:generateContent"


class ApplicationConfig(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    app_name: str = Field(default="ABOGA")
    app_version: str = Field(default="1.0.0")
    app_description: str = Field(default="Asistente legal informativo para trámites en Perú")
    environment: str = Field(default="development", validation_alias="ENV")
    debug: bool = Field(default=False)

    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8050)

    # Which response path answers chat messages
    assistant_strategy: Literal["keyword", "generative"] = Field(default="keyword")
    free_message_quota: int = Field(default=10)
    max_query_length: int = Field(default=2000)

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        valid_envs = ["development", "test", "staging", "production"]
        if v not in valid_envs:
            raise ValueError(f"Environment must be one of: {valid_envs}")
        return v

    @field_validator("api_port")
    @classmethod
    def validate_api_port(cls, v):
        """Validate API port."""
        if not 1 <= v <= 65535:
            raise ValueError("API port must be between 1 and 65535")
        return v

    @field_validator("free_message_quota")
    @classmethod
    def validate_quota(cls, v):
        if v < 2:
            raise ValueError("Free message quota must allow at least one exchange")
        return v


class Config:
    """Main configuration class that combines all config sections."""

    def __init__(
        self,
        backend: Optional[BackendConfig] = None,
        generative: Optional[GenerativeConfig] = None,
        application: Optional[ApplicationConfig] = None,
    ):
        """Initialize configuration with validation."""
        try:
            self.backend = backend or BackendConfig()
            self.generative = generative or GenerativeConfig()
            self.application = application or ApplicationConfig()
        except ValidationError as e:
            logger.error(f"Configuration validation failed: {e}")
            raise ConfigurationError("Invalid configuration", details=e.errors()) from e

        if not self.generative.gemini_api_key:
            logger.warning("GEMINI_API_KEY not set; generative responses will degrade to the error template")
        logger.info("Configuration loaded successfully")

    def uses_sql_backend(self) -> bool:
        return self.backend.data_backend == "sql"

    def is_production(self) -> bool:
        """Check if running in production."""
        return self.application.environment == "production"

    def is_development(self) -> bool:
        """Check if running in development."""
        return self.application.environment == "development"


_config: Optional[Config] = None


def get_config() -> Config:
    """Get the process configuration instance, loading it on first use."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def set_config(config: Config) -> None:
    """Install an explicit configuration instance."""
    global _config
    _config = config


def reset_config() -> None:
    """Drop the cached configuration so the next access reloads it."""
    global _config
    _config = None
