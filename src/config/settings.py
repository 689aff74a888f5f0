"""
Application settings management using Pydantic.

This module combines YAML configuration with environment variables to create
a unified settings object.
"""

from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.config.loader import ConfigurationError, load_config, merge_with_env


class APISettings(BaseModel):
    """API configuration settings."""

    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = Field(default_factory=list)

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not 1 <= v <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v


class StorageSettings(BaseModel):
    """Where uploaded originals and generated previews live."""

    upload_dir: str = "uploads/pdfs"
    preview_dir: str = "uploads/previews"
    max_upload_mb: int = 10

    @field_validator("max_upload_mb")
    @classmethod
    def validate_max_upload(cls, v: int) -> int:
        if v < 1 or v > 100:
            raise ValueError("max_upload_mb must be between 1 and 100")
        return v

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


class RenderingSettings(BaseModel):
    """Cover page geometry and page reassembly policy."""

    page_width: float = 612
    page_height: float = 792
    reassembly_policy: str = "replace_first"

    @field_validator("page_width", "page_height")
    @classmethod
    def validate_dimension(cls, v: float) -> float:
        if v < 144 or v > 14400:
            raise ValueError("Page dimensions must be between 144 and 14400 points")
        return v

    @field_validator("reassembly_policy")
    @classmethod
    def validate_policy(cls, v: str) -> str:
        valid_policies = ["replace_first", "prepend"]
        if v not in valid_policies:
            raise ValueError(f"Reassembly policy must be one of: {', '.join(valid_policies)}")
        return v

    @property
    def page_size(self) -> tuple[float, float]:
        return (self.page_width, self.page_height)


class SuggestionSettings(BaseModel):
    """Azure OpenAI content suggestion settings (credentials come from env)."""

    deployment: str = "gpt-4o"
    api_version: str = "2023-05-15"
    timeout: float = 30
    temperature: float = 0.7
    max_tokens: int = 500

    @field_validator("temperature")
    @classmethod
    def validate_temperature(cls, v: float) -> float:
        if not 0.0 <= v <= 2.0:
            raise ValueError("Temperature must be between 0.0 and 2.0")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "text"
    log_file: Optional[str] = None
    max_file_size_mb: int = 10
    backup_count: int = 5

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v_upper

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        valid_formats = ["json", "text"]
        if v not in valid_formats:
            raise ValueError(f"Log format must be one of: {', '.join(valid_formats)}")
        return v


class DatabaseSettings(BaseModel):
    """Database connection settings."""

    url: str = "sqlite:///./data/cover_studio.db"
    echo: bool = False
    auto_init: bool = True


class AppSettings(BaseSettings):
    """
    Main application settings.

    Combines environment variables (for secrets) with YAML configuration
    (for application settings).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Secrets from environment variables
    azure_openai_api_key: Optional[str] = Field(default=None, description="Azure OpenAI API key")
    azure_openai_endpoint: Optional[str] = Field(default=None, description="Azure OpenAI endpoint URL")

    # Application configuration (from YAML)
    api: APISettings = Field(default_factory=APISettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    rendering: RenderingSettings = Field(default_factory=RenderingSettings)
    suggestion: SuggestionSettings = Field(default_factory=SuggestionSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)

    environment: str = "development"

    @field_validator("azure_openai_endpoint")
    @classmethod
    def validate_endpoint(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            return None
        if not v.startswith(("https://", "http://")):
            raise ValueError("azure_openai_endpoint must start with https:// or http://")
        return v.rstrip("/")

    @property
    def suggestion_configured(self) -> bool:
        return bool(self.azure_openai_api_key and self.azure_openai_endpoint)


def create_settings() -> AppSettings:
    """
    Create application settings by combining YAML config and environment variables.

    Returns:
        AppSettings instance with all configuration loaded

    Raises:
        ConfigurationError: If configuration cannot be loaded or is invalid
    """
    try:
        config = merge_with_env(load_config())

        return AppSettings(
            api=APISettings(**config["api"]),
            storage=StorageSettings(**config["storage"]),
            rendering=RenderingSettings(**config["rendering"]),
            suggestion=SuggestionSettings(**config["suggestion"]),
            logging=LoggingSettings(**config["logging"]),
            database=DatabaseSettings(**config["database"]),
            environment=config.get("environment", "development"),
        )

    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Failed to create settings: {e}") from e


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """
    Get the application settings singleton.

    This function is cached, so subsequent calls return the same instance.
    Use reload_settings() to force a reload during development.
    """
    return create_settings()


def reload_settings() -> AppSettings:
    """Reload settings by clearing the cache and recreating."""
    get_settings.cache_clear()
    return get_settings()
