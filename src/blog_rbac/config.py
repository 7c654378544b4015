"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from blog_rbac.core.constants import DEFAULT_ROLE, LOG_LEVELS
from blog_rbac.core.permissions.catalog import Role


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Blog RBAC"
    debug: bool = False
    environment: str = "development"  # development, staging, production

    # Authorization
    default_role: str = DEFAULT_ROLE

    # API Documentation
    api_docs_base_url: str = "https://api.example.com"

    # Observability
    log_level: str = "INFO"

    @field_validator("default_role")
    @classmethod
    def validate_default_role(cls, v: str) -> str:
        """Reject a fallback role outside the role enumeration.

        Raises:
            ValueError: If the role is unknown
        """
        value = v.lower()
        if value not in Role.values():
            raise ValueError(
                f"DEFAULT_ROLE must be one of {', '.join(Role.values())}, got {v!r}"
            )
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        value = v.upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return value

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
