"""Application configuration settings."""
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database configuration."""

    model_config = SettingsConfigDict(env_prefix="DATABASE_", env_file=".env", extra="ignore")

    url: str = Field(default="sqlite+aiosqlite:///./userrole.db")
    echo: bool = Field(default=False)
    pool_size: int = Field(default=10)
    max_overflow: int = Field(default=20)
    operation_timeout: float = Field(default=5.0, description="Seconds before a storage call fails")


class AuthSettings(BaseSettings):
    """Authentication configuration."""

    model_config = SettingsConfigDict(env_prefix="AUTH_", env_file=".env", extra="ignore")

    secret_key: str = Field(default="your-secret-key-change-in-production")
    algorithm: str = Field(default="HS256")
    token_expire_minutes: int = Field(default=24 * 60)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    admin_role_name: str = Field(default="admin")

    # Optional bootstrap admin account
    admin_username: Optional[str] = Field(default=None)
    admin_password: Optional[str] = Field(default=None)
    admin_email: str = Field(default="admin@localhost")


class APISettings(BaseSettings):
    """API configuration."""

    model_config = SettingsConfigDict(env_prefix="API_", env_file=".env", extra="ignore")

    title: str = "User Role System"
    description: str = "Restful API for a user role system"
    version: str = "2.0.0"
    prefix: str = "/api/v2"
    docs_url: str = "/api-docs"
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    reload: bool = Field(default=False)
    workers: int = Field(default=1)

    # CORS
    cors_origins: List[str] = Field(default=["*"])


class MonitoringSettings(BaseSettings):
    """Monitoring and observability configuration."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = Field(default="INFO")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development")
    debug: bool = Field(default=True)

    # Sub-configurations
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    api: APISettings = Field(default_factory=APISettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)


# Global settings instance
settings = Settings()
