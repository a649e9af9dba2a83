"""
Application Settings
===================

Main application settings and environment configuration using Pydantic Settings.
Supports development, testing, and production environments.
"""

from typing import Optional, List, Union
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import json


class Settings(BaseSettings):
    """Main application settings with environment variable support."""

    # Application Configuration
    app_name: str = Field(default="GIF Frame Generator", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )
    debug: bool = Field(default=True, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port")

    # CORS Configuration
    allowed_origins: List[str] = Field(default=["*"], description="Allowed origins for CORS")

    # Rendering Provider Configuration
    cloudinary_cloud_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "cloudinary_cloud_name", "FRAMEGEN_CLOUDINARY_CLOUD_NAME", "CLOUDINARY_CLOUD_NAME"
        ),
        description="Provider account identifier",
    )
    cloudinary_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "cloudinary_api_key", "FRAMEGEN_CLOUDINARY_API_KEY", "CLOUDINARY_API_KEY"
        ),
        description="Provider access key",
    )
    cloudinary_api_secret: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "cloudinary_api_secret", "FRAMEGEN_CLOUDINARY_API_SECRET", "CLOUDINARY_API_SECRET"
        ),
        description="Provider access secret",
    )
    cloudinary_api_base: str = Field(
        default="https://api.cloudinary.com/v1_1", description="Provider API base URL"
    )
    provider_timeout: Optional[float] = Field(
        default=None, gt=0, description="Total provider request timeout in seconds (none if unset)"
    )

    # Rendering Configuration
    frame_quality: int = Field(default=90, ge=1, le=100, description="Rendered image quality")
    public_id_prefix: str = Field(
        default="theblack_frame", description="Prefix for provider-side artifact identifiers"
    )

    # Error Reporting Configuration
    expose_error_details: bool = Field(
        default=True, description="Include tracebacks in error responses"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "testing", "production"}
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def parse_allowed_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse allowed origins from string or list."""
        if isinstance(v, str):
            # Handle JSON-like string: ["*"] or ["origin1", "origin2"]
            v = v.strip()
            if v.startswith("[") and v.endswith("]"):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            # Handle comma-separated string: "*" or "origin1,origin2"
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="FRAMEGEN_",
        populate_by_name=True,
        extra="ignore",
    )


# Global settings instance - will be initialized when needed
settings = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings()
    return settings
