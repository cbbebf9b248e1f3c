"""Repository configuration settings.

Settings are read from ``REPOKIT_*`` environment variables (and an optional
``.env`` file) through pydantic-settings. Applications usually build one
``RepositorySettings`` at startup and register it with the dependency
container; repositories fall back to the registered instance when none is
passed explicitly.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PROTECTED_FIELDS: tuple[str, ...] = (
    "id",
    "created_at",
    "updated_at",
    "createdAt",
    "updatedAt",
)


class RepositorySettings(BaseSettings):
    """Repository configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="REPOKIT_",
        env_file=".env",
        extra="ignore",
    )

    # Query settings
    default_page: int = Field(default=1, ge=1)
    default_page_size: int = Field(default=10, ge=1)

    # Write settings
    auto_validation: bool = Field(
        default=False,
        description="Validate payloads before every create/update",
    )
    protected_fields: tuple[str, ...] = Field(
        default=DEFAULT_PROTECTED_FIELDS,
        description="System-managed fields stripped from every write payload",
    )

    # Logging settings
    log_level: str = "INFO"
    log_format: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )

    @field_validator("protected_fields")
    @classmethod
    def validate_protected_fields(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if any(not name.strip() for name in v):
            msg = "protected_fields cannot contain empty names"
            raise ValueError(msg)
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Unknown log level: {v}"
            raise ValueError(msg)
        return level
