"""Configuration for the SOP runtime command line.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The engine functions never read settings; only the entrypoint does, and it
passes the values down explicitly.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RuntimeSettings(BaseSettings):
    """Settings for the SOP runtime CLI.

    Environment variables:
    - LOG_LEVEL                   (optional)
    - SOP_RUNTIME_DEFAULT_ACTOR   (optional)
    - SOP_RUNTIME_DEFAULT_ROLE    (optional)
    - SOP_RUNTIME_ENFORCE_ROLES   (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `RuntimeSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    default_actor: str = Field(
        default="Test User",
        validation_alias="SOP_RUNTIME_DEFAULT_ACTOR",
        description="Actor recorded on audit entries when none is given",
    )

    default_role: str = Field(
        default="Admin",
        validation_alias="SOP_RUNTIME_DEFAULT_ROLE",
        description="Role the actor plays when none is given",
    )

    enforce_roles: bool = Field(
        default=True,
        validation_alias="SOP_RUNTIME_ENFORCE_ROLES",
        description="Refuse actions whose required roles do not include the actor's role",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unknown LOG_LEVEL: {value!r}")
        return level
