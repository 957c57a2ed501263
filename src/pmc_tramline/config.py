"""Configuration for the tramline engine.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The engine itself is pure; settings only decide how logging is set up and
which workflow definitions the registry knows about.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TramlineSettings(BaseSettings):
    """Settings for the tramline engine.

    Environment variables:
    - LOG_LEVEL                  (optional)
    - TRAMLINE_JSON_LOGS         (optional)
    - TRAMLINE_WORKFLOWS_PATH    (optional)
    - TRAMLINE_DEFAULT_WORKFLOW  (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `TramlineSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    json_logs: bool = Field(
        default=True,
        validation_alias="TRAMLINE_JSON_LOGS",
        description="Emit one JSON object per log record instead of plain text",
    )

    workflows_path: Path | None = Field(
        default=None,
        validation_alias="TRAMLINE_WORKFLOWS_PATH",
        description="JSON file with additional tramline definitions to register",
    )

    default_workflow: str = Field(
        default="PMC_DEPOSIT",
        validation_alias="TRAMLINE_DEFAULT_WORKFLOW",
        description="Registry name used when a caller does not name a workflow",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_default_workflow(self) -> TramlineSettings:
        if not self.default_workflow.strip():
            raise ValueError("TRAMLINE_DEFAULT_WORKFLOW must not be blank")
        return self
