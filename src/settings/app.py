"""Application settings powered by Pydantic BaseSettings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.config.schemas.base import ProjectStage


class AppSettings(BaseSettings):
    """Centralized environment configuration.

    Values set here override the matching entries of the head
    configuration file.
    """

    model_config = SettingsConfigDict(
        env_prefix="HEAD_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    config_path: Path | None = Field(default=None)
    theme: str | None = Field(default=None)
    project_stage: ProjectStage | None = Field(default=None)
    json_logs: bool = Field(default=True)

    def config_overrides(self) -> dict[str, object]:
        """Return head configuration entries overridden by the environment."""
        overrides: dict[str, object] = {}
        if self.theme is not None:
            overrides["theme"] = self.theme
        if self.project_stage is not None:
            overrides["project_stage"] = self.project_stage
        return overrides


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
