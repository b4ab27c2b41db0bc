"""Configuration management using pydantic-settings.

Provides validated configuration with support for:
- JSON config file (config.json)
- REACTION_* environment variables (take precedence over the file)
- Type coercion and validation
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

REMOVE_SUCCEEDED_TOPIC = "{domain}.{kind}.remove.succeeded"


class AppSettings(BaseSettings):
    """Application settings with validation.

    Settings are loaded from a JSON config file (config.json), then
    overridden by environment variables such as REACTION_DATABASE_URL.
    """

    database_url: str = "postgresql+asyncpg://localhost:5432/reactions"
    redis_url: str = "redis://localhost:6379/0"

    # Publishers of the resource-removed events
    comment_domain: str = "commentService"
    video_domain: str = "videoService"

    # Redis Streams consumer group shared by every consumer process, and
    # this process's name in it. Restarting under the same name replays
    # its unacknowledged entries.
    consumer_group: str = "reaction-action-queue"
    consumer_name: str = "reaction-service"

    log_file: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="REACTION_",
        extra="ignore",
    )

    @field_validator("comment_domain", "video_domain", "consumer_group", "consumer_name")
    @classmethod
    def ensure_name(cls, v: Any) -> str:
        """Reject empty names; a blank domain would produce topics like '.comment...'."""
        if not isinstance(v, str) or not v.strip():
            raise ValueError("must be a non-empty string")
        return v.strip()

    @property
    def topics(self) -> list[str]:
        """Topics whose events trigger a cascading delete."""
        return [
            REMOVE_SUCCEEDED_TOPIC.format(domain=self.comment_domain, kind="comment"),
            REMOVE_SUCCEEDED_TOPIC.format(domain=self.video_domain, kind="video"),
        ]

    @classmethod
    def from_json(cls, path: str | Path = "config.json") -> "AppSettings":
        """Load settings from a JSON config file.

        Environment variables still win over values from the file.

        Args:
            path: Path to the JSON config file

        Returns:
            AppSettings instance with validated configuration
        """
        config_path = Path(path)
        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return cls(**data)
        return cls()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        return env_settings, init_settings, dotenv_settings, file_secret_settings


@lru_cache
def get_settings(config_path: str = "config.json") -> AppSettings:
    """Get cached application settings.

    Args:
        config_path: Path to JSON config file (default: config.json)

    Returns:
        Cached AppSettings instance
    """
    return AppSettings.from_json(config_path)


def load_config(path: str | Path = "config.json") -> AppSettings:
    """Load configuration from file, bypassing the settings cache."""
    get_settings.cache_clear()
    return AppSettings.from_json(path)
