"""Client settings with Pydantic validation and TOML/env var support."""

import tomllib
from pathlib import Path
from typing import ClassVar, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TVDB_BASE_URL = "https://api.thetvdb.com"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """TVDB configuration loaded from env vars, TOML, or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="TVDB_",
    )

    CONFIG_PATH: ClassVar[Path] = (
        Path.home() / ".config" / "tvdb" / "config.toml"
    )

    # API
    api_key: str = ""
    language: str = Field(default="en", min_length=2)
    base_url: str = TVDB_BASE_URL

    # Logging
    log_level: LogLevel = Field(
        default="INFO",
        description="Root log level used by the CLI",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @classmethod
    def _load_toml_settings(cls) -> dict:
        """Load config TOML and normalize nested sections."""
        if not cls.CONFIG_PATH.exists():
            return {}

        with cls.CONFIG_PATH.open("rb") as f:
            data = tomllib.load(f)

        if not isinstance(data, dict):
            return {}

        flat_keys = {"api_key", "language", "base_url", "log_level"}
        normalized = {
            k: v
            for k, v in data.items()
            if k in flat_keys and not isinstance(v, dict)
        }

        api = data.get("api")
        if isinstance(api, dict):
            for key in ("api_key", "language", "base_url"):
                if key in api:
                    normalized[key] = api[key]

        logging_section = data.get("logging")
        if isinstance(logging_section, dict) and "level" in logging_section:
            normalized["log_level"] = logging_section["level"]

        return normalized

    @classmethod
    def settings_customise_sources(
        cls, settings_cls, **kwargs
    ):
        """Load from init kwargs, then env vars, then TOML file."""
        from pydantic_settings import EnvSettingsSource

        init_settings = kwargs.get("init_settings")
        env_settings = kwargs.get("env_settings")
        sources = []
        if init_settings:
            sources.append(init_settings)
        if env_settings:
            sources.append(env_settings)
        else:
            sources.append(EnvSettingsSource(settings_cls))

        sources.append(cls._load_toml_settings)

        return tuple(sources)
