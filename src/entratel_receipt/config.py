"""Configuration management using pydantic-settings."""

import tomllib
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from .domain.parser import ErrorPolicy

DEFAULT_LOGO = "logo.png"
CONFIG_PATH = Path("~/.config/entratel-receipt/config.toml").expanduser()


class ParsingConfig(BaseSettings):
    """How malformed lines and fields are handled."""

    on_error: ErrorPolicy = ErrorPolicy.SKIP
    strict_fields: bool = False


class RenderConfig(BaseSettings):
    logo: Path = Path(DEFAULT_LOGO)

    @field_validator("logo", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser()


class OutputConfig(BaseSettings):
    metadata: bool = True
    sidecar: bool = False


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ENTRATEL_", env_nested_delimiter="__")

    parsing: ParsingConfig = ParsingConfig()
    render: RenderConfig = RenderConfig()
    output: OutputConfig = OutputConfig()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment variables win over values read from the config file.
        return env_settings, init_settings, dotenv_settings, file_secret_settings


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings from TOML file, falling back to defaults.

    ``ENTRATEL_``-prefixed environment variables (``ENTRATEL_PARSING__ON_ERROR``)
    override individual keys of the file.
    """
    path = config_path or CONFIG_PATH

    if path.exists():
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return Settings(**data)

    return Settings()
