"""
Pydantic Settings configuration for jmap-webmail.

Loads configuration from a TOML file (``[server]`` and ``[jmap]`` tables)
and environment variables prefixed with ``JMAP_WEBMAIL_``. Environment
values win over the file; nested keys use ``__`` (for example
``JMAP_WEBMAIL_JMAP__WELL_KNOWN_URL``).
"""

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from jmap_webmail.exceptions import ConfigurationError

DEFAULT_CONFIG_FILE = "config.toml"


class ServerSettings(BaseModel):
    """Listen address of the web front end."""

    listen_addr: str = Field("127.0.0.1")
    listen_port: int = Field(8080, ge=1, le=65535)


class JmapSettings(BaseModel):
    """Upstream JMAP server settings."""

    # Discovery starts here, e.g. https://mail.example.com/.well-known/jmap
    well_known_url: str = Field(..., pattern=r"^https?://\S+$")


class Settings(BaseSettings):
    """Application settings loaded from config.toml and the environment."""

    server: ServerSettings = Field(default_factory=ServerSettings)
    jmap: JmapSettings

    # Logging settings
    log_format: str = Field("console", pattern=r"^(console|json)$")
    debug: bool = Field(False)

    model_config = SettingsConfigDict(
        env_prefix="JMAP_WEBMAIL_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        toml_file=DEFAULT_CONFIG_FILE,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def listen_address(self) -> str:
        """Return the ``addr:port`` string the web server binds to."""
        return f"{self.server.listen_addr}:{self.server.listen_port}"


def _settings_from_file(config_path: Path) -> type[Settings]:
    """Return a Settings variant whose only TOML source is ``config_path``."""

    class FileSettings(Settings):
        model_config = SettingsConfigDict(toml_file=config_path)

    return FileSettings


def load_settings(path: str | Path) -> Settings:
    """Load settings from an explicit TOML file.

    Values in the file take precedence over the environment. The default
    ``config.toml`` of the working directory is not consulted.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        Validated settings.

    Raises:
        ConfigurationError: If the file is missing, is not valid TOML,
            or holds invalid values.
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigurationError(f"failed to read config file: {config_path} not found")

    settings_cls = _settings_from_file(config_path)
    try:
        data = TomlConfigSettingsSource(settings_cls)()
        return settings_cls(**data)
    except ValueError as e:
        # tomllib.TOMLDecodeError and pydantic.ValidationError both derive from ValueError
        raise ConfigurationError(f"failed to parse config file: {e}") from e


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure only one Settings instance is created,
    avoiding repeated file and environment parsing.
    """
    return Settings()  # type: ignore[call-arg]
