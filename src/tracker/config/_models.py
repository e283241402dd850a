# pyright: reportExplicitAny=false, reportAny=false
"""Configuration models.

Every section is a frozen Pydantic model; unknown keys are ignored so that
stray ``TRACKER_*`` environment variables never break loading.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, ClassVar

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from tracker.enums import ChannelName, SchemaVersion
from tracker.store._remote import DEFAULT_API_URL

if TYPE_CHECKING:
    from pathlib import Path


class LogLevel(StrEnum):
    """Log level threshold values, from most to least verbose."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class ConfigSourceName(StrEnum):
    """Configuration source names, from highest to lowest precedence."""

    ENV = "env"
    EXPLICIT = "explicit"
    LOCAL = "local"
    USER = "user"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class ConfigSource:
    """One place configuration values came from.

    Attributes:
        name: The source type.
        path: Path of the config file, or None for non-file sources.
        exists: Whether the file exists or values are present.
        values: Values read from this source.
    """

    name: ConfigSourceName
    path: Path | None
    exists: bool
    values: dict[str, Any]


class StorageConfig(BaseModel):
    """Persistence channel settings.

    Attributes:
        channels: Channels to chain, from highest to lowest fidelity.
        api_url: Base URL of the remote API.
        data_dir: Directory of the file channel.
        timeout: Remote request timeout in seconds.
        retry_attempts: Remote attempts per request on connection errors.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    channels: tuple[ChannelName, ...] = (ChannelName.FILE, ChannelName.MEMORY)
    api_url: str = DEFAULT_API_URL
    data_dir: str = "data"
    timeout: float = Field(default=5.0, gt=0)
    retry_attempts: int = Field(default=3, ge=1)

    @field_validator("channels")
    @classmethod
    def _channels_not_empty(cls, value: tuple[ChannelName, ...]) -> tuple[ChannelName, ...]:
        if not value:
            msg = "at least one channel is required"
            raise ValueError(msg)
        if len(set(value)) != len(value):
            msg = "channels must not repeat"
            raise ValueError(msg)
        return value


class SchemaConfig(BaseModel):
    """Schema version of the stored data."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    version: SchemaVersion = SchemaVersion.V2


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty logs to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.WARNING
    format: LogFormat = LogFormat.TEXT
    file: str = ""


class ServerConfig(BaseModel):
    """File server settings."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    host: str = "127.0.0.1"
    port: int = Field(default=3001, ge=1, le=65535)
    data_dir: str = "data"


class TrackerConfig(BaseModel):
    """Complete, merged tracker configuration.

    Use ``tracker.config.load_config`` to build one from all sources.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True, extra="ignore", populate_by_name=True
    )

    storage: StorageConfig = StorageConfig()
    schema_: SchemaConfig = Field(default=SchemaConfig(), alias="schema")
    logging: LoggingConfig = LoggingConfig()
    server: ServerConfig = ServerConfig()
    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())

    @property
    def sources(self) -> tuple[ConfigSource, ...]:
        """Sources that contributed to this configuration, highest precedence first."""
        return self._sources

    @property
    def schema_version(self) -> SchemaVersion:
        return self.schema_.version

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-notation key.

        Examples:
            >>> TrackerConfig().get("storage.timeout")
            5.0
            >>> TrackerConfig().get("nonexistent", "fallback")
            'fallback'
        """
        current: Any = self.to_dict()
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-compatible dictionary keyed by TOML section names."""
        return self.model_dump(mode="json", by_alias=True)

    def to_toml(self) -> str:
        """Render the configuration as a TOML document."""
        return tomli_w.dumps(self.to_dict())
