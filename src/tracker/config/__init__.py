"""Tracker configuration.

Example:
    >>> from tracker.config import load_config
    >>> config = load_config()
    >>> config.schema_version
    <SchemaVersion.V2: 2>
"""

from tracker.exceptions import ConfigError, ConfigLoadError, ConfigValidationError

from ._defaults import DEFAULT_CONFIG
from ._discovery import discover_sources, get_local_config_path, get_user_config_path
from ._load import config_from_dict, load_config
from ._loader import deep_merge, parse_env_vars, parse_string_value, read_toml_file, set_nested_key
from ._models import (
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LoggingConfig,
    LogLevel,
    SchemaConfig,
    ServerConfig,
    StorageConfig,
    TrackerConfig,
)

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigError",
    "ConfigLoadError",
    "ConfigSource",
    "ConfigSourceName",
    "ConfigValidationError",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "SchemaConfig",
    "ServerConfig",
    "StorageConfig",
    "TrackerConfig",
    "config_from_dict",
    "deep_merge",
    "discover_sources",
    "get_local_config_path",
    "get_user_config_path",
    "load_config",
    "parse_env_vars",
    "parse_string_value",
    "read_toml_file",
    "set_nested_key",
]
