# pyright: reportAny=false, reportExplicitAny=false
"""Loading the merged configuration from every source."""

from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from tracker.config._discovery import discover_sources
from tracker.config._loader import deep_merge, parse_env_vars, read_toml_file
from tracker.config._models import ConfigSource, ConfigSourceName, TrackerConfig
from tracker.exceptions import ConfigValidationError

if TYPE_CHECKING:
    from pathlib import Path


def load_config(
    config_path: Path | None = None,
    *,
    cwd: Path | None = None,
    include_user: bool = True,
    include_env: bool = True,
) -> TrackerConfig:
    """Load merged configuration from all sources.

    Sources are merged from lowest to highest precedence: built-in defaults,
    the user config file, ``./tracker.toml``, ``config_path``, then
    ``TRACKER_*`` environment variables.

    Args:
        config_path: Explicit config file, e.g. from ``--config``.
        cwd: Directory searched for ``tracker.toml``.
        include_user: Include the user config file.
        include_env: Include environment variables.

    Returns:
        The validated configuration.

    Raises:
        ConfigLoadError: If a config file cannot be read or parsed.
        ConfigValidationError: If the merged values are invalid.
    """
    sources = discover_sources(
        config_path=config_path,
        cwd=cwd,
        include_user=include_user,
        include_env=include_env,
    )

    merged: dict[str, Any] = {}
    loaded: list[ConfigSource] = []
    for source in reversed(sources):
        values: dict[str, Any] = source.values
        if source.name == ConfigSourceName.ENV:
            values = parse_env_vars()
        elif source.path is not None and source.exists:
            values = read_toml_file(source.path)

        loaded.append(ConfigSource(name=source.name, path=source.path, exists=source.exists, values=values))
        if values:
            merged = deep_merge(merged, values)

    config = config_from_dict(merged)
    config._sources = tuple(reversed(loaded))  # noqa: SLF001
    return config


def config_from_dict(data: dict[str, Any]) -> TrackerConfig:
    """Validate a configuration dictionary.

    Raises:
        ConfigValidationError: Describing the first invalid value.
    """
    try:
        return TrackerConfig.model_validate(data)
    except ValidationError as e:
        error = e.errors()[0]
        key = ".".join(str(part) for part in error["loc"])
        msg = f"Invalid configuration value for {key}: {error['msg']}"
        raise ConfigValidationError(
            msg,
            key=key,
            value=error.get("input"),
            expected=error["type"],
        ) from e
