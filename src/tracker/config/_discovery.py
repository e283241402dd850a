"""Configuration source discovery."""

from pathlib import Path

import platformdirs

from tracker.config._defaults import DEFAULT_CONFIG
from tracker.config._loader import copy_value
from tracker.config._models import ConfigSource, ConfigSourceName

LOCAL_CONFIG_NAME = "tracker.toml"


def get_user_config_path() -> Path:
    r"""Get the platform-specific user config file path.

    - Linux: ``~/.config/tracker/config.toml``
    - macOS: ``~/Library/Application Support/tracker/config.toml``
    - Windows: ``%APPDATA%\tracker\config.toml``

    The path is returned whether or not it exists.
    """
    return platformdirs.user_config_path("tracker") / "config.toml"


def get_local_config_path(cwd: Path | None = None) -> Path:
    """Path of the ``tracker.toml`` in the working directory."""
    return (cwd or Path.cwd()) / LOCAL_CONFIG_NAME


def discover_sources(
    *,
    config_path: Path | None = None,
    cwd: Path | None = None,
    include_user: bool = True,
    include_env: bool = True,
) -> list[ConfigSource]:
    """Discover configuration sources.

    File sources are returned with empty values; the loader reads them.

    Args:
        config_path: Explicit config file, e.g. from ``--config``.
        cwd: Directory searched for ``tracker.toml``. Defaults to the
            current working directory.
        include_user: Include the user config file.
        include_env: Include ``TRACKER_*`` environment variables.

    Returns:
        Sources from highest to lowest precedence.
    """
    sources: list[ConfigSource] = []

    if include_env:
        sources.append(ConfigSource(name=ConfigSourceName.ENV, path=None, exists=True, values={}))

    if config_path is not None:
        # A missing explicit file is an error, reported when it is read
        sources.append(
            ConfigSource(name=ConfigSourceName.EXPLICIT, path=config_path, exists=True, values={})
        )

    local_path = get_local_config_path(cwd)
    sources.append(
        ConfigSource(
            name=ConfigSourceName.LOCAL,
            path=local_path,
            exists=local_path.is_file(),
            values={},
        )
    )

    if include_user:
        user_path = get_user_config_path()
        sources.append(
            ConfigSource(
                name=ConfigSourceName.USER,
                path=user_path,
                exists=user_path.is_file(),
                values={},
            )
        )

    sources.append(
        ConfigSource(
            name=ConfigSourceName.DEFAULT,
            path=None,
            exists=True,
            values=copy_value(DEFAULT_CONFIG),
        )
    )
    return sources
