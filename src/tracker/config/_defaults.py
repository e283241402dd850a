"""Built-in default configuration values.

DEFAULT_CONFIG is a plain dict so that it can be merged like any other
source; the merge functions copy it.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "storage": {
        "channels": ["file", "memory"],
        "api_url": "http://localhost:3001/api",
        "data_dir": "data",
        "timeout": 5.0,
        "retry_attempts": 3,
    },
    "schema": {
        "version": 2,
    },
    "logging": {
        "level": "warning",
        "format": "text",
        "file": "",
    },
    "server": {
        "host": "127.0.0.1",
        "port": 3001,
        "data_dir": "data",
    },
}
