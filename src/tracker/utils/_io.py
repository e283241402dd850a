# pyright: reportAny=false
"""JSON file helpers.

Writes go to a temporary file in the target directory and are renamed into
place, so a reader sees either the old content or the new, never a torn
file.
"""

import tempfile
from pathlib import Path
from typing import Any

import orjson


def dump_json(data: Any) -> bytes:  # pyright: ignore[reportExplicitAny]
    """Serialize data as UTF-8 JSON with 2-space indentation."""
    return orjson.dumps(data, option=orjson.OPT_INDENT_2)


def load_json_bytes(content: bytes | str) -> Any:  # pyright: ignore[reportExplicitAny]
    """Parse JSON content.

    Raises:
        orjson.JSONDecodeError: If the content is not valid JSON.
    """
    return orjson.loads(content)


def atomic_write(path: Path, content: bytes) -> None:
    """Write bytes to a file atomically.

    Args:
        path: Destination file path. Parent directories are created.
        content: Content to write.

    Raises:
        OSError: If the write or rename fails. The temporary file is removed.
    """
    _ = path.parent.mkdir(parents=True, exist_ok=True)

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="wb",
            dir=path.parent,
            delete=False,
            prefix=f".{path.stem}.",
            suffix=".tmp",
        ) as f:
            _ = f.write(content)
            temp_path = Path(f.name)

        _ = temp_path.replace(path)
    except OSError:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise
