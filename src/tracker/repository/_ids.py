"""Per-kind monotonic ID counters.

IDs look like ``task_007``: a kind prefix and a counter padded to three
digits. Counters only move forward and are persisted in the meta record, so
an ID is never handed out twice, even after the record holding it was
deleted.
"""

import re
from typing import TYPE_CHECKING, Final

from tracker.enums import Collection

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

ID_PREFIXES: Final[dict[str, str]] = {
    Collection.PROJECTS.value: "proj",
    Collection.IDEAS.value: "idea",
    Collection.EVENTS.value: "event",
    Collection.TASKS.value: "task",
    Collection.SUBTASKS.value: "subtask",
}

COMMENT_PREFIX: Final = "comment"
EFFORT_PREFIX: Final = "effort"

ALL_PREFIXES: Final[tuple[str, ...]] = (*ID_PREFIXES.values(), EFFORT_PREFIX, COMMENT_PREFIX)

_ID_PATTERN = re.compile(r"^(?P<prefix>[a-z]+)_(?P<number>\d+)$")


def format_id(prefix: str, number: int) -> str:
    """Format an ID from a prefix and a counter value.

    Example:
        >>> format_id("task", 7)
        'task_007'
    """
    return f"{prefix}_{number:03d}"


def parse_id(record_id: str) -> tuple[str, int] | None:
    """Split an ID into prefix and number, or None if it is not counter-shaped.

    Example:
        >>> parse_id("subtask_012")
        ('subtask', 12)
        >>> parse_id("launch-party") is None
        True
    """
    match = _ID_PATTERN.match(record_id)
    if match is None:
        return None
    return match["prefix"], int(match["number"])


class IdCounters:
    """The next counter value of every ID prefix.

    Generating an ID does not consume it; ``observe`` does, once the record
    carrying the ID has been persisted.
    """

    def __init__(self, values: Mapping[str, int] | None = None) -> None:
        self._next: dict[str, int] = dict.fromkeys(ALL_PREFIXES, 1)
        for prefix, value in (values or {}).items():
            if isinstance(value, int) and value >= 1:
                self._next[prefix] = value

    def peek(self, prefix: str, taken: Iterable[str] = ()) -> str:
        """Next free ID for a prefix, skipping IDs already in use.

        Raises:
            KeyError: If the prefix is unknown.
        """
        if prefix not in self._next:
            msg = f"Unknown ID prefix: {prefix}"
            raise KeyError(msg)
        used = set(taken)
        number = self._next[prefix]
        while format_id(prefix, number) in used:
            number += 1
        return format_id(prefix, number)

    def observe(self, record_id: str) -> bool:
        """Advance a counter past an ID that is now in use.

        Returns:
            True if a counter moved.
        """
        parsed = parse_id(record_id)
        if parsed is None:
            return False
        prefix, number = parsed
        if prefix not in self._next or number < self._next[prefix]:
            return False
        self._next[prefix] = number + 1
        return True

    def observe_all(self, record_ids: Iterable[str]) -> bool:
        changed = False
        for record_id in record_ids:
            changed = self.observe(record_id) or changed
        return changed

    def reset(self) -> None:
        self._next = dict.fromkeys(ALL_PREFIXES, 1)

    def to_dict(self) -> dict[str, int]:
        return dict(self._next)
