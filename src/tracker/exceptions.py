"""Tracker exceptions."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path


class TrackerError(Exception):
    """Base exception for tracker errors."""


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(TrackerError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected


# =============================================================================
# Data Integrity Exceptions
# =============================================================================


class SchemaError(TrackerError, ValueError):
    """Raised when a record does not conform to its collection schema.

    Attributes:
        collection: The collection the record was written to.
        fields: The offending field names, in the order they were found.
        expected: Description of what was expected.
    """

    def __init__(
        self,
        message: str,
        *,
        collection: str | None = None,
        fields: Sequence[str] = (),
        expected: str | None = None,
    ) -> None:
        """Initialize with error message and schema context.

        Args:
            message: Human-readable error message.
            collection: The collection the record was written to.
            fields: The offending field names.
            expected: Description of what was expected.
        """
        super().__init__(message)
        self.collection: str | None = collection
        self.fields: tuple[str, ...] = tuple(fields)
        self.expected: str | None = expected


class SchemaVersionError(SchemaError):
    """Raised when stored data is untagged or tagged with another schema version.

    Attributes:
        stored: The version tag found in storage, or None if untagged.
        configured: The version this repository was configured with.
    """

    def __init__(
        self,
        message: str,
        *,
        stored: int | None,
        configured: int,
    ) -> None:
        """Initialize with error message and version context."""
        super().__init__(message, expected=f"schema version {configured}")
        self.stored: int | None = stored
        self.configured: int = configured


class LifecycleError(TrackerError, ValueError):
    """Raised when a stage transition would move a record backwards.

    Attributes:
        current: The stage the record is in.
        requested: The stage that was requested, or None when advancing.
    """

    def __init__(
        self,
        message: str,
        *,
        current: str | None = None,
        requested: str | None = None,
    ) -> None:
        """Initialize with error message and stage context."""
        super().__init__(message)
        self.current: str | None = current
        self.requested: str | None = requested


class NotFoundError(TrackerError, KeyError):
    """Raised when a record cannot be found.

    Attributes:
        collection: The collection that was searched.
        record_id: The ID of the record that was not found.
    """

    def __init__(
        self,
        message: str,
        *,
        collection: str | None = None,
        record_id: str | None = None,
    ) -> None:
        """Initialize with error message and record context."""
        super().__init__(message)
        self.collection: str | None = collection
        self.record_id: str | None = record_id

    def __str__(self) -> str:
        # KeyError.__str__ quotes its argument
        return str(self.args[0]) if self.args else ""


class DuplicateRecordError(TrackerError, ValueError):
    """Raised when a record ID already exists in its collection.

    Attributes:
        collection: The collection that already holds the ID.
        record_id: The duplicated ID.
    """

    def __init__(
        self,
        message: str,
        *,
        collection: str | None = None,
        record_id: str | None = None,
    ) -> None:
        """Initialize with error message and record context."""
        super().__init__(message)
        self.collection: str | None = collection
        self.record_id: str | None = record_id


class RelationshipWarning(TrackerError, UserWarning):
    """Raised internally when a record references IDs that do not exist.

    The repository catches this and logs it; it never fails a write.

    Attributes:
        collection: The collection of the referencing record.
        record_id: The ID of the referencing record.
        dangling: Mapping of field name to the IDs that could not be resolved.
    """

    def __init__(
        self,
        message: str,
        *,
        collection: str,
        record_id: str | None,
        dangling: Mapping[str, Sequence[str]],
    ) -> None:
        """Initialize with warning message and reference context."""
        super().__init__(message)
        self.collection: str = collection
        self.record_id: str | None = record_id
        self.dangling: dict[str, tuple[str, ...]] = {
            field: tuple(ids) for field, ids in dangling.items()
        }


# =============================================================================
# Storage Exceptions
# =============================================================================


class StoreError(TrackerError):
    """Raised when a persistence channel fails.

    Attributes:
        channel: Name of the channel that failed.
        operation: The operation that failed ("get", "set", "delete").
        collection: The collection involved.
        cause: The underlying exception that caused this error.
    """

    def __init__(
        self,
        message: str,
        *,
        channel: str,
        operation: str,
        collection: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and channel context."""
        super().__init__(message)
        self.channel: str = channel
        self.operation: str = operation
        self.collection: str | None = collection
        self.cause: Exception | None = cause


class CascadeError(TrackerError):
    """Raised when a cascading delete fails partway through.

    Steps already completed are not rolled back.

    Attributes:
        collection: Collection of the record whose deletion started the cascade.
        record_id: ID of that record.
        completed: Human-readable descriptions of the steps that succeeded.
        cause: The exception that stopped the cascade.
    """

    def __init__(
        self,
        message: str,
        *,
        collection: str,
        record_id: str,
        completed: Sequence[str],
        cause: Exception,
    ) -> None:
        """Initialize with error message and cascade progress."""
        super().__init__(message)
        self.collection: str = collection
        self.record_id: str = record_id
        self.completed: tuple[str, ...] = tuple(completed)
        self.cause: Exception = cause
