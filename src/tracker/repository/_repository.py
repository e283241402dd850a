# pyright: reportAny=false, reportExplicitAny=false
"""The repository: validated CRUD over the five collections.

The repository owns its cache. Collections are loaded from the store on
first access; every write persists the full replacement array through the
store first and updates the cache only once the store accepted it.

A single active writer is assumed. Two repositories writing to the same
store race on the full-array overwrite and the last write wins.
"""

import copy
import re
from typing import TYPE_CHECKING, Any, Final

import orjson
import pendulum
import structlog

from tracker.enums import Collection, SchemaVersion, SubtaskStage
from tracker.exceptions import (
    CascadeError,
    DuplicateRecordError,
    NotFoundError,
    SchemaError,
    SchemaVersionError,
    TrackerError,
)
from tracker.lifecycle import SUBTASK_LIFECYCLE, TASK_WORKFLOW
from tracker.relations import RelationshipValidator, referenced_collections
from tracker.repository._cascade import StepKind, plan_cascade, strip_reference
from tracker.repository._ids import COMMENT_PREFIX, EFFORT_PREFIX, ID_PREFIXES, IdCounters
from tracker.repository._statistics import Statistics, compute_statistics
from tracker.repository._views import CollectionView
from tracker.schema import DEFAULT_TASK_STATUS, get_schema, is_valid_date, validate_record
from tracker.store import META_COLLECTION

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping
    from datetime import datetime

    from structlog.typing import FilteringBoundLogger

    from tracker._types import Record
    from tracker.repository._cascade import CascadeStep
    from tracker.store import CollectionStore

META_ID: Final = "meta"
EXPORT_COLLECTIONS: Final[tuple[str, ...]] = tuple(c.value for c in Collection)

MAX_COMMENT_LENGTH: Final = 1000
MAX_EFFORT_NOTES_LENGTH: Final = 500
MAX_EFFORT_HOURS: Final = 24

_SCRIPT_TAG = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_ANY_TAG = re.compile(r"<[^>]*>")


def strip_markup(text: str) -> str:
    """Remove script elements and HTML tags from free text.

    Example:
        >>> strip_markup("<b>done</b><script>alert(1)</script> ")
        'done'
    """
    return _ANY_TAG.sub("", _SCRIPT_TAG.sub("", text)).strip()


def resolve_collection(collection: str) -> str:
    """Normalize a collection name.

    Raises:
        SchemaError: If the name is not one of the five collections.
    """
    try:
        return Collection(collection).value
    except ValueError as e:
        known = ", ".join(EXPORT_COLLECTIONS)
        msg = f"Unknown collection: {collection}. Must be one of: {known}"
        raise SchemaError(msg, collection=str(collection), expected=known) from e


def _default_clock() -> pendulum.DateTime:
    return pendulum.now("UTC")


class Repository:
    """Validated CRUD, cascading deletes and statistics over a store.

    Attributes:
        store: Persistence channel (usually a FallbackStore).
        schema_version: Schema version records are validated against.
        logger: Structured logger.
        projects: View bound to the projects collection.
        ideas: View bound to the ideas collection.
        events: View bound to the events collection.
        tasks: View bound to the tasks collection.
        subtasks: View bound to the subtasks collection.
    """

    def __init__(
        self,
        store: CollectionStore,
        *,
        schema_version: SchemaVersion | int = SchemaVersion.V2,
        logger: FilteringBoundLogger | None = None,
        clock: Callable[[], pendulum.DateTime] | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            store: Persistence channel.
            schema_version: Schema version to validate against.
            logger: Logger; defaults to ``structlog.get_logger()``.
            clock: Source of the current time for timestamps.
        """
        self.store: CollectionStore = store
        self.schema_version: SchemaVersion = SchemaVersion(schema_version)
        self.logger: FilteringBoundLogger = logger or structlog.get_logger()
        self._clock: Callable[[], pendulum.DateTime] = clock or _default_clock
        self._relations: RelationshipValidator = RelationshipValidator(logger=self.logger)
        self._cache: dict[str, list[Record]] = {}
        self._meta: Record | None = None
        self._counters: IdCounters | None = None

        self.projects: CollectionView = CollectionView(self, Collection.PROJECTS)
        self.ideas: CollectionView = CollectionView(self, Collection.IDEAS)
        self.events: CollectionView = CollectionView(self, Collection.EVENTS)
        self.tasks: CollectionView = CollectionView(self, Collection.TASKS)
        self.subtasks: CollectionView = CollectionView(self, Collection.SUBTASKS)

    @property
    def timestamps_enabled(self) -> bool:
        return self.schema_version >= SchemaVersion.V2

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def get_all(self, collection: str) -> list[Record]:
        """All records of a collection, in insertion order."""
        return copy.deepcopy(await self._load(resolve_collection(collection)))

    async def find(self, collection: str, record_id: str) -> Record | None:
        """A record by ID, or None if absent."""
        record = self._find_in(await self._load(resolve_collection(collection)), record_id)
        return copy.deepcopy(record) if record is not None else None

    async def get(self, collection: str, record_id: str) -> Record:
        """A record by ID.

        Raises:
            NotFoundError: If no record has that ID.
        """
        name = resolve_collection(collection)
        record = self._find_in(await self._load(name), record_id)
        if record is None:
            raise self._not_found(name, record_id)
        return copy.deepcopy(record)

    async def exists(self, collection: str, record_id: str) -> bool:
        return self._find_in(await self._load(resolve_collection(collection)), record_id) is not None

    async def get_by_ids(self, collection: str, record_ids: Iterable[str]) -> list[Record]:
        """Records whose ID is in ``record_ids``, in collection order."""
        wanted = set(record_ids)
        records = await self._load(resolve_collection(collection))
        return [copy.deepcopy(record) for record in records if record.get("id") in wanted]

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def add(self, collection: str, record: Mapping[str, Any]) -> Record:
        """Validate and persist a new record.

        Array fields that are absent or None become ``[]``; a subtask
        without ``taskType`` starts at Analyze and a task without
        ``doneStatus`` gets the first status of the schema version. An ID is
        generated when none is given.

        Args:
            collection: Target collection.
            record: The new record.

        Returns:
            The stored record, including defaults and the ID.

        Raises:
            SchemaError: If the record does not conform to the schema.
            DuplicateRecordError: If the ID is already in use.
            StoreError: If the record cannot be persisted.
        """
        name = resolve_collection(collection)
        item: Record = copy.deepcopy(dict(record))
        self._apply_defaults(name, item)

        records = await self._load(name)
        counters = await self._load_counters()
        existing_ids = {r.get("id") for r in records if isinstance(r.get("id"), str)}

        generated = item.get("id") in (None, "")
        if generated:
            item["id"] = counters.peek(ID_PREFIXES[name], (str(i) for i in existing_ids if i))

        if self.timestamps_enabled:
            now = self._now_iso()
            item["createdAt"] = item.get("createdAt") or now
            item["updatedAt"] = now

        # IDs are known to be strings from here on
        validate_record(name, item, self.schema_version)
        if not generated and item["id"] in existing_ids:
            msg = f"Record {item['id']} already exists in {name}"
            raise DuplicateRecordError(msg, collection=name, record_id=item["id"])
        await self._check_relations(name, item)

        await self._write(name, [*records, item])
        if counters.observe(item["id"]):
            await self._save_meta()

        self.logger.info("record_added", collection=name, record_id=item["id"])
        return copy.deepcopy(item)

    async def update(self, collection: str, record_id: str, partial: Mapping[str, Any]) -> Record:
        """Merge fields over a stored record, validate and persist.

        The ID and, in schema version 2, ``createdAt`` are preserved. A
        change of subtask ``taskType`` must move forward.

        Args:
            collection: Target collection.
            record_id: ID of the record to update.
            partial: Fields to change.

        Returns:
            The stored record after the update.

        Raises:
            NotFoundError: If no record has that ID.
            SchemaError: If the merged record does not conform to the schema.
            LifecycleError: If a subtask stage would regress.
            StoreError: If the record cannot be persisted.
        """
        name = resolve_collection(collection)
        records = await self._load(name)
        existing = self._find_in(records, record_id)
        if existing is None:
            raise self._not_found(name, record_id)

        merged: Record = {**copy.deepcopy(existing), **copy.deepcopy(dict(partial))}
        merged["id"] = existing["id"]
        if self.timestamps_enabled:
            if existing.get("createdAt"):
                merged["createdAt"] = existing["createdAt"]
            merged["updatedAt"] = self._now_iso()

        validate_record(name, merged, self.schema_version)
        if name == Collection.SUBTASKS and existing.get("taskType") and "taskType" in partial:
            SUBTASK_LIFECYCLE.ensure_transition(existing["taskType"], merged["taskType"])
        await self._check_relations(name, merged)

        await self._write(name, [merged if r.get("id") == record_id else r for r in records])

        self.logger.info("record_updated", collection=name, record_id=record_id, fields=sorted(partial))
        return copy.deepcopy(merged)

    async def delete(self, collection: str, record_id: str) -> list[tuple[str, str]]:
        """Delete a record, cascading through the reference graph.

        Children reached through cascading edges are deleted first, then the
        ID is stripped from every array referencing it, then the record is
        removed. Children that no longer exist are skipped.

        Args:
            collection: Collection of the record.
            record_id: ID of the record.

        Returns:
            (collection, id) of every removed record, root last.

        Raises:
            NotFoundError: If no record has that ID.
            CascadeError: If any write fails. Completed steps are not rolled
                back and are listed on the error.
        """
        name = resolve_collection(collection)
        if self._find_in(await self._load(name), record_id) is None:
            raise self._not_found(name, record_id)

        completed: list[str] = []
        try:
            data = {c: await self._load(c) for c in EXPORT_COLLECTIONS}
            plan = plan_cascade(name, record_id, lambda c, i: self._find_in(data[c], i))
            for child_collection, child_id in plan.skipped:
                self.logger.debug("cascade_child_missing", collection=child_collection, record_id=child_id)
            for step in plan.steps:
                if await self._execute_step(step):
                    completed.append(step.describe())
        except TrackerError as e:
            msg = f"Deleting {name}/{record_id} failed after {len(completed)} step(s): {e}"
            self.logger.error(
                "cascade_failed",
                collection=name,
                record_id=record_id,
                completed=completed,
                error=str(e),
            )
            raise CascadeError(msg, collection=name, record_id=record_id, completed=completed, cause=e) from e

        self.logger.info("record_deleted", collection=name, record_id=record_id, steps=completed)
        return list(plan.removed)

    async def advance_subtask_stage(self, subtask_id: str) -> Record:
        """Move a subtask to its next stage.

        Raises:
            NotFoundError: If the subtask does not exist.
            LifecycleError: If the subtask is already in Production.
        """
        subtask = await self.get(Collection.SUBTASKS, subtask_id)
        next_stage = SUBTASK_LIFECYCLE.advance(subtask.get("taskType") or SUBTASK_LIFECYCLE.first)
        return await self.update(Collection.SUBTASKS, subtask_id, {"taskType": next_stage})

    async def advance_task_status(self, task_id: str) -> Record:
        """Move a task to its next workflow status (schema version 2).

        Raises:
            SchemaError: Under schema version 1, which has no workflow.
            NotFoundError: If the task does not exist.
            LifecycleError: If the task is already production_done.
        """
        self._require_v2("advancing task status")
        task = await self.get(Collection.TASKS, task_id)
        next_status = TASK_WORKFLOW.advance(task.get("doneStatus") or TASK_WORKFLOW.first)
        return await self.update(Collection.TASKS, task_id, {"doneStatus": next_status})

    # -------------------------------------------------------------------------
    # Subtask comments and effort (schema version 2)
    # -------------------------------------------------------------------------

    async def add_comment(self, subtask_id: str, text: str) -> Record:
        """Append a comment to a subtask.

        Markup is stripped from the text.

        Returns:
            The new comment.

        Raises:
            SchemaError: If the text is empty or too long, or under schema
                version 1.
            NotFoundError: If the subtask does not exist.
        """
        self._require_v2("comments")
        clean = self._clean_comment(text)
        subtask = await self.get(Collection.SUBTASKS, subtask_id)
        comments = list(subtask.get("comments") or [])
        counters = await self._load_counters()

        comment = {
            "id": counters.peek(COMMENT_PREFIX, (str(c.get("id")) for c in comments)),
            "text": clean,
            "createdAt": self._now_iso(),
        }
        _ = await self.update(Collection.SUBTASKS, subtask_id, {"comments": [*comments, comment]})
        if counters.observe(comment["id"]):
            await self._save_meta()
        return comment

    async def edit_comment(self, subtask_id: str, comment_id: str, text: str) -> Record:
        """Replace the text of a subtask comment.

        Raises:
            NotFoundError: If the subtask or comment does not exist.
        """
        self._require_v2("comments")
        clean = self._clean_comment(text)
        subtask = await self.get(Collection.SUBTASKS, subtask_id)
        comments = list(subtask.get("comments") or [])
        comment = self._find_in(comments, comment_id)
        if comment is None:
            msg = f"Comment {comment_id} not found on subtask {subtask_id}"
            raise NotFoundError(msg, collection=Collection.SUBTASKS.value, record_id=comment_id)

        comment["text"] = clean
        comment["updatedAt"] = self._now_iso()
        _ = await self.update(Collection.SUBTASKS, subtask_id, {"comments": comments})
        return comment

    async def delete_comment(self, subtask_id: str, comment_id: str) -> None:
        self._require_v2("comments")
        await self._remove_entry(subtask_id, "comments", comment_id)

    async def log_effort(self, subtask_id: str, hours: float, date: str, notes: str = "") -> Record:
        """Record time spent on a subtask.

        Args:
            subtask_id: The subtask.
            hours: Hours spent, more than 0 and at most 24.
            date: Calendar date the work happened.
            notes: Optional notes; markup is stripped.

        Returns:
            The new effort entry.

        Raises:
            SchemaError: If a value is out of range, or under schema
                version 1.
            NotFoundError: If the subtask does not exist.
        """
        self._require_v2("effort logging")
        if not 0 < hours <= MAX_EFFORT_HOURS:
            msg = f"Effort hours must be more than 0 and at most {MAX_EFFORT_HOURS}, received: {hours}"
            raise SchemaError(msg, collection=Collection.SUBTASKS.value, fields=("hours",), expected="0 < hours <= 24")
        if not is_valid_date(date):
            msg = f"Invalid date format for effort date: {date!r}"
            raise SchemaError(msg, collection=Collection.SUBTASKS.value, fields=("date",), expected="calendar date")
        clean_notes = strip_markup(notes)
        if len(clean_notes) > MAX_EFFORT_NOTES_LENGTH:
            msg = f"Effort notes are too long (maximum {MAX_EFFORT_NOTES_LENGTH} characters)"
            raise SchemaError(msg, collection=Collection.SUBTASKS.value, fields=("notes",), expected="short text")

        subtask = await self.get(Collection.SUBTASKS, subtask_id)
        efforts = list(subtask.get("efforts") or [])
        counters = await self._load_counters()

        effort = {
            "id": counters.peek(EFFORT_PREFIX, (str(e.get("id")) for e in efforts)),
            "hours": hours,
            "date": date,
            "notes": clean_notes,
            "createdAt": self._now_iso(),
        }
        _ = await self.update(Collection.SUBTASKS, subtask_id, {"efforts": [*efforts, effort]})
        if counters.observe(effort["id"]):
            await self._save_meta()
        return effort

    async def delete_effort(self, subtask_id: str, effort_id: str) -> None:
        self._require_v2("effort logging")
        await self._remove_entry(subtask_id, "efforts", effort_id)

    # -------------------------------------------------------------------------
    # Whole-dataset operations
    # -------------------------------------------------------------------------

    async def get_statistics(self, now: datetime | None = None) -> Statistics:
        """Aggregate counts across all collections.

        Args:
            now: Reference time; defaults to the repository clock. Naive
                datetimes are taken as UTC.
        """
        reference = self._clock() if now is None else pendulum.instance(now, tz="UTC")
        data = {c: await self._load(c) for c in EXPORT_COLLECTIONS}
        return compute_statistics(data, version=self.schema_version, now=reference)

    async def export_all(self) -> dict[str, Any]:
        """Every collection plus the export date and schema version."""
        data: dict[str, Any] = {c: copy.deepcopy(await self._load(c)) for c in EXPORT_COLLECTIONS}
        data["exportDate"] = self._now_iso()
        data["version"] = int(self.schema_version)
        return data

    async def import_all(self, data: Mapping[str, Any] | str | bytes) -> dict[str, int]:
        """Replace collections with the contents of an export document.

        Only collections present in the document are replaced. Every record
        is validated before anything is written.

        Args:
            data: An export document, or its JSON text.

        Returns:
            Number of imported records per collection.

        Raises:
            SchemaVersionError: If the document's version differs from this
                repository's.
            SchemaError: If the document or any record is invalid.
            DuplicateRecordError: If a collection repeats an ID.
        """
        document = self._parse_document(data)
        self._check_document_version(document.get("version"))

        incoming: dict[str, list[Record]] = {}
        for name in EXPORT_COLLECTIONS:
            if name not in document:
                continue
            records = document[name]
            if not isinstance(records, list):
                msg = f"Import field {name} must be an array, received: {type(records).__name__}"
                raise SchemaError(msg, collection=name, fields=(name,), expected="array")
            incoming[name] = self._validate_import(name, records)

        counters = await self._load_counters()
        for name, records in incoming.items():
            await self._write(name, records)
            _ = counters.observe_all(str(r["id"]) for r in records)
        await self._save_meta()

        counts = {name: len(records) for name, records in incoming.items()}
        self.logger.info("data_imported", counts=counts)
        return counts

    async def clear_all(self) -> None:
        """Empty every collection and reset the ID counters."""
        for name in EXPORT_COLLECTIONS:
            await self._write(name, [])
        counters = await self._load_counters()
        counters.reset()
        await self._save_meta()
        self.logger.info("data_cleared")

    # -------------------------------------------------------------------------
    # Schema version tagging
    # -------------------------------------------------------------------------

    async def stored_schema_version(self) -> int | None:
        """Version tag found in storage, or None if the data is untagged."""
        meta = await self._load_meta()
        version = meta.get("schemaVersion")
        return version if isinstance(version, int) else None

    async def initialize(self) -> SchemaVersion:
        """Check or establish the schema version tag of the stored data.

        Empty, untagged storage is stamped with this repository's version.

        Returns:
            The schema version in effect.

        Raises:
            SchemaVersionError: If the data is untagged but not empty, or is
                tagged with another version.
        """
        stored = await self.stored_schema_version()
        configured = int(self.schema_version)

        if stored is None:
            for name in EXPORT_COLLECTIONS:
                if await self._load(name):
                    msg = (
                        f"Stored data has no schema version tag but {name} is not empty; "
                        f"tag it explicitly with schema version 1 or 2"
                    )
                    raise SchemaVersionError(msg, stored=None, configured=configured)
            await self.tag_schema_version(self.schema_version)
            return self.schema_version

        if stored != configured:
            msg = f"Stored data is tagged with schema version {stored}, but version {configured} is configured"
            raise SchemaVersionError(msg, stored=stored, configured=configured)
        return self.schema_version

    async def tag_schema_version(self, version: SchemaVersion | int) -> None:
        """Stamp the stored data with a schema version.

        Raises:
            SchemaError: If the version is unknown.
        """
        try:
            tag = SchemaVersion(version)
        except ValueError as e:
            msg = f"Unknown schema version: {version}"
            raise SchemaError(msg, expected="1 or 2") from e

        meta = await self._load_meta()
        meta["schemaVersion"] = int(tag)
        await self._save_meta()
        self.logger.info("schema_version_tagged", version=int(tag))

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _load(self, collection: str) -> list[Record]:
        if collection not in self._cache:
            self._cache[collection] = await self.store.get(collection)
        return self._cache[collection]

    async def _write(self, collection: str, records: list[Record]) -> None:
        await self.store.set(collection, records)
        self._cache[collection] = records

    async def _load_meta(self) -> Record:
        if self._meta is None:
            stored = await self.store.get(META_COLLECTION)
            meta = self._find_in(stored, META_ID)
            self._meta = meta if meta is not None else {"id": META_ID}
        return self._meta

    async def _load_counters(self) -> IdCounters:
        if self._counters is None:
            meta = await self._load_meta()
            values = meta.get("counters")
            self._counters = IdCounters(values if isinstance(values, dict) else None)
        return self._counters

    async def _save_meta(self) -> None:
        meta = await self._load_meta()
        counters = await self._load_counters()
        updated = {
            "id": META_ID,
            "schemaVersion": meta.get("schemaVersion") or int(self.schema_version),
            "counters": counters.to_dict(),
        }
        await self.store.set(META_COLLECTION, [updated])
        self._meta = updated

    async def _execute_step(self, step: CascadeStep) -> bool:
        records = copy.deepcopy(await self._load(step.collection))

        if step.kind is StepKind.STRIP:
            changed = strip_reference(records, step.field or "", step.record_id)
            if not changed:
                return False
            for index in changed:
                if self.timestamps_enabled:
                    records[index]["updatedAt"] = self._now_iso()
                validate_record(step.collection, records[index], self.schema_version)
            await self._write(step.collection, records)
            return True

        if self._find_in(records, step.record_id) is None:
            self.logger.debug("cascade_child_missing", collection=step.collection, record_id=step.record_id)
            return False
        try:
            await self.store.delete(step.collection, step.record_id)
        except NotFoundError:
            # Channel lost the record; rewrite the array without it
            await self.store.set(step.collection, [r for r in records if r.get("id") != step.record_id])
        self._cache[step.collection] = [r for r in records if r.get("id") != step.record_id]
        return True

    async def _check_relations(self, collection: str, record: Record) -> None:
        existing: dict[str, set[str]] = {}
        for target in referenced_collections(collection):
            existing[target] = {str(r.get("id")) for r in await self._load(target)}
        _ = self._relations.validate(collection, record, existing.__getitem__)

    async def _remove_entry(self, subtask_id: str, field: str, entry_id: str) -> None:
        subtask = await self.get(Collection.SUBTASKS, subtask_id)
        entries = list(subtask.get(field) or [])
        remaining = [entry for entry in entries if entry.get("id") != entry_id]
        if len(remaining) == len(entries):
            msg = f"{field[:-1].capitalize()} {entry_id} not found on subtask {subtask_id}"
            raise NotFoundError(msg, collection=Collection.SUBTASKS.value, record_id=entry_id)
        _ = await self.update(Collection.SUBTASKS, subtask_id, {field: remaining})

    def _apply_defaults(self, collection: str, item: Record) -> None:
        for field in get_schema(collection, self.schema_version).array_fields:
            if item.get(field) is None:
                item[field] = []
        if collection == Collection.SUBTASKS and not item.get("taskType"):
            item["taskType"] = SubtaskStage.ANALYZE.value
        if collection == Collection.TASKS and not item.get("doneStatus"):
            item["doneStatus"] = DEFAULT_TASK_STATUS[self.schema_version]

    def _validate_import(self, collection: str, records: list[Any]) -> list[Record]:
        validated: list[Record] = []
        seen: set[str] = set()
        for raw in records:
            if not isinstance(raw, dict):
                msg = f"Import records of {collection} must be objects, received: {type(raw).__name__}"
                raise SchemaError(msg, collection=collection, expected="object")
            record = copy.deepcopy(raw)
            validate_record(collection, record, self.schema_version)
            record_id = str(record["id"])
            if record_id in seen:
                msg = f"Record {record_id} appears more than once in imported {collection}"
                raise DuplicateRecordError(msg, collection=collection, record_id=record_id)
            seen.add(record_id)
            validated.append(record)
        return validated

    def _check_document_version(self, version: Any) -> None:
        configured = int(self.schema_version)
        try:
            stored = int(float(str(version)))
        except (ValueError, OverflowError) as e:
            msg = f"Import document has no usable version (found {version!r}); expected {configured}"
            raise SchemaVersionError(msg, stored=None, configured=configured) from e
        if stored != configured:
            msg = f"Import document has schema version {stored}, but version {configured} is configured"
            raise SchemaVersionError(msg, stored=stored, configured=configured)

    @staticmethod
    def _parse_document(data: Mapping[str, Any] | str | bytes) -> Mapping[str, Any]:
        if isinstance(data, (str, bytes)):
            try:
                data = orjson.loads(data)
            except orjson.JSONDecodeError as e:
                msg = f"Import document is not valid JSON: {e}"
                raise SchemaError(msg, expected="JSON object") from e
        if not isinstance(data, dict):
            msg = f"Import document must be a JSON object, received: {type(data).__name__}"
            raise SchemaError(msg, expected="JSON object")
        return data

    @staticmethod
    def _clean_comment(text: str) -> str:
        clean = strip_markup(text)
        if not clean:
            msg = "Comment text must not be empty"
            raise SchemaError(msg, collection=Collection.SUBTASKS.value, fields=("text",), expected="non-empty text")
        if len(clean) > MAX_COMMENT_LENGTH:
            msg = f"Comment is too long (maximum {MAX_COMMENT_LENGTH} characters)"
            raise SchemaError(msg, collection=Collection.SUBTASKS.value, fields=("text",), expected="short text")
        return clean

    def _require_v2(self, feature: str) -> None:
        if not self.timestamps_enabled:
            msg = f"Schema version {int(self.schema_version)} does not support {feature}; version 2 is required"
            raise SchemaError(msg, expected="schema version 2")

    def _now_iso(self) -> str:
        return self._clock().to_iso8601_string()

    @staticmethod
    def _find_in(records: Iterable[Record], record_id: str) -> Record | None:
        for record in records:
            if record.get("id") == record_id:
                return record
        return None

    @staticmethod
    def _not_found(collection: str, record_id: str) -> NotFoundError:
        msg = f"Record {record_id} not found in {collection}"
        return NotFoundError(msg, collection=collection, record_id=record_id)
