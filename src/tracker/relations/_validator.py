"""Cross-collection reference checks.

Dangling references are reported, never enforced: records are routinely
written before the children they point at exist. The cascade on delete is
what keeps the collections consistent.
"""

from typing import TYPE_CHECKING

import structlog

from tracker.exceptions import RelationshipWarning
from tracker.relations._graph import references_from

if TYPE_CHECKING:
    from collections.abc import Callable, Set as AbstractSet

    from structlog.typing import FilteringBoundLogger

    from tracker._types import Record

type IdLookup = Callable[[str], AbstractSet[str]]
"""Returns the set of existing IDs of a collection."""


def check_references(collection: str, record: Record, lookup: IdLookup) -> None:
    """Check that every referenced ID in a record exists.

    Non-string entries never resolve and are reported as dangling.

    Args:
        collection: Collection of the record.
        record: The record to check.
        lookup: Returns the existing IDs of a target collection.

    Raises:
        RelationshipWarning: Listing every dangling ID per field.
    """
    dangling: dict[str, list[str]] = {}
    for ref in references_from(collection):
        ids = record.get(ref.field)
        if not isinstance(ids, list) or not ids:
            continue
        existing = lookup(ref.target)
        missing = [ref_id for ref_id in ids if not isinstance(ref_id, str) or ref_id not in existing]
        if missing:
            dangling[ref.field] = missing

    if dangling:
        details = "; ".join(f"{field}: {', '.join(map(str, ids))}" for field, ids in dangling.items())
        msg = f"Dangling references in {collection} record {record.get('id')}: {details}"
        raise RelationshipWarning(
            msg,
            collection=collection,
            record_id=record.get("id"),
            dangling=dangling,
        )


class RelationshipValidator:
    """Warn-only reference validator.

    Attributes:
        logger: Logger receiving one warning per record with dangling
            references.
    """

    def __init__(self, *, logger: FilteringBoundLogger | None = None) -> None:
        self.logger: FilteringBoundLogger = logger or structlog.get_logger()

    def validate(self, collection: str, record: Record, lookup: IdLookup) -> dict[str, tuple[str, ...]]:
        """Check a record's references and log any that dangle.

        Args:
            collection: Collection of the record.
            record: The record to check.
            lookup: Returns the existing IDs of a target collection.

        Returns:
            Mapping of field name to dangling IDs; empty when every
            reference resolves.
        """
        try:
            check_references(collection, record, lookup)
        except RelationshipWarning as warning:
            self.logger.warning(
                "dangling_reference",
                collection=warning.collection,
                record_id=warning.record_id,
                dangling={field: list(ids) for field, ids in warning.dangling.items()},
            )
            return warning.dangling
        return {}
