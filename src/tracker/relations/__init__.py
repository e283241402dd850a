"""Reference graph and warn-only relationship validation."""

from tracker.relations._graph import (
    REFERENCES,
    OnDelete,
    Reference,
    referenced_collections,
    references_from,
    references_to,
)
from tracker.relations._validator import IdLookup, RelationshipValidator, check_references

__all__ = [
    "REFERENCES",
    "IdLookup",
    "OnDelete",
    "Reference",
    "RelationshipValidator",
    "check_references",
    "referenced_collections",
    "references_from",
    "references_to",
]
