"""Field and collection schema definitions.

Schemas are plain data: a collection schema is a tuple of field specs, and
one generic validator consumes them. Adding a collection or a field is a
change to the tables in ``_tables.py`` only.
"""

from dataclasses import dataclass
from enum import StrEnum


class FieldKind(StrEnum):
    """How a field's value is checked."""

    TEXT = "text"
    ARRAY = "array"
    ENUM = "enum"
    DATE = "date"
    ANY = "any"


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Definition of one allowed field of a collection.

    Attributes:
        name: Field name as stored in the JSON record.
        kind: How the value is checked.
        required: Whether the field must be present and non-empty.
        choices: Allowed values for enum fields, in display order.
    """

    name: str
    kind: FieldKind = FieldKind.TEXT
    required: bool = False
    choices: tuple[str, ...] = ()


def text(name: str, *, required: bool = False) -> FieldSpec:
    return FieldSpec(name, FieldKind.TEXT, required=required)


def array(name: str) -> FieldSpec:
    return FieldSpec(name, FieldKind.ARRAY)


def date(name: str, *, required: bool = False) -> FieldSpec:
    return FieldSpec(name, FieldKind.DATE, required=required)


def enum(name: str, choices: tuple[str, ...], *, required: bool = False) -> FieldSpec:
    return FieldSpec(name, FieldKind.ENUM, required=required, choices=choices)


def anything(name: str) -> FieldSpec:
    return FieldSpec(name, FieldKind.ANY)


@dataclass(frozen=True, slots=True)
class CollectionSchema:
    """The allowed fields of one collection in one schema version.

    Attributes:
        collection: Collection name.
        fields: Field specs in declaration order.
    """

    collection: str
    fields: tuple[FieldSpec, ...]

    @property
    def allowed(self) -> tuple[str, ...]:
        """Names of every allowed field."""
        return tuple(spec.name for spec in self.fields)

    @property
    def required(self) -> tuple[str, ...]:
        """Names of fields that must be present and non-empty."""
        return tuple(spec.name for spec in self.fields if spec.required)

    @property
    def array_fields(self) -> tuple[str, ...]:
        """Names of fields holding JSON arrays."""
        return self._names_of(FieldKind.ARRAY)

    @property
    def text_fields(self) -> tuple[str, ...]:
        """Names of fields holding strings."""
        return self._names_of(FieldKind.TEXT)

    @property
    def date_fields(self) -> tuple[str, ...]:
        """Names of fields holding calendar dates."""
        return self._names_of(FieldKind.DATE)

    @property
    def enum_fields(self) -> tuple[FieldSpec, ...]:
        """Specs of fields restricted to a fixed set of values."""
        return tuple(spec for spec in self.fields if spec.kind is FieldKind.ENUM)

    def field(self, name: str) -> FieldSpec | None:
        """Get the spec for a field name, or None if the field is not allowed."""
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    def _names_of(self, kind: FieldKind) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields if spec.kind is kind)
