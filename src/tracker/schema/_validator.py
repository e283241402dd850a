"""Generic record validator driven by the schema tables.

Checks run in a fixed order and stop at the first category that fails:
field whitelist, required fields, array fields, text fields, enum fields,
dates. Each error names every offending field of its category.
"""

from typing import TYPE_CHECKING

from tracker.enums import SchemaVersion
from tracker.exceptions import SchemaError
from tracker.schema._dates import is_valid_date
from tracker.schema._tables import SCHEMAS

if TYPE_CHECKING:
    from tracker._types import Record
    from tracker.schema._fields import CollectionSchema


def get_schema(collection: str, version: SchemaVersion | int = SchemaVersion.V2) -> CollectionSchema:
    """Look up the schema of a collection.

    Args:
        collection: Collection name.
        version: Schema version.

    Returns:
        The collection schema.

    Raises:
        SchemaError: If the version or collection is unknown.
    """
    try:
        tables = SCHEMAS[SchemaVersion(version)]
    except ValueError as e:
        msg = f"Unknown schema version: {version}"
        raise SchemaError(msg, collection=collection, expected="1 or 2") from e

    schema = tables.get(str(collection))
    if schema is None:
        known = ", ".join(tables)
        msg = f"Unknown collection: {collection}. Must be one of: {known}"
        raise SchemaError(msg, collection=str(collection), expected=known)
    return schema


def allowed_fields(collection: str, version: SchemaVersion | int = SchemaVersion.V2) -> tuple[str, ...]:
    return get_schema(collection, version).allowed


def validate_record(
    collection: str,
    record: Record,
    version: SchemaVersion | int = SchemaVersion.V2,
) -> None:
    """Validate a record against its collection schema.

    Absent array fields are initialized to ``[]`` on ``record`` itself; this
    is the only mutation performed.

    Args:
        collection: Collection name.
        record: The record to validate.
        version: Schema version to validate against.

    Raises:
        SchemaError: On the first violated category of checks.
    """
    schema = get_schema(collection, version)
    name = schema.collection

    _check_whitelist(name, schema, record)
    _check_required(name, schema, record)
    _check_arrays(name, schema, record)
    _check_text(name, schema, record)
    _check_enums(name, schema, record)
    _check_dates(name, schema, record)


def _check_whitelist(name: str, schema: CollectionSchema, record: Record) -> None:
    allowed = schema.allowed
    invalid = [key for key in record if key not in allowed]
    if invalid:
        msg = (
            f"Invalid fields for {name}: {', '.join(invalid)}. "
            f"Only allowed: {', '.join(allowed)}"
        )
        raise SchemaError(msg, collection=name, fields=invalid, expected=", ".join(allowed))


def _check_required(name: str, schema: CollectionSchema, record: Record) -> None:
    missing = [field for field in schema.required if record.get(field) in (None, "")]
    if missing:
        msg = f"Missing required fields for {name}: {', '.join(missing)}"
        raise SchemaError(msg, collection=name, fields=missing, expected="non-empty value")


def _check_arrays(name: str, schema: CollectionSchema, record: Record) -> None:
    wrong: list[str] = []
    for field in schema.array_fields:
        if field not in record:
            record[field] = []
        elif not isinstance(record[field], list):
            wrong.append(field)

    if wrong:
        received = ", ".join(f"{field} (received {type(record[field]).__name__})" for field in wrong)
        msg = f"Fields must be arrays in {name}: {received}"
        raise SchemaError(msg, collection=name, fields=wrong, expected="array")


def _check_text(name: str, schema: CollectionSchema, record: Record) -> None:
    wrong = [
        field for field in schema.text_fields if record.get(field) is not None and not isinstance(record[field], str)
    ]
    if wrong:
        received = ", ".join(f"{field} (received {type(record[field]).__name__})" for field in wrong)
        msg = f"Fields must be strings in {name}: {received}"
        raise SchemaError(msg, collection=name, fields=wrong, expected="string")


def _check_enums(name: str, schema: CollectionSchema, record: Record) -> None:
    problems: list[str] = []
    fields: list[str] = []
    for spec in schema.enum_fields:
        value = record.get(spec.name)
        if value in (None, ""):
            continue
        if value not in spec.choices:
            fields.append(spec.name)
            problems.append(f"Invalid {spec.name}: {value!r}. Must be one of: {', '.join(spec.choices)}")

    if problems:
        msg = "; ".join(problems)
        expected = "; ".join(
            f"{spec.name} in {{{', '.join(spec.choices)}}}" for spec in schema.enum_fields if spec.name in fields
        )
        raise SchemaError(msg, collection=name, fields=fields, expected=expected)


def _check_dates(name: str, schema: CollectionSchema, record: Record) -> None:
    invalid: list[str] = []
    for field in schema.date_fields:
        value = record.get(field)
        if value in (None, ""):
            continue
        if not is_valid_date(value):
            invalid.append(field)

    if invalid:
        details = ", ".join(f"{field}={record[field]!r}" for field in invalid)
        msg = f"Invalid date format in {name}: {details}"
        raise SchemaError(msg, collection=name, fields=invalid, expected="calendar date")
