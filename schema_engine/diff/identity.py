"""Identity lookup and deep-equality helpers for schema objects.

Tables, columns, and foreign keys are matched across snapshots by ``id``
only.  Names are compared as ordinary properties.  All helpers are pure and
never mutate their inputs.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, NamedTuple, Protocol, TypeVar

from schema_engine.models.changes import PropertyChange
from schema_engine.models.schema import Table


class _HasId(Protocol):
    id: str


T = TypeVar("T", bound=_HasId)


class PropertyMetadata(NamedTuple):
    """Declares one comparable property and its human label."""

    attribute: str
    key: str
    display_name: str


# ---------------------------------------------------------------------------
# Declared property tables (order is the order of reported changes)
# ---------------------------------------------------------------------------

TABLE_PROPERTIES: tuple[PropertyMetadata, ...] = (
    PropertyMetadata("name", "name", "Name"),
    PropertyMetadata("schema_", "schema", "Schema"),
)

COLUMN_PROPERTIES: tuple[PropertyMetadata, ...] = (
    PropertyMetadata("name", "name", "Name"),
    PropertyMetadata("data_type", "dataType", "Data Type"),
    PropertyMetadata("max_length", "maxLength", "Max Length"),
    PropertyMetadata("precision", "precision", "Precision"),
    PropertyMetadata("scale", "scale", "Scale"),
    PropertyMetadata("is_primary_key", "isPrimaryKey", "Primary Key"),
    PropertyMetadata("is_identity", "isIdentity", "Identity"),
    PropertyMetadata("identity_seed", "identitySeed", "Identity Seed"),
    PropertyMetadata("identity_increment", "identityIncrement", "Identity Increment"),
    PropertyMetadata("is_nullable", "isNullable", "Nullable"),
    PropertyMetadata("default_value", "defaultValue", "Default Value"),
    PropertyMetadata("is_computed", "isComputed", "Computed"),
    PropertyMetadata("computed_formula", "computedFormula", "Computed Formula"),
    PropertyMetadata("computed_persisted", "computedPersisted", "Computed Persisted"),
)

FOREIGN_KEY_PROPERTIES: tuple[PropertyMetadata, ...] = (
    PropertyMetadata("name", "name", "Name"),
    PropertyMetadata("columns", "columns", "Columns"),
    PropertyMetadata("referenced_schema_name", "referencedSchemaName", "Referenced Schema"),
    PropertyMetadata("referenced_table_name", "referencedTableName", "Referenced Table"),
    PropertyMetadata("referenced_columns", "referencedColumns", "Referenced Columns"),
    PropertyMetadata("on_delete_action", "onDeleteAction", "On Delete Action"),
    PropertyMetadata("on_update_action", "onUpdateAction", "On Update Action"),
)


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


def map_by_id(items: Iterable[T]) -> dict[str, T]:
    """Index *items* by id, preserving source order.

    A later duplicate id replaces an earlier one.
    """
    return {item.id: item for item in items}


def find_by_id(items: Iterable[T], item_id: str | None) -> T | None:
    """Return the first item whose id equals *item_id*, or ``None``."""
    if item_id is None:
        return None
    for item in items:
        if item.id == item_id:
            return item
    return None


def index_of_id(items: Sequence[T], item_id: str | None) -> int:
    """Return the position of *item_id* in *items*, or ``-1``."""
    for index, item in enumerate(items):
        if item.id == item_id:
            return index
    return -1


def find_table_by_name(tables: Iterable[Table], schema: str, name: str) -> Table | None:
    """Locate a table by its ``schema``/``name`` pair (exact match)."""
    for table in tables:
        if table.schema_ == schema and table.name == name:
            return table
    return None


# ---------------------------------------------------------------------------
# Equality
# ---------------------------------------------------------------------------


def values_equal(left: Any, right: Any) -> bool:
    """Deep, order-sensitive equality.

    Sequences (other than strings) compare by length first, then
    element-wise; mappings compare key sets then values.  Everything else
    falls back to ``==``.
    """
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        if len(left) != len(right):
            return False
        return all(values_equal(a, b) for a, b in zip(left, right))

    if isinstance(left, Mapping) and isinstance(right, Mapping):
        if left.keys() != right.keys():
            return False
        return all(values_equal(left[k], right[k]) for k in left)

    if isinstance(left, (list, tuple, Mapping)) or isinstance(right, (list, tuple, Mapping)):
        return False

    return bool(left == right)


def diff_properties(
    original: object,
    current: object,
    properties: Sequence[PropertyMetadata],
) -> list[PropertyChange]:
    """Compare two objects over *properties* and return the differences.

    Changes are reported in declaration order.  List values are copied so
    the returned records never alias the inputs.
    """
    changes: list[PropertyChange] = []
    for prop in properties:
        old_value = getattr(original, prop.attribute, None)
        new_value = getattr(current, prop.attribute, None)
        if values_equal(old_value, new_value):
            continue
        changes.append(
            PropertyChange(
                property=prop.key,
                display_name=prop.display_name,
                old_value=copy.deepcopy(old_value),
                new_value=copy.deepcopy(new_value),
            )
        )
    return changes
