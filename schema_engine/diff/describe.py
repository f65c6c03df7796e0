"""One-line, human-readable descriptions of schema changes."""

from __future__ import annotations

from enum import Enum
from typing import Any

from schema_engine.models.changes import ChangeAction, ChangeCategory, PropertyChange, SchemaChange

_OBJECT_LABELS: dict[ChangeCategory, str] = {
    ChangeCategory.COLUMN: "column",
    ChangeCategory.FOREIGN_KEY: "foreign key",
}

_TABLE_VERBS: dict[ChangeAction, str] = {
    ChangeAction.ADD: "Created",
    ChangeAction.DELETE: "Deleted",
    ChangeAction.MODIFY: "Modified",
}

_OBJECT_VERBS: dict[ChangeAction, str] = {
    ChangeAction.ADD: "Added",
    ChangeAction.DELETE: "Deleted",
    ChangeAction.MODIFY: "Modified",
}


def format_value(value: Any) -> str:
    """Stringify a property value for display.

    Booleans render as ``true``/``false``, ``None`` as ``null``, enum members
    by their raw value, and lists as comma-separated items.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (list, tuple)):
        return ", ".join(format_value(item) for item in value)
    return str(value)


def describe_property_change(change: PropertyChange) -> str:
    """Render ``<Display Name> changed from '<old>' to '<new>'``."""
    return (
        f"{change.display_name} changed from "
        f"'{format_value(change.old_value)}' to '{format_value(change.new_value)}'"
    )


def _with_properties(head: str, property_changes: list[PropertyChange] | None) -> str:
    if not property_changes:
        return head
    details = ", ".join(describe_property_change(p) for p in property_changes)
    return f"{head}: {details}"


def describe_change(change: SchemaChange) -> str:
    """Return a one-line description of *change*.

    Examples::

        Created table [dbo].[audit_log]
        Modified column 'user_id': Data Type changed from 'int' to 'bigint'
        Deleted foreign key 'FK_returns_order_item'
    """
    if change.category == ChangeCategory.TABLE:
        head = f"{_TABLE_VERBS[change.action]} table [{change.table_schema}].[{change.table_name}]"
    else:
        label = _OBJECT_LABELS[change.category]
        head = f"{_OBJECT_VERBS[change.action]} {label} '{change.object_name or ''}'"

    if change.action == ChangeAction.MODIFY:
        return _with_properties(head, change.property_changes)
    return head
