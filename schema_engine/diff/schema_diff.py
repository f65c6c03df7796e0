"""Structural diff engine for schema snapshots.

Compares a *baseline* schema against the *current* (edited) schema and
produces a :class:`SchemaChangesSummary` of id-keyed changes grouped by
owning table.

Matching rules
--------------
* Tables, columns, and foreign keys are matched by ``id`` only, so a rename
  is a modify, never a delete + add.
* A table present only in ``current`` yields a table add plus one add per
  column and per foreign key it already carries, so each can be undone on its
  own.
* A table present only in ``baseline`` yields a single table delete; its
  children are not reported separately.
* Foreign key column lists are compared order-sensitively.
* When a referenced column is renamed, the referencing foreign key's
  ``referencedColumns`` list changes as a side effect.  That entry is dropped
  from the foreign key's property changes; the rename is reported once, on
  the column.  A foreign key that was also retargeted keeps the entry.

Output ordering is deterministic: groups sort by lower-cased
``schema.name`` (then id); inside a group changes run table -> column ->
foreign key, then add -> delete -> modify, then source order.
"""

from __future__ import annotations

import logging

from schema_engine.diff.identity import (
    COLUMN_PROPERTIES,
    FOREIGN_KEY_PROPERTIES,
    TABLE_PROPERTIES,
    diff_properties,
    find_table_by_name,
    map_by_id,
    values_equal,
)
from schema_engine.models.changes import (
    ACTION_ORDER,
    CATEGORY_ORDER,
    ChangeAction,
    ChangeCategory,
    PropertyChange,
    SchemaChange,
    SchemaChangesSummary,
    TableChangeGroup,
)
from schema_engine.models.schema import Column, ForeignKey, Schema, Table

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_change(
    category: ChangeCategory,
    action: ChangeAction,
    table: Table,
    obj: Column | ForeignKey | None = None,
    property_changes: list[PropertyChange] | None = None,
) -> SchemaChange:
    return SchemaChange(
        category=category,
        action=action,
        table_id=table.id,
        table_schema=table.schema_,
        table_name=table.name,
        object_id=obj.id if obj is not None else None,
        object_name=obj.name if obj is not None else None,
        property_changes=property_changes,
    )


def _change_sort_key(change: SchemaChange) -> tuple[int, int]:
    return CATEGORY_ORDER.index(change.category), ACTION_ORDER.index(change.action)


def _group_sort_key(group: TableChangeGroup) -> tuple[str, str]:
    return f"{group.table_schema}.{group.table_name}".lower(), group.table_id


class _ColumnRenameIndex:
    """Lazily computes ``old name -> new name`` maps per surviving table."""

    def __init__(self, baseline: dict[str, Table], current: dict[str, Table]) -> None:
        self._baseline = baseline
        self._current = current
        self._cache: dict[str, dict[str, str]] = {}

    def renames_for(self, table_id: str) -> dict[str, str]:
        cached = self._cache.get(table_id)
        if cached is not None:
            return cached

        renames: dict[str, str] = {}
        old_table = self._baseline.get(table_id)
        new_table = self._current.get(table_id)
        if old_table is not None and new_table is not None:
            old_columns = map_by_id(old_table.columns)
            for new_column in new_table.columns:
                old_column = old_columns.get(new_column.id)
                if old_column is not None and old_column.name != new_column.name:
                    renames[old_column.name] = new_column.name

        self._cache[table_id] = renames
        return renames


def _drop_rename_side_effect(
    old_fk: ForeignKey,
    new_fk: ForeignKey,
    changes: list[PropertyChange],
    current_tables: list[Table],
    rename_index: _ColumnRenameIndex,
) -> list[PropertyChange]:
    """Remove a ``referencedColumns`` entry that is explained by column renames.

    Only applies while the foreign key still targets the same table; a
    retargeted foreign key reports its column list as a real edit.
    """
    if not any(c.property == "referencedColumns" for c in changes):
        return changes
    if (
        old_fk.referenced_schema_name != new_fk.referenced_schema_name
        or old_fk.referenced_table_name != new_fk.referenced_table_name
    ):
        return changes

    referenced = find_table_by_name(
        current_tables,
        new_fk.referenced_schema_name,
        new_fk.referenced_table_name,
    )
    if referenced is None:
        return changes

    renames = rename_index.renames_for(referenced.id)
    if not renames:
        return changes

    mapped = [renames.get(name, name) for name in old_fk.referenced_columns]
    if not values_equal(mapped, new_fk.referenced_columns):
        return changes

    return [c for c in changes if c.property != "referencedColumns"]


# ---------------------------------------------------------------------------
# Per-table diffing
# ---------------------------------------------------------------------------


def _added_table_group(table: Table) -> TableChangeGroup:
    changes = [_make_change(ChangeCategory.TABLE, ChangeAction.ADD, table)]
    changes.extend(_make_change(ChangeCategory.COLUMN, ChangeAction.ADD, table, col) for col in table.columns)
    changes.extend(_make_change(ChangeCategory.FOREIGN_KEY, ChangeAction.ADD, table, fk) for fk in table.foreign_keys)
    return TableChangeGroup(
        table_id=table.id,
        table_schema=table.schema_,
        table_name=table.name,
        is_new=True,
        changes=changes,
    )


def _deleted_table_group(table: Table) -> TableChangeGroup:
    return TableChangeGroup(
        table_id=table.id,
        table_schema=table.schema_,
        table_name=table.name,
        is_deleted=True,
        changes=[_make_change(ChangeCategory.TABLE, ChangeAction.DELETE, table)],
    )


def _diff_columns(old_table: Table, new_table: Table) -> list[SchemaChange]:
    old_columns = map_by_id(old_table.columns)
    new_columns = map_by_id(new_table.columns)
    changes: list[SchemaChange] = []

    for column in new_table.columns:
        if column.id not in old_columns:
            changes.append(_make_change(ChangeCategory.COLUMN, ChangeAction.ADD, new_table, column))

    for column in old_table.columns:
        if column.id not in new_columns:
            changes.append(_make_change(ChangeCategory.COLUMN, ChangeAction.DELETE, new_table, column))

    for column in new_table.columns:
        old_column = old_columns.get(column.id)
        if old_column is None:
            continue
        property_changes = diff_properties(old_column, column, COLUMN_PROPERTIES)
        if property_changes:
            changes.append(
                _make_change(ChangeCategory.COLUMN, ChangeAction.MODIFY, new_table, column, property_changes)
            )

    return changes


def _diff_foreign_keys(
    old_table: Table,
    new_table: Table,
    current_tables: list[Table],
    rename_index: _ColumnRenameIndex,
) -> list[SchemaChange]:
    old_fks = map_by_id(old_table.foreign_keys)
    new_fks = map_by_id(new_table.foreign_keys)
    changes: list[SchemaChange] = []

    for fk in new_table.foreign_keys:
        if fk.id not in old_fks:
            changes.append(_make_change(ChangeCategory.FOREIGN_KEY, ChangeAction.ADD, new_table, fk))

    for fk in old_table.foreign_keys:
        if fk.id not in new_fks:
            changes.append(_make_change(ChangeCategory.FOREIGN_KEY, ChangeAction.DELETE, new_table, fk))

    for fk in new_table.foreign_keys:
        old_fk = old_fks.get(fk.id)
        if old_fk is None:
            continue
        property_changes = diff_properties(old_fk, fk, FOREIGN_KEY_PROPERTIES)
        property_changes = _drop_rename_side_effect(old_fk, fk, property_changes, current_tables, rename_index)
        if property_changes:
            changes.append(
                _make_change(ChangeCategory.FOREIGN_KEY, ChangeAction.MODIFY, new_table, fk, property_changes)
            )

    return changes


def _common_table_group(
    old_table: Table,
    new_table: Table,
    current_tables: list[Table],
    rename_index: _ColumnRenameIndex,
) -> TableChangeGroup:
    changes: list[SchemaChange] = []

    table_property_changes = diff_properties(old_table, new_table, TABLE_PROPERTIES)
    if table_property_changes:
        changes.append(
            _make_change(
                ChangeCategory.TABLE,
                ChangeAction.MODIFY,
                new_table,
                property_changes=table_property_changes,
            )
        )

    changes.extend(_diff_columns(old_table, new_table))
    changes.extend(_diff_foreign_keys(old_table, new_table, current_tables, rename_index))
    changes.sort(key=_change_sort_key)

    return TableChangeGroup(
        table_id=new_table.id,
        table_schema=new_table.schema_,
        table_name=new_table.name,
        changes=changes,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def calculate_schema_diff(baseline: Schema, current: Schema) -> SchemaChangesSummary:
    """Compute the grouped structural changes from *baseline* to *current*.

    Parameters
    ----------
    baseline:
        The reference snapshot (last committed state).
    current:
        The live, possibly multiply-edited snapshot.

    Returns
    -------
    SchemaChangesSummary
        One group per touched table, deterministically ordered.  Neither
        input is mutated.
    """
    baseline_tables = map_by_id(baseline.tables)
    current_tables = map_by_id(current.tables)
    rename_index = _ColumnRenameIndex(baseline_tables, current_tables)

    groups: list[TableChangeGroup] = []

    for table in current.tables:
        if table.id not in baseline_tables:
            groups.append(_added_table_group(table))

    for table in baseline.tables:
        if table.id not in current_tables:
            groups.append(_deleted_table_group(table))

    for table in current.tables:
        old_table = baseline_tables.get(table.id)
        if old_table is None:
            continue
        group = _common_table_group(old_table, table, current.tables, rename_index)
        if group.changes:
            groups.append(group)

    groups.sort(key=_group_sort_key)
    total_changes = sum(len(group.changes) for group in groups)

    logger.debug(
        "Schema diff: %d change(s) across %d table(s) (baseline=%d tables, current=%d tables)",
        total_changes,
        len(groups),
        len(baseline.tables),
        len(current.tables),
    )

    return SchemaChangesSummary(
        groups=groups,
        total_changes=total_changes,
        has_changes=total_changes > 0,
    )
