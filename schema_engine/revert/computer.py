"""Compute the schema that results from undoing exactly one change.

The computation is pure: ``current`` and ``baseline`` are never mutated, and
the returned table list is a deep copy.  Domain failures (a target that no
longer exists) come back as ``RevertResult(success=False, error=...)``
rather than exceptions.

Restored objects (tables, columns, foreign keys) are placed at their
baseline-relative position: before the first surviving sibling that came
after them in the baseline ordering, or at the end when none did.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TypeVar

from schema_engine.diff.identity import find_by_id, index_of_id
from schema_engine.models.changes import ChangeAction, ChangeCategory, SchemaChange
from schema_engine.models.revert import RevertResult
from schema_engine.models.schema import Column, ForeignKey, Schema, Table

logger = logging.getLogger(__name__)

TABLE_NOT_FOUND = "Table not found"
BASELINE_TABLE_NOT_FOUND = "Baseline table not found"
TABLE_ALREADY_EXISTS = "Table already exists"
COLUMN_NOT_FOUND = "Column not found"
BASELINE_COLUMN_NOT_FOUND = "Baseline column not found"
COLUMN_ALREADY_EXISTS = "Column already exists"
FOREIGN_KEY_NOT_FOUND = "Foreign key not found"
BASELINE_FOREIGN_KEY_NOT_FOUND = "Baseline foreign key not found"
FOREIGN_KEY_ALREADY_EXISTS = "Foreign key already exists"

_Item = TypeVar("_Item", Table, Column, ForeignKey)


def baseline_insert_index(items: Sequence[_Item], restored_id: str, baseline_items: Sequence[_Item]) -> int:
    """Return where to re-insert *restored_id* into *items*.

    The position is the index of the first item in *items* whose baseline
    position is after the restored item's baseline position.  Items not
    present in the baseline are skipped; existing items are never
    reordered.
    """
    baseline_positions = {item.id: index for index, item in enumerate(baseline_items)}
    restored_position = baseline_positions.get(restored_id)
    if restored_position is None:
        return len(items)

    for index, item in enumerate(items):
        position = baseline_positions.get(item.id)
        if position is not None and position > restored_position:
            return index
    return len(items)


def _restore(items: list[_Item], baseline_item: _Item, baseline_items: Sequence[_Item]) -> None:
    index = baseline_insert_index(items, baseline_item.id, baseline_items)
    items.insert(index, baseline_item.model_copy(deep=True))


# ---------------------------------------------------------------------------
# Per-category reverts (operate on an already deep-copied table list)
# ---------------------------------------------------------------------------


def _revert_table(change: SchemaChange, baseline: Schema, tables: list[Table]) -> RevertResult:
    if change.action == ChangeAction.ADD:
        if index_of_id(tables, change.table_id) == -1:
            return RevertResult.failed(TABLE_NOT_FOUND)
        return RevertResult.ok([t for t in tables if t.id != change.table_id])

    baseline_table = find_by_id(baseline.tables, change.table_id)

    if change.action == ChangeAction.DELETE:
        if baseline_table is None:
            return RevertResult.failed(BASELINE_TABLE_NOT_FOUND)
        if index_of_id(tables, change.table_id) != -1:
            return RevertResult.failed(TABLE_ALREADY_EXISTS)
        # Foreign keys come back through their own reverts.
        restored = baseline_table.model_copy(update={"foreign_keys": []})
        _restore(tables, restored, baseline.tables)
        return RevertResult.ok(tables)

    table = find_by_id(tables, change.table_id)
    if table is None:
        return RevertResult.failed(TABLE_NOT_FOUND)
    if baseline_table is None:
        return RevertResult.failed(BASELINE_TABLE_NOT_FOUND)
    table.name = baseline_table.name
    table.schema_ = baseline_table.schema_
    return RevertResult.ok(tables)


def _revert_column(change: SchemaChange, baseline: Schema, tables: list[Table]) -> RevertResult:
    table = find_by_id(tables, change.table_id)
    if table is None:
        return RevertResult.failed(TABLE_NOT_FOUND)

    if change.action == ChangeAction.ADD:
        if index_of_id(table.columns, change.object_id) == -1:
            return RevertResult.failed(COLUMN_NOT_FOUND)
        table.columns = [c for c in table.columns if c.id != change.object_id]
        return RevertResult.ok(tables)

    baseline_table = find_by_id(baseline.tables, change.table_id)
    if baseline_table is None:
        return RevertResult.failed(BASELINE_TABLE_NOT_FOUND)
    baseline_column = find_by_id(baseline_table.columns, change.object_id)

    if change.action == ChangeAction.DELETE:
        if baseline_column is None:
            return RevertResult.failed(BASELINE_COLUMN_NOT_FOUND)
        if index_of_id(table.columns, change.object_id) != -1:
            return RevertResult.failed(COLUMN_ALREADY_EXISTS)
        _restore(table.columns, baseline_column, baseline_table.columns)
        return RevertResult.ok(tables)

    index = index_of_id(table.columns, change.object_id)
    if baseline_column is None or index == -1:
        return RevertResult.failed(COLUMN_NOT_FOUND)
    table.columns[index] = baseline_column.model_copy(deep=True)
    return RevertResult.ok(tables)


def _revert_foreign_key(change: SchemaChange, baseline: Schema, tables: list[Table]) -> RevertResult:
    table = find_by_id(tables, change.table_id)
    if table is None:
        return RevertResult.failed(TABLE_NOT_FOUND)

    if change.action == ChangeAction.ADD:
        if index_of_id(table.foreign_keys, change.object_id) == -1:
            return RevertResult.failed(FOREIGN_KEY_NOT_FOUND)
        table.foreign_keys = [fk for fk in table.foreign_keys if fk.id != change.object_id]
        return RevertResult.ok(tables)

    baseline_table = find_by_id(baseline.tables, change.table_id)
    if baseline_table is None:
        return RevertResult.failed(BASELINE_TABLE_NOT_FOUND)
    baseline_fk = find_by_id(baseline_table.foreign_keys, change.object_id)

    if change.action == ChangeAction.DELETE:
        if baseline_fk is None:
            return RevertResult.failed(BASELINE_FOREIGN_KEY_NOT_FOUND)
        if index_of_id(table.foreign_keys, change.object_id) != -1:
            return RevertResult.failed(FOREIGN_KEY_ALREADY_EXISTS)
        _restore(table.foreign_keys, baseline_fk, baseline_table.foreign_keys)
        return RevertResult.ok(tables)

    index = index_of_id(table.foreign_keys, change.object_id)
    if baseline_fk is None or index == -1:
        return RevertResult.failed(FOREIGN_KEY_NOT_FOUND)
    table.foreign_keys[index] = baseline_fk.model_copy(deep=True)
    return RevertResult.ok(tables)


_REVERTERS = {
    ChangeCategory.TABLE: _revert_table,
    ChangeCategory.COLUMN: _revert_column,
    ChangeCategory.FOREIGN_KEY: _revert_foreign_key,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compute_reverted_schema(change: SchemaChange, baseline: Schema, current: Schema) -> RevertResult:
    """Return the table list of *current* with *change* undone.

    Parameters
    ----------
    change:
        The change to undo.
    baseline:
        The reference snapshot supplying restored objects.
    current:
        The live snapshot.  Never mutated.

    Returns
    -------
    RevertResult
        ``success=True`` with a freshly copied ``tables`` list, or
        ``success=False`` with an ``error`` naming the missing object.
    """
    tables = [table.model_copy(deep=True) for table in current.tables]
    result = _REVERTERS[change.category](change, baseline, tables)

    if result.success:
        logger.debug("Reverted %s", change.id, extra={"change_id": change.id})
    else:
        logger.warning("Cannot revert %s: %s", change.id, result.error, extra={"change_id": change.id})
    return result
