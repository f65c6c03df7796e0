"""Diff overlay data for the editing surface.

Derives the per-object markers a canvas needs to render pending changes in
place: which columns changed, where deleted columns used to sit, "ghost"
copies of deleted tables and foreign keys, table rename captions, and
whether each modified foreign key changed structurally or only in its
properties.

Everything here is computed from the two snapshots alone.  Layout and
positions belong to the canvas and are not part of this data.
"""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import BaseModel, Field

from schema_engine.diff.identity import find_table_by_name, map_by_id
from schema_engine.diff.schema_diff import calculate_schema_diff
from schema_engine.models.changes import ChangeAction, ChangeCategory, SchemaChangesSummary
from schema_engine.models.schema import ForeignKey, Schema, Table

logger = logging.getLogger(__name__)

ForeignKeyModification = Literal["structural", "property"]


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class DeletedColumnInfo(BaseModel):
    """A deleted column, kept for inline rendering at its old position."""

    name: str
    data_type: str = ""
    is_primary_key: bool = False
    original_index: int = Field(..., description="Index in the baseline column list.")


class GhostForeignKey(BaseModel):
    """A foreign key edge that no longer exists in the current schema."""

    id: str
    source_table_id: str
    target_table_id: str = Field(default="", description="Empty when the target cannot be resolved.")
    source_column: str = ""
    target_column: str = ""
    foreign_key: ForeignKey


class TableRenameInfo(BaseModel):
    """Previous identity of a renamed or re-schemed table."""

    old_schema: str
    old_name: str
    old_display_name: str
    schema_changed: bool
    name_changed: bool


class ChangeCounts(BaseModel):
    """Change totals by action."""

    additions: int = 0
    deletions: int = 0
    modifications: int = 0
    total: int = 0


class DiffAnnotations(BaseModel):
    """Everything the editing surface overlays on top of the current schema."""

    summary: SchemaChangesSummary
    counts: ChangeCounts
    column_changes: dict[str, dict[str, ChangeAction]] = Field(default_factory=dict)
    deleted_columns: dict[str, list[DeletedColumnInfo]] = Field(default_factory=dict)
    ghost_tables: list[Table] = Field(default_factory=list)
    ghost_foreign_keys: list[GhostForeignKey] = Field(default_factory=list)
    table_renames: dict[str, TableRenameInfo] = Field(default_factory=dict)
    foreign_key_modifications: dict[str, ForeignKeyModification] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def is_structural_fk_change(original: ForeignKey, current: ForeignKey) -> bool:
    """Return True when a foreign key's columns or target changed.

    Column lists are compared as sorted lists here: a reordering alone is not
    a structural change for rendering purposes.  Name and referential action
    changes are property-only.
    """
    if sorted(original.columns) != sorted(current.columns):
        return True
    if sorted(original.referenced_columns) != sorted(current.referenced_columns):
        return True
    return (
        original.referenced_schema_name != current.referenced_schema_name
        or original.referenced_table_name != current.referenced_table_name
    )


def _ghost_edge(edge_id: str, source_table: Table, fk: ForeignKey, tables: list[Table]) -> GhostForeignKey:
    target = find_table_by_name(tables, fk.referenced_schema_name, fk.referenced_table_name)
    return GhostForeignKey(
        id=edge_id,
        source_table_id=source_table.id,
        target_table_id=target.id if target is not None else "",
        source_column=fk.columns[0] if fk.columns else "",
        target_column=fk.referenced_columns[0] if fk.referenced_columns else "",
        foreign_key=fk.model_copy(deep=True),
    )


def _count_changes(summary: SchemaChangesSummary) -> ChangeCounts:
    counts = ChangeCounts()
    for change in summary.all_changes():
        if change.action == ChangeAction.ADD:
            counts.additions += 1
        elif change.action == ChangeAction.DELETE:
            counts.deletions += 1
        else:
            counts.modifications += 1
    counts.total = summary.total_changes
    return counts


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_diff_annotations(baseline: Schema, current: Schema) -> DiffAnnotations:
    """Compute the diff summary plus the canvas overlay data.

    Parameters
    ----------
    baseline:
        The reference snapshot.
    current:
        The live snapshot.

    Returns
    -------
    DiffAnnotations
        Overlay data keyed by table id / foreign key id.  Inputs are not
        mutated; ghost objects are deep copies.
    """
    summary = calculate_schema_diff(baseline, current)
    baseline_tables = map_by_id(baseline.tables)
    current_tables = map_by_id(current.tables)

    column_changes: dict[str, dict[str, ChangeAction]] = {}
    deleted_columns: dict[str, list[DeletedColumnInfo]] = {}
    table_renames: dict[str, TableRenameInfo] = {}
    fk_modifications: dict[str, ForeignKeyModification] = {}
    ghost_fks: list[GhostForeignKey] = []

    for change in summary.all_changes():
        old_table = baseline_tables.get(change.table_id)
        new_table = current_tables.get(change.table_id)

        if change.category == ChangeCategory.COLUMN and new_table is not None and old_table is not None:
            markers = column_changes.setdefault(change.table_id, {})
            if change.action == ChangeAction.DELETE:
                old_columns = old_table.columns
                index = next(i for i, c in enumerate(old_columns) if c.id == change.object_id)
                old_column = old_columns[index]
                markers[old_column.name] = ChangeAction.DELETE
                deleted_columns.setdefault(change.table_id, []).append(
                    DeletedColumnInfo(
                        name=old_column.name,
                        data_type=old_column.data_type or "",
                        is_primary_key=old_column.is_primary_key,
                        original_index=index,
                    )
                )
            else:
                new_column = map_by_id(new_table.columns)[change.object_id]
                markers[new_column.name] = change.action

        elif (
            change.category == ChangeCategory.TABLE
            and change.action == ChangeAction.MODIFY
            and old_table is not None
            and new_table is not None
        ):
            table_renames[change.table_id] = TableRenameInfo(
                old_schema=old_table.schema_,
                old_name=old_table.name,
                old_display_name=old_table.qualified_name,
                schema_changed=old_table.schema_ != new_table.schema_,
                name_changed=old_table.name != new_table.name,
            )

        elif (
            change.category == ChangeCategory.FOREIGN_KEY
            and change.action == ChangeAction.MODIFY
            and old_table is not None
            and new_table is not None
        ):
            old_fk = map_by_id(old_table.foreign_keys)[change.object_id]
            new_fk = map_by_id(new_table.foreign_keys)[change.object_id]
            structural = is_structural_fk_change(old_fk, new_fk)
            fk_modifications[old_fk.id] = "structural" if structural else "property"
            if structural:
                ghost_fks.append(_ghost_edge(f"{old_fk.id}-old", old_table, old_fk, baseline.tables))

    # Foreign keys gone from every current table, including those on deleted
    # tables (which the summary folds into the table delete).
    current_fk_ids = {fk.id for table in current.tables for fk in table.foreign_keys}
    deleted_edges = [
        _ghost_edge(fk.id, table, fk, baseline.tables)
        for table in baseline.tables
        for fk in table.foreign_keys
        if fk.id not in current_fk_ids
    ]

    ghost_tables = [table.model_copy(deep=True) for table in baseline.tables if table.id not in current_tables]

    logger.debug(
        "Diff annotations: %d ghost table(s), %d ghost foreign key(s), %d rename(s)",
        len(ghost_tables),
        len(deleted_edges) + len(ghost_fks),
        len(table_renames),
    )

    return DiffAnnotations(
        summary=summary,
        counts=_count_changes(summary),
        column_changes=column_changes,
        deleted_columns=deleted_columns,
        ghost_tables=ghost_tables,
        ghost_foreign_keys=deleted_edges + ghost_fks,
        table_renames=table_renames,
        foreign_key_modifications=fk_modifications,
    )
