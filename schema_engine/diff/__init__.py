"""Deterministic structural diff engine for schema snapshots."""

from schema_engine.diff.annotations import (
    ChangeCounts,
    DeletedColumnInfo,
    DiffAnnotations,
    GhostForeignKey,
    TableRenameInfo,
    build_diff_annotations,
    is_structural_fk_change,
)
from schema_engine.diff.describe import describe_change, describe_property_change, format_value
from schema_engine.diff.schema_diff import calculate_schema_diff

__all__ = [
    "ChangeCounts",
    "DeletedColumnInfo",
    "DiffAnnotations",
    "GhostForeignKey",
    "TableRenameInfo",
    "build_diff_annotations",
    "calculate_schema_diff",
    "describe_change",
    "describe_property_change",
    "format_value",
    "is_structural_fk_change",
]
