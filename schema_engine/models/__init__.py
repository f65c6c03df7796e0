"""Domain models for the schema diff and revert engine."""

from schema_engine.models.changes import (
    ChangeAction,
    ChangeCategory,
    ChangeKey,
    PropertyChange,
    SchemaChange,
    SchemaChangesSummary,
    TableChangeGroup,
)
from schema_engine.models.revert import CanRevertResult, RevertMessages, RevertResult
from schema_engine.models.schema import Column, ForeignKey, OnAction, Schema, Table

__all__ = [
    "CanRevertResult",
    "ChangeAction",
    "ChangeCategory",
    "ChangeKey",
    "Column",
    "ForeignKey",
    "OnAction",
    "PropertyChange",
    "RevertMessages",
    "RevertResult",
    "Schema",
    "SchemaChange",
    "SchemaChangesSummary",
    "Table",
    "TableChangeGroup",
]
