"""Relational schema snapshot models.

A :class:`Schema` is the plain value the editing surface hands to the engine:
a list of tables, each owning its columns and the foreign keys declared on
it.  Every object carries a stable ``id`` that survives renames; names are
payload, not identity.

Python attributes are snake_case.  The editing surface speaks camelCase
JSON (``dataType``, ``foreignKeys``, ``referencedTableName``), so every model
accepts either spelling on input and dumps camelCase when ``by_alias=True``.
"""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base model accepting both snake_case and camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OnAction(IntEnum):
    """Referential action applied on delete/update of the referenced row."""

    CASCADE = 0
    NO_ACTION = 1
    SET_NULL = 2
    SET_DEFAULT = 3


class Column(WireModel):
    """A single table column."""

    id: str = Field(..., description="Stable column identifier, unique within its table.")
    name: str = Field(..., description="Column name.")
    data_type: str | None = Field(default=None, description="SQL data type, e.g. 'nvarchar'.")
    max_length: str | int | None = Field(default=None, description="Declared length, e.g. '255' or 'MAX'.")
    precision: int | None = None
    scale: int | None = None
    is_primary_key: bool = False
    is_identity: bool = False
    identity_seed: int | None = None
    identity_increment: int | None = None
    is_nullable: bool = True
    default_value: str | None = None
    is_computed: bool = False
    computed_formula: str | None = None
    computed_persisted: bool | None = None


class ForeignKey(WireModel):
    """A foreign key declared on its owning (source) table.

    Two addressing modes coexist on the same object.  The name-based fields
    (``columns``, ``referenced_table_name``, ``referenced_columns``) are what
    the diff and revert logic read.  The id-based fields are maintained by
    the canvas layer and are carried through untouched.
    """

    id: str = Field(..., description="Stable foreign key identifier.")
    name: str = Field(default="", description="Constraint name.")
    columns: list[str] = Field(
        default_factory=list,
        description="Source column names, in key order.",
    )
    referenced_schema_name: str = Field(default="", description="Schema of the referenced table.")
    referenced_table_name: str = Field(default="", description="Name of the referenced table.")
    referenced_columns: list[str] = Field(
        default_factory=list,
        description="Referenced column names, positionally paired with ``columns``.",
    )
    on_delete_action: OnAction = OnAction.NO_ACTION
    on_update_action: OnAction = OnAction.NO_ACTION

    # -- Id-based addressing (canvas layer) --
    column_ids: list[str] = Field(default_factory=list)
    referenced_table_id: str | None = None
    referenced_column_ids: list[str] = Field(default_factory=list)


class Table(WireModel):
    """A table with its columns and outgoing foreign keys."""

    id: str = Field(..., description="Stable table identifier, unique within the schema.")
    schema_: str = Field(default="dbo", alias="schema", description="Owning database schema.")
    name: str = Field(..., description="Table name.")
    columns: list[Column] = Field(default_factory=list)
    foreign_keys: list[ForeignKey] = Field(default_factory=list)

    @property
    def qualified_name(self) -> str:
        """Return ``schema.name``."""
        return f"{self.schema_}.{self.name}"


class Schema(WireModel):
    """A complete schema snapshot."""

    tables: list[Table] = Field(default_factory=list)
