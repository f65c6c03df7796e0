"""Change records produced by the schema diff engine.

A :class:`SchemaChange` describes one add/delete/modify event on a table,
column, or foreign key.  Changes are grouped per owning table into
:class:`TableChangeGroup` entries and wrapped in a
:class:`SchemaChangesSummary`.

Every change is addressed by a :class:`ChangeKey` -- a typed
``(category, action, table_id, object_id)`` record.  The string ``id`` on a
change is only the rendered form of that key (``"column:delete:<t>:<c>"``)
kept for callers that store changes by string.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import Field, model_validator

from schema_engine.models.schema import WireModel


class ChangeCategory(str, Enum):
    """Kind of schema object a change applies to."""

    TABLE = "table"
    COLUMN = "column"
    FOREIGN_KEY = "foreignKey"


class ChangeAction(str, Enum):
    """What happened to the object."""

    ADD = "add"
    DELETE = "delete"
    MODIFY = "modify"


# Ordering used when laying out changes inside a group.
CATEGORY_ORDER: tuple[ChangeCategory, ...] = (
    ChangeCategory.TABLE,
    ChangeCategory.COLUMN,
    ChangeCategory.FOREIGN_KEY,
)
ACTION_ORDER: tuple[ChangeAction, ...] = (
    ChangeAction.ADD,
    ChangeAction.DELETE,
    ChangeAction.MODIFY,
)


@dataclass(frozen=True, slots=True)
class ChangeKey:
    """Typed identity of a change.

    Immutable and hashable, so it can key dictionaries and sets.  Table-level
    keys have no ``object_id``.
    """

    category: ChangeCategory
    action: ChangeAction
    table_id: str
    object_id: str | None = None

    @property
    def token(self) -> str:
        """Render the key as ``category:action:table_id[:object_id]``."""
        parts = [self.category.value, self.action.value, self.table_id]
        if self.object_id is not None:
            parts.append(self.object_id)
        return ":".join(parts)

    @classmethod
    def parse(cls, token: str) -> ChangeKey:
        """Parse a token previously produced by :attr:`token`.

        Raises
        ------
        ValueError
            If the token has the wrong shape or names an unknown
            category/action.
        """
        parts = token.split(":", 2)
        if len(parts) != 3 or not parts[2]:
            raise ValueError(f"Malformed change token: {token!r}")

        category = ChangeCategory(parts[0])
        action = ChangeAction(parts[1])

        if category == ChangeCategory.TABLE:
            return cls(category=category, action=action, table_id=parts[2])

        table_id, sep, object_id = parts[2].partition(":")
        if not sep or not table_id or not object_id:
            raise ValueError(f"Malformed change token: {token!r}")
        return cls(category=category, action=action, table_id=table_id, object_id=object_id)


class PropertyChange(WireModel):
    """Before/after values of one scalar (or list) property."""

    property: str = Field(..., description="Wire name of the property, e.g. 'dataType'.")
    display_name: str = Field(..., description="Human label, e.g. 'Data Type'.")
    old_value: Any = None
    new_value: Any = None


class SchemaChange(WireModel):
    """A single structural change between baseline and current."""

    id: str = Field(default="", description="Rendered change key; derived when omitted.")
    category: ChangeCategory
    action: ChangeAction
    table_id: str = Field(..., description="Owning table id (used for grouping).")
    table_schema: str = ""
    table_name: str = ""
    object_id: str | None = Field(default=None, description="Column or foreign key id.")
    object_name: str | None = None
    property_changes: list[PropertyChange] | None = Field(
        default=None,
        description="Differing properties, present on modify changes only.",
    )

    @model_validator(mode="after")
    def _derive_id(self) -> SchemaChange:
        if not self.id:
            self.id = self.key.token
        return self

    @property
    def key(self) -> ChangeKey:
        """The typed identity of this change."""
        return ChangeKey(
            category=self.category,
            action=self.action,
            table_id=self.table_id,
            object_id=self.object_id,
        )


class TableChangeGroup(WireModel):
    """All changes scoped to one table."""

    table_id: str
    table_schema: str
    table_name: str
    is_new: bool = False
    is_deleted: bool = False
    changes: list[SchemaChange] = Field(default_factory=list)


class SchemaChangesSummary(WireModel):
    """Grouped result of a schema diff."""

    groups: list[TableChangeGroup] = Field(default_factory=list)
    total_changes: int = 0
    has_changes: bool = False

    def all_changes(self) -> list[SchemaChange]:
        """Return every change, flattened in group order."""
        return [change for group in self.groups for change in group.changes]

    def find_group(self, table_id: str) -> TableChangeGroup | None:
        """Return the group for *table_id*, or ``None`` when untouched."""
        for group in self.groups:
            if group.table_id == table_id:
                return group
        return None
