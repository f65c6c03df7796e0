"""Result and message models for revert validation and computation."""

from __future__ import annotations

from pydantic import BaseModel, Field

from schema_engine.models.schema import Table, WireModel


class RevertMessages(BaseModel):
    """Localized strings shown when a revert is blocked.

    Supplied by the caller's localization layer; see
    :meth:`schema_engine.config.Settings.revert_messages` for English defaults.
    """

    cannot_revert_foreign_key: str = Field(
        ...,
        description="Shown when a foreign key's referenced table or columns are gone.",
    )
    cannot_revert_deleted_column: str = Field(
        ...,
        description="Shown when a column restore conflicts with a deleted foreign key.",
    )


class CanRevertResult(WireModel):
    """Whether a single change may be undone in isolation."""

    can_revert: bool
    reason: str | None = None


class RevertResult(WireModel):
    """Outcome of undoing one change."""

    success: bool
    tables: list[Table] | None = Field(
        default=None,
        description="The reverted table list; present on success only.",
    )
    error: str | None = None

    @classmethod
    def ok(cls, tables: list[Table]) -> RevertResult:
        return cls(success=True, tables=tables)

    @classmethod
    def failed(cls, error: str) -> RevertResult:
        return cls(success=False, error=error)
