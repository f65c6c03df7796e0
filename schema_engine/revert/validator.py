"""Revert feasibility checks for individual schema changes.

Decides whether undoing one change in isolation would leave the current
schema referentially sound.  The answer is computed against ``current`` as
it stands; other pending changes are never simulated, so each change is
judged on its own (validation is single-change, not transactional).

Rules
-----
* Table add/delete/modify, column add/delete/modify: always revertable.
  Restoring a deleted column is safe even when a foreign key that used it
  was deleted too; that foreign key's own revert is checked separately.
* Foreign key add: always revertable (removing a constraint cannot break
  referential integrity).
* Foreign key delete/modify: revertable only when the baseline foreign key's
  referenced table exists in ``current`` *by schema and name* and every
  baseline referenced column exists on it *by name*.  A rename is therefore
  indistinguishable from a delete here.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from schema_engine.diff.identity import find_by_id, find_table_by_name
from schema_engine.models.changes import ChangeAction, ChangeCategory, SchemaChange
from schema_engine.models.revert import CanRevertResult, RevertMessages
from schema_engine.models.schema import ForeignKey, Schema

logger = logging.getLogger(__name__)


def _baseline_foreign_key(change: SchemaChange, baseline: Schema) -> ForeignKey | None:
    baseline_table = find_by_id(baseline.tables, change.table_id)
    if baseline_table is None:
        return None
    return find_by_id(baseline_table.foreign_keys, change.object_id)


def _missing_references(fk: ForeignKey, current: Schema) -> list[str]:
    """Return the referenced objects of *fk* that are absent from *current*."""
    referenced = find_table_by_name(current.tables, fk.referenced_schema_name, fk.referenced_table_name)
    if referenced is None:
        return [f"{fk.referenced_schema_name}.{fk.referenced_table_name}"]

    present = {column.name for column in referenced.columns}
    return [
        f"{fk.referenced_schema_name}.{fk.referenced_table_name}.{name}"
        for name in fk.referenced_columns
        if name not in present
    ]


def can_revert_change(
    change: SchemaChange,
    baseline: Schema,
    current: Schema,
    all_changes: Sequence[SchemaChange],
    messages: RevertMessages,
) -> CanRevertResult:
    """Decide whether *change* can be undone on its own.

    Parameters
    ----------
    change:
        The change to check.
    baseline:
        The reference snapshot the revert restores from.
    current:
        The live snapshot the revert would apply to.
    all_changes:
        Every pending change.  Passed explicitly so the check never reads
        ambient session state; the verdict depends only on ``current``.
    messages:
        Localized strings used for the ``reason`` of a blocked revert.

    Returns
    -------
    CanRevertResult
        ``can_revert=False`` with a localized ``reason`` when blocked.
    """
    logger.debug("Checking revert of %s against %d pending change(s)", change.id, len(all_changes))

    if change.category != ChangeCategory.FOREIGN_KEY or change.action == ChangeAction.ADD:
        return CanRevertResult(can_revert=True)

    baseline_fk = _baseline_foreign_key(change, baseline)
    if baseline_fk is None:
        # Nothing to restore from; the computation step reports the failure.
        return CanRevertResult(can_revert=True)

    missing = _missing_references(baseline_fk, current)
    if missing:
        logger.info(
            "Revert of %s blocked: %d referenced object(s) missing (%s)",
            change.id,
            len(missing),
            ", ".join(missing),
            extra={"change_id": change.id},
        )
        return CanRevertResult(can_revert=False, reason=messages.cannot_revert_foreign_key)

    return CanRevertResult(can_revert=True)
