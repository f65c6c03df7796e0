"""Single-change revert validation and computation.

Both entry points are pure: they read the baseline and current snapshots
and return result values, never raising for domain failures.
"""

from __future__ import annotations

from schema_engine.revert.computer import baseline_insert_index, compute_reverted_schema
from schema_engine.revert.validator import can_revert_change

__all__ = [
    "baseline_insert_index",
    "can_revert_change",
    "compute_reverted_schema",
]
