"""Deterministic JSON serialization for schema snapshots and diff summaries.

Snapshots cross the engine boundary as camelCase JSON (the editing
surface's shape).  Serialised output uses sorted keys and 2-space
indentation so identical inputs always produce byte-identical text.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ValidationError

from schema_engine.models.changes import SchemaChangesSummary
from schema_engine.models.schema import Schema


def _dump(model: BaseModel) -> str:
    # ``model_dump_json`` has no ``sort_keys``; go through a dict first.
    raw = model.model_dump(mode="json", by_alias=True)
    return json.dumps(raw, indent=2, sort_keys=True, ensure_ascii=False)


def serialize_schema(schema: Schema) -> str:
    """Serialize a schema snapshot to deterministic camelCase JSON."""
    return _dump(schema)


def deserialize_schema(json_str: str | bytes) -> Schema:
    """Parse a JSON snapshot into a :class:`Schema`.

    Accepts camelCase (editing surface) or snake_case keys.

    Raises
    ------
    pydantic.ValidationError
        If the JSON does not conform to the snapshot shape, including
        invalid JSON text.
    """
    return Schema.model_validate_json(json_str)


def validate_schema_json(json_str: str | bytes) -> list[str]:
    """Validate a JSON snapshot without raising.

    Returns
    -------
    list[str]
        Human-readable error messages; empty when the snapshot is valid.
    """
    try:
        Schema.model_validate_json(json_str)
    except ValidationError as exc:
        return [
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" if err.get("loc") else err["msg"]
            for err in exc.errors()
        ]
    except (ValueError, TypeError) as exc:
        return [f"Invalid JSON: {exc}"]

    return []


def serialize_summary(summary: SchemaChangesSummary) -> str:
    """Serialize a diff summary for the UI layer.

    Group and change order is preserved (lists are not re-sorted); only
    object keys are sorted.
    """
    return _dump(summary)


def load_schema_file(path: Path | str) -> Schema:
    """Read and parse a JSON snapshot file (UTF-8)."""
    return deserialize_schema(Path(path).read_text(encoding="utf-8"))
