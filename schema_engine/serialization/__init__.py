"""JSON boundary for schema snapshots and diff summaries."""

from schema_engine.serialization.snapshot_serializer import (
    deserialize_schema,
    load_schema_file,
    serialize_schema,
    serialize_summary,
    validate_schema_json,
)

__all__ = [
    "deserialize_schema",
    "load_schema_file",
    "serialize_schema",
    "serialize_summary",
    "validate_schema_json",
]
