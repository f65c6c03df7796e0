"""Logging setup for the schema engine."""

from schema_engine.telemetry.json_formatter import JSONFormatter
from schema_engine.telemetry.log_setup import configure_logging

__all__ = [
    "JSONFormatter",
    "configure_logging",
]
