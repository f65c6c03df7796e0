"""JSON log formatter for log aggregation.

Emits each log record as a single-line JSON object so aggregators can
index fields without regex parsing.  Enabled by
``SCHEMA_ENGINE_STRUCTURED_LOGGING=true`` through
:func:`schema_engine.telemetry.log_setup.configure_logging`.

Output schema per line::

    {
        "timestamp": "2025-05-15T12:34:56.789012+00:00",
        "level": "INFO",
        "logger": "schema_engine.revert.validator",
        "message": "Revert of ... blocked ...",
        "change_id": "foreignKey:delete:...",   // present when passed via extra
        "exc_info": "Traceback ..."             // present only on exceptions
    }
"""

from __future__ import annotations

import json
import logging
import traceback
from datetime import UTC, datetime
from typing import Any


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        """Render *record* as a single JSON line."""
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        change_id = getattr(record, "change_id", None)
        if change_id:
            payload["change_id"] = change_id

        if record.exc_info and record.exc_info[0] is not None:
            payload["exc_info"] = "".join(traceback.format_exception(*record.exc_info))

        return json.dumps(payload, default=str, ensure_ascii=False)
