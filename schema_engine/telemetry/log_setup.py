"""Root logger configuration for hosts embedding the engine."""

from __future__ import annotations

import logging

from schema_engine.config import Settings
from schema_engine.telemetry.json_formatter import JSONFormatter

_TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings, logger_name: str = "schema_engine") -> logging.Logger:
    """Install a single stream handler on *logger_name*.

    Uses :class:`JSONFormatter` when ``settings.structured_logging`` is set,
    a plain text format otherwise.  Existing handlers on that logger are
    replaced, so calling this twice does not duplicate output.
    """
    target = logging.getLogger(logger_name)
    target.handlers.clear()

    handler = logging.StreamHandler()
    if settings.structured_logging:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))

    target.addHandler(handler)
    target.setLevel(logging.DEBUG if settings.debug else settings.log_level.value)
    return target
