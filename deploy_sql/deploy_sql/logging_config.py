"""Logging setup for deploy_sql.

Modules log through ``logging.getLogger(__name__)`` only.  Applications
call :func:`configure_logging` once at startup; with
``DEPLOY_SQL_STRUCTURED_LOGGING=true`` each record is emitted as a single
JSON line::

    {
        "timestamp": "2025-05-15T12:34:56.789012+00:00",
        "level": "DEBUG",
        "logger": "deploy_sql.backends.mysql",
        "message": "Opened MySQL connection mysql://db1:3306/orders",
        "connection": { ... },       // present when passed via extra=
        "exc_info": "Traceback ..."  // present only on exceptions
    }
"""

from __future__ import annotations

import json
import logging
import traceback
from datetime import UTC, datetime
from typing import Any

from deploy_sql.config import Settings

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


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

        # Connection context supplied via ``extra={"connection": ...}``.
        connection_data = getattr(record, "connection", None)
        if connection_data is not None:
            payload["connection"] = connection_data

        if record.exc_info and record.exc_info[0] is not None:
            payload["exc_info"] = "".join(traceback.format_exception(*record.exc_info))

        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging(settings: Settings) -> None:
    """Install a root handler according to *settings*.

    Replaces any handlers already attached to the root logger.
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    handler = logging.StreamHandler()
    if settings.structured_logging:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG if settings.debug else settings.log_level)

    if settings.structured_logging:
        logging.getLogger(__name__).info("Structured JSON logging enabled")
