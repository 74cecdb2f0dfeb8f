"""Structured JSON logging for the analyst console gateway"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger.json import JsonFormatter

from fraud_insight.config import settings

LOG_FORMAT = "%(timestamp)s %(level)s %(name)s %(message)s"


class CustomJsonFormatter(JsonFormatter):
    """JSON formatter stamping each record with UTC time, level and service name"""

    def __init__(self, *args: Any, service_name: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.service_name = service_name or settings.service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: Optional[str] = None) -> None:
    """Route the root logger to stdout as JSON, replacing any existing handlers"""
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CustomJsonFormatter(LOG_FORMAT, service_name=service_name))
    root.addHandler(handler)


def log_view_render(
    view: str,
    total_records: int,
    shown_records: int,
    duration_ms: float,
    request_id: str = "unknown",
) -> None:
    """Log structured render outcome of a derived view"""
    logging.info(
        "View rendered",
        extra={
            "request_id": request_id,
            "view": view,
            "step": "render_complete",
            "total_records": total_records,
            "shown_records": shown_records,
            "duration_ms": duration_ms,
        },
    )


def log_fetch_failure(view: str, error: Exception, sequence: int) -> None:
    """Log a snapshot fetch that left the view in an error state"""
    logging.error(
        f"Snapshot fetch failed: {error}",
        extra={
            "view": view,
            "step": "fetch_failed",
            "sequence": sequence,
            "error_type": type(error).__name__,
        },
    )
