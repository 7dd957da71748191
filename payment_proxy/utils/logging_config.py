"""
Relay Logging

JSON log records on stdout. Each record handled while serving a request carries
that request's correlation ID and inbound method and path, so upstream-call
failures and webhook events can be traced back to the call that caused them.
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

from pythonjsonlogger import jsonlogger

ROOT_LOGGER_NAME = "payment_proxy"

correlation_id_var: ContextVar[Optional[str]] = ContextVar(
    "correlation_id", default=None
)
inbound_request_var: ContextVar[Optional[str]] = ContextVar(
    "inbound_request", default=None
)


class RequestContextFilter(logging.Filter):
    """Stamp records with the correlation ID and inbound request line"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_var.get() or "N/A"
        inbound = inbound_request_var.get()
        if inbound:
            record.inbound_request = inbound
        return True


class RelayJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter with UTC ISO-8601 timestamps"""

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        return datetime.fromtimestamp(record.created, timezone.utc).isoformat()

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        # correlation_id and inbound_request arrive as record extras
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = self.formatTime(record)
        log_record["level"] = record.levelname
        log_record["module"] = record.module
        log_record["function"] = record.funcName
        log_record["line"] = record.lineno

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)


def setup_logging(log_level: str = "INFO", stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Route the relay's loggers to a single JSON handler.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        stream: Output stream, stdout by default

    Returns:
        The relay's root logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(log_level)
    logger.propagate = False
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(RelayJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    handler.addFilter(RequestContextFilter())

    logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger under the relay's namespace"""
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def bind_request_context(
    correlation_id: Optional[str] = None,
    method: Optional[str] = None,
    path: Optional[str] = None,
) -> str:
    """
    Bind logging context for the request being served.

    Generates a correlation ID if none was supplied by the caller.

    Returns:
        The correlation ID that was bound
    """
    if not correlation_id:
        correlation_id = str(uuid.uuid4())
    correlation_id_var.set(correlation_id)
    inbound_request_var.set(f"{method} {path}" if method and path else None)
    return correlation_id
