"""Structured logging configuration for the API service."""

import logging
import sys

from wrapped_api.constants import ServiceName
from wrapped_api.logging.formatter import JSONLogFormatter
from wrapped_api.middleware import request_id_var


class RequestIDFilter(logging.Filter):
    """Attach the current request id (if any) to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = request_id_var.get()
        return True


def configure_logging(service: ServiceName = ServiceName.API) -> None:
    """Set up structured JSON logging on the root logger."""
    root = logging.getLogger()
    root.setLevel(logging.INFO)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONLogFormatter(service=service))
    handler.addFilter(RequestIDFilter())
    root.addHandler(handler)
