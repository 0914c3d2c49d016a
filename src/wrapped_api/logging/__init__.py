"""Structured logging: JSON formatter and setup."""

from wrapped_api.logging.formatter import JSONLogFormatter
from wrapped_api.logging.setup import RequestIDFilter, configure_logging

__all__ = ["JSONLogFormatter", "RequestIDFilter", "configure_logging"]
