"""Logging setup and the parse error sink."""

from .error_log import NO_ERRORS, ErrorSink
from .init import get_logger, log_summary, reset_logging, setup_logging

__all__ = [
    "ErrorSink",
    "NO_ERRORS",
    "get_logger",
    "log_summary",
    "reset_logging",
    "setup_logging",
]
