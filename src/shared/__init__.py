"""
Shared module - cross-cutting concerns and utilities.

This module provides shared functionality used across the application:
- Context variables for request/trace IDs and locale
- Logging utilities with Loguru
- Structured application errors
"""

from .context import (
    clear_request_context,
    get_locale,
    get_request_id,
    get_trace_id,
    locale_var,
    request_id_var,
    set_locale,
    set_request_id,
    set_trace_id,
    trace_id_var,
)
from .logging import (
    get_logger,
    log_error,
    logger,
    setup_logger,
)

__all__ = [
    # Context
    "clear_request_context",
    "get_locale",
    "get_request_id",
    "get_trace_id",
    "locale_var",
    "request_id_var",
    "set_locale",
    "set_request_id",
    "set_trace_id",
    "trace_id_var",
    # Logging
    "logger",
    "setup_logger",
    "get_logger",
    "log_error",
]
