"""Community - Shared Logging Configuration.

Loguru-based logging module with:
- Structured JSON logging for production
- Colored console output for development
- Request/trace ID correlation
- Automatic sensitive data redaction
"""

from loguru import logger

from .config import (
    InterceptHandler,
    configure_third_party_loggers,
    get_logger,
    setup_logger,
)
from .event_logger import describe_chain, log_error

__all__ = [
    # Core logging
    "logger",
    "setup_logger",
    "get_logger",
    "InterceptHandler",
    "configure_third_party_loggers",
    # Event logging
    "log_error",
    "describe_chain",
]
